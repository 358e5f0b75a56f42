from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional

from ..core import constants
from ..core.enums import DutyType, Weekday


@dataclass(frozen=True)
class FatigueParams:
    """Per-shift inputs of the fatigue model; ``None`` means "inherit"."""

    commute_in: Optional[int] = None
    commute_out: Optional[int] = None
    workload: Optional[int] = None
    attention: Optional[int] = None
    break_frequency: Optional[int] = None
    break_length: Optional[int] = None
    continuous_work: Optional[int] = None
    break_after_continuous: Optional[int] = None

    @classmethod
    def defaults(cls) -> "FatigueParams":
        return cls.from_commute_total(
            constants.DEFAULT_COMMUTE_MINUTES,
            workload=constants.DEFAULT_WORKLOAD,
            attention=constants.DEFAULT_ATTENTION,
            break_frequency=constants.DEFAULT_BREAK_FREQUENCY,
            break_length=constants.DEFAULT_BREAK_LENGTH,
            continuous_work=constants.DEFAULT_CONTINUOUS_WORK,
            break_after_continuous=constants.DEFAULT_BREAK_AFTER_CONTINUOUS,
        )

    @classmethod
    def from_commute_total(cls, total: Optional[int], **kwargs) -> "FatigueParams":
        if total is None:
            return cls(**kwargs)
        return cls(commute_in=total // 2, commute_out=int(math.ceil(total / 2)), **kwargs)

    @property
    def total_commute(self) -> int:
        return int(self.commute_in or 0) + int(self.commute_out or 0)

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, f.name) is not None for f in fields(self))

    def merged_over(self, fallback: "FatigueParams") -> "FatigueParams":
        """Fill every unset field from ``fallback``."""

        values = {}
        for f in fields(self):
            mine = getattr(self, f.name)
            values[f.name] = mine if mine is not None else getattr(fallback, f.name)
        return replace(self, **values)


@dataclass(frozen=True)
class DaySchedule:
    enabled: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    fatigue: FatigueParams = field(default_factory=FatigueParams)

    @property
    def is_active(self) -> bool:
        return self.enabled and bool(self.start_time) and bool(self.end_time)


@dataclass(frozen=True)
class ShiftPattern:
    pattern_id: int
    project_id: int
    name: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    weekly_schedule: Optional[Mapping[Weekday, DaySchedule]] = None
    duty_type: DutyType = DutyType.OTHER
    is_night: bool = False
    fatigue: FatigueParams = field(default_factory=FatigueParams)

    @property
    def has_weekly_schedule(self) -> bool:
        return bool(self.weekly_schedule)

    def schedule_for(self, day: Weekday) -> Optional[DaySchedule]:
        if not self.weekly_schedule:
            return None
        entry = self.weekly_schedule.get(day)
        if entry is None or not entry.is_active:
            return None
        return entry
