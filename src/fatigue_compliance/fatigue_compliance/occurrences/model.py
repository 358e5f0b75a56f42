from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from ..core.enums import DutyType
from ..patterns.model import FatigueParams


@dataclass(frozen=True)
class OccurrenceRef:
    assignment_id: int
    person_id: int
    date: date


@dataclass(frozen=True)
class Occurrence:
    """One person working one shift on one calendar day."""

    person_id: int
    date: date
    start: datetime
    end: datetime
    duration_hours: float
    assignment_id: int
    pattern_id: int
    project_id: int
    is_night: bool = False
    duty_type: DutyType = DutyType.OTHER
    fatigue: FatigueParams = field(default_factory=FatigueParams.defaults)

    @property
    def ref(self) -> OccurrenceRef:
        return OccurrenceRef(assignment_id=self.assignment_id, person_id=self.person_id, date=self.date)

    @property
    def sort_key(self) -> tuple:
        return (self.start, self.end, self.assignment_id)
