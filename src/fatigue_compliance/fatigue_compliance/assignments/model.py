from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from ..patterns.model import FatigueParams


@dataclass(frozen=True)
class Individual:
    employee_id: int


@dataclass(frozen=True)
class Team:
    team_id: int


Assignee = Union[Individual, Team]


@dataclass(frozen=True)
class Assignment:
    assignment_id: int
    project_id: int
    pattern_id: int
    assignee: Assignee
    start_date: date
    end_date: Optional[date] = None
    custom_start_time: Optional[str] = None
    custom_end_time: Optional[str] = None
    fatigue_overrides: FatigueParams = field(default_factory=FatigueParams)
    notes: Optional[str] = None

    @property
    def last_date(self) -> date:
        return self.end_date or self.start_date

    @property
    def has_custom_times(self) -> bool:
        return bool(self.custom_start_time) and bool(self.custom_end_time)
