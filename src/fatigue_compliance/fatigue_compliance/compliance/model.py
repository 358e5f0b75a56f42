from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import ComplianceStatus, Severity, ViolationKind
from ..fatigue.model import FatigueResult
from ..occurrences.model import Occurrence


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class ComplianceViolation:
    kind: ViolationKind
    severity: Severity
    person_id: int
    date: date
    magnitude: float
    project_id: Optional[int]
    message: str
    date_range: Optional[DateRange] = None
    assignment_id: Optional[int] = None

    def touches(self, day: date) -> bool:
        if self.date_range is not None:
            return self.date_range.contains(day)
        return self.date == day

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "person_id": self.person_id,
            "date": self.date.isoformat(),
            "date_range": (
                {"start": self.date_range.start.isoformat(), "end": self.date_range.end.isoformat()}
                if self.date_range
                else None
            ),
            "magnitude": round(self.magnitude, 3),
            "project_id": self.project_id,
            "assignment_id": self.assignment_id,
            "message": self.message,
        }


@dataclass(frozen=True)
class PersonEvaluation:
    person_id: int
    violations: tuple[ComplianceViolation, ...]
    status: ComplianceStatus
    total_hours: float
    occurrences: tuple[Occurrence, ...] = ()
    fatigue: tuple[FatigueResult, ...] = ()


@dataclass(frozen=True)
class ProjectEvaluation:
    project_id: int
    violations: tuple[ComplianceViolation, ...]
    error_count: int
    warning_count: int
    is_compliant: bool
    people: dict[int, PersonEvaluation] = field(default_factory=dict)


@dataclass(frozen=True)
class CellViolations:
    """Violations for one planner cell: fill from ``today``, border from ``later``."""

    today: tuple[ComplianceViolation, ...]
    later: tuple[ComplianceViolation, ...]

    @property
    def worst_today(self) -> Optional[Severity]:
        if not self.today:
            return None
        return max((v.severity for v in self.today), key=lambda s: s.rank)

    @property
    def has_upcoming(self) -> bool:
        return bool(self.later)


@dataclass(frozen=True)
class ProjectSummary:
    project_id: int
    total_hours: float
    people_count: int
    hours_by_pattern: dict[int, float]
