from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Four-point ordinal scale: monitoring, fatigue plan, variation, stop work."""

    WARNING = "warning"
    LEVEL1 = "level1"
    LEVEL2 = "level2"
    BREACH = "breach"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def is_error(self) -> bool:
        return self is Severity.BREACH


_SEVERITY_RANK = {
    Severity.WARNING: 1,
    Severity.LEVEL1: 2,
    Severity.LEVEL2: 3,
    Severity.BREACH: 4,
}


class ViolationKind(str, Enum):
    SHIFT_LENGTH = "shift-length"
    REST_GAP = "rest-gap"
    WEEKLY_HOURS = "weekly-hours"
    CONSECUTIVE_DAYS = "consecutive-days"
    CONSECUTIVE_NIGHTS = "consecutive-nights"
    FATIGUE_INDEX = "fatigue-index"
    FATIGUE_SCORE = "fatigue-score"


class ComplianceStatus(str, Enum):
    """Traffic-light status shown on badges and planner cells."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"


class RiskBand(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    ELEVATED = "elevated"
    CRITICAL = "critical"


class DutyType(str, Enum):
    POSSESSION = "Possession"
    NON_POSSESSION = "Non-Possession"
    OFFICE = "Office"
    LOOKOUT = "Lookout"
    MACHINE = "Machine"
    PROTECTION = "Protection"
    OTHER = "Other"


class Weekday(str, Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @classmethod
    def from_date(cls, value) -> "Weekday":
        return list(cls)[value.weekday()]
