from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import RiskBand
from ..occurrences.model import OccurrenceRef
from ..patterns.model import FatigueParams


def risk_band(risk_index: float) -> RiskBand:
    if risk_index < 1.0:
        return RiskBand.LOW
    if risk_index < 1.1:
        return RiskBand.MODERATE
    if risk_index < 1.2:
        return RiskBand.ELEVATED
    return RiskBand.CRITICAL


@dataclass(frozen=True)
class FatigueShift:
    """Calculator input: a duty on a numbered day with clock times.

    ``day`` counts from 1; a missing param falls back to the calculation defaults.
    """

    day: int
    start_time: str
    end_time: str
    params: FatigueParams = field(default_factory=FatigueParams)
    ref: Optional[OccurrenceRef] = None


@dataclass(frozen=True)
class FatigueResult:
    day: int
    start_time: str
    end_time: str
    duty_length: float
    cumulative: float
    timing: float
    job_breaks: float
    risk_index: float
    cumulative_fatigue: float
    time_of_day: float
    task: float
    fatigue_index: float
    occurrence_ref: Optional[OccurrenceRef] = None

    @property
    def risk_band(self) -> RiskBand:
        return risk_band(self.risk_index)

    def to_dict(self) -> dict:
        ref = self.occurrence_ref
        return {
            "day": self.day,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duty_length": round(self.duty_length, 2),
            "cumulative": self.cumulative,
            "timing": self.timing,
            "job_breaks": self.job_breaks,
            "risk_index": self.risk_index,
            "risk_band": self.risk_band.value,
            "cumulative_fatigue": self.cumulative_fatigue,
            "time_of_day": self.time_of_day,
            "task": self.task,
            "fatigue_index": self.fatigue_index,
            "occurrence": (
                {"assignment_id": ref.assignment_id, "person_id": ref.person_id, "date": ref.date.isoformat()}
                if ref
                else None
            ),
        }


@dataclass(frozen=True)
class FatigueSummary:
    max_fri: float
    avg_fri: float
    overall_risk: RiskBand
    critical_shifts: int
    elevated_shifts: int
    max_fgi: float
    avg_fgi: float

    @classmethod
    def empty(cls) -> "FatigueSummary":
        return cls(
            max_fri=0.0,
            avg_fri=0.0,
            overall_risk=RiskBand.LOW,
            critical_shifts=0,
            elevated_shifts=0,
            max_fgi=0.0,
            avg_fgi=0.0,
        )

    def to_dict(self) -> dict:
        return {
            "max_fri": round(self.max_fri, 3),
            "avg_fri": round(self.avg_fri, 3),
            "overall_risk": self.overall_risk.value,
            "critical_shifts": self.critical_shifts,
            "elevated_shifts": self.elevated_shifts,
            "max_fgi": round(self.max_fgi, 1),
            "avg_fgi": round(self.avg_fgi, 1),
        }


@dataclass(frozen=True)
class FatigueReport:
    results: tuple[FatigueResult, ...]
    summary: FatigueSummary
