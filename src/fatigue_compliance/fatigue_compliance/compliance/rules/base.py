from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from ...core.enums import Severity, ViolationKind
from ...fatigue.model import FatigueResult
from ...occurrences.model import Occurrence
from ..limits import ComplianceLimits
from ..model import ComplianceViolation, DateRange


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at for one person's timeline."""

    person_id: int
    occurrences: Sequence[Occurrence]
    weekly_hours: Sequence[float]
    distinct_days: Sequence[int]
    fatigue: Sequence[Optional[FatigueResult]]
    limits: ComplianceLimits

    def violation(
        self,
        index: int,
        kind: ViolationKind,
        severity: Severity,
        magnitude: float,
        message: str,
        *,
        date_range: Optional[DateRange] = None,
    ) -> ComplianceViolation:
        occ = self.occurrences[index]
        return ComplianceViolation(
            kind=kind,
            severity=severity,
            person_id=self.person_id,
            date=occ.date,
            magnitude=magnitude,
            project_id=occ.project_id,
            message=message,
            date_range=date_range,
            assignment_id=occ.assignment_id,
        )


@dataclass(frozen=True)
class Finding:
    """A violation anchored at the occurrence index that raised it."""

    index: int
    violation: ComplianceViolation


class ComplianceRule(ABC):
    """Strategy Pattern: one clause of the fatigue standard.

    The evaluator walks occurrences in order and calls ``check`` for each;
    rules that track runs keep their state between calls until ``reset``.
    """

    def reset(self) -> None:
        """Forget run state before a new timeline."""

    @abstractmethod
    def check(self, ctx: RuleContext, index: int) -> list[Finding]:
        raise NotImplementedError

    def finish(self, ctx: RuleContext) -> list[Finding]:
        return []
