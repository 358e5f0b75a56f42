from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import format_clock
from ..occurrences.model import Occurrence
from ..patterns.model import FatigueParams
from .calculator.base import FatigueCalculator
from .calculator.hse_calculator import HSEFatigueCalculator
from .model import FatigueReport, FatigueResult, FatigueShift, FatigueSummary, risk_band

logger = logging.getLogger(__name__)


def shifts_from_occurrences(occurrences: Sequence[Occurrence]) -> list[FatigueShift]:
    """Number days from the first occurrence (day 1) and carry resolved params."""

    if not occurrences:
        return []
    first = min(o.date for o in occurrences)
    return [
        FatigueShift(
            day=(o.date - first).days + 1,
            start_time=format_clock(o.start.time()),
            end_time=format_clock(o.end.time()),
            params=o.fatigue,
            ref=o.ref,
        )
        for o in occurrences
    ]


def summarize(results: Sequence[FatigueResult]) -> FatigueSummary:
    if not results:
        return FatigueSummary.empty()

    fri = [r.risk_index for r in results]
    fgi = [r.fatigue_index for r in results]
    max_fri = max(fri)
    return FatigueSummary(
        max_fri=max_fri,
        avg_fri=sum(fri) / len(fri),
        overall_risk=risk_band(max_fri),
        critical_shifts=sum(1 for v in fri if v >= 1.2),
        elevated_shifts=sum(1 for v in fri if 1.1 <= v < 1.2),
        max_fgi=max(fgi),
        avg_fgi=sum(fgi) / len(fgi),
    )


class FatigueService:
    def __init__(self, *, calculator: Optional[FatigueCalculator] = None, default_params: Optional[FatigueParams] = None):
        self._calculator = calculator or HSEFatigueCalculator()
        self._default_params = default_params or FatigueParams.defaults()

    def compute_fatigue_results(self, shifts: Sequence[FatigueShift], params: Optional[FatigueParams] = None) -> FatigueReport:
        """Score each shift; per-shift params override ``params``, then defaults."""

        base = (params or FatigueParams()).merged_over(self._default_params)
        results = tuple(self._calculator.calculate(shifts, base))
        logger.debug("Scored %d shifts", len(results))
        return FatigueReport(results=results, summary=summarize(results))

    def for_occurrences(self, occurrences: Sequence[Occurrence]) -> FatigueReport:
        """Score one person's ordered occurrences."""

        return self.compute_fatigue_results(shifts_from_occurrences(occurrences))
