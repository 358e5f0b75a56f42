from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ...core.enums import Severity, ViolationKind
from ..model import DateRange
from .base import ComplianceRule, Finding, RuleContext


class ConsecutiveNightsRule(ComplianceRule):
    """One warning per run of night shifts on back-to-back calendar dates.

    A non-night occurrence or a skipped date ends the run. Two night shifts
    on the same date count as one night. The run's violation is reported
    once, with the final run length and date range.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._run_start: Optional[int] = None
        self._run_end: Optional[int] = None
        self._anchor: Optional[int] = None
        self._last_date: Optional[date] = None
        self._nights = 0

    def check(self, ctx: RuleContext, index: int) -> list[Finding]:
        occ = ctx.occurrences[index]
        if not occ.is_night:
            findings = self._close(ctx)
            self.reset()
            return findings

        findings: list[Finding] = []
        if self._last_date is not None and occ.date not in (self._last_date, self._last_date + timedelta(days=1)):
            findings = self._close(ctx)
            self.reset()

        if self._run_start is None:
            self._run_start = index
        if occ.date != self._last_date:
            self._nights += 1
            if self._nights == ctx.limits.consecutive_nights_warning:
                self._anchor = index
        self._run_end = index
        self._last_date = occ.date
        return findings

    def finish(self, ctx: RuleContext) -> list[Finding]:
        findings = self._close(ctx)
        self.reset()
        return findings

    def _close(self, ctx: RuleContext) -> list[Finding]:
        if self._anchor is None or self._run_start is None or self._run_end is None:
            return []

        first = ctx.occurrences[self._run_start]
        last = ctx.occurrences[self._run_end]
        return [
            Finding(
                self._anchor,
                ctx.violation(
                    self._anchor,
                    ViolationKind.CONSECUTIVE_NIGHTS,
                    Severity.WARNING,
                    float(self._nights),
                    f"{self._nights} consecutive night shifts",
                    date_range=DateRange(first.date, last.date),
                ),
            )
        ]
