from __future__ import annotations

from ...core.enums import Severity, ViolationKind
from .base import ComplianceRule, Finding, RuleContext


class ConsecutiveDaysRule(ComplianceRule):
    def check(self, ctx: RuleContext, index: int) -> list[Finding]:
        worked = ctx.distinct_days[index]
        limit = ctx.limits.max_consecutive_days
        if worked <= limit:
            return []
        window = ctx.limits.consecutive_days_window
        return [
            Finding(
                index,
                ctx.violation(
                    index,
                    ViolationKind.CONSECUTIVE_DAYS,
                    Severity.BREACH,
                    float(worked),
                    f"{worked} days worked in the last {window}; maximum is {limit}",
                ),
            )
        ]
