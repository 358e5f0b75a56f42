from __future__ import annotations

from ...core.constants import LIMIT_EPSILON
from ...core.enums import Severity, ViolationKind
from .base import ComplianceRule, Finding, RuleContext


class ShiftLengthRule(ComplianceRule):
    def check(self, ctx: RuleContext, index: int) -> list[Finding]:
        hours = ctx.occurrences[index].duration_hours
        limit = ctx.limits.max_shift_hours
        if hours <= limit + LIMIT_EPSILON:
            return []
        excess = hours - limit
        return [
            Finding(
                index,
                ctx.violation(
                    index,
                    ViolationKind.SHIFT_LENGTH,
                    Severity.BREACH,
                    excess,
                    f"Shift of {hours:.2f}h exceeds the {limit:g}h maximum by {excess:.2f}h",
                ),
            )
        ]
