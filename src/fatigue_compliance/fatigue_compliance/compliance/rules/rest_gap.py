from __future__ import annotations

from ...common.datetime_utils import hours_between
from ...core.constants import LIMIT_EPSILON
from ...core.enums import Severity, ViolationKind
from .base import ComplianceRule, Finding, RuleContext


class RestGapRule(ComplianceRule):
    """Minimum rest between the end of one shift and the start of the next."""

    def check(self, ctx: RuleContext, index: int) -> list[Finding]:
        if index == 0:
            return []

        rest = hours_between(ctx.occurrences[index - 1].end, ctx.occurrences[index].start)
        minimum = ctx.limits.min_rest_hours
        if rest >= minimum - LIMIT_EPSILON:
            return []

        shortfall = minimum - rest
        if rest < 0:
            message = f"Shift overlaps the previous shift by {-rest:.2f}h"
        else:
            message = f"Only {rest:.2f}h rest before this shift; {minimum:g}h required"
        return [Finding(index, ctx.violation(index, ViolationKind.REST_GAP, Severity.BREACH, shortfall, message))]
