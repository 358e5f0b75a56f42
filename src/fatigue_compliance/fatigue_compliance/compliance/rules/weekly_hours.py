from __future__ import annotations

from ...core.constants import LIMIT_EPSILON
from ...core.enums import Severity, ViolationKind
from .base import ComplianceRule, Finding, RuleContext


class WeeklyHoursRule(ComplianceRule):
    """Rolling-window hours, keeping only the highest tier per occurrence.

    ``> level2`` needs a documented variation, ``> level1`` a fatigue
    management plan; ``>= approaching`` is an advisory warning.
    """

    def check(self, ctx: RuleContext, index: int) -> list[Finding]:
        hours = ctx.weekly_hours[index]
        limits = ctx.limits
        days = limits.weekly_window_days

        if hours > limits.weekly_level2_hours + LIMIT_EPSILON:
            excess = hours - limits.weekly_level2_hours
            severity = Severity.LEVEL2
            message = f"{hours:.2f}h in {days} days exceeds {limits.weekly_level2_hours:g}h by {excess:.2f}h"
        elif hours > limits.weekly_level1_hours + LIMIT_EPSILON:
            excess = hours - limits.weekly_level1_hours
            severity = Severity.LEVEL1
            message = f"{hours:.2f}h in {days} days exceeds {limits.weekly_level1_hours:g}h by {excess:.2f}h"
        elif hours >= limits.weekly_approaching_hours - LIMIT_EPSILON:
            excess = limits.weekly_level2_hours - hours
            severity = Severity.WARNING
            message = f"{hours:.2f}h in {days} days is approaching the {limits.weekly_level2_hours:g}h limit"
        else:
            return []

        return [Finding(index, ctx.violation(index, ViolationKind.WEEKLY_HOURS, severity, excess, message))]
