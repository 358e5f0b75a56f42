from __future__ import annotations

from ...core.enums import Severity, ViolationKind
from .base import ComplianceRule, Finding, RuleContext


class FatigueIndexRule(ComplianceRule):
    """Risk index above the breach cut point."""

    def check(self, ctx: RuleContext, index: int) -> list[Finding]:
        result = ctx.fatigue[index] if index < len(ctx.fatigue) else None
        if result is None or result.risk_index <= ctx.limits.fri_breach:
            return []
        return [
            Finding(
                index,
                ctx.violation(
                    index,
                    ViolationKind.FATIGUE_INDEX,
                    Severity.BREACH,
                    result.risk_index,
                    f"Fatigue risk index {result.risk_index:.3f} exceeds {ctx.limits.fri_breach:g}",
                ),
            )
        ]


class FatigueScoreRule(ComplianceRule):
    """Fatigue index (0-100) against day/night level 1 and good-practice limits."""

    def check(self, ctx: RuleContext, index: int) -> list[Finding]:
        result = ctx.fatigue[index] if index < len(ctx.fatigue) else None
        if result is None:
            return []

        limits = ctx.limits
        night = ctx.occurrences[index].is_night
        level1 = limits.fgi_night_level1 if night else limits.fgi_day_level1
        good_practice = limits.fgi_night_good_practice if night else limits.fgi_day_good_practice
        shift = "night" if night else "day"
        score = result.fatigue_index

        if score > level1:
            severity = Severity.LEVEL1
            message = f"Fatigue score {score:.1f} exceeds the {shift} shift limit of {level1:g}"
        elif score > good_practice:
            severity = Severity.WARNING
            message = f"Fatigue score {score:.1f} exceeds {shift} shift good practice of {good_practice:g}"
        else:
            return []
        return [Finding(index, ctx.violation(index, ViolationKind.FATIGUE_SCORE, severity, score, message))]
