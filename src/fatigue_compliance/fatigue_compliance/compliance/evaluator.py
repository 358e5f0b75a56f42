from __future__ import annotations

from typing import Optional, Sequence

from ..fatigue.model import FatigueResult
from ..occurrences.model import Occurrence
from .factory import ComplianceRuleFactory
from .limits import ComplianceLimits
from .model import ComplianceViolation
from .rules.base import RuleContext
from .windows import rolling_distinct_days, rolling_hours


class ComplianceEvaluator:
    """Runs the rule set over one person's occurrences, in start order.

    Pure: no I/O and no state survives between calls, so the same input
    always yields the same violations in the same order.
    """

    def __init__(self, *, limits: Optional[ComplianceLimits] = None, rule_factory: Optional[ComplianceRuleFactory] = None):
        self._limits = limits or ComplianceLimits()
        self._factory = rule_factory or ComplianceRuleFactory()

    @property
    def limits(self) -> ComplianceLimits:
        return self._limits

    def evaluate(
        self,
        person_id: int,
        occurrences: Sequence[Occurrence],
        fatigue: Optional[Sequence[FatigueResult]] = None,
    ) -> list[ComplianceViolation]:
        if not occurrences:
            return []

        ordered = sorted(occurrences, key=lambda o: o.sort_key)
        if fatigue is not None and list(ordered) != list(occurrences):
            by_ref = {r.occurrence_ref: r for r in fatigue}
            fatigue = [by_ref.get(o.ref) for o in ordered]

        ctx = RuleContext(
            person_id=person_id,
            occurrences=ordered,
            weekly_hours=rolling_hours(ordered, self._limits.weekly_window_days),
            distinct_days=rolling_distinct_days(ordered, self._limits.consecutive_days_window),
            fatigue=list(fatigue) if fatigue is not None else [],
            limits=self._limits,
        )

        rules = self._factory.build(self._limits)
        ranked = []
        for rule in rules:
            rule.reset()
        for index in range(len(ordered)):
            for position, rule in enumerate(rules):
                ranked.extend((f.index, position, f.violation) for f in rule.check(ctx, index))
        for position, rule in enumerate(rules):
            ranked.extend((f.index, position, f.violation) for f in rule.finish(ctx))

        ranked.sort(key=lambda item: (item[0], item[1]))
        return [v for _, _, v in ranked]
