from __future__ import annotations

from dataclasses import dataclass

from .limits import ComplianceLimits
from .rules.base import ComplianceRule
from .rules.consecutive_days import ConsecutiveDaysRule
from .rules.consecutive_nights import ConsecutiveNightsRule
from .rules.fatigue_thresholds import FatigueIndexRule, FatigueScoreRule
from .rules.rest_gap import RestGapRule
from .rules.shift_length import ShiftLengthRule
from .rules.weekly_hours import WeeklyHoursRule


@dataclass
class ComplianceRuleFactory:
    """Factory Pattern: the ordered rule set for a set of limits.

    The order here is the order violations of one occurrence are reported in.
    """

    def build(self, limits: ComplianceLimits) -> list[ComplianceRule]:
        rules: list[ComplianceRule] = [
            ShiftLengthRule(),
            RestGapRule(),
            WeeklyHoursRule(),
            ConsecutiveDaysRule(),
            ConsecutiveNightsRule(),
        ]
        if limits.check_fatigue:
            rules += [FatigueIndexRule(), FatigueScoreRule()]
        return rules
