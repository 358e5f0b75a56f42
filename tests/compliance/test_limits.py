from __future__ import annotations

import pytest

from fatigue_compliance.compliance.factory import ComplianceRuleFactory
from fatigue_compliance.compliance.limits import ComplianceLimits
from fatigue_compliance.compliance.rules.fatigue_thresholds import FatigueIndexRule, FatigueScoreRule
from fatigue_compliance.compliance.rules.shift_length import ShiftLengthRule
from fatigue_compliance.core.exceptions import ValidationError


def test_defaults_match_the_standard():
    limits = ComplianceLimits()

    assert limits.max_shift_hours == 12
    assert limits.min_rest_hours == 12
    assert limits.weekly_level1_hours == 60
    assert limits.weekly_level2_hours == 72
    assert limits.max_consecutive_days == 13
    assert limits.consecutive_nights_warning == 3
    assert limits.fri_breach == 1.6
    assert limits.check_fatigue is True


def test_from_mapping_coerces_strings_case_insensitively():
    limits = ComplianceLimits.from_mapping({"MAX_SHIFT_HOURS": "10", "max_consecutive_days": "6", "CHECK_FATIGUE": "0"})

    assert limits.max_shift_hours == 10.0
    assert limits.max_consecutive_days == 6
    assert limits.check_fatigue is False
    assert limits.min_rest_hours == 12


def test_from_mapping_empty_is_defaults():
    assert ComplianceLimits.from_mapping(None) == ComplianceLimits()
    assert ComplianceLimits.from_mapping({"FRI_BREACH": ""}) == ComplianceLimits()


def test_from_mapping_rejects_unknown_and_bad_values():
    with pytest.raises(ValidationError):
        ComplianceLimits.from_mapping({"MAX_SHIFT": 10})
    with pytest.raises(ValidationError):
        ComplianceLimits.from_mapping({"MIN_REST_HOURS": "twelve"})


def test_factory_orders_rules_and_drops_fatigue_rules_when_disabled():
    factory = ComplianceRuleFactory()

    full = factory.build(ComplianceLimits())
    basic = factory.build(ComplianceLimits(check_fatigue=False))

    assert isinstance(full[0], ShiftLengthRule)
    assert [type(r) for r in full[-2:]] == [FatigueIndexRule, FatigueScoreRule]
    assert len(basic) == len(full) - 2
    assert not any(isinstance(r, (FatigueIndexRule, FatigueScoreRule)) for r in basic)
