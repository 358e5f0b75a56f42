from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from fatigue_compliance.compliance.evaluator import ComplianceEvaluator
from fatigue_compliance.compliance.limits import ComplianceLimits
from fatigue_compliance.core.enums import Severity, ViolationKind
from fatigue_compliance.fatigue.model import FatigueResult

MONDAY = date(2026, 1, 5)


@pytest.fixture
def evaluator() -> ComplianceEvaluator:
    return ComplianceEvaluator(limits=ComplianceLimits(check_fatigue=False))


def _kinds(violations):
    return [(v.kind, v.severity) for v in violations]


def test_no_occurrences_no_violations(evaluator):
    assert evaluator.evaluate(1, []) == []


def test_twelve_hour_shift_is_allowed_but_longer_is_breach(evaluator, make_occurrence):
    ok = make_occurrence(datetime(2026, 1, 5, 6, 0), 12.0)
    long = make_occurrence(datetime(2026, 1, 7, 6, 0), 13.5)

    violations = evaluator.evaluate(1, [ok, long])

    assert _kinds(violations) == [(ViolationKind.SHIFT_LENGTH, Severity.BREACH)]
    assert violations[0].magnitude == pytest.approx(1.5)
    assert violations[0].date == date(2026, 1, 7)
    assert violations[0].assignment_id == long.assignment_id


def test_rest_gap_of_exactly_twelve_hours_is_compliant(evaluator, make_occurrence):
    first = make_occurrence(datetime(2026, 1, 5, 6, 0), 12.0)
    second = make_occurrence(datetime(2026, 1, 6, 6, 0), 12.0)

    assert evaluator.evaluate(1, [first, second]) == []


def test_rest_gap_just_under_twelve_hours_is_breach(evaluator, make_occurrence):
    first = make_occurrence(datetime(2026, 1, 5, 6, 0), 12.0)
    second = make_occurrence(datetime(2026, 1, 6, 5, 59, 24), 8.0)

    violations = evaluator.evaluate(1, [first, second])

    assert _kinds(violations) == [(ViolationKind.REST_GAP, Severity.BREACH)]
    assert violations[0].magnitude == pytest.approx(0.01, abs=1e-6)
    assert violations[0].date == date(2026, 1, 6)


def test_overlapping_shifts_break_rest_rule(evaluator, make_occurrence):
    first = make_occurrence(datetime(2026, 1, 5, 8, 0), 8.0)
    second = make_occurrence(datetime(2026, 1, 5, 14, 0), 4.0)

    violations = evaluator.evaluate(1, [first, second])

    assert _kinds(violations) == [(ViolationKind.REST_GAP, Severity.BREACH)]
    assert violations[0].magnitude == pytest.approx(14.0)
    assert "overlaps" in violations[0].message


def test_input_order_does_not_matter(evaluator, make_occurrence):
    first = make_occurrence(datetime(2026, 1, 5, 14, 0), 9.0)
    second = make_occurrence(datetime(2026, 1, 6, 5, 0), 8.0)

    assert evaluator.evaluate(1, [second, first]) == evaluator.evaluate(1, [first, second])


def test_exactly_sixty_hours_in_window_is_compliant(evaluator, daily):
    assert evaluator.evaluate(1, daily(MONDAY, 5, hour=6, hours=12.0)) == []


def test_just_over_sixty_hours_is_level1(evaluator, daily, make_occurrence):
    occ = daily(MONDAY, 5, hour=6, hours=12.0)
    occ.append(make_occurrence(datetime(2026, 1, 10, 6, 0), 0.01))

    violations = evaluator.evaluate(1, occ)

    assert _kinds(violations) == [(ViolationKind.WEEKLY_HOURS, Severity.LEVEL1)]
    assert violations[0].magnitude == pytest.approx(0.01, abs=1e-6)
    assert violations[0].date == date(2026, 1, 10)


def test_just_over_seventy_two_hours_is_level2_only(evaluator, daily, make_occurrence):
    occ = daily(MONDAY, 6, hour=6, hours=12.0)
    occ.append(make_occurrence(datetime(2026, 1, 11, 6, 0), 0.01))

    violations = evaluator.evaluate(1, occ)

    weekly = [v for v in violations if v.kind is ViolationKind.WEEKLY_HOURS]
    assert [(v.date, v.severity) for v in weekly] == [
        (date(2026, 1, 10), Severity.LEVEL1),
        (date(2026, 1, 11), Severity.LEVEL2),
    ]
    assert weekly[1].magnitude == pytest.approx(0.01, abs=1e-6)


def test_seven_eleven_hour_days_reach_level2_on_day_seven(evaluator, daily):
    occ = daily(MONDAY, 7, hour=7, hours=11.0)

    violations = evaluator.evaluate(1, occ)

    level2 = [v for v in violations if v.severity is Severity.LEVEL2]
    assert len(level2) == 1
    assert level2[0].kind is ViolationKind.WEEKLY_HOURS
    assert level2[0].date == date(2026, 1, 11)
    assert level2[0].magnitude == pytest.approx(5.0)
    assert not any(v.kind is ViolationKind.SHIFT_LENGTH for v in violations)
    assert not any(v.kind is ViolationKind.REST_GAP for v in violations)


def test_approaching_warning_can_be_enabled_through_limits(daily):
    evaluator = ComplianceEvaluator(
        limits=ComplianceLimits(weekly_level1_hours=70.0, weekly_approaching_hours=66.0, check_fatigue=False)
    )
    occ = daily(MONDAY, 6, hour=7, hours=11.0)

    violations = evaluator.evaluate(1, occ)

    assert _kinds(violations) == [(ViolationKind.WEEKLY_HOURS, Severity.WARNING)]
    assert violations[0].magnitude == pytest.approx(6.0)


def test_thirteen_days_in_fourteen_is_allowed(evaluator, daily):
    assert evaluator.evaluate(1, daily(MONDAY, 13, hour=8, hours=8.0)) == []


def test_fourteenth_consecutive_day_is_breach(evaluator, daily):
    violations = evaluator.evaluate(1, daily(MONDAY, 14, hour=8, hours=8.0))

    assert _kinds(violations) == [(ViolationKind.CONSECUTIVE_DAYS, Severity.BREACH)]
    assert violations[0].magnitude == 14.0
    assert violations[0].date == MONDAY + timedelta(days=13)


def test_two_nights_in_a_row_are_fine(evaluator, daily):
    assert evaluator.evaluate(1, daily(MONDAY, 2, hour=22, hours=8.0)) == []


def test_three_consecutive_nights_warn_once(evaluator, daily):
    violations = evaluator.evaluate(1, daily(MONDAY, 3, hour=22, hours=8.0))

    assert _kinds(violations) == [(ViolationKind.CONSECUTIVE_NIGHTS, Severity.WARNING)]
    v = violations[0]
    assert v.magnitude == 3.0
    assert v.date == date(2026, 1, 7)
    assert (v.date_range.start, v.date_range.end) == (MONDAY, date(2026, 1, 7))


def test_four_consecutive_nights_still_one_warning_for_the_run(evaluator, daily):
    violations = evaluator.evaluate(1, daily(MONDAY, 4, hour=22, hours=8.0))

    assert len(violations) == 1
    v = violations[0]
    assert v.magnitude == 4.0
    assert v.date == date(2026, 1, 7)
    assert v.date_range.end == date(2026, 1, 8)


def test_day_shift_ends_a_night_run(evaluator, daily, make_occurrence):
    occ = daily(MONDAY, 2, hour=22, hours=8.0)
    occ.append(make_occurrence(datetime(2026, 1, 8, 8, 0), 8.0))
    occ += daily(date(2026, 1, 9), 2, hour=22, hours=8.0)

    assert evaluator.evaluate(1, occ) == []


def _fatigue(fri: float, fgi: float, day: int = 1) -> FatigueResult:
    return FatigueResult(
        day=day,
        start_time="08:00",
        end_time="16:00",
        duty_length=8.0,
        cumulative=1.0,
        timing=1.0,
        job_breaks=1.0,
        risk_index=fri,
        cumulative_fatigue=0.0,
        time_of_day=fgi,
        task=0.0,
        fatigue_index=fgi,
    )


def test_fatigue_index_above_cut_point_is_breach(make_occurrence):
    evaluator = ComplianceEvaluator()
    occ = [make_occurrence(datetime(2026, 1, 5, 8, 0), 8.0), make_occurrence(datetime(2026, 1, 6, 8, 0), 8.0)]

    violations = evaluator.evaluate(1, occ, [_fatigue(1.6, 10.0), _fatigue(1.61, 10.0, day=2)])

    assert _kinds(violations) == [(ViolationKind.FATIGUE_INDEX, Severity.BREACH)]
    assert violations[0].magnitude == pytest.approx(1.61)
    assert violations[0].date == date(2026, 1, 6)


def test_fatigue_score_uses_day_and_night_thresholds(make_occurrence):
    evaluator = ComplianceEvaluator()
    day_occ = make_occurrence(datetime(2026, 1, 5, 8, 0), 8.0)
    night_occ = make_occurrence(datetime(2026, 1, 6, 22, 0), 8.0)

    # 42 is over the day limit but only over good practice at night.
    violations = evaluator.evaluate(1, [day_occ, night_occ], [_fatigue(1.0, 42.0), _fatigue(1.0, 42.0, day=2)])

    assert _kinds(violations) == [
        (ViolationKind.FATIGUE_SCORE, Severity.LEVEL1),
        (ViolationKind.FATIGUE_SCORE, Severity.WARNING),
    ]
    assert violations[1].magnitude == pytest.approx(42.0)


def test_fatigue_rules_are_skipped_when_disabled(evaluator, make_occurrence):
    occ = [make_occurrence(datetime(2026, 1, 5, 8, 0), 8.0)]

    assert evaluator.evaluate(1, occ, [_fatigue(2.0, 90.0)]) == []


def test_violations_follow_occurrence_then_rule_order(evaluator, make_occurrence):
    first = make_occurrence(datetime(2026, 1, 5, 6, 0), 14.0)
    second = make_occurrence(datetime(2026, 1, 6, 0, 0), 13.0)

    violations = evaluator.evaluate(1, [first, second])

    assert _kinds(violations) == [
        (ViolationKind.SHIFT_LENGTH, Severity.BREACH),
        (ViolationKind.SHIFT_LENGTH, Severity.BREACH),
        (ViolationKind.REST_GAP, Severity.BREACH),
    ]
    assert [v.date for v in violations] == [date(2026, 1, 5), date(2026, 1, 6), date(2026, 1, 6)]


def test_nights_a_week_apart_are_not_consecutive(evaluator, make_occurrence):
    occ = [make_occurrence(datetime(2026, 1, d, 22, 0), 8.0) for d in (5, 12, 19)]

    assert evaluator.evaluate(1, occ) == []


def test_a_skipped_date_breaks_the_night_run(evaluator, make_occurrence):
    occ = [make_occurrence(datetime(2026, 1, d, 22, 0), 8.0) for d in (5, 6, 8, 9)]

    assert evaluator.evaluate(1, occ) == []


def test_night_run_after_a_gap_is_counted_from_its_own_start(evaluator, make_occurrence):
    occ = [make_occurrence(datetime(2026, 1, d, 22, 0), 8.0) for d in (5, 7, 8, 9)]

    violations = evaluator.evaluate(1, occ)

    assert _kinds(violations) == [(ViolationKind.CONSECUTIVE_NIGHTS, Severity.WARNING)]
    v = violations[0]
    assert v.magnitude == 3.0
    assert v.date == date(2026, 1, 9)
    assert (v.date_range.start, v.date_range.end) == (date(2026, 1, 7), date(2026, 1, 9))
