from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pytest

from fatigue_compliance.assignments.model import Assignment, Individual, Team
from fatigue_compliance.compliance.engine import CANDIDATE_ASSIGNMENT_ID, ComplianceEngine, occurrence_set_hash
from fatigue_compliance.compliance.evaluator import ComplianceEvaluator
from fatigue_compliance.compliance.limits import ComplianceLimits
from fatigue_compliance.core.enums import ComplianceStatus, Severity, ViolationKind
from fatigue_compliance.patterns.model import ShiftPattern

DAY = ShiftPattern(pattern_id=1, project_id=1, name="Day", start_time="09:00", end_time="17:00")
LONG = ShiftPattern(pattern_id=2, project_id=1, name="Long", start_time="06:00", end_time="20:00")
LATE = ShiftPattern(pattern_id=3, project_id=1, name="Late", start_time="14:00", end_time="23:00")
EARLY = ShiftPattern(pattern_id=4, project_id=1, name="Early", start_time="05:00", end_time="13:00")
ELEVEN = ShiftPattern(pattern_id=5, project_id=1, name="Eleven", start_time="07:00", end_time="18:00")
PATTERNS = [DAY, LONG, LATE, EARLY, ELEVEN]


def _assign(assignment_id, pattern_id, start, end=None, *, person=1, project_id=1):
    return Assignment(
        assignment_id=assignment_id,
        project_id=project_id,
        pattern_id=pattern_id,
        assignee=Individual(person),
        start_date=start,
        end_date=end,
    )


@pytest.fixture
def engine() -> ComplianceEngine:
    return ComplianceEngine()


@pytest.fixture
def plain_engine() -> ComplianceEngine:
    return ComplianceEngine(evaluator=ComplianceEvaluator(limits=ComplianceLimits(check_fatigue=False)))


def test_compliant_person_is_green(engine):
    evaluation = engine.evaluate_person(1, [_assign(1, 1, date(2026, 1, 5), date(2026, 1, 7))], PATTERNS)

    assert evaluation.status is ComplianceStatus.GREEN
    assert evaluation.violations == ()
    assert evaluation.total_hours == 24.0
    assert len(evaluation.fatigue) == 3


def test_long_shift_turns_person_red(engine):
    evaluation = engine.evaluate_person(1, [_assign(1, 2, date(2026, 1, 5))], PATTERNS)

    assert evaluation.status is ComplianceStatus.RED
    assert any(v.kind is ViolationKind.SHIFT_LENGTH for v in evaluation.violations)


def test_seven_eleven_hour_days_through_the_whole_pipeline(engine):
    evaluation = engine.evaluate_person(1, [_assign(1, 5, date(2026, 1, 5), date(2026, 1, 11))], PATTERNS)

    weekly = [v for v in evaluation.violations if v.kind is ViolationKind.WEEKLY_HOURS]
    level2 = [v for v in weekly if v.severity is Severity.LEVEL2]
    assert len(level2) == 1
    assert level2[0].date == date(2026, 1, 11)
    assert level2[0].magnitude == pytest.approx(5.0)
    assert evaluation.total_hours == 77.0


def test_evaluation_is_idempotent_and_cached(engine):
    assignments = [_assign(1, 3, date(2026, 1, 5)), _assign(2, 4, date(2026, 1, 6))]

    first = engine.evaluate_person(1, assignments, PATTERNS)
    second = engine.evaluate_person(1, list(reversed(assignments)), PATTERNS)

    assert first.violations == second.violations
    assert engine.cache_size == 1

    engine.clear_cache()
    assert engine.cache_size == 0
    assert engine.evaluate_person(1, assignments, PATTERNS).violations == first.violations


def test_cache_is_bounded():
    engine = ComplianceEngine(cache_size=2)
    for person in (1, 2, 3):
        engine.evaluate_person(person, [_assign(person, 1, date(2026, 1, 5), person=person)], PATTERNS)

    assert engine.cache_size == 2


def test_engine_is_safe_to_share_between_threads():
    engine = ComplianceEngine(cache_size=1)
    people = range(1, 9)
    rosters = {p: [_assign(p, 2, date(2026, 1, 5), date(2026, 1, 5 + p), person=p)] for p in people}
    expected = {p: ComplianceEngine().evaluate_person(p, rosters[p], PATTERNS).violations for p in people}

    def run(person):
        return person, engine.evaluate_person(person, rosters[person], PATTERNS)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(run, [p for p in people for _ in range(25)]))

    assert len(results) == 200
    for person, evaluation in results:
        assert evaluation.person_id == person
        assert evaluation.violations == expected[person]
    assert engine.cache_size == 1


def test_hash_changes_with_content(make_occurrence):
    a = make_occurrence(datetime(2026, 1, 5, 8, 0), 8.0)
    b = make_occurrence(datetime(2026, 1, 6, 8, 0), 8.0)

    assert occurrence_set_hash(1, [a, b]) == occurrence_set_hash(1, [a, b])
    assert occurrence_set_hash(1, [a, b]) != occurrence_set_hash(1, [a])
    assert occurrence_set_hash(1, [a]) != occurrence_set_hash(2, [a])


def test_project_counts_errors_and_warnings(plain_engine):
    assignments = [
        _assign(1, 2, date(2026, 1, 5), person=1),
        _assign(2, 1, date(2026, 1, 5), date(2026, 1, 6), person=2),
        _assign(3, 2, date(2026, 1, 5), person=3, project_id=2),
    ]

    evaluation = plain_engine.evaluate_project(1, assignments, PATTERNS)

    assert evaluation.error_count == 1
    assert evaluation.warning_count == 0
    assert evaluation.is_compliant is False
    assert sorted(evaluation.people) == [1, 2]
    assert evaluation.people[2].status is ComplianceStatus.GREEN


def test_empty_project_is_compliant(engine):
    evaluation = engine.evaluate_project(1, [], PATTERNS)

    assert evaluation.is_compliant
    assert evaluation.violations == ()
    assert (evaluation.error_count, evaluation.warning_count) == (0, 0)


def test_team_members_are_evaluated_individually(plain_engine):
    team_assignment = Assignment(
        assignment_id=10, project_id=1, pattern_id=2, assignee=Team(4), start_date=date(2026, 1, 5)
    )

    evaluation = plain_engine.evaluate_project(1, [team_assignment], PATTERNS, {4: (5, 6)})

    assert sorted(evaluation.people) == [5, 6]
    assert evaluation.error_count == 2


def test_cell_lookup_through_engine(plain_engine):
    evaluation = plain_engine.evaluate_person(1, [_assign(1, 2, date(2026, 1, 7))], PATTERNS)

    assert plain_engine.violations_for_cell(1, date(2026, 1, 7), evaluation.violations)
    assert plain_engine.violations_for_cell(1, date(2026, 1, 6), evaluation.violations) == []
    assert plain_engine.classify_cell(1, date(2026, 1, 6), evaluation.violations).has_upcoming


def test_validate_new_assignment_reports_short_rest(plain_engine):
    existing = [_assign(1, 3, date(2026, 1, 5))]

    added = plain_engine.validate_new_assignment(1, 1, 4, date(2026, 1, 6), existing, PATTERNS)

    assert [(v.kind, v.severity) for v in added] == [(ViolationKind.REST_GAP, Severity.BREACH)]
    assert added[0].magnitude == pytest.approx(6.0)
    assert added[0].assignment_id == CANDIDATE_ASSIGNMENT_ID


def test_validate_new_assignment_reports_overlap(plain_engine):
    existing = [_assign(1, 1, date(2026, 1, 5))]

    added = plain_engine.validate_new_assignment(1, 1, 1, date(2026, 1, 5), existing, PATTERNS)

    assert any(v.kind is ViolationKind.REST_GAP for v in added)


def test_validate_new_assignment_ignores_existing_problems(plain_engine):
    existing = [_assign(1, 2, date(2026, 1, 5))]

    added = plain_engine.validate_new_assignment(1, 1, 1, date(2026, 1, 8), existing, PATTERNS)

    assert added == []


def test_validate_new_assignment_honours_custom_times(plain_engine):
    added = plain_engine.validate_new_assignment(
        1, 1, 1, date(2026, 1, 8), [], PATTERNS, custom_start_time="06:00", custom_end_time="19:00"
    )

    assert [(v.kind, v.magnitude) for v in added] == [(ViolationKind.SHIFT_LENGTH, pytest.approx(1.0))]
