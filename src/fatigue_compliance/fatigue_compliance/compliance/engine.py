from __future__ import annotations

import hashlib
import logging
import threading
from collections import Counter, OrderedDict
from datetime import date
from typing import Iterable, Optional, Sequence

from ..assignments.model import Assignment, Individual
from ..core.constants import DEFAULT_CACHE_SIZE
from ..fatigue.service import FatigueService
from ..occurrences.expander import OccurrenceExpander, Roster, group_by_person, occurrences_for_person
from ..occurrences.model import Occurrence
from ..patterns.model import ShiftPattern
from .evaluator import ComplianceEvaluator
from .model import CellViolations, ComplianceViolation, PersonEvaluation, ProjectEvaluation, ProjectSummary
from .status import classify_cell, count_by_tier, person_status, summarize_project, total_hours, violations_for_cell

logger = logging.getLogger(__name__)

# Id used for an assignment that is being previewed and not stored yet.
CANDIDATE_ASSIGNMENT_ID = 0


def occurrence_set_hash(person_id: int, occurrences: Sequence[Occurrence]) -> str:
    """Content hash of an ordered occurrence set."""

    payload = repr((person_id, tuple(occurrences))).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


class ComplianceEngine:
    """Stateless evaluation API over plain assignment/pattern data.

    The only state is a bounded cache of per-person results keyed by the
    content hash of that person's occurrence set. The cache is guarded by a
    lock so one engine can serve concurrent requests.
    """

    def __init__(
        self,
        *,
        expander: Optional[OccurrenceExpander] = None,
        evaluator: Optional[ComplianceEvaluator] = None,
        fatigue: Optional[FatigueService] = None,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self._expander = expander or OccurrenceExpander()
        self._evaluator = evaluator or ComplianceEvaluator()
        self._fatigue = fatigue or FatigueService()
        self._cache_size = cache_size
        self._cache: OrderedDict[str, PersonEvaluation] = OrderedDict()
        self._lock = threading.Lock()

    def evaluate_person(
        self,
        person_id: int,
        assignments: Iterable[Assignment],
        patterns: Iterable[ShiftPattern],
        roster: Optional[Roster] = None,
    ) -> PersonEvaluation:
        occurrences = occurrences_for_person(self._expander.expand(assignments, patterns, roster), person_id)
        return self.evaluate_occurrences(person_id, occurrences)

    def evaluate_project(
        self,
        project_id: int,
        assignments: Iterable[Assignment],
        patterns: Iterable[ShiftPattern],
        roster: Optional[Roster] = None,
    ) -> ProjectEvaluation:
        mine = [a for a in assignments if a.project_id == project_id]
        occurrences = self._expander.expand(mine, patterns, roster)

        people: dict[int, PersonEvaluation] = {}
        violations: list[ComplianceViolation] = []
        for person_id, items in group_by_person(occurrences).items():
            evaluation = self.evaluate_occurrences(person_id, items)
            people[person_id] = evaluation
            violations.extend(evaluation.violations)

        errors, warnings = count_by_tier(violations)
        logger.debug("Project %s: %d people, %d errors, %d warnings", project_id, len(people), errors, warnings)
        return ProjectEvaluation(
            project_id=project_id,
            violations=tuple(violations),
            error_count=errors,
            warning_count=warnings,
            is_compliant=errors == 0,
            people=people,
        )

    def evaluate_occurrences(self, person_id: int, occurrences: Sequence[Occurrence]) -> PersonEvaluation:
        """Evaluate one person's ordered occurrences, reusing cached results."""

        key = occurrence_set_hash(person_id, occurrences)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                return cached

        report = self._fatigue.for_occurrences(occurrences)
        violations = self._evaluator.evaluate(person_id, occurrences, report.results)
        evaluation = PersonEvaluation(
            person_id=person_id,
            violations=tuple(violations),
            status=person_status(violations),
            total_hours=total_hours(occurrences),
            occurrences=tuple(occurrences),
            fatigue=report.results,
        )

        with self._lock:
            self._cache[key] = evaluation
            self._cache.move_to_end(key)
            while len(self._cache) > self._cache_size:
                self._cache.popitem(last=False)
        return evaluation

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    @property
    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)

    @staticmethod
    def violations_for_cell(person_id: int, day: date, violations: Iterable[ComplianceViolation]) -> list[ComplianceViolation]:
        return violations_for_cell(person_id, day, violations)

    @staticmethod
    def classify_cell(person_id: int, day: date, violations: Sequence[ComplianceViolation]) -> CellViolations:
        return classify_cell(person_id, day, violations)

    def validate_new_assignment(
        self,
        person_id: int,
        project_id: int,
        pattern_id: int,
        day: date,
        assignments: Sequence[Assignment],
        patterns: Sequence[ShiftPattern],
        roster: Optional[Roster] = None,
        *,
        custom_start_time: Optional[str] = None,
        custom_end_time: Optional[str] = None,
    ) -> list[ComplianceViolation]:
        """Violations that adding a single-day assignment would introduce."""

        candidate = Assignment(
            assignment_id=CANDIDATE_ASSIGNMENT_ID,
            project_id=project_id,
            pattern_id=pattern_id,
            assignee=Individual(person_id),
            start_date=day,
            custom_start_time=custom_start_time,
            custom_end_time=custom_end_time,
        )
        before = self.evaluate_person(person_id, assignments, patterns, roster)
        after = self.evaluate_person(person_id, [*assignments, candidate], patterns, roster)

        existing = Counter(self._comparable(v) for v in before.violations)
        added: list[ComplianceViolation] = []
        for v in after.violations:
            key = self._comparable(v)
            if existing[key] > 0:
                existing[key] -= 1
            else:
                added.append(v)
        return added

    def summarize_project(
        self,
        project_id: int,
        assignments: Iterable[Assignment],
        patterns: Iterable[ShiftPattern],
        roster: Optional[Roster] = None,
    ) -> ProjectSummary:
        mine = [a for a in assignments if a.project_id == project_id]
        return summarize_project(project_id, self._expander.expand(mine, patterns, roster))

    @staticmethod
    def _comparable(v: ComplianceViolation) -> tuple:
        # Fatigue scores shift slightly for every later shift; compare on identity of the finding.
        return (v.kind, v.severity, v.date, v.date_range, v.assignment_id)
