from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..assignments.repository import AssignmentRepository
from ..common.validators import require_id
from ..core.exceptions import NotFoundError
from ..patterns.repository import PatternRepository
from ..teams.model import roster_map
from ..teams.repository import TeamRepository
from .engine import ComplianceEngine
from .model import CellViolations, ComplianceViolation, PersonEvaluation, ProjectEvaluation, ProjectSummary

logger = logging.getLogger(__name__)


class ComplianceService:
    """Loads assignments, patterns and rosters, then delegates to the engine."""

    def __init__(
        self,
        assignments: AssignmentRepository,
        patterns: PatternRepository,
        teams: TeamRepository,
        *,
        engine: Optional[ComplianceEngine] = None,
    ):
        self._assignments = assignments
        self._patterns = patterns
        self._teams = teams
        self._engine = engine or ComplianceEngine()

    def evaluate_person(self, person_id, *, project_id=None) -> PersonEvaluation:
        person_id = require_id(person_id, "person_id")
        assignments = list(self._assignments.list_for_employee(person_id))
        if project_id is not None:
            project_id = require_id(project_id, "project_id")
            assignments = [a for a in assignments if a.project_id == project_id]

        roster = roster_map(self._teams.list_for_employee(person_id))
        evaluation = self._engine.evaluate_person(person_id, assignments, self._patterns.list_all(), roster)
        logger.info(
            "Evaluated person %s: %d violations, status=%s",
            person_id,
            len(evaluation.violations),
            evaluation.status.value,
        )
        return evaluation

    def evaluate_project(self, project_id) -> ProjectEvaluation:
        project_id = require_id(project_id, "project_id")
        evaluation = self._engine.evaluate_project(
            project_id,
            self._assignments.list_for_project(project_id),
            self._patterns.list_for_project(project_id),
            roster_map(self._teams.list_for_project(project_id)),
        )
        logger.info(
            "Evaluated project %s: errors=%d warnings=%d",
            project_id,
            evaluation.error_count,
            evaluation.warning_count,
        )
        return evaluation

    def summarize_project(self, project_id) -> ProjectSummary:
        project_id = require_id(project_id, "project_id")
        return self._engine.summarize_project(
            project_id,
            self._assignments.list_for_project(project_id),
            self._patterns.list_for_project(project_id),
            roster_map(self._teams.list_for_project(project_id)),
        )

    def cell(self, person_id, day: date) -> CellViolations:
        evaluation = self.evaluate_person(person_id)
        return self._engine.classify_cell(evaluation.person_id, day, evaluation.violations)

    def validate_new_assignment(
        self,
        *,
        person_id,
        project_id,
        pattern_id,
        day: date,
        custom_start_time: Optional[str] = None,
        custom_end_time: Optional[str] = None,
    ) -> list[ComplianceViolation]:
        person_id = require_id(person_id, "person_id")
        project_id = require_id(project_id, "project_id")
        pattern_id = require_id(pattern_id, "pattern_id")

        pattern = self._patterns.get_by_id(pattern_id)
        if pattern is None:
            raise NotFoundError(f"Shift pattern {pattern_id} not found")

        return self._engine.validate_new_assignment(
            person_id,
            project_id,
            pattern_id,
            day,
            list(self._assignments.list_for_employee(person_id)),
            list(self._patterns.list_all()),
            roster_map(self._teams.list_for_employee(person_id)),
            custom_start_time=custom_start_time,
            custom_end_time=custom_end_time,
        )
