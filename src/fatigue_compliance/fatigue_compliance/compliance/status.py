from __future__ import annotations

import math
from datetime import date
from typing import Iterable, Sequence

from ..core.enums import ComplianceStatus, Severity
from ..occurrences.model import Occurrence
from .model import CellViolations, ComplianceViolation, ProjectSummary


def person_status(violations: Iterable[ComplianceViolation]) -> ComplianceStatus:
    """Red on any breach, amber on any lower tier, otherwise green."""

    status = ComplianceStatus.GREEN
    for v in violations:
        if v.severity is Severity.BREACH:
            return ComplianceStatus.RED
        status = ComplianceStatus.AMBER
    return status


def count_by_tier(violations: Iterable[ComplianceViolation]) -> tuple[int, int]:
    """(errors, warnings): breaches are errors, every other tier a warning."""

    errors = warnings = 0
    for v in violations:
        if v.severity.is_error:
            errors += 1
        else:
            warnings += 1
    return errors, warnings


def violations_for_cell(person_id: int, day: date, violations: Iterable[ComplianceViolation]) -> list[ComplianceViolation]:
    """The person's violations whose date or date range includes ``day``."""

    return [v for v in violations if v.person_id == person_id and v.touches(day)]


def classify_cell(person_id: int, day: date, violations: Sequence[ComplianceViolation]) -> CellViolations:
    """Split into violations covering ``day`` and those dated after it; none is in both."""

    mine = [v for v in violations if v.person_id == person_id]
    return CellViolations(
        today=tuple(v for v in mine if v.touches(day)),
        later=tuple(v for v in mine if v.date > day and not v.touches(day)),
    )


def total_hours(occurrences: Iterable[Occurrence]) -> float:
    return math.fsum(o.duration_hours for o in occurrences)


def summarize_project(project_id: int, occurrences: Sequence[Occurrence]) -> ProjectSummary:
    by_pattern: dict[int, float] = {}
    for o in occurrences:
        by_pattern[o.pattern_id] = by_pattern.get(o.pattern_id, 0.0) + o.duration_hours
    return ProjectSummary(
        project_id=project_id,
        total_hours=total_hours(occurrences),
        people_count=len({o.person_id for o in occurrences}),
        hours_by_pattern=dict(sorted(by_pattern.items())),
    )
