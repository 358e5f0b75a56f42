from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from itertools import count
from typing import Optional

import pytest

from fatigue_compliance.assignments.model import Assignment, Individual, Team
from fatigue_compliance.common.datetime_utils import is_night
from fatigue_compliance.occurrences.model import Occurrence
from fatigue_compliance.patterns.model import ShiftPattern
from fatigue_compliance.teams.model import TeamRoster


@pytest.fixture
def make_occurrence():
    """Build an occurrence from a start datetime and a length in hours."""

    ids = count(1)

    def _make(
        start: datetime,
        hours: float,
        *,
        person_id: int = 1,
        project_id: int = 1,
        pattern_id: int = 1,
        night: Optional[bool] = None,
    ) -> Occurrence:
        end = start + timedelta(hours=hours)
        return Occurrence(
            person_id=person_id,
            date=start.date(),
            start=start,
            end=end,
            duration_hours=hours,
            assignment_id=next(ids),
            pattern_id=pattern_id,
            project_id=project_id,
            is_night=is_night(start, end) if night is None else night,
        )

    return _make


@pytest.fixture
def daily(make_occurrence):
    """``n`` back-to-back daily shifts starting on ``first`` at ``hour``."""

    def _daily(first: date, n: int, *, hour: int, minute: int = 0, hours: float, **kwargs) -> list[Occurrence]:
        return [
            make_occurrence(datetime(first.year, first.month, first.day, hour, minute) + timedelta(days=i), hours, **kwargs)
            for i in range(n)
        ]

    return _daily


@dataclass
class InMemoryPatterns:
    patterns: dict[int, ShiftPattern] = field(default_factory=dict)

    def get_by_id(self, pattern_id: int) -> Optional[ShiftPattern]:
        return self.patterns.get(pattern_id)

    def list_for_project(self, project_id: int):
        return [p for p in self.patterns.values() if p.project_id == project_id]

    def list_all(self):
        return list(self.patterns.values())


@dataclass
class InMemoryTeams:
    teams: list[TeamRoster] = field(default_factory=list)

    def list_for_project(self, project_id: int):
        return [t for t in self.teams if t.project_id == project_id]

    def list_for_employee(self, employee_id: int):
        return [t for t in self.teams if employee_id in t.member_ids]


@dataclass
class InMemoryAssignments:
    assignments: list[Assignment] = field(default_factory=list)
    teams: Optional[InMemoryTeams] = None

    def list_for_project(self, project_id: int):
        return [a for a in self.assignments if a.project_id == project_id]

    def list_for_employee(self, employee_id: int, *, start=None, end=None):
        team_ids = {t.team_id for t in self.teams.list_for_employee(employee_id)} if self.teams else set()
        out = []
        for a in self.assignments:
            mine = (isinstance(a.assignee, Individual) and a.assignee.employee_id == employee_id) or (
                isinstance(a.assignee, Team) and a.assignee.team_id in team_ids
            )
            if not mine:
                continue
            if start is not None and a.last_date < start:
                continue
            if end is not None and a.start_date > end:
                continue
            out.append(a)
        return out


@dataclass
class Repos:
    patterns: InMemoryPatterns
    assignments: InMemoryAssignments
    teams: InMemoryTeams


@pytest.fixture
def repos() -> Repos:
    """A small project: person 1 works a 14h day, team 7 (people 2 and 3) works days."""

    patterns = InMemoryPatterns(
        {
            1: ShiftPattern(pattern_id=1, project_id=1, name="Day", start_time="09:00", end_time="17:00"),
            2: ShiftPattern(pattern_id=2, project_id=1, name="Long", start_time="06:00", end_time="20:00"),
            3: ShiftPattern(pattern_id=3, project_id=2, name="Late", start_time="14:00", end_time="23:00"),
        }
    )
    teams = InMemoryTeams([TeamRoster(team_id=7, project_id=1, name="Gang A", member_ids=(2, 3))])
    assignments = InMemoryAssignments(
        [
            Assignment(1, 1, 2, Individual(1), date(2026, 1, 5)),
            Assignment(2, 1, 1, Team(7), date(2026, 1, 5), date(2026, 1, 7)),
            Assignment(3, 2, 3, Individual(1), date(2026, 1, 8)),
        ],
        teams,
    )
    return Repos(patterns=patterns, assignments=assignments, teams=teams)
