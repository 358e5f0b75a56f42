from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fatigue_from_row, fetchall, normalize_mysql_clock
from .model import Assignee, Assignment, Individual, Team
from .repository import AssignmentRepository

_SELECT = """
    SELECT a.assignment_id, a.project_id, a.pattern_id, a.employee_id, a.team_id,
           a.start_date, a.end_date, a.custom_start_time, a.custom_end_time,
           a.commute_in, a.commute_out, a.workload, a.attention, a.break_frequency,
           a.break_length, a.continuous_work, a.break_after_continuous, a.notes
    FROM assignments a
"""


def _row_to_assignment(r: Dict[str, Any]) -> Assignment:
    assignee: Assignee
    if r.get("team_id") is not None:
        assignee = Team(team_id=int(r["team_id"]))
    else:
        assignee = Individual(employee_id=int(r["employee_id"]))

    return Assignment(
        assignment_id=int(r["assignment_id"]),
        project_id=int(r["project_id"]),
        pattern_id=int(r["pattern_id"]),
        assignee=assignee,
        start_date=r["start_date"],
        end_date=r.get("end_date"),
        custom_start_time=normalize_mysql_clock(r.get("custom_start_time")),
        custom_end_time=normalize_mysql_clock(r.get("custom_end_time")),
        fatigue_overrides=fatigue_from_row(r),
        notes=r.get("notes"),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_project(self, project_id: int) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.project_id=%s ORDER BY a.start_date, a.assignment_id",
                (int(project_id),),
            )
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Assignment]:
        where = [
            "(a.employee_id=%s OR a.team_id IN (SELECT team_id FROM team_members WHERE employee_id=%s))"
        ]
        params: list = [int(employee_id), int(employee_id)]
        if start:
            where.append("COALESCE(a.end_date, a.start_date) >= %s")
            params.append(start)
        if end:
            where.append("a.start_date <= %s")
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE " + " AND ".join(where) + " ORDER BY a.start_date, a.assignment_id",
                tuple(params),
            )
            return [_row_to_assignment(r) for r in fetchall(cur)]
