from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import TeamRoster
from .repository import TeamRepository


def _group(rows: List[Dict[str, Any]]) -> List[TeamRoster]:
    teams: Dict[int, Dict[str, Any]] = {}
    for r in rows:
        t = teams.setdefault(
            int(r["team_id"]),
            {"project_id": int(r["project_id"]), "name": r["name"], "members": []},
        )
        if r.get("employee_id") is not None:
            t["members"].append(int(r["employee_id"]))

    return [
        TeamRoster(team_id=team_id, project_id=t["project_id"], name=t["name"], member_ids=tuple(sorted(t["members"])))
        for team_id, t in teams.items()
    ]


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_project(self, project_id: int) -> Sequence[TeamRoster]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.team_id, t.project_id, t.name, m.employee_id
                FROM teams t
                LEFT JOIN team_members m ON m.team_id = t.team_id
                WHERE t.project_id=%s
                ORDER BY t.team_id, m.employee_id
                """,
                (int(project_id),),
            )
            return _group(fetchall(cur))

    def list_for_employee(self, employee_id: int) -> Sequence[TeamRoster]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.team_id, t.project_id, t.name, m.employee_id
                FROM teams t
                JOIN team_members m ON m.team_id = t.team_id
                WHERE t.team_id IN (SELECT team_id FROM team_members WHERE employee_id=%s)
                ORDER BY t.team_id, m.employee_id
                """,
                (int(employee_id),),
            )
            return _group(fetchall(cur))
