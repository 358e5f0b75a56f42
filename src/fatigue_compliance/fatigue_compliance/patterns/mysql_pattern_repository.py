from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..core.enums import DutyType, Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fatigue_from_row,
    fetchall,
    fetchone,
    in_clause,
    normalize_mysql_clock,
)
from .model import DaySchedule, ShiftPattern
from .repository import PatternRepository

_PATTERN_COLUMNS = """
    pattern_id, project_id, name, start_time, end_time, duty_type, is_night,
    commute_in, commute_out, workload, attention, break_frequency, break_length,
    continuous_work, break_after_continuous
"""


class MySQLPatternRepository(PatternRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, pattern_id: int) -> Optional[ShiftPattern]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PATTERN_COLUMNS} FROM shift_patterns WHERE pattern_id=%s", (int(pattern_id),))
            r = fetchone(cur)
            if not r:
                return None
            return self._build([r], cur)[0]

    def list_for_project(self, project_id: int) -> Sequence[ShiftPattern]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_PATTERN_COLUMNS} FROM shift_patterns WHERE project_id=%s ORDER BY pattern_id",
                (int(project_id),),
            )
            return self._build(fetchall(cur), cur)

    def list_all(self) -> Sequence[ShiftPattern]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PATTERN_COLUMNS} FROM shift_patterns ORDER BY pattern_id")
            return self._build(fetchall(cur), cur)

    def _build(self, rows: List[Dict[str, Any]], cur) -> List[ShiftPattern]:
        if not rows:
            return []

        ids = [int(r["pattern_id"]) for r in rows]
        cur.execute(
            f"""
            SELECT pattern_id, weekday, enabled, start_time, end_time,
                   commute_in, commute_out, workload, attention, break_frequency, break_length
            FROM shift_pattern_days
            WHERE pattern_id IN ({in_clause(ids)})
            """,
            tuple(ids),
        )
        days: Dict[int, Dict[Weekday, DaySchedule]] = {}
        for d in fetchall(cur):
            days.setdefault(int(d["pattern_id"]), {})[Weekday(d["weekday"])] = DaySchedule(
                enabled=bool(d["enabled"]),
                start_time=normalize_mysql_clock(d["start_time"]),
                end_time=normalize_mysql_clock(d["end_time"]),
                fatigue=fatigue_from_row(d),
            )

        return [
            ShiftPattern(
                pattern_id=int(r["pattern_id"]),
                project_id=int(r["project_id"]),
                name=r["name"],
                start_time=normalize_mysql_clock(r["start_time"]),
                end_time=normalize_mysql_clock(r["end_time"]),
                weekly_schedule=days.get(int(r["pattern_id"])),
                duty_type=DutyType(r.get("duty_type") or DutyType.OTHER.value),
                is_night=bool(r.get("is_night")),
                fatigue=fatigue_from_row(r),
            )
            for r in rows
        ]
