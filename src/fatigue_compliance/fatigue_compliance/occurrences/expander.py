from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..assignments.model import Assignment, Individual, Team
from ..common.datetime_utils import hours_between, is_night, iter_days, shift_bounds
from ..core.enums import Weekday
from ..patterns.model import FatigueParams, ShiftPattern
from .model import Occurrence

logger = logging.getLogger(__name__)

Roster = Mapping[int, Sequence[int]]


@dataclass(frozen=True)
class ResolvedTimes:
    start: str
    end: str
    day_fatigue: FatigueParams


class OccurrenceExpander:
    """Turn assignments into dated, timed occurrences (one per person per day).

    Unknown patterns, unknown teams and inactive weekdays produce nothing.
    """

    def __init__(self, *, system_defaults: Optional[FatigueParams] = None):
        self._defaults = system_defaults or FatigueParams.defaults()

    def expand(
        self,
        assignments: Iterable[Assignment],
        patterns: Iterable[ShiftPattern],
        roster: Optional[Roster] = None,
    ) -> list[Occurrence]:
        catalog = {p.pattern_id: p for p in patterns}
        roster = roster or {}

        out: list[Occurrence] = []
        seen: set[tuple[int, int, date]] = set()

        for a in assignments:
            pattern = catalog.get(a.pattern_id)
            if pattern is None:
                logger.debug("Skipping assignment %s: pattern %s not found", a.assignment_id, a.pattern_id)
                continue

            people = self._people_for(a, roster)
            if not people:
                continue

            for day in iter_days(a.start_date, a.last_date):
                times = self.resolve_times(a, pattern, day)
                if times is None:
                    continue

                start_dt, end_dt = shift_bounds(day, times.start, times.end)
                fatigue = a.fatigue_overrides.merged_over(
                    times.day_fatigue.merged_over(pattern.fatigue.merged_over(self._defaults))
                )
                for person_id in people:
                    key = (a.assignment_id, person_id, day)
                    if key in seen:
                        continue
                    seen.add(key)
                    out.append(
                        Occurrence(
                            person_id=person_id,
                            date=day,
                            start=start_dt,
                            end=end_dt,
                            duration_hours=hours_between(start_dt, end_dt),
                            assignment_id=a.assignment_id,
                            pattern_id=pattern.pattern_id,
                            project_id=a.project_id,
                            is_night=is_night(start_dt, end_dt),
                            duty_type=pattern.duty_type,
                            fatigue=fatigue,
                        )
                    )

        return out

    def resolve_times(self, assignment: Assignment, pattern: ShiftPattern, day: date) -> Optional[ResolvedTimes]:
        """Custom override > weekly schedule entry > pattern default."""

        entry = pattern.schedule_for(Weekday.from_date(day))
        day_fatigue = entry.fatigue if entry is not None else FatigueParams()

        if assignment.has_custom_times:
            start, end = assignment.custom_start_time, assignment.custom_end_time
        elif pattern.has_weekly_schedule:
            if entry is None:
                return None
            start, end = entry.start_time, entry.end_time
        else:
            start, end = pattern.start_time, pattern.end_time

        if not start or not end:
            return None
        return ResolvedTimes(start=start, end=end, day_fatigue=day_fatigue)

    @staticmethod
    def _people_for(assignment: Assignment, roster: Roster) -> tuple[int, ...]:
        assignee = assignment.assignee
        if isinstance(assignee, Individual):
            return (assignee.employee_id,)
        if isinstance(assignee, Team):
            members = roster.get(assignee.team_id)
            if members is None:
                logger.debug("Skipping assignment %s: team %s has no roster", assignment.assignment_id, assignee.team_id)
                return ()
            return tuple(dict.fromkeys(members))
        raise TypeError(f"Unsupported assignee: {assignee!r}")


def occurrences_for_person(occurrences: Iterable[Occurrence], person_id: int) -> list[Occurrence]:
    """One person's occurrences ordered by start time."""

    mine = [o for o in occurrences if o.person_id == person_id]
    mine.sort(key=lambda o: o.sort_key)
    return mine


def group_by_person(occurrences: Iterable[Occurrence]) -> dict[int, list[Occurrence]]:
    grouped: dict[int, list[Occurrence]] = {}
    for o in occurrences:
        grouped.setdefault(o.person_id, []).append(o)
    for items in grouped.values():
        items.sort(key=lambda o: o.sort_key)
    return dict(sorted(grouped.items()))
