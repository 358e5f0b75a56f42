from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence


@dataclass(frozen=True)
class TeamRoster:
    team_id: int
    project_id: int
    name: str
    member_ids: tuple[int, ...] = ()


def roster_map(teams: Sequence[TeamRoster]) -> Mapping[int, tuple[int, ...]]:
    """Team id -> member employee ids, the shape the expander consumes."""

    return {t.team_id: t.member_ids for t in teams}
