from __future__ import annotations

from typing import Protocol, Sequence

from .model import TeamRoster


class TeamRepository(Protocol):
    def list_for_project(self, project_id: int) -> Sequence[TeamRoster]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[TeamRoster]:
        raise NotImplementedError
