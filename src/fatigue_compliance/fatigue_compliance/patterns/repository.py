from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ShiftPattern


class PatternRepository(Protocol):
    def get_by_id(self, pattern_id: int) -> Optional[ShiftPattern]:
        raise NotImplementedError

    def list_for_project(self, project_id: int) -> Sequence[ShiftPattern]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ShiftPattern]:
        """All patterns across projects (a person can work on several)."""

        raise NotImplementedError
