from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Assignment


class AssignmentRepository(Protocol):
    def list_for_project(self, project_id: int) -> Sequence[Assignment]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Assignment]:
        """Assignments that can produce occurrences for the employee.

        Includes team assignments of every team the employee belongs to.
        """

        raise NotImplementedError
