from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...patterns.model import FatigueParams
from ..model import FatigueResult, FatigueShift


class FatigueCalculator(ABC):
    """Scores a sequence of one person's shifts.

    Results come back in input order, one per shift.
    """

    @abstractmethod
    def calculate(self, shifts: Sequence[FatigueShift], params: FatigueParams) -> list[FatigueResult]:
        raise NotImplementedError
