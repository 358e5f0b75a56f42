"""Trailing-window aggregates aligned to a person's ordered occurrences.

Each value at index ``i`` only looks at occurrences ``0..i`` so the series is
evaluated as of every occurrence's own start time.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import timedelta
from typing import Sequence

from ..core.constants import CONSECUTIVE_DAYS_WINDOW, ROLLING_WINDOW_DAYS
from ..occurrences.model import Occurrence


def rolling_hours(occurrences: Sequence[Occurrence], days: int = ROLLING_WINDOW_DAYS) -> list[float]:
    """Worked hours with start in ``[start_i - (days - 1) days, start_i]``."""

    span = timedelta(days=days - 1)
    out: list[float] = []
    left = 0
    for i, occ in enumerate(occurrences):
        window_start = occ.start - span
        while occurrences[left].start < window_start:
            left += 1
        out.append(math.fsum(o.duration_hours for o in occurrences[left : i + 1]))
    return out


def rolling_distinct_days(occurrences: Sequence[Occurrence], days: int = CONSECUTIVE_DAYS_WINDOW) -> list[int]:
    """Distinct worked calendar dates in ``[date_i - (days - 1), date_i]``."""

    span = timedelta(days=days - 1)
    out: list[int] = []
    counts: Counter = Counter()
    left = 0
    for occ in occurrences:
        counts[occ.date] += 1
        window_start = occ.date - span
        while occurrences[left].date < window_start:
            stale = occurrences[left].date
            counts[stale] -= 1
            if counts[stale] == 0:
                del counts[stale]
            left += 1
        out.append(len(counts))
    return out
