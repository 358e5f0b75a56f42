from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator

from ..core.constants import NIGHT_END_HOUR, NIGHT_START_HOUR

MINUTES_PER_DAY = 24 * 60


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock(value: str) -> int:
    """Minutes after midnight for an ``HH:MM`` (or ``HH:MM:SS``) clock string.

    ``"24:00"`` is accepted and maps to 1440 so it can close a day.
    Format is assumed valid; see ``validators.require_clock``.
    """

    parts = value.strip().split(":")
    return int(parts[0]) * 60 + int(parts[1])


def clock_to_hours(value: str) -> float:
    return parse_clock(value) / 60.0


def format_clock(value: time) -> str:
    return value.strftime("%H:%M")


def shift_duration_hours(start: str, end: str) -> float:
    """Duration of a clock-time shift, wrapping past midnight when end <= start."""

    start_min = parse_clock(start)
    end_min = parse_clock(end)
    if end_min <= start_min:
        end_min += MINUTES_PER_DAY
    return (end_min - start_min) / 60.0


def shift_bounds(day: date, start: str, end: str) -> tuple[datetime, datetime]:
    """Absolute start/end datetimes for a shift worked on ``day``."""

    start_min = parse_clock(start)
    end_min = parse_clock(end)
    midnight = datetime.combine(day, time.min)
    start_dt = midnight + timedelta(minutes=start_min)
    if end_min <= start_min:
        end_min += MINUTES_PER_DAY
    end_dt = midnight + timedelta(minutes=end_min)
    return start_dt, end_dt


def is_night(start: datetime, end: datetime) -> bool:
    """True when any part of [start, end) falls inside a 23:00-06:00 window.

    This is an overlap test, not a check of the start and end hours alone.
    A 05:00-13:00 early counts as a night, and so does a 19:00-07:00 long
    night, which neither starts after 23:00 nor ends by 06:00.
    """

    first = datetime.combine(start.date() - timedelta(days=1), time(hour=NIGHT_START_HOUR))
    night_length = timedelta(hours=24 - NIGHT_START_HOUR + NIGHT_END_HOUR)
    window_start = first
    while window_start < end:
        window_end = window_start + night_length
        if start < window_end and window_start < end:
            return True
        window_start += timedelta(days=1)
    return False


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each calendar day from start to end inclusive."""

    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def hours_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / 3600.0
