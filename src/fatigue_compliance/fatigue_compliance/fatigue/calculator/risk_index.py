"""Fatigue/Risk Index components from HSE Research Report RR446.

Hours are decimal clock hours; an end hour past midnight is expressed as
``end + 24``. Commute is measured against a 40-minute baseline.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

# Duration risk curve (RR446 table 4.1).
P1 = -0.4287
P2 = 0.1501
P3 = 0.129
P4 = 0.0359
P5 = -0.8012
P6 = 0.7315

# Reaction-time build-up during continuous work.
RT_ASYMPTOTE = 1.826297414
RT_RATE = 1.146457295

TIMING_NORM = 1.288
TIMING_ADJ = 0.997976
TASK_NORM = 1.032
TASK_ADJ = 1.0286182
CUMULATIVE_NORM = 1.113
CUMULATIVE_ADJ = 0.98899

COMMUTE_BASELINE_MINUTES = 40


def duty_length(start_hour: float, end_hour: float) -> float:
    return end_hour - start_hour if end_hour > start_hour else 24 + end_hour - start_hour


def _length_risk(hours: float) -> float:
    if hours < 4.25:
        return 1 + P4 + P5 * math.exp(-P6 * hours)
    if hours > 8.13:
        return 1 + P1 + P2 * math.exp(P3 * hours)
    return 1.0


def timing_component(start_hour: float, end_hour: float, commute_minutes: float) -> float:
    """Time-of-day and duration risk over the door-to-door span."""

    length = duty_length(start_hour, end_hour)
    commute_hours = (commute_minutes - COMMUTE_BASELINE_MINUTES) / 60
    adj_start = start_hour - commute_hours
    adj_length = length + commute_hours
    if adj_length <= 0:
        # Very short duty with no commute: score the duty alone.
        commute_hours, adj_start, adj_length = 0.0, start_hour, length

    tod_risk = 1.0106 + 0.1057 * (
        math.sin(math.pi * end_hour / 12) - math.sin(math.pi * adj_start / 12)
    ) / (adj_length * math.pi / 12)
    shift_risk = _length_risk(adj_length)

    if commute_hours <= 0:
        return tod_risk * shift_risk / TIMING_NORM * TIMING_ADJ

    # Commuting is not work: remove its share of the duration risk.
    shift_risk = (shift_risk * adj_length - _length_risk(commute_hours) * commute_hours) / length
    return tod_risk * shift_risk / TIMING_NORM * TIMING_ADJ


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def job_breaks_component(
    length_hours: float,
    *,
    workload: int,
    attention: int,
    break_frequency: float,
    break_length: float,
    continuous_work: float,
    break_after_continuous: float,
) -> float:
    """Task demand and break recovery."""

    avg_continuous = (break_frequency + continuous_work) / 2
    avg_break = (break_length + break_after_continuous) / 2

    block = avg_continuous + avg_break
    sequences = 1 if block <= 0 else max(1, 1 + math.floor(length_hours * 60 / block - 0.01))
    sequence_length = max(1, _round_half_up(avg_continuous / 15))

    decay = math.exp(-0.395 * (avg_break - 13.3))
    break_effect = 0.24 * decay / 0.2388 / (1 + decay)

    iterations = sequences * sequence_length
    position = -1
    rr = 1.0
    rr_total = 0.0
    for _ in range(iterations + 1):
        position = position + 1 if position < sequence_length else 0
        if position == 0:
            rr = 1 + (rr - 1) * break_effect
        else:
            rr = RT_ASYMPTOTE + (rr - RT_ASYMPTOTE) * math.exp(-0.25 * RT_RATE)
        rr_total += rr

    risk = rr_total / (iterations + 1) / 1.4858
    risk += (workload + attention - 3) * 0.0232
    return risk / TASK_NORM / TASK_ADJ


@dataclass
class _CumulativeDuty:
    day: int
    start_commute: float
    end_commute: float
    length: float
    gap: float
    circadian: float = 0.0
    risk: float = 1.0


def cumulative_factors(duties: Sequence[tuple[int, float, float, float]]) -> list[float]:
    """Cumulative risk per duty.

    ``duties`` holds ``(day, start_hour, end_hour, commute_minutes)`` already
    sorted by day then start; the end hour is raw clock time.
    """

    rows: list[_CumulativeDuty] = []
    for i, (day, start_hour, end_hour, commute) in enumerate(duties):
        if end_hour <= start_hour:
            end_hour += 24
        commute_hours = (commute - COMMUTE_BASELINE_MINUTES) / 60
        start_commute = start_hour - commute_hours
        length = end_hour - start_hour

        gap = 24.0
        if i < len(duties) - 1:
            next_day, next_start, _, _ = duties[i + 1]
            gap = 24 * (next_day - day) + (next_start - commute_hours) - start_commute - length

        rows.append(
            _CumulativeDuty(
                day=day,
                start_commute=start_commute,
                end_commute=end_hour + commute_hours,
                length=length,
                gap=gap,
            )
        )

    for i, row in enumerate(rows):
        row.circadian = 0.0886 + 0.0359 * math.cos(math.pi * (row.start_commute + 0.5 * row.length) / 12)
        if i == 0:
            row.risk = 1.0
            continue

        prev = rows[i - 1]
        prev_gap = prev.gap

        en1 = prev.end_commute - 23 if prev.end_commute + 1 >= 24 else prev.end_commute + 1
        st1 = row.start_commute - 23 if row.start_commute + 1 >= 24 else row.start_commute + 1
        end_sleep = 8 - en1 if en1 < 8 else 0
        start_sleep = st1 if st1 < 8 else 0

        nights = math.floor(prev_gap / 24) + (end_sleep + start_sleep) / 8
        if end_sleep > 0 and start_sleep > 0 and st1 >= en1:
            nights -= 2

        if prev_gap < 9:
            row.risk = prev.risk + 0.06 * (9 - prev_gap)
        elif prev_gap > 24:
            row.risk = 1 + (prev.risk - 1) * math.exp(-1.118 * (nights - 1))
        else:
            row.risk = prev.risk + 0.5 * (row.circadian + prev.circadian)

    return [r.risk / CUMULATIVE_NORM * CUMULATIVE_ADJ for r in rows]
