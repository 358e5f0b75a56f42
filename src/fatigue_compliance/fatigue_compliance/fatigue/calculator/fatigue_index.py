"""Fatigue Index (FGI) components: probability of severe sleepiness, 0-100.

Three-process model (homeostatic, circadian, sleep inertia) plus a task
factor and a cumulative sleep-debt factor. Commute is measured against a
30-minute baseline.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

SLEEP_DECAY_RATE = 0.136934833451947
WAKE_DECAY_RATE = 0.686825862760272
BASELINE_PVT = 3.9
START_PVT = 3.87
PVT_SCALE = 4.44
ASYMPTOTE_FACTOR = 0.441596758431994

CIRCADIAN_AMPLITUDE = 0.74
CIRCADIAN_PHASE = 5.23
START_AMPLITUDE = 0.5
START_PHASE = 1.25

BASELINE_TASK_FACTOR = 0.14
COMMUTE_BASELINE_MINUTES = 30
STEP_HOURS = 0.25


def _kss8_probability(sleep_pressure: float) -> float:
    spcc = 1 + 6 / (1 + math.exp(3.057 - 0.764 * sleep_pressure))
    kss = -0.6 + 1.436 * spcc
    return 1.26 / (1 + 3670 * math.exp(-1.06 * kss))


def _combined_phase() -> tuple[float, float]:
    amplitude = math.sqrt(
        START_AMPLITUDE**2
        + CIRCADIAN_AMPLITUDE**2
        - START_AMPLITUDE * CIRCADIAN_AMPLITUDE * math.cos((START_PHASE - CIRCADIAN_PHASE) * math.pi / 12)
    )
    phase = (
        math.atan2(
            START_AMPLITUDE * math.sin(START_PHASE * math.pi / 12)
            - CIRCADIAN_AMPLITUDE * math.sin(CIRCADIAN_PHASE * math.pi / 12),
            START_AMPLITUDE * math.cos(START_PHASE * math.pi / 12)
            - CIRCADIAN_AMPLITUDE * math.cos(CIRCADIAN_PHASE * math.pi / 12),
        )
        * 12
        / math.pi
    )
    return amplitude, phase


def three_process_estimation(start_hour: float, length_hours: float, task_factor: float, commute_minutes: float) -> float:
    """Mean probability of KSS >= 8 over the duty, sampled every 15 minutes."""

    amplitude, phase = _combined_phase()
    wake_state = amplitude * math.cos((start_hour - phase) * math.pi / 12)
    commute_hours = (commute_minutes - COMMUTE_BASELINE_MINUTES) / 60

    steps = int(math.floor(length_hours / STEP_HOURS + 1e-9))
    hour = start_hour
    total = 0.0
    for k in range(steps + 1):
        on_duty = (k * STEP_HOURS + commute_hours) * task_factor
        circadian = CIRCADIAN_AMPLITUDE * math.cos((hour - CIRCADIAN_PHASE) * math.pi / 12)
        total += _kss8_probability(on_duty + wake_state + circadian + 2.45)
        hour = (hour + STEP_HOURS) % 24 or 24.0
    return total / (steps + 1)


def duty_task_factor(
    *,
    workload: int,
    attention: int,
    break_frequency: float,
    break_length: float,
    continuous_work: float,
    break_after_continuous: float,
) -> float:
    """Fatigue build-up rate from job demands and the break pattern."""

    effect = 0.125 + 0.015 * (workload + attention)
    continuous = (break_frequency + continuous_work) / 2
    rest = (break_length + break_after_continuous) / 2

    if continuous + rest == 0:
        effect *= 1.2
    else:
        effect = effect * 1.2 * continuous / (continuous + rest)

    five = 0.172731235 - 0.200918653 * 0.04 + 0.03552264 * 0.04 * 0.04
    fifteen = continuous * 0.000442
    thirty = 0.000206 - 0.0000138433 * continuous + 0.00000096491 * continuous * continuous

    if rest < 5:
        breaks = 0.174 + (five - 0.174) * rest / 5
    elif rest < 15:
        breaks = five + (fifteen - five) * (rest - 5) / 10
    elif rest < 30:
        breaks = fifteen + (thirty - fifteen) * (rest - 15) / 15
    elif rest < 60:
        breaks = thirty * (60 - rest) / 30
    else:
        breaks = 0.0
    return breaks + effect


def _sleep_loss(end_hr: float, gap: float) -> float:
    bed_time = 16.3 + 0.367 * end_hr if end_hr < 24.25 else end_hr + 1
    rk_fit = 8.13
    if end_hr >= 18.5:
        rk_fit = -2.28827436527851 + 11.7995318577367 / (
            1 + 0.472949055173571 * math.exp(-1.77393493516727 + 0.16244804759197 * (bed_time - 20))
        )
    aircrew_fit = min(8.0, 8 - 0.285 * (end_hr - 18.5))
    return max(min(8.0, 8.07 - (rk_fit + aircrew_fit) / 2), 9 - gap)


@dataclass
class _Duty:
    start_hr: float
    length: float
    night: int
    gap: float
    loss_first: float = 0.0
    loss_second: float = 0.0
    pvt3: float = 0.0
    pvt4: float = 0.0
    pvt_next: float = 0.0


@dataclass
class _Night:
    pvt: float
    pvt_next: float = 0.0


def _pvt_towards(previous: float, asymptote: float) -> float:
    rate = SLEEP_DECAY_RATE if previous > asymptote else WAKE_DECAY_RATE
    return asymptote + (previous - asymptote) * math.exp(-rate)


def cumulative_fatigue_factors(duties: Sequence[tuple[int, float, float, float]]) -> list[float]:
    """Sleep-debt factor (0-1) per duty.

    ``duties`` holds ``(day, start_hour, end_hour, commute_minutes)`` sorted by
    day then start; the end hour is raw clock time.
    """

    if not duties:
        return []

    first_day = duties[0][0]
    rows: list[_Duty] = []
    for i, (day, start_hour, end_hour, commute) in enumerate(duties):
        commute_hours = (commute - COMMUTE_BASELINE_MINUTES) / 60
        start_commute = start_hour - commute_hours
        length = end_hour - start_hour if end_hour > start_hour else 24 + end_hour - start_hour
        offset = day - first_day + 1
        night = offset if start_commute < 15 else offset + 1

        gap = 24.0
        if i < len(duties) - 1:
            next_day, next_start, _, next_commute = duties[i + 1]
            next_start_commute = next_start - (next_commute - COMMUTE_BASELINE_MINUTES) / 60
            gap = 24 * (next_day - day) + next_start_commute - start_commute - length

        rows.append(
            _Duty(
                start_hr=start_commute + (offset - night + 1) * 24,
                length=length,
                night=night,
                gap=gap,
            )
        )

    for row in rows:
        end_hr = row.start_hr + row.length
        loss2g = _sleep_loss(end_hr, row.gap)
        loss1 = 0.0
        if row.start_hr > 22.76:
            loss1 = (0.03501 * (37.5 - row.start_hr) + 0.01928) * (37.5 - row.start_hr)
        row.loss_first = loss2g if 15 <= row.start_hr <= 22.67 else min(loss1, loss2g)
        row.loss_second = _sleep_loss(end_hr - 24, row.gap)

    def first_loss(night: int, *, second: bool) -> float:
        for row in rows:
            if (row.night + 1 if second else row.night) == night:
                return row.loss_second if second else row.loss_first
        return 0.0

    nights: list[_Night] = []
    for night in range(1, max(r.night for r in rows) + 1):
        total_loss = min(8.0, first_loss(night, second=False) + first_loss(night, second=True))
        asymptote = BASELINE_PVT - total_loss * ASYMPTOTE_FACTOR
        previous = START_PVT if night == 1 else nights[-1].pvt
        nights.append(_Night(pvt=_pvt_towards(previous, asymptote)))

    for i in range(len(nights) - 1):
        nights[i].pvt_next = nights[i + 1].pvt

    def night_before(night: int) -> Optional[_Night]:
        return nights[night - 2] if 2 <= night <= len(nights) + 1 else None

    for i, row in enumerate(rows):
        before = night_before(row.night)
        cum_pvt = BASELINE_PVT if i == 0 or before is None or not before.pvt else before.pvt
        pvt_next = before.pvt_next if before is not None else 0.0

        pvt2 = cum_pvt
        if 27 < row.start_hr < 39:
            pvt2 = cum_pvt + (pvt_next - cum_pvt) * 0.5 * (1 + math.sin(math.pi * (row.start_hr - 33) / 12))

        row.pvt3 = 0.0 if pvt_next == 0 and cum_pvt == 0 else pvt2 * PVT_SCALE / BASELINE_PVT
        row.pvt4 = row.pvt3
        row.pvt_next = pvt_next

    for i in range(len(rows) - 2, -1, -1):
        if rows[i].pvt3 == 0:
            rows[i].pvt4 = rows[i + 1].pvt4

    factors: list[float] = []
    for i, row in enumerate(rows):
        weight = 1.0
        if i > 0:
            prev_gap = rows[i - 1].gap
            weight = 1.0 if prev_gap > 9 else 0.0 if prev_gap < 1 else (prev_gap - 1) / 8

        pvt_out = weight * row.pvt4 + (1 - weight) * row.pvt_next if row.pvt_next > 0 else row.pvt4
        headroom = max(1.001 - pvt_out / PVT_SCALE, 1e-9)
        sleep_pressure = max(math.log(headroom / 0.00189) / 0.801, 1.0)
        factors.append(_kss8_probability(sleep_pressure) / 3)
    return factors
