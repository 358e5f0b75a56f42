from __future__ import annotations

from typing import Sequence

from ...common.datetime_utils import clock_to_hours
from ...patterns.model import FatigueParams
from ..model import FatigueResult, FatigueShift
from .base import FatigueCalculator
from .fatigue_index import (
    BASELINE_TASK_FACTOR,
    cumulative_fatigue_factors,
    duty_task_factor,
    three_process_estimation,
)
from .risk_index import cumulative_factors, job_breaks_component, timing_component


class HSEFatigueCalculator(FatigueCalculator):
    """HSE RR446 Fatigue/Risk Index (FRI) and Fatigue Index (FGI)."""

    def calculate(self, shifts: Sequence[FatigueShift], params: FatigueParams) -> list[FatigueResult]:
        if not shifts:
            return []

        base = params.merged_over(FatigueParams.defaults())
        order = sorted(range(len(shifts)), key=lambda i: (shifts[i].day, clock_to_hours(shifts[i].start_time)))
        ordered = [shifts[i] for i in order]
        resolved = [s.params.merged_over(base) for s in ordered]

        duties = [
            (s.day, clock_to_hours(s.start_time), clock_to_hours(s.end_time), p.total_commute)
            for s, p in zip(ordered, resolved)
        ]
        risk_cumulative = cumulative_factors(duties)
        fatigue_cumulative = cumulative_fatigue_factors(duties)

        results: list[FatigueResult] = [None] * len(shifts)  # type: ignore[list-item]
        for pos, (shift, p) in enumerate(zip(ordered, resolved)):
            results[order[pos]] = self._score(shift, p, risk_cumulative[pos], fatigue_cumulative[pos])
        return results

    def _score(self, shift: FatigueShift, p: FatigueParams, cumulative: float, fatigue_cumulative: float) -> FatigueResult:
        start_hour = clock_to_hours(shift.start_time)
        end_hour = clock_to_hours(shift.end_time)
        if end_hour <= start_hour:
            end_hour += 24
        length = end_hour - start_hour
        commute = p.total_commute

        timing = timing_component(start_hour, end_hour, commute)
        job_breaks = job_breaks_component(
            length,
            workload=p.workload,
            attention=p.attention,
            break_frequency=p.break_frequency,
            break_length=p.break_length,
            continuous_work=p.continuous_work,
            break_after_continuous=p.break_after_continuous,
        )
        risk_index = cumulative * timing * job_breaks

        task_factor = duty_task_factor(
            workload=p.workload,
            attention=p.attention,
            break_frequency=p.break_frequency,
            break_length=p.break_length,
            continuous_work=p.continuous_work,
            break_after_continuous=p.break_after_continuous,
        )
        p_task = three_process_estimation(start_hour, length, task_factor, commute)
        p_base = min(three_process_estimation(start_hour, length, BASELINE_TASK_FACTOR, commute), p_task)

        cumulative_fatigue = fatigue_cumulative * 100
        time_of_day = p_base * 100
        task = (p_task - p_base) * 100
        fatigue_index = 100 * (1 - (1 - cumulative_fatigue / 100) * (1 - time_of_day / 100 - task / 100))

        return FatigueResult(
            day=shift.day,
            start_time=shift.start_time,
            end_time=shift.end_time,
            duty_length=length,
            cumulative=round(cumulative, 3),
            timing=round(timing, 3),
            job_breaks=round(job_breaks, 3),
            risk_index=round(risk_index, 3),
            cumulative_fatigue=round(cumulative_fatigue, 1),
            time_of_day=round(time_of_day, 1),
            task=round(task, 1),
            fatigue_index=round(fatigue_index, 1),
            occurrence_ref=shift.ref,
        )
