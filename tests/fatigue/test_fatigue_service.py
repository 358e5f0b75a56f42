from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from fatigue_compliance.fatigue.calculator.base import FatigueCalculator
from fatigue_compliance.fatigue.model import FatigueResult, FatigueShift
from fatigue_compliance.fatigue.service import FatigueService, shifts_from_occurrences
from fatigue_compliance.patterns.model import FatigueParams


@dataclass
class RecordingCalculator(FatigueCalculator):
    calls: list = field(default_factory=list)

    def calculate(self, shifts, params):
        self.calls.append((list(shifts), params))
        return [
            FatigueResult(
                day=s.day,
                start_time=s.start_time,
                end_time=s.end_time,
                duty_length=8.0,
                cumulative=1.0,
                timing=1.0,
                job_breaks=1.0,
                risk_index=1.0 + s.day / 10,
                cumulative_fatigue=0.0,
                time_of_day=10.0,
                task=0.0,
                fatigue_index=10.0 * s.day,
                occurrence_ref=s.ref,
            )
            for s in shifts
        ]


def test_shifts_number_days_from_first_occurrence(make_occurrence):
    occ = [
        make_occurrence(datetime(2026, 1, 30, 22, 0), 8.0),
        make_occurrence(datetime(2026, 2, 2, 6, 0), 12.0),
    ]

    shifts = shifts_from_occurrences(occ)

    assert [(s.day, s.start_time, s.end_time) for s in shifts] == [(1, "22:00", "06:00"), (4, "06:00", "18:00")]
    assert shifts[0].ref.date == date(2026, 1, 30)


def test_service_fills_params_from_defaults_and_summarizes():
    calc = RecordingCalculator()
    service = FatigueService(calculator=calc)
    shifts = [FatigueShift(day=1, start_time="08:00", end_time="16:00"), FatigueShift(day=2, start_time="08:00", end_time="16:00")]

    report = service.compute_fatigue_results(shifts, FatigueParams(workload=4))

    (_, params), = calc.calls
    assert params.workload == 4
    assert params.is_complete
    assert report.summary.max_fri == 1.2
    assert report.summary.critical_shifts == 1
    assert report.summary.elevated_shifts == 1
    assert report.summary.max_fgi == 20.0


def test_for_occurrences_keeps_references(make_occurrence):
    service = FatigueService(calculator=RecordingCalculator())
    occ = [make_occurrence(datetime(2026, 1, 5, 8, 0), 8.0)]

    (result,) = service.for_occurrences(occ).results

    assert result.occurrence_ref == occ[0].ref
