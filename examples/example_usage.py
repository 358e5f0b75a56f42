"""Example: evaluate a roster with the engine directly (no Flask, no database).

Controllers and repositories are thin; all rules live in the engine.
"""

from datetime import date

from fatigue_compliance.assignments.model import Assignment, Individual, Team
from fatigue_compliance.compliance.engine import ComplianceEngine
from fatigue_compliance.core.enums import DutyType
from fatigue_compliance.patterns.model import FatigueParams, ShiftPattern


def main():
    patterns = [
        ShiftPattern(1, 1, "Day 07-19", "07:00", "19:00", duty_type=DutyType.NON_POSSESSION),
        ShiftPattern(
            2,
            1,
            "Night 22-06",
            "22:00",
            "06:00",
            duty_type=DutyType.POSSESSION,
            fatigue=FatigueParams.from_commute_total(90, workload=2, attention=2),
        ),
    ]
    assignments = [
        Assignment(1, 1, 1, Individual(1), date(2026, 1, 5), date(2026, 1, 10)),
        Assignment(2, 1, 2, Team(7), date(2026, 1, 5), date(2026, 1, 9)),
    ]
    roster = {7: [2, 3]}

    engine = ComplianceEngine()
    project = engine.evaluate_project(1, assignments, patterns, roster)
    print(f"compliant={project.is_compliant} errors={project.error_count} warnings={project.warning_count}")
    for person_id, evaluation in project.people.items():
        print(f"person {person_id}: {evaluation.status.value} ({evaluation.total_hours:.1f}h)")
        for v in evaluation.violations:
            print(f"  {v.date} {v.kind.value}/{v.severity.value}: {v.message}")


if __name__ == "__main__":
    main()
