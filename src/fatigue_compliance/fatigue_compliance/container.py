from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .compliance.engine import ComplianceEngine
from .compliance.evaluator import ComplianceEvaluator
from .compliance.factory import ComplianceRuleFactory
from .compliance.limits import ComplianceLimits
from .compliance.service import ComplianceService
from .core.constants import DEFAULT_CACHE_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .fatigue.calculator.hse_calculator import HSEFatigueCalculator
from .fatigue.service import FatigueService
from .occurrences.expander import OccurrenceExpander
from .patterns.mysql_pattern_repository import MySQLPatternRepository
from .teams.mysql_team_repository import MySQLTeamRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    patterns_repo: MySQLPatternRepository
    assignments_repo: MySQLAssignmentRepository
    teams_repo: MySQLTeamRepository

    limits: ComplianceLimits
    engine: ComplianceEngine
    fatigue_service: FatigueService
    compliance_service: ComplianceService


def build_container(
    *,
    db_config: Mapping[str, Any],
    compliance: Optional[Mapping[str, Any]] = None,
    cache_size: int = DEFAULT_CACHE_SIZE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    patterns_repo = MySQLPatternRepository(conn)
    assignments_repo = MySQLAssignmentRepository(conn)
    teams_repo = MySQLTeamRepository(conn)

    limits = ComplianceLimits.from_mapping(compliance)
    fatigue_service = FatigueService(calculator=HSEFatigueCalculator())
    engine = ComplianceEngine(
        expander=OccurrenceExpander(),
        evaluator=ComplianceEvaluator(limits=limits, rule_factory=ComplianceRuleFactory()),
        fatigue=fatigue_service,
        cache_size=cache_size,
    )
    compliance_service = ComplianceService(assignments_repo, patterns_repo, teams_repo, engine=engine)

    return Container(
        conn=conn,
        patterns_repo=patterns_repo,
        assignments_repo=assignments_repo,
        teams_repo=teams_repo,
        limits=limits,
        engine=engine,
        fatigue_service=fatigue_service,
        compliance_service=compliance_service,
    )
