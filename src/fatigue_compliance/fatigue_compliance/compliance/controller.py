from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.validators import require_clock, require_date, require_object
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .model import PersonEvaluation

logger = logging.getLogger(__name__)


def _person_payload(evaluation: PersonEvaluation) -> dict:
    return {
        "person_id": evaluation.person_id,
        "status": evaluation.status.value,
        "total_hours": round(evaluation.total_hours, 2),
        "violations": [v.to_dict() for v in evaluation.violations],
    }


def register(app: Flask, container: Container) -> None:
    def _error(e: Exception, status: int):
        return jsonify({"success": False, "message": str(e)}), status

    def _internal(action: str):
        return jsonify({"success": False, "message": f"Internal error while {action}"}), 500

    @app.route("/api/projects/<int:project_id>/compliance", methods=["GET"], endpoint="project_compliance")
    def project_compliance(project_id: int):
        try:
            evaluation = container.compliance_service.evaluate_project(project_id)
        except ValidationError as e:
            return _error(e, 400)
        except Exception:
            logger.exception("Project %s evaluation failed", project_id)
            return _internal("evaluating project")

        return jsonify({
            "success": True,
            "project_id": evaluation.project_id,
            "is_compliant": evaluation.is_compliant,
            "error_count": evaluation.error_count,
            "warning_count": evaluation.warning_count,
            "violations": [v.to_dict() for v in evaluation.violations],
            "people": [
                {"person_id": p.person_id, "status": p.status.value, "total_hours": round(p.total_hours, 2)}
                for p in evaluation.people.values()
            ],
        }), 200

    @app.route("/api/projects/<int:project_id>/summary", methods=["GET"], endpoint="project_summary")
    def project_summary(project_id: int):
        try:
            summary = container.compliance_service.summarize_project(project_id)
        except ValidationError as e:
            return _error(e, 400)
        except Exception:
            logger.exception("Project %s summary failed", project_id)
            return _internal("summarizing project")

        return jsonify({
            "success": True,
            "project_id": summary.project_id,
            "total_hours": round(summary.total_hours, 2),
            "people_count": summary.people_count,
            "hours_by_pattern": {str(k): round(v, 2) for k, v in summary.hours_by_pattern.items()},
        }), 200

    @app.route("/api/people/<int:person_id>/compliance", methods=["GET"], endpoint="person_compliance")
    def person_compliance(person_id: int):
        try:
            evaluation = container.compliance_service.evaluate_person(
                person_id, project_id=request.args.get("project_id") or None
            )
        except ValidationError as e:
            return _error(e, 400)
        except Exception:
            logger.exception("Person %s evaluation failed", person_id)
            return _internal("evaluating person")

        return jsonify({"success": True, **_person_payload(evaluation)}), 200

    @app.route("/api/people/<int:person_id>/cells/<day>", methods=["GET"], endpoint="person_cell")
    def person_cell(person_id: int, day: str):
        try:
            cell = container.compliance_service.cell(person_id, require_date(day, "day"))
        except ValidationError as e:
            return _error(e, 400)
        except Exception:
            logger.exception("Cell lookup failed for person %s on %s", person_id, day)
            return _internal("reading cell")

        worst = cell.worst_today
        return jsonify({
            "success": True,
            "person_id": person_id,
            "date": day,
            "severity": worst.value if worst else None,
            "has_upcoming": cell.has_upcoming,
            "violations": [v.to_dict() for v in cell.today],
            "upcoming": [v.to_dict() for v in cell.later],
        }), 200

    @app.route("/api/assignments/validate", methods=["POST"], endpoint="validate_assignment")
    def validate_assignment():
        try:
            data = require_object(request.get_json(silent=True), "body")
            custom_start = data.get("custom_start_time")
            custom_end = data.get("custom_end_time")
            violations = container.compliance_service.validate_new_assignment(
                person_id=data.get("person_id"),
                project_id=data.get("project_id"),
                pattern_id=data.get("pattern_id"),
                day=require_date(data.get("date"), "date"),
                custom_start_time=require_clock(custom_start, "custom_start_time") if custom_start else None,
                custom_end_time=require_clock(custom_end, "custom_end_time") if custom_end else None,
            )
        except ValidationError as e:
            return _error(e, 400)
        except NotFoundError as e:
            return _error(e, 404)
        except Exception:
            logger.exception("Assignment validation failed")
            return _internal("validating assignment")

        return jsonify({
            "success": True,
            "allowed": not any(v.severity.is_error for v in violations),
            "violations": [v.to_dict() for v in violations],
        }), 200
