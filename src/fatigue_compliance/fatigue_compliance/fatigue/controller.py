from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request

from ..common.validators import require_clock, require_id, require_list, require_object, require_rating
from ..core.exceptions import ValidationError
from ..container import Container
from ..patterns.model import FatigueParams
from .model import FatigueReport, FatigueShift
from .service import summarize

logger = logging.getLogger(__name__)

_RATINGS = ("workload", "attention")
_MINUTES = ("commute_in", "commute_out", "break_frequency", "break_length", "continuous_work", "break_after_continuous")


def _minutes(value: Any, field_name: str) -> int:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number of minutes") from None
    if minutes < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return minutes


def params_from_json(data: Optional[Mapping[str, Any]]) -> FatigueParams:
    """Read fatigue params; a bare ``commute_time`` splits into in/out halves."""

    data = require_object(data, "params")
    values: dict[str, Any] = {}
    for name in _RATINGS:
        if data.get(name) is not None:
            values[name] = require_rating(data[name], name)
    for name in _MINUTES:
        if data.get(name) is not None:
            values[name] = _minutes(data[name], name)

    total = data.get("commute_time")
    if total is not None and "commute_in" not in values and "commute_out" not in values:
        return FatigueParams.from_commute_total(_minutes(total, "commute_time"), **values)
    return FatigueParams(**values)


def _shift_from_json(data: Mapping[str, Any]) -> FatigueShift:
    return FatigueShift(
        day=require_id(data.get("day"), "day"),
        start_time=require_clock(data.get("start_time"), "start_time"),
        end_time=require_clock(data.get("end_time"), "end_time"),
        params=params_from_json(data),
    )


def _report_payload(report: FatigueReport) -> dict:
    return {
        "success": True,
        "results": [r.to_dict() for r in report.results],
        "summary": report.summary.to_dict(),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/fatigue/calculate", methods=["POST"], endpoint="fatigue_calculate")
    def fatigue_calculate():
        try:
            data = require_object(request.get_json(silent=True), "body")
            shifts = [
                _shift_from_json(require_object(s, "shift")) for s in require_list(data.get("shifts"), "shifts")
            ]
            if not shifts:
                raise ValidationError("shifts must not be empty")
            report = container.fatigue_service.compute_fatigue_results(shifts, params_from_json(data.get("params")))
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Fatigue calculation failed")
            return jsonify({"success": False, "message": "Internal error while calculating fatigue"}), 500

        return jsonify(_report_payload(report)), 200

    @app.route("/api/people/<int:person_id>/fatigue", methods=["GET"], endpoint="person_fatigue")
    def person_fatigue(person_id: int):
        try:
            evaluation = container.compliance_service.evaluate_person(
                person_id, project_id=request.args.get("project_id") or None
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Fatigue lookup failed for person %s", person_id)
            return jsonify({"success": False, "message": "Internal error while reading fatigue"}), 500

        report = FatigueReport(results=evaluation.fatigue, summary=summarize(evaluation.fatigue))
        return jsonify({"person_id": person_id, **_report_payload(report)}), 200
