from __future__ import annotations

from flask import Blueprint, jsonify, request

from blueprints.params import flag, number
from dao import events_dao
from rules.conflicts import default_hours, is_valid_time
from services import assignment_service

bp = Blueprint("events", __name__)


def _event_problem(payload) -> str | None:
    if not payload.get("name") or not payload.get("date"):
        return "name and date are required"
    for key in ("time", "end_time"):
        value = payload.get(key)
        if value and not is_valid_time(value):
            return f"{key} must be HH:MM"
    try:
        for pos in payload.get("positions") or []:
            if not pos.get("name") or int(pos.get("count", 0)) < 0:
                return "positions need a name and a non-negative count"
    except (AttributeError, TypeError, ValueError):
        return "positions need a name and a non-negative count"
    return None


@bp.route("/api/events", methods=["GET"])
def list_events():
    return jsonify({"events": events_dao.list_events()})


@bp.route("/api/events/<int:event_id>", methods=["GET"])
def get_event(event_id: int):
    event = events_dao.get_event(event_id)
    if event is None:
        return jsonify({"error": "not_found"}), 404
    return jsonify(event)


@bp.route("/api/events", methods=["POST"])
def create_event():
    payload = request.get_json(force=True)
    problem = _event_problem(payload)
    if problem:
        return jsonify({"error": problem}), 400
    event_id = events_dao.create_event(payload)
    return jsonify({"id": event_id}), 201


@bp.route("/api/events/<int:event_id>", methods=["PUT"])
def update_event(event_id: int):
    payload = request.get_json(force=True)
    problem = _event_problem(payload)
    if problem:
        return jsonify({"error": problem}), 400
    updated = events_dao.update_event(event_id, payload)
    return jsonify({"updated": updated})


@bp.route("/api/events/<int:event_id>", methods=["DELETE"])
def delete_event(event_id: int):
    deleted = events_dao.delete_event(event_id)
    return jsonify({"deleted": deleted})


@bp.route("/api/events/<int:event_id>/positions")
def positions(event_id: int):
    status = assignment_service.position_status(event_id)
    if status is None:
        return jsonify({"error": "not_found"}), 404
    return jsonify({"positions": status})


@bp.route("/api/events/<int:event_id>/qualified")
def qualified(event_id: int):
    position = request.args.get("position", "")
    workers = assignment_service.qualified_for(
        event_id,
        position,
        search=request.args.get("q"),
        only_available=request.args.get("available") in ("1", "true"),
    )
    return jsonify({"position": position, "workers": workers})


@bp.route("/api/events/<int:event_id>/default-hours")
def event_default_hours(event_id: int):
    event = assignment_service.load_event(event_id)
    if event is None:
        return jsonify({"error": "not_found"}), 404
    return jsonify({"hours": default_hours(event)})


@bp.route("/api/events/<int:event_id>/assignments", methods=["POST"])
def assign(event_id: int):
    payload = request.get_json(force=True)
    try:
        worker_id = int(payload.get("worker_id") or 0)
        hours = number(payload, "hours")
        miles = number(payload, "miles")
    except (TypeError, ValueError):
        return jsonify({"ok": False, "reason": "bad_request"}), 400
    position = (payload.get("position") or "").strip()
    if not worker_id or not position:
        return jsonify({"ok": False, "reason": "bad_request"}), 400

    outcome = assignment_service.assign_worker(
        event_id,
        worker_id,
        position,
        hours=hours,
        miles=miles,
        is_lake_geneva=flag(payload, "is_lake_geneva"),
        is_holiday=flag(payload, "is_holiday"),
        notify=payload.get("notify", True) is not False,
    )
    if outcome.ok:
        return jsonify(outcome.as_dict()), 201
    if outcome.reason == assignment_service.NOT_FOUND:
        return jsonify(outcome.as_dict()), 404
    if outcome.reason == assignment_service.INVALID_HOURS:
        return jsonify(outcome.as_dict()), 400
    return jsonify(outcome.as_dict()), 409


@bp.route("/api/assignments/<int:assignment_id>", methods=["DELETE"])
def unassign(assignment_id: int):
    deleted = assignment_service.unassign(assignment_id)
    return jsonify({"deleted": deleted})
