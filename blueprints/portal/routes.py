from __future__ import annotations

from flask import Blueprint, jsonify, request

from services import applications_service, assignment_service, portal_service

bp = Blueprint("portal", __name__)


def _respond(outcome, success: int = 200):
    if outcome.ok:
        return jsonify(outcome.as_dict()), success
    if outcome.reason == assignment_service.NOT_FOUND:
        return jsonify(outcome.as_dict()), 404
    return jsonify(outcome.as_dict()), 409


@bp.route("/api/portal/<int:worker_id>/gigs")
def gigs(worker_id: int):
    result = portal_service.my_gigs(worker_id)
    if result is None:
        return jsonify({"error": "not_found"}), 404
    return jsonify({"gigs": result})


@bp.route("/api/portal/<int:worker_id>/available")
def available(worker_id: int):
    result = portal_service.available_events(worker_id)
    if result is None:
        return jsonify({"error": "not_found"}), 404
    return jsonify({"events": result})


@bp.route("/api/portal/<int:worker_id>/applications", methods=["POST"])
def apply(worker_id: int):
    payload = request.get_json(force=True)
    try:
        event_id = int(payload.get("event_id") or 0)
    except (TypeError, ValueError):
        return jsonify({"ok": False, "reason": "bad_request"}), 400
    position = (payload.get("position") or "").strip()
    if not event_id or not position:
        return jsonify({"ok": False, "reason": "bad_request"}), 400
    return _respond(applications_service.apply(worker_id, event_id, position), 201)


@bp.route("/api/portal/<int:worker_id>/assignments/<int:assignment_id>", methods=["DELETE"])
def cancel(worker_id: int, assignment_id: int):
    return _respond(applications_service.cancel(worker_id, assignment_id))


@bp.route("/api/portal/<int:worker_id>/assignments/<int:assignment_id>/position", methods=["POST"])
def switch_position(worker_id: int, assignment_id: int):
    payload = request.get_json(force=True)
    position = (payload.get("position") or "").strip()
    if not position:
        return jsonify({"ok": False, "reason": "bad_request"}), 400
    return _respond(applications_service.switch_position(worker_id, assignment_id, position))
