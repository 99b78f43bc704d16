from __future__ import annotations

from flask import Blueprint, jsonify, request

from domain.models import APPLICATION_APPROVED, APPLICATION_PENDING, APPLICATION_STATUSES
from services import applications_service, assignment_service

bp = Blueprint("applications", __name__)


def _respond(outcome):
    if outcome.ok:
        return jsonify(outcome.as_dict())
    if outcome.reason == assignment_service.NOT_FOUND:
        return jsonify(outcome.as_dict()), 404
    return jsonify(outcome.as_dict()), 409


@bp.route("/api/applications")
def list_applications():
    status = request.args.get("status") or None
    if status not in (None, "all", *APPLICATION_STATUSES):
        return jsonify({"error": "status must be 'pending', 'approved' or 'all'"}), 400
    items = applications_service.list_applications(status=status, search=request.args.get("q"))
    return jsonify(
        {
            "applications": items,
            "counts": {
                "pending": sum(1 for i in items if i["status"] == APPLICATION_PENDING),
                "approved": sum(1 for i in items if i["status"] == APPLICATION_APPROVED),
            },
        }
    )


@bp.route("/api/applications/<int:assignment_id>/approve", methods=["POST"])
def approve(assignment_id: int):
    return _respond(applications_service.approve(assignment_id))


@bp.route("/api/applications/<int:assignment_id>/reject", methods=["POST"])
def reject(assignment_id: int):
    return _respond(applications_service.reject(assignment_id))
