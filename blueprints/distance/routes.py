from __future__ import annotations

from flask import Blueprint, jsonify, request

from services.assignment_service import distance_client

bp = Blueprint("distance", __name__)


@bp.route("/api/distance", methods=["POST"])
def distance():
    payload = request.get_json(force=True)
    origin, destination = payload.get("origin"), payload.get("destination")
    if not origin or not destination:
        return jsonify({"success": False, "error": "Missing required parameters"}), 400
    result = distance_client().lookup(origin, destination)
    if result is None:
        return jsonify({"success": False, "error": "Could not calculate distance"}), 502
    return jsonify({"success": True, **result})
