from __future__ import annotations

from flask import Blueprint, jsonify, request

from dao import workers_dao

bp = Blueprint("workers", __name__)


@bp.route("/api/workers", methods=["GET"])
def list_workers():
    include_inactive = request.args.get("all") in ("1", "true")
    return jsonify({"workers": workers_dao.list_workers(include_inactive=include_inactive)})


@bp.route("/api/workers/<int:worker_id>", methods=["GET"])
def get_worker(worker_id: int):
    worker = workers_dao.get_worker(worker_id)
    if worker is None:
        return jsonify({"error": "not_found"}), 404
    return jsonify(worker)


@bp.route("/api/workers", methods=["POST"])
def create_worker():
    payload = request.get_json(force=True)
    if not payload.get("name"):
        return jsonify({"error": "name is required"}), 400
    if not payload.get("skills"):
        return jsonify({"error": "at least one skill is required"}), 400
    worker_id = workers_dao.create_worker(payload)
    return jsonify({"id": worker_id}), 201


@bp.route("/api/workers/<int:worker_id>", methods=["PUT"])
def update_worker(worker_id: int):
    payload = request.get_json(force=True)
    updated = workers_dao.update_worker(worker_id, payload)
    return jsonify({"updated": updated})


@bp.route("/api/workers/<int:worker_id>", methods=["DELETE"])
def delete_worker(worker_id: int):
    deleted = workers_dao.delete_worker(worker_id)
    return jsonify({"deleted": deleted})
