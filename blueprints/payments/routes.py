from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from blueprints.params import flag, int_arg, number
from domain.models import PAYMENT_PAID, PAYMENT_PENDING, PAYMENT_STATUSES
from services import assignment_service, payments_service

bp = Blueprint("payments", __name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _filters():
    return {
        "status": request.args.get("status"),
        "worker_id": int_arg("worker_id"),
        "event_id": int_arg("event_id"),
        "search": request.args.get("q"),
    }


def _bad_filter():
    return jsonify({"error": "worker_id and event_id must be integers"}), 400


@bp.route("/api/pay/quote", methods=["POST"])
def quote():
    payload = request.get_json(force=True)
    try:
        hours = number(payload, "hours", 0.0)
        miles = number(payload, "miles", 0.0)
    except (TypeError, ValueError):
        return jsonify({"error": "hours and miles must be finite numbers"}), 400
    breakdown = assignment_service.quote(
        payload.get("position", ""),
        hours,
        miles,
        flag(payload, "is_lake_geneva"),
        flag(payload, "is_holiday"),
    )
    return jsonify(breakdown.as_dict())


@bp.route("/api/payments")
def list_payments():
    group_by = request.args.get("group_by")
    if group_by not in (None, "", "event", "worker"):
        return jsonify({"error": "group_by must be 'event' or 'worker'"}), 400
    try:
        filters = _filters()
    except ValueError:
        return _bad_filter()
    report = payments_service.payments_report(**filters, group_by=group_by or None)
    return jsonify(report)


@bp.route("/api/payments/<int:assignment_id>/paid", methods=["POST"])
def mark_paid(assignment_id: int):
    updated = payments_service.mark([assignment_id], PAYMENT_PAID)
    if not updated:
        return jsonify({"error": "not_found"}), 404
    return jsonify({"updated": updated})


@bp.route("/api/payments/<int:assignment_id>/pending", methods=["POST"])
def mark_pending(assignment_id: int):
    updated = payments_service.mark([assignment_id], PAYMENT_PENDING)
    if not updated:
        return jsonify({"error": "not_found"}), 404
    return jsonify({"updated": updated})


@bp.route("/api/payments/bulk", methods=["POST"])
def bulk():
    payload = request.get_json(force=True)
    status = payload.get("status")
    ids = payload.get("ids") or []
    if status not in PAYMENT_STATUSES:
        return jsonify({"error": "status must be 'pending' or 'paid'"}), 400
    if not ids:
        return jsonify({"error": "no assignments selected"}), 400
    try:
        ids = [int(i) for i in ids]
    except (TypeError, ValueError):
        return jsonify({"error": "ids must be integers"}), 400
    return jsonify({"updated": payments_service.mark(ids, status)})


@bp.route("/api/payments/export.csv")
def export_csv():
    try:
        filters = _filters()
    except ValueError:
        return _bad_filter()
    buffer, filename = payments_service.export_csv(**filters)
    return Response(
        buffer.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@bp.route("/api/payments/export.xlsx")
def export_xlsx():
    try:
        filters = _filters()
    except ValueError:
        return _bad_filter()
    buffer, filename = payments_service.export_xlsx(**filters)
    return Response(
        buffer.getvalue(),
        mimetype=XLSX_MIMETYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
