from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from domain.models import PAYMENT_PAID, PAYMENT_PENDING, Assignment, PayBreakdown
from services import db

_COLUMNS = (
    "id, event_id, worker_id, position, status, hours, miles, is_lake_geneva, is_holiday, "
    "base_pay, travel_pay, lake_geneva_bonus, subtotal, holiday_multiplier, total_pay, "
    "payment_status, paid_at, applied_at, created_at"
)


def _row_to_dict(row) -> Dict[str, Any]:
    return {
        "id": int(row["id"]),
        "event_id": int(row["event_id"]),
        "worker_id": int(row["worker_id"]),
        "position": row["position"],
        "status": row["status"],
        "hours": row["hours"],
        "miles": row["miles"],
        "is_lake_geneva": bool(row["is_lake_geneva"]),
        "is_holiday": bool(row["is_holiday"]),
        "base_pay": row["base_pay"],
        "travel_pay": row["travel_pay"],
        "lake_geneva_bonus": row["lake_geneva_bonus"],
        "subtotal": row["subtotal"],
        "holiday_multiplier": row["holiday_multiplier"],
        "total_pay": row["total_pay"],
        "payment_status": row["payment_status"],
        "paid_at": row["paid_at"],
        "applied_at": row["applied_at"],
        "created_at": row["created_at"],
    }


def list_assignments(
    *,
    event_id: Optional[int] = None,
    worker_id: Optional[int] = None,
    payment_status: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    clauses, params = [], []
    if status is not None:
        clauses.append("status = ?")
        params.append(status)
    if event_id is not None:
        clauses.append("event_id = ?")
        params.append(event_id)
    if worker_id is not None:
        clauses.append("worker_id = ?")
        params.append(worker_id)
    if payment_status is not None:
        clauses.append("payment_status = ?")
        params.append(payment_status)
    where = (" WHERE " + " AND ".join(clauses)) if clauses else ""
    rows = db.query_all(f"SELECT {_COLUMNS} FROM assignments{where} ORDER BY id", params)
    return [_row_to_dict(row) for row in rows]


def get_assignment(assignment_id: int) -> Optional[Dict[str, Any]]:
    row = db.query_one(f"SELECT {_COLUMNS} FROM assignments WHERE id = ?", (assignment_id,))
    if not row:
        return None
    return _row_to_dict(row)


def create_assignment(assignment: Assignment) -> int:
    pay = assignment.pay
    return db.insert(
        "INSERT INTO assignments(event_id, worker_id, position, status, hours, miles, is_lake_geneva, is_holiday, "
        "base_pay, travel_pay, lake_geneva_bonus, subtotal, holiday_multiplier, total_pay, payment_status, applied_at) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        (
            assignment.event_id,
            assignment.worker_id,
            assignment.position,
            assignment.status,
            assignment.hours,
            assignment.miles,
            1 if assignment.is_lake_geneva else 0,
            1 if assignment.is_holiday else 0,
            pay.base_pay if pay else None,
            pay.travel_pay if pay else None,
            pay.lake_geneva_bonus if pay else None,
            pay.subtotal if pay else None,
            pay.holiday_multiplier if pay else None,
            pay.total_pay if pay else None,
            assignment.payment_status,
            assignment.applied_at,
        ),
    )


def delete_assignment(assignment_id: int) -> int:
    return db.execute("DELETE FROM assignments WHERE id = ?", (assignment_id,))


def set_status(assignment_id: int, status: str) -> int:
    return db.execute("UPDATE assignments SET status = ? WHERE id = ?", (status, assignment_id))


def update_position(assignment_id: int, position: str, pay: Optional[PayBreakdown] = None) -> int:
    """Move an assignment to *position*, replacing its breakdown when one is given."""

    if pay is None:
        return db.execute("UPDATE assignments SET position = ? WHERE id = ?", (position, assignment_id))
    return db.execute(
        "UPDATE assignments SET position = ?, base_pay = ?, travel_pay = ?, lake_geneva_bonus = ?, "
        "subtotal = ?, holiday_multiplier = ?, total_pay = ? WHERE id = ?",
        (
            position,
            pay.base_pay,
            pay.travel_pay,
            pay.lake_geneva_bonus,
            pay.subtotal,
            pay.holiday_multiplier,
            pay.total_pay,
            assignment_id,
        ),
    )


def set_payment_status(assignment_ids: Iterable[int], status: str) -> int:
    if status not in (PAYMENT_PAID, PAYMENT_PENDING):
        raise ValueError(f"unknown payment status: {status}")
    ids = [int(i) for i in assignment_ids]
    if not ids:
        return 0
    paid_at = datetime.utcnow().isoformat() if status == PAYMENT_PAID else None
    placeholders = ", ".join("?" for _ in ids)
    return db.execute(
        f"UPDATE assignments SET payment_status = ?, paid_at = ? WHERE id IN ({placeholders})",
        [status, paid_at, *ids],
    )
