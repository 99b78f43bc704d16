"""Assigning workers to event positions."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from flask import current_app
from markupsafe import escape

from adapters.distance import DistanceClient
from adapters.mailer import Mailer
from dao import assignments_dao, events_dao, payment_config_dao, settings_dao, workers_dao
from domain.models import Assignment, CapacityResult, ConflictResult, Event, PayBreakdown, Worker
from rules import capacity, conflicts, matching
from rules.pay import calculate_pay
from services import db

logger = logging.getLogger(__name__)

NOT_FOUND = "not_found"
TIME_CONFLICT = "time_conflict"
INVALID_HOURS = "invalid_hours"


@dataclass
class AssignmentOutcome:
    ok: bool
    reason: Optional[str] = None
    assignment_id: Optional[int] = None
    conflict: Optional[ConflictResult] = None
    capacity: Optional[CapacityResult] = None
    pay: Optional[PayBreakdown] = None
    moved_from: Optional[str] = None
    email_sent: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "reason": self.reason,
            "assignment_id": self.assignment_id,
            "conflict": self.conflict.as_dict() if self.conflict else None,
            "capacity": self.capacity.as_dict() if self.capacity else None,
            "pay": self.pay.as_dict() if self.pay else None,
            "moved_from": self.moved_from,
            "email_sent": self.email_sent,
        }


def mailer() -> Mailer:
    return Mailer(current_app.config.get("RESEND_API_KEY"), sender=current_app.config["MAIL_SENDER"])


def distance_client() -> DistanceClient:
    return DistanceClient(current_app.config.get("GOOGLE_MAPS_API_KEY"))


def snapshot() -> tuple[List[Event], List[Assignment]]:
    events = [Event.from_dict(e) for e in events_dao.list_events()]
    assignments = [Assignment.from_dict(a) for a in assignments_dao.list_assignments()]
    return events, assignments


def load_event(event_id: int) -> Optional[Event]:
    payload = events_dao.get_event(event_id)
    return Event.from_dict(payload) if payload else None


def load_worker(worker_id: int) -> Optional[Worker]:
    payload = workers_dao.get_worker(worker_id)
    return Worker.from_dict(payload) if payload else None


def quote(position: str, hours: float, miles: float, is_lake_geneva: bool, is_holiday: bool) -> PayBreakdown:
    config = payment_config_dao.load_payment_config()
    return calculate_pay(position, hours, miles, is_lake_geneva, is_holiday, config)


def validate(worker_id: int, event: Event, position: str) -> AssignmentOutcome:
    """Run the conflict and capacity checks against the current data."""

    events, assignments = snapshot()
    conflict = conflicts.check_conflict(worker_id, event, assignments, events)
    if conflict.conflict:
        return AssignmentOutcome(ok=False, reason=TIME_CONFLICT, conflict=conflict)
    result = capacity.check_capacity(event, position, assignments, worker_id=worker_id)
    if not result.ok:
        return AssignmentOutcome(ok=False, reason=result.reason, capacity=result)
    return AssignmentOutcome(ok=True, capacity=result)


def _resolve_miles(worker: Worker, event: Event, miles: Optional[float]) -> float:
    if miles is not None:
        return float(miles)
    looked_up = None
    if worker.address and event.address:
        looked_up = distance_client().miles(worker.address, event.address)
    return float(looked_up) if looked_up is not None else 0.0


def _notify(worker: Worker, event: Event, position: str, pay: Optional[PayBreakdown]) -> bool:
    if not worker.email:
        return False
    window = event.time or ""
    if event.end_time:
        window = f"{window} - {event.end_time}"
    lines = [
        f"<p>Hi {escape(worker.name)},</p>",
        f"<p>You have been assigned as <strong>{escape(position)}</strong> for <strong>{escape(event.name)}</strong>.</p>",
        f"<p>{escape(event.date)} {escape(window)}<br>{escape(event.venue)}</p>",
    ]
    if pay is not None:
        lines.append(f"<p>Total pay: ${pay.total_pay:.2f}</p>")
    return mailer().send(worker.email, f"New gig: {event.name}", "\n".join(lines))


def assign_worker(
    event_id: int,
    worker_id: int,
    position: str,
    *,
    hours: Optional[float] = None,
    miles: Optional[float] = None,
    is_lake_geneva: bool = False,
    is_holiday: bool = False,
    notify: bool = True,
) -> AssignmentOutcome:
    event = load_event(event_id)
    worker = load_worker(worker_id)
    if event is None or worker is None:
        return AssignmentOutcome(ok=False, reason=NOT_FOUND)

    outcome = validate(worker_id, event, position)
    if not outcome.ok:
        logger.info("Assignment of worker %s to event %s refused: %s", worker_id, event_id, outcome.reason)
        return outcome
    moved = outcome.capacity.moved_from if outcome.capacity else None

    assignment = Assignment(id=None, event_id=event.id, worker_id=worker.id, position=position)
    pay = None
    if settings_dao.payment_tracking_enabled():
        hours = conflicts.default_hours(event) if hours is None else float(hours)
        if not math.isfinite(hours) or hours <= 0:
            return AssignmentOutcome(ok=False, reason=INVALID_HOURS)
        miles = _resolve_miles(worker, event, miles)
        pay = quote(position, hours, miles, is_lake_geneva, is_holiday)
        assignment.hours = hours
        assignment.miles = miles
        assignment.is_lake_geneva = is_lake_geneva
        assignment.is_holiday = is_holiday
        assignment.pay = pay

    with db.transaction():
        if moved is not None and moved.id is not None:
            assignments_dao.delete_assignment(moved.id)
        assignment_id = assignments_dao.create_assignment(assignment)
    logger.info("Worker %s assigned to %s at event %s", worker_id, position, event_id)

    email_sent = _notify(worker, event, position, pay) if notify else False
    return AssignmentOutcome(
        ok=True,
        assignment_id=assignment_id,
        capacity=outcome.capacity,
        pay=pay,
        moved_from=moved.position if moved else None,
        email_sent=email_sent,
    )


def unassign(assignment_id: int) -> bool:
    return assignments_dao.delete_assignment(assignment_id) > 0


def qualified_for(event_id: int, position: str, *, search: Optional[str] = None, only_available: bool = False) -> List[Dict[str, Any]]:
    event = load_event(event_id)
    if event is None:
        return []
    rows = {w["id"]: w for w in workers_dao.list_workers()}
    workers = [Worker.from_dict(w) for w in rows.values()]
    exclude = None
    if only_available:
        exclude = [Assignment.from_dict(a) for a in assignments_dao.list_assignments(event_id=event_id)]
    offered = matching.qualified_workers(position, workers, search=search, exclude_assigned=exclude)
    return [rows[w.id] for w in offered]


def position_status(event_id: int) -> Optional[List[Dict[str, Any]]]:
    event = load_event(event_id)
    if event is None:
        return None
    rows = [Assignment.from_dict(a) for a in assignments_dao.list_assignments(event_id=event_id)]
    return capacity.fill_status(event, rows)


__all__ = [
    "AssignmentOutcome",
    "assign_worker",
    "unassign",
    "validate",
    "snapshot",
    "quote",
    "qualified_for",
    "position_status",
]
