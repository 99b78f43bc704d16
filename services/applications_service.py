"""Worker applications from the portal and the admin review of them."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from dao import assignments_dao, events_dao, settings_dao, workers_dao
from domain import positions
from domain.models import APPLICATION_APPROVED, APPLICATION_PENDING, Assignment
from rules import capacity, conflicts, portal
from services.assignment_service import (
    NOT_FOUND,
    TIME_CONFLICT,
    AssignmentOutcome,
    load_event,
    load_worker,
    quote,
    snapshot,
)

logger = logging.getLogger(__name__)

EVENT_PASSED = "event_passed"
NOT_OPEN_YET = "not_open_yet"
UNKNOWN_POSITION = "unknown_position"
NOT_QUALIFIED = "not_qualified"
ALREADY_APPLIED = "already_applied"
NOT_PENDING = "not_pending"
NOTICE_TOO_SHORT = "notice_too_short"


def _own_assignment(worker_id: int, assignment_id: int) -> Optional[Assignment]:
    payload = assignments_dao.get_assignment(assignment_id)
    if payload is None or payload["worker_id"] != worker_id:
        return None
    return Assignment.from_dict(payload)


def apply(worker_id: int, event_id: int, position: str, today: Optional[date] = None) -> AssignmentOutcome:
    """Record a pending application of *worker_id* for *position* at *event_id*."""

    event = load_event(event_id)
    worker = load_worker(worker_id)
    if event is None or worker is None:
        return AssignmentOutcome(ok=False, reason=NOT_FOUND)
    today = today or date.today()

    remaining = portal.days_until(event, today)
    if remaining is None or remaining < 0:
        return AssignmentOutcome(ok=False, reason=EVENT_PASSED)
    window = portal.access_days_for(worker, settings_dao.rank_access_days())
    if window > 0 and remaining > window:
        return AssignmentOutcome(ok=False, reason=NOT_OPEN_YET)
    if event.count_needed(position) <= 0:
        return AssignmentOutcome(ok=False, reason=UNKNOWN_POSITION)
    if not positions.skills_match_position(worker.skills, position):
        return AssignmentOutcome(ok=False, reason=NOT_QUALIFIED)

    events, assignments = snapshot()
    if any(a.worker_id == worker_id and a.event_id == event.id for a in assignments):
        return AssignmentOutcome(ok=False, reason=ALREADY_APPLIED)
    conflict = conflicts.check_conflict(worker_id, event, assignments, events)
    if conflict.conflict:
        return AssignmentOutcome(ok=False, reason=TIME_CONFLICT, conflict=conflict)
    result = capacity.check_capacity(event, position, assignments)
    if not result.ok:
        return AssignmentOutcome(ok=False, reason=result.reason, capacity=result)

    application = Assignment(
        id=None,
        event_id=event.id,
        worker_id=worker.id,
        position=position,
        status=APPLICATION_PENDING,
        applied_at=datetime.utcnow().isoformat(),
    )
    assignment_id = assignments_dao.create_assignment(application)
    logger.info("Worker %s applied for %s at event %s", worker_id, position, event_id)
    return AssignmentOutcome(ok=True, assignment_id=assignment_id, capacity=result)


def approve(assignment_id: int) -> AssignmentOutcome:
    payload = assignments_dao.get_assignment(assignment_id)
    if payload is None:
        return AssignmentOutcome(ok=False, reason=NOT_FOUND)
    if payload["status"] != APPLICATION_PENDING:
        return AssignmentOutcome(ok=False, reason=NOT_PENDING)
    event = load_event(payload["event_id"])
    if event is None:
        return AssignmentOutcome(ok=False, reason=NOT_FOUND)

    _, assignments = snapshot()
    result = capacity.check_capacity(event, payload["position"], assignments)
    if not result.ok:
        return AssignmentOutcome(ok=False, reason=result.reason, capacity=result)
    assignments_dao.set_status(assignment_id, APPLICATION_APPROVED)
    logger.info("Application %s approved", assignment_id)
    return AssignmentOutcome(ok=True, assignment_id=assignment_id, capacity=result)


def reject(assignment_id: int) -> AssignmentOutcome:
    payload = assignments_dao.get_assignment(assignment_id)
    if payload is None:
        return AssignmentOutcome(ok=False, reason=NOT_FOUND)
    if payload["status"] != APPLICATION_PENDING:
        return AssignmentOutcome(ok=False, reason=NOT_PENDING)
    assignments_dao.delete_assignment(assignment_id)
    logger.info("Application %s rejected", assignment_id)
    return AssignmentOutcome(ok=True, assignment_id=assignment_id)


def cancel(worker_id: int, assignment_id: int, today: Optional[date] = None) -> AssignmentOutcome:
    """Drop a worker's own assignment; held gigs need a week's notice, applications do not."""

    assignment = _own_assignment(worker_id, assignment_id)
    event = load_event(assignment.event_id) if assignment else None
    if assignment is None or event is None:
        return AssignmentOutcome(ok=False, reason=NOT_FOUND)
    if assignment.holds_position and not portal.change_window_open(event, today or date.today()):
        return AssignmentOutcome(ok=False, reason=NOTICE_TOO_SHORT)
    assignments_dao.delete_assignment(assignment_id)
    logger.info("Worker %s cancelled assignment %s", worker_id, assignment_id)
    return AssignmentOutcome(ok=True, assignment_id=assignment_id)


def switch_position(
    worker_id: int,
    assignment_id: int,
    position: str,
    today: Optional[date] = None,
) -> AssignmentOutcome:
    assignment = _own_assignment(worker_id, assignment_id)
    event = load_event(assignment.event_id) if assignment else None
    worker = load_worker(worker_id)
    if assignment is None or event is None or worker is None:
        return AssignmentOutcome(ok=False, reason=NOT_FOUND)
    if not portal.change_window_open(event, today or date.today()):
        return AssignmentOutcome(ok=False, reason=NOTICE_TOO_SHORT)
    if event.count_needed(position) <= 0:
        return AssignmentOutcome(ok=False, reason=UNKNOWN_POSITION)
    if not positions.skills_match_position(worker.skills, position):
        return AssignmentOutcome(ok=False, reason=NOT_QUALIFIED)

    _, assignments = snapshot()
    result = capacity.check_capacity(event, position, assignments, worker_id=worker_id)
    if not result.ok:
        return AssignmentOutcome(ok=False, reason=result.reason, capacity=result)

    pay = None
    if assignment.hours and settings_dao.payment_tracking_enabled():
        pay = quote(position, assignment.hours, assignment.miles or 0.0, assignment.is_lake_geneva, assignment.is_holiday)
    assignments_dao.update_position(assignment_id, position, pay)
    logger.info("Worker %s switched assignment %s from %s to %s", worker_id, assignment_id, assignment.position, position)
    return AssignmentOutcome(
        ok=True,
        assignment_id=assignment_id,
        capacity=result,
        pay=pay,
        moved_from=assignment.position,
    )


def list_applications(*, status: Optional[str] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
    """Portal applications joined with worker and event, newest first."""

    workers = {w["id"]: w for w in workers_dao.list_workers(include_inactive=True)}
    events = {e["id"]: e for e in events_dao.list_events()}
    needle = (search or "").lower()
    items = []
    for row in assignments_dao.list_assignments():
        if row["applied_at"] is None:
            continue
        if status and status != "all" and row["status"] != status:
            continue
        worker = workers.get(row["worker_id"])
        event = events.get(row["event_id"])
        if worker is None or event is None:
            continue
        if needle and not (
            needle in worker["name"].lower()
            or needle in event["name"].lower()
            or needle in row["position"].lower()
        ):
            continue
        items.append({**row, "worker": worker, "event": event})
    items.sort(key=lambda item: item["applied_at"], reverse=True)
    return items


__all__ = [
    "apply",
    "approve",
    "reject",
    "cancel",
    "switch_position",
    "list_applications",
]
