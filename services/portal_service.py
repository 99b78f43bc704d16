from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from dao import assignments_dao, events_dao, settings_dao, workers_dao
from domain.models import Assignment, Event, Worker
from rules import portal


def my_gigs(worker_id: int, today: Optional[date] = None) -> Optional[List[Dict[str, Any]]]:
    if workers_dao.get_worker(worker_id) is None:
        return None
    today = today or date.today()
    events = {e["id"]: e for e in events_dao.list_events()}
    rows = assignments_dao.list_assignments(worker_id=worker_id)
    by_id = {row["id"]: row for row in rows}
    gigs = portal.upcoming_gigs(
        worker_id,
        [Event.from_dict(e) for e in events.values()],
        [Assignment.from_dict(row) for row in rows],
        today,
    )
    return [
        {**by_id[gig["assignment"].id], "event": events[gig["event"].id], "days_until": gig["days_until"]}
        for gig in gigs
    ]


def available_events(worker_id: int, today: Optional[date] = None) -> Optional[List[Dict[str, Any]]]:
    payload = workers_dao.get_worker(worker_id)
    if payload is None:
        return None
    worker = Worker.from_dict(payload)
    events = {e["id"]: e for e in events_dao.list_events()}
    visible = portal.visible_events(
        worker,
        [Event.from_dict(e) for e in events.values()],
        [Assignment.from_dict(a) for a in assignments_dao.list_assignments(worker_id=worker_id)],
        today or date.today(),
        settings_dao.rank_access_days(),
    )
    return [events[event.id] for event in visible]
