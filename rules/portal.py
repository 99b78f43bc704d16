"""What a worker sees in the portal."""
from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from domain import positions
from domain.models import Assignment, Event, Worker

DEFAULT_RANK = 5
DEFAULT_ACCESS_DAYS = 14
RANK_ACCESS_DAYS: Dict[int, int] = {1: 0, 2: 7, 3: 10, 4: 12, 5: 14}
# workers may cancel or switch position on their own only this far ahead
CHANGE_NOTICE_DAYS = 7


def days_until(event: Event, today: date) -> Optional[int]:
    try:
        event_day = date.fromisoformat(event.date[:10])
    except ValueError:
        return None
    return (event_day - today).days


def change_window_open(event: Event, today: date, notice_days: int = CHANGE_NOTICE_DAYS) -> bool:
    remaining = days_until(event, today)
    return remaining is not None and remaining >= notice_days


def access_days_for(worker: Worker, rank_access_days: Mapping[int, int] | None = None) -> int:
    table = RANK_ACCESS_DAYS if rank_access_days is None else rank_access_days
    rank = worker.rank or DEFAULT_RANK
    days = table.get(rank)
    # a zero window means "no limit", only a missing entry falls back
    return DEFAULT_ACCESS_DAYS if days is None else int(days)


def visible_events(
    worker: Worker,
    events: Iterable[Event],
    assignments: Iterable[Assignment],
    today: date,
    rank_access_days: Mapping[int, int] | None = None,
) -> List[Event]:
    window = access_days_for(worker, rank_access_days)
    mine = {a.event_id for a in assignments if a.worker_id == worker.id}
    visible: List[Event] = []
    for event in events:
        remaining = days_until(event, today)
        if remaining is None or remaining < 0:
            continue
        if window > 0 and remaining > window:
            continue
        if event.id in mine:
            continue
        if not any(positions.skills_match_position(worker.skills, req.name) for req in event.positions):
            continue
        visible.append(event)
    return sorted(visible, key=lambda e: e.date)


def upcoming_gigs(
    worker_id: int,
    events: Iterable[Event],
    assignments: Iterable[Assignment],
    today: date,
) -> List[Dict[str, object]]:
    by_id = {e.id: e for e in events}
    gigs = []
    for assignment in assignments:
        if assignment.worker_id != worker_id:
            continue
        event = by_id.get(assignment.event_id)
        if event is None:
            continue
        remaining = days_until(event, today)
        gigs.append({"assignment": assignment, "event": event, "days_until": remaining})
    upcoming, past = [], []
    for gig in gigs:
        remaining = gig["days_until"]
        (upcoming if remaining is not None and remaining >= 0 else past).append(gig)
    upcoming.sort(key=lambda g: g["event"].date)
    past.sort(key=lambda g: g["event"].date, reverse=True)
    return upcoming + past
