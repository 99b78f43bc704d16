"""Time-window conflict detection between a worker's events."""
from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping, Optional, Tuple

from domain.models import Assignment, ConflictResult, Event

DEFAULT_EVENT_HOURS = 4.0

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def _split_time(value: Optional[str]) -> Optional[Tuple[int, int]]:
    if not value:
        return None
    match = _TIME_RE.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def is_valid_time(value: Optional[str]) -> bool:
    """True for ``HH:MM`` (optionally ``HH:MM:SS``) on a 24-hour clock."""

    return _split_time(value) is not None


def parse_minutes(value: Optional[str]) -> Optional[int]:
    """``"HH:MM"`` to minutes since midnight; ``None`` for a missing or unreadable time."""

    parts = _split_time(value)
    if parts is None:
        return None
    return parts[0] * 60 + parts[1]


def default_hours(event: Event) -> float:
    """Hours to pre-fill for the payment step of *event*."""

    start = _split_time(event.time)
    end = _split_time(event.end_time)
    if start is None or end is None:
        return DEFAULT_EVENT_HOURS
    hours = (end[0] + end[1] / 60) - (start[0] + start[1] / 60)
    if hours < 0:
        hours += 24
    return hours


def overlaps(this: Event, other: Event) -> bool:
    this_start = parse_minutes(this.time)
    this_end = parse_minutes(this.end_time)
    other_start = parse_minutes(other.time)
    other_end = parse_minutes(other.end_time)
    if this_end is None or other_end is None:
        return False
    if this_start is None or other_start is None:
        return False
    return this_start < other_end and this_end > other_start


def check_conflict(
    worker_id: int,
    event: Event,
    assignments: Iterable[Assignment],
    events: Iterable[Event] | Mapping[int, Event],
) -> ConflictResult:
    """Find the first assignment of *worker_id* that overlaps *event*.

    Only events on the same date string are compared, and both events need
    an end time; anything else can not be judged and is let through.
    """

    by_id: Dict[int, Event] = dict(events) if isinstance(events, Mapping) else {e.id: e for e in events}
    for assignment in assignments:
        if assignment.worker_id != worker_id or assignment.event_id == event.id:
            continue
        other = by_id.get(assignment.event_id)
        if other is None or other.date != event.date:
            continue
        if overlaps(event, other):
            return ConflictResult(
                conflict=True,
                blocking_event=other,
                window=(other.time or "", other.end_time or ""),
                position=assignment.position,
            )
    return ConflictResult(conflict=False)


__all__ = ["is_valid_time", "parse_minutes", "default_hours", "overlaps", "check_conflict", "DEFAULT_EVENT_HOURS"]
