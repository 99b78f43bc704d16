"""Position headcount checks for an event."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from domain.models import Assignment, CapacityResult, Event

FULLY_STAFFED = "fully_staffed"
ALREADY_ASSIGNED = "already_assigned"


def filled_count(event: Event, position: str, assignments: Iterable[Assignment]) -> int:
    """Assignments holding *position*; pending applications do not take a slot."""

    return sum(1 for a in assignments if a.event_id == event.id and a.position == position and a.holds_position)


def is_position_filled(event: Event, position: str, assignments: Iterable[Assignment]) -> bool:
    return filled_count(event, position, assignments) >= event.count_needed(position)


def fill_status(event: Event, assignments: Iterable[Assignment]) -> List[Dict[str, object]]:
    rows = list(assignments)
    status = []
    for req in event.positions:
        filled = filled_count(event, req.name, rows)
        status.append({"position": req.name, "filled": filled, "needed": req.count, "is_full": filled >= req.count})
    return status


def check_capacity(
    event: Event,
    position: str,
    assignments: Iterable[Assignment],
    *,
    worker_id: Optional[int] = None,
) -> CapacityResult:
    """Decide whether *worker_id* may take *position* at *event*.

    A worker holding another position at the same event is being moved: that
    assignment is dropped before counting and returned as ``moved_from``.
    """

    rows = [a for a in assignments if a.event_id == event.id]
    moved_from: Optional[Assignment] = None
    if worker_id is not None:
        for current in rows:
            if current.worker_id != worker_id:
                continue
            if current.position == position:
                return CapacityResult(
                    ok=False,
                    filled=filled_count(event, position, rows),
                    needed=event.count_needed(position),
                    reason=ALREADY_ASSIGNED,
                )
            moved_from = current
            break
    if moved_from is not None:
        rows = [a for a in rows if a is not moved_from]

    filled = filled_count(event, position, rows)
    needed = event.count_needed(position)
    if filled >= needed:
        return CapacityResult(ok=False, filled=filled, needed=needed, reason=FULLY_STAFFED, moved_from=moved_from)
    return CapacityResult(ok=True, filled=filled, needed=needed, moved_from=moved_from)


__all__ = [
    "filled_count",
    "is_position_filled",
    "fill_status",
    "check_capacity",
    "FULLY_STAFFED",
    "ALREADY_ASSIGNED",
]
