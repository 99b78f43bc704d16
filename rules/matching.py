"""Offering workers for a position."""
from __future__ import annotations

from typing import Iterable, List, Optional

from domain import positions
from domain.models import Assignment, Worker


def qualifies(worker: Worker, position: str) -> bool:
    return positions.skills_match_position(worker.skills, position)


def qualified_workers(
    position: str,
    workers: Iterable[Worker],
    *,
    search: Optional[str] = None,
    exclude_assigned: Optional[Iterable[Assignment]] = None,
) -> List[Worker]:
    """Workers offered for *position*, best rank first then most reliable.

    ``exclude_assigned`` drops anyone already holding one of those
    assignments, which is how the roster shows only available workers.
    """

    taken = {a.worker_id for a in exclude_assigned or ()}
    needle = (search or "").lower()
    offered = [
        worker
        for worker in workers
        if worker.is_active
        and (not needle or needle in worker.name.lower())
        and worker.id not in taken
        and qualifies(worker, position)
    ]
    return sorted(offered, key=lambda w: (w.rank, -w.reliability))
