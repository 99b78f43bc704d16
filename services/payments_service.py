from __future__ import annotations

import logging
from io import BytesIO, StringIO
from typing import Any, Dict, Iterable, List, Optional, Tuple

from adapters.report import csv_writer, xlsx_writer
from dao import assignments_dao, events_dao, workers_dao
from domain.models import APPLICATION_PENDING, PAYMENT_PAID, PAYMENT_PENDING

logger = logging.getLogger(__name__)


def _with_details() -> List[Dict[str, Any]]:
    workers = {w["id"]: w for w in workers_dao.list_workers(include_inactive=True)}
    events = {e["id"]: e for e in events_dao.list_events()}
    items = []
    for assignment in assignments_dao.list_assignments():
        if assignment["status"] == APPLICATION_PENDING:
            continue
        worker = workers.get(assignment["worker_id"])
        event = events.get(assignment["event_id"])
        if worker is None or event is None:
            continue
        items.append({**assignment, "worker": worker, "event": event})
    return items


def filter_payments(
    items: Iterable[Dict[str, Any]],
    *,
    status: Optional[str] = None,
    worker_id: Optional[int] = None,
    event_id: Optional[int] = None,
    search: Optional[str] = None,
) -> List[Dict[str, Any]]:
    needle = (search or "").lower()
    result = []
    for item in items:
        if status and status != "all" and item["payment_status"] != status:
            continue
        if worker_id is not None and item["worker_id"] != worker_id:
            continue
        if event_id is not None and item["event_id"] != event_id:
            continue
        if needle and not (
            needle in item["worker"]["name"].lower()
            or needle in item["event"]["name"].lower()
            or needle in item["position"].lower()
        ):
            continue
        result.append(item)
    return result


def totals(items: Iterable[Dict[str, Any]]) -> Dict[str, float]:
    owed = paid = 0.0
    for item in items:
        amount = item.get("total_pay") or 0
        if item["payment_status"] == PAYMENT_PENDING:
            owed += amount
        elif item["payment_status"] == PAYMENT_PAID:
            paid += amount
    return {"owed": round(owed, 2), "paid": round(paid, 2)}


def group_payments(items: Iterable[Dict[str, Any]], group_by: str) -> List[Dict[str, Any]]:
    if group_by not in ("event", "worker"):
        raise ValueError(f"cannot group payments by {group_by!r}")
    key = f"{group_by}_id"
    groups: Dict[int, Dict[str, Any]] = {}
    for item in items:
        group = groups.setdefault(
            item[key],
            {group_by: item[group_by], "assignments": [], "total_pay": 0.0, "pending_count": 0, "paid_count": 0},
        )
        group["assignments"].append(item)
        group["total_pay"] += item.get("total_pay") or 0
        if item["payment_status"] == PAYMENT_PENDING:
            group["pending_count"] += 1
        elif item["payment_status"] == PAYMENT_PAID:
            group["paid_count"] += 1
    for group in groups.values():
        group["total_pay"] = round(group["total_pay"], 2)
    return list(groups.values())


def payments_report(
    *,
    status: Optional[str] = None,
    worker_id: Optional[int] = None,
    event_id: Optional[int] = None,
    search: Optional[str] = None,
    group_by: Optional[str] = None,
) -> Dict[str, Any]:
    items = filter_payments(_with_details(), status=status, worker_id=worker_id, event_id=event_id, search=search)
    report: Dict[str, Any] = {
        "assignments": items,
        "totals": totals(items),
        "counts": {
            "pending": sum(1 for i in items if i["payment_status"] == PAYMENT_PENDING),
            "paid": sum(1 for i in items if i["payment_status"] == PAYMENT_PAID),
        },
    }
    if group_by:
        report["groups"] = group_payments(items, group_by)
    return report


def mark(assignment_ids: Iterable[int], status: str) -> int:
    updated = assignments_dao.set_payment_status(assignment_ids, status)
    logger.info("Marked %s assignment(s) as %s", updated, status)
    return updated


def export_csv(**filters: Any) -> Tuple[StringIO, str]:
    items = filter_payments(_with_details(), **filters)
    return csv_writer.write_payments(items), "payments.csv"


def export_xlsx(**filters: Any) -> Tuple[BytesIO, str]:
    items = filter_payments(_with_details(), **filters)
    return xlsx_writer.write_payments(items), "payments.xlsx"
