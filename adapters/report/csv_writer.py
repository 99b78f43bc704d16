"""CSV payment report helpers."""
from __future__ import annotations

import csv
from io import StringIO
from typing import Any, Dict, Iterable, List

PAYMENT_COLUMNS: List[str] = [
    "Worker Name",
    "Worker Email",
    "Worker Phone",
    "Event Name",
    "Event Date",
    "Venue",
    "Position",
    "Hours",
    "Miles",
    "Base Pay",
    "Travel Pay",
    "Lake Geneva Bonus",
    "Holiday Multiplier",
    "Total Pay",
    "Payment Status",
    "Paid Date",
]


def _money(value: Any) -> str:
    return f"{float(value or 0):.2f}"


def _us_date(value: str | None) -> str:
    if not value:
        return ""
    year, month, day = value[:10].split("-")
    return f"{int(month)}/{int(day)}/{year}"


def payment_row(item: Dict[str, Any]) -> List[Any]:
    worker, event = item["worker"], item["event"]
    return [
        worker["name"],
        worker.get("email", ""),
        worker.get("phone", ""),
        event["name"],
        _us_date(event.get("date")),
        event.get("venue", ""),
        item["position"],
        item.get("hours") or 0,
        item.get("miles") or 0,
        _money(item.get("base_pay")),
        _money(item.get("travel_pay")),
        _money(item.get("lake_geneva_bonus")),
        item.get("holiday_multiplier") or 1.0,
        _money(item.get("total_pay")),
        item.get("payment_status") or "pending",
        _us_date(item.get("paid_at")),
    ]


def write_payments(items: Iterable[Dict[str, Any]]) -> StringIO:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(PAYMENT_COLUMNS)
    for item in items:
        writer.writerow(payment_row(item))
    buffer.seek(0)
    return buffer
