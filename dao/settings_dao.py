from __future__ import annotations

import json
from typing import Any, Dict

from services import db

DEFAULT_RANK_ACCESS_DAYS = {1: 0, 2: 7, 3: 10, 4: 12, 5: 14}


def get_settings() -> Dict[str, Any]:
    raw = db.read_settings()
    return {
        "payment_tracking_enabled": payment_tracking_enabled(raw),
        "rank_access_days": rank_access_days(raw),
        "time_format": raw.get("time_format") or "12",
    }


def payment_tracking_enabled(raw: Dict[str, Any] | None = None) -> bool:
    raw = db.read_settings() if raw is None else raw
    value = raw.get("payment_tracking_enabled")
    if value is None:
        return True
    return str(value).lower() == "true"


def rank_access_days(raw: Dict[str, Any] | None = None) -> Dict[int, int]:
    raw = db.read_settings() if raw is None else raw
    blob = raw.get("rank_access_days")
    if not blob:
        return dict(DEFAULT_RANK_ACCESS_DAYS)
    return {int(rank): int(days) for rank, days in json.loads(blob).items()}


def save_settings(payload: Dict[str, Any]) -> None:
    if "payment_tracking_enabled" in payload:
        db.upsert_setting("payment_tracking_enabled", "true" if payload["payment_tracking_enabled"] else "false")
    if "rank_access_days" in payload:
        days = {str(int(rank)): int(value) for rank, value in payload["rank_access_days"].items()}
        db.upsert_setting("rank_access_days", days)
    if "time_format" in payload:
        db.upsert_setting("time_format", "24" if str(payload["time_format"]) == "24" else "12")
