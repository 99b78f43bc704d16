from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from services import db

_COLUMNS = "id, name, venue, address, date, time, end_time, positions_json"


def _row_to_dict(row) -> Dict[str, Any]:
    return {
        "id": int(row["id"]),
        "name": row["name"],
        "venue": row["venue"] or "",
        "address": row["address"] or "",
        "date": row["date"],
        "time": row["time"],
        "end_time": row["end_time"],
        "positions": json.loads(row["positions_json"]) if row["positions_json"] else [],
    }


def list_events() -> List[Dict[str, Any]]:
    rows = db.query_all(f"SELECT {_COLUMNS} FROM events ORDER BY date, time")
    return [_row_to_dict(row) for row in rows]


def get_event(event_id: int) -> Optional[Dict[str, Any]]:
    row = db.query_one(f"SELECT {_COLUMNS} FROM events WHERE id = ?", (event_id,))
    if not row:
        return None
    return _row_to_dict(row)


def _values(payload: Dict[str, Any]) -> tuple:
    positions = [
        {"name": pos["name"], "count": int(pos.get("count", 0))}
        for pos in payload.get("positions") or []
    ]
    return (
        payload["name"],
        payload.get("venue"),
        payload.get("address"),
        payload["date"],
        payload.get("time"),
        payload.get("end_time") or None,
        json.dumps(positions, ensure_ascii=False),
    )


def create_event(payload: Dict[str, Any]) -> int:
    return db.insert(
        "INSERT INTO events(name, venue, address, date, time, end_time, positions_json) VALUES (?, ?, ?, ?, ?, ?, ?)",
        _values(payload),
    )


def update_event(event_id: int, payload: Dict[str, Any]) -> int:
    return db.execute(
        "UPDATE events SET name = ?, venue = ?, address = ?, date = ?, time = ?, end_time = ?, positions_json = ? "
        "WHERE id = ?",
        _values(payload) + (event_id,),
    )


def delete_event(event_id: int) -> int:
    return db.execute("DELETE FROM events WHERE id = ?", (event_id,))
