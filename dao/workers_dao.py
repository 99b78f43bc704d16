from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from services import db

_COLUMNS = "id, name, email, phone, address, skills_json, rank, reliability, total_gigs, is_active"


def _row_to_dict(row) -> Dict[str, Any]:
    return {
        "id": int(row["id"]),
        "name": row["name"],
        "email": row["email"] or "",
        "phone": row["phone"] or "",
        "address": row["address"] or "",
        "skills": json.loads(row["skills_json"]) if row["skills_json"] else [],
        "rank": int(row["rank"]),
        "reliability": float(row["reliability"]),
        "total_gigs": int(row["total_gigs"]),
        "is_active": bool(row["is_active"]),
    }


def list_workers(include_inactive: bool = False) -> List[Dict[str, Any]]:
    rows = db.query_all(
        f"SELECT {_COLUMNS} FROM workers"
        + ("" if include_inactive else " WHERE is_active = 1")
        + " ORDER BY name"
    )
    return [_row_to_dict(row) for row in rows]


def get_worker(worker_id: int) -> Optional[Dict[str, Any]]:
    row = db.query_one(f"SELECT {_COLUMNS} FROM workers WHERE id = ?", (worker_id,))
    if not row:
        return None
    return _row_to_dict(row)


def _values(payload: Dict[str, Any]) -> tuple:
    return (
        payload["name"],
        payload.get("email"),
        payload.get("phone"),
        payload.get("address"),
        json.dumps(list(payload.get("skills") or []), ensure_ascii=False),
        int(payload.get("rank") or 5),
        float(payload.get("reliability", 5.0)),
        int(payload.get("total_gigs") or 0),
        1 if payload.get("is_active", True) else 0,
    )


def create_worker(payload: Dict[str, Any]) -> int:
    return db.insert(
        "INSERT INTO workers(name, email, phone, address, skills_json, rank, reliability, total_gigs, is_active) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
        _values(payload),
    )


def update_worker(worker_id: int, payload: Dict[str, Any]) -> int:
    return db.execute(
        "UPDATE workers SET name = ?, email = ?, phone = ?, address = ?, skills_json = ?, rank = ?, "
        "reliability = ?, total_gigs = ?, is_active = ? WHERE id = ?",
        _values(payload) + (worker_id,),
    )


def delete_worker(worker_id: int) -> int:
    return db.execute("DELETE FROM workers WHERE id = ?", (worker_id,))
