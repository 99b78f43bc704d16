from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Iterator, Sequence

from flask import current_app, g

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "migrations" / "schema.sql"
SEED_PATH = Path(__file__).resolve().parent.parent / "seeds" / "seed.sql"


class DatabaseError(RuntimeError):
    """Raised when the SQLite layer encounters an unexpected error."""


def get_db() -> sqlite3.Connection:
    if "db" not in g:
        db_path = current_app.config["DATABASE"]
        conn = sqlite3.connect(db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        g.db = conn
    return g.db  # type: ignore[return-value]


def close_db(_: Any) -> None:
    conn = g.pop("db", None)
    if conn is not None:
        conn.close()


def _commit(db: sqlite3.Connection) -> None:
    if not g.get("in_transaction"):
        db.commit()


@contextmanager
def transaction() -> Iterator[sqlite3.Connection]:
    """Group several writes into one commit; nothing is kept if any of them fails."""

    db = get_db()
    if g.get("in_transaction"):
        yield db
        return
    g.in_transaction = True
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    else:
        db.commit()
    finally:
        g.in_transaction = False


def executescript(script: str) -> None:
    db = get_db()
    try:
        db.executescript(script)
    except sqlite3.Error as exc:
        raise DatabaseError(str(exc)) from exc


def initialize_schema() -> None:
    script = SCHEMA_PATH.read_text(encoding="utf-8")
    executescript(script)


def seed_database() -> None:
    db = get_db()
    cursor = db.execute("SELECT COUNT(1) FROM settings")
    row = cursor.fetchone()
    if row and row[0]:
        return
    script = SEED_PATH.read_text(encoding="utf-8")
    executescript(script)


def query_one(sql: str, params: Sequence[Any] | None = None) -> sqlite3.Row | None:
    db = get_db()
    cur = db.execute(sql, params or [])
    try:
        return cur.fetchone()
    finally:
        cur.close()


def query_all(sql: str, params: Sequence[Any] | None = None) -> list[sqlite3.Row]:
    db = get_db()
    cur = db.execute(sql, params or [])
    try:
        return cur.fetchall()
    finally:
        cur.close()


def execute(sql: str, params: Sequence[Any] | None = None) -> int:
    db = get_db()
    try:
        cur = db.execute(sql, params or [])
    except sqlite3.IntegrityError as exc:
        db.rollback()
        raise DatabaseError(str(exc)) from exc
    _commit(db)
    return cur.rowcount


def insert(sql: str, params: Sequence[Any] | None = None) -> int:
    db = get_db()
    try:
        cur = db.execute(sql, params or [])
    except sqlite3.IntegrityError as exc:
        db.rollback()
        raise DatabaseError(str(exc)) from exc
    _commit(db)
    return int(cur.lastrowid)


def executemany(sql: str, seq_of_params: Iterable[Sequence[Any]]) -> None:
    db = get_db()
    db.executemany(sql, seq_of_params)
    _commit(db)


def read_setting(key: str) -> str | None:
    row = query_one("SELECT setting_value FROM settings WHERE setting_key = ?", (key,))
    return row["setting_value"] if row else None


def upsert_setting(key: str, value: Any) -> None:
    db = get_db()
    blob = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
    now = datetime.utcnow().isoformat()
    db.execute(
        "INSERT INTO settings(setting_key, setting_value, updated_at) VALUES (?, ?, ?) "
        "ON CONFLICT(setting_key) DO UPDATE SET setting_value=excluded.setting_value, updated_at=excluded.updated_at",
        (key, blob, now),
    )
    _commit(db)


def read_settings() -> dict[str, str]:
    rows = query_all("SELECT setting_key, setting_value FROM settings ORDER BY setting_key")
    return {str(row["setting_key"]): row["setting_value"] for row in rows}
