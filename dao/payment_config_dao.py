from __future__ import annotations

from typing import Any, Dict, List

from domain.models import PaymentConfig
from services import db


def get_pay_rates() -> Dict[str, float]:
    rows = db.query_all("SELECT position, hourly_rate FROM pay_rates ORDER BY position")
    return {row["position"]: float(row["hourly_rate"]) for row in rows}


def get_travel_tiers() -> List[Dict[str, Any]]:
    rows = db.query_all("SELECT id, min_miles, max_miles, pay_amount FROM travel_tiers ORDER BY min_miles ASC")
    return [
        {
            "id": int(row["id"]),
            "min_miles": float(row["min_miles"]),
            "max_miles": float(row["max_miles"]),
            "pay_amount": float(row["pay_amount"]),
        }
        for row in rows
    ]


def get_bonuses() -> Dict[str, float]:
    rows = db.query_all("SELECT bonus_name, bonus_amount FROM bonuses ORDER BY bonus_name")
    return {row["bonus_name"]: float(row["bonus_amount"]) for row in rows}


def load_payment_config() -> PaymentConfig:
    return PaymentConfig.from_rows(get_pay_rates(), get_travel_tiers(), get_bonuses())


def save_pay_rates(rates: Dict[str, Any]) -> None:
    db.executemany(
        "INSERT INTO pay_rates(position, hourly_rate) VALUES (?, ?) "
        "ON CONFLICT(position) DO UPDATE SET hourly_rate=excluded.hourly_rate",
        [(position, float(rate)) for position, rate in rates.items()],
    )


def replace_travel_tiers(tiers: List[Dict[str, Any]]) -> None:
    db.execute("DELETE FROM travel_tiers")
    db.executemany(
        "INSERT INTO travel_tiers(min_miles, max_miles, pay_amount) VALUES (?, ?, ?)",
        [(float(t["min_miles"]), float(t["max_miles"]), float(t["pay_amount"])) for t in tiers],
    )


def save_bonuses(bonuses: Dict[str, Any]) -> None:
    db.executemany(
        "INSERT INTO bonuses(bonus_name, bonus_amount) VALUES (?, ?) "
        "ON CONFLICT(bonus_name) DO UPDATE SET bonus_amount=excluded.bonus_amount",
        [(name, float(amount)) for name, amount in bonuses.items()],
    )
