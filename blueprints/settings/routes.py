from __future__ import annotations

from flask import Blueprint, jsonify, request

from blueprints.params import number
from dao import payment_config_dao, settings_dao
from domain.models import PaymentConfig
from rules.pay import tier_problems

bp = Blueprint("settings", __name__)


@bp.route("/api/settings", methods=["GET"])
def get_settings():
    return jsonify(settings_dao.get_settings())


@bp.route("/api/settings", methods=["POST"])
def save_settings():
    payload = request.get_json(force=True)
    settings_dao.save_settings(payload)
    return jsonify({"ok": True})


@bp.route("/api/settings/payment-config", methods=["GET"])
def get_payment_config():
    return jsonify(
        {
            "pay_rates": payment_config_dao.get_pay_rates(),
            "travel_tiers": payment_config_dao.get_travel_tiers(),
            "bonuses": payment_config_dao.get_bonuses(),
        }
    )


def _numbers_problem(payload) -> str | None:
    try:
        for table in ("pay_rates", "bonuses"):
            values = payload.get(table) or {}
            for key in values:
                if number(values, key) is None:
                    return f"{table} values are required"
        for tier in payload.get("travel_tiers") or []:
            for key in ("min_miles", "max_miles", "pay_amount"):
                if number(tier, key) is None:
                    return f"travel tiers need {key}"
    except (AttributeError, TypeError, ValueError):
        return "payment config values must be finite numbers"
    return None


@bp.route("/api/settings/payment-config", methods=["POST"])
def save_payment_config():
    payload = request.get_json(force=True)
    problem = _numbers_problem(payload)
    if problem:
        return jsonify({"ok": False, "errors": [problem]}), 400
    tiers = payload.get("travel_tiers")
    if tiers is not None:
        problems = tier_problems(PaymentConfig.from_rows({}, tiers, {}))
        if problems:
            return jsonify({"ok": False, "errors": problems}), 400
    if any(float(rate) < 0 for rate in (payload.get("pay_rates") or {}).values()):
        return jsonify({"ok": False, "errors": ["pay rates must not be negative"]}), 400
    if payload.get("pay_rates"):
        payment_config_dao.save_pay_rates(payload["pay_rates"])
    if tiers is not None:
        payment_config_dao.replace_travel_tiers(tiers)
    if payload.get("bonuses"):
        payment_config_dao.save_bonuses(payload["bonuses"])
    return jsonify({"ok": True})

