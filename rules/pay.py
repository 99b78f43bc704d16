"""Pay calculation for a single assignment."""
from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from domain.models import (
    DEFAULT_HOLIDAY_MULTIPLIER,
    DEFAULT_LAKE_GENEVA_BONUS,
    HOLIDAY_MULTIPLIER,
    LAKE_GENEVA,
    PayBreakdown,
    PaymentConfig,
)

logger = logging.getLogger(__name__)

UNKNOWN_POSITION = "unknown_position"
NON_POSITIVE_HOURS = "non_positive_hours"
NEGATIVE_MILES = "negative_miles"
NO_TRAVEL_TIER = "no_travel_tier"
NON_FINITE_INPUT = "non_finite_input"

_CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Round half-up to cents on the exact binary value of *value*."""

    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def travel_pay_for(miles: float, config: PaymentConfig) -> Optional[float]:
    for tier in config.travel_tiers:
        if tier.contains(miles):
            return tier.pay_amount
    return None


def tier_problems(config: PaymentConfig) -> List[str]:
    """Describe inverted or overlapping tiers; an empty list means well-formed."""

    problems: List[str] = []
    previous = None
    for tier in config.travel_tiers:
        if tier.min_miles > tier.max_miles:
            problems.append(f"tier {tier.min_miles}-{tier.max_miles} has min above max")
        if previous is not None and tier.min_miles <= previous.max_miles:
            problems.append(
                f"tier {tier.min_miles}-{tier.max_miles} overlaps {previous.min_miles}-{previous.max_miles}"
            )
        previous = tier
    return problems


def calculate_pay(
    position: str,
    hours: float,
    miles: float,
    is_lake_geneva: bool,
    is_holiday: bool,
    config: PaymentConfig,
) -> PayBreakdown:
    warnings: List[str] = []

    if not (math.isfinite(hours) and math.isfinite(miles)):
        warnings.append(NON_FINITE_INPUT)
        hours = hours if math.isfinite(hours) else 0
        miles = miles if math.isfinite(miles) else 0

    rate = config.pay_rates.get(position)
    if rate is None:
        warnings.append(UNKNOWN_POSITION)
    if hours <= 0:
        warnings.append(NON_POSITIVE_HOURS)
    if miles < 0:
        warnings.append(NEGATIVE_MILES)

    base_pay = hours * (rate or 0)

    travel_pay = travel_pay_for(miles, config)
    if travel_pay is None:
        warnings.append(NO_TRAVEL_TIER)
        travel_pay = 0

    lake_geneva_bonus = config.bonuses.get(LAKE_GENEVA, DEFAULT_LAKE_GENEVA_BONUS) if is_lake_geneva else 0

    subtotal = base_pay + travel_pay + lake_geneva_bonus

    holiday_multiplier = config.bonuses.get(HOLIDAY_MULTIPLIER, DEFAULT_HOLIDAY_MULTIPLIER) if is_holiday else 1.0
    total_pay = subtotal * holiday_multiplier

    if warnings:
        logger.warning("Degraded pay for position %r: %s", position, ", ".join(warnings))

    return PayBreakdown(
        base_pay=round_money(base_pay),
        travel_pay=round_money(travel_pay),
        lake_geneva_bonus=round_money(lake_geneva_bonus),
        subtotal=round_money(subtotal),
        holiday_multiplier=round_money(holiday_multiplier),
        total_pay=round_money(total_pay),
        warnings=tuple(warnings),
    )


__all__ = [
    "calculate_pay",
    "round_money",
    "travel_pay_for",
    "tier_problems",
    "UNKNOWN_POSITION",
    "NON_POSITIVE_HOURS",
    "NEGATIVE_MILES",
    "NO_TRAVEL_TIER",
    "NON_FINITE_INPUT",
]
