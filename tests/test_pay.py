from domain.models import PaymentConfig, TravelTier
from rules.pay import (
    NO_TRAVEL_TIER,
    NON_FINITE_INPUT,
    NON_POSITIVE_HOURS,
    UNKNOWN_POSITION,
    calculate_pay,
    round_money,
    tier_problems,
)


def make_config(**overrides) -> PaymentConfig:
    params = {
        "pay_rates": {"Dealer": 20.0, "Blackjack Dealer": 25.0},
        "travel_tiers": (TravelTier(0, 19, 0), TravelTier(20, 40, 10), TravelTier(41, 60, 20)),
        "bonuses": {"Lake Geneva": 15.0, "Holiday Multiplier": 1.5},
    }
    params.update(overrides)
    return PaymentConfig(**params)


def test_full_breakdown_with_bonus_and_holiday():
    pay = calculate_pay("Dealer", 5, 30, True, True, make_config())
    assert pay.base_pay == 100.00
    assert pay.travel_pay == 10.00
    assert pay.lake_geneva_bonus == 15.00
    assert pay.subtotal == 125.00
    assert pay.holiday_multiplier == 1.50
    assert pay.total_pay == 187.50
    assert not pay.degraded


def test_no_holiday_keeps_subtotal():
    pay = calculate_pay("Blackjack Dealer", 4.5, 50, False, False, make_config())
    assert pay.holiday_multiplier == 1.0
    assert pay.total_pay == pay.subtotal == 132.50
    assert pay.lake_geneva_bonus == 0


def test_unknown_position_pays_zero_base_and_is_flagged():
    pay = calculate_pay("Juggler", 3, 10, False, False, make_config())
    assert pay.base_pay == 0.00
    assert pay.total_pay == 0.00
    assert UNKNOWN_POSITION in pay.warnings
    assert pay.degraded


def test_position_lookup_is_case_sensitive():
    pay = calculate_pay("dealer", 2, 0, False, False, make_config())
    assert pay.base_pay == 0
    assert UNKNOWN_POSITION in pay.warnings


def test_miles_outside_every_tier_gives_no_travel_pay():
    pay = calculate_pay("Dealer", 2, 500, False, False, make_config())
    assert pay.travel_pay == 0
    assert NO_TRAVEL_TIER in pay.warnings


def test_tier_bounds_are_inclusive():
    config = make_config()
    assert calculate_pay("Dealer", 1, 20, False, False, config).travel_pay == 10
    assert calculate_pay("Dealer", 1, 40, False, False, config).travel_pay == 10
    assert calculate_pay("Dealer", 1, 41, False, False, config).travel_pay == 20


def test_missing_bonuses_fall_back_to_defaults():
    pay = calculate_pay("Dealer", 1, 0, True, True, make_config(bonuses={}))
    assert pay.lake_geneva_bonus == 15.0
    assert pay.holiday_multiplier == 1.5
    assert pay.total_pay == 52.50


def test_configured_zero_bonus_is_honoured():
    pay = calculate_pay("Dealer", 1, 0, True, False, make_config(bonuses={"Lake Geneva": 0}))
    assert pay.lake_geneva_bonus == 0


def test_non_positive_hours_are_flagged_not_raised():
    pay = calculate_pay("Dealer", 0, 0, False, False, make_config())
    assert pay.base_pay == 0
    assert NON_POSITIVE_HOURS in pay.warnings


def test_non_finite_inputs_are_flagged_not_raised():
    pay = calculate_pay("Dealer", float("inf"), 0, False, False, make_config())
    assert pay.base_pay == 0
    assert pay.total_pay == 0
    assert NON_FINITE_INPUT in pay.warnings

    pay = calculate_pay("Dealer", 2, float("nan"), False, False, make_config())
    assert pay.base_pay == 40.0
    assert pay.travel_pay == 0
    assert NON_FINITE_INPUT in pay.warnings


def test_calculation_is_idempotent():
    config = make_config()
    first = calculate_pay("Dealer", 3.75, 33, True, True, config)
    second = calculate_pay("Dealer", 3.75, 33, True, True, config)
    assert first == second


def test_round_money_rounds_half_up_on_exact_value():
    assert round_money(0.125) == 0.13
    assert round_money(2.675) == 2.67
    assert round_money(10) == 10.0


def test_tier_problems_reports_overlaps():
    good = PaymentConfig.from_rows({}, [{"min_miles": 20, "max_miles": 40, "pay_amount": 10},
                                        {"min_miles": 0, "max_miles": 19, "pay_amount": 0}], {})
    assert tier_problems(good) == []
    assert [t.min_miles for t in good.travel_tiers] == [0, 20]
    bad = PaymentConfig.from_rows({}, [{"min_miles": 0, "max_miles": 25, "pay_amount": 0},
                                       {"min_miles": 20, "max_miles": 40, "pay_amount": 10}], {})
    assert len(tier_problems(bad)) == 1
