"""Tests for savings growth, FIRE and retirement projections."""

import math

import pytest

from calculators import InvalidInput
from calculators import savings


def test_project_balance_includes_start():
    path = savings.project_balance(100, 0.1, 10, 2)
    assert path == pytest.approx([100, 120, 142])


def test_periods_to_target():
    assert savings.periods_to_target(100, 0.0, 50, 200, 10) == 2
    assert savings.periods_to_target(500, 0.0, 50, 200, 10) == 0
    assert savings.periods_to_target(0, 0.0, 0, 100, 5) is None


def test_fire_target_example():
    """$200k saved, $30k/yr, 6% growth, $50k/yr spending at a 4% withdrawal rate."""
    r = savings.fire_target(80000, 50000, 200000, 6, 4)
    assert r["fire_number"] == pytest.approx(1250000)
    assert r["annual_savings"] == 30000
    assert r["savings_rate"] == pytest.approx(37.5)
    assert r["years_to_fire"] == 16
    assert len(r["path"]) == 17
    assert r["path"][-1] >= r["target"] > r["path"][-2]


def test_fire_not_reached():
    r = savings.fire_target(40000, 50000, 0, 6, 4, max_years=30)
    assert r["annual_savings"] == 0
    assert r["years_to_fire"] is None
    assert r["status"] == "Not reached within 30 years (estimate)."
    assert len(r["path"]) == 31


def test_retirement_projection_without_growth():
    r = savings.retirement_projection(0, 10000, 0, 10, 40000, 4)
    assert r["projected_savings"] == pytest.approx(100000)
    assert r["target_nest_egg"] == pytest.approx(1000000)
    assert r["gap"] == pytest.approx(900000)
    assert r["projected_annual_income"] == pytest.approx(4000)
    assert r["projected_monthly_income"] == pytest.approx(4000 / 12)


def test_savings_goal_zero_rate():
    r = savings.savings_goal(2000, 300, 0, 20000)
    assert r["months"] == 60
    assert r["total_contributed"] == 18000
    assert r["interest_earned"] == 0
    assert len(r["path"]) == 61


def test_savings_goal_with_interest_is_faster():
    r = savings.savings_goal(2000, 300, 4, 20000)
    assert r["months"] < 60
    assert r["interest_earned"] > 0
    assert r["path"][-1] >= 20000 > r["path"][-2]


def test_savings_goal_already_met():
    r = savings.savings_goal(25000, 300, 4, 20000)
    assert r["months"] == 0
    assert r["path"] == [25000]


@pytest.mark.parametrize("current, monthly, rate, target", [(0, 0, 0, 1000), (0, 100, 5, 0)])
def test_savings_goal_rejects_unreachable(current, monthly, rate, target):
    with pytest.raises(InvalidInput):
        savings.savings_goal(current, monthly, rate, target)


def test_compound_interest_yearly():
    r = savings.compound_interest(10000, 5, 10, 1)
    assert math.isclose(r["future_value"], 10000 * 1.05 ** 10)
    assert math.isclose(r["effective_annual_rate"], 5.0)
    assert len(r["path"]) == 11
    assert math.isclose(r["path"][-1], r["future_value"])


def test_monthly_compounding_beats_nominal_rate():
    r = savings.compound_interest(10000, 5, 10, 12)
    assert r["effective_annual_rate"] == pytest.approx(5.116, abs=1e-3)


def test_compound_interest_rejects_zero_principal():
    with pytest.raises(InvalidInput):
        savings.compound_interest(0, 5, 10)


def test_drip_without_yield_matches_price_growth():
    r = savings.drip_growth(10000, 0, 5, 10)
    assert r["drip_advantage"] == 0
    assert math.isclose(r["value_with_drip"], 10000 * 1.05 ** 10)


def test_drip_one_year():
    r = savings.drip_growth(10000, 3, 0, 1)
    assert math.isclose(r["value_with_drip"], 10300)
    assert r["value_without_drip"] == 10000
    assert math.isclose(r["annual_dividend_without_drip"], 300)
    assert len(r["path"]) == 2


def test_401k_percent_of_salary_match():
    r = savings.employer_401k(0, 10000, 0, 10, "percent_of_salary", salary=80000, match_percent=3)
    assert r["employer_annual"] == pytest.approx(2400)
    assert r["final_balance"] == pytest.approx(124000)
    assert r["growth"] == pytest.approx(0)


def test_401k_flat_match_and_growth():
    r = savings.employer_401k(10000, 5000, 7, 20, "flat", employer_flat=1000)
    assert r["total_annual"] == 6000
    assert r["total_contributed"] == 120000
    assert r["growth"] > 0


def test_401k_unknown_match_mode():
    with pytest.raises(InvalidInput):
        savings.employer_401k(0, 1000, 5, 10, "double")


def test_retirement_income_sources():
    r = savings.retirement_income(1000000, 4, other_income=6000, ss_monthly_pia=2000, ss_claim_age=67)
    assert r["from_portfolio"] == pytest.approx(40000)
    assert r["social_security"] == pytest.approx(24000)
    assert r["total_annual_income"] == pytest.approx(70000)
    assert r["monthly_income"] == pytest.approx(70000 / 12)


def test_retirement_income_without_social_security():
    r = savings.retirement_income(500000, 4)
    assert r["social_security"] == 0
    assert r["total_annual_income"] == pytest.approx(20000)


def test_retirement_income_couple():
    r = savings.retirement_income(0, 4, ss_monthly_pia=2000, ss_claim_age=67,
                                  spouse_monthly_pia=1000, spouse_claim_age=62)
    assert r["own_benefit"] == pytest.approx(24000)
    assert r["spouse_benefit"] == pytest.approx(1000 * 0.65 * 12)
    assert r["social_security"] == pytest.approx(24000 + 7800)


def test_retirement_income_survivor_keeps_larger_benefit():
    r = savings.retirement_income(0, 4, ss_monthly_pia=1200, spouse_monthly_pia=2000, survivor=True)
    assert r["social_security"] == pytest.approx(24000)
    assert r["monthly_income"] == pytest.approx(2000)


def test_retirement_income_spouse_only():
    r = savings.retirement_income(0, 4, spouse_monthly_pia=1500)
    assert r["own_benefit"] == 0
    assert r["social_security"] == pytest.approx(18000)
