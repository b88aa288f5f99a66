"""Tests for credit card payoff, multi-debt plans and debt-to-income."""

import math

import pytest

from calculators import InvalidInput
from calculators import debt

DEBTS = [
    {"name": "A", "balance": 500, "rate": 20, "min_payment": 50},
    {"name": "B", "balance": 200, "rate": 5, "min_payment": 50},
]


def test_credit_card_payoff_closed_form():
    """$5,000 at 22% paying $200 a month takes 34 months."""
    r = debt.credit_card_payoff(5000, 22, 200)
    assert r["months"] == 34
    assert math.isclose(r["total_paid"], 6800)
    assert math.isclose(r["interest_paid"], 1800)


def test_credit_card_zero_rate():
    r = debt.credit_card_payoff(1000, 0, 300)
    assert r["months"] == 4
    assert math.isclose(r["interest_paid"], 200)


def test_credit_card_payment_below_interest():
    with pytest.raises(InvalidInput):
        debt.credit_card_payoff(10000, 24, 150)


def test_avalanche_targets_highest_rate():
    plan = debt.debt_payoff_plan(DEBTS, 200, "avalanche")
    assert [p["name"] for p in plan["payoff_order"]] == ["A", "B"]
    assert plan["months"] == 5
    assert plan["strategy"] == "avalanche"


def test_snowball_targets_smallest_balance():
    plan = debt.debt_payoff_plan(DEBTS, 200, "snowball")
    assert plan["payoff_order"][0] == {"name": "B", "month": 2}


def test_avalanche_never_costs_more_interest():
    avalanche = debt.debt_payoff_plan(DEBTS, 200, "avalanche")
    snowball = debt.debt_payoff_plan(DEBTS, 200, "snowball")
    assert avalanche["total_interest"] <= snowball["total_interest"]


def test_zero_rate_plan():
    debts = [
        {"name": "Small", "balance": 300, "rate": 0, "min_payment": 100},
        {"name": "Large", "balance": 1000, "rate": 0, "min_payment": 100},
    ]
    plan = debt.debt_payoff_plan(debts, 300, "snowball")
    assert plan["months"] == 5
    assert plan["total_interest"] == 0
    assert plan["payoff_order"] == [{"name": "Small", "month": 2}, {"name": "Large", "month": 5}]


def test_blank_rows_are_skipped_and_named():
    debts = [
        {"name": "", "balance": 100, "rate": 0, "min_payment": 50},
        {"name": "Empty", "balance": 0, "rate": 10, "min_payment": 25},
    ]
    plan = debt.debt_payoff_plan(debts, 100, "avalanche")
    assert plan["payoff_order"] == [{"name": "Debt 1", "month": 1}]


def test_budget_must_cover_minimums():
    with pytest.raises(InvalidInput):
        debt.debt_payoff_plan(DEBTS, 80, "avalanche")


def test_plan_needs_debts():
    with pytest.raises(InvalidInput):
        debt.debt_payoff_plan([], 500, "avalanche")


def test_unknown_strategy():
    with pytest.raises(InvalidInput):
        debt.debt_payoff_plan(DEBTS, 200, "random")


@pytest.mark.parametrize(
    "monthly_debt, band",
    [(1800, "healthy"), (2400, "manageable"), (3000, "high")],
)
def test_debt_to_income_bands(monthly_debt, band):
    r = debt.debt_to_income(monthly_debt, 6000)
    assert r["band"] == band
    assert math.isclose(r["dti"], monthly_debt / 60)
    assert r["remaining_income"] == 6000 - monthly_debt


def test_debt_to_income_needs_income():
    with pytest.raises(InvalidInput):
        debt.debt_to_income(500, 0)


def test_balance_transfer_zero_rate_fee_costs_more():
    r = debt.balance_transfer(1200, 0, 100)
    assert r["fee"] == pytest.approx(36)
    assert r["current_months"] == 12
    assert r["transfer_months"] == 13
    assert r["savings"] == pytest.approx(-36)
    assert r["better"] == "Keep current card"


def test_balance_transfer_beats_high_rate_card():
    r = debt.balance_transfer(5000, 24, 200)
    assert r["transfer_interest"] < r["current_interest"]
    assert r["savings"] > 0
    assert r["better"] == "Transfer"
    assert math.isclose(r["transfer_total_paid"], 5000 + r["fee"] + r["transfer_interest"])


def test_balance_transfer_intro_period_is_interest_free():
    r = debt.balance_transfer(2400, 20, 200, transfer_fee=0, intro_months=12)
    assert r["transfer_months"] == 12
    assert r["transfer_interest"] == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize(
    "args",
    [(0, 20, 100), (5000, 20, 0), (5000, 20, 50), (5000, 20, 200, -1)],
)
def test_balance_transfer_rejects_bad_input(args):
    with pytest.raises(InvalidInput):
        debt.balance_transfer(*args)
