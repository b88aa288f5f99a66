"""Unit tests for the shared loan arithmetic.

Payments are checked against the standard annuity formula and the monthly
schedule against the loan it is built from.
"""

import math

import pytest

from calculators import amortization as am


def test_payment_example():
    """$300k at 7% over 30 years is about $1,995.91 a month."""
    payment = am.amortized_payment(300000, 7, 360)
    assert math.isclose(payment, 1995.91, abs_tol=0.01)


def test_zero_rate_payment_is_straight_line():
    payment = am.amortized_payment(200000, 0, 120)
    assert math.isclose(payment, 200000 / 120, rel_tol=1e-12)


@pytest.mark.parametrize(
    "principal, apr, months",
    [(0, 5, 120), (-1000, 5, 120), (1000, -1, 120), (1000, 5, 0), (float("nan"), 5, 120)],
)
def test_invalid_loans_give_none(principal, apr, months):
    assert am.amortized_payment(principal, apr, months) is None


def test_loan_summary_totals():
    summary = am.loan_summary(300000, 7, 30)
    assert summary["months"] == 360
    assert math.isclose(summary["total_paid"], summary["monthly_payment"] * 360, rel_tol=1e-12)
    assert math.isclose(summary["total_interest"], summary["total_paid"] - 300000, rel_tol=1e-12)


def test_schedule_retires_principal():
    """The principal column sums to the loan and the balance ends at zero."""
    rows = am.amortization_schedule(150000, 6, 180)
    assert len(rows) == 180
    assert rows[0]["month"] == 1
    assert math.isclose(rows[0]["interest"], 150000 * 0.005, rel_tol=1e-12)
    assert math.isclose(sum(r["principal"] for r in rows), 150000, abs_tol=0.05)
    assert rows[-1]["balance"] == pytest.approx(0.0, abs=0.01)


def test_schedule_zero_rate():
    rows = am.amortization_schedule(1200, 0, 12)
    assert len(rows) == 12
    assert all(r["interest"] == 0 for r in rows)
    assert all(math.isclose(r["payment"], 100.0) for r in rows)


def test_extra_payment_shortens_schedule():
    base = am.amortization_schedule(200000, 6.5, 360)
    extra = am.amortization_schedule(200000, 6.5, 360, extra_monthly=300)
    assert len(extra) < len(base)
    assert sum(r["interest"] for r in extra) < sum(r["interest"] for r in base)
    assert extra[-1]["balance"] == pytest.approx(0.0, abs=0.01)


def test_schedule_empty_for_invalid_loan():
    assert am.amortization_schedule(0, 5, 120) == []


def test_remaining_balance_zero_rate():
    assert math.isclose(am.remaining_balance(1200, 0, 12, 6), 600.0)


def test_remaining_balance_matches_schedule():
    rows = am.amortization_schedule(250000, 6, 360)
    balance = am.remaining_balance(250000, 6, 360, 84)
    assert math.isclose(balance, rows[83]["balance"], rel_tol=1e-8)


def test_present_value_zero_rate():
    assert math.isclose(am.present_value(100, 0.0, 12), 1200.0)


def test_solve_monthly_rate_recovers_rate():
    """Bisection backs the 6% rate out of its own payment."""
    payment = am.amortized_payment(100000, 6, 360)
    rate = am.solve_monthly_rate(payment, 100000, 360)
    assert rate == pytest.approx(0.005, abs=1e-6)
    assert am.annualize(rate) == pytest.approx(6.0, abs=1e-3)


def test_solve_monthly_rate_rejects_bad_input():
    assert am.solve_monthly_rate(0, 100000, 360) is None
    assert am.solve_monthly_rate(500, 0, 360) is None


@pytest.mark.parametrize("principal", [1000, 250000])
@pytest.mark.parametrize("apr", [0.0, 3.0, 7.5, 18.0])
@pytest.mark.parametrize("years", [1, 15, 30])
def test_higher_rate_costs_more(principal, apr, years):
    low = am.loan_summary(principal, apr, years)
    high = am.loan_summary(principal, apr + 1, years)
    assert high["monthly_payment"] > low["monthly_payment"]
    assert high["total_interest"] > low["total_interest"]


@pytest.mark.parametrize("principal", [500, 100000, 2000000])
@pytest.mark.parametrize("apr", [0.0, 0.5, 6.5, 29.99])
@pytest.mark.parametrize("months", [1, 12, 360])
def test_payments_cover_principal(principal, apr, months):
    payment = am.amortized_payment(principal, apr, months)
    assert payment * months >= principal - 1e-6


@pytest.mark.parametrize("financed", [199000, 196000, 180000])
def test_solved_rate_reproduces_amount_financed(financed):
    """The rate found for a fee-reduced amount discounts the payments back to it."""
    payment = am.amortized_payment(200000, 6.5, 360)
    rate = am.solve_monthly_rate(payment, financed, 360)
    assert am.present_value(payment, rate, 360) == pytest.approx(financed, abs=1e-6)
