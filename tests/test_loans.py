"""Tests for the loan and mortgage calculators."""

import math

import pytest

from calculators import InvalidInput
from calculators import loans
from calculators.amortization import amortized_payment, remaining_balance


def test_mortgage_payment_example():
    r = loans.mortgage_payment(300000, 7, 30)
    assert math.isclose(r["monthly_payment"], 1995.91, abs_tol=0.01)
    assert len(r["schedule"]) == 360
    assert math.isclose(r["total_interest"], r["total_paid"] - 300000)


def test_mortgage_zero_rate():
    r = loans.mortgage_payment(200000, 0, 10)
    assert math.isclose(r["monthly_payment"], 1666.67, abs_tol=0.01)
    assert r["total_interest"] == pytest.approx(0.0, abs=1e-6)


@pytest.mark.parametrize("principal, apr, years", [(0, 7, 30), (300000, -1, 30), (300000, 7, 0)])
def test_mortgage_rejects_bad_input(principal, apr, years):
    with pytest.raises(InvalidInput):
        loans.mortgage_payment(principal, apr, years)


def test_apr_without_fees_equals_nominal():
    r = loans.apr_with_fees(200000, 6.5, 30, 0)
    assert r["apr"] == 6.5
    assert r["apr_difference"] == 0


def test_fees_raise_apr():
    r = loans.apr_with_fees(200000, 6.5, 30, 4000)
    assert r["amount_financed"] == 196000
    assert 6.5 < r["apr"] < 7.0
    assert r["apr_difference"] > 0


def test_fees_covering_loan_have_no_apr():
    r = loans.apr_with_fees(2000, 6.5, 5, 2500)
    assert r["apr"] is None
    assert r["apr_difference"] is None


def test_extra_payment_savings():
    r = loans.extra_payment_savings(300000, 6.5, 30, 200)
    assert r["months"] < 360
    assert r["months_saved"] == 360 - r["months"]
    assert r["interest_saved"] > 0
    assert math.isclose(r["baseline_interest"] - r["total_interest"], r["interest_saved"])


def test_zero_extra_payment_changes_nothing():
    r = loans.extra_payment_savings(100000, 5, 15, 0)
    assert r["months"] == 180
    assert r["interest_saved"] == pytest.approx(0.0, abs=0.05)


def test_balloon_loan():
    r = loans.balloon_loan(250000, 6, 30, 7)
    assert r["balloon_months"] == 84
    assert len(r["schedule"]) == 84
    assert math.isclose(r["balloon_payment"], remaining_balance(250000, 6, 360, 84))
    assert math.isclose(r["total_cost"], r["paid_before_balloon"] + r["balloon_payment"])


def test_balloon_requires_due_time():
    with pytest.raises(InvalidInput):
        loans.balloon_loan(250000, 6, 30, 0)


def test_refinance_savings():
    r = loans.refinance_savings(250000, 7.5, 25, 6.25, 25, 4000)
    assert r["monthly_savings"] > 0
    assert math.isclose(r["break_even_months"], 4000 / r["monthly_savings"])
    assert r["interest_saved"] > 0


def test_refinance_without_costs_has_no_break_even():
    r = loans.refinance_savings(250000, 7.5, 25, 6.25, 25, 0)
    assert r["break_even_months"] is None


def test_points_break_even():
    r = loans.points_break_even(300000, 30, 7.0, 6.75, 1)
    assert r["points_cost"] == 3000
    expected = amortized_payment(300000, 7.0, 360) - amortized_payment(300000, 6.75, 360)
    assert math.isclose(r["monthly_savings"], expected)
    assert math.isclose(r["break_even_months"], 3000 / expected)
    assert r["worth_it"] is True


def test_points_that_do_not_lower_rate():
    r = loans.points_break_even(300000, 30, 7.0, 7.0, 1)
    assert r["break_even_months"] is None
    assert r["worth_it"] is False


def test_payoff_time_zero_rate():
    r = loans.payoff_time(1000, 0, 300)
    assert r["months"] == 4
    assert r["total_interest"] == 0


def test_payoff_time_with_interest():
    r = loans.payoff_time(15000, 8, 400)
    assert 40 < r["months"] < 45
    assert r["total_interest"] > 0
    assert math.isclose(r["total_paid"], 15000 + r["total_interest"])


def test_payoff_requires_payment_above_interest():
    with pytest.raises(InvalidInput):
        loans.payoff_time(10000, 24, 200)


def test_compare_terms_sorted_by_interest():
    r = loans.compare_terms(300000, 6.5, [30, 10, 15])
    assert [o["years"] for o in r["options"]] == [10.0, 15.0, 30.0]
    assert r["best_term_years"] == 10.0
    assert math.isclose(r["lowest_payment"], r["options"][-1]["monthly_payment"])


def test_compare_terms_needs_a_valid_term():
    with pytest.raises(InvalidInput):
        loans.compare_terms(300000, 6.5, [0])


def test_loan_to_value():
    r = loans.loan_to_value(400000, 320000)
    assert math.isclose(r["ltv"], 80.0)
    assert r["equity"] == 80000
    assert r["verdict"].startswith("80")


def test_pmi_cost():
    r = loans.pmi_cost(350000, 35000, 0.5)
    assert r["loan_amount"] == 315000
    assert math.isclose(r["ltv"], 90.0)
    assert math.isclose(r["annual_pmi"], 1575.0)
    assert math.isclose(r["monthly_pmi"], 131.25)


def test_pmi_not_needed_when_paid_in_full():
    with pytest.raises(InvalidInput):
        loans.pmi_cost(350000, 350000, 0.5)


def test_rent_vs_buy():
    r = loans.rent_vs_buy(2000, 350000, 70000, 6.5, 30, 600)
    assert math.isclose(r["mortgage_payment"], amortized_payment(280000, 6.5, 360))
    assert math.isclose(r["monthly_ownership"], r["mortgage_payment"] + 600)
    assert r["difference"] > 0
    assert r["verdict"].startswith("Renting")


@pytest.mark.parametrize(
    "tool, args",
    [
        (loans.mortgage_payment, (300000, 7, 0.02)),
        (loans.apr_with_fees, (200000, 6.5, 0.02, 4000)),
        (loans.extra_payment_savings, (300000, 6.5, 0.02, 200)),
        (loans.refinance_savings, (250000, 7.5, 25, 6.25, 0.02, 4000)),
        (loans.refinance_savings, (250000, 7.5, 0.02, 6.25, 30, 4000)),
        (loans.points_break_even, (300000, 0.02, 7.0, 6.75, 1)),
        (loans.balloon_loan, (250000, 6.0, 0.02, 7)),
        (loans.balloon_loan, (250000, 6.0, 30, 0.02)),
        (loans.rent_vs_buy, (2000, 350000, 70000, 6.5, 0.02, 600)),
        (loans.biweekly_savings, (300000, 6.5, 0.02)),
    ],
)
def test_terms_under_a_month_are_rejected(tool, args):
    with pytest.raises(InvalidInput):
        tool(*args)


def test_balloon_due_after_term_rejected():
    with pytest.raises(InvalidInput):
        loans.balloon_loan(250000, 6, 30, 30)


def test_arm_payment_resets_after_intro():
    r = loans.arm_payment(400000, 5.5, 5, 7.5, 30)
    assert math.isclose(r["intro_payment"], amortized_payment(400000, 5.5, 360))
    balance = remaining_balance(400000, 5.5, 360, 60)
    assert math.isclose(r["reset_balance"], balance)
    assert math.isclose(r["adjusted_payment"], amortized_payment(balance, 7.5, 300))
    assert r["payment_change"] > 0
    assert len(r["schedule"]) == 360
    assert [row["month"] for row in r["schedule"][59:62]] == [60, 61, 62]
    assert r["schedule"][-1]["balance"] == pytest.approx(0.0, abs=0.01)


def test_arm_same_rate_matches_fixed_loan():
    r = loans.arm_payment(300000, 6, 5, 6, 30)
    assert r["payment_change"] == pytest.approx(0.0, abs=1e-6)
    assert r["total_interest"] == pytest.approx(loans.mortgage_payment(300000, 6, 30)["total_interest"], abs=0.05)


def test_arm_intro_must_end_before_term():
    with pytest.raises(InvalidInput):
        loans.arm_payment(300000, 5, 30, 7, 30)


def test_rate_change_without_caps():
    r = loans.rate_change_impact(300000, 30, 6.0, 7.5)
    assert r["rate_applied"] == 7.5
    assert r["capped"] is False
    assert math.isclose(r["new_payment"], amortized_payment(300000, 7.5, 360))
    assert r["monthly_change"] > 0
    assert r["interest_change"] > 0


def test_rate_change_uses_tighter_cap():
    r = loans.rate_change_impact(300000, 30, 6.0, 9.0, adjustment_cap=2.0, lifetime_cap=5.0)
    assert r["rate_applied"] == 8.0
    assert r["capped"] is True


def test_rate_drop_lowers_payment():
    r = loans.rate_change_impact(300000, 30, 7.0, 6.0, adjustment_cap=1.0)
    assert r["rate_applied"] == 6.0
    assert r["monthly_change"] < 0


def test_rate_change_rejects_negative_cap():
    with pytest.raises(InvalidInput):
        loans.rate_change_impact(300000, 30, 6.0, 7.0, adjustment_cap=-1)


def test_biweekly_zero_rate():
    r = loans.biweekly_savings(2600, 0, 1)
    assert r["biweekly_payment"] == pytest.approx(2600 / 24)
    assert r["periods"] == 24
    assert r["biweekly_interest"] == 0
    assert r["payoff_months"] == pytest.approx(24 * 12 / 26)


def test_biweekly_saves_interest_and_time():
    r = loans.biweekly_savings(300000, 6.5, 30)
    assert r["interest_saved"] > 0
    assert 0 < r["payoff_months"] < 360
    assert r["months_saved"] == pytest.approx(360 - r["payoff_months"])
