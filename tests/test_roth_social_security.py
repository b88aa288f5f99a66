"""Tests for the Roth comparison, IRA limits and Social Security estimator."""

import math

from calculators import roth
from calculators import social_security as ss


def test_roth_vs_traditional_without_growth():
    r = roth.roth_vs_traditional(1000, 10, 0, 22, 15)
    assert r["future_value"] == 10000
    assert math.isclose(r["traditional_after_tax"], 8500)
    assert math.isclose(r["difference"], 1500)
    assert math.isclose(r["tax_paid_now"], 2200)
    assert r["better"] == "Roth"


def test_roth_future_value_annuity():
    r = roth.roth_vs_traditional(7000, 25, 7, 22, 15)
    expected = 7000 * ((1.07 ** 25 - 1) / 0.07)
    assert math.isclose(r["future_value"], expected)


def test_no_retirement_tax_is_equal():
    r = roth.roth_vs_traditional(1000, 10, 5, 22, 0)
    assert r["better"] == "Equal"


def test_ira_limits_catch_up_at_50():
    schedule = roth.ira_limit_schedule(48, 52, base_limit=7000, inflation=0.0)
    assert schedule == {48: 7000.0, 49: 7000.0, 50: 8000.0, 51: 8000.0}


def test_ira_limits_round_to_500():
    schedule = roth.ira_limit_schedule(30, 33)
    assert schedule == {30: 7000.0, 31: 7000.0, 32: 7500.0}


def test_ira_limits_empty_range():
    assert roth.ira_limit_schedule(65, 65) == {}


def test_early_claiming_reduction():
    """Claiming before FRA reduces benefits by 7% per year."""
    benefit = ss.annual_benefit(2000, 65)
    assert math.isclose(benefit, 2000 * 0.86 * 12, rel_tol=1e-4)


def test_delayed_claiming_credit():
    """Claiming after FRA increases benefits by 8% per year up to age 70."""
    benefit = ss.annual_benefit(2000, 70)
    assert math.isclose(benefit, 2000 * 1.24 * 12, rel_tol=1e-4)


def test_claiming_age_is_clamped():
    assert math.isclose(ss.claim_factor(75), ss.claim_factor(70))
    assert math.isclose(ss.claim_factor(60), ss.claim_factor(62))
    assert ss.claim_factor(67) == 1.0


def test_no_pia_no_benefit():
    assert ss.annual_benefit(0, 67) == 0.0
    assert ss.annual_benefit(-100, 67) == 0.0


def test_couple_and_survivor_benefit():
    couple = ss.household_benefit(1500, 67, spouse_pia=1000, spouse_claim_age=67)
    survivor = ss.household_benefit(1500, 67, spouse_pia=1000, spouse_claim_age=67, survivor=True)
    assert math.isclose(couple["household"], 2500 * 12)
    assert math.isclose(couple["spouse"], 1000 * 12)
    assert math.isclose(survivor["household"], 1500 * 12)


def test_survivor_keeps_larger_benefit():
    r = ss.household_benefit(800, 62, spouse_pia=1500, spouse_claim_age=70, survivor=True)
    assert math.isclose(r["household"], 1500 * 1.24 * 12)
