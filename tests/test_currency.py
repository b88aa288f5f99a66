"""Tests for the currency exchange and transfer cost calculators."""

import math

import pytest

from calculators import InvalidInput
from calculators import currency


def test_exchange_rate_markup():
    r = currency.exchange_rate_markup(1.10, 1.05, 1000)
    assert r["markup_percent"] == pytest.approx(4.5454545, rel=1e-6)
    assert r["hidden_loss"] == pytest.approx(50.0)
    assert r["value_at_mid"] == pytest.approx(1100.0)


def test_markup_rejects_zero_rate():
    with pytest.raises(InvalidInput):
        currency.exchange_rate_markup(0, 1.05, 1000)


def test_cheapest_transfer_default_providers():
    r = currency.cheapest_transfer(1000)
    names = [p["name"] for p in r["providers"]]
    assert names == ["Online Transfer", "Cash Pickup", "Bank Wire"]
    assert [p["total_cost"] for p in r["providers"]] == pytest.approx([15, 28, 40])
    assert r["cheapest"] == "Online Transfer"
    assert [p["cheapest"] for p in r["providers"]] == [True, False, False]


def test_cheapest_transfer_skips_unnamed_rows():
    providers = [{"name": "", "fixed_fee": 0}, {"name": "Only", "fixed_fee": 3, "percent_fee": 0, "fx_markup": 0}]
    r = currency.cheapest_transfer(100, providers)
    assert len(r["providers"]) == 1
    assert math.isclose(r["providers"][0]["amount_received"], 97)


def test_cheapest_transfer_needs_a_provider():
    with pytest.raises(InvalidInput):
        currency.cheapest_transfer(1000, [])


def test_wire_transfer_cost():
    r = currency.wire_transfer_cost(2000, 25, 15, 10, 1.2)
    assert math.isclose(r["fixed_fees"], 50)
    assert math.isclose(r["total_cost"], 74)
    assert math.isclose(r["effective_rate"], 3.7)
    assert math.isclose(r["amount_remaining"], 1926)


def test_wire_transfer_rejects_negative_fees():
    with pytest.raises(InvalidInput):
        currency.wire_transfer_cost(2000, -1)


def test_cash_vs_card():
    r = currency.cash_vs_card(1000, 0.92, 0.88, 5, 1, None, 3)
    assert math.isclose(r["cash_cost"], 53.2)
    assert math.isclose(r["card_cost"], 27.6)
    assert r["card_rate_used"] == 0.92
    assert r["cheaper"] == "Card payment"
    assert math.isclose(r["difference"], 25.6)


def test_cash_vs_card_tie_without_fees():
    r = currency.cash_vs_card(1000, 0.92, 0.92)
    assert r["cheaper"] == "Tie"


def test_cash_vs_card_rejects_bad_card_rate():
    with pytest.raises(InvalidInput):
        currency.cash_vs_card(1000, 0.92, 0.88, card_rate=0)
