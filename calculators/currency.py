"""Currency exchange and money transfer cost calculators.

Exchange rates are quoted as units of the destination currency per unit of the
source currency.  Percentage fees and markups are percentages of the amount
sent.

Example
-------

>>> r = exchange_rate_markup(1.10, 1.05, 1000)
>>> round(r["markup_percent"], 4), round(r["hidden_loss"], 2)
(4.5455, 50.0)
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .errors import InvalidInput

DEFAULT_PROVIDERS = (
    {"name": "Bank Wire", "fixed_fee": 25.0, "percent_fee": 0.0, "fx_markup": 1.5},
    {"name": "Online Transfer", "fixed_fee": 4.0, "percent_fee": 0.5, "fx_markup": 0.6},
    {"name": "Cash Pickup", "fixed_fee": 8.0, "percent_fee": 1.0, "fx_markup": 1.0},
)


def exchange_rate_markup(mid_rate: float, offered_rate: float, amount: float) -> Dict:
    """Hidden cost of an offered rate against the mid-market rate."""
    if mid_rate <= 0 or offered_rate <= 0 or amount <= 0:
        raise InvalidInput("Enter a mid-market rate, offered rate and amount greater than 0.")
    return {
        "markup_percent": (mid_rate - offered_rate) / mid_rate * 100,
        "hidden_loss": amount * (mid_rate - offered_rate),
        "value_at_mid": amount * mid_rate,
        "value_at_offered": amount * offered_rate,
    }


def cheapest_transfer(amount: float, providers: Optional[Iterable[Dict]] = None) -> Dict:
    """Rank transfer providers by the all-in cost of sending ``amount``."""
    if amount <= 0:
        raise InvalidInput("Enter an amount to send greater than 0.")
    rows: List[Dict] = []
    for p in providers if providers is not None else DEFAULT_PROVIDERS:
        name = (p.get("name") or "").strip()
        if not name:
            continue
        fixed = max(0.0, float(p.get("fixed_fee", 0.0) or 0.0))
        pct = max(0.0, float(p.get("percent_fee", 0.0) or 0.0))
        fx = max(0.0, float(p.get("fx_markup", 0.0) or 0.0))
        total = fixed + amount * pct / 100 + amount * fx / 100
        rows.append({
            "name": name,
            "fixed_fee": fixed,
            "percent_fee_cost": amount * pct / 100,
            "fx_cost": amount * fx / 100,
            "total_cost": total,
            "cost_rate": total / amount * 100,
            "amount_received": amount - total,
            "cheapest": False,
        })
    if not rows:
        raise InvalidInput("Add at least one provider.")
    rows.sort(key=lambda row: row["total_cost"])
    rows[0]["cheapest"] = True
    return {"providers": rows, "cheapest": rows[0]["name"], "cheapest_cost": rows[0]["total_cost"]}


def wire_transfer_cost(
    amount: float,
    outgoing_fee: float = 0.0,
    intermediary_fees: float = 0.0,
    recipient_fees: float = 0.0,
    fx_markup: float = 0.0,
) -> Dict:
    """All-in cost of an international wire."""
    if amount <= 0:
        raise InvalidInput("Enter a transfer amount greater than 0.")
    if min(outgoing_fee, intermediary_fees, recipient_fees, fx_markup) < 0:
        raise InvalidInput("Fees and markup cannot be negative.")
    fixed = outgoing_fee + intermediary_fees + recipient_fees
    fx_cost = amount * fx_markup / 100
    total = fixed + fx_cost
    return {
        "fixed_fees": fixed,
        "fx_cost": fx_cost,
        "total_cost": total,
        "effective_rate": total / amount * 100,
        "amount_remaining": amount - total,
    }


def cash_vs_card(
    amount: float,
    mid_rate: float,
    cash_rate: float,
    cash_flat_fee: float = 0.0,
    cash_percent_fee: float = 0.0,
    card_rate: Optional[float] = None,
    card_fx_fee_percent: float = 0.0,
) -> Dict:
    """Compare exchanging cash with paying by card abroad.

    Costs are in the destination currency, measured against converting
    ``amount`` at the mid-market rate with no fees.  The card's foreign
    transaction fee adds to what is charged in the home currency.
    """
    if amount <= 0 or mid_rate <= 0 or cash_rate <= 0:
        raise InvalidInput("Enter an amount, mid-market rate and cash rate greater than 0.")
    if cash_flat_fee < 0 or cash_percent_fee < 0 or card_fx_fee_percent < 0:
        raise InvalidInput("Fees cannot be negative.")
    if card_rate is not None and card_rate <= 0:
        raise InvalidInput("Card rate must be greater than 0, or left blank.")

    ideal = amount * mid_rate

    cash_fees = cash_flat_fee + amount * cash_percent_fee / 100
    cash_received = (amount - cash_fees) * cash_rate
    cash_cost = ideal - cash_received

    used_card_rate = mid_rate if card_rate is None else card_rate
    card_charged = amount * (1 + card_fx_fee_percent / 100)
    card_received = amount * used_card_rate
    card_cost = (card_charged - amount) * used_card_rate + (ideal - card_received)

    if cash_cost < card_cost:
        cheaper = "Cash exchange"
    elif cash_cost > card_cost:
        cheaper = "Card payment"
    else:
        cheaper = "Tie"
    return {
        "ideal_value": ideal,
        "cash_fees": cash_fees,
        "cash_received": cash_received,
        "cash_cost": cash_cost,
        "cash_effective_rate": cash_received / amount,
        "card_rate_used": used_card_rate,
        "card_charged": card_charged,
        "card_received": card_received,
        "card_cost": card_cost,
        "card_effective_rate": card_received / card_charged,
        "cheaper": cheaper,
        "difference": abs(cash_cost - card_cost),
    }


__all__ = [
    "DEFAULT_PROVIDERS",
    "exchange_rate_markup",
    "cheapest_transfer",
    "wire_transfer_cost",
    "cash_vs_card",
]
