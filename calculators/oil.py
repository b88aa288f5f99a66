"""Crude oil trading, hedging and heating oil calculators.

Prices are per barrel unless noted.  A standard NYMEX crude contract is
1 000 barrels, and a barrel holds 42 U.S. gallons.
"""

from __future__ import annotations

import math
from typing import Dict, Tuple

from .errors import InvalidInput

BARRELS_PER_CONTRACT = 1000
GALLONS_PER_BARREL = 42.0
ROUNDING_MODES = ("down", "nearest", "up")


def _round_contracts(raw: float, rounding: str) -> int:
    if rounding not in ROUNDING_MODES:
        raise InvalidInput(f"Unknown rounding mode: {rounding}")
    if rounding == "down":
        n = math.floor(raw)
    elif rounding == "up":
        n = math.ceil(raw)
    else:
        # half-up, not banker's rounding
        n = math.floor(raw + 0.5)
    return max(0, int(n))


def futures_pl(
    side: str,
    entry_price: float,
    exit_price: float,
    contracts: int,
    barrels_per_contract: float = BARRELS_PER_CONTRACT,
) -> Dict:
    """Profit or loss on a closed futures position."""
    if side not in ("long", "short"):
        raise InvalidInput(f"Unknown position side: {side}")
    if entry_price <= 0 or exit_price <= 0 or contracts <= 0 or barrels_per_contract <= 0:
        raise InvalidInput("Enter prices, contracts and contract size greater than 0.")
    barrels = int(contracts) * barrels_per_contract
    per_barrel = exit_price - entry_price if side == "long" else entry_price - exit_price
    return {
        "total_barrels": barrels,
        "pl_per_barrel": per_barrel,
        "total_pl": per_barrel * barrels,
        "notional_entry": entry_price * barrels,
        "notional_exit": exit_price * barrels,
    }


def futures_margin_risk(
    price: float,
    contracts: int,
    barrels_per_contract: float = BARRELS_PER_CONTRACT,
    margin_rate: float = 10.0,
    adverse_move: float = 0.0,
) -> Dict:
    """Notional, margin and leverage, and what an adverse move costs."""
    if price <= 0 or contracts <= 0 or barrels_per_contract <= 0 or margin_rate <= 0:
        raise InvalidInput("Enter a price, contracts, contract size and margin rate greater than 0.")
    barrels = int(contracts) * barrels_per_contract
    notional = price * barrels
    margin = notional * min(margin_rate, 100.0) / 100
    loss = max(0.0, adverse_move) * barrels
    return {
        "total_barrels": barrels,
        "notional": notional,
        "margin": margin,
        "leverage": notional / margin,
        "adverse_pl": -loss,
        "loss_pct_of_margin": loss / margin * 100,
    }


def position_size(
    account_size: float,
    risk_percent: float,
    stop_distance: float,
    barrels_per_contract: float = BARRELS_PER_CONTRACT,
    rounding: str = "down",
) -> Dict:
    """Contracts to trade so a stop-out loses ``risk_percent`` of the account."""
    if account_size <= 0 or risk_percent <= 0 or stop_distance <= 0 or barrels_per_contract <= 0:
        raise InvalidInput("Enter an account size, risk, stop distance and contract size greater than 0.")
    budget = account_size * min(risk_percent, 100.0) / 100
    risk_per_contract = stop_distance * barrels_per_contract
    raw = budget / risk_per_contract
    contracts = _round_contracts(raw, rounding)
    at_risk = contracts * risk_per_contract
    return {
        "risk_budget": budget,
        "risk_per_contract": risk_per_contract,
        "raw_contracts": raw,
        "contracts": contracts,
        "total_risk": at_risk,
        "unused_risk_budget": max(0.0, budget - at_risk),
    }


def hedge_ratio(
    exposure_barrels: float,
    barrels_per_contract: float = BARRELS_PER_CONTRACT,
    coverage_percent: float = 100.0,
    rounding: str = "nearest",
) -> Dict:
    """Futures contracts needed to hedge a share of physical exposure."""
    if exposure_barrels <= 0 or barrels_per_contract <= 0:
        raise InvalidInput("Enter an exposure and contract size greater than 0.")
    coverage = min(max(coverage_percent, 0.0), 100.0) / 100
    hedged = exposure_barrels * coverage
    raw = hedged / barrels_per_contract
    contracts = _round_contracts(raw, rounding)
    implied = contracts * barrels_per_contract
    return {
        "hedged_volume": hedged,
        "raw_contracts": raw,
        "contracts": contracts,
        "implied_hedged_volume": implied,
        "implied_coverage": implied / exposure_barrels * 100,
    }


def price_sensitivity(
    exposure_barrels: float,
    baseline_price: float,
    change: float,
    change_mode: str = "dollar",
    pass_through_percent: float = 0.0,
) -> Dict:
    """Cost impact of an oil price move on a fixed volume.

    ``change`` is dollars per barrel in ``dollar`` mode and a percentage of
    the baseline price in ``percent`` mode.  Negative changes are allowed.
    The passed-through share is recovered from customers.
    """
    if change_mode not in ("dollar", "percent"):
        raise InvalidInput(f"Unknown change mode: {change_mode}")
    if exposure_barrels <= 0 or baseline_price <= 0:
        raise InvalidInput("Enter an exposure and baseline price greater than 0.")
    delta = change if change_mode == "dollar" else baseline_price * change / 100
    pass_through = min(max(pass_through_percent, 0.0), 100.0) / 100
    gross = exposure_barrels * delta
    passed = gross * pass_through
    return {
        "price_change": delta,
        "change_percent": delta / baseline_price * 100,
        "new_price": baseline_price + delta,
        "gross_impact": gross,
        "passed_through": passed,
        "net_impact": gross - passed,
        "impact_per_dollar": float(exposure_barrels),
    }


def wti_brent_spread(wti: float, brent: float) -> Dict:
    """Brent minus WTI, the way the spread is usually quoted."""
    if wti <= 0 or brent <= 0:
        raise InvalidInput("Enter WTI and Brent prices greater than 0.")
    spread = brent - wti
    if brent > wti:
        higher = "Brent"
    elif wti > brent:
        higher = "WTI"
    else:
        higher = "Equal"
    return {"spread": spread, "spread_pct_of_wti": spread / wti * 100, "higher": higher}


def crack_spread(
    crude: float,
    gasoline: float,
    distillate: float,
    crude_barrels: float,
    ratio: Tuple[int, int, int] = (3, 2, 1),
) -> Dict:
    """Refining margin per barrel of crude for a crude:gasoline:distillate ratio."""
    crude_in, gas_out, dist_out = (int(x) for x in ratio)
    if crude <= 0 or gasoline <= 0 or distillate <= 0 or crude_barrels <= 0:
        raise InvalidInput("Enter crude, product prices and volume greater than 0.")
    if crude_in < 1 or gas_out < 0 or dist_out < 0:
        raise InvalidInput("The crude side of the ratio must be at least 1.")
    per_barrel = (gas_out * gasoline + dist_out * distillate - crude_in * crude) / crude_in
    return {
        "crack_per_barrel": per_barrel,
        "total_margin": per_barrel * crude_barrels,
        "ratio": f"{crude_in}:{gas_out}:{dist_out}",
    }


def barrels_gallons(amount: float, direction: str = "barrels_to_gallons", gallons_per_barrel: float = GALLONS_PER_BARREL) -> Dict:
    if direction not in ("barrels_to_gallons", "gallons_to_barrels"):
        raise InvalidInput(f"Unknown conversion: {direction}")
    if amount <= 0 or gallons_per_barrel <= 0:
        raise InvalidInput("Enter an amount greater than 0.")
    if direction == "barrels_to_gallons":
        return {"result": amount * gallons_per_barrel, "unit": "gallons"}
    return {"result": amount / gallons_per_barrel, "unit": "barrels"}


def heating_oil_monthly_cost(
    price_per_gallon: float,
    daily_usage: float,
    heating_days: float = 30,
    delivery_fee: float = 0.0,
    tax_percent: float = 0.0,
) -> Dict:
    """Monthly heating oil bill from daily gallons burned."""
    if price_per_gallon <= 0 or daily_usage <= 0 or heating_days <= 0:
        raise InvalidInput("Enter a price, daily usage and heating days greater than 0.")
    if delivery_fee < 0 or tax_percent < 0:
        raise InvalidInput("Fees and tax cannot be negative.")
    gallons = daily_usage * heating_days
    fuel = gallons * price_per_gallon
    tax = fuel * tax_percent / 100
    total = max(0.0, fuel + tax + delivery_fee)
    return {
        "gallons": gallons,
        "fuel_cost": fuel,
        "tax": tax,
        "total": total,
        "effective_price_per_gallon": total / gallons,
    }


def price_change_percent(old_price: float, new_price: float) -> Dict:
    if old_price <= 0 or new_price <= 0:
        raise InvalidInput("Enter old and new prices greater than 0.")
    diff = new_price - old_price
    if diff > 0:
        direction = "increase"
    elif diff < 0:
        direction = "decrease"
    else:
        direction = "no change"
    return {"difference": diff, "percent_change": diff / old_price * 100, "direction": direction}


__all__ = [
    "BARRELS_PER_CONTRACT",
    "GALLONS_PER_BARREL",
    "ROUNDING_MODES",
    "futures_pl",
    "futures_margin_risk",
    "position_size",
    "hedge_ratio",
    "price_sensitivity",
    "wti_brent_spread",
    "crack_spread",
    "barrels_gallons",
    "heating_oil_monthly_cost",
    "price_change_percent",
]
