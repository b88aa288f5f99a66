"""Small-business profitability calculators."""

from __future__ import annotations

import math
from typing import Dict

from .errors import InvalidInput


def store_profit(revenue: float, cogs_rate: float, rent: float = 0.0, payroll: float = 0.0, other_fixed: float = 0.0) -> Dict:
    """Gross and net profit for a period, and the revenue needed to break even.

    ``cogs_rate`` is cost of goods sold as a percentage of revenue.  Break-even
    revenue is ``None`` when goods cost 100 % or more of revenue.
    """
    if revenue < 0 or cogs_rate < 0 or min(rent, payroll, other_fixed) < 0:
        raise InvalidInput("Revenue, costs and rates cannot be negative.")
    rate = cogs_rate / 100
    fixed = rent + payroll + other_fixed
    gross = revenue - revenue * rate
    net = gross - fixed
    contribution = 1 - rate
    return {
        "fixed_costs": fixed,
        "gross_profit": gross,
        "net_profit": net,
        "net_margin": net / revenue * 100 if revenue > 0 else 0.0,
        "break_even_revenue": fixed / contribution if contribution > 0 else None,
    }


def break_even_units(fixed_costs: float, price_per_unit: float, variable_cost_per_unit: float) -> Dict:
    if price_per_unit <= 0:
        raise InvalidInput("Price per unit must be greater than 0.")
    margin = price_per_unit - variable_cost_per_unit
    if margin <= 0:
        raise InvalidInput(
            "Contribution margin must be positive. Try increasing the price or decreasing variable costs."
        )
    units = fixed_costs / margin
    return {
        "contribution_margin": margin,
        "break_even_units": units,
        "units_to_sell": math.ceil(units),
        "break_even_revenue": units * price_per_unit,
    }


def roi(investment: float, final_value: float, years: float = 0) -> Dict:
    """Return on investment, annualized when a holding period is given."""
    if investment <= 0:
        raise InvalidInput("Initial investment must be greater than 0.")
    profit = final_value - investment
    ratio = profit / investment
    annualized = None
    if years and years > 0 and final_value >= 0:
        annualized = ((final_value / investment) ** (1 / years) - 1) * 100
    return {"profit": profit, "roi": ratio * 100, "annualized_roi": annualized}


def margin_markup(cost: float, price: float) -> Dict:
    """Profit per unit with margin (on price) and markup (on cost)."""
    if cost <= 0 or price <= 0:
        raise InvalidInput("Enter a cost and price greater than 0.")
    profit = price - cost
    return {"profit": profit, "margin": profit / price * 100, "markup": profit / cost * 100}


def dscr(net_operating_income: float, annual_debt_service: float) -> Dict:
    """Debt service coverage ratio with the usual lender bands."""
    if annual_debt_service <= 0:
        raise InvalidInput("Annual debt service must be greater than 0.")
    ratio = net_operating_income / annual_debt_service
    if ratio >= 1.25:
        band = "strong"
    elif ratio >= 1.0:
        band = "adequate"
    else:
        band = "shortfall"
    return {"dscr": ratio, "band": band, "cash_after_debt": net_operating_income - annual_debt_service}


__all__ = ["store_profit", "break_even_units", "roi", "margin_markup", "dscr"]
