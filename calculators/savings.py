"""Savings growth and retirement target calculators.

All of these reduce to the same recurrence, applied once per period::

    balance = balance * (1 + rate) + contribution

``project_balance`` runs it for a fixed number of periods and
``periods_to_target`` runs it until a target is crossed or an iteration cap
is hit.  Rates passed to the tool functions are annual percentages.

Example
-------

>>> # $200k saved, $30k/yr, 6% growth, $50k/yr spending at a 4% withdrawal rate
>>> fire_target(80000, 50000, 200000, 6, 4)["years_to_fire"]
16
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional

from .errors import InvalidInput
from .social_security import household_benefit

MAX_SAVINGS_MONTHS = 6000  # 500 years
MATCH_MODES = ("none", "flat", "percent_of_salary")


def _clamp(value: float, low: float = 0.0, high: float = math.inf) -> float:
    return min(max(value, low), high)


def project_balance(start: float, rate: float, contribution: float, periods: int) -> List[float]:
    """Balance after each period, starting with ``start`` at index 0."""
    path = [float(start)]
    balance = float(start)
    for _ in range(int(periods)):
        balance = balance * (1.0 + rate) + contribution
        path.append(balance)
    return path


def periods_to_target(
    start: float,
    rate: float,
    contribution: float,
    target: float,
    max_periods: int,
) -> Optional[int]:
    """First period at which the balance reaches ``target``; ``None`` past the cap."""
    balance = float(start)
    for period in range(int(max_periods) + 1):
        if balance >= target:
            return period
        balance = balance * (1.0 + rate) + contribution
    return None


def fire_target(
    income: float,
    expenses: float,
    current_savings: float,
    return_rate: float,
    withdrawal_rate: float,
    max_years: int = 60,
) -> Dict:
    """FIRE number and the years of saving needed to reach it."""
    income = _clamp(income)
    expenses = _clamp(expenses)
    current_savings = _clamp(current_savings)
    r = _clamp(return_rate, 0, 100) / 100
    w = _clamp(withdrawal_rate, 0.0001, 100) / 100
    max_years = int(_clamp(max_years, 1, 200))

    annual_savings = _clamp(income - expenses)
    fire_number = expenses / w
    years = periods_to_target(current_savings, r, annual_savings, fire_number, max_years)
    if years is None:
        status = f"Not reached within {max_years} years (estimate)."
    else:
        status = f"Estimated time to FIRE: {years} years."
    horizon = years if years is not None else max_years
    return {
        "fire_number": fire_number,
        "annual_savings": annual_savings,
        "savings_rate": annual_savings / income * 100 if income > 0 else 0.0,
        "years_to_fire": years,
        "status": status,
        "path": project_balance(current_savings, r, annual_savings, horizon),
        "target": fire_number,
    }


def retirement_projection(
    current_savings: float,
    annual_contribution: float,
    return_rate: float,
    years: int,
    desired_spending: float,
    withdrawal_rate: float = 4.0,
) -> Dict:
    """Projected nest egg at retirement against the target for a spending level."""
    r = _clamp(return_rate, 0, 100) / 100
    w = _clamp(withdrawal_rate, 0.0001, 100) / 100
    years = int(_clamp(years, 0, 120))
    path = project_balance(_clamp(current_savings), r, _clamp(annual_contribution), years)
    projected = path[-1]
    target = _clamp(desired_spending) / w
    annual_income = projected * w
    return {
        "projected_savings": projected,
        "target_nest_egg": target,
        "gap": target - projected,
        "projected_annual_income": annual_income,
        "projected_monthly_income": annual_income / 12,
        "path": path,
        "target": target,
    }


def savings_goal(current_savings: float, monthly_contribution: float, annual_rate: float, target: float) -> Dict:
    """Months of saving needed to reach ``target``.

    Interest is credited first each month, then the deposit.
    """
    if target <= 0:
        raise InvalidInput("Please enter a positive savings goal amount.")
    current = max(0.0, current_savings)
    if current >= target:
        return {"months": 0, "years": 0.0, "total_contributed": 0.0, "interest_earned": 0.0, "path": [current]}
    if monthly_contribution <= 0 and annual_rate <= 0:
        raise InvalidInput("With zero monthly contribution and zero growth, you cannot reach your goal.")

    r = annual_rate / 100 / 12 if annual_rate > 0 else 0.0
    if r == 0:
        months = math.ceil((target - current) / monthly_contribution)
        contributed = monthly_contribution * months
        return {
            "months": months,
            "years": months / 12,
            "total_contributed": contributed,
            "interest_earned": 0.0,
            "path": project_balance(current, 0.0, monthly_contribution, months),
        }

    months = periods_to_target(current, r, max(0.0, monthly_contribution), target, MAX_SAVINGS_MONTHS)
    if months is None:
        raise InvalidInput(
            "It takes too long to reach this goal with the current inputs. "
            "Try increasing your monthly contribution or rate."
        )
    path = project_balance(current, r, max(0.0, monthly_contribution), months)
    contributed = max(0.0, monthly_contribution) * months
    return {
        "months": months,
        "years": months / 12,
        "total_contributed": contributed,
        "interest_earned": path[-1] - current - contributed,
        "path": path,
    }


def compound_interest(principal: float, annual_rate: float, years: float, periods_per_year: int = 12) -> Dict:
    """Future value of a lump sum, ``P(1 + r/n)^(n*t)``."""
    if principal <= 0 or years <= 0 or annual_rate < 0 or periods_per_year <= 0:
        raise InvalidInput("Enter a positive principal, term and compounding frequency.")
    r = annual_rate / 100
    fv = principal * (1 + r / periods_per_year) ** (periods_per_year * years)
    yearly = [principal * (1 + r / periods_per_year) ** (periods_per_year * y) for y in range(int(years) + 1)]
    return {
        "future_value": fv,
        "interest_earned": fv - principal,
        "effective_annual_rate": ((1 + r / periods_per_year) ** periods_per_year - 1) * 100,
        "path": yearly,
    }


def drip_growth(initial: float, dividend_yield: float, price_growth: float, years: int) -> Dict:
    """Dividend reinvestment against taking dividends as cash."""
    initial = _clamp(initial)
    y = _clamp(dividend_yield, 0, 100) / 100
    g = _clamp(price_growth, 0, 100) / 100
    years = int(_clamp(years, 0, 100))
    with_drip = initial
    without = initial
    path = [initial]
    for _ in range(years):
        with_drip = (with_drip + with_drip * y) * (1 + g)
        without = without * (1 + g)
        path.append(with_drip)
    return {
        "value_with_drip": with_drip,
        "value_without_drip": without,
        "drip_advantage": with_drip - without,
        "annual_dividend_with_drip": with_drip * y,
        "annual_dividend_without_drip": without * y,
        "path": path,
    }


def employer_401k(
    current_balance: float,
    employee_annual: float,
    return_rate: float,
    years: int,
    match_mode: str = "none",
    employer_flat: float = 0.0,
    salary: float = 0.0,
    match_percent: float = 0.0,
) -> Dict:
    """401(k) balance with an optional employer match."""
    if match_mode not in MATCH_MODES:
        raise InvalidInput(f"Unknown match mode: {match_mode}")
    if match_mode == "flat":
        employer = _clamp(employer_flat)
    elif match_mode == "percent_of_salary":
        employer = _clamp(salary) * _clamp(match_percent, 0, 100) / 100
    else:
        employer = 0.0
    employee = _clamp(employee_annual)
    years = int(_clamp(years, 0, 120))
    path = project_balance(_clamp(current_balance), _clamp(return_rate, 0, 100) / 100, employee + employer, years)
    contributed = (employee + employer) * years
    return {
        "final_balance": path[-1],
        "employer_annual": employer,
        "total_annual": employee + employer,
        "total_contributed": contributed,
        "growth": path[-1] - _clamp(current_balance) - contributed,
        "path": path,
    }


def retirement_income(
    portfolio: float,
    withdrawal_rate: float,
    other_income: float = 0.0,
    ss_monthly_pia: float = 0.0,
    ss_claim_age: int = 67,
    spouse_monthly_pia: float = 0.0,
    spouse_claim_age: int = 67,
    survivor: bool = False,
) -> Dict:
    """Yearly and monthly income from savings, pensions and Social Security.

    With ``survivor`` set only the larger of the two Social Security
    benefits is counted.
    """
    from_portfolio = _clamp(portfolio) * _clamp(withdrawal_rate, 0, 100) / 100
    benefits = household_benefit(
        _clamp(ss_monthly_pia),
        int(ss_claim_age),
        spouse_pia=_clamp(spouse_monthly_pia),
        spouse_claim_age=int(spouse_claim_age),
        survivor=bool(survivor),
    )
    ss_annual = benefits["household"]
    total = from_portfolio + _clamp(other_income) + ss_annual
    return {
        "from_portfolio": from_portfolio,
        "social_security": ss_annual,
        "own_benefit": benefits["own"],
        "spouse_benefit": benefits["spouse"],
        "other_income": _clamp(other_income),
        "total_annual_income": total,
        "monthly_income": total / 12,
    }


__all__ = [
    "project_balance",
    "periods_to_target",
    "fire_target",
    "retirement_projection",
    "savings_goal",
    "compound_interest",
    "drip_growth",
    "employer_401k",
    "retirement_income",
    "MATCH_MODES",
]
