"""Tax calculation utilities.

This module implements simplified U.S. federal and state tax calculations for
the tax and salary tools.  The defaults embed IRS data for 2024.  Federal
tables cover the major filing statuses (single, married filing jointly,
married filing separately and head of household) and include long-term
capital gains brackets and the FICA parameters.  State tables support both
flat and progressive rates and can vary by filing status.  The logic applies
the standard deduction before progressive rates and omits less common
provisions such as the Alternative Minimum Tax or specific credits.

Example
-------

>>> # Federal tax on $60 000 of ordinary income for a single filer in 2024
>>> round(compute_federal_tax(60000, year=2024), 2)
5216.0

>>> # Capital gains tax on $100 000 of gains for the same filer
>>> round(compute_capital_gains_tax(100000, year=2024), 2)
7946.25

The underlying brackets can be customised by passing a dictionary matching the
schema in ``calculators/data/tax_tables.json``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, Optional

from .errors import InvalidInput

_DEFAULT_TAX_TABLE_PATH = Path(__file__).resolve().parent / "data" / "tax_tables.json"

FILING_STATUSES = ("single", "married_joint", "married_separate", "head_of_household")
PAY_PERIODS = {"weekly": 52, "biweekly": 26, "semimonthly": 24, "monthly": 12}


def _load_tax_tables(path: Optional[Path] = None) -> Dict[str, Dict]:
    """Load tax tables from JSON.  If ``path`` is not provided, load the
    default file shipped with the package.
    """
    p = path or _DEFAULT_TAX_TABLE_PATH
    with open(p, "r", encoding="utf-8") as f:
        tables = json.load(f)
    return tables


def _year_tables(tables: Dict[str, Dict], year: int) -> Dict:
    try:
        return tables[str(year)]
    except KeyError:
        raise InvalidInput(f"Tax tables for {year} are not available.") from None


def _federal_status(tables: Dict[str, Dict], filing_status: str, year: int) -> Dict:
    federal = _year_tables(tables, year)["federal"]
    if filing_status not in federal:
        raise InvalidInput(f"Unknown filing status: {filing_status}")
    return federal[filing_status]


def _apply_brackets(amount: float, brackets: Iterable[Dict]) -> float:
    """Progressive tax on ``amount`` for brackets of ``rate``, ``start`` and ``end``."""
    tax = 0.0
    remaining = amount
    for bracket in brackets:
        rate = bracket["rate"]
        start = bracket["start"]
        end = bracket["end"] if bracket["end"] is not None else float("inf")
        width = end - start
        if remaining <= 0:
            break
        if amount > start:
            portion = min(remaining, width)
            tax += portion * rate
            remaining -= portion
        else:
            break
    return tax


def federal_taxable_income(
    income: float,
    filing_status: str = "single",
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Income less the standard deduction, floored at zero."""
    tables = tax_tables or _load_tax_tables()
    std_ded = _federal_status(tables, filing_status, year).get("standard_deduction", 0)
    return max(0.0, income - std_ded)


def compute_federal_tax(
    income: float,
    filing_status: str = "single",
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Compute federal income tax due on ordinary income.

    The tax is calculated progressively using the brackets defined under the
    chosen year and filing status.  Income is reduced by the standard deduction
    before applying the rates.
    """
    tables = tax_tables or _load_tax_tables()
    taxable_income = federal_taxable_income(income, filing_status, year, tables)
    return _apply_brackets(taxable_income, _federal_status(tables, filing_status, year)["brackets"])


def compute_capital_gains_tax(
    gain: float,
    filing_status: str = "single",
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
    ordinary_taxable_income: float = 0.0,
) -> float:
    """Compute long-term capital gains tax on a given amount.

    Gains are stacked on top of ``ordinary_taxable_income``, so ordinary
    income fills the 0 % bracket first.
    """
    if gain <= 0:
        return 0.0
    tables = tax_tables or _load_tax_tables()
    cg_brackets = _federal_status(tables, filing_status, year).get("cap_gains")
    if not cg_brackets:
        return 0.0
    base = max(0.0, ordinary_taxable_income)
    return _apply_brackets(base + gain, cg_brackets) - _apply_brackets(base, cg_brackets)


def compute_state_tax(
    taxable_income: float,
    state: str = "MI",
    filing_status: str = "single",
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Compute state income tax on ``taxable_income``.

    A state-specific standard deduction is applied if present.  The state
    rules may define either a flat rate or progressive brackets.  States with
    per-status tables fall back to the single table for statuses they do not
    list.  An unknown state owes nothing.
    """
    tables = tax_tables or _load_tax_tables()
    state_tables = _year_tables(tables, year).get("state", {})
    state_info = state_tables.get(state)
    if not state_info:
        return 0.0

    status_info = state_info.get(filing_status) or state_info.get("single") or state_info
    std_ded = status_info.get("standard_deduction", 0.0)
    taxable = max(0.0, taxable_income - std_ded)

    if "brackets" in status_info:
        return _apply_brackets(taxable, status_info["brackets"])

    rate = status_info.get("rate")
    if rate is None:
        return 0.0
    return taxable * rate


def available_states(year: int = 2024, tax_tables: Optional[Dict[str, Dict]] = None) -> list:
    tables = tax_tables or _load_tax_tables()
    return sorted(_year_tables(tables, year).get("state", {}))


def marginal_rate(
    income: float,
    filing_status: str = "single",
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Federal rate, in percent, on the next dollar of ordinary income."""
    tables = tax_tables or _load_tax_tables()
    taxable = federal_taxable_income(income, filing_status, year, tables)
    if taxable <= 0:
        return 0.0
    rate = 0.0
    for bracket in _federal_status(tables, filing_status, year)["brackets"]:
        if taxable >= bracket["start"]:
            rate = bracket["rate"]
    return rate * 100


def effective_rate(
    income: float,
    filing_status: str = "single",
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Federal tax as a percentage of gross income."""
    if income <= 0:
        return 0.0
    return compute_federal_tax(income, filing_status, year, tax_tables) / income * 100


def income_tax(
    income: float,
    filing_status: str = "single",
    state: str = "TX",
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> Dict:
    """Federal and state income tax with marginal and effective rates."""
    if income <= 0:
        raise InvalidInput("Enter an income greater than 0.")
    tables = tax_tables or _load_tax_tables()
    federal = compute_federal_tax(income, filing_status, year, tables)
    state_tax = compute_state_tax(income, state, filing_status, year, tables)
    return {
        "taxable_income": federal_taxable_income(income, filing_status, year, tables),
        "federal_tax": federal,
        "state_tax": state_tax,
        "total_tax": federal + state_tax,
        "marginal_rate": marginal_rate(income, filing_status, year, tables),
        "effective_rate": federal / income * 100,
        "after_tax_income": income - federal - state_tax,
    }


def take_home_pay(
    gross_annual: float,
    filing_status: str = "single",
    state: str = "TX",
    pre_tax_deductions: float = 0.0,
    year: int = 2024,
    pay_frequency: str = "biweekly",
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> Dict:
    """Net pay after federal, state and payroll taxes.

    Pre-tax deductions (401(k), HSA) lower federal and state taxable income
    but not the FICA wage base.
    """
    if gross_annual <= 0:
        raise InvalidInput("Enter a gross salary greater than 0.")
    if pay_frequency not in PAY_PERIODS:
        raise InvalidInput(f"Unknown pay frequency: {pay_frequency}")
    tables = tax_tables or _load_tax_tables()
    pre_tax = min(max(0.0, pre_tax_deductions), gross_annual)
    wages = gross_annual - pre_tax

    federal = compute_federal_tax(wages, filing_status, year, tables)
    state_tax = compute_state_tax(wages, state, filing_status, year, tables)

    fica = _year_tables(tables, year)["fica"]
    social_security = min(gross_annual, fica["ss_wage_base"]) * fica["ss_rate"]
    threshold = fica["additional_medicare_threshold"].get(filing_status, 200000)
    medicare = gross_annual * fica["medicare_rate"]
    medicare += max(0.0, gross_annual - threshold) * fica["additional_medicare_rate"]

    total_tax = federal + state_tax + social_security + medicare
    net = gross_annual - pre_tax - total_tax
    return {
        "gross_annual": float(gross_annual),
        "pre_tax_deductions": pre_tax,
        "federal_tax": federal,
        "state_tax": state_tax,
        "social_security": social_security,
        "medicare": medicare,
        "total_tax": total_tax,
        "net_annual": net,
        "net_monthly": net / 12,
        "net_per_paycheck": net / PAY_PERIODS[pay_frequency],
        "effective_tax_rate": total_tax / gross_annual * 100,
    }


def self_employment_tax(
    net_profit: float,
    ss_rate: float = 12.4,
    medicare_rate: float = 2.9,
    wage_base: Optional[float] = None,
    wages_already_ss: float = 0.0,
    apply_9235: bool = True,
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> Dict:
    """Social Security and Medicare owed on self-employment profit.

    Only 92.35 % of profit is subject to the tax unless ``apply_9235`` is off.
    Wages already taxed for Social Security at a job use up part of the wage
    base, which defaults to the FICA wage base for ``year``.
    """
    if net_profit <= 0:
        raise InvalidInput("Enter a net profit greater than 0.")
    if wage_base is None:
        tables = tax_tables or _load_tax_tables()
        wage_base = _year_tables(tables, year)["fica"]["ss_wage_base"]
    base = net_profit * 0.9235 if apply_9235 else float(net_profit)
    ss_room = max(0.0, wage_base - max(0.0, wages_already_ss))
    ss_taxable = min(base, ss_room)
    ss_tax = ss_taxable * ss_rate / 100
    medicare_tax = base * medicare_rate / 100
    total = ss_tax + medicare_tax
    return {
        "taxable_base": base,
        "ss_taxable": ss_taxable,
        "social_security_tax": ss_tax,
        "medicare_tax": medicare_tax,
        "total_se_tax": total,
        "deductible_half": total / 2,
        "effective_rate": total / net_profit * 100,
    }


def capital_gains(
    purchase_price: float,
    sale_price: float,
    holding_months: int,
    ordinary_income: float,
    filing_status: str = "single",
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> Dict:
    """Tax on the sale of an asset held for ``holding_months``.

    Holdings of a year or less are short term and taxed as ordinary income.
    Longer holdings use the long-term brackets on top of ordinary taxable
    income.
    """
    if purchase_price < 0 or sale_price < 0 or holding_months < 0:
        raise InvalidInput("Prices and holding period cannot be negative.")
    tables = tax_tables or _load_tax_tables()
    gain = sale_price - purchase_price
    long_term = holding_months > 12
    if gain <= 0:
        tax = 0.0
    elif long_term:
        base = federal_taxable_income(ordinary_income, filing_status, year, tables)
        tax = compute_capital_gains_tax(gain, filing_status, year, tables, ordinary_taxable_income=base)
    else:
        tax = compute_federal_tax(ordinary_income + gain, filing_status, year, tables) - compute_federal_tax(
            ordinary_income, filing_status, year, tables
        )
    return {
        "gain": gain,
        "term": "long" if long_term else "short",
        "tax": tax,
        "effective_rate": tax / gain * 100 if gain > 0 else 0.0,
        "net_proceeds": sale_price - tax,
    }


def hourly_to_salary(hourly: float, hours_per_week: float = 40, weeks_per_year: float = 52) -> Dict:
    if hourly <= 0 or hours_per_week <= 0 or weeks_per_year <= 0:
        raise InvalidInput("Enter an hourly rate, hours and weeks greater than 0.")
    annual = hourly * hours_per_week * weeks_per_year
    weekly = hourly * hours_per_week
    return {
        "annual": annual,
        "monthly": annual / 12,
        "weekly": weekly,
        "daily": weekly / 5,
    }


def dividend_tax(
    qualified: float,
    ordinary: float,
    other_income: float,
    filing_status: str = "single",
    year: int = 2024,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> Dict:
    """Federal tax on a year of dividends.

    Ordinary dividends are taxed as ordinary income on top of
    ``other_income``.  Qualified dividends use the long-term capital gains
    brackets stacked on the resulting ordinary taxable income.
    """
    if qualified < 0 or ordinary < 0 or other_income < 0:
        raise InvalidInput("Dividends and income cannot be negative.")
    tables = tax_tables or _load_tax_tables()
    ordinary_tax = compute_federal_tax(other_income + ordinary, filing_status, year, tables) - compute_federal_tax(
        other_income, filing_status, year, tables
    )
    base = federal_taxable_income(other_income + ordinary, filing_status, year, tables)
    qualified_tax = compute_capital_gains_tax(qualified, filing_status, year, tables, ordinary_taxable_income=base)
    total_dividends = qualified + ordinary
    total = qualified_tax + ordinary_tax
    return {
        "qualified_tax": qualified_tax,
        "ordinary_tax": ordinary_tax,
        "total_tax": total,
        "effective_rate": total / total_dividends * 100 if total_dividends > 0 else 0.0,
        "after_tax_dividends": total_dividends - total,
    }


__all__ = [
    "FILING_STATUSES",
    "PAY_PERIODS",
    "federal_taxable_income",
    "compute_federal_tax",
    "compute_capital_gains_tax",
    "compute_state_tax",
    "available_states",
    "marginal_rate",
    "effective_rate",
    "income_tax",
    "take_home_pay",
    "self_employment_tax",
    "capital_gains",
    "hourly_to_salary",
    "dividend_tax",
    "_load_tax_tables",
]
