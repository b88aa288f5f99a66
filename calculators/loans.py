"""Loan and mortgage calculators.

Each public function backs one tool.  Inputs are the raw numbers from the
tool's form; rates are annual percentages.  Results are plain dictionaries so
the results panel can pick the keys it wants to show.  Inputs a formula cannot
use raise :class:`~calculators.errors.InvalidInput` with the message shown to
the user.

Example
-------

>>> r = mortgage_payment(300000, 7, 30)
>>> round(r["monthly_payment"], 2)
1995.91
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional

from .amortization import (
    amortization_schedule,
    amortized_payment,
    annualize,
    loan_summary,
    monthly_rate,
    remaining_balance,
    solve_monthly_rate,
    term_months,
)
from .errors import InvalidInput

MAX_PAYOFF_MONTHS = 3600
BIWEEKLY_PERIODS = 26


def _require_positive(**values: float) -> None:
    for name, value in values.items():
        if value is None or not math.isfinite(value) or value <= 0:
            label = name.replace("_", " ")
            raise InvalidInput(f"Enter a {label} greater than 0.")


def _require_term(**years: float) -> None:
    for name, value in years.items():
        if value is None or not math.isfinite(value) or term_months(value) <= 0:
            label = name.replace("_", " ")
            raise InvalidInput(f"Enter a {label} of at least one month.")


def mortgage_payment(principal: float, apr: float, years: float) -> Dict:
    """Monthly payment, total paid and total interest, with the full schedule."""
    _require_positive(loan_amount=principal)
    _require_term(loan_term=years)
    if apr < 0:
        raise InvalidInput("Interest rate cannot be negative.")
    summary = loan_summary(principal, apr, years)
    if summary is None:
        raise InvalidInput("Check the loan amount, rate and term.")
    summary["schedule"] = amortization_schedule(principal, apr, summary["months"])
    return summary


def apr_with_fees(principal: float, apr: float, years: float, fees: float = 0.0) -> Dict:
    """Effective APR once upfront fees are netted out of the amount received.

    The payment is sized on the full principal at the nominal rate.  Fees
    reduce the cash actually received, so the rate that discounts the same
    payments back to ``principal - fees`` is higher than the nominal rate.
    """
    _require_positive(loan_amount=principal, interest_rate=apr)
    _require_term(loan_term=years)
    months = term_months(years)
    payment = amortized_payment(principal, apr, months)
    fees = max(0.0, float(fees or 0.0))
    amount_financed = principal - fees

    effective: Optional[float]
    if fees == 0:
        effective = float(apr)
    elif amount_financed <= 0:
        effective = None
    else:
        rate = solve_monthly_rate(payment, amount_financed, months)
        effective = annualize(rate) if rate is not None else None

    return {
        "monthly_payment": payment,
        "nominal_rate": float(apr),
        "apr": effective,
        "amount_financed": amount_financed,
        "apr_difference": None if effective is None else effective - apr,
    }


def extra_payment_savings(principal: float, apr: float, years: float, extra_monthly: float) -> Dict:
    """Compare paying ``extra_monthly`` on top of the scheduled payment."""
    _require_positive(loan_amount=principal, interest_rate=apr)
    _require_term(loan_term=years)
    if extra_monthly < 0:
        raise InvalidInput("Extra payment cannot be negative.")
    months = term_months(years)
    baseline = loan_summary(principal, apr, years)
    rows = amortization_schedule(principal, apr, months, extra_monthly)
    total_interest = sum(r["interest"] for r in rows)
    total_paid = sum(r["payment"] for r in rows)
    return {
        "monthly_payment": baseline["monthly_payment"],
        "months": len(rows),
        "total_interest": total_interest,
        "total_paid": total_paid,
        "baseline_months": months,
        "baseline_interest": baseline["total_interest"],
        "interest_saved": max(0.0, baseline["total_interest"] - total_interest),
        "months_saved": max(0, months - len(rows)),
        "schedule": rows,
    }


def balloon_loan(principal: float, apr: float, amort_years: float, balloon_years: float) -> Dict:
    """Payments sized on a long amortization, with the rest due as a balloon."""
    _require_positive(loan_amount=principal, interest_rate=apr)
    _require_term(amortization_term=amort_years, balloon_due_time=balloon_years)
    balloon_months = term_months(balloon_years)
    months = term_months(amort_years)
    if balloon_months >= months:
        raise InvalidInput("The balloon must come due before the amortization term ends.")
    payment = amortized_payment(principal, apr, months)

    rows = amortization_schedule(principal, apr, months)[:balloon_months]
    balance = remaining_balance(principal, apr, months, balloon_months)
    total_interest = sum(r["interest"] for r in rows)
    paid = sum(r["payment"] for r in rows)
    return {
        "monthly_payment": payment,
        "balloon_months": balloon_months,
        "balloon_payment": balance,
        "interest_to_balloon": total_interest,
        "paid_before_balloon": paid,
        "total_cost": paid + balance,
        "schedule": rows,
    }


def refinance_savings(
    balance: float,
    current_apr: float,
    current_years_left: float,
    new_apr: float,
    new_years: float,
    closing_costs: float = 0.0,
) -> Dict:
    """Monthly and lifetime savings from replacing the current loan."""
    _require_positive(
        remaining_balance=balance,
        current_rate=current_apr,
        new_rate=new_apr,
    )
    _require_term(remaining_term=current_years_left, new_term=new_years)
    costs = max(0.0, float(closing_costs or 0.0))
    current = loan_summary(balance, current_apr, current_years_left)
    new = loan_summary(balance, new_apr, new_years)
    monthly_savings = current["monthly_payment"] - new["monthly_payment"]
    new_interest = new["total_interest"] + costs
    break_even = costs / monthly_savings if monthly_savings > 0 and costs > 0 else None
    return {
        "current_payment": current["monthly_payment"],
        "new_payment": new["monthly_payment"],
        "monthly_savings": monthly_savings,
        "current_interest": current["total_interest"],
        "new_interest": new_interest,
        "interest_saved": current["total_interest"] - new_interest,
        "break_even_months": break_even,
    }


def points_break_even(
    principal: float,
    years: float,
    rate_no_points: float,
    rate_with_points: float,
    points: float,
) -> Dict:
    """How long buying discount points takes to pay for itself."""
    _require_positive(loan_amount=principal)
    _require_term(loan_term=years)
    if rate_no_points < 0 or rate_with_points < 0 or points < 0:
        raise InvalidInput("Rates and points cannot be negative.")
    months = term_months(years)
    points_cost = principal * points / 100.0
    payment_no = amortized_payment(principal, rate_no_points, months)
    payment_with = amortized_payment(principal, rate_with_points, months)
    monthly_savings = payment_no - payment_with
    break_even = points_cost / monthly_savings if monthly_savings > 0 and points_cost > 0 else None
    interest_no = payment_no * months - principal
    interest_with = payment_with * months - principal + points_cost
    return {
        "points_cost": points_cost,
        "payment_no_points": payment_no,
        "payment_with_points": payment_with,
        "monthly_savings": monthly_savings,
        "break_even_months": break_even,
        "interest_no_points": interest_no,
        "interest_with_points": interest_with,
        "lifetime_savings": interest_no - interest_with,
        "worth_it": break_even is not None and break_even < months,
    }


def payoff_time(balance: float, apr: float, monthly_payment: float) -> Dict:
    """Months needed to clear ``balance`` with a fixed monthly payment."""
    _require_positive(balance=balance, monthly_payment=monthly_payment)
    if apr < 0:
        raise InvalidInput("Interest rate cannot be negative.")
    r = monthly_rate(apr)
    if r == 0:
        months = math.ceil(balance / monthly_payment)
        return {
            "months": months,
            "years": months / 12,
            "total_interest": 0.0,
            "total_paid": float(balance),
        }
    if monthly_payment <= balance * r:
        raise InvalidInput("Monthly payment must be higher than the monthly interest.")

    bal = float(balance)
    months = 0
    total_interest = 0.0
    while bal > 0 and months < MAX_PAYOFF_MONTHS:
        interest = bal * r
        total_interest += interest
        bal = max(0.0, bal + interest - monthly_payment)
        months += 1
    if bal > 0:
        raise InvalidInput("Payoff takes longer than 300 years with these inputs.")
    return {
        "months": months,
        "years": months / 12,
        "total_interest": total_interest,
        "total_paid": balance + total_interest,
    }


def compare_terms(principal: float, apr: float, terms: Iterable[float] = (10, 15, 20, 30)) -> Dict:
    """Payment and interest for several terms, cheapest interest first."""
    _require_positive(loan_amount=principal)
    if apr < 0:
        raise InvalidInput("Interest rate cannot be negative.")
    rows: List[Dict] = []
    for years in terms:
        summary = loan_summary(principal, apr, years)
        if summary is None:
            continue
        rows.append({"years": float(years), **summary})
    if not rows:
        raise InvalidInput("Add at least one loan term greater than 0.")
    rows.sort(key=lambda row: row["total_interest"])
    return {
        "options": rows,
        "lowest_payment": min(row["monthly_payment"] for row in rows),
        "lowest_interest": rows[0]["total_interest"],
        "best_term_years": rows[0]["years"],
    }


def loan_to_value(property_value: float, loan_amount: float) -> Dict:
    """LTV ratio with the usual lender bands."""
    _require_positive(property_value=property_value, loan_amount=loan_amount)
    ratio = loan_amount / property_value * 100.0
    if ratio < 80:
        verdict = "Under 80% – typically no PMI and the best pricing."
    elif ratio <= 90:
        verdict = "80–90% – PMI likely; rates may be slightly higher."
    else:
        verdict = "Over 90% – high LTV; expect PMI and stricter approval."
    return {"ltv": ratio, "equity": property_value - loan_amount, "verdict": verdict}


def pmi_cost(home_price: float, down_payment: float, pmi_rate: float) -> Dict:
    """Annual and monthly private mortgage insurance on the financed amount."""
    _require_positive(home_price=home_price, pmi_rate=pmi_rate)
    down = max(0.0, float(down_payment or 0.0))
    loan = home_price - down
    if loan <= 0:
        raise InvalidInput("Down payment covers the full price; no PMI applies.")
    annual = loan * pmi_rate / 100.0
    return {
        "loan_amount": loan,
        "ltv": loan / home_price * 100.0,
        "annual_pmi": annual,
        "monthly_pmi": annual / 12,
    }


def rent_vs_buy(
    monthly_rent: float,
    home_price: float,
    down_payment: float,
    apr: float,
    years: float = 30,
    monthly_extras: float = 0.0,
) -> Dict:
    """Monthly cost of renting against owning with a mortgage."""
    _require_positive(home_price=home_price)
    _require_term(loan_term=years)
    if apr < 0 or monthly_rent < 0:
        raise InvalidInput("Rent and interest rate cannot be negative.")
    principal = max(0.0, home_price - max(0.0, down_payment))
    payment = amortized_payment(principal, apr, term_months(years)) or 0.0
    ownership = payment + max(0.0, monthly_extras)
    difference = ownership - monthly_rent
    if difference > 0:
        verdict = "Renting is cheaper month to month."
    elif difference < 0:
        verdict = "Buying is cheaper month to month."
    else:
        verdict = "Renting and buying cost the same each month."
    return {
        "mortgage_payment": payment,
        "monthly_ownership": ownership,
        "monthly_rent": float(monthly_rent),
        "difference": difference,
        "verdict": verdict,
    }

# ---------- Rate changes ----------
def arm_payment(
    principal: float,
    intro_apr: float,
    intro_years: float,
    adjusted_apr: float,
    years: float = 30,
) -> Dict:
    """Adjustable-rate mortgage: payment during the intro period and after the reset.

    The intro payment amortizes the loan over the full term.  At the reset the
    remaining balance is re-amortized over the months left at the new rate.
    """
    _require_positive(loan_amount=principal)
    _require_term(loan_term=years, intro_period=intro_years)
    if intro_apr < 0 or adjusted_apr < 0:
        raise InvalidInput("Interest rates cannot be negative.")
    months = term_months(years)
    intro_months = term_months(intro_years)
    if intro_months >= months:
        raise InvalidInput("The intro period must be shorter than the loan term.")

    intro_payment = amortized_payment(principal, intro_apr, months)
    reset_balance = remaining_balance(principal, intro_apr, months, intro_months)
    months_left = months - intro_months
    adjusted_payment = amortized_payment(reset_balance, adjusted_apr, months_left) or 0.0

    rows = amortization_schedule(principal, intro_apr, months)[:intro_months]
    for row in amortization_schedule(reset_balance, adjusted_apr, months_left):
        rows.append({**row, "month": row["month"] + intro_months})
    total_interest = sum(r["interest"] for r in rows)
    return {
        "intro_payment": intro_payment,
        "reset_balance": reset_balance,
        "adjusted_payment": adjusted_payment,
        "payment_change": adjusted_payment - intro_payment,
        "total_interest": total_interest,
        "total_paid": principal + total_interest,
        "schedule": rows,
    }


def rate_change_impact(
    principal: float,
    years: float,
    current_apr: float,
    new_apr: float,
    adjustment_cap: Optional[float] = None,
    lifetime_cap: Optional[float] = None,
) -> Dict:
    """Payment and lifetime interest before and after a rate change.

    Caps are percentage points above ``current_apr``; the lower of the two
    limits how far the new rate can rise.
    """
    _require_positive(loan_amount=principal)
    _require_term(loan_term=years)
    if current_apr < 0 or new_apr < 0:
        raise InvalidInput("Interest rates cannot be negative.")
    caps = [c for c in (adjustment_cap, lifetime_cap) if c is not None]
    if any(c < 0 for c in caps):
        raise InvalidInput("Rate caps cannot be negative.")

    rate = float(new_apr)
    if caps:
        rate = min(rate, current_apr + min(caps))
    current = loan_summary(principal, current_apr, years)
    new = loan_summary(principal, rate, years)
    return {
        "current_payment": current["monthly_payment"],
        "new_payment": new["monthly_payment"],
        "rate_applied": rate,
        "capped": rate < new_apr,
        "monthly_change": new["monthly_payment"] - current["monthly_payment"],
        "current_interest": current["total_interest"],
        "new_interest": new["total_interest"],
        "interest_change": new["total_interest"] - current["total_interest"],
    }


def biweekly_savings(principal: float, apr: float, years: float) -> Dict:
    """Half the monthly payment every two weeks against the monthly schedule.

    26 half payments a year add up to one extra monthly payment, so the loan
    ends early.  Interest accrues at ``apr / 26`` per period.
    """
    _require_positive(loan_amount=principal)
    _require_term(loan_term=years)
    if apr < 0:
        raise InvalidInput("Interest rate cannot be negative.")
    baseline = loan_summary(principal, apr, years)
    half = baseline["monthly_payment"] / 2
    r = apr / 100.0 / BIWEEKLY_PERIODS

    balance = float(principal)
    periods = 0
    interest_total = 0.0
    max_periods = baseline["months"] * 2 * BIWEEKLY_PERIODS // 12
    while balance > 0.005 and periods < max_periods:
        periods += 1
        interest = balance * r
        balance -= min(balance, half - interest)
        interest_total += interest

    payoff_months = periods * 12 / BIWEEKLY_PERIODS
    return {
        "monthly_payment": baseline["monthly_payment"],
        "biweekly_payment": half,
        "periods": periods,
        "payoff_months": payoff_months,
        "monthly_interest": baseline["total_interest"],
        "biweekly_interest": interest_total,
        "interest_saved": baseline["total_interest"] - interest_total,
        "months_saved": max(0.0, baseline["months"] - payoff_months),
    }


__all__ = [
    "mortgage_payment",
    "apr_with_fees",
    "extra_payment_savings",
    "balloon_loan",
    "refinance_savings",
    "points_break_even",
    "payoff_time",
    "compare_terms",
    "loan_to_value",
    "pmi_cost",
    "rent_vs_buy",
    "arm_payment",
    "rate_change_impact",
    "biweekly_savings",
]
