"""Shared loan arithmetic.

Most of the loan tools in this package are variations on a fixed-rate,
fully-amortizing loan.  The helpers here implement that loan once:

* ``amortized_payment`` – level monthly payment for principal, APR and term.
* ``loan_summary`` – payment plus total paid and total interest.
* ``amortization_schedule`` – month-by-month rows, optionally with extra
  principal each month.
* ``present_value`` / ``solve_monthly_rate`` – discounting and a bounded
  bisection used to back an APR out of a payment.

Rates are annual percentages (``7`` means 7 %) and compound monthly.  The
helpers never raise for bad numbers; they return ``None`` so a caller can show
a placeholder instead of a result.

Example
-------

>>> round(amortized_payment(300000, 7, 360), 2)
1995.91

>>> round(amortized_payment(200000, 0, 120), 2)
1666.67
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional

import numpy as np

MONTHS_PER_YEAR = 12
MAX_SCHEDULE_MONTHS = 1200  # 100 years
BISECTION_MAX_ITERATIONS = 60
BISECTION_TOLERANCE = 1e-7


def _finite(*values: float) -> bool:
    return all(isinstance(v, (int, float)) and math.isfinite(v) for v in values)


def monthly_rate(apr: float) -> float:
    """Convert an annual percentage rate to a monthly decimal rate."""
    return apr / 100.0 / MONTHS_PER_YEAR


def term_months(years: float) -> int:
    """Whole number of monthly payments in ``years``."""
    return int(round(years * MONTHS_PER_YEAR))


def amortized_payment(principal: float, apr: float, months: int) -> Optional[float]:
    """Level monthly payment that retires ``principal`` in ``months`` payments.

    A zero rate degenerates to ``principal / months``.  Non-positive principal
    or term, a negative rate, or non-finite input give ``None``.
    """
    if not _finite(principal, apr, months):
        return None
    if principal <= 0 or months <= 0 or apr < 0:
        return None
    r = monthly_rate(apr)
    if r == 0:
        return principal / months
    growth = (1.0 + r) ** months
    return principal * r * growth / (growth - 1.0)


def loan_summary(principal: float, apr: float, years: float) -> Optional[Dict[str, float]]:
    """Payment, total paid and total interest for a fixed-rate loan."""
    months = term_months(years) if _finite(years) else 0
    payment = amortized_payment(principal, apr, months)
    if payment is None:
        return None
    total_paid = payment * months
    return {
        "monthly_payment": payment,
        "total_paid": total_paid,
        "total_interest": total_paid - principal,
        "months": months,
    }


def amortization_schedule(
    principal: float,
    apr: float,
    months: int,
    extra_monthly: float = 0.0,
    max_months: int = MAX_SCHEDULE_MONTHS,
) -> List[Dict[str, float]]:
    """Build a month-by-month amortization table.

    Parameters
    ----------
    principal : float
        Starting loan balance.
    apr : float
        Annual percentage rate.
    months : int
        Term used to size the scheduled payment.
    extra_monthly : float, optional
        Additional principal paid every month on top of the scheduled payment.
    max_months : int, optional
        Hard stop for the simulation.

    Returns
    -------
    list of dict
        Rows with ``month``, ``payment``, ``interest``, ``principal``,
        ``extra`` and ``balance``.  Empty when the loan is invalid or the
        scheduled payment does not cover the monthly interest.
    """
    base = amortized_payment(principal, apr, months)
    if base is None:
        return []
    r = monthly_rate(apr)
    if r > 0 and base <= principal * r:
        return []
    extra = max(0.0, float(extra_monthly or 0.0))

    rows: List[Dict[str, float]] = []
    balance = float(principal)
    month = 0
    while balance > 0.01 and month < max_months:
        month += 1
        interest = balance * r
        principal_paid = max(0.0, base - interest)
        extra_paid = extra

        # last payment only clears what is left
        if principal_paid + extra_paid > balance:
            if principal_paid >= balance:
                principal_paid = balance
                extra_paid = 0.0
            else:
                extra_paid = balance - principal_paid

        balance -= principal_paid + extra_paid
        rows.append({
            "month": month,
            "payment": interest + principal_paid + extra_paid,
            "interest": interest,
            "principal": principal_paid,
            "extra": extra_paid,
            "balance": max(0.0, balance),
        })
    return rows


def remaining_balance(principal: float, apr: float, months: int, after_months: int) -> Optional[float]:
    """Outstanding balance after ``after_months`` scheduled payments."""
    payment = amortized_payment(principal, apr, months)
    if payment is None or after_months < 0:
        return None
    r = monthly_rate(apr)
    k = min(int(after_months), int(months))
    if r == 0:
        return max(0.0, principal - payment * k)
    growth = (1.0 + r) ** k
    return max(0.0, principal * growth - payment * (growth - 1.0) / r)


# ---------- Discounting ----------
def present_value(payment: float, rate: float, months: int) -> float:
    """Present value of ``months`` equal end-of-month payments at ``rate``."""
    periods = np.arange(1, int(months) + 1, dtype=float)
    return float(np.sum(payment / (1.0 + rate) ** periods))


def solve_monthly_rate(
    payment: float,
    amount_financed: float,
    months: int,
    low: float = 0.0,
    high: float = 1.0,
    max_iterations: int = BISECTION_MAX_ITERATIONS,
    tolerance: float = BISECTION_TOLERANCE,
) -> Optional[float]:
    """Find the monthly rate at which the payments are worth ``amount_financed``.

    Bisection over ``[low, high]``.  Present value falls as the rate rises, so
    a present value above the target moves the lower bound up.
    """
    if amount_financed <= 0 or months <= 0 or payment <= 0:
        return None
    for _ in range(max_iterations):
        mid = (low + high) / 2.0
        pv = present_value(payment, mid, months)
        if abs(pv - amount_financed) < tolerance:
            return mid
        if pv > amount_financed:
            low = mid
        else:
            high = mid
    return (low + high) / 2.0


def annualize(monthly: float) -> float:
    """Monthly decimal rate back to an annual percentage."""
    return monthly * MONTHS_PER_YEAR * 100.0


__all__ = [
    "MONTHS_PER_YEAR",
    "MAX_SCHEDULE_MONTHS",
    "monthly_rate",
    "term_months",
    "amortized_payment",
    "loan_summary",
    "amortization_schedule",
    "remaining_balance",
    "present_value",
    "solve_monthly_rate",
    "annualize",
]
