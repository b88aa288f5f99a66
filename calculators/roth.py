# calculators/roth.py
from typing import Dict


def roth_vs_traditional(
    annual_contribution: float,
    years: int,
    return_rate: float,
    tax_now: float,
    tax_retirement: float,
) -> Dict:
    """Compare Roth and traditional contributions of the same size.

    Parameters
    ----------
    annual_contribution : float
        Amount contributed at the end of each year.
    years : int
        Years of contributions.
    return_rate : float
        Annual growth rate in percent.
    tax_now : float
        Marginal tax rate today, in percent.  Roth contributions pay it up
        front; traditional contributions save it.
    tax_retirement : float
        Tax rate applied to traditional withdrawals, in percent.

    Returns
    -------
    dict
        ``future_value`` of the contributions, the after-tax value of each
        account type and ``difference`` (Roth minus traditional).
    """
    c = max(0.0, annual_contribution)
    years = int(min(max(years, 0), 120))
    r = min(max(return_rate, 0.0), 100.0) / 100
    t_now = min(max(tax_now, 0.0), 100.0) / 100
    t_ret = min(max(tax_retirement, 0.0), 100.0) / 100

    fv = c * years if r == 0 else c * (((1 + r) ** years - 1) / r)
    roth_value = fv
    traditional_value = fv * (1 - t_ret)
    diff = roth_value - traditional_value
    return {
        "future_value": fv,
        "roth_after_tax": roth_value,
        "traditional_after_tax": traditional_value,
        "tax_paid_now": c * t_now * years,
        "difference": diff,
        "better": "Roth" if diff > 0 else ("Traditional" if diff < 0 else "Equal"),
    }


def ira_limit_schedule(start_age: int, end_age: int, base_limit: float = 7000.0, inflation: float = 0.03) -> Dict[int, float]:
    """Return a schedule of IRA contribution limits by age.

    The base limit grows with ``inflation`` each year and is rounded to the nearest
    $500.  Beginning at age 50 an additional $1,000 catch-up contribution is added.
    Contributions stop at ``end_age`` (exclusive).
    """
    schedule: Dict[int, float] = {}
    for i, age in enumerate(range(start_age, end_age)):
        limit = base_limit * ((1 + inflation) ** i)
        limit = round(limit / 500.0) * 500.0
        if age >= 50:
            limit += 1000.0
        schedule[age] = limit
    return schedule


__all__ = ["roth_vs_traditional", "ira_limit_schedule"]
