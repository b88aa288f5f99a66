"""Health insurance cost estimators.

Covered medical spending is shared in three steps: the patient pays
everything up to the deductible, then a coinsurance share of the rest, and
the total is capped at the out-of-pocket maximum.  An out-of-pocket maximum
of 0 means the plan has no cap.

Example
-------

>>> r = out_of_pocket_cost(400, 1500, 20, 6000, 10000)
>>> r["out_of_pocket"], r["total_annual_cost"]
(3200.0, 8000.0)
"""

from __future__ import annotations

import math
from typing import Dict, Optional

from .errors import InvalidInput


def _require_non_negative(**values: float) -> None:
    for name, value in values.items():
        if value is None or not math.isfinite(value) or value < 0:
            label = name.replace("_", " ")
            raise InvalidInput(f"Enter a {label} of 0 or more.")


def _require_share(**values: float) -> None:
    for name, value in values.items():
        if not 0 <= value <= 100:
            label = name.replace("_", " ")
            raise InvalidInput(f"Enter a {label} between 0 and 100%.")


def _cost_share(expenses: float, deductible: float, coinsurance: float, out_of_pocket_max: float) -> Dict:
    deductible_paid = min(expenses, deductible)
    remaining = max(0.0, expenses - deductible)
    coinsurance_paid = remaining * coinsurance / 100.0
    uncapped = deductible_paid + coinsurance_paid
    capped = uncapped if out_of_pocket_max <= 0 else min(uncapped, out_of_pocket_max)
    return {
        "deductible_paid": float(deductible_paid),
        "subject_to_coinsurance": remaining,
        "coinsurance_paid": coinsurance_paid,
        "out_of_pocket": float(capped),
        "hit_max": out_of_pocket_max > 0 and uncapped >= out_of_pocket_max,
    }


def out_of_pocket_cost(
    monthly_premium: float,
    deductible: float,
    coinsurance: float,
    out_of_pocket_max: float,
    expected_expenses: float,
) -> Dict:
    """Yearly premiums plus the patient's share of ``expected_expenses``."""
    _require_non_negative(
        monthly_premium=monthly_premium,
        deductible=deductible,
        out_of_pocket_maximum=out_of_pocket_max,
        expected_expenses=expected_expenses,
    )
    _require_share(coinsurance=coinsurance)
    share = _cost_share(expected_expenses, deductible, coinsurance, out_of_pocket_max)
    annual_premium = monthly_premium * 12
    return {
        "annual_premium": annual_premium,
        **share,
        "total_annual_cost": annual_premium + share["out_of_pocket"],
        "insurance_paid": max(0.0, expected_expenses - share["out_of_pocket"]),
    }


def deductible_plan_comparison(
    expected_expenses: float,
    high_premium: float,
    high_deductible: float,
    high_coinsurance: float,
    low_premium: float,
    low_deductible: float,
    low_coinsurance: float,
    high_out_of_pocket_max: float = 0.0,
    low_out_of_pocket_max: float = 0.0,
) -> Dict:
    """Total yearly cost of a high-deductible plan against a low-deductible one.

    Premiums here are annual.
    """
    _require_non_negative(
        expected_expenses=expected_expenses,
        high_premium=high_premium,
        high_deductible=high_deductible,
        low_premium=low_premium,
        low_deductible=low_deductible,
        high_out_of_pocket_max=high_out_of_pocket_max,
        low_out_of_pocket_max=low_out_of_pocket_max,
    )
    _require_share(high_coinsurance=high_coinsurance, low_coinsurance=low_coinsurance)
    high = _cost_share(expected_expenses, high_deductible, high_coinsurance, high_out_of_pocket_max)
    low = _cost_share(expected_expenses, low_deductible, low_coinsurance, low_out_of_pocket_max)
    high_total = high_premium + high["out_of_pocket"]
    low_total = low_premium + low["out_of_pocket"]
    if high_total < low_total:
        cheaper = "High deductible"
    elif low_total < high_total:
        cheaper = "Low deductible"
    else:
        cheaper = "Tie"
    return {
        "high_out_of_pocket": high["out_of_pocket"],
        "low_out_of_pocket": low["out_of_pocket"],
        "high_total": high_total,
        "low_total": low_total,
        "cheaper": cheaper,
        "savings": abs(high_total - low_total),
    }


def er_copay_vs_coinsurance(charges: float, copay: float, coinsurance: float) -> Dict:
    """Out-of-pocket cost of one ER bill under a flat copay or a coinsurance share."""
    _require_non_negative(er_charges=charges, copay=copay)
    _require_share(coinsurance=coinsurance)
    coinsurance_cost = charges * coinsurance / 100.0
    if copay < coinsurance_cost:
        cheaper = "Copay"
    elif coinsurance_cost < copay:
        cheaper = "Coinsurance"
    else:
        cheaper = "Tie"
    break_even: Optional[float] = copay / (coinsurance / 100.0) if coinsurance > 0 else None
    return {
        "copay_cost": float(copay),
        "coinsurance_cost": coinsurance_cost,
        "cheaper": cheaper,
        "difference": abs(copay - coinsurance_cost),
        "break_even_charges": break_even,
    }


__all__ = ["out_of_pocket_cost", "deductible_plan_comparison", "er_copay_vs_coinsurance"]
