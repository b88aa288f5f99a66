"""Simplified Social Security benefit estimator.

The retirement income tool asks for a Primary Insurance Amount (PIA), the
monthly benefit at full retirement age, and a claiming age, for one or two
earners.  Early claiming reduces the benefit and delayed claiming earns
credits:

* FRA defaults to 67, the full retirement age for anyone born 1960 or later.
* Each year claimed before FRA reduces the benefit by 7 %.
* Each year of delay after FRA, up to age 70, adds 8 %.
* Claiming ages outside 62 to 70 are clamped into that range.

A couple receives both benefits.  After one death the survivor keeps the
larger of the two.

Example
-------

>>> round(annual_benefit(2000, 65), 2)
20640.0
>>> household_benefit(2000, 67, 1000, 67, survivor=True)["household"]
24000.0
"""

from __future__ import annotations

from typing import Dict

EARLIEST_CLAIM_AGE = 62
LATEST_CLAIM_AGE = 70
FULL_RETIREMENT_AGE = 67
EARLY_REDUCTION = 0.07
DELAY_CREDIT = 0.08


def claim_factor(claim_age: int, fra: int = FULL_RETIREMENT_AGE) -> float:
    """Multiplier on the PIA for claiming at ``claim_age``."""
    age = max(EARLIEST_CLAIM_AGE, min(LATEST_CLAIM_AGE, int(claim_age)))
    years = age - fra
    rate = EARLY_REDUCTION if years < 0 else DELAY_CREDIT
    return 1.0 + rate * years


def annual_benefit(pia: float, claim_age: int, fra: int = FULL_RETIREMENT_AGE) -> float:
    """Yearly benefit for one earner; a non-positive PIA gives 0."""
    if pia <= 0:
        return 0.0
    return pia * claim_factor(claim_age, fra) * 12


def household_benefit(
    pia: float,
    claim_age: int,
    spouse_pia: float = 0.0,
    spouse_claim_age: int = FULL_RETIREMENT_AGE,
    survivor: bool = False,
    fra: int = FULL_RETIREMENT_AGE,
) -> Dict[str, float]:
    """Yearly benefits for an earner and spouse.

    ``household`` is the sum of both benefits, or the larger one when
    ``survivor`` is set.
    """
    own = annual_benefit(pia, claim_age, fra)
    spouse = annual_benefit(spouse_pia, spouse_claim_age, fra)
    household = max(own, spouse) if survivor else own + spouse
    return {"own": own, "spouse": spouse, "household": household}


__all__ = ["claim_factor", "annual_benefit", "household_benefit"]
