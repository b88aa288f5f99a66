"""Helper package that exposes the financial calculators.

The `calculators` package contains small, focused modules, each backing a
group of tools:

* ``amortization`` – shared fixed-rate loan arithmetic and APR bisection.
* ``loans`` – mortgage, APR, refinance, balloon, ARM, biweekly
  and other loan tools.
* ``debt`` – credit card payoff, avalanche/snowball plans, balance transfers
  and DTI.
* ``savings`` – FIRE, retirement projection, savings goals and compounding.
* ``roth`` – Roth versus traditional contributions and IRA limits.
* ``social_security`` – simplified benefit estimate from PIA and claim age, for one or two earners.
* ``taxes`` – progressive federal and state tax, payroll and capital gains.
* ``insurance`` – deductible, coinsurance and out-of-pocket maximum costs.
* ``currency`` – exchange markups and transfer costs.
* ``oil`` – futures, hedging and heating oil.
* ``business`` – profit, break-even, ROI and DSCR.

Each module exposes a few public functions with clear parameters and returns.
Tool functions raise :class:`~calculators.errors.InvalidInput` for inputs they
cannot use.  See individual docstrings for details.
"""

from . import (  # noqa: F401
    amortization,
    business,
    currency,
    debt,
    insurance,
    loans,
    oil,
    roth,
    savings,
    social_security,
    taxes,
)
from .errors import InvalidInput

__all__ = [
    "amortization",
    "business",
    "currency",
    "debt",
    "insurance",
    "loans",
    "oil",
    "roth",
    "savings",
    "social_security",
    "taxes",
    "InvalidInput",
]
