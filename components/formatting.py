# components/formatting.py
# Display formatters for result values. Anything missing or non-finite
# renders as PLACEHOLDER.

import math
from typing import Optional

PLACEHOLDER = "—"


def _ok(x) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x)


def money(x: Optional[float]) -> str:
    """Whole dollars, e.g. ``$1,996`` or ``-$250``."""
    if not _ok(x):
        return PLACEHOLDER
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.0f}"


def money2(x: Optional[float]) -> str:
    if not _ok(x):
        return PLACEHOLDER
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.2f}"


def percent(x: Optional[float], digits: int = 2) -> str:
    """``x`` is already a percentage: ``percent(4.5)`` gives ``4.50%``."""
    if not _ok(x):
        return PLACEHOLDER
    return f"{x:,.{digits}f}%"


def number(x: Optional[float], digits: int = 2) -> str:
    if not _ok(x):
        return PLACEHOLDER
    if isinstance(x, int):
        return f"{x:,}"
    return f"{x:,.{digits}f}"


def months_to_text(months: Optional[float]) -> str:
    """``27`` -> ``2 years 3 months``."""
    if not _ok(months) or months < 0:
        return PLACEHOLDER
    m = int(math.ceil(months))
    years, rem = divmod(m, 12)
    parts = []
    if years:
        parts.append(f"{years} year{'s' if years != 1 else ''}")
    if rem or not years:
        parts.append(f"{rem} month{'s' if rem != 1 else ''}")
    return " ".join(parts)


FORMATTERS = {
    "money": money,
    "money2": money2,
    "percent": percent,
    "number": number,
    "months": months_to_text,
    "text": lambda x: PLACEHOLDER if x is None else str(x),
    "yesno": lambda x: PLACEHOLDER if x is None else ("Yes" if x else "No"),
}


def fmt(kind: str, value) -> str:
    return FORMATTERS[kind](value)
