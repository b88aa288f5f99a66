"""Expose component submodules for convenience."""

from .forms import tool_form, defaults_from_params
from .charts import balance_chart, split_chart, growth_chart, comparison_bars
from .registry import REGISTRY, get_entry

__all__ = [
    "tool_form",
    "defaults_from_params",
    "balance_chart",
    "split_chart",
    "growth_chart",
    "comparison_bars",
    "REGISTRY",
    "get_entry",
]
