"""Tool catalog and related-tool scoring.

The catalog lives in ``calculators/data/tools.json``: a list of categories and a list of
tools, each tool carrying ``slug``, ``title``, ``description``, ``category``
and free-form ``tags``.

Related tools are picked within a category by comparing tags.  Generic tags
("calculator", "cost", ...) are dropped, and each tool gets a *core tag*: its
highest weighted tag from ``CORE_TAG_WEIGHT``.  Two tools sharing a core tag
score 100, and each shared tag adds 12.

Example
-------

>>> normalize_tag("  Credit   Card ")
'credit-card'
>>> core_tag(["loan", "Mortgage", "calculator"])
'mortgage'
"""

from __future__ import annotations

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from config import settings

_DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "calculators" / "data" / "tools.json"

STOP_TAGS = frozenset({
    "finance",
    "calculator",
    "calculation",
    "estimate",
    "estimator",
    "comparison",
    "compare",
    "cost",
    "fee",
    "impact",
    "rate",
})

CORE_TAG_WEIGHT: Dict[str, int] = {
    "exchange-rate": 100,
    "currency-exchange": 95,
    "take-home-pay": 95,
    "income-tax": 92,
    "capital-gains-tax": 92,
    "tax": 90,
    "hourly-rate": 90,
    "payroll": 88,
    "dividend": 88,
    "retirement": 86,
    "mortgage": 86,
    "salary": 85,
    "loan": 84,
    "credit-card": 84,
    "insurance": 82,
}

CORE_MATCH_SCORE = 100
SHARED_TAG_SCORE = 12


class CatalogError(ValueError):
    """The catalog file is malformed."""


def _validate(data: Dict) -> Dict:
    categories = data.get("categories")
    tools = data.get("tools")
    if not isinstance(categories, list) or not isinstance(tools, list):
        raise CatalogError("Catalog needs 'categories' and 'tools' lists.")

    category_ids = set()
    for c in categories:
        if not c.get("id") or not c.get("name"):
            raise CatalogError(f"Category is missing an id or name: {c!r}")
        category_ids.add(c["id"])

    seen = set()
    for t in tools:
        for key in ("slug", "title", "category"):
            if not t.get(key):
                raise CatalogError(f"Tool is missing '{key}': {t!r}")
        if t["slug"] in seen:
            raise CatalogError(f"Duplicate tool slug: {t['slug']}")
        if t["category"] not in category_ids:
            raise CatalogError(f"Tool {t['slug']} has unknown category {t['category']}")
        seen.add(t["slug"])
        t.setdefault("description", "")
        t.setdefault("tags", [])
    return data


def load_catalog(path: Optional[Path] = None) -> Dict[str, List[Dict]]:
    """Read and validate a catalog file.  Defaults to ``calculators/data/tools.json``."""
    p = path or _DEFAULT_CATALOG_PATH
    with open(p, "r", encoding="utf-8") as f:
        data = json.load(f)
    return _validate(data)


@lru_cache(maxsize=1)
def _default_catalog() -> Dict[str, List[Dict]]:
    return load_catalog()


def _catalog(catalog: Optional[Dict] = None) -> Dict[str, List[Dict]]:
    return catalog if catalog is not None else _default_catalog()


def all_tools(catalog: Optional[Dict] = None) -> List[Dict]:
    return list(_catalog(catalog)["tools"])


def all_categories(catalog: Optional[Dict] = None) -> List[Dict]:
    return list(_catalog(catalog)["categories"])


def get_tool(slug: str, catalog: Optional[Dict] = None) -> Optional[Dict]:
    for t in _catalog(catalog)["tools"]:
        if t["slug"] == slug:
            return t
    return None


def get_category(category_id: str, catalog: Optional[Dict] = None) -> Optional[Dict]:
    for c in _catalog(catalog)["categories"]:
        if c["id"] == category_id:
            return c
    return None


def tools_in_category(category_id: str, catalog: Optional[Dict] = None) -> List[Dict]:
    return [t for t in _catalog(catalog)["tools"] if t["category"] == category_id]


def search_tools(query: str, catalog: Optional[Dict] = None) -> List[Dict]:
    """Case-insensitive substring match over title, description and tags."""
    q = (query or "").strip().lower()
    tools = _catalog(catalog)["tools"]
    if not q:
        return list(tools)
    hits = []
    for t in tools:
        haystack = " ".join([t["title"], t["description"], *t["tags"]]).lower()
        if q in haystack:
            hits.append(t)
    return hits


# ---------- Related tools ----------
def normalize_tag(tag: str) -> str:
    t = re.sub(r"\s+", "-", (tag or "").strip().lower())
    return re.sub(r"-+", "-", t)


def clean_tags(tags: Iterable[str]) -> List[str]:
    """Normalized tags without stop tags or duplicates, in original order."""
    out: List[str] = []
    for tag in tags or []:
        t = normalize_tag(tag)
        if t and t not in STOP_TAGS and t not in out:
            out.append(t)
    return out


def core_tag(tags: Iterable[str]) -> Optional[str]:
    """Highest weighted tag, or ``None`` when no tag carries a weight."""
    best = None
    best_weight = 0
    for t in clean_tags(tags):
        weight = CORE_TAG_WEIGHT.get(t, 0)
        if weight > best_weight:
            best, best_weight = t, weight
    return best


def score_tools(a: Dict, b: Dict) -> int:
    a_tags = clean_tags(a.get("tags", []))
    b_tags = set(clean_tags(b.get("tags", [])))
    shared = sum(1 for t in a_tags if t in b_tags)
    if shared == 0:
        return 0
    score = SHARED_TAG_SCORE * shared
    a_core = core_tag(a_tags)
    if a_core is not None and a_core == core_tag(b_tags):
        score += CORE_MATCH_SCORE
    return score


def related_tools(tool: Dict, limit: Optional[int] = None, catalog: Optional[Dict] = None) -> List[Dict]:
    """Best scoring tools from the same category, excluding ``tool`` itself.

    Ties keep catalog order.
    """
    if limit is None:
        limit = settings.related_limit
    scored = []
    for candidate in tools_in_category(tool["category"], catalog):
        if candidate["slug"] == tool["slug"]:
            continue
        score = score_tools(tool, candidate)
        if score > 0:
            scored.append((score, candidate))
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [c for _, c in scored[:limit]]


__all__ = [
    "CatalogError",
    "STOP_TAGS",
    "CORE_TAG_WEIGHT",
    "load_catalog",
    "all_tools",
    "all_categories",
    "get_tool",
    "get_category",
    "tools_in_category",
    "search_tools",
    "normalize_tag",
    "clean_tags",
    "core_tag",
    "score_tools",
    "related_tools",
]
