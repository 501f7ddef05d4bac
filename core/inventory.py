from __future__ import annotations

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import load_service_config
from .events import try_log_event
from .schema import ALL_CATEGORIES, FilterCriteria, InventoryRecord

_NUMBER_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def load_inventory(path: Path) -> Tuple[InventoryRecord, ...]:
    if not path.exists():
        raise FileNotFoundError(f"Inventory dataset not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    records = tuple(InventoryRecord.model_validate(item) for item in data)
    seen = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"Duplicate inventory id {record.id} in {path}")
        seen.add(record.id)
    return records


@lru_cache(maxsize=1)
def get_inventory() -> Tuple[InventoryRecord, ...]:
    """Process-wide store, loaded on first use and never mutated."""
    path = load_service_config().inventory_path
    records = load_inventory(path)
    try_log_event("inventory_loaded", path=str(path), records=len(records))
    return records


def parse_price(raw: Optional[str], strict: bool = False) -> Optional[float]:
    """Read the leading number of a price filter, e.g. "600abc" -> 600.0.

    Input with no leading number ("abc", "nan", "inf", "") is None. With
    ``strict`` the number must make up the whole value, so "600abc" is None.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return None
    if strict and match.end() != len(text):
        return None
    return float(match.group())


def matches_query(text: str, query: Optional[str]) -> bool:
    if not query:
        return True
    return query.lower() in text.lower()


def search_inventory(
    records: Sequence[InventoryRecord], criteria: FilterCriteria
) -> List[InventoryRecord]:
    category = criteria.category
    if category == ALL_CATEGORIES:
        category = None

    def matches(item: InventoryRecord) -> bool:
        if not matches_query(item.product_name, criteria.name):
            return False
        if category and item.category.lower() != category.lower():
            return False
        if criteria.min_price is not None and item.price < criteria.min_price:
            return False
        if criteria.max_price is not None and item.price > criteria.max_price:
            return False
        return True

    return [item for item in records if matches(item)]


def list_categories(records: Iterable[InventoryRecord]) -> List[str]:
    return sorted({item.category for item in records})
