from __future__ import annotations

from typing import Optional, Sequence

from .inventory import parse_price, search_inventory
from .schema import FilterCriteria, InventoryRecord, SearchQueryEcho, SearchResult

PRICE_RANGE_ERROR = "Invalid price range: minPrice cannot be greater than maxPrice"


class InvalidSearchError(ValueError):
    pass


def _blank(raw: Optional[str]) -> bool:
    return raw is None or not raw.strip()


def echo_query(
    q: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
) -> SearchQueryEcho:
    return SearchQueryEcho(
        q=q or None,
        category=category or None,
        minPrice=min_price or None,
        maxPrice=max_price or None,
    )


def build_criteria(
    q: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    strict: bool = False,
) -> FilterCriteria:
    """Turn raw query-string values into FilterCriteria.

    Prices use their leading number and are dropped when there is none.
    With ``strict`` set, anything but a whole number raises
    InvalidSearchError. The min/max check only runs when both bounds parsed.
    """
    low = parse_price(min_price, strict=strict)
    high = parse_price(max_price, strict=strict)

    if strict:
        for label, raw, value in (("minPrice", min_price, low), ("maxPrice", max_price, high)):
            if not _blank(raw) and value is None:
                raise InvalidSearchError(f"Invalid {label}: '{raw}' is not a number")

    if low is not None and high is not None and low > high:
        raise InvalidSearchError(PRICE_RANGE_ERROR)

    return FilterCriteria(
        name=q or None,
        category=category or None,
        min_price=low,
        max_price=high,
    )


def run_search(
    records: Sequence[InventoryRecord],
    q: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    strict: bool = False,
) -> SearchResult:
    criteria = build_criteria(q, category, min_price, max_price, strict=strict)
    results = search_inventory(records, criteria)
    return SearchResult(
        count=len(results),
        query=echo_query(q, category, min_price, max_price),
        results=results,
    )
