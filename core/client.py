from __future__ import annotations

from typing import Dict, List, Optional

import requests

from .inventory import parse_price
from .schema import ALL_CATEGORIES, InventoryRecord

PRICE_ORDER_MESSAGE = "Minimum price cannot be greater than maximum price"


class SearchFailed(Exception):
    """Raised with the message the form should show to the user."""


def build_search_params(
    search_query: str = "",
    category: str = ALL_CATEGORIES,
    min_price: str = "",
    max_price: str = "",
) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if search_query:
        params["q"] = search_query
    if category and category != ALL_CATEGORIES:
        params["category"] = category
    if min_price:
        params["minPrice"] = min_price
    if max_price:
        params["maxPrice"] = max_price
    return params


def validate_price_inputs(min_price: str, max_price: str) -> Optional[str]:
    low = parse_price(min_price)
    high = parse_price(max_price)
    if low is not None and high is not None and low > high:
        return PRICE_ORDER_MESSAGE
    return None


def fetch_categories(base_url: str, timeout: int = 15) -> List[str]:
    resp = requests.get(f"{base_url}/categories", timeout=timeout)
    resp.raise_for_status()
    return resp.json().get("categories") or []


def _search_once(base_url: str, params: Dict[str, str], timeout: int) -> List[InventoryRecord]:
    resp = requests.get(f"{base_url}/search", params=params, timeout=timeout)
    try:
        data = resp.json()
    except ValueError:
        resp.raise_for_status()
        raise SearchFailed("Search failed: response was not JSON")
    if data.get("success") is False:
        raise SearchFailed(data.get("error") or "Search failed")
    resp.raise_for_status()
    return [InventoryRecord.model_validate(item) for item in data.get("results") or []]


def search_inventory(
    base_url: str,
    params: Dict[str, str],
    retries: int = 1,
    timeout: int = 15,
) -> List[InventoryRecord]:
    last_error: Exception = SearchFailed("Search failed")
    for _ in range(retries + 1):
        try:
            return _search_once(base_url, params, timeout)
        except SearchFailed as exc:
            last_error = exc
        except requests.RequestException as exc:
            last_error = SearchFailed(f"Search request failed: {exc}")
    raise last_error


def format_price(price: float) -> str:
    return f"${price:,.2f}"


def items_found_label(count: int) -> str:
    return f"{count} {'item' if count == 1 else 'items'} found"
