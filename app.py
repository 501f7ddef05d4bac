from __future__ import annotations

from typing import Dict, List

import requests
import streamlit as st

from core.client import (
    SearchFailed,
    build_search_params,
    fetch_categories,
    format_price,
    items_found_label,
    search_inventory,
    validate_price_inputs,
)
from core.config import api_url
from core.events import clear_events, read_events
from core.schema import ALL_CATEGORIES, InventoryRecord

API_URL = api_url()

EMPTY_FILTERS: Dict[str, str] = {
    "searchQuery": "",
    "category": ALL_CATEGORIES,
    "minPrice": "",
    "maxPrice": "",
}

st.set_page_config(
    page_title="Inventory Search",
    page_icon="/",
    layout="wide",
)


@st.cache_data(ttl=5 * 60, show_spinner=False)
def cached_categories(base_url: str) -> List[str]:
    return fetch_categories(base_url)


@st.cache_data(ttl=30, show_spinner=False)
def cached_search(base_url: str, params_key: tuple) -> List[dict]:
    records = search_inventory(base_url, dict(params_key), retries=1)
    return [record.model_dump() for record in records]


def _reset_filters():
    for key, value in EMPTY_FILTERS.items():
        st.session_state[key] = value
    st.session_state["active_filters"] = dict(EMPTY_FILTERS)
    st.session_state["validation_error"] = ""


def _submit_search():
    error = validate_price_inputs(st.session_state["minPrice"], st.session_state["maxPrice"])
    if error:
        st.session_state["validation_error"] = error
        return
    st.session_state["validation_error"] = ""
    st.session_state["active_filters"] = {key: st.session_state[key] for key in EMPTY_FILTERS}


def _render_cards(results: List[InventoryRecord]):
    columns = st.columns(3)
    for index, item in enumerate(results):
        with columns[index % 3].container(border=True):
            st.markdown(f"**{item.product_name}**")
            st.caption(item.category)
            st.markdown(f"### {format_price(item.price)}")
            st.markdown(f"**{item.quantity}** units")
            st.markdown(f"{item.supplier}  \n📍 {item.city}")


for key, value in EMPTY_FILTERS.items():
    st.session_state.setdefault(key, value)
st.session_state.setdefault("active_filters", dict(EMPTY_FILTERS))
st.session_state.setdefault("validation_error", "")

with st.sidebar:
    st.subheader("Backend")
    st.markdown(f"**API:** `{API_URL}`")
    try:
        health = requests.get(f"{API_URL}/health", timeout=5).json()
        if health.get("ok"):
            st.success(f"Online, {health.get('records', 0)} records loaded")
        else:
            st.error(f"Search API is up but its inventory failed to load ({health.get('error')})")
    except (requests.RequestException, ValueError) as exc:
        st.error(f"Could not reach the search API ({exc})")

    st.markdown("---")
    st.subheader("Recent Searches")
    if st.button("Clear Search Log"):
        clear_events()
        st.success("Search log cleared.")
    events = [e for e in read_events(limit=25) if e.get("event", "").startswith("search")]
    if not events:
        st.caption("No searches logged yet.")
    else:
        for event in reversed(events):
            st.json(event)

st.title("Inventory Search")
st.caption("Search and discover surplus inventory from multiple suppliers")

try:
    categories = cached_categories(API_URL)
except requests.RequestException:
    categories = []

with st.form("search_form", clear_on_submit=False):
    st.text_input("Product Name", placeholder="Enter product name...", key="searchQuery")
    category_col, min_col, max_col = st.columns(3)
    with category_col:
        st.selectbox(
            "Category",
            [ALL_CATEGORIES] + categories,
            format_func=lambda value: "All Categories" if value == ALL_CATEGORIES else value,
            key="category",
        )
    with min_col:
        st.text_input("Min Price", placeholder="0.00", key="minPrice")
    with max_col:
        st.text_input("Max Price", placeholder="999.99", key="maxPrice")
    search_col, reset_col = st.columns(2)
    with search_col:
        st.form_submit_button("Search", on_click=_submit_search, type="primary", use_container_width=True)
    with reset_col:
        st.form_submit_button("Reset", on_click=_reset_filters, use_container_width=True)

if st.session_state["validation_error"]:
    st.error(st.session_state["validation_error"])
else:
    active = st.session_state["active_filters"]
    params = build_search_params(
        active["searchQuery"], active["category"], active["minPrice"], active["maxPrice"]
    )
    try:
        with st.spinner("Searching inventory..."):
            rows = cached_search(API_URL, tuple(sorted(params.items())))
    except SearchFailed as exc:
        st.error(str(exc))
    else:
        results = [InventoryRecord.model_validate(row) for row in rows]
        header_col, count_col = st.columns([3, 1])
        header_col.subheader("Search Results")
        count_col.markdown(f"**{items_found_label(len(results))}**")

        if not results:
            st.markdown("#### No results found")
            st.caption("Try adjusting your search filters or search terms")
        else:
            table_tab, cards_tab = st.tabs(["Table", "Cards"])
            with table_tab:
                st.dataframe(
                    [
                        {
                            "Product": item.product_name,
                            "Category": item.category,
                            "Price": format_price(item.price),
                            "Quantity": item.quantity,
                            "Supplier": item.supplier,
                            "City": item.city,
                        }
                        for item in results
                    ],
                    hide_index=True,
                    use_container_width=True,
                )
            with cards_tab:
                _render_cards(results)
