"""Shared fixtures for the inventory search tests."""

from pathlib import Path
from typing import Iterator, List

import pytest
from fastapi.testclient import TestClient

from core.events import set_event_log_path
from core.schema import InventoryRecord
from server import app, get_store_loader

SAMPLE_ROWS = [
    {"id": 1, "product_name": "Laptop Dell XPS 15", "category": "Electronics", "price": 1299.99, "quantity": 12, "supplier": "TechSource Ltd", "city": "Austin"},
    {"id": 2, "product_name": "Clean Code", "category": "Books", "price": 37.5, "quantity": 140, "supplier": "Page Turners", "city": "Boston"},
    {"id": 3, "product_name": "Mechanical Keyboard", "category": "Electronics", "price": 100.0, "quantity": 50, "supplier": "Pixel Distribution", "city": "San Jose"},
    {"id": 4, "product_name": "Standing Desk", "category": "Furniture", "price": 599.0, "quantity": 8, "supplier": "Comfort Seating Co", "city": "Grand Rapids"},
    {"id": 5, "product_name": "Monitor 27in", "category": "Electronics", "price": 500.0, "quantity": 18, "supplier": "Pixel Distribution", "city": "San Jose"},
    {"id": 6, "product_name": "laptop stand", "category": "Accessories", "price": 45.0, "quantity": 230, "supplier": "DeskGear Direct", "city": "Portland"},
    {"id": 7, "product_name": "Office Chair", "category": "Furniture", "price": 349.0, "quantity": 20, "supplier": "Comfort Seating Co", "city": "Grand Rapids"},
]


@pytest.fixture(autouse=True)
def event_log(tmp_path: Path) -> Iterator[Path]:
    """Route every logged event to a per-test file."""
    path = tmp_path / "events.jsonl"
    set_event_log_path(path)
    yield path
    set_event_log_path(None)


@pytest.fixture
def records() -> List[InventoryRecord]:
    return [InventoryRecord.model_validate(row) for row in SAMPLE_ROWS]


@pytest.fixture
def api(records: List[InventoryRecord]) -> Iterator[TestClient]:
    """TestClient serving the sample records instead of the on-disk dataset."""
    app.dependency_overrides[get_store_loader] = lambda: (lambda: records)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_rows() -> List[dict]:
    """Two raw API rows, as the search endpoint would return them."""
    return [dict(row) for row in SAMPLE_ROWS[:2]]
