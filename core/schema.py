from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

ALL_CATEGORIES = "all"


class InventoryRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    product_name: str
    category: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=0)
    supplier: str
    city: str


class FilterCriteria(BaseModel):
    """Optional constraints for one search. Absent fields do not filter."""

    name: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class SearchQueryEcho(BaseModel):
    q: Optional[str] = None
    category: Optional[str] = None
    minPrice: Optional[str] = None
    maxPrice: Optional[str] = None


class SearchResult(BaseModel):
    success: bool = True
    count: int
    query: SearchQueryEcho
    results: List[InventoryRecord]


class CategoriesResult(BaseModel):
    success: bool = True
    categories: List[str]


class ErrorResult(BaseModel):
    success: bool = False
    error: str
    results: Optional[List[InventoryRecord]] = None
    categories: Optional[List[str]] = None
