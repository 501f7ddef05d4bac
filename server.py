from __future__ import annotations

from typing import Callable, Optional, Sequence

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import load_service_config
from core.events import try_log_event
from core.inventory import get_inventory, list_categories
from core.schema import CategoriesResult, ErrorResult, InventoryRecord
from core.search import InvalidSearchError, run_search

StoreLoader = Callable[[], Sequence[InventoryRecord]]

CONFIG = load_service_config()

app = FastAPI(title="Inventory Search")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CONFIG.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_store_loader() -> StoreLoader:
    return get_inventory


def error_response(status_code: int, message: str, field: str) -> JSONResponse:
    body = ErrorResult(error=message, **{field: []})
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status_code)


@app.get("/health")
async def health(load_store: StoreLoader = Depends(get_store_loader)):
    try:
        return {"ok": True, "records": len(load_store())}
    except Exception as exc:
        try_log_event("health_error", error=repr(exc))
        return JSONResponse({"ok": False, "error": "Internal server error"}, status_code=500)


@app.get("/search")
def search(
    q: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    load_store: StoreLoader = Depends(get_store_loader),
):
    """Filter the store by name substring, category and inclusive price range.

    minPrice > maxPrice is a 400; anything unexpected is a generic 500.
    """
    try:
        result = run_search(
            load_store(),
            q=q,
            category=category,
            min_price=min_price,
            max_price=max_price,
            strict=CONFIG.strict_price_filters,
        )
        try_log_event("search", query=result.query.model_dump(), count=result.count)
        return result.model_dump()
    except InvalidSearchError as exc:
        try_log_event(
            "search_rejected",
            q=q,
            category=category,
            minPrice=min_price,
            maxPrice=max_price,
            error=str(exc),
        )
        return error_response(400, str(exc), "results")
    except Exception as exc:
        try_log_event("search_error", error=repr(exc))
        return error_response(500, "Internal server error", "results")


@app.get("/categories")
def categories(load_store: StoreLoader = Depends(get_store_loader)):
    try:
        return CategoriesResult(categories=list_categories(load_store())).model_dump()
    except Exception as exc:
        try_log_event("categories_error", error=repr(exc))
        return error_response(500, "Internal server error", "categories")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=CONFIG.port)
