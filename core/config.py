from __future__ import annotations

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"

_TRUTHY = {"1", "true", "yes", "on"}


class ServiceConfig(BaseModel):
    inventory_path: Path = DATA_DIR / "inventory.json"
    event_log_path: Path = DATA_DIR / "search_events.jsonl"
    strict_price_filters: bool = False
    cors_origins: List[str] = ["*"]
    port: int = 5000


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name, "")
    items = [part.strip() for part in raw.split(",") if part.strip()]
    return items or default


def load_service_config() -> ServiceConfig:
    load_dotenv()
    defaults = ServiceConfig()
    return ServiceConfig(
        inventory_path=Path(os.getenv("INVENTORY_PATH") or defaults.inventory_path),
        event_log_path=Path(os.getenv("EVENT_LOG_PATH") or defaults.event_log_path),
        strict_price_filters=_env_flag("STRICT_PRICE_FILTERS"),
        cors_origins=_env_list("CORS_ORIGINS", defaults.cors_origins),
        port=int(os.getenv("PORT", str(defaults.port))),
    )


def api_url() -> str:
    load_dotenv()
    return os.getenv("API_URL", "http://localhost:5000").rstrip("/")
