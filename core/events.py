from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from .config import load_service_config

_LOG_PATH: Optional[Path] = None


def event_log_path() -> Path:
    global _LOG_PATH
    if _LOG_PATH is None:
        _LOG_PATH = load_service_config().event_log_path
    return _LOG_PATH


def set_event_log_path(path: Optional[Path]) -> None:
    global _LOG_PATH
    _LOG_PATH = path


def log_event(event: str, **fields) -> Dict:
    record = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "event": event,
        **fields,
    }
    path = event_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, default=str) + "\n")
    return record


def try_log_event(event: str, **fields) -> Optional[Dict]:
    """log_event for request paths: an unwritable log never fails the request."""
    try:
        return log_event(event, **fields)
    except OSError:
        return None


def read_events(limit: int = 20) -> List[Dict]:
    path = event_log_path()
    if not path.exists():
        return []
    lines = [line for line in path.read_text().splitlines() if line.strip()]
    return [json.loads(line) for line in lines[-limit:]]


def clear_events() -> None:
    path = event_log_path()
    if path.exists():
        path.write_text("")
