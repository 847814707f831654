from __future__ import annotations

import json
import logging
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class TTLCache:
    """In-memory cache whose entries expire ttl_seconds after being set."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at > self.ttl_seconds:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries[key] = (now, value)

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (stored_at, _) in self._entries.items() if now - stored_at > self.ttl_seconds]
        for key in expired:
            del self._entries[key]

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count


def products_cache_key(category: str, provider: Optional[str]) -> str:
    return f"products:{category}:{provider or 'all'}"


class FileCache:
    """JSON file holding the last prefetched listings and when they were written."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def write(self, data: list[dict[str, Any]]) -> bool:
        payload = {"generated_at": datetime.now(timezone.utc).isoformat(), "data": data}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Writing cache file %s failed: %s", self.path, exc)
            return False
        return True

    def read(self) -> Optional[dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Reading cache file %s failed: %s", self.path, exc)
            return None

    @staticmethod
    def age_seconds(payload: Optional[dict[str, Any]]) -> float:
        if not payload or not payload.get("generated_at"):
            return float("inf")
        try:
            then = datetime.fromisoformat(str(payload["generated_at"]))
        except ValueError:
            return float("inf")
        return (datetime.now(timezone.utc) - then).total_seconds()

    def read_fresh(self, max_age_seconds: float) -> Optional[list[dict[str, Any]]]:
        payload = self.read()
        if payload is None or self.age_seconds(payload) > max_age_seconds:
            return None
        data = payload.get("data")
        return data if isinstance(data, list) else None
