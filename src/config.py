from __future__ import annotations

import logging
import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


USE_MOCKS = _env_bool("USE_MOCKS", "true")
USE_DB_LISTINGS = _env_bool("USE_DB_LISTINGS", "true")

# File cache written by the prefetch job is served while younger than this.
CACHE_TTL_SEC = int(os.getenv("CACHE_TTL_SEC", "300"))
# In-process cache of /products responses.
MEMORY_CACHE_TTL_SEC = int(os.getenv("MEMORY_CACHE_TTL_SEC", "120"))
SCRAPER_INTERVAL_SEC = int(os.getenv("SCRAPER_INTERVAL_SEC", "120"))

SEED_PATH = Path(os.getenv("SEED_PATH", str(PROJECT_ROOT / "data" / "products.json")))
CACHE_FILE = Path(os.getenv("CACHE_FILE", str(PROJECT_ROOT / "data" / "products_cache.json")))

FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "http://localhost:5174")
DEFAULT_CATEGORY = os.getenv("DEFAULT_CATEGORY", "grocery")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "8000"))


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
