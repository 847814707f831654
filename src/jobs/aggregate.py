from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from src import config
from src.cache.store import FileCache
from src.collectors.base import RawListing, make_listing_id
from src.collectors.registry import collect_all
from src.db.migrate import run_migrations
from src.db.repository import fetch_listings
from src.normalization.pricing import apply_normalization
from src.normalization.providers import canonical_key

logger = logging.getLogger(__name__)


def load_seed(path: Path) -> list[RawListing]:
    if not path.exists():
        return []
    try:
        rows = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring seed file %s: %s", path, exc)
        return []
    return [RawListing.from_dict(row) for row in rows if isinstance(row, dict)]


def finalize_listing(listing: RawListing) -> RawListing:
    listing = apply_normalization(listing)
    if not listing.listing_id:
        listing = replace(listing, listing_id=make_listing_id(listing))
    return listing


def gather_raw_listings(category: str) -> list[RawListing]:
    """Seed file, stored listings and provider listings, in that order.

    Provider listings come from the prefetch file cache while it is fresh,
    otherwise the collectors are run on demand.
    """
    listings = load_seed(config.SEED_PATH)

    if config.USE_DB_LISTINGS:
        run_migrations()
        listings.extend(fetch_listings(category=category))

    cached = FileCache(config.CACHE_FILE).read_fresh(config.CACHE_TTL_SEC)
    if cached is not None:
        listings.extend(RawListing.from_dict(row) for row in cached)
    else:
        collected, reports = collect_all(category)
        for report in reports:
            if report.error:
                logger.warning("%s collector error: %s", report.provider, report.error)
        listings.extend(collected)
    return listings


def load_listings(category: str, provider: Optional[str] = None) -> list[RawListing]:
    listings = gather_raw_listings(category)
    if provider and provider.lower() != "all":
        wanted = canonical_key(provider)
        listings = [item for item in listings if canonical_key(item.provider) == wanted]
    return [finalize_listing(item) for item in listings]
