from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, Optional

from src import config
from src.collectors.base import RawListing
from src.collectors.demo import (
    collect_demo_bigbasket,
    collect_demo_blinkit,
    collect_demo_dmart,
    collect_demo_instamart,
    collect_demo_jiomart,
    collect_demo_zepto,
)
from src.collectors.jsonld_scraper import collect_provider

logger = logging.getLogger(__name__)

Collector = Callable[[str], list[RawListing]]

DEMO_COLLECTORS: dict[str, Collector] = {
    "zepto": collect_demo_zepto,
    "blinkit": collect_demo_blinkit,
    "instamart": collect_demo_instamart,
    "bigbasket": collect_demo_bigbasket,
    "jiomart": collect_demo_jiomart,
    "dmart": collect_demo_dmart,
}

LIVE_COLLECTORS: dict[str, Collector] = {
    provider: partial(collect_provider, provider) for provider in DEMO_COLLECTORS
}


@dataclass
class CollectionReport:
    provider: str
    source: str
    count: int
    error: Optional[str] = None


def collect_all(
    category: str = "grocery",
    *,
    use_mocks: Optional[bool] = None,
    providers: Optional[Iterable[str]] = None,
    live_collectors: Optional[dict[str, Collector]] = None,
) -> tuple[list[RawListing], list[CollectionReport]]:
    """Run every provider collector and concatenate their listings.

    A collector that raises contributes nothing. In live mode a provider that
    yields no listings falls back to its demo data.
    """
    if use_mocks is None:
        use_mocks = config.USE_MOCKS
    live = live_collectors if live_collectors is not None else LIVE_COLLECTORS
    selected = list(providers) if providers is not None else list(DEMO_COLLECTORS)

    listings: list[RawListing] = []
    reports: list[CollectionReport] = []
    for provider in selected:
        source = "mock" if use_mocks else "live"
        error: Optional[str] = None
        collector = DEMO_COLLECTORS.get(provider) if use_mocks else live.get(provider)
        if collector is None:
            logger.warning("No collector registered for provider %s", provider)
            continue

        try:
            found = collector(category)
        except Exception as exc:
            logger.warning("Collector for %s failed: %s", provider, exc)
            found = []
            error = str(exc)

        if not found and not use_mocks and provider in DEMO_COLLECTORS:
            source = "fallback"
            found = DEMO_COLLECTORS[provider](category)

        listings.extend(found)
        reports.append(CollectionReport(provider=provider, source=source, count=len(found), error=error))

    return listings, reports
