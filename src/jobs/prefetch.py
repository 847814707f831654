from __future__ import annotations

import argparse
import logging
import time

from src import config
from src.cache.store import FileCache
from src.collectors.registry import collect_all
from src.config import configure_logging

logger = logging.getLogger(__name__)


def run_once(category: str = "grocery") -> int:
    listings, reports = collect_all(category)
    for report in reports:
        logger.info(
            "[prefetch] %s source=%s count=%d error=%s",
            report.provider,
            report.source,
            report.count,
            report.error,
        )
    if not listings:
        logger.warning("[prefetch] no listings collected")
        return 0

    if not FileCache(config.CACHE_FILE).write([item.to_dict() for item in listings]):
        raise RuntimeError(f"failed to write cache file {config.CACHE_FILE}")
    logger.info("[prefetch] wrote cache with %d items", len(listings))
    return len(listings)


def loop(category: str, interval_sec: int) -> None:
    while True:
        try:
            run_once(category)
        except RuntimeError as exc:
            logger.error("[prefetch] cycle failed: %s", exc)
        time.sleep(interval_sec)


def main() -> None:
    parser = argparse.ArgumentParser(description="Prefetch provider listings into the file cache.")
    parser.add_argument("--category", default=config.DEFAULT_CATEGORY)
    parser.add_argument("--loop", action="store_true", help="Keep running every SCRAPER_INTERVAL_SEC")
    parser.add_argument("--interval", type=int, default=config.SCRAPER_INTERVAL_SEC)
    args = parser.parse_args()

    configure_logging()
    if args.loop:
        loop(args.category, args.interval)
        return
    count = run_once(args.category)
    print(f"Prefetch wrote {count} listings to {config.CACHE_FILE}")


if __name__ == "__main__":
    main()
