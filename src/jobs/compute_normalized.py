from __future__ import annotations

import argparse
import logging

from src.config import configure_logging
from src.db.migrate import run_migrations
from src.db.repository import fetch_listing_units, update_normalized
from src.normalization.pricing import normalize_price

logger = logging.getLogger(__name__)


def compute_normalized(*, force: bool = False) -> tuple[int, int]:
    """Fill normalized_price/normalized_unit for stored listings.

    Rows that already have a normalized price are left alone unless force is
    set. Returns (normalized, unparseable) counts.
    """
    rows = fetch_listing_units(include_mapped=force)
    updates = []
    normalized = 0
    for row in rows:
        result = normalize_price(float(row["price"]), row["unit"])
        if result is None:
            updates.append((None, None, row["id"]))
            continue
        updates.append((result.value, result.unit.value, row["id"]))
        normalized += 1
    update_normalized(updates)
    unparseable = len(rows) - normalized
    if unparseable:
        logger.info("%d listings need manual mapping", unparseable)
    return normalized, unparseable


def main() -> None:
    parser = argparse.ArgumentParser(description="Compute per-100g / per-100ml prices for stored listings.")
    parser.add_argument("--force", action="store_true", help="Recompute rows that already have a value")
    args = parser.parse_args()

    configure_logging()
    run_migrations()
    normalized, unparseable = compute_normalized(force=args.force)
    print(f"Normalized price computed for {normalized} rows ({unparseable} unparseable).")


if __name__ == "__main__":
    main()
