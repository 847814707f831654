from __future__ import annotations

import argparse
import csv
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from src.config import configure_logging
from src.db.migrate import run_migrations
from src.db.repository import insert_listing, upsert_product

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "id",
    "name",
    "brand",
    "category",
    "standard_unit",
    "provider",
    "price",
    "unit",
    "fetched_at",
    "url",
]
MIN_COLUMNS = 9


def _to_int(value: str) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_float(value: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_rows(lines: Iterable[str]) -> list[dict[str, Any]]:
    """Parse seed CSV lines into row dicts.

    Comment lines (leading '#') and rows with fewer than nine columns are
    skipped. Extra trailing columns are folded back into the url.
    """
    rows: list[dict[str, Any]] = []
    data = [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]
    for cols in csv.reader(data):
        if len(cols) < MIN_COLUMNS:
            logger.warning("Skipping malformed line: %s", ",".join(cols))
            continue
        if cols[0].strip().lower() == "id":
            continue
        if len(cols) > len(CSV_COLUMNS):
            cols = cols[: len(CSV_COLUMNS) - 1] + [",".join(cols[len(CSV_COLUMNS) - 1 :])]
        values = dict(zip(CSV_COLUMNS, [c.strip() for c in cols]))
        rows.append(
            {
                "id": _to_int(values.get("id", "")),
                "name": values.get("name") or None,
                "brand": values.get("brand") or None,
                "category": values.get("category") or None,
                "standard_unit": values.get("standard_unit") or None,
                "provider": values.get("provider") or "unknown",
                "price": _to_float(values.get("price", "")),
                "unit": values.get("unit") or None,
                "fetched_at": values.get("fetched_at") or datetime.now(timezone.utc).isoformat(),
                "url": values.get("url") or None,
            }
        )
    return rows


def import_rows(rows: list[dict[str, Any]]) -> int:
    for row in rows:
        product_id = upsert_product(
            product_id=row["id"],
            name=row["name"] or "",
            brand=row["brand"],
            category=row["category"],
            standard_unit=row["standard_unit"],
        )
        insert_listing(
            product_id=product_id,
            provider=row["provider"],
            price=row["price"],
            unit=row["unit"],
            raw_name=row["name"],
            fetched_at=row["fetched_at"],
            url=row["url"],
        )
    return len(rows)


def import_csv(path: Path) -> int:
    if not path.exists():
        raise FileNotFoundError(f"{path} not found")
    rows = parse_rows(path.read_text(encoding="utf-8").splitlines())
    if not rows:
        logger.info("No rows parsed from %s", path)
        return 0
    run_migrations()
    return import_rows(rows)


def main() -> None:
    parser = argparse.ArgumentParser(description="Import seed SKUs from CSV into products + listings.")
    parser.add_argument("--csv", default="data/seed_skus.csv")
    args = parser.parse_args()

    configure_logging()
    count = import_csv(Path(args.csv))
    print("Imported", count, "rows from CSV.")


if __name__ == "__main__":
    main()
