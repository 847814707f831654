from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any, Optional

from src.collectors.base import RawListing
from src.db.connection import get_conn

MAPPABLE_FIELDS = ("product_id", "normalized_price", "normalized_unit")


def upsert_product(
    *,
    name: str,
    brand: Optional[str] = None,
    category: Optional[str] = None,
    standard_unit: Optional[str] = None,
    product_id: Optional[int] = None,
) -> int:
    with get_conn() as conn:
        if product_id is None:
            cur = conn.execute(
                """
                INSERT INTO products (name, brand, category, standard_unit)
                VALUES (?, ?, ?, ?)
                """,
                (name, brand, category, standard_unit),
            )
            return int(cur.lastrowid)

        conn.execute(
            """
            INSERT INTO products (id, name, brand, category, standard_unit)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
              name = excluded.name,
              brand = excluded.brand,
              category = excluded.category,
              standard_unit = excluded.standard_unit
            """,
            (product_id, name, brand, category, standard_unit),
        )
        return int(product_id)


def insert_listing(
    *,
    product_id: Optional[int],
    provider: str,
    price: float,
    unit: Optional[str],
    raw_name: Optional[str],
    fetched_at: Optional[str] = None,
    url: Optional[str] = None,
) -> int:
    with get_conn() as conn:
        cur = conn.execute(
            """
            INSERT INTO listings (product_id, provider, price, unit, raw_name, fetched_at, url)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                product_id,
                provider,
                price,
                unit,
                raw_name,
                fetched_at or datetime.now(timezone.utc).isoformat(),
                url,
            ),
        )
        return int(cur.lastrowid)


_LISTING_SELECT = """
    SELECT
      l.id AS listing_id,
      l.product_id,
      COALESCE(l.raw_name, p.name) AS name,
      p.brand,
      p.category,
      l.provider,
      l.price,
      l.unit,
      l.url,
      l.fetched_at,
      l.normalized_price,
      l.normalized_unit
    FROM listings l
    LEFT JOIN products p ON p.id = l.product_id
"""


def fetch_listings(*, category: Optional[str] = None, limit: int = 1000) -> list[RawListing]:
    params: list[Any] = []
    where = ""
    if category:
        where = "WHERE LOWER(COALESCE(p.category, '')) = LOWER(?)"
        params.append(category)
    params.append(limit)
    with get_conn() as conn:
        rows = conn.execute(
            f"{_LISTING_SELECT} {where} ORDER BY l.fetched_at DESC LIMIT ?",
            tuple(params),
        ).fetchall()
    return [RawListing.from_dict(dict(row)) for row in rows]


def fetch_listing_row(listing_id: int) -> Optional[dict[str, Any]]:
    with get_conn() as conn:
        row = conn.execute("SELECT * FROM listings WHERE id = ?", (listing_id,)).fetchone()
    return dict(row) if row is not None else None


def fetch_unmapped(limit: int = 200) -> list[dict[str, Any]]:
    with get_conn() as conn:
        rows = conn.execute(
            """
            SELECT id AS listing_id, product_id, raw_name, provider, unit, price, fetched_at, url
            FROM listings
            WHERE normalized_price IS NULL OR normalized_price = ''
            ORDER BY fetched_at DESC
            LIMIT ?
            """,
            (limit,),
        ).fetchall()
    return [dict(row) for row in rows]


def count_unmapped() -> int:
    with get_conn() as conn:
        row = conn.execute(
            "SELECT COUNT(*) AS cnt FROM listings WHERE normalized_price IS NULL OR normalized_price = ''"
        ).fetchone()
    return int(row["cnt"])


def map_listing(listing_id: int, **fields: Any) -> dict[str, Any]:
    """Manually set product_id / normalized_price / normalized_unit on a listing.

    Raises ValueError when no mappable field is given or the product does not
    exist, LookupError when the listing does not exist.
    """
    updates = {name: value for name, value in fields.items() if name in MAPPABLE_FIELDS}
    if not updates:
        raise ValueError("nothing_to_update")

    assignments = ", ".join(f"{name} = ?" for name in updates)
    with get_conn() as conn:
        exists = conn.execute("SELECT 1 FROM listings WHERE id = ?", (listing_id,)).fetchone()
        if exists is None:
            raise LookupError(f"listing {listing_id} not found")
        try:
            conn.execute(
                f"UPDATE listings SET {assignments} WHERE id = ?",
                (*updates.values(), listing_id),
            )
        except sqlite3.IntegrityError as exc:
            raise ValueError(f"invalid mapping for listing {listing_id}: {exc}") from exc
        row = conn.execute("SELECT * FROM listings WHERE id = ?", (listing_id,)).fetchone()
    return dict(row)


def fetch_listing_units(*, include_mapped: bool = False) -> list[dict[str, Any]]:
    where = "" if include_mapped else "WHERE normalized_price IS NULL OR normalized_price = ''"
    with get_conn() as conn:
        rows = conn.execute(f"SELECT id, price, unit FROM listings {where}").fetchall()
    return [dict(row) for row in rows]


def update_normalized(updates: list[tuple[Optional[float], Optional[str], int]]) -> None:
    with get_conn() as conn:
        conn.executemany(
            "UPDATE listings SET normalized_price = ?, normalized_unit = ? WHERE id = ?",
            updates,
        )
