from __future__ import annotations

from typing import Iterable

from src.collectors.base import RawListing


def _comparable_price(listing: RawListing) -> float:
    if listing.normalized_price is not None:
        return float(listing.normalized_price)
    return float(listing.price)


def cheapest_per_product(listings: Iterable[RawListing]) -> list[RawListing]:
    """Pick the cheapest listing for each product id (or lowercased name).

    Listings with a normalized price are preferred over ones without; the raw
    price is only compared when no listing of the product is normalized.
    """
    by_key: dict[str, list[RawListing]] = {}
    for listing in listings:
        if listing.product_id not in (None, ""):
            key = f"pid:{listing.product_id}"
        else:
            key = f"name:{(listing.name or '').lower()}"
        by_key.setdefault(key, []).append(listing)

    cheapest: list[RawListing] = []
    for items in by_key.values():
        with_norm = [item for item in items if item.normalized_price is not None]
        pool = with_norm or items
        cheapest.append(min(pool, key=_comparable_price))
    return cheapest
