from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from hashlib import md5
from typing import Any


@dataclass
class RawListing:
    name: str
    provider: str
    price: float
    brand: str | None = None
    category: str | None = None
    unit: str | None = None
    url: str | None = None
    fetched_at: datetime | None = None
    product_id: str | int | None = None
    normalized_price: float | None = None
    normalized_unit: str | None = None
    listing_id: str | None = None
    provider_key: str | None = None
    provider_display: str | None = None

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> "RawListing":
        fetched_at = row.get("fetched_at")
        if isinstance(fetched_at, str):
            fetched_at = _parse_timestamp(fetched_at)
        normalized_price = row.get("normalized_price")
        if normalized_price in ("", None):
            normalized_price = None
        listing_id = row.get("listing_id", row.get("id"))
        return cls(
            name=str(row.get("name") or row.get("raw_name") or ""),
            provider=str(row.get("provider") or "unknown"),
            price=float(row.get("price") or 0),
            brand=row.get("brand") or None,
            category=row.get("category") or None,
            unit=row.get("unit") or None,
            url=row.get("url") or row.get("link") or None,
            fetched_at=fetched_at,
            product_id=row.get("product_id") if row.get("product_id") not in ("", None) else None,
            normalized_price=float(normalized_price) if normalized_price is not None else None,
            normalized_unit=row.get("normalized_unit") or None,
            listing_id=str(listing_id) if listing_id not in ("", None) else None,
            provider_key=row.get("provider_key") or None,
            provider_display=row.get("provider_display") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["fetched_at"] = self.fetched_at.isoformat() if self.fetched_at else None
        return out


def _parse_timestamp(value: str) -> datetime | None:
    value = value.strip()
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def make_listing_id(listing: RawListing) -> str:
    seed = f"{listing.provider or ''}|{listing.name or ''}|{listing.unit or ''}"
    return md5(seed.encode("utf-8")).hexdigest()[:12]
