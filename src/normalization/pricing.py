from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from src.collectors.base import RawListing
from src.normalization.units import Phase, parse_unit


class NormalizedUnit(str, Enum):
    PER_100G = "per_100g"
    PER_100ML = "per_100ml"


@dataclass(frozen=True)
class NormalizedPrice:
    value: float
    unit: NormalizedUnit


STATUS_NORMALIZED = "normalized"
STATUS_UNNORMALIZED = "unnormalized"
STATUS_UNGROUPABLE = "ungroupable_by_identity"


def _round_price(value: float) -> float:
    # Halves round up (0.125 -> 0.13), not to even.
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def normalize_price(price: float, unit_str: str | None) -> NormalizedPrice | None:
    base = parse_unit(unit_str)
    if base is None:
        return None
    per100 = (price / base.amount) * 100
    unit = NormalizedUnit.PER_100ML if base.phase is Phase.LIQUID else NormalizedUnit.PER_100G
    return NormalizedPrice(value=_round_price(per100), unit=unit)


def apply_normalization(listing: RawListing) -> RawListing:
    """Return the listing with normalized_price/normalized_unit filled in.

    A listing that already carries a normalized_price (set through the admin
    mapping workflow) is returned untouched. Otherwise a copy is returned; both
    fields are None when the unit cannot be parsed.
    """
    if listing.normalized_price is not None:
        return listing
    result = normalize_price(listing.price, listing.unit)
    if result is None:
        return replace(listing, normalized_price=None, normalized_unit=None)
    return replace(listing, normalized_price=result.value, normalized_unit=result.unit.value)


def normalization_status(listing: RawListing) -> str:
    if listing.normalized_price is None:
        return STATUS_UNNORMALIZED
    return STATUS_NORMALIZED


def listing_outcomes(listing: RawListing) -> list[str]:
    """Normalization status, plus STATUS_UNGROUPABLE when the listing has no
    product id and has to be grouped under a synthetic key."""
    outcomes = [normalization_status(listing)]
    if listing.product_id in (None, ""):
        outcomes.append(STATUS_UNGROUPABLE)
    return outcomes
