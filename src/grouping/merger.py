from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from src.collectors.base import RawListing
from src.grouping.similarity import SIM_THRESHOLD, Similarity, token_jaccard
from src.normalization.pricing import (
    STATUS_UNGROUPABLE,
    STATUS_UNNORMALIZED,
    apply_normalization,
    listing_outcomes,
)
from src.normalization.product import build_key, normalize_product_name, normalize_text, normalize_unit
from src.normalization.providers import canonical_key, display_name

logger = logging.getLogger(__name__)


@dataclass
class ProductGroup:
    key: str
    name: str
    brand: str
    unit: str
    listings: list[RawListing] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "brand": self.brand,
            "unit": self.unit,
            "listings": [listing.to_dict() for listing in self.listings],
        }


def _brand_compatible(a: str, b: str) -> bool:
    a_norm = normalize_text(a)
    b_norm = normalize_text(b)
    # An unbranded side is compatible with anything.
    return not a_norm or not b_norm or a_norm == b_norm


def _unit_compatible(a: str, b: str) -> bool:
    a_unit = (a or "").strip()
    b_unit = (b or "").strip()
    return (not a_unit and not b_unit) or a_unit == b_unit


def _provider_key(listing: RawListing) -> str:
    return listing.provider_key or canonical_key(listing.provider)


def dedupe_by_provider(listings: Iterable[RawListing]) -> list[RawListing]:
    """Keep the cheapest listing (by raw price) for each canonical provider."""
    chosen: dict[str, RawListing] = {}
    for listing in listings:
        key = _provider_key(listing)
        current = chosen.get(key)
        if current is None or float(listing.price) < float(current.price):
            chosen[key] = listing
    return list(chosen.values())


def build_initial_groups(listings: Iterable[RawListing]) -> list[ProductGroup]:
    by_key: dict[str, ProductGroup] = {}
    for listing in listings:
        key = build_key(listing)
        group = by_key.get(key)
        if group is None:
            group = ProductGroup(
                key=key,
                name=listing.name or "",
                brand=listing.brand or "",
                unit=normalize_unit(listing.unit, listing.name) or (listing.unit or ""),
            )
            by_key[key] = group
        group.listings.append(listing)
    return sorted(by_key.values(), key=lambda g: g.name.lower())


def merge_groups(
    groups: list[ProductGroup],
    *,
    similarity: Similarity = token_jaccard,
    threshold: float = SIM_THRESHOLD,
) -> list[ProductGroup]:
    """Fold near-duplicate groups into the earliest compatible group.

    Group j merges into base i when brands are compatible, stored units match
    and the similarity of the normalized names reaches the threshold. Each
    resulting group keeps one listing per canonical provider.
    """
    merged: list[ProductGroup] = []
    used = [False] * len(groups)

    for i, group in enumerate(groups):
        if used[i]:
            continue
        used[i] = True
        base = replace(group, listings=list(group.listings))
        base_name = normalize_product_name(base.name, normalize_text(base.brand))

        for j in range(i + 1, len(groups)):
            if used[j]:
                continue
            candidate = groups[j]
            if not _brand_compatible(base.brand, candidate.brand):
                continue
            if not _unit_compatible(base.unit, candidate.unit):
                continue
            candidate_name = normalize_product_name(candidate.name, normalize_text(candidate.brand))
            sim = similarity(base_name, candidate_name)
            if sim < threshold:
                continue
            base.listings.extend(candidate.listings)
            used[j] = True
            logger.debug("MERGE: %r <= %r (sim=%.2f)", base.name, candidate.name, sim)

        base.listings = dedupe_by_provider(base.listings)
        merged.append(base)

    return merged


def prepare_listing(listing: RawListing) -> RawListing:
    listing = apply_normalization(listing)
    return replace(
        listing,
        provider_key=canonical_key(listing.provider),
        provider_display=display_name(listing.provider),
    )


def outcome_counts(listings: Iterable[RawListing]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for listing in listings:
        counts.update(listing_outcomes(listing))
    return counts


def build_product_groups(
    listings: Iterable[RawListing],
    *,
    similarity: Similarity = token_jaccard,
    threshold: float = SIM_THRESHOLD,
) -> list[ProductGroup]:
    prepared = [prepare_listing(listing) for listing in listings]
    groups = build_initial_groups(prepared)
    result = merge_groups(groups, similarity=similarity, threshold=threshold)
    counts = outcome_counts(prepared)
    logger.info(
        "Built %d product groups from %d listings (%d unnormalized, %d keyed synthetically)",
        len(result),
        len(prepared),
        counts[STATUS_UNNORMALIZED],
        counts[STATUS_UNGROUPABLE],
    )
    return result
