from src.collectors.base import RawListing
from src.normalization.pricing import (
    STATUS_NORMALIZED,
    STATUS_UNGROUPABLE,
    STATUS_UNNORMALIZED,
    NormalizedUnit,
    apply_normalization,
    listing_outcomes,
    normalization_status,
    normalize_price,
)


def test_normalize_per_100g() -> None:
    result = normalize_price(500, "5 kg")
    assert result is not None
    assert result.value == 10.00
    assert result.unit is NormalizedUnit.PER_100G


def test_normalize_per_100ml() -> None:
    result = normalize_price(56, "1 L")
    assert result is not None
    assert result.value == 5.6
    assert result.unit is NormalizedUnit.PER_100ML


def test_rounds_to_two_decimals() -> None:
    assert normalize_price(12, "70 g").value == 17.14
    assert normalize_price(399, "5 kg").value == 7.98


def test_unparseable_unit_gives_none() -> None:
    assert normalize_price(100, "1 pc") is None
    assert normalize_price(100, None) is None


def test_zero_price_is_zero() -> None:
    result = normalize_price(0, "1 kg")
    assert result is not None
    assert result.value == 0.0


def test_apply_normalization_fills_fields() -> None:
    listing = RawListing(name="Tata Salt", provider="Zepto", price=32, unit="1 kg")
    out = apply_normalization(listing)
    assert out.normalized_price == 3.2
    assert out.normalized_unit == "per_100g"
    assert listing.normalized_price is None
    assert normalization_status(out) == STATUS_NORMALIZED


def test_apply_normalization_keeps_manual_override() -> None:
    listing = RawListing(
        name="Eggs",
        provider="Dmart",
        price=48,
        unit="6 pcs",
        normalized_price=8.0,
        normalized_unit="per_100g",
    )
    out = apply_normalization(listing)
    assert out is listing
    assert out.normalized_price == 8.0


def test_apply_normalization_marks_unnormalized() -> None:
    listing = RawListing(name="Eggs", provider="Dmart", price=48, unit="6 pcs")
    out = apply_normalization(listing)
    assert out.normalized_price is None
    assert out.normalized_unit is None
    assert normalization_status(out) == STATUS_UNNORMALIZED


def test_half_cent_rounds_up() -> None:
    assert normalize_price(1, "800 g").value == 0.13
    assert normalize_price(1, "800 ml").value == 0.13


def test_listing_outcomes() -> None:
    scraped = apply_normalization(RawListing(name="Eggs", provider="Dmart", price=48, unit="6 pcs"))
    assert listing_outcomes(scraped) == [STATUS_UNNORMALIZED, STATUS_UNGROUPABLE]

    catalogued = apply_normalization(
        RawListing(name="Tata Salt", provider="Zepto", price=32, unit="1 kg", product_id="A2")
    )
    assert listing_outcomes(catalogued) == [STATUS_NORMALIZED]
