from src.collectors.base import RawListing
from src.grouping.cheapest import cheapest_per_product


def test_prefers_lowest_normalized_price_per_product() -> None:
    listings = [
        RawListing(name="Atta", provider="Zepto", price=399, product_id="A1", normalized_price=7.98),
        RawListing(name="Atta", provider="BigBasket", price=398, product_id="A1", normalized_price=7.96),
        RawListing(name="Atta 1kg", provider="Dmart", price=50, product_id="A1"),
    ]
    [best] = cheapest_per_product(listings)
    assert best.provider == "BigBasket"


def test_falls_back_to_raw_price_and_name_key() -> None:
    listings = [
        RawListing(name="Bananas", provider="Zepto", price=60),
        RawListing(name="bananas", provider="Blinkit", price=55),
        RawListing(name="Eggs", provider="Dmart", price=48),
    ]
    cheapest = cheapest_per_product(listings)
    assert [(item.name, item.provider) for item in cheapest] == [("bananas", "Blinkit"), ("Eggs", "Dmart")]
