from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.collectors.base import RawListing


def _listing(
    *,
    listing_id: str,
    product_id: str,
    name: str,
    brand: str,
    provider: str,
    price: float,
    unit: str,
    url: str,
    category: str,
    fetched_at: datetime,
) -> RawListing:
    return RawListing(
        listing_id=listing_id,
        product_id=product_id,
        name=name,
        brand=brand,
        category=category,
        provider=provider,
        price=price,
        unit=unit,
        url=url,
        fetched_at=fetched_at,
    )


def collect_demo_zepto(category: str = "grocery") -> list[RawListing]:
    now = datetime.now(timezone.utc)
    return [
        _listing(
            listing_id="zepto-1001",
            product_id="A1",
            name="Aashirvaad Atta 5 kg",
            brand="Aashirvaad",
            provider="Zepto",
            price=399,
            unit="5 kg",
            url="https://zepto.example/ashirvaad-5kg",
            category=category,
            fetched_at=now - timedelta(minutes=5),
        ),
        _listing(
            listing_id="zepto-1002",
            product_id="A2",
            name="Tata Salt 1 kg",
            brand="Tata",
            provider="Zepto",
            price=32,
            unit="1 kg",
            url="https://zepto.example/tata-salt-1kg",
            category=category,
            fetched_at=now - timedelta(minutes=5),
        ),
    ]


def collect_demo_blinkit(category: str = "grocery") -> list[RawListing]:
    now = datetime.now(timezone.utc)
    return [
        _listing(
            listing_id="blinkit-2001",
            product_id="A1",
            name="Aashirvaad Atta 5 kg",
            brand="Aashirvaad",
            provider="Blinkit",
            price=405,
            unit="5 kg",
            url="https://blinkit.example/aashirvaad-5kg",
            category=category,
            fetched_at=now - timedelta(minutes=4),
        ),
        _listing(
            listing_id="blinkit-2002",
            product_id="A3",
            name="Parle-G Biscuit 400 g",
            brand="Parle",
            provider="Blinkit",
            price=48,
            unit="400 g",
            url="https://blinkit.example/parle-g-400g",
            category=category,
            fetched_at=now - timedelta(minutes=4),
        ),
    ]


def collect_demo_instamart(category: str = "grocery") -> list[RawListing]:
    now = datetime.now(timezone.utc)
    return [
        _listing(
            listing_id="insta-3001",
            product_id="A2",
            name="Tata Salt 1 kg",
            brand="Tata",
            provider="Instamart",
            price=30,
            unit="1 kg",
            url="https://instamart.example/tata-salt-1kg",
            category=category,
            fetched_at=now - timedelta(minutes=3),
        ),
        _listing(
            listing_id="insta-3002",
            product_id="A4",
            name="Daawat Jasmine Rice 5 kg",
            brand="Daawat",
            provider="Instamart",
            price=495,
            unit="5 kg",
            url="https://instamart.example/daawat-5kg",
            category=category,
            fetched_at=now - timedelta(minutes=3),
        ),
    ]


def collect_demo_bigbasket(category: str = "grocery") -> list[RawListing]:
    now = datetime.now(timezone.utc)
    return [
        _listing(
            listing_id="bb-4001",
            product_id="A1",
            name="Aashirvaad Atta 5 kg",
            brand="Aashirvaad",
            provider="BigBasket",
            price=398,
            unit="5 kg",
            url="https://bigbasket.example/aashirvaad-5kg",
            category=category,
            fetched_at=now - timedelta(minutes=2),
        ),
        _listing(
            listing_id="bb-4002",
            product_id="A3",
            name="Parle-G Biscuit 400 g",
            brand="Parle",
            provider="BigBasket",
            price=50,
            unit="400 g",
            url="https://bigbasket.example/parle-g-400g",
            category=category,
            fetched_at=now - timedelta(minutes=2),
        ),
    ]


def collect_demo_jiomart(category: str = "grocery") -> list[RawListing]:
    now = datetime.now(timezone.utc)
    return [
        _listing(
            listing_id="jm-5001",
            product_id="A4",
            name="Daawat Jasmine Rice 5 kg",
            brand="Daawat",
            provider="JioMart",
            price=500,
            unit="5 kg",
            url="https://jiomart.example/daawat-5kg",
            category=category,
            fetched_at=now - timedelta(minutes=1),
        ),
        _listing(
            listing_id="jm-5002",
            product_id="A5",
            name="Maggi Noodles 2 min 70 g",
            brand="Maggi",
            provider="JioMart",
            price=12,
            unit="70 g",
            url="https://jiomart.example/maggi-70g",
            category=category,
            fetched_at=now - timedelta(minutes=1),
        ),
    ]


def collect_demo_dmart(category: str = "grocery") -> list[RawListing]:
    now = datetime.now(timezone.utc)
    return [
        _listing(
            listing_id="dm-6001",
            product_id="A3",
            name="Parle-G Biscuit 400 g",
            brand="Parle",
            provider="Dmart",
            price=49,
            unit="400 g",
            url="https://dmart.example/parle-g-400g",
            category=category,
            fetched_at=now,
        ),
        _listing(
            listing_id="dm-6002",
            product_id="A5",
            name="Maggi Noodles 2 min 70 g",
            brand="Maggi",
            provider="Dmart",
            price=13,
            unit="70 g",
            url="https://dmart.example/maggi-70g",
            category=category,
            fetched_at=now,
        ),
    ]
