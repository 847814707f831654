from pathlib import Path

import pytest

from src.db.migrate import applied_migrations, run_migrations
from src.db.repository import (
    count_unmapped,
    fetch_listing_row,
    fetch_listings,
    fetch_unmapped,
    insert_listing,
    map_listing,
    upsert_product,
)


@pytest.fixture
def db(tmp_db: Path) -> Path:
    run_migrations()
    return tmp_db


def test_migrations_are_idempotent(db: Path) -> None:
    assert run_migrations() == []
    assert applied_migrations() == {"001_init.sql"}
    assert count_unmapped() == 0


def test_fetch_listings_joins_product(db: Path) -> None:
    pid = upsert_product(name="Tata Salt", brand="Tata", category="grocery", standard_unit="1kg")
    insert_listing(product_id=pid, provider="Zepto", price=32, unit="1 kg", raw_name="Tata Salt 1 kg")
    insert_listing(product_id=None, provider="Blinkit", price=40, unit="1 kg", raw_name="Loose Salt")

    grocery = fetch_listings(category="grocery")
    assert len(grocery) == 1
    assert grocery[0].brand == "Tata"
    assert grocery[0].name == "Tata Salt 1 kg"
    assert grocery[0].product_id == pid
    assert len(fetch_listings()) == 2


def test_upsert_product_with_explicit_id_updates(db: Path) -> None:
    assert upsert_product(product_id=7, name="Old") == 7
    assert upsert_product(product_id=7, name="New", category="grocery") == 7
    lid = insert_listing(product_id=7, provider="Zepto", price=10, unit="100 g", raw_name=None)
    assert fetch_listings(category="grocery")[0].name == "New"
    assert fetch_listing_row(lid)["product_id"] == 7


def test_unmapped_listing_flow(db: Path) -> None:
    lid = insert_listing(product_id=None, provider="Dmart", price=48, unit="6 pcs", raw_name="Eggs")
    assert count_unmapped() == 1
    assert fetch_unmapped()[0]["listing_id"] == lid

    row = map_listing(lid, normalized_price=8.0, normalized_unit="per_100g", ignored="x")
    assert row["normalized_price"] == 8.0
    assert row["normalized_unit"] == "per_100g"
    assert count_unmapped() == 0


def test_map_listing_errors(db: Path) -> None:
    lid = insert_listing(product_id=None, provider="Dmart", price=48, unit="6 pcs", raw_name="Eggs")
    with pytest.raises(ValueError):
        map_listing(lid)
    with pytest.raises(LookupError):
        map_listing(lid + 100, normalized_price=1.0)
    with pytest.raises(ValueError):
        map_listing(lid, product_id=424242)
    assert fetch_listing_row(lid)["product_id"] is None


def test_new_migration_files_are_applied_once(db: Path, tmp_path: Path) -> None:
    extra = tmp_path / "migrations"
    extra.mkdir()
    (extra / "002_brand_index.sql").write_text(
        "CREATE INDEX IF NOT EXISTS idx_products_brand ON products(brand);", encoding="utf-8"
    )
    assert run_migrations(extra) == ["002_brand_index.sql"]
    assert run_migrations(extra) == []
