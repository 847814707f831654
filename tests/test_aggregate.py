import json
from pathlib import Path

import pytest

from src import config
from src.cache.store import FileCache
from src.db.migrate import run_migrations
from src.jobs import prefetch
from src.jobs.aggregate import load_listings, load_seed


def test_load_seed_missing_or_invalid(tmp_path: Path) -> None:
    assert load_seed(tmp_path / "missing.json") == []
    bad = tmp_path / "bad.json"
    bad.write_text("[oops", encoding="utf-8")
    assert load_seed(bad) == []


def test_seed_listings_come_first_and_get_ids(isolated_sources: Path) -> None:
    config.SEED_PATH.write_text(
        json.dumps([{"name": "Amul Taaza 1 L", "provider": "Blinkit", "price": 54, "unit": "1 L"}]),
        encoding="utf-8",
    )
    listings = load_listings("grocery")
    assert len(listings) == 13
    seed = listings[0]
    assert seed.name == "Amul Taaza 1 L"
    assert seed.normalized_price == 5.4
    assert seed.normalized_unit == "per_100ml"
    assert seed.listing_id and len(seed.listing_id) == 12


def test_provider_filter(isolated_sources: Path) -> None:
    listings = load_listings("grocery", "JIO MART")
    assert {item.provider for item in listings} == {"JioMart"}
    assert len(load_listings("grocery", "all")) == 12


def test_fresh_file_cache_replaces_collectors(isolated_sources: Path) -> None:
    FileCache(config.CACHE_FILE).write([{"name": "Cached Salt 1 kg", "provider": "Zepto", "price": 20, "unit": "1 kg"}])
    listings = load_listings("grocery")
    assert [item.name for item in listings] == ["Cached Salt 1 kg"]


def test_prefetch_run_once_writes_cache(isolated_sources: Path) -> None:
    assert prefetch.run_once("grocery") == 12
    data = FileCache(config.CACHE_FILE).read_fresh(60)
    assert data is not None and len(data) == 12
    assert data[0]["fetched_at"]


def test_prefetch_write_failure_raises(isolated_sources: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(FileCache, "write", lambda self, data: False)
    with pytest.raises(RuntimeError):
        prefetch.run_once("grocery")


def test_load_listings_creates_schema_on_fresh_database(
    tmp_db: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(config, "SEED_PATH", tmp_path / "products.json")
    monkeypatch.setattr(config, "CACHE_FILE", tmp_path / "products_cache.json")
    monkeypatch.setattr(config, "USE_MOCKS", True)
    monkeypatch.setattr(config, "USE_DB_LISTINGS", True)
    assert not tmp_db.exists()

    assert len(load_listings("grocery")) == 12
    assert run_migrations() == []
