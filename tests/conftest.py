from pathlib import Path

import pytest

from src import config
from src.db import connection
from src.db.migrate import run_migrations


@pytest.fixture
def tmp_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    db_path = tmp_path / "app.db"
    monkeypatch.setattr(connection, "DB_PATH", db_path)
    return db_path


@pytest.fixture
def isolated_sources(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, tmp_db: Path) -> Path:
    monkeypatch.setattr(config, "SEED_PATH", tmp_path / "products.json")
    monkeypatch.setattr(config, "CACHE_FILE", tmp_path / "products_cache.json")
    monkeypatch.setattr(config, "USE_MOCKS", True)
    monkeypatch.setattr(config, "USE_DB_LISTINGS", True)
    run_migrations()
    return tmp_path
