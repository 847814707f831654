from pathlib import Path

import pytest

from src.config import PROJECT_ROOT
from src.db import connection


def test_default_db_path_lives_under_project_data(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APP_DB_PATH", raising=False)
    assert connection.default_db_path() == PROJECT_ROOT / "data" / "sasta_samaan.db"
    monkeypatch.setenv("APP_DB_PATH", "/tmp/other.db")
    assert connection.default_db_path() == Path("/tmp/other.db")


def test_get_conn_creates_directory_and_enforces_foreign_keys(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    db_path = tmp_path / "nested" / "listings.db"
    monkeypatch.setattr(connection, "DB_PATH", db_path)
    with connection.get_conn() as conn:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    assert db_path.exists()
