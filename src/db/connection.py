from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from src.config import PROJECT_ROOT


def default_db_path() -> Path:
    return Path(os.getenv("APP_DB_PATH", str(PROJECT_ROOT / "data" / "sasta_samaan.db")))


DB_PATH = default_db_path()


@contextmanager
def get_conn() -> Iterator[sqlite3.Connection]:
    """Connection to the listings database; commits on clean exit, always closes."""
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
