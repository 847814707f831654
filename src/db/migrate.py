from __future__ import annotations

import logging
from pathlib import Path

from src.db.connection import get_conn

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"

_CREATE_LEDGER = """
    CREATE TABLE IF NOT EXISTS schema_migrations (
      name TEXT PRIMARY KEY,
      applied_at TEXT DEFAULT CURRENT_TIMESTAMP
    )
"""


def applied_migrations() -> set[str]:
    with get_conn() as conn:
        conn.execute(_CREATE_LEDGER)
        return {row["name"] for row in conn.execute("SELECT name FROM schema_migrations")}


def run_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
    """Apply pending *.sql files in name order; returns the names applied."""
    done = applied_migrations()
    pending = [path for path in sorted(migrations_dir.glob("*.sql")) if path.name not in done]
    if not pending:
        return []

    with get_conn() as conn:
        for migration_file in pending:
            conn.executescript(migration_file.read_text(encoding="utf-8"))
            conn.execute("INSERT INTO schema_migrations (name) VALUES (?)", (migration_file.name,))
            logger.info("Applied migration %s", migration_file.name)
    return [path.name for path in pending]


if __name__ == "__main__":
    names = run_migrations()
    print(f"Applied {len(names)} migration(s).")
