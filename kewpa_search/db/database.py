from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "db" / "migrations"


def connect(db_path: Path) -> sqlite3.Connection:
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    con = sqlite3.connect(db_path)
    con.row_factory = sqlite3.Row
    return con


def _ensure_migrations_table(con: sqlite3.Connection) -> None:
    con.execute(
        "CREATE TABLE IF NOT EXISTS schema_migrations (version TEXT PRIMARY KEY, applied_at TEXT NOT NULL DEFAULT (datetime('now')))"
    )


def apply_migrations(con: sqlite3.Connection, migrations_dir: Path) -> list:
    """
    Applies pending *.sql files in name order. Returns the versions applied.
    """
    _ensure_migrations_table(con)
    applied = {row["version"] for row in con.execute("SELECT version FROM schema_migrations").fetchall()}

    files = sorted(Path(migrations_dir).glob("*.sql"))
    if not files:
        logger.warning(f"No migrations found in {migrations_dir}")

    newly_applied = []
    for sql_file in files:
        version = sql_file.stem  # e.g. "001_create_kewpa_tables"
        if version in applied:
            logger.debug(f"Migration {version} already applied")
            continue
        logger.info(f"Applying migration: {version}")
        try:
            con.executescript(sql_file.read_text(encoding="utf-8"))
            con.execute("INSERT INTO schema_migrations(version) VALUES (?)", (version,))
            con.commit()
        except sqlite3.Error as e:
            logger.error(f"Migration {version} failed: {e}")
            raise
        newly_applied.append(version)
    return newly_applied


def init_or_upgrade_db(db_path: Path, migrations_dir: Optional[Path] = None) -> Path:
    db_path = Path(db_path)
    con = connect(db_path)
    try:
        apply_migrations(con, migrations_dir or DEFAULT_MIGRATIONS_DIR)
    finally:
        con.close()

    return db_path
