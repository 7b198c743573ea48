import sqlite3
from pathlib import Path

from kewpa_search.db.database import DEFAULT_MIGRATIONS_DIR, apply_migrations, connect, init_or_upgrade_db
from kewpa_search.core.records_repo import TABLES

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "db" / "migrations"


def test_default_migrations_dir_is_repo_db_migrations():
    assert DEFAULT_MIGRATIONS_DIR == MIGRATIONS_DIR
    assert list(MIGRATIONS_DIR.glob("*.sql"))


def test_fresh_install_creates_all_tables(tmp_path):
    db_path = tmp_path / "nested" / "fresh.db"
    init_or_upgrade_db(db_path)

    assert db_path.exists()
    with sqlite3.connect(str(db_path)) as conn:
        tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        versions = [r[0] for r in conn.execute("SELECT version FROM schema_migrations")]

    assert set(TABLES.values()) <= tables
    assert versions == ["001_create_kewpa_tables"]


def test_migrations_are_idempotent(tmp_path):
    db_path = tmp_path / "twice.db"
    con = connect(db_path)
    try:
        first = apply_migrations(con, MIGRATIONS_DIR)
        second = apply_migrations(con, MIGRATIONS_DIR)
    finally:
        con.close()

    assert first == ["001_create_kewpa_tables"]
    assert second == []


def test_new_migration_file_is_picked_up(tmp_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_a.sql").write_text("CREATE TABLE a (id INTEGER PRIMARY KEY);")
    db_path = tmp_path / "inc.db"
    init_or_upgrade_db(db_path, migrations)

    (migrations / "002_b.sql").write_text("CREATE TABLE b (id INTEGER PRIMARY KEY);")
    con = connect(db_path)
    try:
        assert apply_migrations(con, migrations) == ["002_b"]
    finally:
        con.close()


def test_empty_migrations_dir(tmp_path):
    con = connect(tmp_path / "empty.db")
    try:
        assert apply_migrations(con, tmp_path) == []
    finally:
        con.close()
