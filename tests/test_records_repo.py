import sqlite3

import pytest

from kewpa_search.core.records_repo import RecordsRepo
from kewpa_search.core.search.controller import QuickSearchController
from kewpa_search.core.search.models import CANONICAL_KIND_ORDER, EntityKind
from kewpa_search.db.database import init_or_upgrade_db


@pytest.fixture
def repo(tmp_path):
    db_path = tmp_path / "kewpa.db"
    init_or_upgrade_db(db_path)
    return RecordsRepo(str(db_path))


def test_insert_and_fetch_rows(repo):
    inserted = repo.insert_rows("asset", [
        {"asset_tag": "AST-001", "name": "Dell Laptop", "category": "ICT", "department": "Finance"},
        {"asset_tag": "AST-002", "name": "Meja Pejabat", "category": "Perabot", "department": "Finance"},
    ])
    assert inserted == 2

    rows = repo.fetch_rows(EntityKind.ASSET)
    assert [r["name"] for r in rows] == ["Dell Laptop", "Meja Pejabat"]
    assert rows[0]["id"] == 1
    assert repo.count("asset") == 2


def test_unknown_column_is_rejected_before_writing(repo):
    with pytest.raises(ValueError, match="Unknown assets column"):
        repo.insert_rows("asset", [
            {"asset_tag": "AST-001", "name": "Dell Laptop"},
            {"name": "x", "name) VALUES ('y'); DROP TABLE assets; --": 1},
        ])
    assert repo.count("asset") == 0


def test_failed_insert_rolls_back_and_releases_db(repo, tmp_path):
    # name is NOT NULL
    with pytest.raises(sqlite3.IntegrityError):
        repo.insert_rows("supplier", [{"name": "Delima"}, {"contact_person": "Lim"}])
    assert repo.count("supplier") == 0

    # no connection left holding a write lock
    conn = sqlite3.connect(str(tmp_path / "kewpa.db"), timeout=0)
    try:
        conn.execute("INSERT INTO suppliers (name) VALUES ('Cahaya')")
        conn.commit()
    finally:
        conn.close()
    assert repo.count("supplier") == 1


def test_empty_table_is_an_empty_snapshot(repo):
    assert repo.fetch_rows("supplier") == []


def test_unreadable_table_is_absent(tmp_path):
    # database without migrations: every table is missing
    repo = RecordsRepo(str(tmp_path / "bare.db"))
    assert repo.fetch_rows("asset") is None
    assert repo.count("asset") is None


def test_load_collections_covers_all_kinds(repo):
    collections = repo.load_collections()
    assert list(collections) == list(CANONICAL_KIND_ORDER)
    assert all(rows == [] for rows in collections.values())

    only = repo.load_collections(["supplier"])
    assert list(only) == [EntityKind.SUPPLIER]


def test_snapshot_feeds_quick_search(repo, scheduler):
    repo.insert_rows("asset", [{"asset_tag": "AST-001", "name": "Dell Laptop", "category": "ICT", "department": "Finance"}])
    repo.insert_rows("movement", [{"type": "loan", "from_location": "Stor Utama", "to_location": "Dewan"}])
    repo.insert_rows("maintenance", [{"maintenance_type": "preventive", "status": "scheduled", "scheduled_date": "2024-07-01"}])

    controller = QuickSearchController(scheduler=scheduler)
    controller.open()
    controller.update_collections(repo.load_collections())

    controller.set_query("dell")
    scheduler.run_pending()
    assert [(r.kind, r.title, r.score) for r in controller.results] == [(EntityKind.ASSET, "Dell Laptop", 100)]

    controller.set_query("loan")
    scheduler.run_pending()
    assert controller.results[0].title == "loan Movement"
    assert controller.results[0].navigation_target == "/asset-movement?highlight=1"
