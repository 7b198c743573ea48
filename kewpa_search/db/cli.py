from __future__ import annotations

import argparse
import logging
import os
import sqlite3
from pathlib import Path

import yaml

from kewpa_search.core.records_repo import RecordsRepo
from kewpa_search.db.database import init_or_upgrade_db
from kewpa_search.ui.config_loader import load_config

logger = logging.getLogger(__name__)


def seed_from_yaml(db_path: Path, seed_file: Path) -> dict:
    """
    Imports rows from a YAML file keyed by entity kind:
      asset: [{asset_tag: ..., name: ...}, ...]
    Returns {kind: inserted_count}.
    """
    with open(seed_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Seed file must map entity kinds to row lists: {seed_file}")

    repo = RecordsRepo(str(db_path))
    counts = {}
    for kind, rows in data.items():
        counts[kind] = repo.insert_rows(kind, rows or [])
    return counts


def _load_config_from(path: Path) -> dict:
    """
    Loads config from a single YAML file, or from a config directory
    (general.yaml + {env}.yaml).
    """
    var = "KEWPA_SEARCH_CONFIG_DIR" if path.is_dir() else "KEWPA_SEARCH_CONFIG_FILE"
    previous = os.environ.get(var)
    os.environ[var] = str(path)
    try:
        return load_config()
    finally:
        if previous is None:
            del os.environ[var]
        else:
            os.environ[var] = previous


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialise the KEW.PA quick search snapshot database.")
    parser.add_argument("--config", required=True, help="Config YAML file or config directory.")
    parser.add_argument("--seed", help="Optional YAML file with rows to import.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    config = _load_config_from(Path(args.config).resolve())
    if config["status"] != "OK":
        print(f"ERROR: {config['error']}")
        return 1
    if not config.get("db_path"):
        print("ERROR: no database path configured (paths.db_path)")
        return 1

    db_path = init_or_upgrade_db(Path(config["db_path"]))
    print(f"OK: DB ready at {db_path}")

    if args.seed:
        try:
            counts = seed_from_yaml(db_path, Path(args.seed))
        except (ValueError, sqlite3.Error) as e:
            print(f"ERROR: seeding failed: {e}")
            return 1
        print(f"OK: seeded {counts}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
