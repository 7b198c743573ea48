from __future__ import annotations

import sys
from pathlib import Path
from datetime import datetime

from kewpa_search.ui.config_loader import load_config


def main() -> int:
    repo_root = Path(__file__).resolve().parents[1]
    now = datetime.now().isoformat(timespec="seconds")
    config = load_config()

    print("KEW.PA Quick Search :: runtime check")
    print(f"timestamp: {now}")
    print(f"repo_root: {repo_root}")
    print(f"cwd:       {Path.cwd()}")
    print(f"python:    {sys.version.split()[0]}")
    print(f"env:       {config['env']}")
    print(f"config:    {config['status']} ({config.get('config_path')})")
    if config["error"]:
        print(f"error:     {config['error']}")
    print(f"db_path:   {config.get('db_path')}")
    return 0 if config["status"] == "OK" else 1


if __name__ == "__main__":
    raise SystemExit(main())
