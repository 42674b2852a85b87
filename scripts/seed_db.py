"""Insert the demo students of database/seed.sql (safe to run twice)."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.academy_system.academy_system.database.bootstrap import apply_seed_sql
from src.academy_system.academy_system.database.connection import DBConfig


def main() -> None:
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)
    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    print(f"OK: demo students -> {DBConfig.from_dict(db_config).describe()}")


if __name__ == "__main__":
    main()
