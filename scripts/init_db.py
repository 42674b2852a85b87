"""Create the database (if missing) and apply database/schema.sql.

Usage: ``python scripts/init_db.py [--seed]``
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.academy_system.academy_system.database.bootstrap import apply_schema, apply_seed_sql, list_tables
from src.academy_system.academy_system.database.connection import DBConfig

SQL_DIR = REPO_ROOT / "database"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="also insert the demo students")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = DBConfig.from_dict(db_config).describe()

    apply_schema(db_config, schema_path=SQL_DIR / "schema.sql")
    print(f"OK: schema.sql -> {target} (tables: {', '.join(list_tables(db_config))})")

    if args.seed:
        apply_seed_sql(db_config, seed_path=SQL_DIR / "seed.sql")
        print(f"OK: seed.sql -> {target}")


if __name__ == "__main__":
    main()
