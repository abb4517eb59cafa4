"""
Create or drop the Body/Grave tables in the configured SQLite database.

The database path comes from GRAVE_DB_PATH, config.yaml, or the default
(see gravemanager.config).

Usage:
  python -m gravemanager.scripts.init_db create
  python -m gravemanager.scripts.init_db drop [--db path/to/file.db]
"""
from __future__ import annotations

import argparse
import logging

from gravemanager.config import load_settings
from gravemanager.db import execute_sql_script, get_db_path, provider_for

logger = logging.getLogger(__name__)

SCRIPTS = {
    "create": "create_tables.sql",
    "drop": "drop_tables.sql",
}


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Schema setup/teardown for gravemanager")
    ap.add_argument("action", choices=sorted(SCRIPTS))
    ap.add_argument("--db", default=None, help="database file (overrides configuration)")
    args = ap.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    db_path = args.db or get_db_path()
    execute_sql_script(provider_for(db_path), SCRIPTS[args.action])
    logger.info("Ran %s against %s", SCRIPTS[args.action], db_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
