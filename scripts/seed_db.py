#!/usr/bin/env python3
"""
Create the ledger schema and load the demo marketplace data.
It packages a repeatable workflow so local databases can be reset consistently.
Run it directly; it prints a JSON summary and exits non-zero if the database is unreachable.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.common.db import apply_ledger_ddl
from marketplace_ledger.common.logging import configure_logging
from marketplace_ledger.common.seed import clear_ledger, seed_demo_data
from marketplace_ledger.common.settings import get_settings


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create ledger tables and load demo data")
    parser.add_argument("--database-url", default=None, help="Overrides DATABASE_URL")
    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Do not delete existing rows before seeding",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()
    database_url = args.database_url or get_settings().DATABASE_URL

    db = DatabaseClient(database_url=database_url)
    if not db.can_connect():
        print(f"Cannot connect to {database_url}", file=sys.stderr)
        sys.exit(1)

    apply_ledger_ddl(db.engine)
    if not args.keep_existing:
        clear_ledger(db)
    seed_demo_data(db)

    summary = {
        table_name: db.fetch_scalar(f"SELECT COUNT(*) FROM {table_name}")
        for table_name in ("profiles", "contracts", "jobs")
    }
    print(json.dumps({"database_url": database_url, "rows": summary}, indent=2))


if __name__ == "__main__":
    main()
