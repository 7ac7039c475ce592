"""DDL helpers for ledger tables."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.engine import Engine

LOGGER = logging.getLogger("ledger.schema")

DDL_DIR = Path(__file__).resolve().parent / "ddl"

# One statement per file: the sqlite3 driver rejects multi-statement strings.
DDL_ORDER = [
    "profiles.sql",
    "contracts.sql",
    "jobs.sql",
    "contracts_party_idx.sql",
    "contracts_contractor_idx.sql",
    "jobs_contract_idx.sql",
]


def apply_ledger_ddl(engine: Engine, ddl_dir: Path | None = None) -> None:
    """Apply ledger DDL files in deterministic order."""

    ddl_path = ddl_dir or DDL_DIR
    with engine.begin() as connection:
        for ddl_file in DDL_ORDER:
            sql_text = (ddl_path / ddl_file).read_text(encoding="utf-8")
            connection.exec_driver_sql(sql_text)
    LOGGER.info("Applied %d ledger DDL statements from %s", len(DDL_ORDER), ddl_path)
