# This file provides shared helpers for API endpoint tests.
# It exists so tests can point the app at a throwaway ledger database without touching real storage.
# The helpers build consistent config objects and scoped TestClient contexts.
# Centralized test wiring keeps API tests small and focused on behavior.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from marketplace_ledger.api.api_config import ApiConfig
from marketplace_ledger.api.app import app
from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.api.dependencies import get_config, get_database_client
from marketplace_ledger.common.db import apply_ledger_ddl
from marketplace_ledger.common.seed import seed_demo_data


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Ledger API",
        "host": "0.0.0.0",
        "port": 8000,
        "environment": "test",
        "database_url": "sqlite://",
        "app_version": "0.1.0",
        "enable_request_logging": False,
        "allowed_origins": [],
        "auto_create_schema": False,
        "empty_contracts_as_not_found": True,
        "default_best_clients_limit": 2,
    }
    values.update(overrides)
    return ApiConfig.model_validate(values)


def make_ledger_db(path: Path, *, seed: bool = True) -> DatabaseClient:
    """File-backed SQLite ledger with the schema applied and, by default, the demo data."""

    db = DatabaseClient(database_url=f"sqlite:///{path}")
    apply_ledger_ddl(db.engine)
    if seed:
        seed_demo_data(db)
    return db


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables if existing_tables is not None else {"profiles", "contracts", "jobs"}

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables


def as_profile(profile_id: int) -> dict[str, str]:
    return {"profile_id": str(profile_id)}


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client

    try:
        with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
