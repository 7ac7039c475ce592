"""
Shared test configuration.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# The app module builds its config at import time; keep it off any real database.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from marketplace_ledger.api.api_config import ApiConfig  # noqa: E402
from marketplace_ledger.api.db_access import DatabaseClient  # noqa: E402
from tests.api.support import build_test_config, make_ledger_db  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    defaults = {
        "PROJECT_NAME": "test-project",
        "ENV": "test",
        "LOG_LEVEL": "INFO",
        "DATABASE_URL": "sqlite://",
    }

    for key, value in defaults.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)


@pytest.fixture
def test_config() -> ApiConfig:
    return build_test_config()


@pytest.fixture
def ledger_db(tmp_path: Path) -> Iterator[DatabaseClient]:
    """File-backed SQLite ledger loaded with the demo marketplace."""

    db = make_ledger_db(tmp_path / "ledger.sqlite3")
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture
def empty_ledger_db(tmp_path: Path) -> Iterator[DatabaseClient]:
    db = make_ledger_db(tmp_path / "empty.sqlite3", seed=False)
    try:
        yield db
    finally:
        db.dispose()
