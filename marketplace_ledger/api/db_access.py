# This file wraps database access so API services can run parameterized SQL safely.
# It exists to keep SQL execution details out of router code and make testing easier.
# The client is the single storage handle passed into every service; nothing reaches a global registry.
# Multi-statement writes go through `transaction()` so they commit or roll back as one unit.

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.sql.selectable import TextualSelect

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

Statement = str | TextClause | TextualSelect


def as_statement(query: Statement) -> TextClause | TextualSelect:
    """Wrap raw SQL strings in `text()`; typed clauses pass through untouched."""

    if isinstance(query, str):
        return text(query)
    return query


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for API read/write access."""

    def __init__(self, *, database_url: str, engine: Engine | None = None) -> None:
        if engine is None:
            connect_args: dict[str, Any] = {}
            if database_url.startswith("sqlite"):
                # Pooled connections are handed to FastAPI worker threads.
                connect_args["check_same_thread"] = False
            engine = create_engine(
                database_url,
                pool_pre_ping=True,
                future=True,
                connect_args=connect_args,
            )
        self._engine: Engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        self._validate_identifier(table_name)
        return inspect(self._engine).has_table(table_name)

    def fetch_all(self, query: Statement, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with self._engine.connect() as connection:
            rows = connection.execute(as_statement(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, query: Statement, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        with self._engine.connect() as connection:
            row = connection.execute(as_statement(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def fetch_scalar(self, query: Statement, params: Mapping[str, Any] | None = None) -> Any:
        with self._engine.connect() as connection:
            return connection.execute(as_statement(query), dict(params or {})).scalar_one()

    def execute(self, query: Statement, params: Mapping[str, Any] | None = None) -> int:
        """Run one write in its own transaction and return the affected row count."""

        with self._engine.begin() as connection:
            result = connection.execute(as_statement(query), dict(params or {}))
            return result.rowcount

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection whose statements commit together or not at all.

        Any exception raised inside the block rolls every statement back and
        propagates to the caller.
        """

        with self._engine.begin() as connection:
            yield connection

    def dispose(self) -> None:
        self._engine.dispose()

    def _validate_identifier(self, identifier: str) -> str:
        if not _IDENTIFIER_RE.match(identifier):
            raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
        return identifier
