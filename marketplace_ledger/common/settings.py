"""
Process settings loaded from environment variables.
It centralizes cross-cutting concerns like settings, logging, and database access used by the service and scripts.
Only DATABASE_URL matters to storage; the remaining values label logs and health payloads.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

DEFAULT_DATABASE_URL: Final[str] = "sqlite:///./marketplace_ledger.sqlite3"

_LOG_LEVELS: Final[frozenset[str]] = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str = "marketplace-ledger"
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    DATABASE_URL: str = DEFAULT_DATABASE_URL

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"Unsupported LOG_LEVEL: {value!r}")
        return normalized

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, value: str) -> str:
        if "://" not in value:
            raise ValueError("DATABASE_URL must be a SQLAlchemy URL such as sqlite:///ledger.db")
        return value


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate settings from `.env` and process environment."""

    if load_env:
        load_dotenv()

    values = {key: value for key, value in os.environ.items() if value.strip()}
    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for process settings."""

    return load_settings()
