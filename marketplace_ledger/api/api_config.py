# This file defines runtime settings for the API layer in one place.
# It exists so endpoint behavior, report defaults, and the deposit cap can be configured without code edits.
# The config loader reads environment variables and applies safe defaults for local development.
# Values are validated once at startup so misconfiguration fails fast instead of per request.

from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketplace_ledger.common.money import DEFAULT_DEPOSIT_CAP_RATIO
from marketplace_ledger.common.settings import DEFAULT_DATABASE_URL


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Marketplace Ledger API"
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "local"
    database_url: str = DEFAULT_DATABASE_URL
    app_version: str = "0.1.0"
    enable_request_logging: bool = False
    allowed_origins: list[str] = Field(default_factory=list)
    auto_create_schema: bool = False
    empty_contracts_as_not_found: bool = True
    default_best_clients_limit: int = 2
    deposit_cap_ratio: Decimal = DEFAULT_DEPOSIT_CAP_RATIO

    @field_validator("port", "default_best_clients_limit")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @field_validator("deposit_cap_ratio")
    @classmethod
    def validate_ratio(cls, value: Decimal) -> Decimal:
        if value <= 0 or value > 1:
            raise ValueError("deposit_cap_ratio must be in (0, 1].")
        return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_decimal(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be numeric, got {raw!r}") from exc


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Marketplace Ledger API"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8000),
        "environment": os.getenv("ENV", "local"),
        "database_url": os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
        "enable_request_logging": _env_bool("API_ENABLE_REQUEST_LOGGING", False),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "auto_create_schema": _env_bool("API_AUTO_CREATE_SCHEMA", False),
        "empty_contracts_as_not_found": _env_bool("API_EMPTY_CONTRACTS_AS_NOT_FOUND", True),
        "default_best_clients_limit": _env_int("API_DEFAULT_BEST_CLIENTS_LIMIT", 2),
        "deposit_cap_ratio": _env_decimal("DEPOSIT_CAP_RATIO", DEFAULT_DEPOSIT_CAP_RATIO),
    }

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
