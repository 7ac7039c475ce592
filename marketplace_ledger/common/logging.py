"""
Logging configuration helpers.
It centralizes cross-cutting concerns like settings, logging, and database access used by the service and scripts.
Keeping these helpers isolated reduces duplication and keeps domain modules focused on business logic.
"""

from __future__ import annotations

import logging

from marketplace_ledger.common.settings import get_settings

_LOGGING_CONFIGURED = False


def configure_logging(level_name: str | None = None) -> None:
    """Configure process-wide logging from environment settings."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    resolved = (level_name or get_settings().LOG_LEVEL).upper()
    level = getattr(logging, resolved, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
