# This file implements profile lookups used by identity resolution and the ledger services.
# It exists so the caller's profile is resolved once per request before any handler logic runs.

from __future__ import annotations

from typing import Any

from marketplace_ledger.api.api_config import ApiConfig
from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.common.money import to_money

PROFILE_COLUMNS = "p.id, p.first_name, p.last_name, p.profession, p.balance, p.type"


class ProfileService:
    """Read access to marketplace profiles."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db

    def get_profile(self, profile_id: int) -> dict[str, Any] | None:
        row = self.db.fetch_one(
            f"SELECT {PROFILE_COLUMNS} FROM profiles p WHERE p.id = :profile_id",
            {"profile_id": profile_id},
        )
        return shape_profile(row) if row is not None else None

    def get_profile_of_type(self, profile_id: int, profile_type: str) -> dict[str, Any] | None:
        row = self.db.fetch_one(
            f"SELECT {PROFILE_COLUMNS} FROM profiles p WHERE p.id = :profile_id AND p.type = :profile_type",
            {"profile_id": profile_id, "profile_type": profile_type},
        )
        return shape_profile(row) if row is not None else None


def shape_profile(row: dict[str, Any]) -> dict[str, Any]:
    shaped = dict(row)
    shaped["balance"] = to_money(shaped.get("balance"))
    return shaped
