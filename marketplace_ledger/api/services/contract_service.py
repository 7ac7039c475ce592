# This file implements contract lookups scoped to the requesting profile.
# It exists so routers never see contracts the caller does not take part in.
# A contract owned by someone else is reported exactly like a missing one, so ids do not leak.

from __future__ import annotations

from typing import Any

from marketplace_ledger.api.api_config import ApiConfig
from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.api.error_handlers import APIError

CONTRACT_COLUMNS = "c.id, c.terms, c.status, c.client_id, c.contractor_id"


class ContractService:
    """Participant-scoped contract queries."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db

    def get_contract(self, *, profile_id: int, contract_id: int) -> dict[str, Any]:
        query = f"""
        SELECT {CONTRACT_COLUMNS}
        FROM contracts c
        WHERE c.id = :contract_id
          AND (c.client_id = :profile_id OR c.contractor_id = :profile_id)
        """
        row = self.db.fetch_one(query, {"contract_id": contract_id, "profile_id": profile_id})
        if row is None:
            raise APIError(
                status_code=404,
                error_code="CONTRACT_NOT_FOUND",
                message="Contract not found.",
            )
        return row

    def list_active_contracts(self, *, profile_id: int) -> list[dict[str, Any]]:
        query = f"""
        SELECT {CONTRACT_COLUMNS}
        FROM contracts c
        WHERE c.status <> 'terminated'
          AND (c.client_id = :profile_id OR c.contractor_id = :profile_id)
        ORDER BY c.id ASC
        """
        rows = self.db.fetch_all(query, {"profile_id": profile_id})
        if not rows and self.config.empty_contracts_as_not_found:
            raise APIError(
                status_code=404,
                error_code="NO_ACTIVE_CONTRACTS",
                message="No contracts found",
            )
        return rows
