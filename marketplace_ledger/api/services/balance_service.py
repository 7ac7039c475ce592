# This file implements client balance deposits under the outstanding-obligation cap.
# It exists so the cap is computed from live unpaid jobs at call time, never from cached totals.
# The balance is credited with a relative update inside one transaction and read back before commit.

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import text

from marketplace_ledger.api.api_config import ApiConfig
from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.api.error_handlers import APIError
from marketplace_ledger.api.services.profile_service import ProfileService
from marketplace_ledger.api.services.sql_types import flag_param, money_param
from marketplace_ledger.common.money import (
    exceeds_deposit_cap,
    format_money,
    format_ratio,
    max_deposit,
    parse_deposit_amount,
    to_money,
    total_owed,
)

LOGGER = logging.getLogger("ledger.deposits")

OPEN_CONTRACT_IDS_SQL = text(
    """
    SELECT c.id
    FROM contracts c
    WHERE c.client_id = :client_id AND c.status <> 'terminated'
    ORDER BY c.id ASC
    """
)

UNPAID_PRICES_SQL = text(
    """
    SELECT j.price
    FROM jobs j
    JOIN contracts c ON c.id = j.contract_id
    WHERE c.client_id = :client_id
      AND c.status <> 'terminated'
      AND (j.paid IS NULL OR j.paid = :unpaid)
    """
).bindparams(flag_param("unpaid"))

CREDIT_CLIENT_SQL = text(
    """
    UPDATE profiles
    SET balance = ROUND(balance + :amount, 2)
    WHERE id = :client_id AND type = 'client'
    """
).bindparams(money_param("amount"))

CLIENT_BALANCE_SQL = text("SELECT balance FROM profiles WHERE id = :client_id")


class BalanceService:
    """Capped balance top-ups for clients."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.profiles = ProfileService(config=config, db=db)

    def deposit_cap(self, *, client_id: int) -> dict[str, Decimal]:
        """Return what the client owes and the largest deposit currently allowed."""

        if not self.db.fetch_all(OPEN_CONTRACT_IDS_SQL, {"client_id": client_id}):
            raise APIError(
                status_code=404,
                error_code="NO_CONTRACTS",
                message="No contracts found for user",
            )

        prices = [row["price"] for row in self.db.fetch_all(UNPAID_PRICES_SQL, {"client_id": client_id, "unpaid": False})]
        if not prices:
            raise APIError(
                status_code=404,
                error_code="NO_UNPAID_JOBS",
                message="No unpaid jobs found for user.",
            )

        owed = total_owed(prices)
        return {"total_owed": owed, "max_deposit": max_deposit(owed, self.config.deposit_cap_ratio)}

    def deposit(self, *, client_id: int, amount: Any) -> dict[str, Any]:
        client = self.profiles.get_profile_of_type(client_id, "client")
        if client is None:
            raise APIError(status_code=404, error_code="CLIENT_NOT_FOUND", message="Client not found")

        cap = self.deposit_cap(client_id=client_id)

        try:
            deposit_amount = parse_deposit_amount(amount)
        except ValueError as exc:
            raise APIError(status_code=400, error_code="INVALID_AMOUNT", message=str(exc)) from exc

        ratio = self.config.deposit_cap_ratio
        credited = to_money(deposit_amount)
        # Both the requested and the cent-rounded credited amount must fit under the cap.
        if exceeds_deposit_cap(deposit_amount, cap["total_owed"], ratio) or exceeds_deposit_cap(
            credited, cap["total_owed"], ratio
        ):
            LOGGER.info(
                "Rejected deposit of %s for client %s: cap is %s",
                deposit_amount,
                client_id,
                cap["max_deposit"],
            )
            raise APIError(
                status_code=400,
                error_code="DEPOSIT_EXCEEDS_CAP",
                message=(
                    f"You can't deposit more than {format_ratio(ratio)} of your total owed amount. "
                    f"Maximum allowable deposit: {format_money(cap['max_deposit'])}"
                ),
                details={
                    "total_owed": float(cap["total_owed"]),
                    "max_deposit": float(cap["max_deposit"]),
                },
            )

        with self.db.transaction() as connection:
            connection.execute(CREDIT_CLIENT_SQL, {"client_id": client_id, "amount": credited})
            new_balance = to_money(
                connection.execute(CLIENT_BALANCE_SQL, {"client_id": client_id}).scalar_one()
            )

        LOGGER.info("Client %s deposited %s; balance now %s", client_id, credited, new_balance)
        return {
            "client_id": client_id,
            "amount": credited,
            "balance": new_balance,
            "max_deposit": cap["max_deposit"],
        }
