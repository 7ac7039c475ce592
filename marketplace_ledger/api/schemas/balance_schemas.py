# This file defines request and response schemas for balance deposits.
# The request amount is left loosely typed so malformed values surface as 400 INVALID_AMOUNT rather than 422.

from __future__ import annotations

from pydantic import BaseModel

from marketplace_ledger.api.schemas.common import Money


class DepositRequest(BaseModel):
    amount: float | str | None = None


class DepositResponse(BaseModel):
    success: str
    new_balance: Money
    max_deposit: Money
