# This file defines job schemas for unpaid-job listings and payment receipts.
# It exists so job payloads keep the legacy field names (ContractId, paymentDate) clients depend on.

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from marketplace_ledger.api.schemas.common import Money, WireModel


class JobV1(WireModel):
    id: int
    description: str | None = None
    price: Money
    paid: bool = False
    payment_date: datetime | None = Field(default=None, serialization_alias="paymentDate")
    contract_id: int = Field(serialization_alias="ContractId")
