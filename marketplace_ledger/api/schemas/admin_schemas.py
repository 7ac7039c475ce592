# This file defines response schemas for the administrative earnings reports.
# Best-client rows keep the legacy clientId/clientFirstName/clientLastName/totalPaid keys.

from __future__ import annotations

from pydantic import Field

from marketplace_ledger.api.schemas.common import Money, WireModel


class BestProfessionResponse(WireModel):
    best_profession: str = Field(serialization_alias="bestProfession")
    total_earned: Money = Field(serialization_alias="totalEarned")


class BestClientRowV1(WireModel):
    client_id: int = Field(serialization_alias="clientId")
    first_name: str = Field(serialization_alias="clientFirstName")
    last_name: str = Field(serialization_alias="clientLastName")
    full_name: str = Field(serialization_alias="fullName")
    total_paid: Money = Field(serialization_alias="totalPaid")
