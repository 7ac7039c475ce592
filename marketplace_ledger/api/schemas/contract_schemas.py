# This file defines contract response schemas.
# Field names on the wire match what existing clients already read (ClientId, ContractorId).

from __future__ import annotations

from typing import Literal

from pydantic import Field

from marketplace_ledger.api.schemas.common import WireModel

ContractStatus = Literal["new", "in_progress", "terminated"]


class ContractV1(WireModel):
    id: int
    terms: str | None = None
    status: ContractStatus
    client_id: int = Field(serialization_alias="ClientId")
    contractor_id: int = Field(serialization_alias="ContractorId")
