# This file defines contract endpoints for the calling profile.
# It exists so clients and contractors can read the agreements they take part in.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from marketplace_ledger.api.dependencies import CallerProfileDep, get_contract_service
from marketplace_ledger.api.schemas.common import ERROR_RESPONSES
from marketplace_ledger.api.schemas.contract_schemas import ContractV1
from marketplace_ledger.api.services.contract_service import ContractService

router = APIRouter(prefix="/contracts", tags=["contracts"], responses=ERROR_RESPONSES)
ContractServiceDep = Annotated[ContractService, Depends(get_contract_service)]


@router.get("/{contract_id}", response_model=ContractV1)
def get_contract(
    contract_id: int,
    caller: CallerProfileDep,
    service: ContractServiceDep,
) -> dict[str, Any]:
    return service.get_contract(profile_id=caller["id"], contract_id=contract_id)


@router.get("", response_model=list[ContractV1])
@router.get("/", response_model=list[ContractV1], include_in_schema=False)
def list_contracts(
    caller: CallerProfileDep,
    service: ContractServiceDep,
) -> list[dict[str, Any]]:
    return service.list_active_contracts(profile_id=caller["id"])
