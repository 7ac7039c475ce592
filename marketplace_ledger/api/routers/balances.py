# This file defines the balance deposit endpoint.
# It exists so clients can top up their balance within the outstanding-obligation cap.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from marketplace_ledger.api.dependencies import CallerProfileDep, get_balance_service
from marketplace_ledger.api.schemas.common import ERROR_RESPONSES
from marketplace_ledger.api.schemas.balance_schemas import DepositRequest, DepositResponse
from marketplace_ledger.api.services.balance_service import BalanceService
from marketplace_ledger.common.money import format_money

router = APIRouter(prefix="/balances", tags=["balances"], responses=ERROR_RESPONSES)
BalanceServiceDep = Annotated[BalanceService, Depends(get_balance_service)]


@router.post("/deposit/{user_id}", response_model=DepositResponse)
def deposit(
    user_id: int,
    caller: CallerProfileDep,
    service: BalanceServiceDep,
    payload: Annotated[DepositRequest | None, Body()] = None,
) -> dict[str, Any]:
    amount = payload.amount if payload is not None else None
    result = service.deposit(client_id=user_id, amount=amount)
    return {
        "success": (
            f"Deposited {format_money(result['amount'])}. "
            f"New balance: {format_money(result['balance'])}"
        ),
        "new_balance": result["balance"],
        "max_deposit": result["max_deposit"],
    }
