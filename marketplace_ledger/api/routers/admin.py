# This file defines administrative report endpoints over a payment-date window.
# It exists so operators can see which profession earned most and which clients paid most.
# Query parameters are validated here; missing or malformed bounds answer 400 instead of 422.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from marketplace_ledger.api.date_range import DateRange, parse_date_range
from marketplace_ledger.api.dependencies import get_admin_service
from marketplace_ledger.api.error_handlers import APIError
from marketplace_ledger.api.schemas.common import ERROR_RESPONSES
from marketplace_ledger.api.schemas.admin_schemas import BestClientRowV1, BestProfessionResponse
from marketplace_ledger.api.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["admin"], responses=ERROR_RESPONSES)
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]


def _window(start: str | None, end: str | None) -> DateRange:
    try:
        return parse_date_range(start, end)
    except ValueError as exc:
        raise APIError(
            status_code=400,
            error_code="INVALID_DATE_RANGE",
            message=str(exc),
        ) from exc


def _limit(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    value = raw.strip()
    if not value.isdigit() or int(value) <= 0:
        raise APIError(
            status_code=400,
            error_code="INVALID_QUERY_PARAM",
            message="limit must be a positive integer.",
        )
    return int(value)


@router.get("/best-profession", response_model=BestProfessionResponse)
def best_profession(
    service: AdminServiceDep,
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
) -> dict[str, Any]:
    window = _window(start, end)
    result = service.best_profession(window=window)
    return {"best_profession": result["profession"], "total_earned": result["total_earned"]}


@router.get("/best-clients", response_model=list[BestClientRowV1])
def best_clients(
    service: AdminServiceDep,
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
    limit: str | None = Query(default=None),
) -> list[dict[str, Any]]:
    window = _window(start, end)
    return service.best_clients(window=window, limit=_limit(limit))
