# This file defines job endpoints: unpaid-job listing and job payment.
# It exists so the payment transaction is reachable over HTTP with the caller resolved from the request.
# The pay endpoint answers with a plain confirmation string; failures use the shared error payload.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from marketplace_ledger.api.dependencies import CallerProfileDep, get_job_service
from marketplace_ledger.api.schemas.common import ERROR_RESPONSES
from marketplace_ledger.api.schemas.job_schemas import JobV1
from marketplace_ledger.api.services.job_service import JobService

router = APIRouter(prefix="/jobs", tags=["jobs"], responses=ERROR_RESPONSES)
JobServiceDep = Annotated[JobService, Depends(get_job_service)]

PAYMENT_CONFIRMATION = "Job paid successfully"


@router.get("/unpaid", response_model=list[JobV1])
def list_unpaid_jobs(
    caller: CallerProfileDep,
    service: JobServiceDep,
) -> list[dict[str, Any]]:
    return service.list_unpaid_jobs(profile_id=caller["id"])


@router.post("/{job_id}/pay", response_model=str)
def pay_job(
    job_id: int,
    caller: CallerProfileDep,
    service: JobServiceDep,
) -> str:
    service.pay_job(caller_id=caller["id"], job_id=job_id)
    return PAYMENT_CONFIRMATION
