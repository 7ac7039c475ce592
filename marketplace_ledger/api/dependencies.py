# This file provides dependency factories for FastAPI routes and middleware.
# It exists so the storage handle is created once and passed explicitly into every service.
# Services are built per request from injected config and database dependencies, so tests can override either.
# Identity resolution also lives here: the caller's profile is loaded before any handler runs.

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, Header

from marketplace_ledger.api.api_config import ApiConfig, get_api_config
from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.api.error_handlers import APIError
from marketplace_ledger.api.services.admin_service import AdminService
from marketplace_ledger.api.services.balance_service import BalanceService
from marketplace_ledger.api.services.contract_service import ContractService
from marketplace_ledger.api.services.job_service import JobService
from marketplace_ledger.api.services.profile_service import ProfileService

LOGGER = logging.getLogger("ledger.auth")


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


def get_config() -> ApiConfig:
    return get_api_config()


ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def get_profile_service(config: ConfigDep, db: DBDep) -> ProfileService:
    return ProfileService(config=config, db=db)


def get_contract_service(config: ConfigDep, db: DBDep) -> ContractService:
    return ContractService(config=config, db=db)


def get_job_service(config: ConfigDep, db: DBDep) -> JobService:
    return JobService(config=config, db=db)


def get_balance_service(config: ConfigDep, db: DBDep) -> BalanceService:
    return BalanceService(config=config, db=db)


def get_admin_service(config: ConfigDep, db: DBDep) -> AdminService:
    return AdminService(config=config, db=db)


def get_caller_profile(
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
    profile_id: Annotated[str | None, Header(convert_underscores=False)] = None,
) -> dict[str, Any]:
    """Resolve the `profile_id` header into the calling profile or reject with 401."""

    if profile_id is None or not profile_id.strip().isdigit():
        raise APIError(
            status_code=401,
            error_code="PROFILE_REQUIRED",
            message="A valid profile_id header is required.",
        )

    profile = profiles.get_profile(int(profile_id))
    if profile is None:
        LOGGER.info("Rejected request for unknown profile_id=%s", profile_id)
        raise APIError(
            status_code=401,
            error_code="PROFILE_REQUIRED",
            message="Profile not found.",
        )
    return profile


CallerProfileDep = Annotated[dict[str, Any], Depends(get_caller_profile)]
