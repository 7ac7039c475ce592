# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, Prometheus metrics, and optional request logging.
# Keeping bootstrap logic centralized makes deployment and testing more predictable.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from marketplace_ledger.api.api_config import get_api_config
from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.api.dependencies import get_database_client
from marketplace_ledger.api.error_handlers import register_error_handlers
from marketplace_ledger.api.routers.admin import router as admin_router
from marketplace_ledger.api.routers.balances import router as balances_router
from marketplace_ledger.api.routers.contracts import router as contracts_router
from marketplace_ledger.api.routers.health import router as health_router
from marketplace_ledger.api.routers.jobs import router as jobs_router
from marketplace_ledger.common.db import apply_ledger_ddl
from marketplace_ledger.common.logging import configure_logging

LOGGER = logging.getLogger("ledger.api")

API_HTTP_REQUESTS_TOTAL = Counter(
    "ledger_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "ledger_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "ledger_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)


def _route_label(request: Request) -> str:
    # Label by route template so per-id paths do not explode metric cardinality.
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "Contracts, jobs, and profile balances for a marketplace connecting clients and contractors. "
            "Includes job payment, capped deposits, and administrative earnings reports."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "contracts", "description": "Contracts the calling profile takes part in."},
            {"name": "jobs", "description": "Unpaid jobs and job payment."},
            {"name": "balances", "description": "Client balance deposits."},
            {"name": "admin", "description": "Earnings reports over a payment-date window."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=request.url.path).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"

            if config.enable_request_logging:
                LOGGER.info(
                    "%s %s -> %s in %.2fms (request_id=%s)",
                    request.method,
                    request.url.path,
                    status_code,
                    duration_ms,
                    request_id,
                )

            return response
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=request.url.path).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        db_factory = app.dependency_overrides.get(get_database_client, get_database_client)
        try:
            db: DatabaseClient = db_factory()
            if config.auto_create_schema:
                apply_ledger_ddl(db.engine)
            app.state.db_connected_at_startup = db.can_connect()
        except Exception:
            LOGGER.exception("Database check failed during startup")
            app.state.db_connected_at_startup = False

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(contracts_router)
    app.include_router(jobs_router)
    app.include_router(balances_router)
    app.include_router(admin_router)

    return app


app = create_app()
