# This file implements the administrative earnings reports over paid jobs.
# It exists so aggregation runs in SQL and routers only validate the date window.
# Both reports share one filter: paid jobs whose payment date falls inside the inclusive window.
# Ties are broken by a stable secondary key so repeated calls return the same answer.

from __future__ import annotations

from typing import Any

from sqlalchemy import text

from marketplace_ledger.api.api_config import ApiConfig
from marketplace_ledger.api.date_range import DateRange
from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.api.error_handlers import APIError
from marketplace_ledger.api.services.sql_types import flag_param, timestamp_param
from marketplace_ledger.common.money import to_money

_PAID_IN_WINDOW = "j.paid = :paid AND j.payment_date BETWEEN :start_ts AND :end_ts"

BEST_PROFESSION_SQL = text(
    f"""
    SELECT p.profession AS profession, SUM(j.price) AS total_earned
    FROM jobs j
    JOIN contracts c ON c.id = j.contract_id
    JOIN profiles p ON p.id = c.contractor_id
    WHERE {_PAID_IN_WINDOW}
    GROUP BY p.profession
    ORDER BY total_earned DESC, p.profession ASC
    LIMIT 1
    """
).bindparams(flag_param("paid"), timestamp_param("start_ts"), timestamp_param("end_ts"))

BEST_CLIENTS_SQL = text(
    f"""
    SELECT
        p.id AS client_id,
        p.first_name AS first_name,
        p.last_name AS last_name,
        SUM(j.price) AS total_paid
    FROM jobs j
    JOIN contracts c ON c.id = j.contract_id
    JOIN profiles p ON p.id = c.client_id
    WHERE {_PAID_IN_WINDOW}
    GROUP BY p.id, p.first_name, p.last_name
    ORDER BY total_paid DESC, p.id ASC
    LIMIT :limit
    """
).bindparams(flag_param("paid"), timestamp_param("start_ts"), timestamp_param("end_ts"))


def _no_data() -> APIError:
    return APIError(
        status_code=404,
        error_code="NO_REPORT_DATA",
        message="No data found for the given time range.",
    )


class AdminService:
    """Aggregate reports for marketplace administrators."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db

    def _window_params(self, window: DateRange) -> dict[str, Any]:
        return {"paid": True, "start_ts": window.start, "end_ts": window.end}

    def best_profession(self, *, window: DateRange) -> dict[str, Any]:
        row = self.db.fetch_one(BEST_PROFESSION_SQL, self._window_params(window))
        if row is None:
            raise _no_data()
        return {"profession": row["profession"], "total_earned": to_money(row["total_earned"])}

    def best_clients(self, *, window: DateRange, limit: int | None = None) -> list[dict[str, Any]]:
        effective_limit = limit if limit is not None else self.config.default_best_clients_limit
        if effective_limit <= 0:
            raise APIError(
                status_code=400,
                error_code="INVALID_QUERY_PARAM",
                message="limit must be a positive integer.",
            )

        params = self._window_params(window)
        params["limit"] = effective_limit
        rows = self.db.fetch_all(BEST_CLIENTS_SQL, params)
        if not rows:
            raise _no_data()

        return [
            {
                "client_id": row["client_id"],
                "first_name": row["first_name"],
                "last_name": row["last_name"],
                "full_name": f"{row['first_name']} {row['last_name']}",
                "total_paid": to_money(row["total_paid"]),
            }
            for row in rows
        ]
