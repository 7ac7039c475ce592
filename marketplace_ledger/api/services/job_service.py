# This file implements the unpaid-job query and the job payment transaction.
# It exists so the balance transfer and the job state change live behind one service call.
# Validation reads happen first; the three writes then run in a single storage transaction.
# Every write is conditional and relative, so a concurrent payment of the same job cannot debit twice.
# Balance writes round to cents in SQL so REAL-backed NUMERIC columns on SQLite never drift.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import text

from marketplace_ledger.api.api_config import ApiConfig
from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.api.error_handlers import APIError
from marketplace_ledger.api.services.profile_service import ProfileService
from marketplace_ledger.api.services.sql_types import (
    JOB_RESULT_TYPES,
    flag_param,
    money_param,
    timestamp_param,
)
from marketplace_ledger.common.money import to_money

LOGGER = logging.getLogger("ledger.payments")

JOB_COLUMNS = "j.id, j.description, j.price, j.paid, j.payment_date, j.contract_id"

UNPAID_JOBS_SQL = text(
    f"""
    SELECT {JOB_COLUMNS}
    FROM jobs j
    JOIN contracts c ON c.id = j.contract_id
    WHERE c.status = 'in_progress'
      AND (c.client_id = :profile_id OR c.contractor_id = :profile_id)
      AND j.payment_date IS NULL
    ORDER BY j.id ASC
    """
).columns(**JOB_RESULT_TYPES)

JOB_BY_ID_SQL = text(
    f"SELECT {JOB_COLUMNS} FROM jobs j WHERE j.id = :job_id"
).columns(**JOB_RESULT_TYPES)

MARK_JOB_PAID_SQL = text(
    """
    UPDATE jobs
    SET paid = :paid, payment_date = :payment_date
    WHERE id = :job_id AND (paid IS NULL OR paid = :unpaid)
    """
).bindparams(flag_param("paid"), flag_param("unpaid"), timestamp_param("payment_date"))

DEBIT_CLIENT_SQL = text(
    """
    UPDATE profiles
    SET balance = ROUND(balance - :amount, 2)
    WHERE id = :client_id AND type = 'client' AND ROUND(balance, 2) >= :amount
    """
).bindparams(money_param("amount"))

CREDIT_CONTRACTOR_SQL = text(
    """
    UPDATE profiles
    SET balance = ROUND(balance + :amount, 2)
    WHERE id = :contractor_id AND type = 'contractor'
    """
).bindparams(money_param("amount"))


def utc_now() -> datetime:
    """Naive UTC timestamp, the form payment dates are stored in."""

    return datetime.now(tz=UTC).replace(tzinfo=None)


def shape_job(row: dict[str, Any]) -> dict[str, Any]:
    shaped = dict(row)
    shaped["price"] = to_money(shaped.get("price"))
    shaped["paid"] = bool(shaped.get("paid"))
    return shaped


def _already_paid() -> APIError:
    return APIError(status_code=401, error_code="JOB_ALREADY_PAID", message="Job already paid")


def _insufficient_balance() -> APIError:
    return APIError(
        status_code=401,
        error_code="INSUFFICIENT_BALANCE",
        message="Account balance insufficient",
    )


def _contractor_not_found() -> APIError:
    return APIError(status_code=404, error_code="CONTRACTOR_NOT_FOUND", message="Contractor not found")


class JobService:
    """Unpaid-job listing and the pay-for-job transaction."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.profiles = ProfileService(config=config, db=db)

    def list_unpaid_jobs(self, *, profile_id: int) -> list[dict[str, Any]]:
        rows = self.db.fetch_all(UNPAID_JOBS_SQL, {"profile_id": profile_id})
        if not rows:
            raise APIError(
                status_code=404,
                error_code="NO_UNPAID_JOBS",
                message="no unpaid jobs found",
            )
        return [shape_job(row) for row in rows]

    def get_job(self, job_id: int) -> dict[str, Any] | None:
        row = self.db.fetch_one(JOB_BY_ID_SQL, {"job_id": job_id})
        return shape_job(row) if row is not None else None

    def pay_job(self, *, caller_id: int, job_id: int) -> dict[str, Any]:
        """Transfer the job price from the calling client to the contract's contractor.

        Returns a receipt with the amount, both profile ids and the payment
        timestamp. Raises ``APIError`` for every rejected payment; nothing is
        written unless all three updates succeed.
        """

        job = self.get_job(job_id)
        if job is None:
            raise APIError(status_code=404, error_code="JOB_NOT_FOUND", message="Job not found")
        if job["paid"]:
            raise _already_paid()

        client = self.profiles.get_profile_of_type(caller_id, "client")
        if client is None:
            raise APIError(status_code=404, error_code="CLIENT_NOT_FOUND", message="Client not found")

        price = job["price"]
        if client["balance"] < price:
            LOGGER.info(
                "Rejected payment for job %s: client %s balance %s below price %s",
                job_id,
                caller_id,
                client["balance"],
                price,
            )
            raise _insufficient_balance()

        contract = self.db.fetch_one(
            "SELECT c.id, c.client_id, c.contractor_id FROM contracts c WHERE c.id = :contract_id",
            {"contract_id": job["contract_id"]},
        )
        if contract is None:
            raise APIError(status_code=404, error_code="CONTRACT_NOT_FOUND", message="Contract not found.")
        contractor = self.profiles.get_profile_of_type(int(contract["contractor_id"]), "contractor")
        if contractor is None:
            raise _contractor_not_found()

        paid_at = utc_now()
        with self.db.transaction() as connection:
            marked = connection.execute(
                MARK_JOB_PAID_SQL,
                {"job_id": job_id, "paid": True, "unpaid": False, "payment_date": paid_at},
            )
            if marked.rowcount != 1:
                # Another request paid the job between validation and this write.
                raise _already_paid()

            debited = connection.execute(
                DEBIT_CLIENT_SQL, {"client_id": client["id"], "amount": price}
            )
            if debited.rowcount != 1:
                raise _insufficient_balance()

            credited = connection.execute(
                CREDIT_CONTRACTOR_SQL, {"contractor_id": contractor["id"], "amount": price}
            )
            if credited.rowcount != 1:
                raise _contractor_not_found()

        LOGGER.info(
            "Job %s paid: %s moved from client %s to contractor %s",
            job_id,
            price,
            client["id"],
            contractor["id"],
        )
        return {
            "job_id": job_id,
            "client_id": client["id"],
            "contractor_id": contractor["id"],
            "amount": price,
            "payment_date": paid_at,
        }
