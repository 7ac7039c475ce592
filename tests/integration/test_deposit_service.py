"""
Integration tests for capped client deposits.
They run the service against a temporary SQLite ledger built from the DDL files.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from marketplace_ledger.api.error_handlers import APIError
from marketplace_ledger.api.services.balance_service import BalanceService
from marketplace_ledger.api.services.job_service import JobService
from marketplace_ledger.api.services.profile_service import ProfileService
from marketplace_ledger.common.seed import JobRecord, ProfileRecord, load_ledger, new_contract
from tests.api.support import build_test_config


def _service(db) -> BalanceService:
    return BalanceService(config=build_test_config(), db=db)


def _balance(db, profile_id: int) -> Decimal:
    profile = ProfileService(config=build_test_config(), db=db).get_profile(profile_id)
    assert profile is not None
    return profile["balance"]


def test_cap_counts_only_open_contracts(ledger_db) -> None:
    # Client 1 still owes job 1, but its contract is terminated.
    cap = _service(ledger_db).deposit_cap(client_id=1)
    assert cap == {"total_owed": Decimal("201.00"), "max_deposit": Decimal("50.25")}


def test_cap_scenario_two_hundred_owed(ledger_db) -> None:
    service = _service(ledger_db)
    assert service.deposit_cap(client_id=4)["max_deposit"] == Decimal("50.00")

    with pytest.raises(APIError) as exc_info:
        service.deposit(client_id=4, amount=60)
    assert exc_info.value.error_code == "DEPOSIT_EXCEEDS_CAP"
    assert _balance(ledger_db, 4) == Decimal("1.30")

    result = service.deposit(client_id=4, amount=50)
    assert result["balance"] == Decimal("51.30")
    assert _balance(ledger_db, 4) == Decimal("51.30")


def test_amount_is_compared_before_rounding(ledger_db) -> None:
    with pytest.raises(APIError) as exc_info:
        _service(ledger_db).deposit(client_id=4, amount="50.004")
    assert exc_info.value.error_code == "DEPOSIT_EXCEEDS_CAP"


def test_cap_shrinks_after_payment(ledger_db) -> None:
    service = _service(ledger_db)
    assert service.deposit_cap(client_id=2)["total_owed"] == Decimal("402.00")

    JobService(config=build_test_config(), db=ledger_db).pay_job(caller_id=2, job_id=3)

    assert service.deposit_cap(client_id=2) == {
        "total_owed": Decimal("200.00"),
        "max_deposit": Decimal("50.00"),
    }


def test_client_without_open_contracts(empty_ledger_db) -> None:
    load_ledger(
        empty_ledger_db,
        profiles=[ProfileRecord(1, "Solo", "Client", "Analyst", Decimal("10"), "client")],
        contracts=[],
        jobs=[],
    )
    with pytest.raises(APIError) as exc_info:
        _service(empty_ledger_db).deposit(client_id=1, amount=1)
    assert exc_info.value.error_code == "NO_CONTRACTS"


@pytest.fixture
def odd_cent_ledger_db(empty_ledger_db):
    """One client owing 201.10, so a quarter of it is 50.275."""

    profiles = [
        ProfileRecord(1, "Wen", "Zhao", "Publisher", Decimal("10.00"), "client"),
        ProfileRecord(2, "Lars", "Holm", "Translator", Decimal("0.00"), "contractor"),
    ]
    contract = new_contract({p.id: p for p in profiles}, id=1, client_id=1, contractor_id=2, status="in_progress")
    load_ledger(
        empty_ledger_db,
        profiles=profiles,
        contracts=[contract],
        jobs=[JobRecord(1, 1, Decimal("201.10"))],
    )
    return empty_ledger_db


def test_cap_with_fractional_cent_quarter(odd_cent_ledger_db) -> None:
    service = _service(odd_cent_ledger_db)
    assert service.deposit_cap(client_id=1)["max_deposit"] == Decimal("50.27")

    for amount in ("50.28", "50.275"):
        with pytest.raises(APIError) as exc_info:
            service.deposit(client_id=1, amount=amount)
        assert exc_info.value.error_code == "DEPOSIT_EXCEEDS_CAP"
        assert "$50.27" in exc_info.value.message
    assert _balance(odd_cent_ledger_db, 1) == Decimal("10.00")

    result = service.deposit(client_id=1, amount="50.27")
    assert result["balance"] == Decimal("60.27")


def test_repeated_deposits_keep_cents_exact(ledger_db) -> None:
    service = _service(ledger_db)
    for _ in range(3):
        service.deposit(client_id=2, amount="0.10")

    assert _balance(ledger_db, 2) == Decimal("231.41")
    assert ledger_db.fetch_scalar("SELECT balance FROM profiles WHERE id = 2") == 231.41


def test_deposit_checks_client_before_amount(ledger_db) -> None:
    with pytest.raises(APIError) as exc_info:
        _service(ledger_db).deposit(client_id=6, amount=None)
    assert exc_info.value.error_code == "CLIENT_NOT_FOUND"
