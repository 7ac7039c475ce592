# This file tests the administrative earnings reports.
# It exists to pin window inclusivity, tie-breaking, limits, and 400s for malformed bounds.

from __future__ import annotations

import pytest

from tests.api.support import api_test_client, build_test_config


def test_best_profession_in_window(ledger_db) -> None:
    with api_test_client(db_client=ledger_db) as client:
        response = client.get("/admin/best-profession", params={"start": "2020-08-10", "end": "2020-08-15"})

    assert response.status_code == 200
    assert response.json() == {"bestProfession": "Programmer", "totalEarned": 2504.0}


def test_best_profession_tie_breaks_alphabetically(ledger_db) -> None:
    with api_test_client(db_client=ledger_db) as client:
        response = client.get("/admin/best-profession", params={"start": "2020-08-17", "end": "2020-08-17"})

    assert response.status_code == 200
    assert response.json()["bestProfession"] == "Fighter"


def test_best_profession_accepts_timestamps(ledger_db) -> None:
    params = {"start": "2020-08-17T00:00:00Z", "end": "2020-08-17T23:59:59+00:00"}
    with api_test_client(db_client=ledger_db) as client:
        response = client.get("/admin/best-profession", params=params)

    assert response.status_code == 200
    assert response.json()["totalEarned"] == 200.0


def test_best_profession_empty_window(ledger_db) -> None:
    with api_test_client(db_client=ledger_db) as client:
        response = client.get("/admin/best-profession", params={"start": "2021-01-01", "end": "2021-12-31"})

    assert response.status_code == 404
    assert response.json()["error_code"] == "NO_REPORT_DATA"


def test_best_clients_default_limit(ledger_db) -> None:
    with api_test_client(db_client=ledger_db) as client:
        response = client.get("/admin/best-clients", params={"start": "2020-08-10", "end": "2020-08-15"})

    assert response.status_code == 200
    assert response.json() == [
        {
            "clientId": 4,
            "clientFirstName": "Tomas",
            "clientLastName": "Berg",
            "fullName": "Tomas Berg",
            "totalPaid": 2220.0,
        },
        {
            "clientId": 2,
            "clientFirstName": "Marek",
            "clientLastName": "Nowak",
            "fullName": "Marek Nowak",
            "totalPaid": 263.0,
        },
    ]


def test_best_clients_explicit_limit(ledger_db) -> None:
    params = {"start": "2020-08-01", "end": "2020-08-31", "limit": "10"}
    with api_test_client(db_client=ledger_db) as client:
        rows = client.get("/admin/best-clients", params=params).json()

    assert [(row["clientId"], row["totalPaid"]) for row in rows] == [
        (4, 2220.0),
        (3, 400.0),
        (2, 263.0),
        (1, 221.0),
    ]


def test_best_clients_default_limit_is_configurable(ledger_db) -> None:
    config = build_test_config(default_best_clients_limit=3)
    with api_test_client(config=config, db_client=ledger_db) as client:
        rows = client.get("/admin/best-clients", params={"start": "2020-08-10", "end": "2020-08-15"}).json()

    assert [row["clientId"] for row in rows] == [4, 2, 1]


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"start": "2020-08-01"},
        {"start": "not-a-date", "end": "2020-08-31"},
        {"start": "2020-08-31", "end": "2020-08-01"},
    ],
)
def test_report_rejects_bad_window(ledger_db, params: dict[str, str]) -> None:
    with api_test_client(db_client=ledger_db) as client:
        profession = client.get("/admin/best-profession", params=params)
        clients = client.get("/admin/best-clients", params=params)

    assert profession.status_code == 400
    assert clients.status_code == 400
    assert profession.json()["error_code"] == "INVALID_DATE_RANGE"


@pytest.mark.parametrize("limit", ["0", "-1", "abc"])
def test_best_clients_rejects_bad_limit(ledger_db, limit: str) -> None:
    params = {"start": "2020-08-01", "end": "2020-08-31", "limit": limit}
    with api_test_client(db_client=ledger_db) as client:
        response = client.get("/admin/best-clients", params=params)

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_QUERY_PARAM"
