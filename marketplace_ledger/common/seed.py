"""
Provisioning helpers that load profiles, contracts, and jobs into an empty ledger.
Contracts go through `new_contract`, which refuses a client or contractor id whose profile has the wrong type.
The demo data set is what `scripts/seed_db.py` and the integration tests start from.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection
from sqlalchemy.sql.elements import TextClause

from marketplace_ledger.api.db_access import DatabaseClient
from marketplace_ledger.api.services.sql_types import FLAG, MONEY, TIMESTAMP

LOGGER = logging.getLogger("ledger.seed")

PROFILE_TYPES = frozenset({"client", "contractor"})
CONTRACT_STATUSES = frozenset({"new", "in_progress", "terminated"})


@dataclass(frozen=True)
class ProfileRecord:
    id: int
    first_name: str
    last_name: str
    profession: str
    balance: Decimal
    type: str

    def __post_init__(self) -> None:
        if self.type not in PROFILE_TYPES:
            raise ValueError(f"Unknown profile type: {self.type!r}")
        if self.balance < 0:
            raise ValueError(f"Profile {self.id} balance must be non-negative")


@dataclass(frozen=True)
class ContractRecord:
    id: int
    client_id: int
    contractor_id: int
    status: str
    terms: str | None = None


@dataclass(frozen=True)
class JobRecord:
    id: int
    contract_id: int
    price: Decimal
    description: str | None = None
    paid: bool = False
    payment_date: datetime | None = None

    def __post_init__(self) -> None:
        if self.price <= 0:
            raise ValueError(f"Job {self.id} price must be positive")
        if self.paid != (self.payment_date is not None):
            raise ValueError(f"Job {self.id} must set paid and payment_date together")


def new_contract(
    profiles: Mapping[int, ProfileRecord],
    *,
    id: int,
    client_id: int,
    contractor_id: int,
    status: str = "new",
    terms: str | None = None,
) -> ContractRecord:
    """Build a contract after checking both parties exist with the right profile type."""

    if status not in CONTRACT_STATUSES:
        raise ValueError(f"Unknown contract status: {status!r}")
    client = profiles.get(client_id)
    if client is None or client.type != "client":
        raise ValueError(f"Contract {id}: profile {client_id} is not a client")
    contractor = profiles.get(contractor_id)
    if contractor is None or contractor.type != "contractor":
        raise ValueError(f"Contract {id}: profile {contractor_id} is not a contractor")
    return ContractRecord(
        id=id,
        client_id=client_id,
        contractor_id=contractor_id,
        status=status,
        terms=terms,
    )


_INSERT_PROFILE = text(
    """
    INSERT INTO profiles (id, first_name, last_name, profession, balance, type)
    VALUES (:id, :first_name, :last_name, :profession, :balance, :type)
    """
).bindparams(bindparam("balance", type_=MONEY))

_INSERT_CONTRACT = text(
    """
    INSERT INTO contracts (id, terms, status, client_id, contractor_id)
    VALUES (:id, :terms, :status, :client_id, :contractor_id)
    """
)

_INSERT_JOB = text(
    """
    INSERT INTO jobs (id, description, price, paid, payment_date, contract_id)
    VALUES (:id, :description, :price, :paid, :payment_date, :contract_id)
    """
).bindparams(
    bindparam("price", type_=MONEY),
    bindparam("paid", type_=FLAG),
    bindparam("payment_date", type_=TIMESTAMP),
)


def _insert_all(connection: Connection, statement: TextClause, records: Iterable[object]) -> int:
    rows = [asdict(record) for record in records]
    if rows:
        connection.execute(statement, rows)
    return len(rows)


def load_ledger(
    db: DatabaseClient,
    *,
    profiles: Iterable[ProfileRecord],
    contracts: Iterable[ContractRecord],
    jobs: Iterable[JobRecord],
) -> None:
    """Insert all records in one transaction."""

    with db.transaction() as connection:
        profile_count = _insert_all(connection, _INSERT_PROFILE, profiles)
        contract_count = _insert_all(connection, _INSERT_CONTRACT, contracts)
        job_count = _insert_all(connection, _INSERT_JOB, jobs)
    LOGGER.info(
        "Seeded %d profiles, %d contracts, %d jobs",
        profile_count,
        contract_count,
        job_count,
    )


def clear_ledger(db: DatabaseClient) -> None:
    with db.transaction() as connection:
        for table_name in ("jobs", "contracts", "profiles"):
            connection.execute(text(f"DELETE FROM {table_name}"))


def demo_profiles() -> list[ProfileRecord]:
    return [
        ProfileRecord(1, "Ada", "Okafor", "Product Owner", Decimal("1150.00"), "client"),
        ProfileRecord(2, "Marek", "Nowak", "Founder", Decimal("231.11"), "client"),
        ProfileRecord(3, "Lucia", "Ferreira", "Operations Lead", Decimal("451.30"), "client"),
        ProfileRecord(4, "Tomas", "Berg", "Designer", Decimal("1.30"), "client"),
        ProfileRecord(5, "Priya", "Raman", "Musician", Decimal("64.00"), "contractor"),
        ProfileRecord(6, "Jonah", "Weiss", "Programmer", Decimal("1214.00"), "contractor"),
        ProfileRecord(7, "Keiko", "Sato", "Programmer", Decimal("22.00"), "contractor"),
        ProfileRecord(8, "Omar", "Haddad", "Fighter", Decimal("314.00"), "contractor"),
    ]


def demo_ledger() -> tuple[list[ProfileRecord], list[ContractRecord], list[JobRecord]]:
    """Sample marketplace: four clients, four contractors, contracts in every status."""

    profiles = demo_profiles()
    by_id = {profile.id: profile for profile in profiles}

    contracts = [
        new_contract(by_id, id=1, client_id=1, contractor_id=5, status="terminated", terms="Jingle composition"),
        new_contract(by_id, id=2, client_id=1, contractor_id=6, status="in_progress", terms="Checkout redesign"),
        new_contract(by_id, id=3, client_id=2, contractor_id=6, status="in_progress", terms="Billing API"),
        new_contract(by_id, id=4, client_id=2, contractor_id=7, status="in_progress", terms="Mobile client"),
        new_contract(by_id, id=5, client_id=3, contractor_id=8, status="new", terms="Self-defence workshop"),
        new_contract(by_id, id=6, client_id=3, contractor_id=7, status="in_progress", terms="Data migration"),
        new_contract(by_id, id=7, client_id=4, contractor_id=7, status="in_progress", terms="Landing page"),
        new_contract(by_id, id=8, client_id=4, contractor_id=6, status="in_progress", terms="Search tuning"),
        new_contract(by_id, id=9, client_id=4, contractor_id=8, status="in_progress", terms="Event security"),
    ]

    jobs = [
        JobRecord(1, 1, Decimal("200"), "Compose intro jingle"),
        JobRecord(2, 2, Decimal("201"), "Checkout wireframes"),
        JobRecord(3, 3, Decimal("202"), "Invoice endpoint"),
        JobRecord(4, 4, Decimal("200"), "Login screen"),
        JobRecord(5, 7, Decimal("200"), "Hero section"),
        JobRecord(6, 7, Decimal("2020"), "Landing page build", True, datetime(2020, 8, 15, 19, 11, 26)),
        JobRecord(7, 7, Decimal("200"), "Analytics wiring", True, datetime(2020, 8, 15, 19, 11, 26)),
        JobRecord(8, 6, Decimal("200"), "Schema mapping", True, datetime(2020, 8, 16, 19, 11, 26)),
        JobRecord(9, 5, Decimal("200"), "Workshop plan", True, datetime(2020, 8, 17, 19, 11, 26)),
        JobRecord(10, 1, Decimal("200"), "Jingle revisions", True, datetime(2020, 8, 17, 19, 11, 26)),
        JobRecord(11, 2, Decimal("21"), "Payment form polish", True, datetime(2020, 8, 10, 19, 11, 26)),
        JobRecord(12, 3, Decimal("21"), "Webhook retries", True, datetime(2020, 8, 15, 19, 11, 26)),
        JobRecord(13, 3, Decimal("121"), "Rate limiting", True, datetime(2020, 8, 15, 19, 11, 26)),
        JobRecord(14, 3, Decimal("121"), "Audit trail", True, datetime(2020, 8, 14, 23, 11, 26)),
    ]
    return profiles, contracts, jobs


def seed_demo_data(db: DatabaseClient) -> None:
    profiles, contracts, jobs = demo_ledger()
    load_ledger(db, profiles=profiles, contracts=contracts, jobs=jobs)
