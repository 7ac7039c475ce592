# This file holds the SQLAlchemy types used to bind and read ledger columns in textual SQL.
# It exists because SQLite stores timestamps as text and has no native decimal.
# Typed bind parameters keep the same SQL portable between SQLite and PostgreSQL.

from __future__ import annotations

from sqlalchemy import Boolean, DateTime, Numeric, bindparam
from sqlalchemy.sql.elements import BindParameter

MONEY = Numeric(12, 2)
TIMESTAMP = DateTime()
FLAG = Boolean()

JOB_RESULT_TYPES = {"paid": FLAG, "payment_date": TIMESTAMP}


def money_param(name: str) -> BindParameter:
    return bindparam(name, type_=MONEY)


def timestamp_param(name: str) -> BindParameter:
    return bindparam(name, type_=TIMESTAMP)


def flag_param(name: str) -> BindParameter:
    return bindparam(name, type_=FLAG)
