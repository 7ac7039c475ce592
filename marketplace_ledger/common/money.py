"""
Decimal helpers for balances, prices, and the deposit cap rule.
Storage drivers hand back floats (SQLite) or Decimals (PostgreSQL); everything is normalized to cents here.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Final

CENT: Final[Decimal] = Decimal("0.01")
DEFAULT_DEPOSIT_CAP_RATIO: Final[Decimal] = Decimal("0.25")


def to_money(value: Any) -> Decimal:
    """Convert a stored numeric value into a cent-quantized Decimal."""

    if value is None:
        return Decimal("0.00")
    if isinstance(value, Decimal):
        amount = value
    else:
        # str() first so floats like 0.1 do not carry binary noise into Decimal.
        amount = Decimal(str(value))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def total_owed(prices: Iterable[Any]) -> Decimal:
    return to_money(sum((to_money(price) for price in prices), Decimal("0")))


def max_deposit(owed: Decimal, ratio: Decimal = DEFAULT_DEPOSIT_CAP_RATIO) -> Decimal:
    """Largest whole-cent deposit allowed for a client that currently owes `owed`."""

    return (owed * ratio).quantize(CENT, rounding=ROUND_FLOOR)


def exceeds_deposit_cap(
    amount: Decimal, owed: Decimal, ratio: Decimal = DEFAULT_DEPOSIT_CAP_RATIO
) -> bool:
    # Compared against the exact product; the cent-rounded cap is for display only.
    return amount > owed * ratio


def parse_deposit_amount(raw: Any) -> Decimal:
    """Parse a client-supplied deposit amount.

    Accepts numbers and numeric strings. Booleans, blanks, non-finite values
    and anything not strictly positive raise ``ValueError``.
    """

    if raw is None or isinstance(raw, bool):
        raise ValueError("No amount specified.")
    text = str(raw).strip()
    if not text:
        raise ValueError("No amount specified.")
    try:
        amount = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {raw!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {raw!r}")
    if amount <= 0:
        raise ValueError("Deposit amount must be greater than zero.")
    if amount.quantize(CENT, rounding=ROUND_HALF_UP) <= 0:
        raise ValueError("Deposit amount must be at least $0.01.")
    return amount


def format_ratio(ratio: Decimal) -> str:
    """Render a cap ratio such as 0.25 as ``25%``."""

    percent = format(ratio * 100, "f")
    if "." in percent:
        percent = percent.rstrip("0").rstrip(".")
    return f"{percent}%"


def format_money(amount: Decimal) -> str:
    return f"${to_money(amount):.2f}"
