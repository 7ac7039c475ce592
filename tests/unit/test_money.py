"""
Unit tests for money helpers.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from decimal import Decimal

import pytest

from marketplace_ledger.common import money


def test_to_money_normalizes_driver_values() -> None:
    assert money.to_money(0.1) == Decimal("0.10")
    assert money.to_money(331.61000000000001) == Decimal("331.61")
    assert money.to_money(None) == Decimal("0.00")
    assert money.to_money(Decimal("2.005")) == Decimal("2.01")


def test_total_owed_and_cap() -> None:
    owed = money.total_owed([202, 200.0, Decimal("0")])
    assert owed == Decimal("402.00")
    assert money.max_deposit(owed) == Decimal("100.50")
    assert money.max_deposit(Decimal("201"), Decimal("0.25")) == Decimal("50.25")


def test_cap_never_rounds_up() -> None:
    owed = Decimal("201.10")
    assert money.max_deposit(owed) == Decimal("50.27")
    assert money.exceeds_deposit_cap(Decimal("50.28"), owed)
    assert money.exceeds_deposit_cap(Decimal("50.2751"), owed)
    assert not money.exceeds_deposit_cap(Decimal("50.275"), owed)
    assert not money.exceeds_deposit_cap(Decimal("50.27"), owed)


@pytest.mark.parametrize("raw,expected", [(50, Decimal("50")), ("12.5", Decimal("12.5")), (" 7 ", Decimal("7"))])
def test_parse_deposit_amount_accepts_numbers(raw: object, expected: Decimal) -> None:
    assert money.parse_deposit_amount(raw) == expected


@pytest.mark.parametrize(
    "raw,message",
    [
        (None, "No amount specified"),
        ("", "No amount specified"),
        (True, "No amount specified"),
        ("abc", "Invalid amount"),
        ("NaN", "Invalid amount"),
        ("Infinity", "Invalid amount"),
        (0, "greater than zero"),
        (-3, "greater than zero"),
        ("0.001", "at least"),
    ],
)
def test_parse_deposit_amount_rejects(raw: object, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        money.parse_deposit_amount(raw)


def test_parse_keeps_precision_for_cap_comparison() -> None:
    # 100.504 is compared to the cap before rounding to cents.
    assert money.parse_deposit_amount("100.504") > Decimal("100.50")


def test_format_helpers() -> None:
    assert money.format_money(Decimal("5")) == "$5.00"
    assert money.format_ratio(Decimal("0.25")) == "25%"
    assert money.format_ratio(Decimal("0.125")) == "12.5%"
    assert money.format_ratio(Decimal("1")) == "100%"
