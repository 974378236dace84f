"""Monthly summary arithmetic, independent of the database."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from aggregation import (
    LEDGER_RULE,
    TRANSACTION_RULE,
    CategoryAmount,
    current_month,
    month_bounds,
    resolve_month,
    spent_percent,
    summarize,
)


def test_month_bounds_are_half_open_calendar_months() -> None:
    assert month_bounds(2024, 3) == (date(2024, 3, 1), date(2024, 4, 1))
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 3, 1))


def test_month_bounds_roll_december_into_next_year() -> None:
    assert month_bounds(2023, 12) == (date(2023, 12, 1), date(2024, 1, 1))


@pytest.mark.parametrize("month", [0, 13])
def test_month_bounds_reject_invalid_month(month: int) -> None:
    with pytest.raises(ValueError):
        month_bounds(2024, month)


def test_current_month_uses_given_clock() -> None:
    assert current_month(datetime(2025, 1, 31, 23, 59, tzinfo=timezone.utc)) == (2025, 1)


def test_resolve_month_keeps_explicit_values() -> None:
    assert resolve_month(2020, 7) == (2020, 7)
    year, month = resolve_month(None, 7)
    assert month == 7
    assert year == datetime.now(timezone.utc).year


def test_example_month_summary() -> None:
    summary = summarize([Decimal("1000.00")], [("Food", Decimal("250.00"))], LEDGER_RULE)

    assert summary.total_income == Decimal("1000.00")
    assert summary.total_expense == Decimal("250.00")
    assert summary.balance == Decimal("750.00")
    assert summary.spent_percent == Decimal("25.0")
    assert summary.category_breakdown == (CategoryAmount("Food", Decimal("250.00")),)


def test_empty_month_is_all_zero() -> None:
    summary = summarize([], [], LEDGER_RULE)

    assert summary.total_income == 0
    assert summary.total_expense == 0
    assert summary.balance == 0
    assert summary.spent_percent == 0
    assert summary.category_breakdown == ()


def test_breakdown_groups_and_sums_to_total_expense() -> None:
    expenses = [
        ("Food", Decimal("12.10")),
        ("Rent", Decimal("800.00")),
        ("Food", Decimal("7.90")),
        ("Transport", Decimal("20.00")),
    ]
    summary = summarize([Decimal("2000")], expenses)

    by_category = {row.category: row.amount for row in summary.category_breakdown}
    assert by_category == {
        "Food": Decimal("20.00"),
        "Rent": Decimal("800.00"),
        "Transport": Decimal("20.00"),
    }
    assert sum(by_category.values()) == summary.total_expense
    assert summary.total_income - summary.total_expense == summary.balance
    # largest first, ties by name
    assert [row.category for row in summary.category_breakdown] == ["Rent", "Food", "Transport"]


def test_expenses_without_category_are_grouped() -> None:
    summary = summarize([], [(None, Decimal("5")), (None, Decimal("6"))])

    assert summary.category_breakdown == (CategoryAmount("Uncategorized", Decimal("11")),)


def test_zero_income_policies_differ_per_rule() -> None:
    assert spent_percent(Decimal("0"), Decimal("40"), TRANSACTION_RULE) == 100
    assert spent_percent(Decimal("0"), Decimal("40"), LEDGER_RULE) == 0


def test_transaction_rule_rounds_to_whole_percent_and_clamps() -> None:
    assert spent_percent(Decimal("300"), Decimal("100"), TRANSACTION_RULE) == Decimal("33")
    assert spent_percent(Decimal("100"), Decimal("250"), TRANSACTION_RULE) == Decimal("100")


def test_ledger_rule_keeps_one_decimal_without_clamp() -> None:
    assert spent_percent(Decimal("300"), Decimal("100"), LEDGER_RULE) == Decimal("33.3")
    assert spent_percent(Decimal("100"), Decimal("250"), LEDGER_RULE) == Decimal("250.0")


def test_rounding_is_half_to_even() -> None:
    # 1/8 = 12.5% -> 12 ; 3/8 = 37.5% -> 38
    assert spent_percent(Decimal("8"), Decimal("1"), TRANSACTION_RULE) == Decimal("12")
    assert spent_percent(Decimal("8"), Decimal("3"), TRANSACTION_RULE) == Decimal("38")
