"""Monthly figures computed from a date-bounded set of entries.

Everything here is pure: callers hand over amounts already fetched from the
store, and get back an immutable ``MonthlySummary``.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Iterable, Optional, Tuple

ZERO = Decimal("0")
HUNDRED = Decimal("100")
UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class SpentRule:
    """How total expense is expressed as a share of total income."""

    zero_income_percent: Decimal
    places: int
    clamp: bool


# /api/tx/summary: no income means everything is spent; whole percents, capped at 100
TRANSACTION_RULE = SpentRule(zero_income_percent=HUNDRED, places=0, clamp=True)
# /api/summary: no income reports 0; one decimal, may exceed 100
LEDGER_RULE = SpentRule(zero_income_percent=ZERO, places=1, clamp=False)


@dataclass(frozen=True)
class CategoryAmount:
    category: str
    amount: Decimal


@dataclass(frozen=True)
class MonthlySummary:
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    spent_percent: Decimal
    category_breakdown: Tuple[CategoryAmount, ...] = ()


def current_month(now: Optional[datetime] = None) -> Tuple[int, int]:
    now = now or datetime.now(timezone.utc)
    return now.year, now.month


def resolve_month(year: Optional[int], month: Optional[int]) -> Tuple[int, int]:
    """Fill a missing year and/or month from today's UTC date."""
    default_year, default_month = current_month()
    return (year if year is not None else default_year,
            month if month is not None else default_month)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """Half-open ``[start, end)`` covering one calendar month."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end


def spent_percent(total_income: Decimal, total_expense: Decimal, rule: SpentRule) -> Decimal:
    if total_income <= 0:
        return rule.zero_income_percent
    exponent = Decimal(1).scaleb(-rule.places)
    percent = (total_expense / total_income * HUNDRED).quantize(exponent, rounding=ROUND_HALF_EVEN)
    if rule.clamp:
        percent = min(HUNDRED, percent)
    return percent


def category_breakdown(expenses: Iterable[Tuple[Optional[str], Decimal]]) -> Tuple[CategoryAmount, ...]:
    totals = defaultdict(lambda: ZERO)
    for category, amount in expenses:
        totals[category or UNCATEGORIZED] += amount
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return tuple(CategoryAmount(category=name, amount=amount) for name, amount in ordered)


def summarize(
        incomes: Iterable[Decimal],
        expenses: Iterable[Tuple[Optional[str], Decimal]],
        rule: SpentRule = LEDGER_RULE,
) -> MonthlySummary:
    """Build the summary for one month.

    ``incomes`` is a sequence of amounts, ``expenses`` a sequence of
    ``(category, amount)`` pairs; entries without a category are grouped
    under ``Uncategorized``.
    """
    expenses = list(expenses)
    total_income = sum(incomes, ZERO)
    total_expense = sum((amount for _, amount in expenses), ZERO)
    return MonthlySummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        spent_percent=spent_percent(total_income, total_expense, rule),
        category_breakdown=category_breakdown(expenses),
    )
