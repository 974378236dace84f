"""Offline variant of the month page: entries live only in this process."""
import logging
import time
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, List

from aggregation import LEDGER_RULE, MonthlySummary, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalIncome:
    id: str
    amount: Decimal
    source: str
    date: date


@dataclass(frozen=True)
class LocalExpense:
    id: str
    amount: Decimal
    category: str
    description: str
    date: date


class LocalLedger:
    """Keeps incomes and expenses in memory with timestamp ids; never talks to a server."""

    def __init__(self) -> None:
        self.incomes: List[LocalIncome] = []
        self.expenses: List[LocalExpense] = []
        self._last_id = 0

    def _next_id(self) -> str:
        # Millisecond timestamps, bumped when two entries land in the same tick
        stamp = max(time.time_ns() // 1_000_000, self._last_id + 1)
        self._last_id = stamp
        return str(stamp)

    def add_income(self, amount, source: str, on: date) -> LocalIncome:
        income = LocalIncome(self._next_id(), Decimal(str(amount)), source, on)
        self.incomes.append(income)
        logger.debug("Local income %s added", income.id)
        return income

    def add_expense(self, amount, category: str, description: str, on: date) -> LocalExpense:
        expense = LocalExpense(self._next_id(), Decimal(str(amount)), category, description, on)
        self.expenses.append(expense)
        logger.debug("Local expense %s added", expense.id)
        return expense

    def summary(self) -> MonthlySummary:
        return summarize(
            (i.amount for i in self.incomes),
            ((e.category, e.amount) for e in self.expenses),
            LEDGER_RULE,
        )

    def spent_percentage(self) -> float:
        """Unrounded spent percentage, 0 when nothing has been earned."""
        summary = self.summary()
        if summary.total_income <= 0:
            return 0.0
        return float(summary.total_expense / summary.total_income * 100)

    def as_summary_payload(self) -> Dict[str, object]:
        """Same shape as ``GET /api/summary`` so the view helpers can render it."""
        summary = self.summary()
        return {
            "totalIncome": float(summary.total_income),
            "totalExpenses": float(summary.total_expense),
            "remainingBalance": float(summary.balance),
            "spentPercentage": self.spent_percentage(),
            "categoryBreakdown": [
                {"category": c.category, "amount": float(c.amount)} for c in summary.category_breakdown
            ],
        }

