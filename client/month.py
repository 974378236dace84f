import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import httpx

from aggregation import current_month

from .api import ApiError, MoneyApi

logger = logging.getLogger(__name__)


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move ``delta`` months forward (or back), rolling over year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


@dataclass(frozen=True)
class MonthCursor:
    year: int
    month: int

    @classmethod
    def today(cls) -> "MonthCursor":
        return cls(*current_month())

    def shifted(self, delta: int) -> "MonthCursor":
        return MonthCursor(*shift_month(self.year, self.month, delta))

    def previous(self) -> "MonthCursor":
        return self.shifted(-1)

    def next(self) -> "MonthCursor":
        return self.shifted(1)

    @property
    def label(self) -> str:
        return date(self.year, self.month, 1).strftime("%B %Y")


@dataclass
class MonthData:
    """Server-backed state for one selected month.

    ``load`` issues the three reads concurrently and only replaces the held
    data when all of them succeed.
    """

    api: MoneyApi
    cursor: MonthCursor = field(default_factory=MonthCursor.today)
    incomes: List[Dict[str, Any]] = field(default_factory=list)
    expenses: List[Dict[str, Any]] = field(default_factory=list)
    summary: Optional[Dict[str, Any]] = None
    loading: bool = False
    error: Optional[str] = None

    async def load(self) -> None:
        self.loading = True
        self.error = None
        year, month = self.cursor.year, self.cursor.month
        try:
            incomes, expenses, summary = await asyncio.gather(
                self.api.get_incomes(year, month),
                self.api.get_expenses(year, month),
                self.api.get_summary(year, month),
            )
        except (ApiError, httpx.HTTPError) as error:
            logger.warning("Loading %s-%02d failed: %s", year, month, error)
            self.error = str(error) or "Failed to load"
        else:
            self.incomes = incomes["items"]
            self.expenses = expenses["items"]
            self.summary = summary
        finally:
            self.loading = False

    async def select(self, cursor: MonthCursor) -> None:
        self.cursor = cursor
        await self.load()

    async def previous(self) -> None:
        await self.select(self.cursor.previous())

    async def next(self) -> None:
        await self.select(self.cursor.next())

    async def add_income(self, amount: float, source: str, on: date) -> None:
        await self.api.add_income(amount, source, on)
        await self.load()

    async def add_expense(self, amount: float, category: str, description: str, on: date) -> None:
        await self.api.add_expense(amount, category, description, on)
        await self.load()
