from .api import ApiError, MoneyApi
from .month import MonthCursor, MonthData, shift_month
from .standalone import LocalLedger

__all__ = ["ApiError", "MoneyApi", "MonthCursor", "MonthData", "shift_month", "LocalLedger"]
