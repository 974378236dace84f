from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from aggregation import resolve_month, month_bounds
from db import get_db
from schemas import LedgerSummary, CategoryAmountResponse
from services import summarize_ledger

router = APIRouter()


@router.get("", response_model=LedgerSummary)
async def get_summary(
        year: Optional[int] = Query(None, ge=1, le=9998),
        month: Optional[int] = Query(None, ge=1, le=12),
        db: Session = Depends(get_db)
):
    """Totals, remaining balance and spending per category for a month"""
    start, end = month_bounds(*resolve_month(year, month))
    summary = summarize_ledger(db, start, end)

    return LedgerSummary(
        total_income=summary.total_income,
        total_expenses=summary.total_expense,
        remaining_balance=summary.balance,
        spent_percentage=summary.spent_percent,
        category_breakdown=[
            CategoryAmountResponse(category=c.category, amount=c.amount)
            for c in summary.category_breakdown
        ]
    )
