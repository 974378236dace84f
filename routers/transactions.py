from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional

from aggregation import resolve_month, month_bounds
from common.enum import TransactionTypeEnum
from db import get_db
from schemas import (
    TransactionCreate, TransactionResponse,
    TransactionListResponse, TransactionSummary,
)
from services import (
    InvalidEntryError, create_transaction as create_transaction_entry,
    list_transactions as list_transaction_entries, summarize_transactions,
)

router = APIRouter()


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
        transaction_data: TransactionCreate,
        response: Response,
        db: Session = Depends(get_db)
):
    """Create a new income or expense transaction"""
    try:
        transaction = create_transaction_entry(db, transaction_data)
    except InvalidEntryError as error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)) from error

    response.headers["Location"] = f"/api/tx/{transaction.id}"
    return TransactionResponse.model_validate(transaction)


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
        year: Optional[int] = Query(None, ge=1, le=9998),
        month: Optional[int] = Query(None, ge=1, le=12),
        transaction_type: Optional[TransactionTypeEnum] = Query(None, alias="type"),
        db: Session = Depends(get_db)
):
    """List a month's transactions, newest first"""
    start, end = month_bounds(*resolve_month(year, month))
    transactions = list_transaction_entries(db, start, end, transaction_type)
    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in transactions]
    )


@router.get("/summary", response_model=TransactionSummary)
async def get_summary(
        year: Optional[int] = Query(None, ge=1, le=9998),
        month: Optional[int] = Query(None, ge=1, le=12),
        db: Session = Depends(get_db)
):
    """Income, expense, balance and spent percentage for a month"""
    start, end = month_bounds(*resolve_month(year, month))
    summary = summarize_transactions(db, start, end)
    return TransactionSummary(
        income=summary.total_income,
        expense=summary.total_expense,
        balance=summary.balance,
        spent_percent=summary.spent_percent,
    )
