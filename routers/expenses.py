from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional

from aggregation import resolve_month, month_bounds
from db import get_db
from schemas import ExpenseCreate, ExpenseResponse, ExpenseListResponse
from services import InvalidEntryError, create_expense as create_expense_entry, list_expenses as list_expense_entries

router = APIRouter()


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
        expense_data: ExpenseCreate,
        response: Response,
        db: Session = Depends(get_db)
):
    """Record an expense"""
    try:
        expense = create_expense_entry(db, expense_data)
    except InvalidEntryError as error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)) from error

    response.headers["Location"] = f"/api/expenses/{expense.id}"
    return ExpenseResponse.model_validate(expense)


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
        year: Optional[int] = Query(None, ge=1, le=9998),
        month: Optional[int] = Query(None, ge=1, le=12),
        db: Session = Depends(get_db)
):
    start, end = month_bounds(*resolve_month(year, month))
    return ExpenseListResponse(
        items=[ExpenseResponse.model_validate(e) for e in list_expense_entries(db, start, end)]
    )
