from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional

from aggregation import resolve_month, month_bounds
from db import get_db
from schemas import IncomeCreate, IncomeResponse, IncomeListResponse
from services import InvalidEntryError, create_income as create_income_entry, list_incomes as list_income_entries

router = APIRouter()


@router.post("", response_model=IncomeResponse, status_code=status.HTTP_201_CREATED)
async def create_income(
        income_data: IncomeCreate,
        response: Response,
        db: Session = Depends(get_db)
):
    """Record an income"""
    try:
        income = create_income_entry(db, income_data)
    except InvalidEntryError as error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)) from error

    response.headers["Location"] = f"/api/incomes/{income.id}"
    return IncomeResponse.model_validate(income)


@router.get("", response_model=IncomeListResponse)
async def list_incomes(
        year: Optional[int] = Query(None, ge=1, le=9998),
        month: Optional[int] = Query(None, ge=1, le=12),
        db: Session = Depends(get_db)
):
    start, end = month_bounds(*resolve_month(year, month))
    return IncomeListResponse(
        items=[IncomeResponse.model_validate(i) for i in list_income_entries(db, start, end)]
    )
