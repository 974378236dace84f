from pydantic import BaseModel, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Annotated
from datetime import date, datetime
from decimal import Decimal


# Decimal in Python, plain number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Module-level alias: a field named ``date`` would shadow the type in its own annotation
OptionalDate = Optional[date]


def to_date(value):
    """Drop the time of day from datetimes and ISO timestamps."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class ApiModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Unified transaction schemas
class TransactionCreate(ApiModel):
    # Presence and values are checked by the service so the client gets the plain-text 400
    occurred_on: OptionalDate = None
    transaction_type: Optional[str] = Field(None, alias="type")
    amount: Optional[Decimal] = None
    description: Optional[str] = None

    @field_validator("occurred_on", mode="before")
    @classmethod
    def date_only(cls, value):
        return to_date(value)


class TransactionResponse(ApiModel):
    id: int
    occurred_on: date
    transaction_type: str = Field(..., alias="type")
    amount: Money
    description: Optional[str]

    @field_validator("transaction_type", mode="before")
    @classmethod
    def enum_value(cls, value):
        return getattr(value, "value", value)


class TransactionListResponse(ApiModel):
    items: List[TransactionResponse]


class TransactionSummary(ApiModel):
    income: Money
    expense: Money
    balance: Money
    spent_percent: Money


# Split ledger schemas
class IncomeCreate(ApiModel):
    date: OptionalDate = None
    amount: Optional[Decimal] = None
    source: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def date_only(cls, value):
        return to_date(value)


class IncomeResponse(ApiModel):
    id: int
    amount: Money
    source: str
    date: date


class IncomeListResponse(ApiModel):
    items: List[IncomeResponse]


class ExpenseCreate(ApiModel):
    date: OptionalDate = None
    amount: Optional[Decimal] = None
    category: Optional[str] = None
    description: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def date_only(cls, value):
        return to_date(value)


class ExpenseResponse(ApiModel):
    id: int
    amount: Money
    category: str
    description: str
    date: date


class ExpenseListResponse(ApiModel):
    items: List[ExpenseResponse]


class CategoryAmountResponse(ApiModel):
    category: str
    amount: Money


class LedgerSummary(ApiModel):
    total_income: Money
    total_expenses: Money
    remaining_balance: Money
    spent_percentage: Money
    category_breakdown: List[CategoryAmountResponse]
