import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import List, Optional

from sqlalchemy.orm import Session

from aggregation import MonthlySummary, SpentRule, LEDGER_RULE, TRANSACTION_RULE, summarize
from common.enum import TransactionTypeEnum
from models import (
    Transaction, Income, Expense,
    AMOUNT_PRECISION, AMOUNT_SCALE,
    SOURCE_MAX_LENGTH, CATEGORY_MAX_LENGTH, DESCRIPTION_MAX_LENGTH,
)
from schemas import TransactionCreate, IncomeCreate, ExpenseCreate

logger = logging.getLogger(__name__)

CENT = Decimal(1).scaleb(-AMOUNT_SCALE)
AMOUNT_LIMIT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)


class InvalidEntryError(ValueError):
    """Raised when a new entry breaks one of the field rules."""


# ---------------- VALIDATION ---------------- #

def normalize_amount(amount) -> Decimal:
    """Round to cents and require a strictly positive value that fits the column."""
    if amount is None:
        raise InvalidEntryError("Amount must be > 0")
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as error:
        raise InvalidEntryError("Amount must be a number") from error
    if not value.is_finite():
        raise InvalidEntryError("Amount must be a number")
    # Sign and size first: quantize overflows on values wider than the decimal context
    if value <= 0:
        raise InvalidEntryError("Amount must be > 0")
    if value >= AMOUNT_LIMIT:
        raise InvalidEntryError(f"Amount must be < {AMOUNT_LIMIT}")
    value = value.quantize(CENT, rounding=ROUND_HALF_UP)
    if value <= 0:
        raise InvalidEntryError("Amount must be > 0")
    if value >= AMOUNT_LIMIT:
        raise InvalidEntryError(f"Amount must be < {AMOUNT_LIMIT}")
    return value


def require_date(value: Optional[date], field: str = "Date") -> date:
    if value is None:
        raise InvalidEntryError(f"{field} is required")
    return value


def require_text(value: Optional[str], field: str, max_length: int) -> str:
    text = (value or "").strip()
    if not text:
        raise InvalidEntryError(f"{field} is required")
    if len(text) > max_length:
        raise InvalidEntryError(f"{field} must be at most {max_length} characters")
    return text


def optional_text(value: Optional[str], field: str, max_length: int) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return require_text(value, field, max_length)


def parse_transaction_type(value: Optional[str]) -> TransactionTypeEnum:
    # Exact match only: "income" is rejected like any other unknown value
    for member in TransactionTypeEnum:
        if value == member.value:
            return member
    raise InvalidEntryError("Type must be 'Income' or 'Expense'")


# ---------------- UNIFIED TRANSACTIONS ---------------- #

def create_transaction(db: Session, data: TransactionCreate) -> Transaction:
    transaction_type = parse_transaction_type(data.transaction_type)
    transaction = Transaction(
        occurred_on=require_date(data.occurred_on, "OccurredOn"),
        transaction_type=transaction_type,
        amount=normalize_amount(data.amount),
        description=optional_text(data.description, "Description", DESCRIPTION_MAX_LENGTH),
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info("Created %s transaction %s for %s", transaction_type.value, transaction.id, transaction.amount)
    return transaction


def list_transactions(
        db: Session,
        start: date,
        end: date,
        transaction_type: Optional[TransactionTypeEnum] = None
) -> List[Transaction]:
    """Transactions dated in ``[start, end)``, newest first."""
    query = db.query(Transaction).filter(
        Transaction.occurred_on >= start,
        Transaction.occurred_on < end
    )
    if transaction_type:
        query = query.filter(Transaction.transaction_type == transaction_type)
    transactions = query.order_by(
        Transaction.occurred_on.desc(),
        Transaction.id.desc()
    ).all()
    logger.debug("Found %s transactions in [%s, %s)", len(transactions), start, end)
    return transactions


def summarize_transactions(
        db: Session,
        start: date,
        end: date,
        rule: SpentRule = TRANSACTION_RULE
) -> MonthlySummary:
    transactions = list_transactions(db, start, end)
    return summarize(
        (t.amount for t in transactions if t.transaction_type == TransactionTypeEnum.INCOME),
        ((None, t.amount) for t in transactions if t.transaction_type == TransactionTypeEnum.EXPENSE),
        rule,
    )


# ---------------- SPLIT LEDGER ---------------- #

def create_income(db: Session, data: IncomeCreate) -> Income:
    income = Income(
        date=require_date(data.date),
        amount=normalize_amount(data.amount),
        source=require_text(data.source, "Source", SOURCE_MAX_LENGTH),
    )
    db.add(income)
    db.commit()
    db.refresh(income)
    logger.info("Created income %s from %s", income.id, income.source)
    return income


def create_expense(db: Session, data: ExpenseCreate) -> Expense:
    expense = Expense(
        date=require_date(data.date),
        amount=normalize_amount(data.amount),
        category=require_text(data.category, "Category", CATEGORY_MAX_LENGTH),
        description=require_text(data.description, "Description", DESCRIPTION_MAX_LENGTH),
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    logger.info("Created expense %s in %s", expense.id, expense.category)
    return expense


def list_incomes(db: Session, start: date, end: date) -> List[Income]:
    return db.query(Income).filter(
        Income.date >= start,
        Income.date < end
    ).order_by(Income.date.desc(), Income.id.desc()).all()


def list_expenses(db: Session, start: date, end: date) -> List[Expense]:
    return db.query(Expense).filter(
        Expense.date >= start,
        Expense.date < end
    ).order_by(Expense.date.desc(), Expense.id.desc()).all()


def summarize_ledger(
        db: Session,
        start: date,
        end: date,
        rule: SpentRule = LEDGER_RULE
) -> MonthlySummary:
    incomes = list_incomes(db, start, end)
    expenses = list_expenses(db, start, end)
    logger.debug("Summarising %s incomes and %s expenses in [%s, %s)", len(incomes), len(expenses), start, end)
    return summarize(
        (i.amount for i in incomes),
        ((e.category, e.amount) for e in expenses),
        rule,
    )
