from sqlalchemy import Column, Integer, String, Numeric, Date, Enum, CheckConstraint, Index

from db import Base
from common.enum import TransactionTypeEnum

AMOUNT_PRECISION = 10
AMOUNT_SCALE = 2

SOURCE_MAX_LENGTH = 100
CATEGORY_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 200


def _amount_column():
    return Column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE, asdecimal=True), nullable=False)


class Transaction(Base):
    """Unified ledger row: the kind of entry is carried by the ``type`` column."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        Index("ix_transactions_occurred_on", "occurred_on"),
        Index("ix_transactions_occurred_on_type", "occurred_on", "type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    occurred_on = Column(Date, nullable=False)
    transaction_type = Column(
        "type",
        Enum(
            TransactionTypeEnum,
            name="transaction_type",
            native_enum=False,
            create_constraint=True,
            length=10,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )
    amount = _amount_column()
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=True)


class Income(Base):
    __tablename__ = "incomes"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_incomes_amount_positive"),
        Index("ix_incomes_date", "date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    amount = _amount_column()
    source = Column(String(SOURCE_MAX_LENGTH), nullable=False)


class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expenses_amount_positive"),
        Index("ix_expenses_date", "date"),
        Index("ix_expenses_date_category", "date", "category"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    amount = _amount_column()
    category = Column(String(CATEGORY_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=False)
