import enum


class TransactionTypeEnum(str, enum.Enum):
    INCOME = "Income"
    EXPENSE = "Expense"
