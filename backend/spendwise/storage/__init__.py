from spendwise.storage.base import ExpenseRecord, ExpenseStore
from spendwise.storage.memory import InMemoryExpenseStore
from spendwise.storage.sqlalchemy_store import SqlExpenseStore

__all__ = [
    "ExpenseRecord",
    "ExpenseStore",
    "InMemoryExpenseStore",
    "SqlExpenseStore",
]
