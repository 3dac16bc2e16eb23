"""
Database models package.
"""

from spendwise.models.expense import Expense, ExpenseCategory
from spendwise.models.user import User

__all__ = [
    "Expense",
    "ExpenseCategory",
    "User",
]
