"""
Storage port for expense records.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from spendwise.models.expense import ExpenseCategory


@dataclass(frozen=True)
class ExpenseRecord:
    """Backend-independent snapshot of one expense."""

    id: str
    owner_id: str
    title: str
    amount: Decimal
    category: ExpenseCategory
    date: date
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ExpenseStore(ABC):
    """Base class for expense storage backends.

    Every method is scoped to an owner: records belonging to someone else
    behave exactly like records that don't exist.
    """

    @abstractmethod
    def list_for_owner(
        self,
        owner_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None
    ) -> List[ExpenseRecord]:
        """Return the owner's expenses, optionally bounded (inclusive) by date"""
        pass

    @abstractmethod
    def get(self, owner_id: str, expense_id: str) -> Optional[ExpenseRecord]:
        pass

    @abstractmethod
    def add(self, owner_id: str, fields: Dict[str, Any]) -> ExpenseRecord:
        """
        Persist a new expense.
        fields should have: title, amount, category, date and optionally note
        """
        pass

    @abstractmethod
    def update(
        self,
        owner_id: str,
        expense_id: str,
        changes: Dict[str, Any]
    ) -> Optional[ExpenseRecord]:
        """Apply a partial update; None if the expense isn't the owner's"""
        pass

    @abstractmethod
    def delete(self, owner_id: str, expense_id: str) -> bool:
        pass
