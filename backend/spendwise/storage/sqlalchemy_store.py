"""
SQLAlchemy-backed expense store.
"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from spendwise.models.expense import Expense
from spendwise.storage.base import ExpenseRecord, ExpenseStore


def to_record(expense: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=str(expense.id),
        owner_id=str(expense.user_id),
        title=expense.title,
        amount=expense.amount,
        category=expense.category,
        date=expense.date,
        note=expense.note,
        created_at=expense.created_at,
        updated_at=expense.updated_at,
    )


class SqlExpenseStore(ExpenseStore):
    """Expense store over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, owner_id: str, expense_id: str) -> Optional[Expense]:
        return self.db.query(Expense).filter(
            Expense.id == expense_id,
            Expense.user_id == owner_id
        ).first()

    def list_for_owner(
        self,
        owner_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None
    ) -> List[ExpenseRecord]:
        query = self.db.query(Expense).filter(Expense.user_id == owner_id)
        if start:
            query = query.filter(Expense.date >= start)
        if end:
            query = query.filter(Expense.date <= end)
        return [to_record(e) for e in query.all()]

    def get(self, owner_id: str, expense_id: str) -> Optional[ExpenseRecord]:
        expense = self._owned(owner_id, expense_id)
        return to_record(expense) if expense else None

    def add(self, owner_id: str, fields: Dict[str, Any]) -> ExpenseRecord:
        expense = Expense(
            id=fields.get("id") or str(uuid.uuid4()),
            user_id=owner_id,
            title=fields["title"],
            amount=fields["amount"],
            category=fields["category"],
            date=fields["date"],
            note=fields.get("note"),
        )
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)
        return to_record(expense)

    def update(
        self,
        owner_id: str,
        expense_id: str,
        changes: Dict[str, Any]
    ) -> Optional[ExpenseRecord]:
        expense = self._owned(owner_id, expense_id)
        if not expense:
            return None

        for field, value in changes.items():
            setattr(expense, field, value)

        self.db.commit()
        self.db.refresh(expense)
        return to_record(expense)

    def delete(self, owner_id: str, expense_id: str) -> bool:
        expense = self._owned(owner_id, expense_id)
        if not expense:
            return False

        self.db.delete(expense)
        self.db.commit()
        return True
