"""
In-memory expense store, for tests and for running the pipeline without a database.
"""

import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from spendwise.storage.base import ExpenseRecord, ExpenseStore


class InMemoryExpenseStore(ExpenseStore):

    def __init__(self, records: Optional[List[ExpenseRecord]] = None):
        self._records: Dict[str, ExpenseRecord] = {}
        for record in records or []:
            self._records[record.id] = record

    def list_for_owner(
        self,
        owner_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None
    ) -> List[ExpenseRecord]:
        results = []
        for record in self._records.values():
            if record.owner_id != owner_id:
                continue
            if start and record.date < start:
                continue
            if end and record.date > end:
                continue
            results.append(record)
        return results

    def get(self, owner_id: str, expense_id: str) -> Optional[ExpenseRecord]:
        record = self._records.get(expense_id)
        if record is None or record.owner_id != owner_id:
            return None
        return record

    def add(self, owner_id: str, fields: Dict[str, Any]) -> ExpenseRecord:
        now = datetime.utcnow()
        record = ExpenseRecord(
            id=fields.get("id") or str(uuid.uuid4()),
            owner_id=owner_id,
            title=fields["title"],
            amount=fields["amount"],
            category=fields["category"],
            date=fields["date"],
            note=fields.get("note"),
            created_at=now,
            updated_at=now,
        )
        self._records[record.id] = record
        return record

    def update(
        self,
        owner_id: str,
        expense_id: str,
        changes: Dict[str, Any]
    ) -> Optional[ExpenseRecord]:
        record = self.get(owner_id, expense_id)
        if record is None:
            return None

        record = replace(record, updated_at=datetime.utcnow(), **changes)
        self._records[expense_id] = record
        return record

    def delete(self, owner_id: str, expense_id: str) -> bool:
        if self.get(owner_id, expense_id) is None:
            return False
        del self._records[expense_id]
        return True
