"""
Single-expense CRUD on top of the storage port.
"""

from spendwise.errors import NotFoundError
from spendwise.schemas.expense import ExpenseCreate, ExpenseUpdate
from spendwise.storage.base import ExpenseRecord, ExpenseStore

# Columns that may be cleared by sending null
NULLABLE_FIELDS = {"note"}


def get_expense(store: ExpenseStore, owner_id: str, expense_id: str) -> ExpenseRecord:
    record = store.get(owner_id, expense_id)
    if record is None:
        raise NotFoundError("Expense not found")
    return record


def create_expense(store: ExpenseStore, owner_id: str, data: ExpenseCreate) -> ExpenseRecord:
    return store.add(owner_id, data.model_dump())


def update_expense(
    store: ExpenseStore,
    owner_id: str,
    expense_id: str,
    data: ExpenseUpdate
) -> ExpenseRecord:
    """Apply only the fields the caller actually sent."""
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }
    if not changes:
        return get_expense(store, owner_id, expense_id)

    record = store.update(owner_id, expense_id, changes)
    if record is None:
        raise NotFoundError("Expense not found")
    return record


def delete_expense(store: ExpenseStore, owner_id: str, expense_id: str) -> None:
    if not store.delete(owner_id, expense_id):
        raise NotFoundError("Expense not found")
