"""
Filtering, sorting and pagination of a user's expenses.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Generic, List, Optional, TypeVar

from spendwise.errors import ValidationError
from spendwise.models.expense import ExpenseCategory
from spendwise.storage.base import ExpenseRecord, ExpenseStore

logger = logging.getLogger(__name__)

SORT_FIELDS = ("date", "amount", "title")
SORT_ORDERS = ("asc", "desc")
MAX_LIMIT = 100

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class ExpenseFilter:
    """Query parameters for listing expenses. Built fresh for every query."""

    category: Optional[str] = None
    search: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort_by: str = "date"
    sort_order: str = "desc"
    page: int = 1
    limit: int = 10

    def validate(self) -> "ExpenseFilter":
        """Raise ValidationError naming the first bad field; return self otherwise."""
        if self.sort_by not in SORT_FIELDS:
            raise ValidationError(
                f"sort_by must be one of {', '.join(SORT_FIELDS)}", field="sort_by"
            )
        if self.sort_order not in SORT_ORDERS:
            raise ValidationError("sort_order must be 'asc' or 'desc'", field="sort_order")
        if not _is_int(self.page) or self.page < 1:
            raise ValidationError("page must be an integer >= 1", field="page")
        if not _is_int(self.limit) or not 1 <= self.limit <= MAX_LIMIT:
            raise ValidationError(f"limit must be an integer between 1 and {MAX_LIMIT}", field="limit")
        if self.category is not None:
            try:
                ExpenseCategory(self.category)
            except ValueError:
                raise ValidationError(f"Invalid category: {self.category}", field="category")
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def matches(self, record: ExpenseRecord) -> bool:
        if self.category is not None and record.category != ExpenseCategory(self.category):
            return False
        if self.start_date and record.date < self.start_date:
            return False
        if self.end_date and record.date > self.end_date:
            return False
        if self.search:
            needle = self.search.lower()
            haystacks = [record.title, record.note or ""]
            if not any(needle in h.lower() for h in haystacks):
                return False
        return True


def _sort_value(record: ExpenseRecord, sort_by: str):
    if sort_by == "title":
        return record.title.lower()
    return getattr(record, sort_by)


def sort_records(records: List[ExpenseRecord], sort_by: str, sort_order: str) -> List[ExpenseRecord]:
    """Sort by one field; equal values always fall back to id ascending."""
    # sorted() is stable, reverse included, so the id order survives the second pass
    by_id = sorted(records, key=lambda r: r.id)
    return sorted(
        by_id,
        key=lambda r: _sort_value(r, sort_by),
        reverse=sort_order == "desc"
    )


def list_expenses(
    store: ExpenseStore,
    owner_id: str,
    expense_filter: ExpenseFilter
) -> Page[ExpenseRecord]:
    """Return one page of the owner's expenses matching the filter."""
    expense_filter.validate()

    matching = [
        r for r in store.list_for_owner(
            owner_id,
            start=expense_filter.start_date,
            end=expense_filter.end_date
        )
        if expense_filter.matches(r)
    ]
    ordered = sort_records(matching, expense_filter.sort_by, expense_filter.sort_order)

    offset = expense_filter.offset
    items = ordered[offset:offset + expense_filter.limit]
    logger.debug(f"Listed {len(items)} of {len(ordered)} expenses for {owner_id}")

    return Page(
        items=items,
        page=expense_filter.page,
        limit=expense_filter.limit,
        total=len(ordered)
    )
