"""
Time-windowed spending aggregates for the dashboard.

Windows are inclusive calendar-date ranges. Weeks always start on Sunday,
whatever the caller's locale.
"""

import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Tuple, Union

from spendwise.config import settings
from spendwise.errors import ValidationError
from spendwise.models.expense import ExpenseCategory
from spendwise.storage.base import ExpenseRecord, ExpenseStore

logger = logging.getLogger(__name__)

Reference = Union[date, datetime]
Window = Tuple[date, date]

ZERO = Decimal("0")


@dataclass(frozen=True)
class CategoryTotal:
    category: ExpenseCategory
    total: Decimal
    count: int


@dataclass(frozen=True)
class MonthTotal:
    year: int
    month: int
    total: Decimal


@dataclass(frozen=True)
class ExpenseStats:
    monthly_total: Decimal
    weekly_total: Decimal
    category_breakdown: List[CategoryTotal]
    monthly_trend: List[MonthTotal]
    top_expenses: List[ExpenseRecord]


def to_date(reference: Reference) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months, rolling over year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int) -> Window:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def month_window(reference: Reference) -> Window:
    """First and last day of the reference's calendar month."""
    day = to_date(reference)
    return month_bounds(day.year, day.month)


def week_window(reference: Reference) -> Window:
    """Sunday through Saturday of the week containing the reference."""
    day = to_date(reference)
    # date.weekday(): Monday == 0 ... Sunday == 6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def trailing_months(reference: Reference, count: int) -> List[Tuple[int, int]]:
    """The `count` calendar months ending with the reference's, oldest first."""
    day = to_date(reference)
    return [shift_month(day.year, day.month, -i) for i in range(count - 1, -1, -1)]


def in_window(record: ExpenseRecord, window: Window) -> bool:
    return window[0] <= record.date <= window[1]


def total_amount(records: List[ExpenseRecord]) -> Decimal:
    return sum((r.amount for r in records), ZERO)


def category_breakdown(records: List[ExpenseRecord]) -> List[CategoryTotal]:
    """Group by category, largest total first. Empty categories are left out."""
    totals: Dict[ExpenseCategory, Decimal] = defaultdict(lambda: ZERO)
    counts: Dict[ExpenseCategory, int] = defaultdict(int)
    for r in records:
        category = ExpenseCategory(r.category)
        totals[category] += r.amount
        counts[category] += 1

    by_name = sorted(totals, key=lambda c: c.value)
    ordered = sorted(by_name, key=lambda c: totals[c], reverse=True)
    return [CategoryTotal(category=c, total=totals[c], count=counts[c]) for c in ordered]


def monthly_trend(records: List[ExpenseRecord], months: List[Tuple[int, int]]) -> List[MonthTotal]:
    """Totals for each month in order. Months without expenses report zero."""
    totals: Dict[Tuple[int, int], Decimal] = defaultdict(lambda: ZERO)
    for r in records:
        totals[(r.date.year, r.date.month)] += r.amount

    return [MonthTotal(year=y, month=m, total=totals[(y, m)]) for y, m in months]


def top_expenses(records: List[ExpenseRecord], limit: int) -> List[ExpenseRecord]:
    """Highest amounts first; ties go to the more recent date, then lowest id."""
    by_id = sorted(records, key=lambda r: r.id)
    ordered = sorted(by_id, key=lambda r: (r.amount, r.date), reverse=True)
    return ordered[:limit]


def compute_stats(
    store: ExpenseStore,
    owner_id: str,
    reference: Reference,
    top_limit: Optional[int] = None,
    trend_months: Optional[int] = None
) -> ExpenseStats:
    """
    Compute monthly/weekly totals, category breakdown, trend and top expenses
    as of `reference`.

    The store is read once per call, so the result is a snapshot that may
    miss writes landing while it is computed.
    """
    top_limit = settings.top_expenses_limit if top_limit is None else top_limit
    trend_months = settings.trend_months if trend_months is None else trend_months
    if top_limit < 0:
        raise ValidationError("top_limit must be >= 0", field="top_limit")
    if trend_months < 1:
        raise ValidationError("trend_months must be >= 1", field="trend_months")

    month = month_window(reference)
    week = week_window(reference)
    months = trailing_months(reference, trend_months)
    trend_start = month_bounds(*months[0])[0]

    records = store.list_for_owner(
        owner_id,
        start=min(trend_start, week[0]),
        end=max(month[1], week[1])
    )

    month_records = [r for r in records if in_window(r, month)]
    week_records = [r for r in records if in_window(r, week)]
    trend_records = [r for r in records if in_window(r, (trend_start, month[1]))]

    logger.debug(
        f"Stats for {owner_id} as of {to_date(reference)}: "
        f"{len(month_records)} expenses this month, {len(week_records)} this week"
    )

    return ExpenseStats(
        monthly_total=total_amount(month_records),
        weekly_total=total_amount(week_records),
        category_breakdown=category_breakdown(month_records),
        monthly_trend=monthly_trend(trend_records, months),
        top_expenses=top_expenses(month_records, top_limit),
    )
