"""Monthly budget progress."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from spendwise.config import settings
from spendwise.services.stats_service import Reference, month_window, total_amount
from spendwise.storage.base import ExpenseStore

ONE_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class BudgetProgress:
    spent: Decimal
    budget: Decimal
    remaining: Decimal
    percentage: Decimal


def budget_progress(
    store: ExpenseStore,
    owner_id: str,
    budget: Union[Decimal, int, float, str],
    reference: Reference,
    precision: Optional[int] = None
) -> BudgetProgress:
    """
    Compare this month's spending with the budget.

    A budget <= 0 means "no budget set": percentage and remaining are 0.
    Overspending never makes remaining negative; spent - budget gives the
    overshoot.
    """
    precision = settings.budget_precision if precision is None else precision
    budget = budget if isinstance(budget, Decimal) else Decimal(str(budget))

    start, end = month_window(reference)
    spent = total_amount(store.list_for_owner(owner_id, start=start, end=end))

    remaining = max(budget - spent, Decimal("0"))
    if budget > 0:
        percentage = min(spent / budget * ONE_HUNDRED, ONE_HUNDRED)
    else:
        percentage = Decimal("0")

    return BudgetProgress(
        spent=spent,
        budget=budget,
        remaining=remaining,
        percentage=round(percentage, precision)
    )
