"""
Pydantic schemas package.
"""

from spendwise.schemas.expense import (
    ExpenseBase,
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    PaginationInfo,
    ExpenseListResponse,
    DeleteResponse,
)
from spendwise.schemas.stats import (
    CategoryTotal,
    MonthTrend,
    ExpenseStatsResponse,
    BudgetProgressResponse,
)
from spendwise.schemas.user import (
    UserResponse,
    ProfileUpdate,
)

__all__ = [
    "ExpenseBase",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "PaginationInfo",
    "ExpenseListResponse",
    "DeleteResponse",
    "CategoryTotal",
    "MonthTrend",
    "ExpenseStatsResponse",
    "BudgetProgressResponse",
    "UserResponse",
    "ProfileUpdate",
]
