"""
Dashboard schemas: expense stats and budget progress.
"""

from pydantic import BaseModel
from typing import List

from spendwise.models.expense import ExpenseCategory
from spendwise.schemas.expense import ExpenseResponse


class CategoryTotal(BaseModel):
    category: ExpenseCategory
    total: float
    count: int

    class Config:
        from_attributes = True


class MonthTrend(BaseModel):
    year: int
    month: int
    total: float

    class Config:
        from_attributes = True


class ExpenseStatsResponse(BaseModel):
    monthly_total: float
    weekly_total: float
    category_breakdown: List[CategoryTotal]
    monthly_trend: List[MonthTrend]
    top_expenses: List[ExpenseResponse]

    class Config:
        from_attributes = True


class BudgetProgressResponse(BaseModel):
    spent: float
    budget: float
    remaining: float
    percentage: float

    class Config:
        from_attributes = True
