"""
Expense API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional
from datetime import date

from spendwise.config import settings
from spendwise.dependencies import get_current_user, get_store
from spendwise.models.user import User
from spendwise.services import expense_service
from spendwise.services.budget_service import budget_progress
from spendwise.services.query_service import ExpenseFilter, list_expenses
from spendwise.services.stats_service import compute_stats
from spendwise.storage.base import ExpenseStore
from spendwise.schemas.expense import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseListResponse,
    PaginationInfo,
    DeleteResponse,
)
from spendwise.schemas.stats import ExpenseStatsResponse, BudgetProgressResponse

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("", response_model=ExpenseListResponse)
def list_expenses_endpoint(
    category: Optional[str] = None,
    search: Optional[str] = None,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    sort_by: str = Query("date", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    page: int = 1,
    limit: int = 10,
    user: User = Depends(get_current_user),
    store: ExpenseStore = Depends(get_store)
):
    """List expenses with filtering, sorting and pagination"""
    expense_filter = ExpenseFilter(
        category=category,
        search=search,
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    result = list_expenses(store, user.id, expense_filter)

    return ExpenseListResponse(
        expenses=[ExpenseResponse.model_validate(e) for e in result.items],
        pagination=PaginationInfo.model_validate(result)
    )


@router.get("/stats", response_model=ExpenseStatsResponse)
def get_expense_stats(
    as_of: Optional[date] = Query(None, alias="asOf", description="Reference date, defaults to today"),
    user: User = Depends(get_current_user),
    store: ExpenseStore = Depends(get_store)
):
    """
    Get spending stats for the month and week containing the reference date.
    Returns: monthly_total, weekly_total, category_breakdown, monthly_trend, top_expenses
    """
    stats = compute_stats(store, user.id, as_of or date.today())
    return ExpenseStatsResponse.model_validate(stats)


@router.get("/budget-progress", response_model=BudgetProgressResponse)
def get_budget_progress(
    as_of: Optional[date] = Query(None, alias="asOf", description="Reference date, defaults to today"),
    user: User = Depends(get_current_user),
    store: ExpenseStore = Depends(get_store)
):
    """Get this month's spending against the user's monthly budget"""
    progress = budget_progress(
        store,
        user.id,
        user.monthly_budget or 0,
        as_of or date.today(),
        precision=settings.budget_precision
    )
    return BudgetProgressResponse.model_validate(progress)


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: str,
    user: User = Depends(get_current_user),
    store: ExpenseStore = Depends(get_store)
):
    """Get a single expense"""
    return ExpenseResponse.model_validate(expense_service.get_expense(store, user.id, expense_id))


@router.post("", response_model=ExpenseResponse, status_code=201)
def create_expense(
    expense: ExpenseCreate,
    user: User = Depends(get_current_user),
    store: ExpenseStore = Depends(get_store)
):
    """Create a new expense"""
    return ExpenseResponse.model_validate(expense_service.create_expense(store, user.id, expense))


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: str,
    update: ExpenseUpdate,
    user: User = Depends(get_current_user),
    store: ExpenseStore = Depends(get_store)
):
    """Update an expense; omitted fields are left alone"""
    record = expense_service.update_expense(store, user.id, expense_id, update)
    return ExpenseResponse.model_validate(record)


@router.delete("/{expense_id}", response_model=DeleteResponse)
def delete_expense(
    expense_id: str,
    user: User = Depends(get_current_user),
    store: ExpenseStore = Depends(get_store)
):
    """Delete an expense"""
    expense_service.delete_expense(store, user.id, expense_id)
    return DeleteResponse(message="Expense deleted successfully")
