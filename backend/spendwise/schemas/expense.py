"""
Expense schemas.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from spendwise.models.expense import ExpenseCategory


class ExpenseBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    category: ExpenseCategory
    date: dt.date = Field(default_factory=dt.date.today)
    note: Optional[str] = Field(None, max_length=500)

    @field_validator("title", "note", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    category: Optional[ExpenseCategory] = None
    date: Optional[dt.date] = None
    note: Optional[str] = Field(None, max_length=500)

    @field_validator("title", "note", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class ExpenseResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    amount: Decimal
    category: ExpenseCategory
    date: dt.date
    note: Optional[str]
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class PaginationInfo(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    class Config:
        from_attributes = True


class ExpenseListResponse(BaseModel):
    expenses: list[ExpenseResponse]
    pagination: PaginationInfo


class DeleteResponse(BaseModel):
    message: str
