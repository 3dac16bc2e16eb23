"""
Expense database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Numeric, Text, Enum, ForeignKey, Index
from sqlalchemy.orm import relationship
import enum
from spendwise.database import Base


class ExpenseCategory(str, enum.Enum):
    """Expense category enumeration."""
    food = "Food"
    transportation = "Transportation"
    entertainment = "Entertainment"
    shopping = "Shopping"
    bills = "Bills"
    healthcare = "Healthcare"
    education = "Education"
    travel = "Travel"
    personal_care = "Personal Care"
    other = "Other"


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    title = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)  # Always positive
    category = Column(Enum(ExpenseCategory), nullable=False, default=ExpenseCategory.other)
    date = Column(Date, nullable=False)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="expenses")

    # Indexes for common queries
    __table_args__ = (
        Index("idx_expense_user_date", "user_id", "date"),
        Index("idx_expense_user_category", "user_id", "category"),
    )
