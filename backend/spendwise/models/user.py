"""
User database model.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, String, DateTime, Numeric
from sqlalchemy.orm import relationship
from spendwise.database import Base


class User(Base):
    """User model. Tokens are issued elsewhere; we only look them up."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    monthly_budget = Column(Numeric(12, 2), default=Decimal("0"), nullable=False)  # 0 = no budget set
    api_token = Column(String(64), unique=True, nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")
