"""
User profile schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional


class UserResponse(BaseModel):
    """Schema for the current user's profile."""
    id: str
    name: str
    email: str
    monthly_budget: Decimal
    created_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """Schema for updating the profile. A budget of 0 clears it."""
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    monthly_budget: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
