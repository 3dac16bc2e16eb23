"""
User profile API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from spendwise.dependencies import get_current_user, get_db
from spendwise.models.user import User
from spendwise.schemas.user import ProfileUpdate, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)):
    """Get the current user's profile."""
    return user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    profile: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update name and/or monthly budget."""
    if profile.name is not None:
        user.name = profile.name.strip()
    if profile.monthly_budget is not None:
        user.monthly_budget = profile.monthly_budget

    db.commit()
    db.refresh(user)
    return user
