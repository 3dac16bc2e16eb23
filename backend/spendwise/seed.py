"""
Seed script for a demo user and sample expenses.
"""

import secrets
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from spendwise.database import SessionLocal, init_db
from spendwise.models import Expense, ExpenseCategory, User
from spendwise.services.stats_service import month_bounds, shift_month

DEMO_EMAIL = "demo@spendwise.local"

# (months ago, day of month, title, amount, category, note)
SAMPLE_EXPENSES = [
    (0, 1, "Rent share", "650.00", ExpenseCategory.bills, None),
    (0, 3, "Groceries", "84.20", ExpenseCategory.food, "Weekly shop"),
    (0, 5, "Bus pass", "45.00", ExpenseCategory.transportation, None),
    (0, 8, "Cinema", "24.50", ExpenseCategory.entertainment, "Two tickets"),
    (0, 12, "Pharmacy", "18.75", ExpenseCategory.healthcare, None),
    (1, 2, "Rent share", "650.00", ExpenseCategory.bills, None),
    (1, 14, "Running shoes", "120.00", ExpenseCategory.shopping, None),
    (1, 20, "Dinner out", "62.40", ExpenseCategory.food, "Birthday"),
    (2, 2, "Rent share", "650.00", ExpenseCategory.bills, None),
    (2, 18, "Online course", "89.00", ExpenseCategory.education, None),
    (3, 9, "Train tickets", "138.60", ExpenseCategory.travel, "Weekend away"),
    (4, 22, "Haircut", "30.00", ExpenseCategory.personal_care, None),
]


def seed_demo_data(db: Optional[Session] = None, today: Optional[date] = None) -> User:
    """Create the demo user and its expenses unless they already exist."""
    owns_session = db is None
    if owns_session:
        init_db()
        db = SessionLocal()
    today = today or date.today()

    try:
        user = db.query(User).filter(User.email == DEMO_EMAIL).first()
        if user:
            print(f"Demo user already seeded (token: {user.api_token})")
            return user

        user = User(
            id=str(uuid.uuid4()),
            name="Demo User",
            email=DEMO_EMAIL,
            monthly_budget=Decimal("1000.00"),
            api_token=secrets.token_urlsafe(32),
        )
        db.add(user)
        db.flush()

        for months_ago, day, title, amount, category, note in SAMPLE_EXPENSES:
            year, month = shift_month(today.year, today.month, -months_ago)
            last_day = month_bounds(year, month)[1].day
            db.add(Expense(
                id=str(uuid.uuid4()),
                user_id=user.id,
                title=title,
                amount=Decimal(amount),
                category=category,
                date=date(year, month, min(day, last_day)),
                note=note,
            ))

        db.commit()
        db.refresh(user)
        print(f"Seeded demo user with {len(SAMPLE_EXPENSES)} expenses (token: {user.api_token})")
        return user

    except Exception:
        db.rollback()
        raise
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    seed_demo_data()
