"""Shared test fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date
from decimal import Decimal
import uuid

from spendwise.database import Base
from spendwise.dependencies import get_db
from spendwise.main import app
from spendwise.models.expense import Expense, ExpenseCategory
from spendwise.models.user import User
from spendwise.storage.base import ExpenseRecord
from spendwise.storage.memory import InMemoryExpenseStore


OWNER = "user-1"


def make_record(
    id,
    amount,
    day,
    category=ExpenseCategory.food,
    title=None,
    note=None,
    owner_id=OWNER
):
    """Build an ExpenseRecord with sensible defaults."""
    return ExpenseRecord(
        id=id,
        owner_id=owner_id,
        title=title or f"Expense {id}",
        amount=Decimal(str(amount)),
        category=category,
        date=day,
        note=note,
    )


@pytest.fixture
def record():
    """Factory for ExpenseRecord objects."""
    return make_record


@pytest.fixture
def memory_store():
    """Empty in-memory store."""
    return InMemoryExpenseStore()


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create_user(db_session, name, email, token, budget="0"):
    user = User(
        id=str(uuid.uuid4()),
        name=name,
        email=email,
        monthly_budget=Decimal(budget),
        api_token=token,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def sample_user(db_session):
    """Create a user with a 500.00 monthly budget."""
    return _create_user(db_session, "Test User", "test@example.com", "test-token", budget="500.00")


@pytest.fixture
def other_user(db_session):
    """Create a second user whose data must stay invisible to sample_user."""
    return _create_user(db_session, "Other User", "other@example.com", "other-token")


@pytest.fixture
def auth_headers(sample_user):
    return {"Authorization": f"Bearer {sample_user.api_token}"}


@pytest.fixture
def sample_expense(db_session, sample_user):
    """Create a sample expense."""
    expense = Expense(
        id=str(uuid.uuid4()),
        user_id=sample_user.id,
        title="Whole Foods",
        amount=Decimal("50.00"),
        category=ExpenseCategory.food,
        date=date(2024, 3, 5),
        note="Weekly groceries",
    )
    db_session.add(expense)
    db_session.commit()
    db_session.refresh(expense)
    return expense


@pytest.fixture
def many_expenses(db_session, sample_user):
    """25 expenses in March 2024, ids exp-00 .. exp-24."""
    expenses = []
    for i in range(25):
        expense = Expense(
            id=f"exp-{i:02d}",
            user_id=sample_user.id,
            title=f"Item {i:02d}",
            amount=Decimal(str(10 + i)),
            category=ExpenseCategory.shopping if i % 2 else ExpenseCategory.food,
            date=date(2024, 3, 1 + i),
        )
        db_session.add(expense)
        expenses.append(expense)
    db_session.commit()
    return expenses
