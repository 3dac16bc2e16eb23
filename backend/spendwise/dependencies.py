"""
FastAPI dependencies.
"""

from typing import Generator, Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from spendwise.database import SessionLocal
from spendwise.errors import AuthError
from spendwise.models.user import User
from spendwise.storage.base import ExpenseStore
from spendwise.storage.sqlalchemy_store import SqlExpenseStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database sessions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> ExpenseStore:
    return SqlExpenseStore(db)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to a user, or fail with 401."""
    if credentials is None:
        raise AuthError("No token, authorization denied")

    user = db.query(User).filter(User.api_token == credentials.credentials).first()
    if not user:
        raise AuthError("Token is not valid")
    return user
