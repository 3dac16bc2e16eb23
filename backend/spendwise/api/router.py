"""
Main API router.
"""

from fastapi import APIRouter
from spendwise.api import expenses, users

api_router = APIRouter()

api_router.include_router(expenses.router)
api_router.include_router(users.router)
