"""
Async client for the expense API.
"""

from spendwise.client.api import ExpenseClient
from spendwise.client.dispatcher import QueuedRequest, RequestDispatcher, RequestState
from spendwise.client.pacing import OperationKind, PacingPolicy

__all__ = [
    "ExpenseClient",
    "OperationKind",
    "PacingPolicy",
    "QueuedRequest",
    "RequestDispatcher",
    "RequestState",
]
