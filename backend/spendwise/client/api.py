"""
Async HTTP client for the expense API.

All calls share one RequestDispatcher, so they go out one at a time, paced
per operation kind, and 429s are retried without the caller noticing.
"""

import enum
import logging
from datetime import date
from typing import Any, Callable, Dict, Optional

import httpx

from spendwise.client.classify import classify_response, classify_transport_error
from spendwise.client.dispatcher import RequestDispatcher
from spendwise.client.pacing import OperationKind
from spendwise.config import settings
from spendwise.errors import AuthError

logger = logging.getLogger(__name__)

# Python keyword -> query parameter
FILTER_PARAMS = {
    "category": "category",
    "search": "search",
    "start_date": "startDate",
    "end_date": "endDate",
    "sort_by": "sortBy",
    "sort_order": "sortOrder",
    "page": "page",
    "limit": "limit",
}


def _query_value(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    return value


class ExpenseClient:

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        dispatcher: Optional[RequestDispatcher] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_auth_failure: Optional[Callable[[AuthError], None]] = None,
        timeout: float = 10.0
    ):
        token = token or settings.api_token
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._http = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            headers=headers,
            transport=transport,
            timeout=timeout,
        )
        self.dispatcher = dispatcher or RequestDispatcher.from_settings(on_auth_failure=on_auth_failure)

    async def close(self) -> None:
        await self.dispatcher.close()
        await self._http.aclose()

    async def __aenter__(self) -> "ExpenseClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _request(self, kind: OperationKind, method: str, path: str, **kwargs) -> Any:
        async def operation():
            try:
                response = await self._http.request(method, path, **kwargs)
            except httpx.TransportError as exc:
                logger.error(f"{method} {path} failed: {exc}")
                raise classify_transport_error(exc) from exc

            error = classify_response(response)
            if error is not None:
                raise error
            return response.json()

        return await self.dispatcher.dispatch(kind, operation)

    async def list_expenses(self, **filters) -> Dict[str, Any]:
        """List expenses; accepts the keyword names of ExpenseFilter."""
        unknown = set(filters) - set(FILTER_PARAMS)
        if unknown:
            raise TypeError(f"Unknown filter(s): {', '.join(sorted(unknown))}")

        params = {
            FILTER_PARAMS[name]: _query_value(value)
            for name, value in filters.items()
            if value is not None
        }
        return await self._request(OperationKind.list, "GET", "/expenses", params=params)

    async def get_expense(self, expense_id: str) -> Dict[str, Any]:
        return await self._request(OperationKind.fetch, "GET", f"/expenses/{expense_id}")

    async def create_expense(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(OperationKind.mutation, "POST", "/expenses", json=data)

    async def update_expense(self, expense_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(OperationKind.mutation, "PUT", f"/expenses/{expense_id}", json=data)

    async def delete_expense(self, expense_id: str) -> Dict[str, Any]:
        return await self._request(OperationKind.mutation, "DELETE", f"/expenses/{expense_id}")

    async def get_stats(self, as_of: Optional[date] = None) -> Dict[str, Any]:
        params = {"asOf": as_of.isoformat()} if as_of else None
        return await self._request(OperationKind.stats, "GET", "/expenses/stats", params=params)

    async def get_budget_progress(self, as_of: Optional[date] = None) -> Dict[str, Any]:
        params = {"asOf": as_of.isoformat()} if as_of else None
        return await self._request(OperationKind.budget, "GET", "/expenses/budget-progress", params=params)

    async def get_profile(self) -> Dict[str, Any]:
        return await self._request(OperationKind.profile, "GET", "/users/me")

    async def update_profile(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(OperationKind.profile, "PUT", "/users/profile", json=data)
