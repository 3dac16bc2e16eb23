"""
Turn HTTP responses and transport failures into domain errors.

This is the only place that inspects response shapes; everything past it
works with the error taxonomy in spendwise.errors.
"""

from typing import Optional

import httpx

from spendwise.errors import (
    AuthError,
    NetworkError,
    NotFoundError,
    RateLimited,
    ServerError,
    SpendwiseError,
    ValidationError,
)


def _error_body(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _retry_after(response: httpx.Response) -> Optional[float]:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        # HTTP-date form; not worth parsing for a hint we don't schedule on
        return None


def classify_response(response: httpx.Response) -> Optional[SpendwiseError]:
    """Return the error a response represents, or None for success."""
    status = response.status_code
    if status < 400:
        return None

    body = _error_body(response)
    detail = body.get("detail")
    message = detail if isinstance(detail, str) else (response.text or response.reason_phrase)

    if status == 429:
        return RateLimited(message, retry_after=_retry_after(response))
    if status == 401:
        return AuthError(message)
    if status == 404:
        return NotFoundError(message)
    if status >= 500:
        return ServerError(message, status_code=status)

    error = ValidationError(message, field=body.get("field"))
    error.status_code = status
    return error


def classify_transport_error(exc: httpx.TransportError) -> NetworkError:
    return NetworkError(f"{type(exc).__name__}: {exc}")
