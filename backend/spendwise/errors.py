"""
Error taxonomy shared by the API, the services and the client dispatcher.

Every error carries the HTTP status it maps to, so the API layer can render
it and the client can rebuild it from a response.
"""

from typing import Optional


class SpendwiseError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(SpendwiseError):
    """Malformed filter or entity field. Never retried."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AuthError(SpendwiseError):
    """Missing, expired or unknown credential."""

    status_code = 401


class NotFoundError(SpendwiseError):
    """Entity absent or owned by someone else."""

    status_code = 404


class RateLimited(SpendwiseError):
    """Backend asked us to slow down; the dispatcher retries these."""

    status_code = 429

    def __init__(self, message: str = "Too many requests", retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class ServerError(SpendwiseError):
    status_code = 500


class NetworkError(SpendwiseError):
    """Request never produced a response (connect error, timeout...)."""

    status_code = 503


class DispatcherClosed(SpendwiseError):
    """Raised into requests still pending when a dispatcher shuts down."""

    status_code = 503
