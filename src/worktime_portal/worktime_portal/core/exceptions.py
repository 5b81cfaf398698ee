from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""

    status_code = 400


class EarlyCheckoutError(ValidationError):
    """Raised when a check-out time is not strictly after the check-in time."""


class AuthenticationError(DomainError):
    """Raised when credentials or a session token are invalid."""

    status_code = 401


class NotFoundError(DomainError):
    status_code = 404


class UpstreamError(DomainError):
    """Non-success response from the workforce API.

    The upstream status code is kept so it can be passed through to the caller.
    """

    def __init__(self, status_code: int, message: str, payload: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = int(status_code)
        self.payload = payload or {}
