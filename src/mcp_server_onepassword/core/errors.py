"""
Error taxonomy for 1Password Connect operations.

Every non-2xx response from the Connect server is raised as one of the
exception classes below. Each carries a machine-readable code, an HTTP-like
status and a retryable flag so callers can decide on their own retry policy;
this server never retries.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

import httpx
import pydantic


class ErrorCategory(str, Enum):
    """Error categories, one per taxonomy member."""
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    BACKEND = "backend"


class ConnectAPIError(Exception):
    """Base failure raised for any unsuccessful Connect API call."""

    category: ErrorCategory = ErrorCategory.BACKEND

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code or "BACKEND_ERROR"
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Structured representation used in error responses and logs."""
        return {
            "name": type(self).__name__,
            "category": self.category.value,
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "retryable": self.retryable,
        }


class RateLimitError(ConnectAPIError):
    """Rate limit exceeded (HTTP 429)."""

    category = ErrorCategory.RATE_LIMIT

    def __init__(self, message: str, retry_after_seconds: int = 60) -> None:
        super().__init__(message, 429, "RATE_LIMIT_EXCEEDED", retryable=True)
        self.retry_after_seconds = retry_after_seconds

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["retry_after_seconds"] = self.retry_after_seconds
        return data


class AuthenticationError(ConnectAPIError):
    """Missing or rejected Connect token (HTTP 401)."""

    category = ErrorCategory.AUTHENTICATION

    def __init__(self, message: str, code: str = "AUTHENTICATION_FAILED") -> None:
        super().__init__(message, 401, code, retryable=False)


class AuthorizationError(ConnectAPIError):
    """Token is valid but lacks access (HTTP 403)."""

    category = ErrorCategory.AUTHORIZATION

    def __init__(self, message: str) -> None:
        super().__init__(message, 403, "AUTHORIZATION_FAILED", retryable=False)


class NotFoundError(ConnectAPIError):
    """Requested vault, item or file does not exist (HTTP 404)."""

    category = ErrorCategory.NOT_FOUND

    def __init__(self, entity_type: str, identifier: str) -> None:
        super().__init__(
            f"{entity_type} with ID '{identifier}' not found",
            404,
            "NOT_FOUND",
            retryable=False,
        )
        self.entity_type = entity_type
        self.identifier = identifier

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["entity_type"] = self.entity_type
        data["identifier"] = self.identifier
        return data


class ValidationError(ConnectAPIError):
    """Invalid input, with violation messages keyed by field name."""

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, details: dict[str, list[str]] | None = None) -> None:
        super().__init__(message, 400, "VALIDATION_ERROR", retryable=False)
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["details"] = self.details
        return data

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> ValidationError:
        """Convert a pydantic validation failure into a field -> messages map."""
        details: dict[str, list[str]] = {}
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
            details.setdefault(field, []).append(err.get("msg", "invalid value"))
        return cls(f"Invalid input for {exc.title}", details)


_RETRYABLE_PATTERNS = ("network", "timeout", "econnreset", "connection reset")


def is_retryable_error(error: BaseException) -> bool:
    """Decide whether a failure is worth retrying by the caller.

    Taxonomy members report their own flag. Transport-level httpx failures
    (timeouts, dropped connections) are retryable, and so is any other
    exception whose message looks like a network or timeout problem.
    """
    if isinstance(error, ConnectAPIError):
        return error.retryable
    if isinstance(error, (httpx.TimeoutException, httpx.NetworkError)):
        return True
    message = str(error).lower()
    return any(pattern in message for pattern in _RETRYABLE_PATTERNS)


def error_details(error: BaseException) -> dict[str, Any]:
    """Format any failure as a structured dict for responses and logging."""
    if isinstance(error, ConnectAPIError):
        return error.to_dict()
    return {
        "name": type(error).__name__,
        "message": str(error),
        "retryable": is_retryable_error(error),
    }
