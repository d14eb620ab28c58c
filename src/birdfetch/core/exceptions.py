"""Custom exceptions for birdfetch."""

from __future__ import annotations

from typing import Any


class BirdfetchError(Exception):
    """Base exception for all birdfetch errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        details = {k: v for k, v in self.details.items() if v is not None}
        if details:
            return f"{self.message} | Details: {details}"
        return self.message


class ConfigurationError(BirdfetchError):
    """Raised when the client is misconfigured (e.g. a malformed API key)."""


class ValidationError(BirdfetchError):
    """Raised when request arguments are invalid for a resource type."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, details={"field": field})
        self.field = field


class HttpError(BirdfetchError):
    """Raised when the platform answers with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message,
            details={"status_code": status_code, "url": url},
        )
        self.status_code = status_code
        self.url = url


class AuthenticationError(HttpError):
    """Raised on 401/403 responses."""


class NotFoundError(HttpError):
    """Raised on 404 responses."""


class RateLimitError(HttpError):
    """Raised on 429 responses."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        status_code: int | None = 429,
        url: str | None = None,
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, url=url)
        self.retry_after = retry_after
        self.details["retry_after"] = retry_after


class ServerError(HttpError):
    """Raised on 5xx responses."""


class ApiError(BirdfetchError):
    """Raised when the response body carries a platform error payload."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message, details={"code": code})
        self.code = code


class ApiAuthenticationError(ApiError):
    """Platform rejected the session credentials."""


class ApiRateLimitError(ApiError):
    """Platform reported the rate limit as exceeded."""


class ExtractionError(BirdfetchError):
    """Raised when a required entity is missing from a response payload."""

    def __init__(self, message: str, resource_type: str | None = None) -> None:
        super().__init__(message, details={"resource_type": resource_type})
        self.resource_type = resource_type
