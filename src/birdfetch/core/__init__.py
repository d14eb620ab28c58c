"""Core module - configuration, logging, exceptions."""

from birdfetch.core.config import Settings, get_settings
from birdfetch.core.exceptions import (
    ApiAuthenticationError,
    ApiError,
    ApiRateLimitError,
    AuthenticationError,
    BirdfetchError,
    ConfigurationError,
    ExtractionError,
    HttpError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from birdfetch.core.logging import (
    LogContext,
    configure_default_logging,
    get_logger,
    setup_logging,
)

__all__ = [
    "Settings",
    "get_settings",
    "BirdfetchError",
    "ConfigurationError",
    "ValidationError",
    "HttpError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "ApiError",
    "ApiAuthenticationError",
    "ApiRateLimitError",
    "ExtractionError",
    "setup_logging",
    "configure_default_logging",
    "get_logger",
    "LogContext",
]
