"""Async client for the platform's web API."""

from birdfetch.client import Birdfetch
from birdfetch.core import (
    ApiError,
    BirdfetchError,
    ConfigurationError,
    ExtractionError,
    HttpError,
    ValidationError,
)
from birdfetch.services import MessageService, TweetService, UserService
from birdfetch.twitter import (
    CursoredData,
    DirectMessage,
    ResourceType,
    Tweet,
    TweetFilter,
    User,
)

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "Birdfetch",
    "TweetService",
    "UserService",
    "MessageService",
    "CursoredData",
    "DirectMessage",
    "ResourceType",
    "Tweet",
    "TweetFilter",
    "User",
    "BirdfetchError",
    "ConfigurationError",
    "ValidationError",
    "HttpError",
    "ApiError",
    "ExtractionError",
]
