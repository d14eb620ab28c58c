"""Mapping of HTTP statuses and platform error codes to typed errors."""

from __future__ import annotations

from typing import Any

import httpx

from birdfetch.core import (
    ApiAuthenticationError,
    ApiError,
    ApiRateLimitError,
    AuthenticationError,
    HttpError,
    NotFoundError,
    RateLimitError,
    ServerError,
)


# Platform error codes, as documented for the v1.1 API and observed on GraphQL
API_ERROR_MESSAGES: dict[int, str] = {
    3: "Invalid coordinates",
    13: "No location associated with the given IP address",
    17: "No user matches the given query",
    32: "Could not authenticate you",
    34: "The requested page does not exist",
    36: "You cannot report yourself for spam",
    38: "A required parameter is missing",
    44: "An invalid parameter was supplied",
    50: "User not found",
    63: "User has been suspended",
    64: "Your account is suspended and is not permitted to access this feature",
    68: "The requested API version is no longer supported",
    87: "Client is not permitted to perform this action",
    88: "Rate limit exceeded",
    89: "Invalid or expired token",
    92: "SSL is required",
    93: "This application is not allowed to access or delete your direct messages",
    99: "Unable to verify your credentials",
    120: "Account update failed: value is too long",
    130: "Over capacity",
    131: "Internal error",
    135: "Could not authenticate you: timestamp out of bounds",
    139: "You have already favorited this status",
    144: "No status found with that ID",
    150: "You cannot send messages to users who are not following you",
    151: "There was an error sending your message",
    160: "You've already requested to follow this user",
    161: "You are unable to follow more people at this time",
    179: "You are not authorized to see this status",
    185: "User is over daily status update limit",
    186: "Tweet needs to be a bit shorter",
    187: "Status is a duplicate",
    205: "You are over the limit for spam reports",
    214: "Bad request data",
    215: "Bad authentication data",
    220: "Your credentials do not allow access to this resource",
    226: "This request looks like it might be automated",
    231: "User must verify login",
    251: "This endpoint has been retired",
    261: "Application cannot perform write actions",
    271: "You can't mute yourself",
    272: "You are not muting the specified user",
    323: "Animated GIFs are not allowed when posting multiple images",
    324: "The validation of media ids failed",
    325: "A media id was not found",
    326: "To protect our users from spam and other malicious activity, this account is temporarily locked",
    327: "You have already retweeted this tweet",
    328: "Retweet is not permitted for this status",
    349: "You cannot send messages to this user",
    354: "The text of your direct message is over the max character limit",
    355: "Subscription already exists",
    385: "You attempted to reply to a tweet that is deleted or not visible to you",
    386: "The tweet exceeds the number of allowed attachment types",
    407: "The given URL is invalid",
    416: "Invalid application",
    421: "This tweet is no longer available",
    422: "This tweet is no longer available because it violated the rules",
    425: "Multiple media types in one tweet are not permitted",
    433: "The original tweet author restricted who can reply to this tweet",
}

AUTHENTICATION_ERROR_CODES = frozenset({32, 89, 99, 135, 215})
RATE_LIMIT_ERROR_CODES = frozenset({88})


def http_error_message(status_code: int) -> str:
    """Return the reason phrase for an HTTP status code."""
    phrase = httpx.codes.get_reason_phrase(status_code)
    return phrase or f"HTTP error {status_code}"


def api_error_message(code: int | None) -> str:
    """Return the message for a platform error code."""
    if code is None:
        return "Unknown API error"
    return API_ERROR_MESSAGES.get(code, f"Unknown API error (code {code})")


def error_for_status(
    status_code: int,
    url: str | None = None,
    retry_after: int | None = None,
) -> HttpError:
    """Build the typed error for a non-success HTTP status."""
    message = http_error_message(status_code)
    if status_code in (401, 403):
        return AuthenticationError(message, status_code=status_code, url=url)
    if status_code == 404:
        return NotFoundError(message, status_code=status_code, url=url)
    if status_code == 429:
        return RateLimitError(message, url=url, retry_after=retry_after)
    if status_code >= 500:
        return ServerError(message, status_code=status_code, url=url)
    return HttpError(message, status_code=status_code, url=url)


def error_for_api_payload(errors: list[dict[str, Any]]) -> ApiError:
    """Build the typed error for the first entry of an ``errors`` array."""
    first = errors[0] if errors and isinstance(errors[0], dict) else {}
    code = _coerce_code(first.get("code"))

    if code in API_ERROR_MESSAGES:
        message = API_ERROR_MESSAGES[code]
    else:
        # Unknown code: prefer the platform's own wording
        message = first.get("message") or api_error_message(code)

    if code in AUTHENTICATION_ERROR_CODES:
        return ApiAuthenticationError(message, code=code)
    if code in RATE_LIMIT_ERROR_CODES:
        return ApiRateLimitError(message, code=code)
    return ApiError(message, code=code)


def _coerce_code(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
