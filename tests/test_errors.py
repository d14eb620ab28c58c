import pytest

from birdfetch.core import (
    ApiAuthenticationError,
    ApiError,
    ApiRateLimitError,
    AuthenticationError,
    BirdfetchError,
    HttpError,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from birdfetch.twitter.errors import (
    api_error_message,
    error_for_api_payload,
    error_for_status,
    http_error_message,
)


class TestErrorForStatus:
    @pytest.mark.parametrize(
        ("status", "error_type"),
        [
            (400, HttpError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_maps_status_to_error_type(self, status, error_type):
        error = error_for_status(status, url="https://twitter.com/x")

        assert type(error) is error_type
        assert error.status_code == status
        assert error.url == "https://twitter.com/x"

    def test_rate_limit_carries_retry_after(self):
        error = error_for_status(429, retry_after=30)

        assert isinstance(error, RateLimitError)
        assert error.retry_after == 30
        assert error.message == "Too Many Requests"

    def test_messages(self):
        assert http_error_message(404) == "Not Found"
        assert http_error_message(599) == "HTTP error 599"


class TestErrorForApiPayload:
    def test_known_code_uses_table_message(self):
        error = error_for_api_payload([{"code": 144, "message": "whatever"}])

        assert type(error) is ApiError
        assert error.code == 144
        assert error.message == "No status found with that ID"

    def test_authentication_codes(self):
        error = error_for_api_payload([{"code": 32, "message": "Could not authenticate you."}])

        assert isinstance(error, ApiAuthenticationError)
        assert error.code == 32

    def test_rate_limit_code(self):
        error = error_for_api_payload([{"code": 88}])

        assert isinstance(error, ApiRateLimitError)
        assert error.message == "Rate limit exceeded"

    def test_unknown_code_keeps_platform_message(self):
        error = error_for_api_payload([{"code": 999999, "message": "Something new"}])

        assert error.code == 999999
        assert error.message == "Something new"

    def test_only_first_entry_is_used(self):
        error = error_for_api_payload([{"code": 50}, {"code": 88}])

        assert error.code == 50
        assert error.message == "User not found"

    def test_missing_code(self):
        error = error_for_api_payload([{"message": "Oops", "kind": "Permissions"}])

        assert error.code is None
        assert error.message == "Oops"

    def test_string_code_is_coerced(self):
        assert error_for_api_payload([{"code": "34"}]).code == 34

    def test_empty_entry(self):
        error = error_for_api_payload(["garbage"])

        assert error.code is None
        assert error.message == api_error_message(None)

    def test_unknown_code_message(self):
        assert api_error_message(424242) == "Unknown API error (code 424242)"


def test_error_str_includes_details():
    error = HttpError("Not Found", status_code=404, url=None)

    assert str(error) == "Not Found | Details: {'status_code': 404}"
    assert isinstance(error, BirdfetchError)
    assert str(BirdfetchError("plain")) == "plain"
