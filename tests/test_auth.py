import pytest

from birdfetch.core import ConfigurationError
from birdfetch.twitter.auth import WEB_BEARER_TOKEN, AuthCredential


class TestFromApiKey:
    def test_parses_cookie_string(self):
        credential = AuthCredential.from_api_key("ct0=abc; auth_token=def ;lang=en;")

        assert credential.cookies == {"ct0": "abc", "auth_token": "def", "lang": "en"}
        assert credential.csrf_token == "abc"
        assert credential.bearer_token == WEB_BEARER_TOKEN

    def test_cookie_value_may_contain_equals(self):
        credential = AuthCredential.from_api_key("ct0=a;auth_token=b;twid=u=123")

        assert credential.cookies["twid"] == "u=123"

    @pytest.mark.parametrize("api_key", ["", "   "])
    def test_empty_key(self, api_key):
        with pytest.raises(ConfigurationError, match="empty"):
            AuthCredential.from_api_key(api_key)

    def test_missing_required_cookie(self):
        with pytest.raises(ConfigurationError) as exc_info:
            AuthCredential.from_api_key("ct0=abc;lang=en")

        assert exc_info.value.details == {"missing": ["auth_token"]}

    def test_malformed_cookie(self):
        with pytest.raises(ConfigurationError, match="Malformed"):
            AuthCredential.from_api_key("ct0=abc;auth_token")


class TestHeaders:
    def test_to_header(self):
        credential = AuthCredential.from_api_key("ct0=abc;auth_token=def")

        headers = credential.to_header()

        assert headers["authorization"] == f"Bearer {WEB_BEARER_TOKEN}"
        assert headers["x-csrf-token"] == "abc"
        assert headers["cookie"] == "ct0=abc; auth_token=def"
        assert headers["x-twitter-auth-type"] == "OAuth2Session"
        assert headers["x-twitter-active-user"] == "yes"
