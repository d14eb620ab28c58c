"""Session credentials derived from a cookie string."""

from __future__ import annotations

from dataclasses import dataclass, field

from birdfetch.core import ConfigurationError, get_logger


logger = get_logger(__name__)


# Bearer token embedded in the platform's web client
WEB_BEARER_TOKEN = (
    "AAAAAAAAAAAAAAAAAAAAANRILgAAAAAAnNwIzUejRCOuH5E6I8xnZz4puTs"
    "%3D1Zv7ttfk8LF81IUq16cHjhLTvJu4FA33AGWWjCpTnA"
)

REQUIRED_COOKIES = ("ct0", "auth_token")


@dataclass(frozen=True)
class AuthCredential:
    """Cookies of an authenticated web session."""

    cookies: dict[str, str] = field(default_factory=dict)
    bearer_token: str = WEB_BEARER_TOKEN

    @classmethod
    def from_api_key(cls, api_key: str) -> "AuthCredential":
        """Parse an API key of the form ``name=value;name=value;...``.

        Raises:
            ConfigurationError: If the key is empty or misses ``ct0``/``auth_token``.
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("API key is empty")

        cookies: dict[str, str] = {}
        for part in api_key.split(";"):
            part = part.strip()
            if not part:
                continue
            name, sep, value = part.partition("=")
            if not sep:
                raise ConfigurationError(f"Malformed cookie in API key: {name!r}")
            cookies[name.strip()] = value.strip()

        missing = [name for name in REQUIRED_COOKIES if not cookies.get(name)]
        if missing:
            raise ConfigurationError(
                "API key is missing required cookies",
                details={"missing": missing},
            )

        logger.debug("auth.credential_parsed", cookie_names=sorted(cookies))
        return cls(cookies=cookies)

    @property
    def csrf_token(self) -> str:
        return self.cookies["ct0"]

    def cookie_header(self) -> str:
        """Serialize the cookies back into a ``Cookie`` header value."""
        return "; ".join(f"{name}={value}" for name, value in self.cookies.items())

    def to_header(self) -> dict[str, str]:
        """Build the authentication headers for a request."""
        return {
            "authorization": f"Bearer {self.bearer_token}",
            "x-csrf-token": self.csrf_token,
            "cookie": self.cookie_header(),
            "x-twitter-auth-type": "OAuth2Session",
            "x-twitter-active-user": "yes",
            "x-twitter-client-language": "en",
        }
