"""Facade bundling all resource services behind one session."""

from __future__ import annotations

from typing import Any

import httpx

from birdfetch.core import Settings, get_logger, get_settings
from birdfetch.services import MessageService, TweetService, UserService


logger = get_logger(__name__)


class Birdfetch:
    """Entry point of the library.

    Usage:
        async with Birdfetch(api_key="ct0=...;auth_token=...") as client:
            tweet = await client.tweet.details("1234567890")
            page = await client.user.followers(tweet.tweet_by.id)
    """

    def __init__(
        self,
        api_key: str | None = None,
        proxy_url: str | None = None,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize all services with the same credentials.

        Args:
            api_key: Cookie string of a logged-in session. Defaults to
                ``Settings.api_key``.
            proxy_url: Optional proxy for all requests.
            settings: Settings override.
            transport: Custom httpx transport shared by all services.

        Raises:
            ConfigurationError: If the API key is missing or malformed.
        """
        self.settings = settings or get_settings()
        options: dict[str, Any] = {"settings": self.settings, "transport": transport}
        self.tweet = TweetService(api_key, proxy_url, **options)
        self.user = UserService(api_key, proxy_url, **options)
        self.message = MessageService(api_key, proxy_url, **options)
        logger.debug("client.initialized", proxied=bool(self.tweet.proxy_url))

    @classmethod
    def from_settings(cls) -> "Birdfetch":
        """Create client from application settings."""
        return cls()

    async def __aenter__(self) -> "Birdfetch":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP clients of all services."""
        for service in (self.tweet, self.user, self.message):
            await service.close()
