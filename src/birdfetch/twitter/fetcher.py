"""Base service handling authentication, HTTP requests and error mapping."""

from __future__ import annotations

import time
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from birdfetch.core import (
    BirdfetchError,
    HttpError,
    LogContext,
    ServerError,
    Settings,
    configure_default_logging,
    get_logger,
    get_settings,
)
from birdfetch.twitter.args import FetchArgs, PostArgs
from birdfetch.twitter.auth import AuthCredential
from birdfetch.twitter.endpoints import Request, RequestBuilder, ResourceType
from birdfetch.twitter.errors import error_for_api_payload, error_for_status
from birdfetch.twitter.extractors import extract_data
from birdfetch.twitter.models import CursoredData


logger = get_logger(__name__)


# Web client headers
DEFAULT_HEADERS = {
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.9",
    "Origin": "https://twitter.com",
    "Referer": "https://twitter.com/",
    "Sec-Ch-Ua": '"Chromium";v="122", "Not(A:Brand";v="24", "Google Chrome";v="122"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"macOS"',
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "same-origin",
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
}

RETRYABLE_ERRORS = (ServerError, httpx.TransportError)


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "fetcher.retrying",
        attempt=retry_state.attempt_number,
        error=str(exc),
        wait_seconds=round(retry_state.next_action.sleep, 2) if retry_state.next_action else None,
    )


class FetcherService:
    """Sends requests for resource types and extracts their payloads.

    Usage:
        async with FetcherService(api_key) as fetcher:
            page = await fetcher.fetch(ResourceType.USER_FOLLOWERS, id="12", count=20)
            for user in page.items:
                print(user.user_name)
    """

    def __init__(
        self,
        api_key: str | None = None,
        proxy_url: str | None = None,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            api_key: Cookie string of a logged-in session. Defaults to
                ``Settings.api_key``.
            proxy_url: Optional proxy for all requests. Defaults to
                ``Settings.proxy_url``.
            settings: Settings override.
            transport: Custom httpx transport; takes precedence over ``proxy_url``.

        Raises:
            ConfigurationError: If the API key is missing or malformed.
        """
        configure_default_logging()
        self.settings = settings or get_settings()
        self.credential = AuthCredential.from_api_key(
            api_key if api_key is not None else self.settings.api_key
        )
        self.proxy_url = proxy_url if proxy_url is not None else self.settings.proxy_url
        self.request_builder = RequestBuilder(self.settings.base_url)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "FetcherService":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _create_client(self) -> httpx.AsyncClient:
        """Create an httpx client routed through the proxy, if any."""
        transport = self._transport
        if transport is None and self.proxy_url:
            transport = httpx.AsyncHTTPTransport(proxy=self.proxy_url, http2=True)

        return httpx.AsyncClient(
            headers=DEFAULT_HEADERS,
            timeout=httpx.Timeout(self.settings.timeout),
            transport=transport,
            follow_redirects=True,
            http2=True,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = self._create_client()
        return self._client

    def _handle_http_error(self, response: httpx.Response) -> None:
        """Raise the typed error for any non-success status."""
        if response.is_success:
            return

        error = error_for_status(
            response.status_code,
            url=str(response.request.url),
            retry_after=self._retry_after(response),
        )
        logger.warning(
            "fetcher.http_error",
            status_code=response.status_code,
            path=response.request.url.path,
            error=error.message,
        )
        raise error

    def _handle_api_error(self, data: Any) -> None:
        """Raise the typed error when the body carries platform errors."""
        if not isinstance(data, dict):
            return
        errors = data.get("errors")
        if not errors or not isinstance(errors, list):
            return

        error = error_for_api_payload(errors)
        logger.warning("fetcher.api_error", code=error.code, error=error.message)
        raise error

    @staticmethod
    def _retry_after(response: httpx.Response) -> int | None:
        """Seconds until the rate limit resets, from either header flavour."""
        retry_after = response.headers.get("retry-after", "")
        if retry_after.isdigit():
            return int(retry_after)
        reset = response.headers.get("x-rate-limit-reset", "")
        if reset.isdigit():
            return max(0, int(reset) - int(time.time()))
        return None

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise HttpError(
                "Response body is not valid JSON",
                status_code=response.status_code,
                url=str(response.request.url),
            ) from e

    async def _send(self, request: Request) -> Any:
        client = self._get_client()
        headers = {**self.credential.to_header(), **request.headers}

        logger.debug("fetcher.request", method=request.method, url=request.url)
        response = await client.request(
            request.method,
            request.url,
            params=request.params or None,
            json=request.json,
            data=request.data,
            headers=headers,
        )

        self._handle_http_error(response)
        data = self._parse_json(response)
        self._handle_api_error(data)
        return data

    async def _request(self, request: Request) -> Any:
        """Send a request and return its parsed JSON body.

        GET requests are retried on server and transport errors; writes are
        sent exactly once.

        Raises:
            HttpError: On a non-success status.
            ApiError: On a platform error payload.
            httpx.TransportError: When the transport keeps failing.
        """
        attempts = self.settings.max_retries if request.method == "GET" else 1

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(
                min=self.settings.retry_wait_min,
                max=self.settings.retry_wait_max,
            ),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before_sleep=_log_retry,
            reraise=True,
        ):
            with attempt:
                return await self._send(request)

        raise BirdfetchError(f"Request failed after {attempts} attempts")

    async def fetch(self, resource_type: ResourceType, **kwargs: Any) -> CursoredData[Any]:
        """Fetch a resource and extract its entities.

        Args:
            resource_type: The resource to fetch.
            **kwargs: Resource specific arguments (see ``FetchArgs``).

        Returns:
            The extracted page of entities.
        """
        args = FetchArgs(resource_type, **kwargs)
        request = self.request_builder.build(args)
        with LogContext(resource_type=resource_type.name):
            data = await self._request(request)
            return extract_data(data, resource_type)

    async def post(self, resource_type: ResourceType, **kwargs: Any) -> bool:
        """Post a resource. Returns ``True`` once the platform accepted it."""
        await self._post_raw(resource_type, **kwargs)
        return True

    async def _post_raw(self, resource_type: ResourceType, **kwargs: Any) -> dict[str, Any]:
        args = PostArgs(resource_type, **kwargs)
        request = self.request_builder.build(args)
        with LogContext(resource_type=resource_type.name):
            data = await self._request(request)
        logger.info("fetcher.posted", resource_type=resource_type.name)
        return data

    async def post_follow(self, user_id: str) -> dict[str, Any]:
        """Follow a user. Returns the raw response."""
        return await self._post_raw(ResourceType.FOLLOW_USER, id=user_id)

    async def unfollow(self, user_id: str) -> dict[str, Any]:
        """Unfollow a user. Returns the raw response."""
        return await self._post_raw(ResourceType.UNFOLLOW_USER, id=user_id)

    async def get_messages(
        self,
        my_id: str,
        other_id: str,
        cursor: str | None = None,
    ) -> dict[str, Any]:
        """Get the raw direct message conversation between two users."""
        args = FetchArgs(
            ResourceType.DM_CONVERSATION,
            id=f"{other_id}-{my_id}",
            cursor=cursor,
        )
        return await self._request(self.request_builder.build(args))

    async def send_message(
        self,
        my_id: str,
        other_id: str,
        text: str,
        request_id: str | None = None,
    ) -> dict[str, Any]:
        """Send a direct message. ``request_id`` defaults to a fresh uuid4."""
        return await self._post_raw(
            ResourceType.DM_SEND,
            id=f"{other_id}-{my_id}",
            text=text,
            request_id=request_id,
        )

    async def reply_tweet(self, tweet_id: str, text: str) -> dict[str, Any]:
        """Reply to a tweet. Returns the raw response."""
        return await self._post_raw(ResourceType.CREATE_TWEET, id=tweet_id, text=text)

    async def post_tweet(self, text: str) -> dict[str, Any]:
        """Post a new tweet. Returns the raw response."""
        return await self._post_raw(ResourceType.CREATE_TWEET, text=text)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
