import logging
from typing import Any

import httpx
import pytest
import structlog

from birdfetch.core import Settings

from payloads import API_KEY


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep structured log output away from captured stdout."""
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    """Settings with a valid session and no retry back-off."""
    return Settings(
        api_key=API_KEY,
        base_url="https://twitter.com",
        max_retries=3,
        retry_wait_min=0,
        retry_wait_max=0,
    )


class RecordingTransport(httpx.MockTransport):
    """Mock transport answering with queued responses and recording requests.

    Queue items may be a dict (sent as a 200 JSON body), an ``httpx.Response``
    or an exception to raise. The last item is repeated once the queue runs dry.
    """

    def __init__(self, *responses: Any) -> None:
        self.requests: list[httpx.Request] = []
        self._queue = list(responses)
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._queue.pop(0) if len(self._queue) > 1 else self._queue[0]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return httpx.Response(
                item.status_code,
                headers=item.headers,
                content=item.content,
            )
        return httpx.Response(200, json=item)


@pytest.fixture
def make_transport():
    return RecordingTransport
