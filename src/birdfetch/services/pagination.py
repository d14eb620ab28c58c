"""Cursor-driven iteration over paged resources."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from birdfetch.core import get_logger
from birdfetch.twitter.models import CursoredData


T = TypeVar("T")

logger = get_logger(__name__)


async def paginate(
    fetch_page: Callable[[str | None], Awaitable[CursoredData[T]]],
    max_items: int | None = None,
) -> AsyncIterator[T]:
    """Yield items page by page until the listing is exhausted.

    Iteration stops when a page is empty, carries no cursor, or repeats the
    cursor it was requested with.

    Args:
        fetch_page: Called with the cursor of the page to fetch (``None`` first).
        max_items: Maximum items to yield (None for all).

    Yields:
        Items in the order the platform returns them.
    """
    if max_items is not None and max_items <= 0:
        return

    cursor: str | None = None
    count = 0
    pages = 0

    while True:
        page = await fetch_page(cursor)
        pages += 1

        for item in page.items:
            yield item
            count += 1
            if max_items is not None and count >= max_items:
                return

        if not page.items or not page.next_cursor or page.next_cursor == cursor:
            logger.debug("pagination.exhausted", pages=pages, items=count)
            return

        cursor = page.next_cursor
