"""Service for fetching and posting tweets."""

from __future__ import annotations

from collections.abc import AsyncIterator

from birdfetch.core import ExtractionError, get_logger
from birdfetch.services.pagination import paginate
from birdfetch.twitter.args import TweetFilter
from birdfetch.twitter.endpoints import ResourceType
from birdfetch.twitter.fetcher import FetcherService
from birdfetch.twitter.models import CursoredData, Tweet, User


logger = get_logger(__name__)


def _as_filter(query: TweetFilter | str) -> TweetFilter:
    if isinstance(query, TweetFilter):
        return query
    return TweetFilter(words=[query])


class TweetService(FetcherService):
    """Tweet details, search, engagement listings, replies and posting."""

    async def details(self, id: str) -> Tweet:
        """Get the details of a single tweet.

        Args:
            id: Rest id of the tweet.

        Returns:
            The tweet with the given id.

        Raises:
            ExtractionError: If the response contains no tweet.
        """
        page = await self.fetch(ResourceType.TWEET_DETAILS, id=id)
        if not page.items:
            raise ExtractionError(
                f"Tweet not found: {id}",
                resource_type=ResourceType.TWEET_DETAILS.name,
            )
        target = str(id).strip()
        for tweet in page.items:
            if tweet.id == target:
                return tweet
        logger.debug("tweet.details_id_mismatch", requested=target, returned=page.items[0].id)
        return page.items[0]

    async def search(
        self,
        query: TweetFilter | str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredData[Tweet]:
        """Search tweets matching a filter (or a plain query string)."""
        return await self.fetch(
            ResourceType.TWEET_SEARCH,
            filter=_as_filter(query),
            count=count,
            cursor=cursor,
        )

    async def list_tweets(
        self,
        list_id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredData[Tweet]:
        """Get the latest tweets of a list."""
        return await self.fetch(
            ResourceType.LIST_TWEETS, id=list_id, count=count, cursor=cursor
        )

    async def favoriters(
        self,
        id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredData[User]:
        """Get the users who liked a tweet."""
        return await self.fetch(
            ResourceType.TWEET_FAVORITERS, id=id, count=count, cursor=cursor
        )

    async def retweeters(
        self,
        id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredData[User]:
        """Get the users who retweeted a tweet."""
        return await self.fetch(
            ResourceType.TWEET_RETWEETERS, id=id, count=count, cursor=cursor
        )

    async def replies(self, id: str, cursor: str | None = None) -> CursoredData[Tweet]:
        """Get the replies to a tweet; the tweet itself is left out."""
        page = await self.fetch(ResourceType.TWEET_REPLIES, id=id, cursor=cursor)
        target = str(id).strip()
        return CursoredData[Tweet](
            items=[tweet for tweet in page.items if tweet.id != target],
            next_cursor=page.next_cursor,
        )

    async def tweet(self, text: str) -> bool:
        """Post a new tweet."""
        await self.post_tweet(text)
        return True

    async def reply(self, id: str, text: str) -> bool:
        """Reply to a tweet."""
        await self.reply_tweet(id, text)
        return True

    def iter_search(
        self,
        query: TweetFilter | str,
        max_items: int | None = None,
        page_size: int | None = None,
    ) -> AsyncIterator[Tweet]:
        """Iterate over all search results."""
        tweet_filter = _as_filter(query)

        async def fetch_page(cursor: str | None) -> CursoredData[Tweet]:
            return await self.search(tweet_filter, count=page_size, cursor=cursor)

        return paginate(fetch_page, max_items)

    def iter_replies(self, id: str, max_items: int | None = None) -> AsyncIterator[Tweet]:
        """Iterate over all replies to a tweet."""

        async def fetch_page(cursor: str | None) -> CursoredData[Tweet]:
            return await self.replies(id, cursor=cursor)

        return paginate(fetch_page, max_items)
