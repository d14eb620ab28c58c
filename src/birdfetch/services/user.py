"""Service for fetching users and managing follows."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

from birdfetch.core import ExtractionError
from birdfetch.services.pagination import paginate
from birdfetch.twitter.endpoints import ResourceType
from birdfetch.twitter.fetcher import FetcherService
from birdfetch.twitter.models import CursoredData, Tweet, User


class UserService(FetcherService):
    """User details, relationship listings, user timelines and follows."""

    async def details(self, user_name: str) -> User:
        """Get a user by handle.

        Args:
            user_name: Handle of the user, with or without a leading @.

        Raises:
            ExtractionError: If the response contains no user.
        """
        page = await self.fetch(ResourceType.USER_DETAILS, id=user_name)
        target = user_name.strip().lstrip("@").lower()
        return self._pick(page, lambda user: user.user_name.lower() == target, user_name)

    async def details_by_id(self, id: str) -> User:
        """Get a user by rest id.

        Raises:
            ExtractionError: If the response contains no user.
        """
        page = await self.fetch(ResourceType.USER_DETAILS_BY_ID, id=id)
        target = str(id).strip()
        return self._pick(page, lambda user: user.id == target, id)

    @staticmethod
    def _pick(
        page: CursoredData[User],
        matches: Callable[[User], bool],
        requested: str,
    ) -> User:
        if not page.items:
            raise ExtractionError(
                f"User not found: {requested}",
                resource_type=ResourceType.USER_DETAILS.name,
            )
        for user in page.items:
            if matches(user):
                return user
        return page.items[0]

    async def followers(
        self,
        id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredData[User]:
        """Get the followers of a user."""
        return await self.fetch(
            ResourceType.USER_FOLLOWERS, id=id, count=count, cursor=cursor
        )

    async def following(
        self,
        id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredData[User]:
        """Get the users a user follows."""
        return await self.fetch(
            ResourceType.USER_FOLLOWING, id=id, count=count, cursor=cursor
        )

    async def likes(
        self,
        id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredData[Tweet]:
        """Get the tweets a user liked."""
        return await self.fetch(
            ResourceType.USER_LIKES, id=id, count=count, cursor=cursor
        )

    async def timeline(
        self,
        id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredData[Tweet]:
        """Get the tweets posted by a user."""
        return await self.fetch(
            ResourceType.USER_TWEETS, id=id, count=count, cursor=cursor
        )

    async def search(
        self,
        query: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredData[User]:
        """Search users by keyword."""
        return await self.fetch(
            ResourceType.USER_SEARCH, query=query, count=count, cursor=cursor
        )

    async def follow(self, id: str) -> bool:
        """Follow a user."""
        await self.post_follow(id)
        return True

    async def unfollow_user(self, id: str) -> bool:
        """Unfollow a user."""
        await self.unfollow(id)
        return True

    def iter_followers(
        self,
        id: str,
        max_items: int | None = None,
        page_size: int | None = None,
    ) -> AsyncIterator[User]:
        """Iterate over all followers of a user."""

        async def fetch_page(cursor: str | None) -> CursoredData[User]:
            return await self.followers(id, count=page_size, cursor=cursor)

        return paginate(fetch_page, max_items)

    def iter_following(
        self,
        id: str,
        max_items: int | None = None,
        page_size: int | None = None,
    ) -> AsyncIterator[User]:
        """Iterate over all users a user follows."""

        async def fetch_page(cursor: str | None) -> CursoredData[User]:
            return await self.following(id, count=page_size, cursor=cursor)

        return paginate(fetch_page, max_items)

    def iter_timeline(
        self,
        id: str,
        max_items: int | None = None,
        page_size: int | None = None,
    ) -> AsyncIterator[Tweet]:
        """Iterate over all tweets of a user."""

        async def fetch_page(cursor: str | None) -> CursoredData[Tweet]:
            return await self.timeline(id, count=page_size, cursor=cursor)

        return paginate(fetch_page, max_items)
