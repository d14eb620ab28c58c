"""Service for direct message conversations."""

from __future__ import annotations

from collections.abc import AsyncIterator

from birdfetch.services.pagination import paginate
from birdfetch.twitter.endpoints import ResourceType
from birdfetch.twitter.extractors import extract_data
from birdfetch.twitter.fetcher import FetcherService
from birdfetch.twitter.models import CursoredData, DirectMessage


class MessageService(FetcherService):
    """Reading and sending direct messages."""

    async def conversation(
        self,
        my_id: str,
        other_id: str,
        cursor: str | None = None,
    ) -> CursoredData[DirectMessage]:
        """Get a page of the conversation between the session user and another user.

        Args:
            my_id: Rest id of the session user.
            other_id: Rest id of the other participant.
            cursor: ``max_id`` of the page to fetch; newest page when omitted.

        Returns:
            Messages, newest first, and the cursor to older messages.
        """
        data = await self.get_messages(my_id, other_id, cursor=cursor)
        return extract_data(data, ResourceType.DM_CONVERSATION)

    async def send(self, my_id: str, other_id: str, text: str) -> bool:
        """Send a direct message to another user."""
        await self.send_message(my_id, other_id, text)
        return True

    def iter_conversation(
        self,
        my_id: str,
        other_id: str,
        max_items: int | None = None,
    ) -> AsyncIterator[DirectMessage]:
        """Iterate over a conversation from the newest message backwards."""

        async def fetch_page(cursor: str | None) -> CursoredData[DirectMessage]:
            return await self.conversation(my_id, other_id, cursor=cursor)

        return paginate(fetch_page, max_items)
