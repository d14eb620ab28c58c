"""Extraction of flat entities and cursors from raw timeline payloads."""

from __future__ import annotations

from typing import Any, Callable

from birdfetch.core import get_logger
from birdfetch.twitter.endpoints import ResourceType
from birdfetch.twitter.json_utils import dig, find_by_filter
from birdfetch.twitter.models import CursoredData, DirectMessage, Tweet, User


logger = get_logger(__name__)


TWEET_RESOURCES = frozenset({ResourceType.TWEET_DETAILS})

USER_RESOURCES = frozenset(
    {ResourceType.USER_DETAILS, ResourceType.USER_DETAILS_BY_ID}
)

TIMELINE_TWEET_RESOURCES = frozenset(
    {
        ResourceType.TWEET_SEARCH,
        ResourceType.TWEET_REPLIES,
        ResourceType.USER_LIKES,
        ResourceType.LIST_TWEETS,
        ResourceType.USER_TWEETS,
    }
)

TIMELINE_USER_RESOURCES = frozenset(
    {
        ResourceType.TWEET_FAVORITERS,
        ResourceType.TWEET_RETWEETERS,
        ResourceType.USER_FOLLOWERS,
        ResourceType.USER_FOLLOWING,
        ResourceType.USER_SEARCH,
    }
)


def find_raw_entities(data: Any, resource_type: ResourceType) -> list[dict[str, Any]]:
    """Select the raw entities a resource type is interested in."""
    if resource_type in TWEET_RESOURCES:
        return find_by_filter(data, "__typename", "Tweet")
    if resource_type in USER_RESOURCES:
        return find_by_filter(data, "__typename", "User")
    if resource_type in TIMELINE_TWEET_RESOURCES:
        items = find_by_filter(data, "__typename", "TimelineTweet")
        return [r for r in (dig(item, "tweet_results", "result") for item in items) if isinstance(r, dict)]
    if resource_type in TIMELINE_USER_RESOURCES:
        items = find_by_filter(data, "__typename", "TimelineUser")
        return [r for r in (dig(item, "user_results", "result") for item in items) if isinstance(r, dict)]
    if resource_type is ResourceType.DM_CONVERSATION:
        entries = dig(data, "conversation_timeline", "entries", default=[])
        return [
            entry["message"]
            for entry in entries
            if isinstance(entry, dict) and isinstance(entry.get("message"), dict)
        ]
    return []


def find_next_cursor(data: Any, resource_type: ResourceType) -> str | None:
    """Return the cursor pointing at the next page, if any."""
    if resource_type is ResourceType.DM_CONVERSATION:
        timeline = dig(data, "conversation_timeline", default={})
        if timeline.get("status") == "HAS_MORE":
            return timeline.get("min_entry_id")
        return None

    cursors = find_by_filter(data, "cursorType", "Bottom")
    if not cursors:
        return None
    return cursors[0].get("value") or None


def _deserializer(resource_type: ResourceType) -> Callable[[dict[str, Any]], Any] | None:
    if resource_type in TWEET_RESOURCES or resource_type in TIMELINE_TWEET_RESOURCES:
        return Tweet.from_raw
    if resource_type in USER_RESOURCES or resource_type in TIMELINE_USER_RESOURCES:
        return User.from_raw
    if resource_type is ResourceType.DM_CONVERSATION:
        return DirectMessage.from_raw
    return None


def extract_data(data: Any, resource_type: ResourceType) -> CursoredData[Any]:
    """Flatten a raw payload into a page of entities.

    Raw entities that cannot be deserialized (tombstones, unavailable
    users, ...) are skipped rather than failing the whole page.

    Args:
        data: Parsed JSON body of the response.
        resource_type: The resource the payload was requested for.

    Returns:
        The deserialized entities and the bottom cursor.
    """
    deserialize = _deserializer(resource_type)
    items: list[Any] = []

    if deserialize is not None:
        for raw in find_raw_entities(data, resource_type):
            try:
                items.append(deserialize(raw))
            except ValueError as e:
                logger.debug(
                    "extractor.entity_skipped",
                    resource_type=resource_type.name,
                    typename=raw.get("__typename"),
                    reason=str(e),
                )

    page: CursoredData[Any] = CursoredData(
        items=items,
        next_cursor=find_next_cursor(data, resource_type),
    )
    logger.debug(
        "extractor.extracted",
        resource_type=resource_type.name,
        count=len(items),
        has_more=page.has_more,
    )
    return page
