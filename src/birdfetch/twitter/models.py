"""Flat domain models deserialized from raw platform entities."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, field_validator

from birdfetch.twitter.json_utils import dig


TWITTER_DATE_FORMAT = "%a %b %d %H:%M:%S %z %Y"


def _parse_twitter_date(v: Any) -> datetime | None:
    """Parse the platform's ``Wed Oct 10 20:19:24 +0000 2018`` date format."""
    if v is None or v == "":
        return None
    if isinstance(v, datetime):
        return v
    if isinstance(v, str):
        try:
            return datetime.strptime(v, TWITTER_DATE_FORMAT)
        except ValueError:
            return None
    return None


def _to_int(value: Any, default: int | None = 0) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class User(BaseModel):
    """User profile."""

    id: str = Field(..., description="Rest id of the user")
    user_name: str = Field(default="", description="Handle without @")
    full_name: str = Field(default="", description="Display name")
    created_at: datetime | None = Field(default=None)
    description: str = Field(default="")
    is_verified: bool = Field(default=False)
    favourites_count: int = Field(default=0, ge=0)
    followers_count: int = Field(default=0, ge=0)
    followings_count: int = Field(default=0, ge=0)
    statuses_count: int = Field(default=0, ge=0)
    location: str = Field(default="")
    pinned_tweet: str | None = Field(default=None, description="Id of the pinned tweet")
    profile_banner: str | None = Field(default=None)
    profile_image: str | None = Field(default=None)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> datetime | None:
        return _parse_twitter_date(v)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> User:
        """Flatten a raw ``User`` result.

        Raises:
            ValueError: If the node is not a usable user (e.g. ``UserUnavailable``).
        """
        typename = raw.get("__typename")
        if typename not in (None, "User"):
            raise ValueError(f"Not a user entity: {typename}")
        rest_id = raw.get("rest_id")
        if not rest_id:
            raise ValueError("User entity has no rest_id")

        legacy = raw.get("legacy") or {}
        # Newer payloads moved a few legacy fields under "core"/"avatar"/"location"
        core = raw.get("core") or {}
        pinned = legacy.get("pinned_tweet_ids_str") or []

        return cls(
            id=str(rest_id),
            user_name=legacy.get("screen_name") or core.get("screen_name", ""),
            full_name=legacy.get("name") or core.get("name", ""),
            created_at=legacy.get("created_at") or core.get("created_at"),
            description=legacy.get("description", ""),
            is_verified=bool(raw.get("is_blue_verified") or legacy.get("verified")),
            favourites_count=legacy.get("favourites_count", 0),
            followers_count=legacy.get("followers_count", 0),
            followings_count=legacy.get("friends_count", 0),
            statuses_count=legacy.get("statuses_count", 0),
            location=legacy.get("location") or dig(raw, "location", "location", default=""),
            pinned_tweet=pinned[0] if pinned else None,
            profile_banner=legacy.get("profile_banner_url"),
            profile_image=(
                legacy.get("profile_image_url_https")
                or dig(raw, "avatar", "image_url")
            ),
        )


class MediaType(str, Enum):
    """Tweet media types."""

    PHOTO = "photo"
    VIDEO = "video"
    GIF = "animated_gif"


class TweetMedia(BaseModel):
    """Tweet media attachment."""

    id: str = ""
    type: MediaType = MediaType.PHOTO
    url: str = ""

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> TweetMedia:
        media_type = MediaType(raw.get("type", "photo"))
        url = raw.get("media_url_https", "")
        if media_type in (MediaType.VIDEO, MediaType.GIF):
            variants = [
                v
                for v in dig(raw, "video_info", "variants", default=[])
                if v.get("content_type") == "video/mp4"
            ]
            if variants:
                best = max(variants, key=lambda v: v.get("bitrate", 0))
                url = best.get("url", url)
        return cls(id=raw.get("id_str", ""), type=media_type, url=url)


class TweetEntities(BaseModel):
    """Entities parsed out of the tweet text."""

    hashtags: list[str] = Field(default_factory=list)
    mentioned_users: list[str] = Field(default_factory=list)
    urls: list[str] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> TweetEntities:
        return cls(
            hashtags=[h["text"] for h in raw.get("hashtags", []) if h.get("text")],
            mentioned_users=[
                m["screen_name"] for m in raw.get("user_mentions", []) if m.get("screen_name")
            ],
            urls=[
                u.get("expanded_url") or u["url"]
                for u in raw.get("urls", [])
                if u.get("expanded_url") or u.get("url")
            ],
        )


class Tweet(BaseModel):
    """A tweet."""

    id: str = Field(..., description="Rest id of the tweet")
    tweet_by: User | None = Field(default=None)
    created_at: datetime | None = Field(default=None)
    entities: TweetEntities = Field(default_factory=TweetEntities)
    media: list[TweetMedia] = Field(default_factory=list)
    quoted: str | None = Field(default=None, description="Id of the quoted tweet")
    retweeted_tweet: Tweet | None = Field(default=None)
    full_text: str = Field(default="")
    reply_to: str | None = Field(default=None, description="Id of the replied tweet")
    conversation_id: str | None = Field(default=None)
    lang: str = Field(default="")
    quote_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    retweet_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    view_count: int | None = Field(default=None)
    bookmark_count: int = Field(default=0, ge=0)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> datetime | None:
        return _parse_twitter_date(v)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Tweet:
        """Flatten a raw ``Tweet`` result.

        ``TweetWithVisibilityResults`` wrappers are unwrapped first.

        Raises:
            ValueError: If the node is not a usable tweet (e.g. ``TweetTombstone``).
        """
        if raw.get("__typename") == "TweetWithVisibilityResults":
            raw = raw.get("tweet") or {}
        typename = raw.get("__typename")
        if typename not in (None, "Tweet"):
            raise ValueError(f"Not a tweet entity: {typename}")
        rest_id = raw.get("rest_id")
        if not rest_id:
            raise ValueError("Tweet entity has no rest_id")

        legacy = raw.get("legacy") or {}

        return cls(
            id=str(rest_id),
            tweet_by=cls._parse_author(raw),
            created_at=legacy.get("created_at"),
            entities=TweetEntities.from_raw(legacy.get("entities") or {}),
            media=cls._parse_media(legacy),
            quoted=legacy.get("quoted_status_id_str"),
            retweeted_tweet=cls._parse_retweeted(legacy),
            full_text=(
                dig(raw, "note_tweet", "note_tweet_results", "result", "text")
                or legacy.get("full_text", "")
            ),
            reply_to=legacy.get("in_reply_to_status_id_str"),
            conversation_id=legacy.get("conversation_id_str"),
            lang=legacy.get("lang", ""),
            quote_count=legacy.get("quote_count", 0),
            reply_count=legacy.get("reply_count", 0),
            retweet_count=legacy.get("retweet_count", 0),
            like_count=legacy.get("favorite_count", 0),
            view_count=_to_int(dig(raw, "views", "count"), default=None),
            bookmark_count=legacy.get("bookmark_count", 0),
        )

    @staticmethod
    def _parse_author(raw: dict[str, Any]) -> User | None:
        user_result = dig(raw, "core", "user_results", "result")
        if not user_result:
            return None
        try:
            return User.from_raw(user_result)
        except ValueError:
            return None

    @staticmethod
    def _parse_media(legacy: dict[str, Any]) -> list[TweetMedia]:
        media = []
        for raw in dig(legacy, "extended_entities", "media", default=[]):
            try:
                media.append(TweetMedia.from_raw(raw))
            except ValueError:
                continue
        return media

    @classmethod
    def _parse_retweeted(cls, legacy: dict[str, Any]) -> Tweet | None:
        result = dig(legacy, "retweeted_status_result", "result")
        if not result:
            return None
        try:
            return cls.from_raw(result)
        except ValueError:
            return None


class DirectMessage(BaseModel):
    """A direct message inside a conversation."""

    id: str
    conversation_id: str = ""
    sender_id: str = ""
    recipient_id: str | None = None
    text: str = ""
    created_at: datetime | None = None

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_epoch_ms(cls, v: Any) -> datetime | None:
        if v is None or isinstance(v, datetime):
            return v
        ms = _to_int(v, default=None)
        if ms is None:
            return None
        return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> DirectMessage:
        """Flatten a ``message`` entry of a conversation timeline."""
        data = raw.get("message_data") or {}
        message_id = data.get("id") or raw.get("id")
        if not message_id:
            raise ValueError("Message entry has no id")
        return cls(
            id=str(message_id),
            conversation_id=raw.get("conversation_id", ""),
            sender_id=data.get("sender_id", ""),
            recipient_id=data.get("recipient_id"),
            text=data.get("text", ""),
            created_at=data.get("time") or raw.get("time"),
        )


T = TypeVar("T")


class CursoredData(BaseModel, Generic[T]):
    """A page of entities together with the cursor to the next page."""

    items: list[T] = Field(default_factory=list)
    next_cursor: str | None = Field(default=None)

    @property
    def has_more(self) -> bool:
        return bool(self.next_cursor)

    def __len__(self) -> int:
        return len(self.items)
