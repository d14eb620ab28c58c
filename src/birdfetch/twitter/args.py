"""Request arguments and their validation per resource type."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator, model_validator

from birdfetch.core import ValidationError

if TYPE_CHECKING:
    from birdfetch.twitter.endpoints import ResourceType


class TweetFilter(BaseModel):
    """Search filter rendered into the platform's advanced search syntax.

    Example:
        >>> TweetFilter(words=["python"], from_users=["guido"], links=False).to_query()
        'python (from:guido) -filter:links'
    """

    words: list[str] = Field(default_factory=list, description="All of these words")
    phrase: str | None = Field(default=None, description="This exact phrase")
    optional_words: list[str] = Field(default_factory=list, description="Any of these words")
    exclude_words: list[str] = Field(default_factory=list, description="None of these words")
    hashtags: list[str] = Field(default_factory=list)
    from_users: list[str] = Field(default_factory=list)
    to_users: list[str] = Field(default_factory=list)
    mentions: list[str] = Field(default_factory=list)
    min_replies: int | None = Field(default=None, ge=0)
    min_likes: int | None = Field(default=None, ge=0)
    min_retweets: int | None = Field(default=None, ge=0)
    language: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    since_id: str | None = None
    max_id: str | None = None
    quoted: str | None = Field(default=None, description="Id of the quoted tweet")
    links: bool | None = Field(default=None, description="False excludes tweets with links")
    replies: bool | None = Field(default=None, description="False excludes replies")
    top: bool = Field(default=False, description="Top results instead of latest")

    @field_validator("hashtags", mode="before")
    @classmethod
    def strip_hash(cls, v: list[str]) -> list[str]:
        return [tag.lstrip("#") for tag in v] if isinstance(v, list) else v

    @field_validator("from_users", "to_users", "mentions", mode="before")
    @classmethod
    def strip_at(cls, v: list[str]) -> list[str]:
        return [name.lstrip("@") for name in v] if isinstance(v, list) else v

    @model_validator(mode="after")
    def check_date_range(self) -> "TweetFilter":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not precede start_date")
        return self

    @staticmethod
    def _any_of(values: list[str], prefix: str = "") -> str:
        if not values:
            return ""
        return "(" + " OR ".join(f"{prefix}{value}" for value in values) + ")"

    def to_query(self) -> str:
        """Render the filter as a search query string."""
        parts = [
            " ".join(self.words),
            f'"{self.phrase}"' if self.phrase else "",
            self._any_of(self.optional_words),
            " ".join(f"-{word}" for word in self.exclude_words),
            self._any_of(self.hashtags, "#"),
            self._any_of(self.from_users, "from:"),
            self._any_of(self.to_users, "to:"),
            self._any_of(self.mentions, "@"),
            f"min_replies:{self.min_replies}" if self.min_replies is not None else "",
            f"min_faves:{self.min_likes}" if self.min_likes is not None else "",
            f"min_retweets:{self.min_retweets}" if self.min_retweets is not None else "",
            f"lang:{self.language}" if self.language else "",
            f"since:{self.start_date.isoformat()}" if self.start_date else "",
            f"until:{self.end_date.isoformat()}" if self.end_date else "",
            f"since_id:{self.since_id}" if self.since_id else "",
            f"max_id:{self.max_id}" if self.max_id else "",
            f"quoted_tweet_id:{self.quoted}" if self.quoted else "",
            "-filter:links" if self.links is False else "",
            "-filter:replies" if self.replies is False else "",
        ]
        return " ".join(part for part in parts if part)


# (min, max, default) page sizes
COUNT_LIMITS: dict[str, tuple[int, int, int]] = {
    "TWEET_SEARCH": (1, 20, 20),
    "USER_SEARCH": (1, 20, 20),
    "LIST_TWEETS": (1, 100, 20),
    "USER_TWEETS": (1, 100, 20),
    "USER_LIKES": (1, 100, 20),
    "TWEET_FAVORITERS": (1, 100, 40),
    "TWEET_RETWEETERS": (1, 100, 40),
    "USER_FOLLOWERS": (1, 100, 40),
    "USER_FOLLOWING": (1, 100, 40),
}

ID_RESOURCES = frozenset(
    {
        "TWEET_DETAILS",
        "TWEET_REPLIES",
        "TWEET_FAVORITERS",
        "TWEET_RETWEETERS",
        "LIST_TWEETS",
        "USER_DETAILS_BY_ID",
        "USER_FOLLOWERS",
        "USER_FOLLOWING",
        "USER_LIKES",
        "USER_TWEETS",
    }
)

READ_RESOURCES = ID_RESOURCES | {"USER_DETAILS", "TWEET_SEARCH", "USER_SEARCH", "DM_CONVERSATION"}

WRITE_RESOURCES = frozenset({"CREATE_TWEET", "FOLLOW_USER", "UNFOLLOW_USER", "DM_SEND"})

CONVERSATION_ID_RE = re.compile(r"^\d+-\d+$")

TWEET_TEXT_LIMIT = 280
MESSAGE_TEXT_LIMIT = 10000


def _require_numeric_id(value: str | None, field: str = "id") -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"'{field}' is required", field=field)
    value = str(value).strip()
    if not value.isdigit():
        raise ValidationError(f"'{field}' must be a numeric id, got {value!r}", field=field)
    return value


def _require_conversation_id(value: str | None) -> str:
    if not value or not CONVERSATION_ID_RE.match(value):
        raise ValidationError(
            f"'id' must be a conversation id of the form '<id>-<id>', got {value!r}",
            field="id",
        )
    return value


def _require_resource(name: str, allowed: frozenset[str], kind: str) -> None:
    if name not in allowed:
        raise ValidationError(
            f"{name} is not a {kind} resource type", field="resource_type"
        )


@dataclass(frozen=True)
class FetchArgs:
    """Arguments of a read request, validated against its resource type."""

    resource_type: ResourceType
    id: str | None = None
    count: int | None = None
    cursor: str | None = None
    filter: TweetFilter | None = None
    query: str | None = None

    def __post_init__(self) -> None:
        name = self.resource_type.name
        _require_resource(name, READ_RESOURCES, "read")

        if name in ID_RESOURCES:
            object.__setattr__(self, "id", _require_numeric_id(self.id))
        elif name == "USER_DETAILS":
            if not self.id or not self.id.strip():
                raise ValidationError("'id' (user name) is required", field="id")
            object.__setattr__(self, "id", self.id.strip().lstrip("@"))
        elif name == "TWEET_SEARCH" and (self.filter is None or not self.filter.to_query()):
            raise ValidationError(
                "'filter' is required for tweet search and must not be empty",
                field="filter",
            )
        elif name == "USER_SEARCH" and not (self.query and self.query.strip()):
            raise ValidationError("'query' is required for user search", field="query")
        elif name == "DM_CONVERSATION":
            _require_conversation_id(self.id)

        limits = COUNT_LIMITS.get(name)
        if limits is not None:
            low, high, default = limits
            if self.count is None:
                object.__setattr__(self, "count", default)
            elif not low <= self.count <= high:
                raise ValidationError(
                    f"'count' must be between {low} and {high} for {name}",
                    field="count",
                )

        if self.cursor is not None and not self.cursor.strip():
            object.__setattr__(self, "cursor", None)


@dataclass(frozen=True)
class PostArgs:
    """Arguments of a write request."""

    resource_type: ResourceType
    id: str | None = None
    text: str | None = None
    request_id: str | None = None

    def __post_init__(self) -> None:
        name = self.resource_type.name
        _require_resource(name, WRITE_RESOURCES, "write")

        if name in ("FOLLOW_USER", "UNFOLLOW_USER"):
            object.__setattr__(self, "id", _require_numeric_id(self.id))
        elif name == "CREATE_TWEET":
            if self.id is not None:
                object.__setattr__(self, "id", _require_numeric_id(self.id))
            self._check_text(TWEET_TEXT_LIMIT)
        elif name == "DM_SEND":
            _require_conversation_id(self.id)
            self._check_text(MESSAGE_TEXT_LIMIT)
            if not self.request_id:
                object.__setattr__(self, "request_id", str(uuid.uuid4()))

    def _check_text(self, limit: int) -> None:
        if not self.text or not self.text.strip():
            raise ValidationError("'text' is required", field="text")
        if len(self.text) > limit:
            raise ValidationError(
                f"'text' must be at most {limit} characters", field="text"
            )
