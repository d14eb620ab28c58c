"""Resource services built on top of the fetcher."""

from birdfetch.services.message import MessageService
from birdfetch.services.pagination import paginate
from birdfetch.services.tweet import TweetService
from birdfetch.services.user import UserService

__all__ = [
    "MessageService",
    "TweetService",
    "UserService",
    "paginate",
]
