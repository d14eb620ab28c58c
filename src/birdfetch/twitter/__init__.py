"""Platform API plumbing: credentials, endpoints, extraction and models."""

from birdfetch.twitter.args import FetchArgs, PostArgs, TweetFilter
from birdfetch.twitter.auth import AuthCredential
from birdfetch.twitter.endpoints import (
    GRAPHQL_ENDPOINTS,
    GraphQLEndpoint,
    Request,
    RequestBuilder,
    ResourceType,
    RestEndpoints,
)
from birdfetch.twitter.errors import (
    API_ERROR_MESSAGES,
    api_error_message,
    error_for_api_payload,
    error_for_status,
    http_error_message,
)
from birdfetch.twitter.extractors import extract_data
from birdfetch.twitter.fetcher import FetcherService
from birdfetch.twitter.json_utils import find_by_filter, find_key_by_value
from birdfetch.twitter.models import (
    CursoredData,
    DirectMessage,
    MediaType,
    Tweet,
    TweetEntities,
    TweetMedia,
    User,
)

__all__ = [
    # Fetcher
    "FetcherService",
    # Auth
    "AuthCredential",
    # Endpoints
    "ResourceType",
    "GraphQLEndpoint",
    "GRAPHQL_ENDPOINTS",
    "RestEndpoints",
    "Request",
    "RequestBuilder",
    # Args
    "FetchArgs",
    "PostArgs",
    "TweetFilter",
    # Errors
    "API_ERROR_MESSAGES",
    "api_error_message",
    "http_error_message",
    "error_for_status",
    "error_for_api_payload",
    # Extraction
    "extract_data",
    "find_by_filter",
    "find_key_by_value",
    # Models
    "CursoredData",
    "DirectMessage",
    "MediaType",
    "Tweet",
    "TweetEntities",
    "TweetMedia",
    "User",
]
