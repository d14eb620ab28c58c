"""Endpoint definitions and request builders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from birdfetch.core import ValidationError
from birdfetch.twitter.args import FetchArgs, PostArgs


class ResourceType(str, Enum):
    """Resource types, each selecting an endpoint and an extraction rule."""

    TWEET_DETAILS = "TweetDetail"
    TWEET_REPLIES = "TweetReplies"
    TWEET_SEARCH = "TweetSearch"
    TWEET_FAVORITERS = "Favoriters"
    TWEET_RETWEETERS = "Retweeters"
    LIST_TWEETS = "ListLatestTweetsTimeline"
    USER_DETAILS = "UserByScreenName"
    USER_DETAILS_BY_ID = "UserByRestId"
    USER_FOLLOWERS = "Followers"
    USER_FOLLOWING = "Following"
    USER_LIKES = "Likes"
    USER_TWEETS = "UserTweets"
    USER_SEARCH = "UserSearch"
    CREATE_TWEET = "CreateTweet"
    FOLLOW_USER = "FollowUser"
    UNFOLLOW_USER = "UnfollowUser"
    DM_CONVERSATION = "DMConversation"
    DM_SEND = "DMSend"


@dataclass(frozen=True)
class GraphQLEndpoint:
    """GraphQL endpoint configuration."""

    query_id: str
    operation_name: str
    method: str = "GET"

    @property
    def path(self) -> str:
        return f"/i/api/graphql/{self.query_id}/{self.operation_name}"


# Query ids from the web client; they rotate whenever the platform redeploys
GRAPHQL_ENDPOINTS: dict[ResourceType, GraphQLEndpoint] = {
    ResourceType.TWEET_DETAILS: GraphQLEndpoint("VWFGPVAGkZMGRKGe3GFFnA", "TweetDetail"),
    ResourceType.TWEET_REPLIES: GraphQLEndpoint("VWFGPVAGkZMGRKGe3GFFnA", "TweetDetail"),
    ResourceType.TWEET_SEARCH: GraphQLEndpoint("gkjsKepM6gl_HmFWoWKfgg", "SearchTimeline"),
    ResourceType.USER_SEARCH: GraphQLEndpoint("gkjsKepM6gl_HmFWoWKfgg", "SearchTimeline"),
    ResourceType.TWEET_FAVORITERS: GraphQLEndpoint("LLkw5EcVutJL6y-2gkz22A", "Favoriters"),
    ResourceType.TWEET_RETWEETERS: GraphQLEndpoint("X-XEqG5qHQSAwmvy00xfyQ", "Retweeters"),
    ResourceType.LIST_TWEETS: GraphQLEndpoint("2TemLyqrMpTeAmysdbnVqw", "ListLatestTweetsTimeline"),
    ResourceType.USER_DETAILS: GraphQLEndpoint("G3KGOASz96M-Qu0nwmGXNg", "UserByScreenName"),
    ResourceType.USER_DETAILS_BY_ID: GraphQLEndpoint("QdS5LJDl99iL_KUzckdfNQ", "UserByRestId"),
    ResourceType.USER_FOLLOWERS: GraphQLEndpoint("rRXFSG5vR6drKr5M37YOTw", "Followers"),
    ResourceType.USER_FOLLOWING: GraphQLEndpoint("iSicc7LrzWGBgDPL0tM_TQ", "Following"),
    ResourceType.USER_LIKES: GraphQLEndpoint("eSSNbhECHHWWALkkQq-YTA", "Likes"),
    ResourceType.USER_TWEETS: GraphQLEndpoint("V1ze5q3ijDS1VeLwLY0m7g", "UserTweets"),
    ResourceType.CREATE_TWEET: GraphQLEndpoint("tTsjMKyhajZvK4q76mpIBg", "CreateTweet", "POST"),
}


class RestEndpoints:
    """v1.1 REST paths used by the mutation helpers."""

    FOLLOW = "/i/api/1.1/friendships/create.json"
    UNFOLLOW = "/i/api/1.1/friendships/destroy.json"
    DM_CONVERSATION = "/i/api/1.1/dm/conversation/{conversation_id}.json"
    DM_NEW = "/i/api/1.1/dm/new2.json"


BASE_FEATURES: dict[str, bool] = {
    "responsive_web_media_download_video_enabled": False,
    "rweb_tipjar_consumption_enabled": True,
    "responsive_web_graphql_exclude_directive_enabled": True,
    "verified_phone_label_enabled": False,
    "creator_subscriptions_tweet_preview_api_enabled": True,
    "responsive_web_graphql_timeline_navigation_enabled": True,
    "responsive_web_graphql_skip_user_profile_image_extensions_enabled": False,
    "communities_web_enable_tweet_community_results_fetch": True,
    "c9s_tweet_anatomy_moderator_badge_enabled": True,
    "articles_preview_enabled": True,
    "tweetypie_unmention_optimization_enabled": True,
    "responsive_web_edit_tweet_api_enabled": True,
    "graphql_is_translatable_rweb_tweet_is_translatable_enabled": True,
    "view_counts_everywhere_api_enabled": True,
    "longform_notetweets_consumption_enabled": True,
    "responsive_web_twitter_article_tweet_consumption_enabled": True,
    "tweet_awards_web_tipping_enabled": False,
    "creator_subscriptions_quote_tweet_preview_enabled": False,
    "freedom_of_speech_not_reach_fetch_enabled": True,
    "standardized_nudges_misinfo": True,
    "tweet_with_visibility_results_prefer_gql_limited_actions_policy_enabled": True,
    "rweb_video_timestamps_enabled": True,
    "longform_notetweets_rich_text_read_enabled": True,
    "longform_notetweets_inline_media_enabled": True,
    "responsive_web_enhance_cards_enabled": False,
}

USER_FEATURES: dict[str, bool] = {
    "hidden_profile_likes_enabled": True,
    "hidden_profile_subscriptions_enabled": True,
    "responsive_web_graphql_exclude_directive_enabled": True,
    "verified_phone_label_enabled": False,
    "subscriptions_verification_info_is_identity_verified_enabled": True,
    "subscriptions_verification_info_verified_since_enabled": True,
    "highlights_tweets_tab_ui_enabled": True,
    "responsive_web_twitter_article_notes_tab_enabled": True,
    "creator_subscriptions_tweet_preview_api_enabled": True,
    "responsive_web_graphql_skip_user_profile_image_extensions_enabled": False,
    "responsive_web_graphql_timeline_navigation_enabled": True,
}

TIMELINE_FEATURES: dict[str, bool] = {
    **BASE_FEATURES,
    "interactive_text_enabled": True,
    "responsive_web_text_conversations_enabled": False,
    "responsive_web_home_pinned_timelines_enabled": True,
}

CREATE_TWEET_FEATURES: dict[str, bool] = {
    "tweetypie_unmention_optimization_enabled": True,
    "responsive_web_edit_tweet_api_enabled": True,
    "graphql_is_translatable_rweb_tweet_is_translatable_enabled": True,
    "view_counts_everywhere_api_enabled": True,
    "longform_notetweets_consumption_enabled": True,
    "responsive_web_twitter_article_tweet_consumption_enabled": False,
    "tweet_awards_web_tipping_enabled": False,
    "responsive_web_home_pinned_timelines_enabled": False,
    "longform_notetweets_rich_text_read_enabled": True,
    "longform_notetweets_inline_media_enabled": True,
    "responsive_web_graphql_exclude_directive_enabled": True,
    "verified_phone_label_enabled": False,
    "freedom_of_speech_not_reach_fetch_enabled": True,
    "standardized_nudges_misinfo": True,
    "tweet_with_visibility_results_prefer_gql_limited_actions_policy_enabled": True,
    "responsive_web_media_download_video_enabled": False,
    "responsive_web_graphql_skip_user_profile_image_extensions_enabled": False,
    "responsive_web_graphql_timeline_navigation_enabled": True,
    "responsive_web_enhance_cards_enabled": False,
}

# Flags sent with every friendship mutation
FRIENDSHIP_FLAGS: dict[str, str] = {
    "include_profile_interstitial_type": "1",
    "include_blocking": "1",
    "include_blocked_by": "1",
    "include_followed_by": "1",
    "include_want_retweets": "1",
    "include_mute_edge": "1",
    "include_can_dm": "1",
    "include_can_media_tag": "1",
    "include_ext_has_nft_avatar": "1",
    "include_ext_is_blue_verified": "1",
    "include_ext_verified_type": "1",
    "include_ext_profile_image_shape": "1",
}

DM_EXT = (
    "mediaColor,altText,mediaStats,highlightedLabel,hasNftAvatar,voiceInfo,"
    "birdwatchPivot,superFollowMetadata,unmentionInfo,editControl"
)

DM_CONVERSATION_PARAMS: dict[str, str] = {
    "context": "FETCH_DM_CONVERSATION",
    **FRIENDSHIP_FLAGS,
    "skip_status": "1",
    "dm_secret_conversations_enabled": "false",
    "krs_registration_enabled": "true",
    "cards_platform": "Web-12",
    "include_cards": "1",
    "include_ext_alt_text": "true",
    "include_ext_limited_action_results": "true",
    "include_quote_count": "true",
    "include_reply_count": "1",
    "tweet_mode": "extended",
    "include_ext_views": "true",
    "dm_users": "false",
    "include_groups": "true",
    "include_inbox_timelines": "true",
    "include_ext_media_color": "true",
    "supports_reactions": "true",
    "include_conversation_info": "true",
    "ext": DM_EXT,
}

DM_SEND_PARAMS: dict[str, str] = {
    "ext": DM_EXT,
    "include_ext_alt_text": "true",
    "include_ext_limited_action_results": "true",
    "include_reply_count": "1",
    "tweet_mode": "extended",
    "include_ext_views": "true",
    "include_groups": "true",
    "include_inbox_timelines": "true",
    "include_ext_media_color": "true",
    "supports_reactions": "true",
}

FORM_HEADERS = {"content-type": "application/x-www-form-urlencoded"}


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


@dataclass(frozen=True)
class Request:
    """A fully prepared HTTP request."""

    url: str
    method: str = "GET"
    params: dict[str, str] = field(default_factory=dict)
    json: dict[str, Any] | None = None
    data: dict[str, str] | None = None
    headers: dict[str, str] = field(default_factory=dict)


class RequestBuilder:
    """Builds the request for a resource type from its arguments."""

    def __init__(self, base_url: str = "https://twitter.com") -> None:
        self.base_url = base_url.rstrip("/")
        self._builders: dict[ResourceType, Callable[[Any], Request]] = {
            ResourceType.TWEET_DETAILS: self._tweet_detail,
            ResourceType.TWEET_REPLIES: self._tweet_detail,
            ResourceType.TWEET_SEARCH: self._tweet_search,
            ResourceType.USER_SEARCH: self._user_search,
            ResourceType.TWEET_FAVORITERS: self._tweet_engagement,
            ResourceType.TWEET_RETWEETERS: self._tweet_engagement,
            ResourceType.LIST_TWEETS: self._list_tweets,
            ResourceType.USER_DETAILS: self._user_by_screen_name,
            ResourceType.USER_DETAILS_BY_ID: self._user_by_rest_id,
            ResourceType.USER_FOLLOWERS: self._user_list,
            ResourceType.USER_FOLLOWING: self._user_list,
            ResourceType.USER_LIKES: self._user_timeline,
            ResourceType.USER_TWEETS: self._user_timeline,
            ResourceType.DM_CONVERSATION: self._dm_conversation,
            ResourceType.CREATE_TWEET: self._create_tweet,
            ResourceType.FOLLOW_USER: self._friendship,
            ResourceType.UNFOLLOW_USER: self._friendship,
            ResourceType.DM_SEND: self._dm_send,
        }

    def build(self, args: FetchArgs | PostArgs) -> Request:
        """Build the request for ``args.resource_type``."""
        return self._builders[args.resource_type](args)

    def graphql_url(self, resource_type: ResourceType) -> str:
        return self.base_url + GRAPHQL_ENDPOINTS[resource_type].path

    def _graphql_get(
        self,
        resource_type: ResourceType,
        variables: dict[str, Any],
        features: dict[str, bool],
        field_toggles: dict[str, bool] | None = None,
    ) -> Request:
        params = {
            "variables": _compact(variables),
            "features": _compact(features),
        }
        if field_toggles is not None:
            params["fieldToggles"] = _compact(field_toggles)
        return Request(url=self.graphql_url(resource_type), params=params)

    @staticmethod
    def _paged(variables: dict[str, Any], args: FetchArgs) -> dict[str, Any]:
        if args.count is not None:
            variables["count"] = args.count
        if args.cursor:
            variables["cursor"] = args.cursor
        return variables

    def _tweet_detail(self, args: FetchArgs) -> Request:
        variables: dict[str, Any] = {
            "focalTweetId": args.id,
            "with_rux_injections": False,
            "includePromotedContent": False,
            "withCommunity": True,
            "withQuickPromoteEligibilityTweetFields": True,
            "withBirdwatchNotes": True,
            "withVoice": True,
            "withV2Timeline": True,
        }
        if args.cursor:
            variables["cursor"] = args.cursor
            variables["referrer"] = "tweet"
        return self._graphql_get(
            args.resource_type,
            variables,
            TIMELINE_FEATURES,
            {"withArticleRichContentState": True, "withArticlePlainText": False},
        )

    def _tweet_search(self, args: FetchArgs) -> Request:
        if args.filter is None:
            raise ValidationError("'filter' is required for tweet search", field="filter")
        variables = self._paged(
            {
                "rawQuery": args.filter.to_query(),
                "querySource": "typed_query",
                "product": "Top" if args.filter.top else "Latest",
            },
            args,
        )
        return self._graphql_get(args.resource_type, variables, TIMELINE_FEATURES)

    def _user_search(self, args: FetchArgs) -> Request:
        variables = self._paged(
            {
                "rawQuery": args.query,
                "querySource": "typed_query",
                "product": "People",
            },
            args,
        )
        return self._graphql_get(args.resource_type, variables, TIMELINE_FEATURES)

    def _tweet_engagement(self, args: FetchArgs) -> Request:
        variables = self._paged(
            {"tweetId": args.id, "includePromotedContent": False},
            args,
        )
        return self._graphql_get(args.resource_type, variables, BASE_FEATURES)

    def _list_tweets(self, args: FetchArgs) -> Request:
        variables = self._paged({"listId": args.id}, args)
        return self._graphql_get(args.resource_type, variables, TIMELINE_FEATURES)

    def _user_by_screen_name(self, args: FetchArgs) -> Request:
        return self._graphql_get(
            args.resource_type,
            {"screen_name": args.id, "withSafetyModeUserFields": True},
            USER_FEATURES,
            {"withAuxiliaryUserLabels": False},
        )

    def _user_by_rest_id(self, args: FetchArgs) -> Request:
        return self._graphql_get(
            args.resource_type,
            {"userId": args.id, "withSafetyModeUserFields": True},
            USER_FEATURES,
        )

    def _user_list(self, args: FetchArgs) -> Request:
        variables = self._paged(
            {"userId": args.id, "includePromotedContent": False},
            args,
        )
        return self._graphql_get(args.resource_type, variables, BASE_FEATURES)

    def _user_timeline(self, args: FetchArgs) -> Request:
        variables = self._paged(
            {
                "userId": args.id,
                "includePromotedContent": False,
                "withClientEventToken": False,
                "withBirdwatchNotes": False,
                "withVoice": True,
                "withV2Timeline": True,
            },
            args,
        )
        return self._graphql_get(args.resource_type, variables, TIMELINE_FEATURES)

    def _dm_conversation(self, args: FetchArgs) -> Request:
        params = dict(DM_CONVERSATION_PARAMS)
        if args.cursor:
            params["max_id"] = args.cursor
        path = RestEndpoints.DM_CONVERSATION.format(conversation_id=args.id)
        return Request(url=self.base_url + path, params=params)

    def _create_tweet(self, args: PostArgs) -> Request:
        variables: dict[str, Any] = {
            "tweet_text": args.text,
            "dark_request": False,
            "media": {"media_entities": [], "possibly_sensitive": False},
            "semantic_annotation_ids": [],
        }
        if args.id:
            variables["reply"] = {
                "in_reply_to_tweet_id": args.id,
                "exclude_reply_user_ids": [],
            }
        endpoint = GRAPHQL_ENDPOINTS[ResourceType.CREATE_TWEET]
        return Request(
            url=self.graphql_url(ResourceType.CREATE_TWEET),
            method=endpoint.method,
            json={
                "variables": variables,
                "features": CREATE_TWEET_FEATURES,
                "queryId": endpoint.query_id,
            },
        )

    def _friendship(self, args: PostArgs) -> Request:
        data = dict(FRIENDSHIP_FLAGS)
        if args.resource_type is ResourceType.UNFOLLOW_USER:
            path = RestEndpoints.UNFOLLOW
            data["skip_status"] = "1"
        else:
            path = RestEndpoints.FOLLOW
        data["user_id"] = str(args.id)
        return Request(
            url=self.base_url + path,
            method="POST",
            data=data,
            headers=dict(FORM_HEADERS),
        )

    def _dm_send(self, args: PostArgs) -> Request:
        return Request(
            url=self.base_url + RestEndpoints.DM_NEW,
            method="POST",
            params=dict(DM_SEND_PARAMS),
            json={
                "cards_platform": "Web-12",
                "conversation_id": args.id,
                "dm_users": False,
                "include_cards": 1,
                "include_quote_count": True,
                "recipient_ids": False,
                "request_id": args.request_id,
                "text": args.text,
            },
        )
