import json

import pytest

from birdfetch.core import ValidationError
from birdfetch.twitter.args import FetchArgs, PostArgs, TweetFilter
from birdfetch.twitter.endpoints import (
    GRAPHQL_ENDPOINTS,
    RequestBuilder,
    ResourceType,
)


def variables_of(request):
    return json.loads(request.params["variables"])


class TestRequestBuilder:
    builder = RequestBuilder("https://twitter.com/")

    def test_every_read_resource_has_a_graphql_endpoint(self):
        reads = set(ResourceType) - {
            ResourceType.FOLLOW_USER,
            ResourceType.UNFOLLOW_USER,
            ResourceType.DM_CONVERSATION,
            ResourceType.DM_SEND,
        }

        assert reads <= set(GRAPHQL_ENDPOINTS)

    def test_tweet_detail(self):
        request = self.builder.build(FetchArgs(ResourceType.TWEET_DETAILS, id="100"))
        endpoint = GRAPHQL_ENDPOINTS[ResourceType.TWEET_DETAILS]

        assert request.method == "GET"
        assert request.url == f"https://twitter.com/i/api/graphql/{endpoint.query_id}/TweetDetail"
        assert variables_of(request)["focalTweetId"] == "100"
        assert "cursor" not in variables_of(request)
        assert json.loads(request.params["features"])
        assert "fieldToggles" in request.params

    def test_tweet_replies_with_cursor(self):
        request = self.builder.build(
            FetchArgs(ResourceType.TWEET_REPLIES, id="100", cursor="c1")
        )

        variables = variables_of(request)
        assert variables["cursor"] == "c1"
        assert variables["referrer"] == "tweet"

    def test_params_are_compact_json(self):
        request = self.builder.build(FetchArgs(ResourceType.USER_FOLLOWERS, id="12"))

        assert " " not in request.params["variables"]
        assert variables_of(request) == {
            "userId": "12",
            "includePromotedContent": False,
            "count": 40,
        }

    def test_tweet_search(self):
        request = self.builder.build(
            FetchArgs(
                ResourceType.TWEET_SEARCH,
                filter=TweetFilter(words=["python"], top=True),
                count=10,
                cursor="c2",
            )
        )

        variables = variables_of(request)
        assert request.url.endswith("/SearchTimeline")
        assert variables["rawQuery"] == "python"
        assert variables["product"] == "Top"
        assert variables["count"] == 10
        assert variables["cursor"] == "c2"

    def test_tweet_search_without_filter(self):
        args = FetchArgs(ResourceType.TWEET_SEARCH, filter=TweetFilter(words=["python"]))
        object.__setattr__(args, "filter", None)

        with pytest.raises(ValidationError) as exc_info:
            self.builder.build(args)
        assert exc_info.value.field == "filter"

    def test_user_search(self):
        request = self.builder.build(FetchArgs(ResourceType.USER_SEARCH, query="jack"))

        assert variables_of(request)["product"] == "People"
        assert variables_of(request)["rawQuery"] == "jack"

    def test_user_by_screen_name(self):
        request = self.builder.build(FetchArgs(ResourceType.USER_DETAILS, id="@jack"))

        assert variables_of(request)["screen_name"] == "jack"

    def test_dm_conversation(self):
        request = self.builder.build(
            FetchArgs(ResourceType.DM_CONVERSATION, id="222-111", cursor="555")
        )

        assert request.url == "https://twitter.com/i/api/1.1/dm/conversation/222-111.json"
        assert request.params["max_id"] == "555"
        assert request.params["context"] == "FETCH_DM_CONVERSATION"

    def test_create_tweet(self):
        request = self.builder.build(PostArgs(ResourceType.CREATE_TWEET, text="hi"))

        assert request.method == "POST"
        assert request.json["variables"]["tweet_text"] == "hi"
        assert "reply" not in request.json["variables"]
        assert request.json["queryId"] == GRAPHQL_ENDPOINTS[ResourceType.CREATE_TWEET].query_id

    def test_reply_tweet(self):
        request = self.builder.build(PostArgs(ResourceType.CREATE_TWEET, id="100", text="hi"))

        assert request.json["variables"]["reply"]["in_reply_to_tweet_id"] == "100"

    def test_follow_and_unfollow(self):
        follow = self.builder.build(PostArgs(ResourceType.FOLLOW_USER, id="12"))
        unfollow = self.builder.build(PostArgs(ResourceType.UNFOLLOW_USER, id="12"))

        assert follow.url.endswith("/friendships/create.json")
        assert follow.data["user_id"] == "12"
        assert "skip_status" not in follow.data
        assert follow.headers["content-type"] == "application/x-www-form-urlencoded"
        assert unfollow.url.endswith("/friendships/destroy.json")
        assert unfollow.data["skip_status"] == "1"

    def test_dm_send(self):
        request = self.builder.build(
            PostArgs(ResourceType.DM_SEND, id="222-111", text="hi", request_id="r1")
        )

        assert request.method == "POST"
        assert request.url.endswith("/dm/new2.json")
        assert request.json["conversation_id"] == "222-111"
        assert request.json["request_id"] == "r1"
        assert request.json["text"] == "hi"
