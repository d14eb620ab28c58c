from birdfetch.twitter.endpoints import ResourceType
from birdfetch.twitter.extractors import extract_data, find_next_cursor
from birdfetch.twitter.models import DirectMessage, Tweet, User

from payloads import (
    cursor_entry,
    dm_conversation,
    raw_tweet,
    raw_user,
    timeline,
    tweet_entry,
    user_details,
    user_entry,
)


class TestTimelineExtraction:
    def test_tweets_with_bottom_cursor(self):
        data = timeline(
            cursor_entry("top-1", "Top"),
            tweet_entry(raw_tweet(rest_id="1")),
            tweet_entry(raw_tweet(rest_id="2")),
            cursor_entry("bottom-1"),
        )

        page = extract_data(data, ResourceType.TWEET_SEARCH)

        assert [tweet.id for tweet in page.items] == ["1", "2"]
        assert all(isinstance(tweet, Tweet) for tweet in page.items)
        assert page.next_cursor == "bottom-1"

    def test_users(self):
        data = timeline(
            user_entry(raw_user(rest_id="1", screen_name="a")),
            user_entry(raw_user(rest_id="2", screen_name="b")),
            cursor_entry("next"),
        )

        page = extract_data(data, ResourceType.USER_FOLLOWERS)

        assert [user.user_name for user in page.items] == ["a", "b"]
        assert all(isinstance(user, User) for user in page.items)
        assert page.next_cursor == "next"

    def test_unusable_entities_are_skipped(self):
        data = timeline(
            tweet_entry(raw_tweet(rest_id="1")),
            tweet_entry({"__typename": "TweetTombstone"}),
            tweet_entry(raw_tweet(rest_id="3")),
        )

        page = extract_data(data, ResourceType.USER_TWEETS)

        assert [tweet.id for tweet in page.items] == ["1", "3"]

    def test_visibility_wrapped_tweet(self):
        wrapped = {"__typename": "TweetWithVisibilityResults", "tweet": raw_tweet(rest_id="9")}

        page = extract_data(timeline(tweet_entry(wrapped)), ResourceType.USER_LIKES)

        assert [tweet.id for tweet in page.items] == ["9"]

    def test_empty_payload(self):
        page = extract_data({}, ResourceType.TWEET_SEARCH)

        assert page.items == []
        assert page.next_cursor is None

    def test_write_resources_extract_nothing(self):
        page = extract_data({"data": {"create_tweet": {}}}, ResourceType.CREATE_TWEET)

        assert page.items == []


class TestDetailsExtraction:
    def test_tweet_details_finds_tweet_nodes(self):
        data = {
            "data": {
                "threaded_conversation_with_injections_v2": {
                    "instructions": [
                        {
                            "type": "TimelineAddEntries",
                            "entries": [tweet_entry(raw_tweet(rest_id="100"))],
                        }
                    ]
                }
            }
        }

        page = extract_data(data, ResourceType.TWEET_DETAILS)

        assert [tweet.id for tweet in page.items] == ["100"]

    def test_user_details(self):
        page = extract_data(user_details(raw_user(rest_id="12")), ResourceType.USER_DETAILS)

        assert [user.id for user in page.items] == ["12"]
        assert page.next_cursor is None


class TestCursor:
    def test_first_bottom_cursor_wins(self):
        data = timeline(cursor_entry("first"), cursor_entry("second"))

        assert find_next_cursor(data, ResourceType.USER_FOLLOWING) == "first"

    def test_empty_cursor_value_is_none(self):
        data = timeline(cursor_entry(""))

        assert find_next_cursor(data, ResourceType.USER_FOLLOWING) is None


class TestConversationExtraction:
    def test_messages_and_cursor(self):
        data = dm_conversation(
            ("3", "222", "newest"),
            ("2", "111", "middle"),
            status="HAS_MORE",
            min_entry_id="2",
        )

        page = extract_data(data, ResourceType.DM_CONVERSATION)

        assert [message.text for message in page.items] == ["newest", "middle"]
        assert all(isinstance(message, DirectMessage) for message in page.items)
        assert page.next_cursor == "2"

    def test_end_of_conversation(self):
        data = dm_conversation(("1", "111", "first"), status="AT_END", min_entry_id="1")

        page = extract_data(data, ResourceType.DM_CONVERSATION)

        assert len(page) == 1
        assert page.next_cursor is None

    def test_non_message_entries_are_ignored(self):
        data = dm_conversation(("1", "111", "hi"))
        data["conversation_timeline"]["entries"].append({"trust_conversation": {"id": "x"}})

        assert len(extract_data(data, ResourceType.DM_CONVERSATION)) == 1
