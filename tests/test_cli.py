import json

import httpx
import pytest
from typer.testing import CliRunner

from birdfetch import __version__
from birdfetch.cli import app as app_module
from birdfetch.cli import common
from birdfetch.client import Birdfetch

from payloads import cursor_entry, raw_tweet, raw_user, timeline, tweet_entry, user_details, user_entry

runner = CliRunner()


@pytest.fixture
def use_transport(monkeypatch, settings):
    """Route CLI commands through a mock transport; returns the installer."""
    monkeypatch.setattr(app_module, "setup_logging", lambda level=None: None)

    def install(transport):
        monkeypatch.setattr(
            common,
            "create_client",
            lambda state: Birdfetch(
                api_key=state.api_key,
                proxy_url=state.proxy_url,
                settings=settings,
                transport=transport,
            ),
        )
        return transport

    return install


def test_version():
    result = runner.invoke(app_module.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_user_details_json(use_transport, make_transport):
    transport = use_transport(make_transport(user_details(raw_user(rest_id="12", screen_name="jack"))))

    result = runner.invoke(app_module.app, ["--json", "user", "details", "@jack"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["id"] == "12"
    assert data["user_name"] == "jack"
    assert len(transport.requests) == 1


def test_followers_table(use_transport, make_transport):
    use_transport(
        make_transport(
            timeline(
                user_entry(raw_user(rest_id="1", screen_name="alice")),
                cursor_entry("next-page"),
            )
        )
    )

    result = runner.invoke(app_module.app, ["user", "followers", "12"])

    assert result.exit_code == 0, result.output
    assert "@alice" in result.output
    assert "next-page" in result.output


def test_tweet_search_json(use_transport, make_transport):
    transport = use_transport(
        make_transport(timeline(tweet_entry(raw_tweet(rest_id="5")), cursor_entry("c1")))
    )

    result = runner.invoke(
        app_module.app,
        ["--json", "tweet", "search", "python", "--from", "guido", "--no-replies"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [item["id"] for item in data["items"]] == ["5"]
    assert data["next_cursor"] == "c1"
    variables = json.loads(transport.requests[0].url.params["variables"])
    assert variables["rawQuery"] == "python (from:guido) -filter:replies"


def test_search_limit_follows_cursors(use_transport, make_transport):
    transport = use_transport(
        make_transport(
            timeline(tweet_entry(raw_tweet(rest_id="1")), cursor_entry("c1")),
            timeline(tweet_entry(raw_tweet(rest_id="2")), cursor_entry("c2")),
        )
    )

    result = runner.invoke(app_module.app, ["--json", "tweet", "search", "python", "--limit", "2"])

    assert result.exit_code == 0, result.output
    assert [item["id"] for item in json.loads(result.output)["items"]] == ["1", "2"]
    assert len(transport.requests) == 2


def test_message_send(use_transport, make_transport):
    transport = use_transport(make_transport({}))

    result = runner.invoke(app_module.app, ["message", "send", "111", "222", "hello"])

    assert result.exit_code == 0, result.output
    assert "Message sent" in result.output
    assert transport.requests[0].url.path == "/i/api/1.1/dm/new2.json"


def test_http_error_exits_with_code_1(use_transport, make_transport):
    use_transport(make_transport(httpx.Response(404, json={})))

    result = runner.invoke(app_module.app, ["tweet", "details", "100"])

    assert result.exit_code == 1
    assert "Not Found" in result.output


def test_invalid_id_exits_with_code_1(use_transport, make_transport):
    transport = use_transport(make_transport({}))

    result = runner.invoke(app_module.app, ["user", "followers", "not-an-id"])

    assert result.exit_code == 1
    assert "numeric id" in result.output
    assert transport.requests == []


def test_bad_api_key_option(use_transport, make_transport):
    use_transport(make_transport({}))

    result = runner.invoke(app_module.app, ["--api-key", "ct0=only", "user", "details", "jack"])

    assert result.exit_code == 1
    assert "missing required cookies" in result.output


def test_transport_failure_exits_with_code_1(use_transport, make_transport, settings):
    transport = use_transport(make_transport(httpx.ConnectError("down")))

    result = runner.invoke(app_module.app, ["user", "followers", "12"])

    assert result.exit_code == 1
    assert "Error: ConnectError: down" in result.output
    assert len(transport.requests) == settings.max_retries


def test_search_without_terms_exits_with_code_1(use_transport, make_transport):
    transport = use_transport(make_transport({}))

    result = runner.invoke(app_module.app, ["tweet", "search", "--top"])

    assert result.exit_code == 1
    assert "'filter' is required" in result.output
    assert transport.requests == []
