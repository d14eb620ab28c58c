"""Tweet commands for birdfetch."""

from __future__ import annotations

from typing import Optional

import typer

from birdfetch.cli.common import collect, print_done, print_items, print_page, print_tweet, run
from birdfetch.twitter.args import TweetFilter

app = typer.Typer(
    name="tweet",
    help="Tweet commands",
    no_args_is_help=True,
)


@app.command("details")
def details(
    ctx: typer.Context,
    tweet_id: str = typer.Argument(..., help="Id of the tweet"),
) -> None:
    """
    Show a single tweet.

    Example:
        birdfetch tweet details 1712345678901234567
    """
    result = run(ctx, lambda client: client.tweet.details(tweet_id))
    print_tweet(ctx, result)


@app.command("search")
def search(
    ctx: typer.Context,
    words: Optional[list[str]] = typer.Argument(None, help="Words the tweets must contain"),
    from_users: Optional[list[str]] = typer.Option(
        None, "--from", "-f", help="Only tweets by these users (repeatable)"
    ),
    hashtags: Optional[list[str]] = typer.Option(
        None, "--hashtag", "-t", help="Only tweets with these hashtags (repeatable)"
    ),
    language: Optional[str] = typer.Option(None, "--lang", help="Language code"),
    min_likes: Optional[int] = typer.Option(None, "--min-likes", min=0),
    no_replies: bool = typer.Option(False, "--no-replies", help="Exclude replies"),
    top: bool = typer.Option(False, "--top", help="Top results instead of latest"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Follow cursors until this many tweets are collected"
    ),
) -> None:
    """
    Search tweets.

    Example:
        birdfetch tweet search python asyncio --from guido --no-replies
        birdfetch tweet search --hashtag python --limit 100
    """

    # Built inside the operation so filter errors are reported like request errors
    def build_filter() -> TweetFilter:
        return TweetFilter(
            words=words or [],
            from_users=from_users or [],
            hashtags=hashtags or [],
            language=language,
            min_likes=min_likes,
            replies=False if no_replies else None,
            top=top,
        )

    if limit:
        tweets = run(
            ctx,
            lambda client: collect(client.tweet.iter_search(build_filter(), limit, count)),
        )
        print_items(ctx, tweets, "Search results")
        return

    page = run(ctx, lambda client: client.tweet.search(build_filter(), count, cursor))
    print_page(ctx, page, "Search results")


@app.command("favoriters")
def favoriters(
    ctx: typer.Context,
    tweet_id: str = typer.Argument(..., help="Id of the tweet"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
) -> None:
    """List users who liked a tweet."""
    page = run(ctx, lambda client: client.tweet.favoriters(tweet_id, count, cursor))
    print_page(ctx, page, "Liked by")


@app.command("retweeters")
def retweeters(
    ctx: typer.Context,
    tweet_id: str = typer.Argument(..., help="Id of the tweet"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
) -> None:
    """List users who retweeted a tweet."""
    page = run(ctx, lambda client: client.tweet.retweeters(tweet_id, count, cursor))
    print_page(ctx, page, "Retweeted by")


@app.command("replies")
def replies(
    ctx: typer.Context,
    tweet_id: str = typer.Argument(..., help="Id of the tweet"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
) -> None:
    """List replies to a tweet."""
    page = run(ctx, lambda client: client.tweet.replies(tweet_id, cursor))
    print_page(ctx, page, "Replies")


@app.command("post")
def post(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text of the tweet"),
) -> None:
    """
    Post a tweet.

    Example:
        birdfetch tweet post "hello world"
    """
    run(ctx, lambda client: client.tweet.tweet(text))
    print_done(ctx, "Tweet posted")


@app.command("reply")
def reply(
    ctx: typer.Context,
    tweet_id: str = typer.Argument(..., help="Id of the tweet to reply to"),
    text: str = typer.Argument(..., help="Text of the reply"),
) -> None:
    """Reply to a tweet."""
    run(ctx, lambda client: client.tweet.reply(tweet_id, text))
    print_done(ctx, "Reply posted")
