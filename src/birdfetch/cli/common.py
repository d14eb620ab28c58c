"""Shared plumbing for CLI commands: client creation, error display and output."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
import pydantic
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from birdfetch.client import Birdfetch
from birdfetch.core import BirdfetchError
from birdfetch.twitter.models import CursoredData, DirectMessage, Tweet, User

T = TypeVar("T")

console = Console()


@dataclass
class CliState:
    """Global options shared by all subcommands through ``ctx.obj``."""

    api_key: str | None = None
    proxy_url: str | None = None
    as_json: bool = False


def create_client(state: CliState) -> Birdfetch:
    """Build the client for one command invocation."""
    return Birdfetch(api_key=state.api_key, proxy_url=state.proxy_url)


def get_state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def run(ctx: typer.Context, operation: Callable[[Birdfetch], Awaitable[T]]) -> T:
    """Run an async operation against a fresh client.

    Library and transport errors are printed in red and end the command
    with exit code 1.
    """
    state = get_state(ctx)

    async def _run() -> T:
        async with create_client(state) as client:
            return await operation(client)

    try:
        return asyncio.run(_run())
    except BirdfetchError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Error: {escape(type(e).__name__)}: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except pydantic.ValidationError as e:
        console.print(f"[red]Invalid arguments: {e.error_count()} error(s)[/red]")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "value"
            console.print(f"[red]  {location}: {escape(error['msg'])}[/red]")
        raise typer.Exit(1)


async def collect(items: AsyncIterator[T]) -> list[T]:
    return [item async for item in items]


def _dump(value: Any) -> Any:
    if isinstance(value, pydantic.BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_dump(item) for item in value]
    return value


def print_json(value: Any) -> None:
    console.print_json(data=_dump(value))


def print_done(ctx: typer.Context, message: str) -> None:
    if get_state(ctx).as_json:
        print_json({"success": True})
    else:
        console.print(f"[green]{message}[/green]")


def _users_table(users: list[User], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Username", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Followers", justify="right", style="yellow")
    table.add_column("Verified", justify="center")
    for user in users:
        table.add_row(
            user.id,
            f"@{user.user_name}",
            escape(user.full_name),
            f"{user.followers_count:,}",
            "[green]Yes[/green]" if user.is_verified else "[red]No[/red]",
        )
    return table


def _tweets_table(tweets: list[Tweet], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Author", style="cyan")
    table.add_column("Text", style="white", overflow="fold")
    table.add_column("Likes", justify="right", style="yellow")
    table.add_column("Retweets", justify="right", style="magenta")
    for tweet in tweets:
        table.add_row(
            tweet.id,
            f"@{tweet.tweet_by.user_name}" if tweet.tweet_by else "-",
            escape(tweet.full_text),
            f"{tweet.like_count:,}",
            f"{tweet.retweet_count:,}",
        )
    return table


def _messages_table(messages: list[DirectMessage], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Sent", style="green")
    table.add_column("From", style="cyan")
    table.add_column("Text", style="white", overflow="fold")
    for message in messages:
        table.add_row(
            message.id,
            message.created_at.isoformat() if message.created_at else "-",
            message.sender_id or "-",
            escape(message.text),
        )
    return table


def print_items(
    ctx: typer.Context,
    items: list[Any],
    title: str,
    next_cursor: str | None = None,
) -> None:
    """Print a list of users, tweets or messages as a table or as JSON."""
    if get_state(ctx).as_json:
        print_json({"items": _dump(items), "next_cursor": next_cursor})
        return

    if not items:
        console.print("[yellow]No results[/yellow]")
    elif isinstance(items[0], User):
        console.print(_users_table(items, title))
    elif isinstance(items[0], Tweet):
        console.print(_tweets_table(items, title))
    else:
        console.print(_messages_table(items, title))

    if next_cursor:
        console.print(f"[dim]Next cursor: {next_cursor}[/dim]")


def print_page(ctx: typer.Context, page: CursoredData[Any], title: str) -> None:
    print_items(ctx, page.items, title, page.next_cursor)


def print_user(ctx: typer.Context, user: User) -> None:
    if get_state(ctx).as_json:
        print_json(user)
        return

    console.print(f"[bold cyan]@{user.user_name}[/bold cyan] ({escape(user.full_name)})")
    console.print(f"[dim]ID: {user.id}[/dim]")
    if user.description:
        console.print(escape(user.description))
    console.print(
        f"Followers: [yellow]{user.followers_count:,}[/yellow]  "
        f"Following: [yellow]{user.followings_count:,}[/yellow]  "
        f"Tweets: [yellow]{user.statuses_count:,}[/yellow]"
    )


def print_tweet(ctx: typer.Context, tweet: Tweet) -> None:
    if get_state(ctx).as_json:
        print_json(tweet)
        return

    author = f"@{tweet.tweet_by.user_name}" if tweet.tweet_by else "unknown"
    console.print(f"[bold cyan]{author}[/bold cyan] [dim]{tweet.id}[/dim]")
    console.print(escape(tweet.full_text))
    console.print(
        f"Likes: [yellow]{tweet.like_count:,}[/yellow]  "
        f"Retweets: [yellow]{tweet.retweet_count:,}[/yellow]  "
        f"Replies: [yellow]{tweet.reply_count:,}[/yellow]"
    )
