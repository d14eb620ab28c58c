"""User commands for birdfetch."""

from __future__ import annotations

from typing import Optional

import typer

from birdfetch.cli.common import collect, print_done, print_items, print_page, print_user, run

app = typer.Typer(
    name="user",
    help="User commands",
    no_args_is_help=True,
)


@app.command("details")
def details(
    ctx: typer.Context,
    user: str = typer.Argument(..., help="Handle of the user, or the rest id with --id"),
    by_id: bool = typer.Option(False, "--id", help="Treat USER as a rest id"),
) -> None:
    """
    Show a user profile.

    Example:
        birdfetch user details @jack
        birdfetch user details 12 --id
    """
    if by_id:
        result = run(ctx, lambda client: client.user.details_by_id(user))
    else:
        result = run(ctx, lambda client: client.user.details(user))
    print_user(ctx, result)


@app.command("followers")
def followers(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Rest id of the user"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Follow cursors until this many users are collected"
    ),
) -> None:
    """List the followers of a user."""
    if limit:
        users = run(
            ctx, lambda client: collect(client.user.iter_followers(user_id, limit, count))
        )
        print_items(ctx, users, "Followers")
        return

    page = run(ctx, lambda client: client.user.followers(user_id, count, cursor))
    print_page(ctx, page, "Followers")


@app.command("following")
def following(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Rest id of the user"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Follow cursors until this many users are collected"
    ),
) -> None:
    """List the users a user follows."""
    if limit:
        users = run(
            ctx, lambda client: collect(client.user.iter_following(user_id, limit, count))
        )
        print_items(ctx, users, "Following")
        return

    page = run(ctx, lambda client: client.user.following(user_id, count, cursor))
    print_page(ctx, page, "Following")


@app.command("likes")
def likes(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Rest id of the user"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
) -> None:
    """List the tweets a user liked."""
    page = run(ctx, lambda client: client.user.likes(user_id, count, cursor))
    print_page(ctx, page, "Likes")


@app.command("timeline")
def timeline(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Rest id of the user"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Follow cursors until this many tweets are collected"
    ),
) -> None:
    """List the tweets posted by a user."""
    if limit:
        tweets = run(
            ctx, lambda client: collect(client.user.iter_timeline(user_id, limit, count))
        )
        print_items(ctx, tweets, "Timeline")
        return

    page = run(ctx, lambda client: client.user.timeline(user_id, count, cursor))
    print_page(ctx, page, "Timeline")


@app.command("search")
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Keyword to search for"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
) -> None:
    """Search users by keyword."""
    page = run(ctx, lambda client: client.user.search(query, count, cursor))
    print_page(ctx, page, "Users")


@app.command("follow")
def follow(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Rest id of the user"),
) -> None:
    """Follow a user."""
    run(ctx, lambda client: client.user.follow(user_id))
    print_done(ctx, f"Followed {user_id}")


@app.command("unfollow")
def unfollow(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Rest id of the user"),
) -> None:
    """Unfollow a user."""
    run(ctx, lambda client: client.user.unfollow_user(user_id))
    print_done(ctx, f"Unfollowed {user_id}")
