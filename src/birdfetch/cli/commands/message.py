"""Direct message commands for birdfetch."""

from __future__ import annotations

from typing import Optional

import typer

from birdfetch.cli.common import collect, print_done, print_items, print_page, run

app = typer.Typer(
    name="message",
    help="Direct message commands",
    no_args_is_help=True,
)


@app.command("list")
def list_messages(
    ctx: typer.Context,
    my_id: str = typer.Argument(..., help="Rest id of the session user"),
    other_id: str = typer.Argument(..., help="Rest id of the other participant"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor of the page to fetch"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Follow cursors until this many messages are collected"
    ),
) -> None:
    """
    Show a direct message conversation, newest first.

    Example:
        birdfetch message list 111 222 --limit 200
    """
    if limit:
        messages = run(
            ctx,
            lambda client: collect(client.message.iter_conversation(my_id, other_id, limit)),
        )
        print_items(ctx, messages, "Messages")
        return

    page = run(ctx, lambda client: client.message.conversation(my_id, other_id, cursor))
    print_page(ctx, page, "Messages")


@app.command("send")
def send(
    ctx: typer.Context,
    my_id: str = typer.Argument(..., help="Rest id of the session user"),
    other_id: str = typer.Argument(..., help="Rest id of the recipient"),
    text: str = typer.Argument(..., help="Text of the message"),
) -> None:
    """Send a direct message."""
    run(ctx, lambda client: client.message.send(my_id, other_id, text))
    print_done(ctx, "Message sent")
