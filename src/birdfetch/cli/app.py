"""Typer main application for the birdfetch CLI."""

from __future__ import annotations

from typing import Optional

import typer

from birdfetch import __version__
from birdfetch.cli.commands import message, tweet, user
from birdfetch.cli.common import CliState, console
from birdfetch.core import setup_logging

app = typer.Typer(
    name="birdfetch",
    help="Fetch tweets, users and direct messages from the web API",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

# Register sub-commands
app.add_typer(tweet.app, name="tweet", help="Tweet commands")
app.add_typer(user.app, name="user", help="User commands")
app.add_typer(message.app, name="message", help="Direct message commands")


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        console.print(f"[bold blue]birdfetch[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        "-k",
        envvar="BIRDFETCH_API_KEY",
        help="Cookie string of a logged-in session (ct0=...;auth_token=...)",
    ),
    proxy: Optional[str] = typer.Option(
        None,
        "--proxy",
        "-p",
        help="Proxy URL for all requests",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print results as JSON instead of tables",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """
    birdfetch - async client for the twitter web API

    Logs go to stderr; results go to stdout.
    """
    setup_logging(level=log_level)
    ctx.obj = CliState(api_key=api_key, proxy_url=proxy, as_json=as_json)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
