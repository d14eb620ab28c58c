"""CLI commands module for birdfetch."""

from birdfetch.cli.commands import message, tweet, user

__all__ = ["message", "tweet", "user"]
