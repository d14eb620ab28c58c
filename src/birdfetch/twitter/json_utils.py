"""Helpers for searching arbitrarily nested JSON payloads."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


def _walk(data: Any) -> Iterator[dict[str, Any]]:
    """Yield every dict in ``data``, parents before children, in document order."""
    stack: list[Any] = [data]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            yield node
            stack.extend(reversed(list(node.values())))
        elif isinstance(node, list):
            stack.extend(reversed(node))


def find_by_filter(data: Any, key: str, value: Any) -> list[dict[str, Any]]:
    """Find all objects in ``data`` whose ``key`` equals ``value``.

    A matching object is still searched for nested matches, which follow it
    in the result. Leaves and unrelated shapes are ignored.

    Args:
        data: Parsed JSON (dicts, lists, scalars).
        key: Discriminator key, e.g. ``"__typename"``.
        value: Expected discriminator value, e.g. ``"TimelineTweet"``.

    Returns:
        Matching objects in document order.
    """
    return [node for node in _walk(data) if key in node and node[key] == value]


def find_key_by_value(mapping: Mapping[str, Any], value: Any) -> str | None:
    """Return the first key of ``mapping`` whose value equals ``value`` as a string."""
    target = str(value)
    for key, candidate in mapping.items():
        if str(candidate) == target:
            return key
    return None


def dig(data: Any, *path: str | int, default: Any = None) -> Any:
    """Follow ``path`` through nested dicts/lists, returning ``default`` on any miss."""
    node = data
    for step in path:
        if isinstance(node, dict) and isinstance(step, str):
            if step not in node:
                return default
            node = node[step]
        elif isinstance(node, list) and isinstance(step, int):
            if not -len(node) <= step < len(node):
                return default
            node = node[step]
        else:
            return default
    return default if node is None else node
