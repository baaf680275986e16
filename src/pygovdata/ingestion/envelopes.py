"""Item-list resolvers for JSON API envelopes.

Open-data portals wrap their rows in different envelopes. Each resolver
is a pure function ``document -> list | None``; :func:`extract_items`
tries them in order and the first non-empty match wins.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

Resolver = Callable[[Any], list[Any] | None]


def _as_list(value: Any) -> list[Any] | None:
    if isinstance(value, list):
        return value
    return None


def _dig(document: Any, *path: str) -> Any:
    current = document
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _top_level(document: Any) -> list[Any] | None:
    return _as_list(document)


def _key(name: str) -> Resolver:
    def resolve(document: Any) -> list[Any] | None:
        return _as_list(_dig(document, name))

    resolve.__name__ = f"_key_{name}"
    return resolve


def _data_go_kr(document: Any) -> list[Any] | None:
    """``response.body.items.item``; a single row arrives as a bare object."""
    item = _dig(document, "response", "body", "items", "item")
    if isinstance(item, dict):
        return [item]
    return _as_list(item)


RESOLVERS: tuple[Resolver, ...] = (
    _top_level,
    _key("items"),
    _key("data"),
    _key("results"),
    _data_go_kr,
    _key("result"),
)


def extract_items(document: Any, resolvers: tuple[Resolver, ...] = RESOLVERS) -> list[dict[str, Any]]:
    """Return the row list carried by *document*, or ``[]``.

    Non-dict rows are discarded.
    """
    for resolver in resolvers:
        items = resolver(document)
        if items:
            return [item for item in items if isinstance(item, dict)]
    return []
