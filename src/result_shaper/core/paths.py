"""Dotted-path access over JSON-like trees.

Metadata list responses are nested mappings (``{"tableReference": {"tableId":
...}}``). ``resolve_path`` walks a ``"a.b.c"`` path one hop at a time and
returns ``MISSING`` as soon as a hop has no value, instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, List


class _Missing:
    """Sentinel for a path that does not resolve."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def split_path(path: str) -> List[str]:
    """Split a dotted path into hops, ignoring empty segments."""
    return [part for part in str(path).split(".") if part]


def _step(node: Any, key: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(key, MISSING)
    if node is None or isinstance(node, (str, bytes, int, float)):
        return MISSING
    return getattr(node, key, MISSING)


def resolve_path(node: Any, path: str) -> Any:
    """Return the value at ``path`` inside ``node``, or ``MISSING``.

    Mappings are indexed by key, other objects by attribute.

    Examples:
        >>> resolve_path({"datasetReference": {"datasetId": "sales"}}, "datasetReference.datasetId")
        'sales'
        >>> resolve_path({"id": "p"}, "datasetReference.datasetId")
        MISSING
    """
    current = node
    for key in split_path(path):
        current = _step(current, key)
        if current is MISSING:
            return MISSING
    return current


def first_missing_hop(node: Any, path: str) -> str:
    """Return the prefix of ``path`` up to the first hop that does not resolve.

    Returns an empty string when the whole path resolves.
    """
    current = node
    walked: List[str] = []
    for key in split_path(path):
        walked.append(key)
        current = _step(current, key)
        if current is MISSING:
            return ".".join(walked)
    return ""


def set_path(node: MutableMapping, path: str, value: Any) -> None:
    """Set ``value`` at ``path``, creating intermediate mappings as needed."""
    keys = split_path(path)
    if not keys:
        raise ValueError("Empty path")
    current = node
    for key in keys[:-1]:
        nxt = current.get(key)
        if not isinstance(nxt, MutableMapping):
            nxt = {}
            current[key] = nxt
        current = nxt
    current[keys[-1]] = value
