# =============================================================================
# lib/querystring.py - Extended URL-Encoded Form Parser
# =============================================================================
# Parses application/x-www-form-urlencoded bodies into nested structures.
#
# Bracket notation builds objects and lists:
#   a[b][c]=1        -> {"a": {"b": {"c": "1"}}}
#   a[]=1&a[]=2      -> {"a": ["1", "2"]}
#   a=1&a=2          -> {"a": ["1", "2"]}
#   a[0]=x&a[1]=y    -> {"a": ["x", "y"]}
#
# Usage:
#   from lib.querystring import parse_form
#   data = parse_form("user[name]=ana&user[seats][]=4A")
# =============================================================================

from __future__ import annotations

import re
from typing import Any
from urllib.parse import parse_qsl

DEFAULT_DEPTH = 5
DEFAULT_ARRAY_LIMIT = 20

_BRACKET_SEGMENT = re.compile(r"\[[^\[\]]*\]")


class _ArrayNode(dict):
    """Index-keyed container that is compacted into a list once parsing ends."""

    def next_index(self) -> int:
        return max(self) + 1 if self else 0


def count_parameters(body: str) -> int:
    """Number of '&'-separated fields in a raw form body."""
    if not body:
        return 0
    return body.count("&") + 1


def split_key(key: str, depth: int = DEFAULT_DEPTH) -> list[str]:
    """
    Split a bracketed field name into its path segments.

    At most `depth` bracket segments are honoured; anything past that is
    kept as a single literal segment.

    Example:
        split_key("a[b][c]")        # ["a", "b", "c"]
        split_key("a[]")            # ["a", ""]
        split_key("a[b][c]", 1)     # ["a", "b", "[c]"]
    """
    first = _BRACKET_SEGMENT.search(key)
    if first is None or depth <= 0:
        return [key]

    segments = []
    parent = key[:first.start()]
    if parent:
        segments.append(parent)

    position = first.start()
    taken = 0
    while taken < depth:
        match = _BRACKET_SEGMENT.match(key, position)
        if match is None:
            break
        segments.append(match.group(0)[1:-1])
        position = match.end()
        taken += 1

    if position < len(key):
        segments.append(key[position:])

    return segments


def _is_index(segment: str, array_limit: int) -> bool:
    return segment.isdigit() and int(segment) <= array_limit


def _combine(existing: Any, value: Any) -> list:
    if isinstance(existing, list):
        return existing + [value]
    return [existing, value]


def _as_object(node: _ArrayNode) -> dict:
    return {str(index): child for index, child in node.items()}


def _assign(container: Any, segments: list[str], value: str, array_limit: int) -> Any:
    """Write value at the segment path inside container, returning the container."""
    key, rest = segments[0], segments[1:]

    if container is None:
        container = _ArrayNode() if key == "" or _is_index(key, array_limit) else {}

    if isinstance(container, _ArrayNode):
        if key == "":
            slot: Any = container.next_index()
        elif _is_index(key, array_limit):
            slot = int(key)
        else:
            container = _as_object(container)
            slot = key
    else:
        slot = key

    if not rest:
        if slot in container:
            container[slot] = _combine(container[slot], value)
        else:
            container[slot] = value
        return container

    existing = container.get(slot)
    if existing is None or isinstance(existing, dict):
        container[slot] = _assign(existing, rest, value, array_limit)
    else:
        # a plain value already sits here; keep both
        container[slot] = _combine(existing, _assign(None, rest, value, array_limit))
    return container


def _compact(node: Any) -> Any:
    if isinstance(node, _ArrayNode):
        return [_compact(node[index]) for index in sorted(node)]
    if isinstance(node, dict):
        return {key: _compact(child) for key, child in node.items()}
    if isinstance(node, list):
        return [_compact(child) for child in node]
    return node


def parse_form(
    body: str,
    depth: int = DEFAULT_DEPTH,
    array_limit: int = DEFAULT_ARRAY_LIMIT,
) -> dict[str, Any]:
    """
    Parse a URL-encoded body with nested-object support.

    Args:
        body: Raw form body (already decoded to text)
        depth: Maximum number of bracket segments per field name
        array_limit: Highest numeric index still treated as a list position;
            larger indices become object keys

    Returns:
        Dict of decoded fields. Values are strings, lists or nested dicts.
    """
    result: dict[str, Any] = {}

    for key, value in parse_qsl(body, keep_blank_values=True):
        if not key:
            continue

        segments = split_key(key, depth)
        root = segments[0]

        if len(segments) == 1:
            if root in result:
                result[root] = _combine(result[root], value)
            else:
                result[root] = value
            continue

        existing = result.get(root)
        if existing is None or isinstance(existing, dict):
            result[root] = _assign(existing, segments[1:], value, array_limit)
        else:
            result[root] = _combine(existing, _assign(None, segments[1:], value, array_limit))

    return _compact(result)
