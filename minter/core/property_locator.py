"""Property Locator: first-match search for a named property in nested metadata.

Invariants:
    - Pure function: no IO, never raises, never mutates its input
    - A property present directly on a mapping wins over any nested occurrence
    - Children are visited in insertion order; the first non-None hit is returned
    - A directly-present key whose value is None is returned as None (a hit),
      but a None coming back from a nested search counts as a miss
    - Lists and tuples are traversed, never matched by key
    - Cycles terminate: a node already visited is treated as a miss
    - Search depth is bounded by max_depth (nesting levels below the root)
"""

from collections.abc import Mapping
from typing import Any

DEFAULT_MAX_DEPTH = 64


def _is_nested(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _children(tree: Any) -> list[Any]:
    if isinstance(tree, Mapping):
        return list(tree.values())
    return list(tree)


def locate(
    property_name: str, tree: Any, max_depth: int = DEFAULT_MAX_DEPTH,
) -> Any | None:
    """Return the value of `property_name` found in `tree`, or None when absent."""
    return _locate(property_name, tree, set(), max_depth)


def _locate(
    property_name: str, tree: Any, visited: set[int], depth_left: int,
) -> Any | None:
    if tree is None or not _is_nested(tree):
        return None
    if isinstance(tree, Mapping) and property_name in tree:
        return tree[property_name]
    if depth_left <= 0 or id(tree) in visited:
        return None
    visited.add(id(tree))

    for child in _children(tree):
        if not _is_nested(child):
            continue
        found = _locate(property_name, child, visited, depth_left - 1)
        if found is not None:
            return found
    return None
