from __future__ import annotations

"""XPath-like axes usable as query steps.

Each axis maps one location to an iterable of locations (or a single
location / ``None`` for the parent axes). Locations handed out for the
*self* and *descendant* parts are non-auto, so a following tag step tests
the node itself rather than its children.
"""

import dataclasses
from typing import Iterator, List, Optional

from .location import Location

__all__ = [
    "children",
    "descendants",
    "child_or_self",
    "descendant_or_self",
    "parent",
    "parent_or_self",
    "ancestors",
    "ancestor_or_self",
]


def _self(loc: Location, auto: bool) -> Location:
    return loc if loc.auto is auto else dataclasses.replace(loc, auto=auto)


def children(loc: Location) -> Iterator[Location]:
    """Child axis: every content entry, text fragments included."""
    for child in loc.children():
        yield _self(child, True)


def descendant_or_self(loc: Location) -> Iterator[Location]:
    """Depth-first, document-order walk over *loc* and everything below it."""
    stack: List[Location] = [loc]
    while stack:
        current = stack.pop()
        yield _self(current, False)
        stack.extend(reversed(list(current.children())))


def descendants(loc: Location) -> Iterator[Location]:
    walk = descendant_or_self(loc)
    next(walk)
    yield from walk


def child_or_self(loc: Location) -> Iterator[Location]:
    yield _self(loc, False)
    yield from children(loc)


def parent(loc: Location) -> Optional[Location]:
    return loc.up()


def parent_or_self(loc: Location) -> Iterator[Location]:
    yield _self(loc, False)
    up = loc.up()
    if up is not None:
        yield up


def ancestor_or_self(loc: Location) -> Iterator[Location]:
    current: Optional[Location] = loc
    while current is not None:
        yield current
        current = current.up()


def ancestors(loc: Location) -> Iterator[Location]:
    walk = ancestor_or_self(loc)
    next(walk)
    yield from walk
