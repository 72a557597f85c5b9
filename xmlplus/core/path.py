from __future__ import annotations

"""Route-from-root addressing for locations.

A path is a tuple of :class:`PathStep`. Each step names the tag at one level
and, when earlier siblings share that tag, the ordinal that picks the right
one. Paths survive tree rebuilds: replaying one through the query evaluator
from the new root lands on the node occupying the same structural slot.

Examples
--------
For ``<a><b>1</b><b>2</b></a>``, the path of the second ``b`` is
``(PathStep("b", 1),)`` and ``select_one(root, *path)`` finds it again.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .location import Location
from .models import Node

__all__ = ["PathStep", "Path", "path", "path_star", "is_prefix"]


@dataclass(frozen=True)
class PathStep:
    """One level of a path: a tag and, if needed, its same-tag sibling ordinal."""

    tag: Optional[str]
    ordinal: Optional[int] = None

    def __str__(self) -> str:
        name = self.tag if self.tag is not None else "#text"
        return name if self.ordinal is None else f"{name}[{self.ordinal}]"


Path = Tuple[PathStep, ...]


def path(loc: Location, include_root: bool = False) -> Path:
    """Get the complete path from the root to the node at *loc*.

    The path is composed of tags from the root down to (and including) the
    focused node, excluding the root's own tag. The root is left out because
    the query evaluator matches tag steps against children of the starting
    location; pass ``include_root=True`` to keep it and replay the result
    with :func:`~xmlplus.core.query.select_from_root`.

    A text fragment has no tag; its level is a ``PathStep(None)``, which a
    replay skips, so the path of a fragment re-locates its parent element.
    """
    levels: List[Location] = []
    current: Optional[Location] = loc
    while current is not None:
        levels.append(current)
        current = current.up()

    if not include_root:
        levels = levels[:-1]

    steps: List[PathStep] = []
    for level in reversed(levels):
        tag = level.node.tag if isinstance(level.node, Node) else None
        count = sum(1 for sibling in level.lefts if isinstance(sibling, Node) and sibling.tag == tag)
        steps.append(PathStep(tag, count if count > 0 else None))
    return tuple(steps)


def path_star(loc: Location) -> Path:
    """Same as :func:`path` but always includes the root tag."""
    return path(loc, include_root=True)


def is_prefix(prefix: Sequence[PathStep], full: Sequence[PathStep]) -> bool:
    """Return True if *prefix* is a leading segment of *full* (or equal to it)."""
    return len(prefix) <= len(full) and tuple(full[: len(prefix)]) == tuple(prefix)
