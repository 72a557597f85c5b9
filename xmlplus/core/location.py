from __future__ import annotations

"""Persistent cursor ("location") over an immutable :class:`Node` tree.

A :class:`Location` pairs the focused value (an element or a text fragment)
with the context needed to rebuild the whole tree: siblings to the left and
right, the parent node as it was when we descended, and the parent's own
context. Editing the focus only marks the context as *changed*; moving up
folds the edit into a fresh parent, so every ancestor along the route is
rebuilt while untouched subtrees are shared between the old and new tree.

Navigation never raises: ``up``, ``down``, ``left`` and ``right`` return
``None`` when there is nowhere to go.

The ``auto`` flag decides how a tag step of the query evaluator treats this
location: an *auto* location matches against its children, a non-auto one
against itself. Descendant and self axes hand out non-auto locations.
"""

import dataclasses
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple, Union

from .exceptions import LocationError
from .models import Node

__all__ = ["Location", "root_loc"]

Focus = Union[Node, str]


@dataclass(frozen=True)
class _Context:
    """Where a location sits in its parent.

    ``left`` holds the left siblings in document order (nearest last).
    """

    left: Tuple[Focus, ...]
    right: Tuple[Focus, ...]
    parent: Node
    parent_context: Optional["_Context"]
    changed: bool = False

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Location:
    """Focus on one value of a tree, able to rebuild the edited tree."""

    node: Focus
    context: Optional[_Context] = None
    auto: bool = True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        focus = f"<{self.node.tag}>" if isinstance(self.node, Node) else repr(self.node)
        return f"Location({focus}, depth={self.depth}, auto={self.auto})"

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    @property
    def is_branch(self) -> bool:
        """True for element nodes, False for text fragments."""
        return isinstance(self.node, Node)

    @property
    def is_root(self) -> bool:
        return self.context is None

    @property
    def index(self) -> int:
        """Position of the focus among its parent's content entries."""
        return len(self.context.left) if self.context else 0

    @property
    def depth(self) -> int:
        depth = 0
        ctx = self.context
        while ctx is not None:
            depth += 1
            ctx = ctx.parent_context
        return depth

    @property
    def lefts(self) -> Tuple[Focus, ...]:
        return self.context.left if self.context else ()

    @property
    def rights(self) -> Tuple[Focus, ...]:
        return self.context.right if self.context else ()

    def children(self) -> Iterator["Location"]:
        """Yield a location for every content entry of the focused element."""
        child = self.down()
        while child is not None:
            yield child
            child = child.right()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def down(self) -> Optional["Location"]:
        if not isinstance(self.node, Node) or not self.node.content:
            return None
        first, *rest = self.node.content
        ctx = _Context(left=(), right=tuple(rest), parent=self.node, parent_context=self.context)
        return Location(first, ctx, self.auto)

    def up(self) -> Optional["Location"]:
        ctx = self.context
        if ctx is None:
            return None
        if not ctx.changed:
            return Location(ctx.parent, ctx.parent_context, self.auto)
        parent = ctx.parent.with_content(ctx.left + (self.node,) + ctx.right)
        pctx = ctx.parent_context
        if pctx is not None and not pctx.changed:
            pctx = dataclasses.replace(pctx, changed=True)
        return Location(parent, pctx, self.auto)

    def left(self) -> Optional["Location"]:
        ctx = self.context
        if ctx is None or not ctx.left:
            return None
        new_ctx = dataclasses.replace(ctx, left=ctx.left[:-1], right=(self.node,) + ctx.right)
        return Location(ctx.left[-1], new_ctx, self.auto)

    def right(self) -> Optional["Location"]:
        ctx = self.context
        if ctx is None or not ctx.right:
            return None
        new_ctx = dataclasses.replace(ctx, left=ctx.left + (self.node,), right=ctx.right[1:])
        return Location(ctx.right[0], new_ctx, self.auto)

    def leftmost(self) -> "Location":
        ctx = self.context
        if ctx is None or not ctx.left:
            return self
        siblings = ctx.left + (self.node,) + ctx.right
        return Location(siblings[0], dataclasses.replace(ctx, left=(), right=siblings[1:]), self.auto)

    def rightmost(self) -> "Location":
        ctx = self.context
        if ctx is None or not ctx.right:
            return self
        siblings = ctx.left + (self.node,) + ctx.right
        return Location(siblings[-1], dataclasses.replace(ctx, left=siblings[:-1], right=()), self.auto)

    def root(self) -> "Location":
        """Return a fresh location on the root with all edits folded in."""
        loc = self
        while loc.context is not None:
            loc = loc.up()  # type: ignore[assignment]
        return Location(loc.node)

    def root_node(self) -> Focus:
        return self.root().node

    # ------------------------------------------------------------------
    # Editing (focus never moves unless stated)
    # ------------------------------------------------------------------
    def replace(self, node: Focus) -> "Location":
        ctx = self.context
        if ctx is not None and not ctx.changed:
            ctx = dataclasses.replace(ctx, changed=True)
        return Location(node, ctx, self.auto)

    def edit(self, fn: Callable[..., Focus], *args) -> "Location":
        return self.replace(fn(self.node, *args))

    def insert_child(self, item: Focus) -> "Location":
        """Insert *item* as the leftmost child of the focused element."""
        element = self._element("insert a child")
        return self.replace(element.with_content((item,) + element.children))

    def append_child(self, item: Focus) -> "Location":
        """Insert *item* as the rightmost child of the focused element."""
        element = self._element("append a child")
        return self.replace(element.with_content(element.children + (item,)))

    def insert_left(self, item: Focus) -> "Location":
        ctx = self._sibling_context("insert a left sibling")
        return Location(self.node, dataclasses.replace(ctx, left=ctx.left + (item,), changed=True), self.auto)

    def insert_right(self, item: Focus) -> "Location":
        ctx = self._sibling_context("insert a right sibling")
        return Location(self.node, dataclasses.replace(ctx, right=(item,) + ctx.right, changed=True), self.auto)

    def remove(self) -> "Location":
        """Remove the focus and return a location on its parent."""
        ctx = self._sibling_context("remove the node")
        parent = ctx.parent.with_content(ctx.left + ctx.right)
        pctx = ctx.parent_context
        if pctx is not None and not pctx.changed:
            pctx = dataclasses.replace(pctx, changed=True)
        return Location(parent, pctx, self.auto)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _element(self, action: str) -> Node:
        if not isinstance(self.node, Node):
            raise LocationError(f"Cannot {action}: focus is a text fragment")
        return self.node

    def _sibling_context(self, action: str) -> _Context:
        if self.context is None:
            raise LocationError(f"Cannot {action} at the root")
        return self.context


def root_loc(loc: Location) -> Location:
    """Get the root location of the given loc."""
    return loc.root()
