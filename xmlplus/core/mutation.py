from __future__ import annotations

"""Structural edits on a located tree.

Every function takes a :class:`~xmlplus.core.location.Location` and returns a
new one; the input location and the tree it belongs to are left untouched,
so earlier versions of a document stay valid after an edit.

Scope and guarantees:
- No I/O. Expected no-result situations are not errors.
- Moving a node into its own subtree raises :class:`CycleError` before any
  change is made.
- Edits that make no structural sense (a child under a text fragment, a
  sibling of the root) raise :class:`LocationError`.

Examples
--------
    loc = select_one(root, tag("body"))
    loc = insert_child(loc, make_node("p", {}, "Hello"), "last")
    loc = edit_attrs(loc, {"id": "main"}, dissoc=["class"])
    text = emit(loc.root().node)
"""

import logging
from typing import Iterable, Mapping, Optional, Union

from .exceptions import CycleError, LocationError
from .location import Location
from .models import Node, make_node
from .path import Path, PathStep, is_prefix, path
from .query import select_one

__all__ = [
    "edit_tag",
    "edit_text",
    "edit_attrs",
    "insert_child",
    "insert_left",
    "insert_right",
    "insert_parent",
    "make_node",
    "move_node",
    "copy_node",
]

logger = logging.getLogger(__name__)

Position = Union[int, str]
Item = Union[Node, str]


# -------------------------------------------------------------------------
# Edit in place
# -------------------------------------------------------------------------

def edit_tag(loc: Location, tag: str) -> Location:
    """Edit the tag of the node at given location."""
    element = _element(loc, "edit_tag")
    logger.debug("Edit: edit_tag %s -> %s", element.tag, tag)
    return loc.replace(element.with_tag(tag))


def edit_text(loc: Location, text: str, append: bool = False) -> Location:
    """Edit text of the node at given location.

    The content is replaced by the single fragment *text*, or *text* is added
    after the existing content when *append* is set.
    """
    element = _element(loc, "edit_text")
    content = element.children + (text,) if append else (text,)
    logger.debug("Edit: edit_text tag=%s append=%s", element.tag, append)
    return loc.replace(element.with_content(content))


def edit_attrs(loc: Location, attrs: Mapping[str, str], dissoc: Iterable[str] = ()) -> Location:
    """Edit the attrs of the node at given location.

    *attrs* are merged into the existing mapping (new values win), then every
    key in *dissoc* is removed.
    """
    element = _element(loc, "edit_attrs")
    merged = dict(element.attrs)
    merged.update(attrs)
    for key in dissoc:
        merged.pop(key, None)
    logger.debug("Edit: edit_attrs tag=%s set=%s dissoc=%s", element.tag, sorted(attrs), list(dissoc))
    return loc.replace(element.with_attrs(merged))


# -------------------------------------------------------------------------
# Insertion
# -------------------------------------------------------------------------

def insert_child(loc: Location, node: Item, pos: Position = 0) -> Location:
    """Insert a child node at the given location based on the given position.

    *pos* is a zero-based index among all content entries or ``"last"``. A
    position at or past the end appends; a negative one inserts first. The
    returned location still focuses the parent.
    """
    element = _element(loc, "insert_child")
    children = element.children
    index = _insert_index(pos, len(children))
    logger.debug("Edit: insert_child tag=%s pos=%s index=%d", element.tag, pos, index)
    if index == 0:
        return loc.insert_child(node)
    if index == len(children):
        return loc.append_child(node)
    return loc.replace(element.with_content(children[:index] + (node,) + children[index:]))


def insert_left(loc: Location, node: Item) -> Location:
    """Insert a node to the left of the given location, without moving."""
    return loc.insert_left(node)


def insert_right(loc: Location, node: Item) -> Location:
    """Insert a node to the right of the given location, without moving."""
    return loc.insert_right(node)


def insert_parent(loc: Location, tag: str, attrs: Optional[Mapping[str, str]] = None) -> Location:
    """Wrap the focused node in a new ``tag`` element.

    Returns a location on the new parent, which takes the node's former place.
    """
    logger.debug("Edit: insert_parent tag=%s", tag)
    return loc.replace(make_node(tag, attrs, loc.node))


# -------------------------------------------------------------------------
# Move / copy
# -------------------------------------------------------------------------

def move_node(from_loc: Location, to_loc: Location, pos: Position = 0) -> Location:
    """Move the node at *from_loc* to be a child of the node at *to_loc*.

    Both locations must belong to the same tree. The node is removed from the
    tree of *to_loc*, the destination is looked up again (the removal may
    have shifted same-tag ordinals on its route) and the node is inserted at
    *pos*. Returns a location on the moved node.

    Raises
    ------
    CycleError
        If *to_loc* is *from_loc* or one of its descendants.
    LocationError
        If the source is a text fragment, or either location cannot be found
        in the destination tree.
    """
    from_path = path(from_loc)
    to_path = path(to_loc)
    if is_prefix(from_path, to_path):
        logger.warning("Edit FAIL: move_node cycle from=%s to=%s", _fmt(from_path), _fmt(to_path))
        raise CycleError(from_path, to_path)

    node = _element(from_loc, "move_node")
    tree = to_loc.root()
    source = select_one(tree, *from_path)
    if source is None:
        logger.warning("Edit FAIL: move_node source_not_found from=%s", _fmt(from_path))
        raise LocationError(f"Source {_fmt(from_path)} not found in destination tree")

    pruned = source.remove().root()
    target_path = _rebase(to_path, from_path)
    target = select_one(pruned, *target_path)
    if target is None:
        logger.warning("Edit FAIL: move_node target_not_found to=%s", _fmt(target_path))
        raise LocationError(f"Destination {_fmt(target_path)} not found after removal")

    count = len(_element(target, "move_node").children)
    inserted = insert_child(target, node, pos)
    logger.info("Edit OK: move_node from=%s to=%s pos=%s", _fmt(from_path), _fmt(target_path), pos)
    return _child_at(inserted, _insert_index(pos, count))


def copy_node(from_loc: Location, to_loc: Location, pos: Position = 0) -> Location:
    """Copy the node at *from_loc* as a child of the node at *to_loc*.

    The source is left untouched. Returns a location on the inserted copy,
    found by the index it was inserted at.
    """
    element = _element(to_loc, "copy_node")
    index = _insert_index(pos, len(element.children))
    inserted = insert_child(to_loc, from_loc.node, pos)
    logger.debug("Edit: copy_node into=%s index=%d", element.tag, index)
    return _child_at(inserted, index)


# -------------------------------------------------------------------------
# Internals
# -------------------------------------------------------------------------

def _element(loc: Location, operation: str) -> Node:
    if not isinstance(loc.node, Node):
        logger.warning("Edit FAIL: %s on text fragment", operation)
        raise LocationError(f"{operation} needs an element, the location focuses a text fragment")
    return loc.node


def _insert_index(pos: Position, count: int) -> int:
    if pos == "last":
        return count
    if isinstance(pos, bool) or not isinstance(pos, int):
        raise ValueError(f"Position must be an int or 'last', got {pos!r}")
    return min(max(pos, 0), count)


def _child_at(loc: Location, index: int) -> Location:
    child = loc.down()
    for _ in range(index):
        child = child.right()  # type: ignore[union-attr]
    return child  # type: ignore[return-value]


def _rebase(to_path: Path, from_path: Path) -> Path:
    """Adjust *to_path* for the removal of the node at *from_path*.

    Removing a node shifts the ordinal of later same-tag siblings down by
    one, which matters when the destination route passes through one of them.
    """
    depth = len(from_path) - 1
    if depth < 0 or len(to_path) <= depth or to_path[:depth] != from_path[:depth]:
        return to_path
    removed, step = from_path[depth], to_path[depth]
    if step.tag != removed.tag or (step.ordinal or 0) <= (removed.ordinal or 0):
        return to_path
    shifted = step.ordinal - 1  # type: ignore[operator]
    return to_path[:depth] + (PathStep(step.tag, shifted or None),) + to_path[depth + 1:]


def _fmt(steps: Path) -> str:
    return "/" + "/".join(str(s) for s in steps)
