from __future__ import annotations

"""Predicates over locations for use as query steps.

Most helpers here are factories: ``texts_eq("Intro")`` returns a function
that takes a location and answers ``True`` or ``False``. A few (``empty_node``,
``text_node``) are predicates themselves.

Two families of text tests exist on purpose:

- ``text_eq`` / ``text_re`` look only at text fragments that are direct
  children of the focused element.
- ``texts_eq`` / ``texts_re`` look at the concatenation of every text
  fragment below it, which is what you want when markup splits a sentence
  (``<p>Hello <b>world</b></p>``).

Regex tests use search semantics, so anchor patterns with ``^``/``$`` when the
whole text must match; an unanchored pattern also matches every ancestor.
"""

import dataclasses
import re
from typing import Callable, Iterator, Sequence, Union

from .axes import descendant_or_self
from .location import Location
from .models import Node

__all__ = [
    "text",
    "texts",
    "text_eq",
    "text_re",
    "texts_eq",
    "texts_re",
    "attr_p",
    "attr_eq",
    "empty_node",
    "filled",
    "not_filled",
    "text_node",
    "tag_not",
]

LocPredicate = Callable[[Location], bool]
Exclusion = Union[str, Sequence[str], Callable[[Location], bool]]


def text(loc: Location) -> str:
    """Return only the text directly belonging to the node at *loc*."""
    if not isinstance(loc.node, Node):
        return ""
    return "".join(item for item in loc.node.children if isinstance(item, str))


def texts(loc: Location) -> Iterator[str]:
    """Yield the text fragments of all descendant nodes of *loc*, in order."""
    for item in descendant_or_self(loc):
        if isinstance(item.node, str):
            yield item.node


def text_eq(s: str) -> LocPredicate:
    def predicate(loc: Location) -> bool:
        return text(loc) == s
    return predicate


def text_re(pattern: Union[str, re.Pattern[str]]) -> LocPredicate:
    regex = re.compile(pattern)

    def predicate(loc: Location) -> bool:
        return regex.search(text(loc)) is not None
    return predicate


def texts_eq(s: str) -> LocPredicate:
    """Test whether *s* equals the concatenation of all texts under the node.

    Comparing each fragment on its own would also match the root, since it
    holds every fragment of the document.
    """
    def predicate(loc: Location) -> bool:
        return "".join(texts(loc)) == s
    return predicate


def texts_re(pattern: Union[str, re.Pattern[str]]) -> LocPredicate:
    regex = re.compile(pattern)

    def predicate(loc: Location) -> bool:
        return regex.search("".join(texts(loc))) is not None
    return predicate


def attr_p(name: str) -> LocPredicate:
    """Return a predicate checking whether the focused node carries attribute *name*."""
    def predicate(loc: Location) -> bool:
        return isinstance(loc.node, Node) and name in loc.node.attrs
    return predicate


def attr_eq(name: str, value: str) -> LocPredicate:
    def predicate(loc: Location) -> bool:
        return isinstance(loc.node, Node) and loc.node.attrs.get(name) == value
    return predicate


def empty_node(loc: Location) -> bool:
    """An empty node has no subtree or string content, i.e. content is ``None``."""
    return isinstance(loc.node, Node) and loc.node.content is None


def filled(*exclusions: Exclusion) -> LocPredicate:
    """Return a predicate checking whether the node at a location is filled.

    Exclusions mark nodes that are valid even when empty: a plain string
    tests for the presence of that attribute, a ``(name, value)`` pair for an
    attribute with that exact value and a callable is used as the test
    itself. Any exclusion holding counts as filled.

    Raises
    ------
    TypeError
        If an exclusion is none of the above.
    """
    checks = [_exclusion_check(ex) for ex in exclusions]

    def predicate(loc: Location) -> bool:
        if not empty_node(loc):
            return True
        return any(check(loc) for check in checks)
    return predicate


def not_filled(*exclusions: Exclusion) -> LocPredicate:
    is_filled = filled(*exclusions)

    def predicate(loc: Location) -> bool:
        return not is_filled(loc)
    return predicate


def text_node(loc: Location, pure: bool = False) -> bool:
    """A node is a text node if some of its content entries are strings.

    With ``pure=True`` all of them must be, which also holds vacuously for a
    node without content.
    """
    if not isinstance(loc.node, Node):
        return False
    entries = loc.node.children
    check = all if pure else any
    return check(isinstance(item, str) for item in entries)


def tag_not(name: str) -> Callable[[Location], Iterator[Location]]:
    """Return a step yielding element children whose tag is not *name*.

    Like a tag step, a non-auto location is tested against itself.
    """
    def step(loc: Location) -> Iterator[Location]:
        candidates = loc.children() if loc.auto else iter((dataclasses.replace(loc, auto=True),))
        for candidate in candidates:
            if isinstance(candidate.node, Node) and candidate.node.tag != name:
                yield candidate
    return step


def _exclusion_check(exclusion: Exclusion) -> LocPredicate:
    if isinstance(exclusion, str):
        return attr_p(exclusion)
    if callable(exclusion):
        return exclusion
    if isinstance(exclusion, Sequence) and len(exclusion) == 2 and all(isinstance(part, str) for part in exclusion):
        return attr_eq(exclusion[0], exclusion[1])
    raise TypeError(f"Exclusion must be an attribute name, a (name, value) pair or a predicate, got {exclusion!r}")
