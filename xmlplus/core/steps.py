from __future__ import annotations

"""Query steps understood by :func:`xmlplus.core.query.select`.

Callers pass loose arguments (``"text"``, ``2``, a predicate, a tag step or
a :class:`~xmlplus.core.path.PathStep`); :func:`as_steps` resolves them once
into the closed set of step classes below. Each step turns an iterator of
locations into another, lazily.
"""

import dataclasses
from dataclasses import dataclass
from itertools import islice
from typing import Any, Callable, Iterable, Iterator, List, Union

from .location import Location
from .models import Node
from .path import PathStep
from .predicates import texts_eq

__all__ = ["Text", "Index", "Predicate", "Tag", "Step", "tag", "as_steps"]

Stream = Iterator[Location]


@dataclass(frozen=True)
class Text:
    """Keep locations whose concatenated descendant text equals ``value``."""

    value: str

    def apply(self, stream: Stream) -> Stream:
        match = texts_eq(self.value)
        return (loc for loc in stream if match(loc))


@dataclass(frozen=True)
class Index:
    """Keep only the ``value``-th location of the stream (0-based)."""

    value: int

    def apply(self, stream: Stream) -> Stream:
        if self.value < 0:
            return iter(())
        return islice(stream, self.value, self.value + 1)


@dataclass(frozen=True)
class Predicate:
    """Apply ``fn`` to every location and splice in what it returns.

    ``True`` keeps the location, ``False`` or ``None`` drops it, a location
    replaces it and any other iterable is flattened into the stream.
    """

    fn: Callable[[Location], Any]

    def apply(self, stream: Stream) -> Stream:
        for loc in stream:
            yield from _spread(loc, self.fn(loc))


@dataclass(frozen=True)
class Tag:
    """Match elements named ``name``.

    Auto locations are matched through their children, non-auto locations
    (as handed out by the self and descendant axes) against themselves.
    """

    name: str

    def apply(self, stream: Stream) -> Stream:
        for loc in stream:
            if loc.auto:
                for child in loc.children():
                    if isinstance(child.node, Node) and child.node.tag == self.name:
                        yield child
            elif isinstance(loc.node, Node) and loc.node.tag == self.name:
                yield dataclasses.replace(loc, auto=True)


Step = Union[Text, Index, Predicate, Tag]


def tag(name: str) -> Tag:
    """Return a step matching child elements named *name*."""
    return Tag(name)


def as_steps(args: Iterable[Any]) -> List[Step]:
    """Resolve loose query arguments into step objects.

    ``str`` becomes :class:`Text`, ``int`` becomes :class:`Index`, a
    :class:`PathStep` becomes a :class:`Tag` (followed by an :class:`Index`
    when it carries an ordinal, or nothing for a text-fragment level) and any
    other callable becomes a :class:`Predicate`.
    """
    steps: List[Step] = []
    for arg in args:
        if isinstance(arg, (Text, Index, Predicate, Tag)):
            steps.append(arg)
        elif isinstance(arg, PathStep):
            if arg.tag is None:
                # A text-fragment level ends the route at its parent element
                continue
            steps.append(Tag(arg.tag))
            if arg.ordinal is not None:
                steps.append(Index(arg.ordinal))
        elif isinstance(arg, str):
            steps.append(Text(arg))
        elif isinstance(arg, bool):
            raise TypeError(f"Booleans are not valid query steps: {arg!r}")
        elif isinstance(arg, int):
            steps.append(Index(arg))
        elif callable(arg):
            steps.append(Predicate(arg))
        else:
            raise TypeError(f"Unsupported query step: {arg!r}")
    return steps


def _spread(loc: Location, result: Any) -> Iterable[Location]:
    if result is None or result is False:
        return ()
    if result is True:
        return (loc,)
    if isinstance(result, Location):
        return (result,)
    if isinstance(result, Iterable) and not isinstance(result, (str, bytes)):
        return result
    return (loc,) if result else ()
