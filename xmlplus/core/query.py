from __future__ import annotations

"""Step-sequence query evaluator.

``select(loc, *steps)`` walks the steps left to right over a lazy stream of
locations seeded with *loc*:

    >>> root = parse_str("<a><b>1</b><b>2</b></a>")
    >>> [text(l) for l in select(root, tag("b"))]
    ['1', '2']
    >>> select_one(root, tag("b"), 1).node
    Node(tag='b', attrs={}, content=('2',))
    >>> select_one(root, tag("b"), "3") is None
    True

Steps are resolved once by :func:`~xmlplus.core.steps.as_steps`: a ``str``
matches concatenated descendant text, an ``int`` picks the n-th location so
far, a :class:`~xmlplus.core.path.PathStep` replays one path level and any
callable is a predicate or an axis.
"""

import dataclasses
from typing import Any, Iterable, Iterator, Optional, Union

from .location import Location
from .steps import as_steps

__all__ = ["select", "select_one", "select_from_root", "select_one_from_root"]

Start = Union[Location, Iterable[Location]]


def select(start: Start, *steps: Any) -> Iterator[Location]:
    """Evaluate *steps* against *start* and return a lazy iterator of matches.

    *start* is a single location or an iterable of locations. Without steps
    the seed itself is returned as a one-element stream.
    """
    resolved = as_steps(steps)
    stream: Iterator[Location] = iter((start,)) if isinstance(start, Location) else iter(start)
    for step in resolved:
        stream = step.apply(stream)
    return stream


def select_one(start: Start, *steps: Any) -> Optional[Location]:
    """Similar to :func:`select` but return only the first match, or ``None``."""
    return next(select(start, *steps), None)


def select_from_root(loc: Location, *steps: Any) -> Iterator[Location]:
    """Like :func:`select` but start from the root, matching its own tag first.

    Pairs with :func:`~xmlplus.core.path.path_star`, whose first step is the
    root tag.
    """
    root = dataclasses.replace(loc.root(), auto=False)
    return select(root, *steps)


def select_one_from_root(loc: Location, *steps: Any) -> Optional[Location]:
    return next(select_from_root(loc, *steps), None)
