from __future__ import annotations

"""Exception classes for the xmlplus core.

Only a handful of conditions are real errors. Navigation past the edge of a
tree, an out-of-range index step or a predicate that matches nothing are
normal outcomes and are represented by ``None`` or an empty result, never by
one of these classes.
"""

from typing import Any, Optional, Sequence

__all__ = [
    "XmlPlusError",
    "CycleError",
    "NodeValidationError",
    "LocationError",
    "XmlParseError",
]


class XmlPlusError(Exception):
    """Base exception for all xmlplus errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.cause = cause


class CycleError(XmlPlusError):
    """Raised when a node would be moved into its own subtree.

    The source and destination paths are kept so callers can report which
    positions collided.
    """

    def __init__(self, from_path: Sequence[Any], to_path: Sequence[Any]) -> None:
        self.from_path = tuple(from_path)
        self.to_path = tuple(to_path)
        super().__init__(
            "Source location cannot be an ancestor of (or equal to) the destination: "
            f"{_format_path(self.from_path)} -> {_format_path(self.to_path)}"
        )


class NodeValidationError(XmlPlusError, ValueError):
    """Raised when a node is constructed from a malformed tag, attrs or content."""


class LocationError(XmlPlusError):
    """Raised for cursor edits that are structurally impossible.

    Examples are inserting a sibling next to the root or adding a child to a
    text fragment.
    """


class XmlParseError(XmlPlusError):
    """Raised when the parse boundary cannot turn input into a tree."""

    def __init__(self, message: str, source: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause)
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"[{self.source}] {super().__str__()}"
        return super().__str__()


def _format_path(steps: Sequence[Any]) -> str:
    return "/" + "/".join(str(s) for s in steps)
