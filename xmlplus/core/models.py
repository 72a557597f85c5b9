from __future__ import annotations

"""Node value type for labeled trees with mixed content.

This module is intentionally free of I/O code so that the contained objects
can be reused in any context (unit-tests, CLI, scripts, etc.).

A node's ``content`` is either ``None`` (an *empty* node, serialized as a
self-closing element) or a tuple mixing child :class:`Node` values and text
fragments (plain ``str``). ``content == ()`` is a node with an empty body and
is *not* empty in that sense.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from .exceptions import NodeValidationError

__all__ = ["Node", "Content", "make_node", "count_nodes"]

Content = Tuple[Union["Node", str], ...]


@dataclass(frozen=True)
class Node:
    """Immutable element with a tag, attributes and optional mixed content.

    Attributes
    ----------
    tag
        Element name. Prefixed names (``"dc:title"``) are kept verbatim.
    attrs
        Attribute mapping. Equality ignores insertion order, serialization
        follows it.
    content
        ``None`` for an empty node, otherwise a tuple of ``Node`` and ``str``.
    """

    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    content: Optional[Content] = None

    def __post_init__(self) -> None:
        if not isinstance(self.tag, str) or not self.tag:
            raise NodeValidationError(f"Node tag must be a non-empty string, got {self.tag!r}")

        attrs = {} if self.attrs is None else self.attrs
        if not isinstance(attrs, Mapping):
            raise NodeValidationError(
                f"Node attrs must be a mapping, got {type(attrs).__name__} for <{self.tag}>"
            )
        for key, value in attrs.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise NodeValidationError(
                    f"Attribute {key!r}={value!r} on <{self.tag}> must map str to str"
                )
        # Private copy so later changes to the caller's dict never leak in
        object.__setattr__(self, "attrs", dict(attrs))

        if self.content is not None:
            if isinstance(self.content, (str, Node)) or not isinstance(self.content, Iterable):
                raise NodeValidationError(
                    f"Node content must be a sequence or None, got {type(self.content).__name__}"
                )
            content = tuple(self.content)
            for item in content:
                if not isinstance(item, (Node, str)):
                    raise NodeValidationError(
                        f"Content of <{self.tag}> may only hold Node or str, got {type(item).__name__}"
                    )
            object.__setattr__(self, "content", content)

    # Nodes hold a dict, so structural hashing is not available
    __hash__ = None  # type: ignore[assignment]

    @property
    def is_empty(self) -> bool:
        """Return True if content is absent (not merely zero-length)."""
        return self.content is None

    @property
    def children(self) -> Content:
        """Content entries, ``()`` for an empty node."""
        return self.content or ()

    def with_tag(self, tag: str) -> "Node":
        return replace(self, tag=tag)

    def with_attrs(self, attrs: Mapping[str, str]) -> "Node":
        return replace(self, attrs=dict(attrs))

    def with_content(self, content: Optional[Iterable[Union["Node", str]]]) -> "Node":
        return replace(self, content=None if content is None else tuple(content))


def make_node(tag: str, attrs: Optional[Mapping[str, str]] = None, content: Any = None) -> Node:
    """Build a node from *tag*, *attrs* and *content*.

    A list or tuple is used as the content sequence, ``None`` yields an empty
    node and any other value (a child node or a text fragment) is wrapped into
    a one-element sequence.
    """
    if content is None:
        return Node(tag, dict(attrs or {}), None)
    if isinstance(content, (list, tuple)):
        return Node(tag, dict(attrs or {}), tuple(content))
    return Node(tag, dict(attrs or {}), (content,))


def count_nodes(node: Union[Node, str]) -> int:
    """Return the number of element nodes in the subtree rooted at *node*."""
    total = 0
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Node):
            total += 1
            stack.extend(current.children)
    return total
