from __future__ import annotations

"""Canonical text form of a node tree.

Output rules:

1. A fixed XML declaration line.
2. Each element at depth ``d`` starts with ``d * indent`` spaces, then
   ``<tag`` and `` name="value"`` per attribute, in mapping order.
3. Absent content gives a self-closing ``<tag/>`` line.
4. Content made only of text fragments is written inline:
   ``<tag>text</tag>``. Anything else opens a block, children go one level
   deeper and the closing tag is indented like the opening one.

Text is written verbatim; no escaping happens at this layer.
"""

from typing import List, Tuple, Union

from .location import Location
from .models import Node

__all__ = ["XML_DECLARATION", "emit", "emit_loc"]

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


def emit(node: Union[Node, str], indent: int = 4, declaration: bool = True) -> str:
    """Serialize *node* and everything below it to text."""
    parts: List[str] = []
    if declaration:
        parts.append(XML_DECLARATION + "\n")

    # (item, depth, closing) entries, popped in document order
    stack: List[Tuple[Union[Node, str], int, bool]] = [(node, 0, False)]
    while stack:
        item, depth, closing = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        lead = " " * (depth * indent)
        if closing:
            parts.append(f"{lead}</{item.tag}>\n")
            continue

        parts.append(f"{lead}<{item.tag}")
        for name, value in item.attrs.items():
            parts.append(f' {name}="{value}"')

        if item.content is None:
            parts.append("/>\n")
            continue

        parts.append(">")
        if all(isinstance(entry, str) for entry in item.content):
            parts.extend(item.content)
            parts.append(f"</{item.tag}>\n")
            continue

        parts.append("\n")
        stack.append((item, depth, True))
        for child in reversed(item.content):
            stack.append((child, depth + 1, False))

    return "".join(parts)


def emit_loc(loc: Location, indent: int = 4, declaration: bool = True) -> str:
    """Same as :func:`emit` but takes a location and serializes its focus."""
    return emit(loc.node, indent=indent, declaration=declaration)
