"""Cursor-based query and edit engine for XML trees with mixed content.

Typical use::

    from xmlplus import parse_str, select_one, tag, edit_text, emit

    loc = parse_str("<a><b>1</b><b>2</b></a>")
    loc = edit_text(select_one(loc, tag("b"), 1), "two")
    print(emit(loc.root().node))

Front-ends should only depend on the names re-exported here.
"""

from .core import axes, predicates
from .core.exceptions import CycleError, LocationError, NodeValidationError, XmlParseError, XmlPlusError
from .core.io import parse_file, parse_str, write_file
from .core.location import Location, root_loc
from .core.models import Node, make_node
from .core.mutation import (
    copy_node,
    edit_attrs,
    edit_tag,
    edit_text,
    insert_child,
    insert_left,
    insert_parent,
    insert_right,
    move_node,
)
from .core.path import PathStep, path, path_star
from .core.predicates import (
    attr_eq,
    attr_p,
    empty_node,
    filled,
    not_filled,
    tag_not,
    text,
    text_eq,
    text_node,
    text_re,
    texts,
    texts_eq,
    texts_re,
)
from .core.query import select, select_from_root, select_one, select_one_from_root
from .core.serializer import emit, emit_loc
from .core.steps import Index, Predicate, Tag, Text, tag

__version__ = "0.1.0"

__all__: list[str] = [
    "CycleError",
    "Index",
    "Location",
    "LocationError",
    "Node",
    "NodeValidationError",
    "PathStep",
    "Predicate",
    "Tag",
    "Text",
    "XmlParseError",
    "XmlPlusError",
    "attr_eq",
    "attr_p",
    "axes",
    "copy_node",
    "edit_attrs",
    "edit_tag",
    "edit_text",
    "emit",
    "emit_loc",
    "empty_node",
    "filled",
    "insert_child",
    "insert_left",
    "insert_parent",
    "insert_right",
    "make_node",
    "move_node",
    "not_filled",
    "parse_file",
    "parse_str",
    "path",
    "path_star",
    "predicates",
    "root_loc",
    "select",
    "select_from_root",
    "select_one",
    "select_one_from_root",
    "tag",
    "tag_not",
    "text",
    "text_eq",
    "text_node",
    "text_re",
    "texts",
    "texts_eq",
    "texts_re",
    "write_file",
]
