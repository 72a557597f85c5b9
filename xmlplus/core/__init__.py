from __future__ import annotations

"""Tree model, cursor, path addressing, query evaluator, mutations and serializer."""

from .exceptions import CycleError, LocationError, NodeValidationError, XmlParseError, XmlPlusError
from .models import Node, make_node
from .location import Location, root_loc
from .path import PathStep, path, path_star
from .steps import Index, Predicate, Tag, Text, tag
from .query import select, select_from_root, select_one, select_one_from_root
from .mutation import (
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
from .serializer import emit, emit_loc
from .io import parse_file, parse_str, write_file
