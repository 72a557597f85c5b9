from __future__ import annotations

"""Parse and write boundary between files/strings and node trees.

Parsing goes through ``lxml.etree``. The conversion keeps mixed content in
document order (element text, children, tails), drops comments and
processing instructions but keeps the text around them, and gives elements
with neither children nor text *absent* content so they serialize as
``<tag/>``. Whitespace-only fragments (indentation) are dropped unless the
parser configuration says otherwise.

Namespaces are not resolved: prefixed names are kept as ``prefix:local`` and
declarations are carried over as ``xmlns`` attributes on the element that
declares them.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from lxml import etree as ET

from xmlplus.config import ConfigManager

from .exceptions import XmlParseError
from .location import Location
from .models import Node
from .serializer import emit

__all__ = ["parse_str", "parse_file", "node_from_element", "write_file"]

logger = logging.getLogger(__name__)

_XML_NS = "http://www.w3.org/XML/1998/namespace"

# Leading declaration of str input; its encoding no longer applies once decoded
_DECLARATION_RE = re.compile(r"\A\s*<\?xml\b[^>]*\?>")

PathLike = Union[str, "os.PathLike[str]"]


def parse_str(text: Union[str, bytes], keep_whitespace: Optional[bool] = None) -> Location:
    """Parse a given xml string and return the location of the root."""
    options = _parser_options(keep_whitespace)
    data = _DECLARATION_RE.sub("", text, count=1).encode("utf-8") if isinstance(text, str) else text
    try:
        element = ET.fromstring(data, _make_parser(options))
    except ET.XMLSyntaxError as exc:
        logger.error("Parse FAIL: string chars=%d: %s", len(data), exc)
        raise XmlParseError(f"Invalid XML: {exc}", "<string>", exc) from exc
    return Location(node_from_element(element, options["keep_whitespace"]))


def parse_file(path: PathLike, keep_whitespace: Optional[bool] = None) -> Location:
    """Parse a given xml file and return the location of the root."""
    options = _parser_options(keep_whitespace)
    source = str(Path(path))
    try:
        tree = ET.parse(source, _make_parser(options))
    except (ET.XMLSyntaxError, OSError) as exc:
        logger.error("I/O FAIL: parse XML path=%s", source, exc_info=True)
        raise XmlParseError(f"Could not parse XML file: {exc}", source, exc) from exc
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("I/O: parsed XML path=%s", source)
    return Location(node_from_element(tree.getroot(), options["keep_whitespace"]))


def write_file(path: PathLike, loc: Location, indent: Optional[int] = None,
               declaration: Optional[bool] = None) -> None:
    """Get the root node of the given loc and write it out to *path*.

    Formatting defaults come from the ``serializer`` configuration section.
    """
    settings = ConfigManager().get_serializer_config()
    text = emit(
        loc.root().node,
        indent=int(settings.get("indent", 4)) if indent is None else indent,
        declaration=bool(settings.get("declaration", True)) if declaration is None else declaration,
    )
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("I/O: wrote XML path=%s chars=%d", path, len(text))
    except Exception:
        logger.error("I/O FAIL: write XML path=%s", path, exc_info=True)
        raise


def node_from_element(element: Any, keep_whitespace: bool = False) -> Node:
    """Convert an lxml element (and its subtree) into a :class:`Node`."""
    content: List[Union[Node, str]] = []
    _push_text(content, element.text, keep_whitespace)
    for child in element:
        if isinstance(child.tag, str):
            content.append(node_from_element(child, keep_whitespace))
        elif child.tag is ET.Entity:
            # Unresolved reference, kept as its literal "&name;" text
            _push_text(content, child.text, keep_whitespace)
        # Comments and processing instructions are skipped, their tails kept
        _push_text(content, child.tail, keep_whitespace)
    return Node(_qualified_name(element, element.tag), _attributes(element), tuple(content) if content else None)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _parser_options(keep_whitespace: Optional[bool]) -> Dict[str, Any]:
    settings = ConfigManager().get_parser_config()
    return {
        "keep_whitespace": bool(settings.get("keep_whitespace", False)) if keep_whitespace is None else keep_whitespace,
        "resolve_entities": _entity_mode(settings.get("resolve_entities", "internal")),
    }


def _entity_mode(value: Any) -> Union[bool, str]:
    """Map the ``resolve_entities`` setting onto lxml's parser argument.

    ``"internal"`` expands entities declared in the document's own DTD,
    ``true`` also loads external ones from disk and ``false`` keeps every
    reference as literal text.
    """
    if isinstance(value, bool) or value == "internal":
        return value
    raise ValueError(f"parser.resolve_entities must be true, false or 'internal', got {value!r}")


def _make_parser(options: Dict[str, Any]) -> "ET.XMLParser":
    return ET.XMLParser(resolve_entities=options["resolve_entities"], no_network=True)


def _push_text(content: List[Union[Node, str]], fragment: Optional[str], keep_whitespace: bool) -> None:
    if not fragment:
        return
    if not keep_whitespace and not fragment.strip():
        return
    if content and isinstance(content[-1], str):
        content[-1] = content[-1] + fragment
    else:
        content.append(fragment)


def _qualified_name(element: Any, name: str) -> str:
    qname = ET.QName(name)
    if qname.namespace is None:
        return qname.localname
    if qname.namespace == _XML_NS:
        return f"xml:{qname.localname}"
    if name == element.tag:
        prefix = element.prefix
    else:
        prefix = next((p for p, uri in element.nsmap.items() if p and uri == qname.namespace), None)
    return f"{prefix}:{qname.localname}" if prefix else qname.localname


def _attributes(element: Any) -> Dict[str, str]:
    attrs: Dict[str, str] = {}
    parent = element.getparent()
    inherited = parent.nsmap if parent is not None else {}
    for prefix, uri in element.nsmap.items():
        if inherited.get(prefix) != uri:
            attrs["xmlns" if prefix is None else f"xmlns:{prefix}"] = uri
    for name, value in element.attrib.items():
        attrs[_qualified_name(element, name)] = value
    return attrs
