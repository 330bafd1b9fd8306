"""Convert ``svn --xml`` documents into plain dict/list trees.

Shape of the tree:
- attributes are stored under ``@name`` as strings
- an element without attributes or children becomes its stripped text
- otherwise text is stored under ``#text``
- a child tag seen once is stored as a bare value, a repeated one as a list

Because of the last rule, readers must wrap repeated elements with
``svnmcp.core.structured.as_sequence``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from svnmcp.core.errors import ParseError
from svnmcp.core.result import Err, Ok, Result
from svnmcp.core.structured import StrDict

__all__ = ["element_to_data", "parse_document"]


def element_to_data(element: ET.Element) -> object:
    """Convert an element (recursively) into the tree shape described above."""
    data: StrDict = {f"@{name}": value for name, value in element.attrib.items()}

    for child in element:
        value = element_to_data(child)
        if child.tag not in data:
            data[child.tag] = value
            continue
        existing = data[child.tag]
        if isinstance(existing, list):
            existing.append(value)
        else:
            data[child.tag] = [existing, value]

    text = (element.text or "").strip()
    if not data:
        return text
    if text:
        data["#text"] = text
    return data


def parse_document(xml: str) -> Result[StrDict, ParseError]:
    """Parse an XML document into ``{root_tag: tree}``.

    Returns:
        Ok(tree) on success, Err(ParseError) on malformed input
    """
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as e:
        return Err(ParseError(f"Invalid SVN XML output: {e}", details=xml[:500]))
    return Ok({root.tag: element_to_data(root)})
