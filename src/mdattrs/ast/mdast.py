#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/ast/mdast.py
"""Conversion between mdast dictionaries and AST nodes.

mdast is the markdown syntax tree format of the unified ecosystem. Tree
builders that recognize ``{...}`` attribute syntax emit it with
``mdastAttributes`` nodes, and HTML renderers read resolved attributes from
``data.hProperties``. This module maps that format onto the node classes
of ``mdattrs.ast.nodes``:

==================  ==============================================
mdast               AST
==================  ==============================================
``position``        ``source_location`` (line, column, offset)
``data.hProperties``  ``metadata["properties"]`` (property bag)
``data.mdastAttributes``  ``metadata["attributes"]`` (side channel)
other ``data`` keys ``metadata["data"]``
``list.spread``     ``List.tight`` (negated)
``html``            HTMLInline inside phrasing content, else HTMLBlock
``mdastAttributes`` AttributeFragment (``value`` is the source text)
``yaml``, ``toml``  FrontMatter (``format`` is the node type)
==================  ==============================================

Examples
--------
    >>> doc = mdast_to_ast({"type": "root", "children": [
    ...     {"type": "paragraph", "children": [{"type": "text", "value": "Hi"}]}
    ... ]})
    >>> ast_to_mdast(doc)["children"][0]["type"]
    'paragraph'

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

from mdattrs.ast.nodes import (
    AttributeFragment,
    BlockQuote,
    Code,
    CodeBlock,
    Definition,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    FrontMatter,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    ImageReference,
    LineBreak,
    Link,
    LinkReference,
    List,
    ListItem,
    Node,
    Paragraph,
    Point,
    SourceLocation,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdattrs.constants import (
    MDAST_FRAGMENT_TYPE,
    MDAST_PROPERTIES_KEY,
    MDAST_SIDE_CHANNEL_KEY,
    PROPERTIES_KEY,
    SIDE_CHANNEL_ATTRIBUTES_KEY,
)
from mdattrs.exceptions import ParsingError

logger = logging.getLogger(__name__)

_EXTRA_DATA_KEY = "data"

# Parents whose children are phrasing (inline) content
_PHRASING_PARENTS = frozenset(
    {"paragraph", "heading", "tableCell", "emphasis", "strong", "delete", "link", "linkReference"}
)


# ============================================================================
# mdast -> AST
# ============================================================================


def _deserialize_point(data: Any) -> Point:
    if not isinstance(data, dict) or "line" not in data or "column" not in data:
        raise ParsingError(f"Invalid position point: {data!r}")
    return Point(line=data["line"], column=data["column"], offset=data.get("offset"))


def _deserialize_position(data: dict[str, Any]) -> Optional[SourceLocation]:
    position = data.get("position")
    if not position:
        return None
    if not isinstance(position, dict):
        raise ParsingError(f"Invalid position: {position!r}")
    return SourceLocation(start=_deserialize_point(position.get("start")), end=_deserialize_point(position.get("end")))


def _deserialize_metadata(data: dict[str, Any]) -> dict[str, Any]:
    """Split mdast ``data`` into property bag, side channel and the rest."""
    from mdattrs.transforms.properties import class_tokens

    node_data = dict(data.get("data") or {})
    metadata: dict[str, Any] = {}

    properties = node_data.pop(MDAST_PROPERTIES_KEY, None)
    if properties:
        properties = dict(properties)
        if "class" in properties:
            properties["class"] = class_tokens(properties["class"])
        metadata[PROPERTIES_KEY] = properties

    side_channel = node_data.pop(MDAST_SIDE_CHANNEL_KEY, None)
    if side_channel is not None:
        metadata[SIDE_CHANNEL_ATTRIBUTES_KEY] = dict(side_channel)

    if node_data:
        metadata[_EXTRA_DATA_KEY] = node_data
    return metadata


class _MdastReader:
    """Recursive mdast to AST converter."""

    def __init__(self, strict_mode: bool):
        self.strict_mode = strict_mode
        self._dispatch: dict[str, Callable[[dict[str, Any], bool], Node]] = {
            "root": self._read_root,
            "heading": self._read_heading,
            "paragraph": self._read_paragraph,
            "code": self._read_code,
            "blockquote": self._read_blockquote,
            "list": self._read_list,
            "listItem": self._read_list_item,
            "table": self._read_table,
            "tableRow": self._read_table_row,
            "tableCell": self._read_table_cell,
            "thematicBreak": self._read_thematic_break,
            "html": self._read_html,
            "text": self._read_text,
            "emphasis": self._read_emphasis,
            "strong": self._read_strong,
            "delete": self._read_delete,
            "link": self._read_link,
            "image": self._read_image,
            "inlineCode": self._read_inline_code,
            "break": self._read_break,
            "linkReference": self._read_link_reference,
            "imageReference": self._read_image_reference,
            "definition": self._read_definition,
            "footnoteReference": self._read_footnote_reference,
            "footnoteDefinition": self._read_footnote_definition,
            "yaml": self._read_front_matter,
            "toml": self._read_front_matter,
            MDAST_FRAGMENT_TYPE: self._read_fragment,
        }

    def read(self, data: Any, phrasing: bool = False) -> Optional[Node]:
        if not isinstance(data, dict):
            raise ParsingError(f"mdast node must be a mapping, got {type(data).__name__}")
        node_type = data.get("type")
        if not node_type:
            raise ParsingError("mdast node is missing its 'type' field")

        reader = self._dispatch.get(node_type)
        if reader is None:
            if self.strict_mode:
                raise ParsingError(f"Unknown mdast node type: {node_type}", node_type=node_type)
            logger.warning("Unknown mdast node type '%s', skipping", node_type)
            return None

        try:
            return reader(data, phrasing)
        except (KeyError, TypeError, ValueError) as e:
            raise ParsingError(f"Malformed mdast '{node_type}' node: {e}", node_type=node_type, original_error=e) from e

    def _children(self, data: dict[str, Any]) -> list[Node]:
        phrasing = data["type"] in _PHRASING_PARENTS
        children = []
        for child_data in data.get("children", []):
            child = self.read(child_data, phrasing)
            if child is not None:
                children.append(child)
        return children

    def _common(self, data: dict[str, Any]) -> dict[str, Any]:
        return {"metadata": _deserialize_metadata(data), "source_location": _deserialize_position(data)}

    def _leaf(self, node: Node, data: dict[str, Any]) -> Node:
        """Keep stray children of a leaf node so normalization can fold them."""
        if "children" in data:
            node.children = self._children(data)  # type: ignore[attr-defined]
        return node

    def _read_root(self, data: dict[str, Any], phrasing: bool) -> Node:
        return Document(children=self._children(data), **self._common(data))

    def _read_heading(self, data: dict[str, Any], phrasing: bool) -> Node:
        return Heading(level=data["depth"], children=self._children(data), **self._common(data))

    def _read_paragraph(self, data: dict[str, Any], phrasing: bool) -> Node:
        return Paragraph(children=self._children(data), **self._common(data))

    def _read_code(self, data: dict[str, Any], phrasing: bool) -> Node:
        node = CodeBlock(
            content=data.get("value", ""), language=data.get("lang"), meta=data.get("meta"), **self._common(data)
        )
        return self._leaf(node, data)

    def _read_blockquote(self, data: dict[str, Any], phrasing: bool) -> Node:
        return BlockQuote(children=self._children(data), **self._common(data))

    def _read_list(self, data: dict[str, Any], phrasing: bool) -> Node:
        return List(
            ordered=bool(data.get("ordered", False)),
            children=self._children(data),
            start=data.get("start"),
            tight=not data.get("spread", False),
            **self._common(data),
        )

    def _read_list_item(self, data: dict[str, Any], phrasing: bool) -> Node:
        return ListItem(
            children=self._children(data),
            checked=data.get("checked"),
            spread=data.get("spread"),
            **self._common(data),
        )

    def _read_table(self, data: dict[str, Any], phrasing: bool) -> Node:
        return Table(children=self._children(data), alignments=list(data.get("align") or []), **self._common(data))

    def _read_table_row(self, data: dict[str, Any], phrasing: bool) -> Node:
        return TableRow(children=self._children(data), **self._common(data))

    def _read_table_cell(self, data: dict[str, Any], phrasing: bool) -> Node:
        return TableCell(children=self._children(data), **self._common(data))

    def _read_thematic_break(self, data: dict[str, Any], phrasing: bool) -> Node:
        children = self._children(data) if "children" in data else None
        return ThematicBreak(children=children, **self._common(data))

    def _read_html(self, data: dict[str, Any], phrasing: bool) -> Node:
        if phrasing:
            return self._leaf(HTMLInline(content=data.get("value", ""), **self._common(data)), data)
        return self._leaf(HTMLBlock(content=data.get("value", ""), **self._common(data)), data)

    def _read_text(self, data: dict[str, Any], phrasing: bool) -> Node:
        return self._leaf(Text(content=data.get("value", ""), **self._common(data)), data)

    def _read_emphasis(self, data: dict[str, Any], phrasing: bool) -> Node:
        return Emphasis(children=self._children(data), **self._common(data))

    def _read_strong(self, data: dict[str, Any], phrasing: bool) -> Node:
        return Strong(children=self._children(data), **self._common(data))

    def _read_delete(self, data: dict[str, Any], phrasing: bool) -> Node:
        return Strikethrough(children=self._children(data), **self._common(data))

    def _read_link(self, data: dict[str, Any], phrasing: bool) -> Node:
        return Link(url=data["url"], children=self._children(data), title=data.get("title"), **self._common(data))

    def _read_image(self, data: dict[str, Any], phrasing: bool) -> Node:
        node = Image(url=data["url"], alt_text=data.get("alt"), title=data.get("title"), **self._common(data))
        return self._leaf(node, data)

    def _read_inline_code(self, data: dict[str, Any], phrasing: bool) -> Node:
        return self._leaf(Code(content=data.get("value", ""), **self._common(data)), data)

    def _read_break(self, data: dict[str, Any], phrasing: bool) -> Node:
        return self._leaf(LineBreak(**self._common(data)), data)

    def _read_link_reference(self, data: dict[str, Any], phrasing: bool) -> Node:
        return LinkReference(
            identifier=data["identifier"],
            children=self._children(data),
            label=data.get("label"),
            reference_type=data.get("referenceType", "full"),
            **self._common(data),
        )

    def _read_image_reference(self, data: dict[str, Any], phrasing: bool) -> Node:
        node = ImageReference(
            identifier=data["identifier"],
            alt_text=data.get("alt"),
            label=data.get("label"),
            reference_type=data.get("referenceType", "full"),
            **self._common(data),
        )
        return self._leaf(node, data)

    def _read_definition(self, data: dict[str, Any], phrasing: bool) -> Node:
        node = Definition(
            identifier=data["identifier"],
            url=data["url"],
            title=data.get("title"),
            label=data.get("label"),
            **self._common(data),
        )
        return self._leaf(node, data)

    def _read_footnote_reference(self, data: dict[str, Any], phrasing: bool) -> Node:
        node = FootnoteReference(identifier=data["identifier"], label=data.get("label"), **self._common(data))
        return self._leaf(node, data)

    def _read_footnote_definition(self, data: dict[str, Any], phrasing: bool) -> Node:
        return FootnoteDefinition(
            identifier=data["identifier"],
            children=self._children(data),
            label=data.get("label"),
            **self._common(data),
        )

    def _read_front_matter(self, data: dict[str, Any], phrasing: bool) -> Node:
        node = FrontMatter(content=data.get("value", ""), format=data["type"], **self._common(data))
        return self._leaf(node, data)

    def _read_fragment(self, data: dict[str, Any], phrasing: bool) -> Node:
        attributes = data.get("attributes") or {}
        if not isinstance(attributes, dict):
            raise TypeError(f"attributes must be a mapping, got {type(attributes).__name__}")
        return AttributeFragment(
            attributes={str(key): str(value) for key, value in attributes.items()},
            source_text=data.get("value", ""),
            **self._common(data),
        )


def mdast_to_ast(data: dict[str, Any], strict_mode: bool = True) -> Document:
    """Convert an mdast tree to a Document.

    Parameters
    ----------
    data : dict
        mdast root node
    strict_mode : bool, default = True
        If True, raise ParsingError on unknown node types.
        If False, log a warning and drop unknown nodes.

    Returns
    -------
    Document
        Converted document

    Raises
    ------
    ParsingError
        If the tree is malformed, its root is not a ``root`` node, or (in
        strict mode) it contains unknown node types

    """
    if not isinstance(data, dict) or data.get("type") != "root":
        raise ParsingError("mdast tree must start with a 'root' node")
    document = _MdastReader(strict_mode).read(data)
    assert isinstance(document, Document)
    return document


def mdast_json_to_ast(json_str: str, strict_mode: bool = True) -> Document:
    """Convert an mdast tree serialized as JSON to a Document.

    Parameters
    ----------
    json_str : str
        JSON text of an mdast root node
    strict_mode : bool, default = True
        See ``mdast_to_ast``

    Returns
    -------
    Document
        Converted document

    Raises
    ------
    ParsingError
        If the JSON is invalid or the tree is malformed

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParsingError(f"Invalid mdast JSON: {e}", original_error=e) from e
    return mdast_to_ast(data, strict_mode=strict_mode)


# ============================================================================
# AST -> mdast
# ============================================================================


def _serialize_point(point: Point) -> dict[str, Any]:
    result: dict[str, Any] = {"line": point.line, "column": point.column}
    if point.offset is not None:
        result["offset"] = point.offset
    return result


def _serialize_common(result: dict[str, Any], node: Node) -> dict[str, Any]:
    node_data = dict(node.metadata.get(_EXTRA_DATA_KEY) or {})
    properties = node.metadata.get(PROPERTIES_KEY)
    if properties:
        node_data[MDAST_PROPERTIES_KEY] = {
            key: list(value) if isinstance(value, list) else value for key, value in properties.items()
        }
    side_channel = node.metadata.get(SIDE_CHANNEL_ATTRIBUTES_KEY)
    if side_channel is not None:
        node_data[MDAST_SIDE_CHANNEL_KEY] = dict(side_channel)
    if node_data:
        result["data"] = node_data

    children = getattr(node, "children", None)
    if children is not None:
        result["children"] = [ast_to_mdast(child) for child in children]

    if node.source_location is not None:
        result["position"] = {
            "start": _serialize_point(node.source_location.start),
            "end": _serialize_point(node.source_location.end),
        }
    return result


def _optional(result: dict[str, Any], **fields: Any) -> dict[str, Any]:
    """Add only the optional fields that are set."""
    result.update({key: value for key, value in fields.items() if value is not None})
    return result


def _serialize_heading(node: Heading) -> dict[str, Any]:
    return {"type": "heading", "depth": node.level}


def _serialize_code_block(node: CodeBlock) -> dict[str, Any]:
    return _optional({"type": "code"}, lang=node.language, meta=node.meta, value=node.content)


def _serialize_list(node: List) -> dict[str, Any]:
    return _optional({"type": "list", "ordered": node.ordered}, start=node.start, spread=not node.tight)


def _serialize_list_item(node: ListItem) -> dict[str, Any]:
    return _optional({"type": "listItem"}, checked=node.checked, spread=node.spread)


def _serialize_table(node: Table) -> dict[str, Any]:
    return {"type": "table", "align": list(node.alignments)}


def _serialize_link(node: Link) -> dict[str, Any]:
    return _optional({"type": "link", "url": node.url}, title=node.title)


def _serialize_image(node: Image) -> dict[str, Any]:
    return _optional({"type": "image", "url": node.url}, title=node.title, alt=node.alt_text)


def _serialize_link_reference(node: LinkReference) -> dict[str, Any]:
    result = {"type": "linkReference", "identifier": node.identifier, "referenceType": node.reference_type}
    return _optional(result, label=node.label)


def _serialize_image_reference(node: ImageReference) -> dict[str, Any]:
    result = {"type": "imageReference", "identifier": node.identifier, "referenceType": node.reference_type}
    return _optional(result, label=node.label, alt=node.alt_text)


def _serialize_definition(node: Definition) -> dict[str, Any]:
    result = {"type": "definition", "identifier": node.identifier, "url": node.url}
    return _optional(result, label=node.label, title=node.title)


def _serialize_footnote_reference(node: FootnoteReference) -> dict[str, Any]:
    return _optional({"type": "footnoteReference", "identifier": node.identifier}, label=node.label)


def _serialize_footnote_definition(node: FootnoteDefinition) -> dict[str, Any]:
    return _optional({"type": "footnoteDefinition", "identifier": node.identifier}, label=node.label)


def _serialize_front_matter(node: FrontMatter) -> dict[str, Any]:
    return {"type": node.format, "value": node.content}


def _serialize_fragment(node: AttributeFragment) -> dict[str, Any]:
    return {"type": MDAST_FRAGMENT_TYPE, "attributes": dict(node.attributes), "value": node.source_text}


def _simple(node_type: str) -> Callable[[Node], dict[str, Any]]:
    return lambda node: {"type": node_type}


def _literal(node_type: str) -> Callable[[Node], dict[str, Any]]:
    return lambda node: {"type": node_type, "value": node.content}  # type: ignore[attr-defined]


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Document: _simple("root"),
    Heading: _serialize_heading,
    Paragraph: _simple("paragraph"),
    CodeBlock: _serialize_code_block,
    BlockQuote: _simple("blockquote"),
    List: _serialize_list,
    ListItem: _serialize_list_item,
    Table: _serialize_table,
    TableRow: _simple("tableRow"),
    TableCell: _simple("tableCell"),
    ThematicBreak: _simple("thematicBreak"),
    HTMLBlock: _literal("html"),
    Text: _literal("text"),
    Emphasis: _simple("emphasis"),
    Strong: _simple("strong"),
    Code: _literal("inlineCode"),
    Link: _serialize_link,
    Image: _serialize_image,
    Strikethrough: _simple("delete"),
    LineBreak: _simple("break"),
    HTMLInline: _literal("html"),
    LinkReference: _serialize_link_reference,
    ImageReference: _serialize_image_reference,
    Definition: _serialize_definition,
    FootnoteReference: _serialize_footnote_reference,
    FootnoteDefinition: _serialize_footnote_definition,
    FrontMatter: _serialize_front_matter,
    AttributeFragment: _serialize_fragment,
}


def ast_to_mdast(node: Node) -> dict[str, Any]:
    """Convert an AST node (and its subtree) to an mdast dictionary.

    Parameters
    ----------
    node : Node
        Node to convert

    Returns
    -------
    dict
        mdast node. Optional fields holding None are left out. Property
        bags appear as ``data.hProperties`` with
        ``class`` as a list of tokens.

    Raises
    ------
    ValueError
        If the node type is not supported

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer is None:
        raise ValueError(f"Unsupported node type: {type(node).__name__}")
    return _serialize_common(serializer(node), node)


def ast_to_mdast_json(node: Node, indent: int | None = None) -> str:
    """Serialize an AST node to mdast JSON.

    Parameters
    ----------
    node : Node
        Node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact output)

    Returns
    -------
    str
        JSON text, with Unicode characters preserved

    """
    return json.dumps(ast_to_mdast(node), indent=indent, ensure_ascii=False)


__all__ = [
    "mdast_to_ast",
    "mdast_json_to_ast",
    "ast_to_mdast",
    "ast_to_mdast_json",
]
