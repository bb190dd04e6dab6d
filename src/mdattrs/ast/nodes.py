#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/ast/nodes.py
"""AST node classes for markdown documents carrying attribute fragments.

This module defines the node hierarchy the attribute transforms operate on.
It mirrors the shape of an mdast tree: container nodes own an ordered
``children`` list, leaf nodes hold their text in ``content``, and every node
can carry a source position and a free-form ``metadata`` dictionary.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - ThematicBreak, HTMLBlock
    - Definition, FootnoteDefinition, FrontMatter

Inline nodes:
    - Text, Emphasis, Strong, Code, Link, Image
    - Strikethrough, LineBreak, HTMLInline
    - LinkReference, ImageReference, FootnoteReference

Transient nodes:
    - AttributeFragment, a parsed ``{...}`` annotation waiting to be attached
      to a node. Attribute resolution removes every one of them.

Property Bags
-------------
Resolved attributes live in ``node.metadata["properties"]``. Keys other than
``class`` map to a single string, ``class`` maps to a list of tokens.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

Alignment = Literal["left", "center", "right"]
ReferenceType = Literal["full", "collapsed", "shortcut"]


@dataclass
class Point:
    """A single place in the source text.

    Parameters
    ----------
    line : int
        1-based line number
    column : int
        1-based column number
    offset : int or None, default = None
        0-based character offset from the start of the source

    """

    line: int
    column: int
    offset: Optional[int] = None


@dataclass
class SourceLocation:
    """Source span of a node, as supplied by the upstream tree builder.

    Parameters
    ----------
    start : Point
        Place of the first character of the node
    end : Point
        Place just after the last character of the node

    """

    start: Point
    end: Point


class Node(ABC):
    """Base class for all AST nodes.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Side data associated with this node (property bag, pending attributes)
    source_location : SourceLocation or None, default = None
        Where this node came from in the source

    """

    metadata: dict[str, Any]
    source_location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    children : list of Node, default = empty list
        Inline nodes representing heading text
    metadata : dict, default = empty dict
        Heading metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    level: int
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    A paragraph whose only child is an AttributeFragment is a standalone
    attribute line, which may attach to the block that directly follows it.

    Parameters
    ----------
    children : list of Node, default = empty list
        Inline nodes representing paragraph content
    metadata : dict, default = empty dict
        Paragraph metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code block.

    The content of a code block is opaque, so attributes written on its
    opening fence cannot be represented as child fragments. The upstream
    builder stores them in ``metadata["attributes"]`` instead.

    Parameters
    ----------
    content : str
        Code content (not parsed as markdown)
    language : str or None, default = None
        Language identifier from the info string
    meta : str or None, default = None
        Remainder of the info string after the language
    metadata : dict, default = empty dict
        Code block metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    language: Optional[str] = None
    meta: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote node containing other block elements.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the quote
    metadata : dict, default = empty dict
        Block quote metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    children : list of ListItem, default = empty list
        List items
    start : int or None, default = None
        Starting number for ordered lists
    tight : bool, default = True
        Whether the list is tight (no blank lines between items). Renderers
        drop the paragraph wrappers inside the items of a tight list.
    metadata : dict, default = empty dict
        List metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    ordered: bool
    children: list[Node] = field(default_factory=list)
    start: Optional[int] = None
    tight: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item node containing block content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the list item
    checked : bool or None, default = None
        Task list state (GFM extension), None for plain items
    spread : bool or None, default = None
        Whether the item's children are separated by blank lines, None
        when unknown
    metadata : dict, default = empty dict
        List item metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    checked: Optional[bool] = None
    spread: Optional[bool] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node (GFM extension).

    Parameters
    ----------
    children : list of TableRow, default = empty list
        Table rows, the first one being the header row
    alignments : list, default = empty list
        Column alignments ('left', 'center', 'right', or None)
    metadata : dict, default = empty dict
        Table metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    alignments: list[Alignment | None] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node containing cells."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node containing inline content."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class ThematicBreak(Node):
    """Thematic break node (horizontal rule).

    A thematic break never has children. Some construction paths upstream
    (a setext heading underline reinterpreted as a rule) still hang
    attribute fragments below it; they land in ``children`` until the
    normalizer folds them into the break's property bag and resets the
    field to None.

    Parameters
    ----------
    children : list of Node or None, default = None
        Stray attribute fragments produced upstream, normally None
    metadata : dict, default = empty dict
        Break metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: Optional[list[Node]] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLBlock(Node):
    """Raw HTML block node, preserved as-is without sanitization."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this HTML block."""
        return visitor.visit_html_block(self)


@dataclass
class Definition(Node):
    """Link reference definition node (``[id]: url "title"``).

    Parameters
    ----------
    identifier : str
        Normalized reference identifier
    url : str
        Definition target
    title : str or None, default = None
        Optional title
    label : str or None, default = None
        Identifier as written in the source
    metadata : dict, default = empty dict
        Definition metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    identifier: str
    url: str
    title: Optional[str] = None
    label: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition."""
        return visitor.visit_definition(self)


@dataclass
class FootnoteDefinition(Node):
    """Footnote definition node (``[^id]: text``).

    Parameters
    ----------
    identifier : str
        Normalized footnote identifier
    children : list of Node, default = empty list
        Block nodes making up the footnote content
    label : str or None, default = None
        Identifier as written in the source
    metadata : dict, default = empty dict
        Footnote metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    identifier: str
    children: list[Node] = field(default_factory=list)
    label: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote definition."""
        return visitor.visit_footnote_definition(self)


@dataclass
class FrontMatter(Node):
    """Front matter block, kept as raw text.

    Parameters
    ----------
    content : str
        Front matter text without its fences
    format : {"yaml", "toml"}, default = "yaml"
        Front matter language
    metadata : dict, default = empty dict
        Front matter metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    format: Literal["yaml", "toml"] = "yaml"
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this front matter."""
        return visitor.visit_front_matter(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        Text content
    metadata : dict, default = empty dict
        Text metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) node."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) node."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong node."""
        return visitor.visit_strong(self)


@dataclass
class Code(Node):
    """Inline code node.

    Parameters
    ----------
    content : str
        Code content
    metadata : dict, default = empty dict
        Code metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline code."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Hyperlink node.

    Parameters
    ----------
    url : str
        Link target
    children : list of Node, default = empty list
        Inline nodes representing link text
    title : str or None, default = None
        Optional link title
    metadata : dict, default = empty dict
        Link metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    children: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image node.

    Parameters
    ----------
    url : str
        Image source
    alt_text : str or None, default = ''
        Alternative text
    title : str or None, default = None
        Optional image title
    metadata : dict, default = empty dict
        Image metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    alt_text: Optional[str] = ""
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class Strikethrough(Node):
    """Strikethrough node (GFM ``~~text~~``)."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough."""
        return visitor.visit_strikethrough(self)


@dataclass
class LineBreak(Node):
    """Hard line break node."""

    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_line_break(self)


@dataclass
class HTMLInline(Node):
    """Raw inline HTML node, preserved as-is without sanitization."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline HTML."""
        return visitor.visit_html_inline(self)


@dataclass
class LinkReference(Node):
    """Reference-style link (``[text][id]``, ``[id][]`` or ``[id]``).

    Parameters
    ----------
    identifier : str
        Normalized identifier of the Definition it points to
    children : list of Node, default = empty list
        Inline nodes representing link text
    label : str or None, default = None
        Identifier as written in the source
    reference_type : {"full", "collapsed", "shortcut"}, default = "full"
        How the reference was written
    metadata : dict, default = empty dict
        Link reference metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    identifier: str
    children: list[Node] = field(default_factory=list)
    label: Optional[str] = None
    reference_type: ReferenceType = "full"
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link reference."""
        return visitor.visit_link_reference(self)


@dataclass
class ImageReference(Node):
    """Reference-style image (``![alt][id]``)."""

    identifier: str
    alt_text: Optional[str] = ""
    label: Optional[str] = None
    reference_type: ReferenceType = "full"
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image reference."""
        return visitor.visit_image_reference(self)


@dataclass
class FootnoteReference(Node):
    """Footnote reference node (``[^id]``)."""

    identifier: str
    label: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote reference."""
        return visitor.visit_footnote_reference(self)


# ============================================================================
# Transient Nodes
# ============================================================================


@dataclass
class AttributeFragment(Node):
    """A parsed ``{...}`` annotation that has not been attached yet.

    Attribute fragments are created by the upstream tree builder wherever
    attribute syntax was recognized. Resolution folds ``attributes`` into
    the property bag of some node, or replaces the fragment with a Text node
    holding ``source_text`` when no node can take it.

    Parameters
    ----------
    attributes : dict of str to str, default = empty dict
        Parsed attributes, e.g. ``{"id": "intro", "class": "note wide"}``
    source_text : str, default = ''
        The exact source slice that was matched, e.g. ``'{#intro .note}'``
    metadata : dict, default = empty dict
        Fragment metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    attributes: dict[str, str] = field(default_factory=dict)
    source_text: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this attribute fragment."""
        return visitor.visit_attribute_fragment(self)
