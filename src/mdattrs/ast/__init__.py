#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/ast/__init__.py
"""Abstract Syntax Tree (AST) module for markdown documents with attributes.

The module consists of several components:

- nodes: AST node classes, including the transient AttributeFragment
- visitors: Visitor pattern implementation for AST traversal
- utils: Node-kind predicates and position helpers
- transforms: Tree queries and cloning
- mdast: Conversion to and from mdast dictionaries and JSON

Examples
--------
    >>> from mdattrs.ast import AttributeFragment, Document, Emphasis, Paragraph, Text
    >>> doc = Document(children=[
    ...     Paragraph(children=[
    ...         Emphasis(children=[Text(content="em")]),
    ...         AttributeFragment(attributes={"class": "note"}, source_text="{.note}"),
    ...     ])
    ... ])

"""

from __future__ import annotations

from mdattrs.ast.mdast import ast_to_mdast, ast_to_mdast_json, mdast_json_to_ast, mdast_to_ast
from mdattrs.ast.nodes import (
    Alignment,
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
    ReferenceType,
    SourceLocation,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdattrs.ast.transforms import clone_node, extract_nodes, find_fragments
from mdattrs.ast.utils import (
    get_node_children,
    get_standalone_fragment,
    is_childless_kind,
    is_inline_capable,
)
from mdattrs.ast.visitors import NodeCollector, NodeVisitor

__all__ = [
    # Nodes
    "Alignment",
    "AttributeFragment",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Definition",
    "Document",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "FrontMatter",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "ImageReference",
    "LineBreak",
    "Link",
    "LinkReference",
    "List",
    "ListItem",
    "Node",
    "Paragraph",
    "ReferenceType",
    "Point",
    "SourceLocation",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    # Visitors
    "NodeVisitor",
    "NodeCollector",
    # Utilities
    "clone_node",
    "extract_nodes",
    "find_fragments",
    "get_node_children",
    "get_standalone_fragment",
    "is_childless_kind",
    "is_inline_capable",
    # mdast
    "ast_to_mdast",
    "ast_to_mdast_json",
    "mdast_json_to_ast",
    "mdast_to_ast",
]
