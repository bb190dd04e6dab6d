#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Every node's ``accept`` method dispatches to the matching ``visit_*``
method of a visitor. The base class routes every ``visit_*`` method to
``generic_visit``, so a visitor only overrides the node kinds it cares
about.

Examples
--------
Count attribute fragments:

    >>> class FragmentCounter(NodeVisitor):
    ...     def __init__(self):
    ...         self.count = 0
    ...
    ...     def generic_visit(self, node):
    ...         for child in get_node_children(node):
    ...             child.accept(self)
    ...
    ...     def visit_attribute_fragment(self, node):
    ...         self.count += 1
    >>>
    >>> counter = FragmentCounter()
    >>> document.accept(counter)

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

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
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdattrs.ast.utils import get_node_children


class NodeVisitor(ABC):
    """Base class for AST node visitors.

    Subclasses implement ``generic_visit`` and override the ``visit_*``
    methods for the node kinds they handle specially.

    """

    @abstractmethod
    def generic_visit(self, node: Node) -> Any:
        """Visit a node that has no dedicated handler.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""
        return self.generic_visit(node)

    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        return self.generic_visit(node)

    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        return self.generic_visit(node)

    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        return self.generic_visit(node)

    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        return self.generic_visit(node)

    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        return self.generic_visit(node)

    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        return self.generic_visit(node)

    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        return self.generic_visit(node)

    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        return self.generic_visit(node)

    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        return self.generic_visit(node)

    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        return self.generic_visit(node)

    def visit_html_block(self, node: HTMLBlock) -> Any:
        """Visit an HTMLBlock node."""
        return self.generic_visit(node)

    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        return self.generic_visit(node)

    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        return self.generic_visit(node)

    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        return self.generic_visit(node)

    def visit_code(self, node: Code) -> Any:
        """Visit an inline Code node."""
        return self.generic_visit(node)

    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        return self.generic_visit(node)

    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        return self.generic_visit(node)

    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""
        return self.generic_visit(node)

    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        return self.generic_visit(node)

    def visit_html_inline(self, node: HTMLInline) -> Any:
        """Visit an HTMLInline node."""
        return self.generic_visit(node)

    def visit_definition(self, node: Definition) -> Any:
        """Visit a Definition node."""
        return self.generic_visit(node)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        """Visit a FootnoteDefinition node."""
        return self.generic_visit(node)

    def visit_front_matter(self, node: FrontMatter) -> Any:
        """Visit a FrontMatter node."""
        return self.generic_visit(node)

    def visit_link_reference(self, node: LinkReference) -> Any:
        """Visit a LinkReference node."""
        return self.generic_visit(node)

    def visit_image_reference(self, node: ImageReference) -> Any:
        """Visit an ImageReference node."""
        return self.generic_visit(node)

    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Visit a FootnoteReference node."""
        return self.generic_visit(node)

    def visit_attribute_fragment(self, node: AttributeFragment) -> Any:
        """Visit an AttributeFragment node."""
        return self.generic_visit(node)


class NodeCollector(NodeVisitor):
    """Visitor that collects nodes matching a condition.

    Nodes are collected in document order (pre-order, depth-first).

    Parameters
    ----------
    predicate : callable or None, default = None
        Function that takes a node and returns True to collect it

    """

    def __init__(self, predicate: Callable[[Node], bool] | None = None):
        """Initialize the collector with an optional predicate function."""
        self.predicate = predicate or (lambda n: True)
        self.collected: list[Node] = []

    def generic_visit(self, node: Node) -> None:
        """Collect the node if it matches, then visit its children."""
        if self.predicate(node):
            self.collected.append(node)
        for child in get_node_children(node):
            child.accept(self)
