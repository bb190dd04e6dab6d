#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/ast/utils.py
"""Utility functions for working with AST nodes.

This module provides the node-kind predicates and position helpers the
attribute transforms are built on.

Functions
---------
get_node_children : Live list of a node's children
is_inline_capable : Whether a node can take attributes written right after it
is_childless_kind : Whether a node kind is structurally a leaf
get_standalone_fragment : Fragment of a standalone attribute paragraph
are_directly_adjacent : Line-granularity adjacency of two blocks
offset_gap : Character-offset distance between two nodes

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from mdattrs.ast.nodes import (
    AttributeFragment,
    Code,
    CodeBlock,
    Definition,
    Emphasis,
    FootnoteReference,
    FrontMatter,
    HTMLBlock,
    HTMLInline,
    Image,
    ImageReference,
    LineBreak,
    Link,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
)

if TYPE_CHECKING:
    from mdattrs.ast.nodes import Node

# Node kinds that take attributes written immediately after their closing marker
INLINE_CAPABLE_TYPES: tuple[type[Node], ...] = (Emphasis, Strong, Link, Image, Code)

# Node kinds that must never own children
CHILDLESS_TYPES: tuple[type[Node], ...] = (
    CodeBlock,
    ThematicBreak,
    HTMLBlock,
    Text,
    Code,
    Image,
    LineBreak,
    HTMLInline,
    ImageReference,
    FootnoteReference,
    Definition,
    FrontMatter,
    AttributeFragment,
)


def get_node_children(node: Node) -> list[Node]:
    """Get the children of a node.

    The returned list is the node's own ``children`` list, not a copy, so
    callers may edit it in place. Leaf nodes return a fresh empty list,
    except leaf nodes that arrived from upstream with stray children,
    which return those.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        The node's children (empty list if it has none)

    """
    children = getattr(node, "children", None)
    if children is None:
        return []
    return children


def is_inline_capable(node: Node) -> bool:
    """Check whether attributes may attach to a node by inline adjacency.

    Parameters
    ----------
    node : Node
        Node to check

    Returns
    -------
    bool
        True for emphasis, strong, link, image and inline code

    """
    return isinstance(node, INLINE_CAPABLE_TYPES)


def is_childless_kind(node: Node) -> bool:
    """Check whether a node belongs to a kind that must have no children."""
    return isinstance(node, CHILDLESS_TYPES)


def get_standalone_fragment(node: Node) -> Optional[AttributeFragment]:
    """Return the fragment of a standalone attribute paragraph.

    A standalone attribute paragraph is a Paragraph whose entire content is
    exactly one AttributeFragment, i.e. a line holding nothing but ``{...}``.

    Parameters
    ----------
    node : Node
        Candidate node

    Returns
    -------
    AttributeFragment or None
        The sole fragment, or None when ``node`` is not a standalone
        attribute paragraph

    Examples
    --------
    >>> fragment = AttributeFragment(attributes={"id": "x"}, source_text="{#x}")
    >>> get_standalone_fragment(Paragraph(children=[fragment])) is fragment
    True
    >>> get_standalone_fragment(Paragraph(children=[Text(content="a"), fragment])) is None
    True

    """
    if not isinstance(node, Paragraph):
        return None
    if len(node.children) != 1:
        return None
    child = node.children[0]
    if not isinstance(child, AttributeFragment):
        return None
    return child


def are_directly_adjacent(first: Node, second: Node) -> bool:
    """Check whether ``second`` starts on the line right after ``first`` ends.

    A single line break separates the nodes; any blank line in between
    makes them non-adjacent. Missing line information counts as not
    adjacent.

    Parameters
    ----------
    first : Node
        Preceding node
    second : Node
        Following node

    Returns
    -------
    bool
        True when the line gap is exactly one

    """
    if first.source_location is None or second.source_location is None:
        return False
    return second.source_location.start.line - first.source_location.end.line == 1


def offset_gap(before: Node, after: Node) -> Optional[int]:
    """Get the character-offset gap between two nodes.

    Parameters
    ----------
    before : Node
        Preceding node
    after : Node
        Following node

    Returns
    -------
    int or None
        ``after.start.offset - before.end.offset``; 0 when the nodes touch.
        None when either offset is unavailable.

    """
    if before.source_location is None or after.source_location is None:
        return None
    before_end = before.source_location.end.offset
    after_start = after.source_location.start.offset
    if before_end is None or after_start is None:
        return None
    return after_start - before_end
