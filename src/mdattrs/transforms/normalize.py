#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/transforms/normalize.py
"""Normalization passes run before generic attribute resolution.

The upstream tree builder produces a few shapes the generic resolver cannot
handle uniformly. The passes below rewrite them first, in this order:

1. ``relocate_side_channel_attributes``: attributes stored out-of-band on
   leaf blocks (fenced code) move into the property bag.
2. ``flatten_childless_fragments``: fragments hanging below a node kind that
   must have no children (a thematic break) fold into that node.
3. ``attach_standalone_paragraphs``: a line holding only ``{...}`` attaches
   to the block on the next line.
4. ``attach_after_thematic_breaks``: a line holding only ``{...}`` right
   after a thematic break attaches to the break.

Each pass walks the whole tree and edits it in place.

"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Optional

from mdattrs.ast.nodes import AttributeFragment, Node, ThematicBreak
from mdattrs.ast.utils import (
    are_directly_adjacent,
    get_node_children,
    get_standalone_fragment,
    is_childless_kind,
)
from mdattrs.ast.visitors import NodeVisitor
from mdattrs.constants import PROPERTIES_KEY, SIDE_CHANNEL_ATTRIBUTES_KEY
from mdattrs.options import AttributeOptions
from mdattrs.transforms.properties import merge_into_node

logger = logging.getLogger(__name__)


class _SideChannelRelocator(NodeVisitor):
    """Move ``metadata["attributes"]`` of leaf nodes into their property bag."""

    def __init__(self, options: AttributeOptions):
        self.options = options
        self.relocated = 0

    def generic_visit(self, node: Node) -> None:
        if is_childless_kind(node):
            attributes = node.metadata.pop(SIDE_CHANNEL_ATTRIBUTES_KEY, None)
            if attributes is not None:
                merge_into_node(node, attributes, self.options)
                self.relocated += 1
        for child in get_node_children(node):
            child.accept(self)


def relocate_side_channel_attributes(node: Node, options: Optional[AttributeOptions] = None) -> int:
    """Merge side-channel attribute maps into property bags.

    Leaf-like blocks such as fenced code cannot hold fragment children, so
    the upstream builder stores their parsed attributes in
    ``metadata["attributes"]``. This pass merges that map into the node's
    property bag and deletes it. No position information is involved.

    Parameters
    ----------
    node : Node
        Root of the tree to process
    options : AttributeOptions or None, default = None
        Resolution options

    Returns
    -------
    int
        Number of nodes whose side-channel attributes were relocated

    """
    relocator = _SideChannelRelocator(options or AttributeOptions())
    node.accept(relocator)
    if relocator.relocated:
        logger.debug("Relocated side-channel attributes on %d node(s)", relocator.relocated)
    return relocator.relocated


def _drop_children(node: Node) -> None:
    if any(f.name == "children" for f in fields(node)):  # type: ignore[arg-type]
        node.children = None  # type: ignore[attr-defined]
    else:
        del node.children  # type: ignore[attr-defined]


class _ChildlessFlattener(NodeVisitor):
    """Fold fragment children of childless node kinds into the node itself."""

    def __init__(self, options: AttributeOptions):
        self.options = options
        self.flattened = 0

    def generic_visit(self, node: Node) -> None:
        children = get_node_children(node)
        if is_childless_kind(node):
            if getattr(node, "children", None) is not None:
                self._flatten(node, children)
            return
        for child in children:
            child.accept(self)

    def _flatten(self, node: Node, children: list[Node]) -> None:
        for child in children:
            if isinstance(child, AttributeFragment):
                merge_into_node(node, child.attributes, self.options)
            else:
                logger.warning(
                    "Discarding %s found below childless %s", type(child).__name__, type(node).__name__
                )
        _drop_children(node)
        self.flattened += 1


def flatten_childless_fragments(node: Node, options: Optional[AttributeOptions] = None) -> int:
    """Fold attribute fragments attached below childless node kinds.

    One upstream construction path (a heading underline reinterpreted as a
    thematic break) leaves attribute fragments as children of a node that
    must not have any. Their attributes are merged into the node in child
    order and the ``children`` field is removed.

    Parameters
    ----------
    node : Node
        Root of the tree to process
    options : AttributeOptions or None, default = None
        Resolution options

    Returns
    -------
    int
        Number of nodes that were flattened

    """
    flattener = _ChildlessFlattener(options or AttributeOptions())
    node.accept(flattener)
    if flattener.flattened:
        logger.debug("Flattened fragment children of %d childless node(s)", flattener.flattened)
    return flattener.flattened


def _absorb_standalone(
    target: Node, paragraph: Node, fragment: AttributeFragment, options: AttributeOptions
) -> None:
    """Merge a standalone paragraph's bag, then its fragment, into ``target``."""
    # The bag holds attribute lines chained onto this paragraph from above
    bag = paragraph.metadata.get(PROPERTIES_KEY)
    if bag:
        merge_into_node(target, bag, options)
    merge_into_node(target, fragment.attributes, options)


def attach_standalone_paragraphs(node: Node, options: Optional[AttributeOptions] = None) -> int:
    """Attach standalone attribute lines to the block directly below them.

    Only a single line break may separate the two: ``{.note}`` on the line
    right above a heading attaches to the heading, while a blank line in
    between leaves both nodes for the generic resolver. Several attribute
    lines in a row all end up on the first block below them, in source
    order.

    Parameters
    ----------
    node : Node
        Root of the tree to process
    options : AttributeOptions or None, default = None
        Resolution options

    Returns
    -------
    int
        Number of standalone paragraphs attached and removed

    """
    options = options or AttributeOptions()
    if is_childless_kind(node):
        return 0

    attached = 0
    children = get_node_children(node)
    i = 0
    while i < len(children):
        child = children[i]
        fragment = get_standalone_fragment(child)
        if fragment is not None and i < len(children) - 1:
            next_sibling = children[i + 1]
            if are_directly_adjacent(child, next_sibling):
                _absorb_standalone(next_sibling, child, fragment, options)
                del children[i]
                attached += 1
                logger.debug("Attached standalone attributes to following %s", type(next_sibling).__name__)
                # The following sibling now sits at index i
                continue
        i += 1

    for child in children:
        attached += attach_standalone_paragraphs(child, options)
    return attached


def attach_after_thematic_breaks(node: Node, options: Optional[AttributeOptions] = None) -> int:
    """Attach standalone attribute lines that directly follow a thematic break.

    Parameters
    ----------
    node : Node
        Root of the tree to process
    options : AttributeOptions or None, default = None
        Resolution options

    Returns
    -------
    int
        Number of standalone paragraphs attached and removed

    """
    options = options or AttributeOptions()
    if is_childless_kind(node):
        return 0

    attached = 0
    children = get_node_children(node)
    i = 1
    while i < len(children):
        previous = children[i - 1]
        child = children[i]
        fragment = get_standalone_fragment(child)
        if isinstance(previous, ThematicBreak) and fragment is not None and are_directly_adjacent(previous, child):
            _absorb_standalone(previous, child, fragment, options)
            del children[i]
            attached += 1
            logger.debug("Attached standalone attributes to preceding ThematicBreak")
            continue
        attached += attach_after_thematic_breaks(child, options)
        i += 1

    if children:
        # Index 0 is never a candidate itself but may hold nested content
        attached += attach_after_thematic_breaks(children[0], options)
    return attached


def normalize_fragments(node: Node, options: Optional[AttributeOptions] = None) -> None:
    """Run all normalization passes over a tree, in order.

    Parameters
    ----------
    node : Node
        Root of the tree to process
    options : AttributeOptions or None, default = None
        Resolution options

    """
    options = options or AttributeOptions()
    relocate_side_channel_attributes(node, options)
    flatten_childless_fragments(node, options)
    attach_standalone_paragraphs(node, options)
    attach_after_thematic_breaks(node, options)
