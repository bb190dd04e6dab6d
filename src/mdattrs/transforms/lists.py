#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/transforms/lists.py
"""Property bag promotion for tight lists.

Renderers drop the paragraph wrapper around the content of a tight list's
items (``<li>text</li>`` rather than ``<li><p>text</p></li>``), and the
paragraph's property bag goes with it. Attributes written at the end of a
tight list item therefore move up to the item itself.
"""

from __future__ import annotations

import logging
from typing import Optional

from mdattrs.ast.nodes import List, ListItem, Node, Paragraph
from mdattrs.ast.utils import get_node_children
from mdattrs.constants import PROPERTIES_KEY
from mdattrs.options import AttributeOptions
from mdattrs.transforms.properties import merge_into_node

logger = logging.getLogger(__name__)


def _promote_item(item: ListItem, options: AttributeOptions) -> int:
    promoted = 0
    for child in item.children:
        if isinstance(child, Paragraph) and child.metadata.get(PROPERTIES_KEY):
            merge_into_node(item, child.metadata.pop(PROPERTIES_KEY), options)
            promoted += 1
    return promoted


def promote_tight_list_properties(node: Node, options: Optional[AttributeOptions] = None) -> int:
    """Move paragraph property bags up to list items in tight lists.

    Loose lists keep their paragraph bags, since their paragraphs are
    rendered. Nested lists are processed at every depth.

    Parameters
    ----------
    node : Node
        Root of the tree to process
    options : AttributeOptions or None, default = None
        Resolution options

    Returns
    -------
    int
        Number of paragraph bags moved

    """
    options = options or AttributeOptions()
    promoted = 0

    if isinstance(node, List) and node.tight:
        for child in node.children:
            if isinstance(child, ListItem):
                promoted += _promote_item(child, options)
        if promoted:
            logger.debug("Promoted %d paragraph property bag(s) to list items", promoted)

    for child in get_node_children(node):
        promoted += promote_tight_list_properties(child, options)
    return promoted
