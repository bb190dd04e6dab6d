#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/transforms/resolve.py
"""Generic attachment of attribute fragments.

After normalization every remaining AttributeFragment sits among the
children of some parent node. Each one is resolved by the first matching rule:

1. Inline adjacency: the previous sibling is an inline-capable node
   (emphasis, strong, link, image, inline code) and the fragment starts at
   the exact character offset where that sibling ends. ``*em*{.x}``
   attaches to the emphasis, ``*em* {.x}`` does not.
2. Trailing fragment: the fragment is the last child of a parent that is
   not inline-capable. ``# Title {#top}`` attaches to the heading.
3. Orphan: the fragment is replaced in place by a Text node holding its
   original source text, so nothing written by the author is lost.

"""

from __future__ import annotations

import logging
from typing import Optional

from mdattrs.ast.nodes import AttributeFragment, Node, Text
from mdattrs.ast.utils import get_node_children, is_inline_capable, offset_gap
from mdattrs.options import AttributeOptions
from mdattrs.transforms.properties import merge_into_node

logger = logging.getLogger(__name__)


def _resolve_fragment(parent: Node, index: int, fragment: AttributeFragment, options: AttributeOptions) -> None:
    """Attach or demote the fragment at ``parent.children[index]``."""
    children = get_node_children(parent)
    previous = children[index - 1] if index > 0 else None

    if previous is not None and is_inline_capable(previous) and offset_gap(previous, fragment) == 0:
        merge_into_node(previous, fragment.attributes, options)
        del children[index]
        logger.debug("Attached inline attributes to %s", type(previous).__name__)
        return

    if index == len(children) - 1 and not is_inline_capable(parent):
        merge_into_node(parent, fragment.attributes, options)
        del children[index]
        logger.debug("Attached trailing attributes to parent %s", type(parent).__name__)
        return

    children[index] = Text(content=fragment.source_text, source_location=fragment.source_location)
    logger.debug("No target for attributes %r, kept as text", fragment.source_text)


def resolve_fragments(node: Node, options: Optional[AttributeOptions] = None) -> None:
    """Resolve every attribute fragment below ``node``.

    Children are visited from last to first so removing a fragment never
    shifts a sibling that has not been visited yet. Non-fragment children
    are descended into depth-first.

    Parameters
    ----------
    node : Node
        Root of the tree to process
    options : AttributeOptions or None, default = None
        Resolution options

    Notes
    -----
    Missing offsets never count as adjacent, so a tree without position
    data falls through to the trailing-fragment and orphan rules.

    """
    options = options or AttributeOptions()
    children = get_node_children(node)
    for index in range(len(children) - 1, -1, -1):
        child = children[index]
        if isinstance(child, AttributeFragment):
            _resolve_fragment(node, index, child, options)
        else:
            resolve_fragments(child, options)
