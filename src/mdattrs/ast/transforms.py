#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/ast/transforms.py
"""AST query and copy utilities.

Examples
--------
Extract all headings from a document:

    >>> from mdattrs.ast import transforms
    >>> headings = transforms.extract_nodes(doc, Heading)

List the attribute fragments still waiting for resolution:

    >>> pending = transforms.find_fragments(doc)

"""

from __future__ import annotations

import copy
from typing import Type, TypeVar, cast

from mdattrs.ast.nodes import AttributeFragment, Node
from mdattrs.ast.visitors import NodeCollector

NodeT = TypeVar("NodeT", bound=Node)


def clone_node(node: NodeT) -> NodeT:
    """Create a deep copy of a node and its whole subtree.

    Parameters
    ----------
    node : Node
        Node to clone

    Returns
    -------
    Node
        Independent copy; metadata and property bags are copied as well

    """
    return copy.deepcopy(node)


def extract_nodes(node: Node, node_type: Type[Node] | None = None) -> list[Node]:
    """Extract all nodes of a specific type from a tree.

    Parameters
    ----------
    node : Node
        Root of the tree to search
    node_type : type or None, default = None
        Node class to collect (None collects every node)

    Returns
    -------
    list of Node
        Matching nodes in document order

    """
    if node_type is None:
        collector = NodeCollector()
    else:
        collector = NodeCollector(predicate=lambda n: isinstance(n, node_type))
    node.accept(collector)
    return collector.collected


def find_fragments(node: Node) -> list[AttributeFragment]:
    """Find every attribute fragment in a tree.

    Fragments hanging below leaf nodes (an upstream quirk) are found too.

    Parameters
    ----------
    node : Node
        Root of the tree to search

    Returns
    -------
    list of AttributeFragment
        Fragments in document order; empty for a fully resolved tree

    """
    return cast(list[AttributeFragment], extract_nodes(node, AttributeFragment))
