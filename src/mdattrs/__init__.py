#  Copyright (c) 2025 Tom Villani, Ph.D.
"""mdattrs - Attach markdown ``{...}`` attributes to the nodes they belong to.

Markdown extensions let authors annotate elements with attribute blocks::

    # Introduction {#intro}

    Some *emphasis*{.highlight} in a paragraph. {.lead}

    {.wide}
    | a | b |
    |---|---|

A tokenizer recognizes the ``{...}`` syntax and a tree builder leaves
AttributeFragment nodes in the syntax tree. mdattrs decides which node each
fragment belongs to, merges its attributes into that node's property bag
(``node.metadata["properties"]``) and removes the fragment. Attribute syntax
that belongs to no node is kept as literal text.

Examples
--------
Resolve an mdast tree produced by an upstream parser:

    >>> from mdattrs import mdast_to_ast, resolve_attributes, ast_to_mdast
    >>> doc = resolve_attributes(mdast_to_ast(tree))
    >>> ast_to_mdast(doc)  # data.hProperties holds the attributes

"""

from mdattrs.ast import Document, mdast_json_to_ast, mdast_to_ast
from mdattrs.ast.mdast import ast_to_mdast, ast_to_mdast_json
from mdattrs.exceptions import MdAttrsError, ParsingError, TransformError, ValidationError
from mdattrs.options import AttributeOptions
from mdattrs.transforms import AttributesTransform, ensure_resolved, get_properties, resolve_attributes

__version__ = "0.1.0"

__all__ = [
    "AttributeOptions",
    "AttributesTransform",
    "Document",
    "MdAttrsError",
    "ParsingError",
    "TransformError",
    "ValidationError",
    "ast_to_mdast",
    "ast_to_mdast_json",
    "ensure_resolved",
    "get_properties",
    "mdast_json_to_ast",
    "mdast_to_ast",
    "resolve_attributes",
]
