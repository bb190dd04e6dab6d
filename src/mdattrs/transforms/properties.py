#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/transforms/properties.py
"""Property bag merging.

A property bag is the dictionary of resolved attributes stored under
``node.metadata["properties"]``. Every attachment in the library goes
through ``merge_properties`` so conflicts are settled the same way
everywhere:

- ``class`` accumulates: tokens are appended in order, duplicates skipped.
- any other key is overwritten (last write wins).

Examples
--------
    >>> bag = {}
    >>> merge_properties(bag, {"class": "a b", "id": "one"})
    >>> merge_properties(bag, {"class": "b c", "id": "two"})
    >>> bag
    {'class': ['a', 'b', 'c'], 'id': 'two'}

"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from mdattrs.ast.nodes import CodeBlock, Node
from mdattrs.constants import (
    CLASS_ATTRIBUTE,
    DEFAULT_INJECT_LANGUAGE_CLASS,
    DEFAULT_LANGUAGE_CLASS_PREFIX,
    PROPERTIES_KEY,
)
from mdattrs.options import AttributeOptions

logger = logging.getLogger(__name__)


def class_tokens(value: str | Iterable[str] | None) -> list[str]:
    """Split a class value into non-empty tokens.

    Parameters
    ----------
    value : str, iterable of str, or None
        A whitespace separated string or an iterable of such strings
        (an existing bag's class list)

    Returns
    -------
    list of str
        Tokens in order, duplicates kept

    """
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    tokens: list[str] = []
    for item in value:
        tokens.extend(str(item).split())
    return tokens


def _merge_class(
    target: dict[str, Any],
    value: Any,
    node: Optional[Node],
    inject_language_class: bool,
    language_class_prefix: str,
) -> None:
    first_merge = CLASS_ATTRIBUTE not in target
    tokens = class_tokens(target.get(CLASS_ATTRIBUTE))

    if first_merge and inject_language_class and isinstance(node, CodeBlock) and node.language:
        language_class = f"{language_class_prefix}{node.language}"
        if language_class not in tokens:
            tokens.append(language_class)

    for token in class_tokens(value):
        if token not in tokens:
            tokens.append(token)

    if tokens or not first_merge:
        target[CLASS_ATTRIBUTE] = tokens


def merge_properties(
    target: dict[str, Any],
    source: Mapping[str, Any],
    node: Optional[Node] = None,
    *,
    inject_language_class: bool = DEFAULT_INJECT_LANGUAGE_CLASS,
    language_class_prefix: str = DEFAULT_LANGUAGE_CLASS_PREFIX,
) -> None:
    """Merge attributes into a property bag.

    Parameters
    ----------
    target : dict
        Property bag to update in place
    source : Mapping
        Attributes to merge, iterated in their natural order. ``class`` may
        be a whitespace separated string or a list of tokens.
    node : Node or None, default = None
        Node owning ``target``. The first class merged onto a CodeBlock that
        declares a language gets a ``language-<id>`` token placed ahead of
        the user's tokens.
    inject_language_class : bool, default = True
        Whether to inject the language class on code blocks
    language_class_prefix : str, default = "language-"
        Prefix of the injected language class

    Notes
    -----
    A pre-joined class string already present in ``target`` is split into
    tokens, so after a merge ``class`` is always a list.

    """
    for key, value in source.items():
        if key == CLASS_ATTRIBUTE:
            _merge_class(target, value, node, inject_language_class, language_class_prefix)
        else:
            target[key] = value


def get_properties(node: Node) -> Optional[dict[str, Any]]:
    """Get the property bag of a node.

    Parameters
    ----------
    node : Node
        Node to inspect

    Returns
    -------
    dict or None
        The node's property bag, or None when it has none

    """
    return node.metadata.get(PROPERTIES_KEY)


def merge_into_node(
    node: Node,
    attributes: Mapping[str, Any],
    options: Optional[AttributeOptions] = None,
) -> None:
    """Merge attributes into a node's property bag, creating it if needed.

    Parameters
    ----------
    node : Node
        Node receiving the attributes
    attributes : Mapping
        Attributes to merge
    options : AttributeOptions or None, default = None
        Resolution options (defaults used when None)

    """
    options = options or AttributeOptions()
    bag = node.metadata.setdefault(PROPERTIES_KEY, {})
    merge_properties(
        bag,
        attributes,
        node,
        inject_language_class=options.inject_language_class,
        language_class_prefix=options.language_class_prefix,
    )
    logger.debug("Merged %d attribute(s) into %s", len(attributes), type(node).__name__)
