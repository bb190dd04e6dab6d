#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/transforms/pipeline.py
"""Attribute resolution pipeline.

This module runs the attribute passes over a document in their fixed order:

1. Normalization (side-channel relocation, childless flattening,
   standalone attribute lines)
2. Generic resolution (inline adjacency, trailing fragment, orphan text)
3. Tight list promotion

The result contains no AttributeFragment nodes. Running the pipeline again
on its own output changes nothing.

Examples
--------
One-off resolution:

    >>> from mdattrs import resolve_attributes
    >>> doc = resolve_attributes(doc)

Reusable transform with options:

    >>> transform = AttributesTransform(AttributeOptions(in_place=False, verify=True))
    >>> resolved = transform.transform(doc)

"""

from __future__ import annotations

import logging
from typing import Optional

from mdattrs.ast.nodes import Document
from mdattrs.ast.transforms import clone_node, find_fragments
from mdattrs.exceptions import TransformError
from mdattrs.options import AttributeOptions
from mdattrs.transforms.lists import promote_tight_list_properties
from mdattrs.transforms.normalize import normalize_fragments
from mdattrs.transforms.resolve import resolve_fragments

logger = logging.getLogger(__name__)


def ensure_resolved(document: Document) -> None:
    """Check that no attribute fragment is left in a document.

    Parameters
    ----------
    document : Document
        Document to check

    Raises
    ------
    TransformError
        If one or more AttributeFragment nodes remain

    """
    remaining = find_fragments(document)
    if remaining:
        sources = ", ".join(repr(fragment.source_text) for fragment in remaining[:5])
        raise TransformError(
            f"{len(remaining)} attribute fragment(s) left unresolved: {sources}",
            remaining=len(remaining),
        )


class AttributesTransform:
    """Resolve attribute fragments into property bags.

    Parameters
    ----------
    options : AttributeOptions or None, default = None
        Resolution options (defaults used when None)

    """

    def __init__(self, options: Optional[AttributeOptions] = None):
        """Initialize the transform with resolution options."""
        self.options = options or AttributeOptions()

    def transform(self, document: Document) -> Document:
        """Resolve every attribute fragment in a document.

        Parameters
        ----------
        document : Document
            Document holding AttributeFragment nodes

        Returns
        -------
        Document
            The resolved document: ``document`` itself when ``in_place`` is
            set, an independent copy otherwise

        Raises
        ------
        TransformError
            If ``verify`` is set and a fragment survived resolution

        """
        if not self.options.in_place:
            document = clone_node(document)

        logger.debug("Normalizing attribute fragments")
        normalize_fragments(document, self.options)

        logger.debug("Resolving attribute fragments")
        resolve_fragments(document, self.options)

        if self.options.promote_tight_lists:
            logger.debug("Promoting tight list attributes")
            promote_tight_list_properties(document, self.options)

        if self.options.verify:
            ensure_resolved(document)

        return document


def resolve_attributes(document: Document, options: Optional[AttributeOptions] = None) -> Document:
    """Resolve every attribute fragment in a document.

    Convenience wrapper around ``AttributesTransform``.

    Parameters
    ----------
    document : Document
        Document holding AttributeFragment nodes
    options : AttributeOptions or None, default = None
        Resolution options

    Returns
    -------
    Document
        The resolved document

    """
    return AttributesTransform(options).transform(document)
