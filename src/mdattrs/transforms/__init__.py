#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/transforms/__init__.py
"""Attribute resolution transforms.

This package turns attribute fragments into property bags:

- properties: Property bag merging shared by every pass
- normalize: Passes that reshape upstream quirks before resolution
- resolve: Generic rule-ordered attachment of the remaining fragments
- lists: Promotion of paragraph attributes in tight lists
- pipeline: The full transform, in order

Examples
--------
    >>> from mdattrs.transforms import AttributesTransform
    >>> doc = AttributesTransform().transform(doc)

"""

from mdattrs.transforms.lists import promote_tight_list_properties
from mdattrs.transforms.normalize import (
    attach_after_thematic_breaks,
    attach_standalone_paragraphs,
    flatten_childless_fragments,
    normalize_fragments,
    relocate_side_channel_attributes,
)
from mdattrs.transforms.pipeline import AttributesTransform, ensure_resolved, resolve_attributes
from mdattrs.transforms.properties import class_tokens, get_properties, merge_into_node, merge_properties
from mdattrs.transforms.resolve import resolve_fragments

__all__ = [
    "AttributesTransform",
    "attach_after_thematic_breaks",
    "attach_standalone_paragraphs",
    "class_tokens",
    "ensure_resolved",
    "flatten_childless_fragments",
    "get_properties",
    "merge_into_node",
    "merge_properties",
    "normalize_fragments",
    "promote_tight_list_properties",
    "relocate_side_channel_attributes",
    "resolve_attributes",
    "resolve_fragments",
]
