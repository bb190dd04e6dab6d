#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdattrs library.

This module centralizes the metadata keys and default configuration values
shared by the AST, the attribute transforms, and the mdast interchange layer.

Constants are organized by category:
1. Node Metadata Keys - Where resolved and pending attributes live
2. Attribute Handling - Defaults for property bag merging
3. mdast Interchange - Type names and data keys of the mdast format
"""

from __future__ import annotations

# =============================================================================
# Node Metadata Keys
# =============================================================================

# Resolved attributes (the property bag) consumed by renderers
PROPERTIES_KEY = "properties"

# Attributes stored out-of-band on leaf-like blocks by the upstream builder
SIDE_CHANNEL_ATTRIBUTES_KEY = "attributes"

# =============================================================================
# Attribute Handling
# =============================================================================

CLASS_ATTRIBUTE = "class"

DEFAULT_INJECT_LANGUAGE_CLASS = True
DEFAULT_LANGUAGE_CLASS_PREFIX = "language-"
DEFAULT_PROMOTE_TIGHT_LISTS = True
DEFAULT_IN_PLACE = True
DEFAULT_VERIFY_RESOLVED = False

# =============================================================================
# mdast Interchange
# =============================================================================

MDAST_FRAGMENT_TYPE = "mdastAttributes"
MDAST_PROPERTIES_KEY = "hProperties"
MDAST_SIDE_CHANNEL_KEY = "mdastAttributes"
