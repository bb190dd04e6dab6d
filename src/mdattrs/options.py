#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattrs/options.py
"""Configuration options for attribute resolution.

Options are immutable; use ``create_updated`` to derive a modified copy.

Examples
--------
    >>> options = AttributeOptions(promote_tight_lists=False)
    >>> strict = options.create_updated(verify=True)

"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdattrs.constants import (
    DEFAULT_IN_PLACE,
    DEFAULT_INJECT_LANGUAGE_CLASS,
    DEFAULT_LANGUAGE_CLASS_PREFIX,
    DEFAULT_PROMOTE_TIGHT_LISTS,
    DEFAULT_VERIFY_RESOLVED,
)
from mdattrs.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class AttributeOptions(CloneFrozenMixin):
    """Options controlling how attribute fragments are resolved.

    Parameters
    ----------
    inject_language_class : bool, default = True
        Put a ``language-<id>`` class ahead of user classes on code blocks
        that declare a language. Renderers add this class themselves unless
        the node already carries a class list, so it is kept here.
    language_class_prefix : str, default = "language-"
        Prefix of the injected language class
    promote_tight_lists : bool, default = True
        Move property bags from paragraphs inside tight list items to the
        list items, since renderers drop those paragraph wrappers
    in_place : bool, default = True
        Mutate the given document. When False the document is deep-copied
        first and the copy is returned.
    verify : bool, default = False
        Raise TransformError if any attribute fragment survives resolution

    """

    inject_language_class: bool = field(
        default=DEFAULT_INJECT_LANGUAGE_CLASS,
        metadata={"help": "Inject a language-<id> class on code blocks that declare a language"},
    )
    language_class_prefix: str = field(
        default=DEFAULT_LANGUAGE_CLASS_PREFIX,
        metadata={"help": "Prefix of the class injected on code blocks"},
    )
    promote_tight_lists: bool = field(
        default=DEFAULT_PROMOTE_TIGHT_LISTS,
        metadata={"help": "Move paragraph attributes to list items in tight lists"},
    )
    in_place: bool = field(
        default=DEFAULT_IN_PLACE,
        metadata={"help": "Mutate the input document instead of working on a copy"},
    )
    verify: bool = field(
        default=DEFAULT_VERIFY_RESOLVED,
        metadata={"help": "Raise TransformError if attribute fragments remain after resolution"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If the language class prefix is empty or contains whitespace

        """
        prefix = self.language_class_prefix
        if not prefix or any(ch.isspace() for ch in prefix):
            raise ValidationError(
                f"language_class_prefix must be a non-empty string without whitespace, got {prefix!r}",
                parameter_name="language_class_prefix",
                parameter_value=prefix,
            )
