#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Test utilities for the mdattrs test suite.

Helpers that compute node positions from a markdown source string, so tests
can build trees the way an upstream parser would position them.
"""

from mdattrs.ast import AttributeFragment, Point, SourceLocation


def point_at(source: str, offset: int) -> Point:
    """Return the line/column/offset point of ``offset`` in ``source``."""
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return Point(line=line, column=column, offset=offset)


def span(source: str, start: int, end: int) -> SourceLocation:
    """Return the source location of ``source[start:end]``."""
    return SourceLocation(start=point_at(source, start), end=point_at(source, end))


def locate(source: str, needle: str, occurrence: int = 0) -> SourceLocation:
    """Return the source location of the n-th occurrence of ``needle``."""
    start = -1
    for _ in range(occurrence + 1):
        start = source.index(needle, start + 1)
    return span(source, start, start + len(needle))


def fragment(source: str, text: str, attributes: dict, occurrence: int = 0) -> AttributeFragment:
    """Build a positioned attribute fragment for ``text`` found in ``source``."""
    return AttributeFragment(
        attributes=attributes,
        source_text=text,
        source_location=locate(source, text, occurrence),
    )


def properties(node) -> dict | None:
    """Return the property bag of a node, or None."""
    return node.metadata.get("properties")
