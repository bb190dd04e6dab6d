#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for the full attribute resolution pipeline."""

import logging

import pytest

from mdattrs import (
    AttributeOptions,
    AttributesTransform,
    TransformError,
    ast_to_mdast,
    ensure_resolved,
    mdast_to_ast,
    resolve_attributes,
)
from mdattrs.ast import (
    AttributeFragment,
    BlockQuote,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    List,
    ListItem,
    Paragraph,
    Text,
    ThematicBreak,
    find_fragments,
)
from tests.utils import fragment, locate, properties, span


def pos(source: str, start: int, end: int) -> dict:
    """Build an mdast position for ``source[start:end]``."""
    location = span(source, start, end)
    return {
        "start": {"line": location.start.line, "column": location.start.column, "offset": start},
        "end": {"line": location.end.line, "column": location.end.column, "offset": end},
    }


@pytest.mark.integration
class TestEndToEndScenarios:
    """Test complete documents through the pipeline."""

    def test_inline_emphasis(self) -> None:
        """Test *em*{.class} leaves one emphasis child carrying the class."""
        source = "*em*{.class}"
        emphasis = Emphasis(children=[Text(content="em")], source_location=span(source, 0, 4))
        para = Paragraph(
            children=[emphasis, fragment(source, "{.class}", {"class": "class"})],
            source_location=span(source, 0, len(source)),
        )
        doc = Document(children=[para])

        result = resolve_attributes(doc)

        assert result is doc
        assert properties(emphasis) == {"class": ["class"]}
        assert find_fragments(doc) == []
        assert para.children == [emphasis]

    def test_fenced_code_side_channel(self) -> None:
        """Test a js fence with {.highlight} gets language-js first."""
        code = CodeBlock(content="let a;", language="js", metadata={"attributes": {"class": "highlight"}})
        doc = Document(children=[code])

        resolve_attributes(doc)

        assert properties(code) == {"class": ["language-js", "highlight"]}
        assert "attributes" not in code.metadata

    def test_thematic_break_with_fragment_children(self) -> None:
        """Test fragment children of a rule are folded into its bag."""
        hr = ThematicBreak(
            children=[AttributeFragment(attributes={"id": "a"}), AttributeFragment(attributes={"class": "b"})]
        )
        doc = Document(children=[hr])

        resolve_attributes(doc)

        assert properties(hr) == {"id": "a", "class": ["b"]}
        assert hr.children is None


@pytest.mark.integration
class TestDocumentShapes:
    """Test typical authoring patterns."""

    def test_heading_and_separate_line(self) -> None:
        """Test a heading suffix and an attribute line above a paragraph."""
        source = "# Intro {#intro}\n{.lead}\nFirst words."
        heading = Heading(
            level=1,
            children=[
                Text(content="Intro ", source_location=locate(source, "Intro ")),
                fragment(source, "{#intro}", {"id": "intro"}),
            ],
            source_location=locate(source, "# Intro {#intro}"),
        )
        standalone = Paragraph(
            children=[fragment(source, "{.lead}", {"class": "lead"})],
            source_location=locate(source, "{.lead}"),
        )
        body = Paragraph(
            children=[Text(content="First words.", source_location=locate(source, "First words."))],
            source_location=locate(source, "First words."),
        )
        doc = Document(children=[heading, standalone, body])

        resolve_attributes(doc)

        assert doc.children == [heading, body]
        assert properties(heading) == {"id": "intro"}
        assert properties(body) == {"class": ["lead"]}

    def test_space_before_fragment_attaches_to_paragraph(self) -> None:
        """Test *em* {.x} at the end of a paragraph goes to the paragraph."""
        source = "*em* {.x}"
        emphasis = Emphasis(children=[Text(content="em")], source_location=span(source, 0, 4))
        para = Paragraph(
            children=[
                emphasis,
                Text(content=" ", source_location=span(source, 4, 5)),
                fragment(source, "{.x}", {"class": "x"}),
            ]
        )
        doc = Document(children=[para])

        resolve_attributes(doc)

        assert properties(emphasis) is None
        assert properties(para) == {"class": ["x"]}

    def test_orphan_in_middle_of_text(self) -> None:
        """Test a fragment surrounded by text is kept as literal text."""
        source = "a {.x} b"
        para = Paragraph(
            children=[
                Text(content="a ", source_location=span(source, 0, 2)),
                fragment(source, "{.x}", {"class": "x"}),
                Text(content=" b", source_location=span(source, 6, 8)),
            ]
        )
        doc = Document(children=[para])

        resolve_attributes(doc)

        assert [child.content for child in para.children] == ["a ", "{.x}", " b"]
        assert properties(para) is None

    def test_tight_list_items(self) -> None:
        """Test item attributes move to list items in tight lists only."""
        source = "- one {.done}\n- two"
        one = Paragraph(
            children=[
                Text(content="one ", source_location=locate(source, "one ")),
                fragment(source, "{.done}", {"class": "done"}),
            ]
        )
        tight_item = ListItem(children=[one])
        loose_para = Paragraph(children=[Text(content="three "), AttributeFragment(attributes={"class": "x"})])
        loose_item = ListItem(children=[loose_para])
        doc = Document(
            children=[
                List(ordered=False, children=[tight_item, ListItem(children=[Paragraph()])], tight=True),
                List(ordered=False, children=[loose_item], tight=False),
            ]
        )

        resolve_attributes(doc)

        assert properties(tight_item) == {"class": ["done"]}
        assert properties(one) is None
        assert properties(loose_item) is None
        assert properties(loose_para) == {"class": ["x"]}

    def test_tight_list_promotion_disabled(self) -> None:
        """Test the promote_tight_lists switch."""
        para = Paragraph(children=[Text(content="one "), AttributeFragment(attributes={"id": "i"})])
        item = ListItem(children=[para])
        doc = Document(children=[List(ordered=False, children=[item])])

        resolve_attributes(doc, AttributeOptions(promote_tight_lists=False))

        assert properties(item) is None
        assert properties(para) == {"id": "i"}

    def test_block_quote_contents(self) -> None:
        """Test fragments inside a quote resolve against quoted blocks."""
        para = Paragraph(children=[Text(content="quoted "), AttributeFragment(attributes={"class": "aside"})])
        quote = BlockQuote(children=[para])
        doc = Document(children=[quote])

        resolve_attributes(doc)

        assert properties(para) == {"class": ["aside"]}
        assert properties(quote) is None


@pytest.mark.integration
class TestAttributesTransform:
    """Test transform options and verification."""

    def test_copy_mode(self) -> None:
        """Test in_place=False returns a resolved copy."""
        heading = Heading(level=2, children=[Text(content="T "), AttributeFragment(attributes={"id": "t"})])
        doc = Document(children=[heading])

        result = AttributesTransform(AttributeOptions(in_place=False)).transform(doc)

        assert result is not doc
        assert properties(result.children[0]) == {"id": "t"}
        assert properties(heading) is None
        assert len(find_fragments(doc)) == 1

    def test_idempotent(self) -> None:
        """Test a second run over a resolved document changes nothing."""
        source = "*em*{.a} text {.b}"
        doc = Document(
            children=[
                Paragraph(
                    children=[
                        Emphasis(children=[Text(content="em")], source_location=span(source, 0, 4)),
                        fragment(source, "{.a}", {"class": "a"}),
                        Text(content=" text ", source_location=locate(source, " text ")),
                        fragment(source, "{.b}", {"class": "b"}),
                    ]
                ),
                CodeBlock(content="", language="py", metadata={"attributes": {"class": "run"}}),
            ]
        )
        transform = AttributesTransform(AttributeOptions(in_place=False))

        once = transform.transform(doc)
        twice = transform.transform(once)

        assert twice == once

    def test_verify_passes_on_resolved_output(self) -> None:
        """Test verification accepts a normally resolved document."""
        doc = Document(children=[Paragraph(children=[AttributeFragment(attributes={"id": "p"})])])

        resolve_attributes(doc, AttributeOptions(verify=True))

        assert properties(doc.children[0]) == {"id": "p"}

    def test_ensure_resolved_reports_fragments(self) -> None:
        """Test ensure_resolved raises on leftover fragments."""
        doc = Document(
            children=[
                Paragraph(
                    children=[
                        AttributeFragment(source_text="{#one}"),
                        AttributeFragment(source_text="{#two}"),
                    ]
                )
            ]
        )

        with pytest.raises(TransformError) as exc_info:
            ensure_resolved(doc)

        assert exc_info.value.remaining == 2
        assert "{#one}" in str(exc_info.value)

    def test_debug_logging(self, caplog) -> None:
        """Test passes report their work at debug level."""
        heading = Heading(level=1, children=[Text(content="T "), AttributeFragment(attributes={"id": "t"})])

        with caplog.at_level(logging.DEBUG, logger="mdattrs"):
            resolve_attributes(Document(children=[heading]))

        assert "Attached trailing attributes to parent Heading" in caplog.text


@pytest.mark.integration
class TestMdastPipeline:
    """Test resolution of trees read from mdast."""

    def test_mdast_in_mdast_out(self) -> None:
        """Test an mdast tree with attribute nodes comes back with hProperties."""
        source = "## Title {#t}\n\n```js\nx\n```"
        tree = {
            "type": "root",
            "children": [
                {
                    "type": "heading",
                    "depth": 2,
                    "position": pos(source, 0, 13),
                    "children": [
                        {"type": "text", "value": "Title ", "position": pos(source, 3, 9)},
                        {
                            "type": "mdastAttributes",
                            "value": "{#t}",
                            "attributes": {"id": "t"},
                            "position": pos(source, 9, 13),
                        },
                    ],
                },
                {
                    "type": "code",
                    "lang": "js",
                    "value": "x",
                    "position": pos(source, 15, len(source)),
                    "data": {"mdastAttributes": {"class": "demo"}},
                },
            ],
        }

        result = ast_to_mdast(resolve_attributes(mdast_to_ast(tree)))

        heading, code = result["children"]
        assert heading["data"] == {"hProperties": {"id": "t"}}
        assert [child["type"] for child in heading["children"]] == ["text"]
        assert code["data"] == {"hProperties": {"class": ["language-js", "demo"]}}
