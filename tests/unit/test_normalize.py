#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the normalization passes run before resolution."""

import logging

import pytest

from mdattrs.ast import (
    AttributeFragment,
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    Image,
    Paragraph,
    Text,
    ThematicBreak,
)
from mdattrs.options import AttributeOptions
from mdattrs.transforms.normalize import (
    attach_after_thematic_breaks,
    attach_standalone_paragraphs,
    flatten_childless_fragments,
    normalize_fragments,
    relocate_side_channel_attributes,
)
from tests.utils import fragment, locate, properties


def standalone(source: str, text: str, attributes: dict, occurrence: int = 0) -> Paragraph:
    """Build a paragraph holding only a positioned fragment."""
    return Paragraph(
        children=[fragment(source, text, attributes, occurrence)],
        source_location=locate(source, text, occurrence),
    )


@pytest.mark.unit
class TestSideChannelRelocation:
    """Test relocation of out-of-band attributes."""

    def test_code_block_attributes_move_to_bag(self, options) -> None:
        """Test a fenced code block's side-channel map becomes its bag."""
        code = CodeBlock(content="x = 1", language="py", metadata={"attributes": {"class": "numbered"}})
        doc = Document(children=[code])

        assert relocate_side_channel_attributes(doc, options) == 1

        assert properties(code) == {"class": ["language-py", "numbered"]}
        assert "attributes" not in code.metadata

    def test_options_are_applied(self) -> None:
        """Test relocation honors language class options."""
        code = CodeBlock(content="", language="py", metadata={"attributes": {"class": "x"}})

        relocate_side_channel_attributes(Document(children=[code]), AttributeOptions(inject_language_class=False))

        assert properties(code) == {"class": ["x"]}

    def test_non_leaf_side_channel_left_alone(self) -> None:
        """Test container nodes keep their metadata untouched."""
        para = Paragraph(children=[Text(content="p")], metadata={"attributes": {"id": "p"}})

        assert relocate_side_channel_attributes(Document(children=[para])) == 0
        assert para.metadata == {"attributes": {"id": "p"}}

    def test_nested_leaves(self) -> None:
        """Test leaves inside containers are found."""
        code = CodeBlock(content="", metadata={"attributes": {"id": "c"}})
        doc = Document(children=[BlockQuote(children=[code])])

        assert relocate_side_channel_attributes(doc) == 1
        assert properties(code) == {"id": "c"}

    def test_merges_into_existing_bag(self) -> None:
        """Test relocation merges rather than replaces."""
        code = CodeBlock(
            content="",
            metadata={"properties": {"class": ["a"], "id": "old"}, "attributes": {"class": "b", "id": "new"}},
        )

        relocate_side_channel_attributes(Document(children=[code]))

        assert properties(code) == {"class": ["a", "b"], "id": "new"}


@pytest.mark.unit
class TestChildlessFlattening:
    """Test folding fragment children of leaf node kinds."""

    def test_thematic_break_fragments_fold(self) -> None:
        """Test fragments below a thematic break merge in child order."""
        hr = ThematicBreak(
            children=[
                AttributeFragment(attributes={"class": "a", "id": "one"}),
                AttributeFragment(attributes={"class": "b", "id": "two"}),
            ]
        )
        doc = Document(children=[hr])

        assert flatten_childless_fragments(doc) == 1

        assert properties(hr) == {"class": ["a", "b"], "id": "two"}
        assert hr.children is None

    def test_ad_hoc_children_are_removed(self) -> None:
        """Test a stray children attribute on a leaf is deleted."""
        image = Image(url="/a.png")
        image.children = [AttributeFragment(attributes={"id": "pic"})]
        doc = Document(children=[Paragraph(children=[image])])

        flatten_childless_fragments(doc)

        assert properties(image) == {"id": "pic"}
        assert not hasattr(image, "children")

    def test_non_fragment_children_discarded_with_warning(self, caplog) -> None:
        """Test other stray children are dropped and logged."""
        hr = ThematicBreak(children=[Text(content="stray"), AttributeFragment(attributes={"id": "hr"})])

        with caplog.at_level(logging.WARNING, logger="mdattrs.transforms.normalize"):
            flatten_childless_fragments(Document(children=[hr]))

        assert properties(hr) == {"id": "hr"}
        assert hr.children is None
        assert "Discarding Text" in caplog.text

    def test_break_without_children_untouched(self) -> None:
        """Test an ordinary thematic break is not counted."""
        hr = ThematicBreak()

        assert flatten_childless_fragments(Document(children=[hr])) == 0
        assert properties(hr) is None


@pytest.mark.unit
class TestStandaloneParagraphs:
    """Test attachment of attribute lines to the following block."""

    def test_attaches_to_next_line(self) -> None:
        """Test {.note} directly above a heading attaches to the heading."""
        source = "{.note}\n# Head"
        heading = Heading(level=1, children=[Text(content="Head")], source_location=locate(source, "# Head"))
        doc = Document(children=[standalone(source, "{.note}", {"class": "note"}), heading])

        assert attach_standalone_paragraphs(doc) == 1

        assert doc.children == [heading]
        assert properties(heading) == {"class": ["note"]}

    def test_blank_line_prevents_attachment(self) -> None:
        """Test a blank line between the two blocks leaves both alone."""
        source = "{.note}\n\n# Head"
        heading = Heading(level=1, children=[Text(content="Head")], source_location=locate(source, "# Head"))
        doc = Document(children=[standalone(source, "{.note}", {"class": "note"}), heading])

        assert attach_standalone_paragraphs(doc) == 0

        assert len(doc.children) == 2
        assert properties(heading) is None

    def test_last_child_is_left_for_resolution(self) -> None:
        """Test a standalone paragraph with no next sibling stays."""
        source = "Text\n{#end}"
        text_para = Paragraph(children=[Text(content="Text")], source_location=locate(source, "Text"))
        doc = Document(children=[text_para, standalone(source, "{#end}", {"id": "end"})])

        assert attach_standalone_paragraphs(doc) == 0
        assert len(doc.children) == 2

    def test_mixed_paragraph_is_not_standalone(self) -> None:
        """Test a paragraph with text and a fragment is not moved."""
        source = "Text {#p}\nNext"
        first = Paragraph(
            children=[Text(content="Text "), fragment(source, "{#p}", {"id": "p"})],
            source_location=locate(source, "Text {#p}"),
        )
        second = Paragraph(children=[Text(content="Next")], source_location=locate(source, "Next"))
        doc = Document(children=[first, second])

        assert attach_standalone_paragraphs(doc) == 0
        assert properties(second) is None

    def test_missing_positions_prevent_attachment(self) -> None:
        """Test nodes without positions are never adjacent."""
        para = Paragraph(children=[AttributeFragment(attributes={"id": "x"}, source_text="{#x}")])
        target = Paragraph(children=[Text(content="t")])
        doc = Document(children=[para, target])

        assert attach_standalone_paragraphs(doc) == 0

    def test_nested_in_block_quote(self) -> None:
        """Test standalone lines inside containers are handled."""
        source = "> {#q}\n> quoted"
        target = Paragraph(children=[Text(content="quoted")], source_location=locate(source, "quoted"))
        quote = BlockQuote(children=[standalone(source, "{#q}", {"id": "q"}), target])
        doc = Document(children=[quote])

        assert attach_standalone_paragraphs(doc) == 1
        assert quote.children == [target]
        assert properties(target) == {"id": "q"}

    def test_successive_targets(self) -> None:
        """Test each attribute line attaches to the block right below it."""
        source = "{#a}\nFirst\n\n{#b}\nSecond"
        first = Paragraph(children=[Text(content="First")], source_location=locate(source, "First"))
        second = Paragraph(children=[Text(content="Second")], source_location=locate(source, "Second"))
        doc = Document(
            children=[
                standalone(source, "{#a}", {"id": "a"}),
                first,
                standalone(source, "{#b}", {"id": "b"}),
                second,
            ]
        )

        assert attach_standalone_paragraphs(doc) == 2
        assert doc.children == [first, second]
        assert properties(first) == {"id": "a"}
        assert properties(second) == {"id": "b"}

    def test_chained_lines_all_reach_the_block(self) -> None:
        """Test consecutive attribute lines merge onto the block below them in order."""
        source = "{.a}\n{.b #x}\nPara"
        target = Paragraph(children=[Text(content="Para")], source_location=locate(source, "Para"))
        doc = Document(
            children=[
                standalone(source, "{.a}", {"class": "a"}),
                standalone(source, "{.b #x}", {"class": "b", "id": "x"}),
                target,
            ]
        )

        assert attach_standalone_paragraphs(doc) == 2

        assert doc.children == [target]
        assert properties(target) == {"class": ["a", "b"], "id": "x"}


@pytest.mark.unit
class TestAfterThematicBreak:
    """Test attachment of attribute lines to a preceding thematic break."""

    def test_attaches_to_break(self) -> None:
        """Test ---\\n{#sep} attaches to the break."""
        source = "---\n{#sep}"
        hr = ThematicBreak(source_location=locate(source, "---"))
        doc = Document(children=[hr, standalone(source, "{#sep}", {"id": "sep"})])

        assert attach_after_thematic_breaks(doc) == 1

        assert doc.children == [hr]
        assert properties(hr) == {"id": "sep"}

    def test_blank_line_prevents_attachment(self) -> None:
        """Test a blank line after the break leaves the paragraph."""
        source = "---\n\n{#sep}"
        hr = ThematicBreak(source_location=locate(source, "---"))
        doc = Document(children=[hr, standalone(source, "{#sep}", {"id": "sep"})])

        assert attach_after_thematic_breaks(doc) == 0
        assert len(doc.children) == 2

    def test_only_breaks_qualify(self) -> None:
        """Test other preceding blocks are ignored by this pass."""
        source = "Text\n{#x}"
        text_para = Paragraph(children=[Text(content="Text")], source_location=locate(source, "Text"))
        doc = Document(children=[text_para, standalone(source, "{#x}", {"id": "x"})])

        assert attach_after_thematic_breaks(doc) == 0

    def test_nested_first_child_is_searched(self) -> None:
        """Test breaks nested in a leading container are found."""
        source = "> ---\n> {#sep}"
        hr = ThematicBreak(source_location=locate(source, "---"))
        quote = BlockQuote(children=[hr, standalone(source, "{#sep}", {"id": "sep"})])
        doc = Document(children=[quote])

        assert attach_after_thematic_breaks(doc) == 1
        assert quote.children == [hr]


@pytest.mark.unit
class TestNormalizeFragments:
    """Test the combined normalization run."""

    def test_runs_all_passes(self) -> None:
        """Test every pass contributes in one call."""
        source = "{.lead}\nIntro\n\n---\n{#sep}"
        code = CodeBlock(content="", language="sh", metadata={"attributes": {"class": "shell"}})
        intro = Paragraph(children=[Text(content="Intro")], source_location=locate(source, "Intro"))
        hr = ThematicBreak(source_location=locate(source, "---"))
        heading_rule = ThematicBreak(children=[AttributeFragment(attributes={"id": "rule"})])
        doc = Document(
            children=[
                standalone(source, "{.lead}", {"class": "lead"}),
                intro,
                hr,
                standalone(source, "{#sep}", {"id": "sep"}),
                code,
                heading_rule,
            ]
        )

        normalize_fragments(doc)

        assert doc.children == [intro, hr, code, heading_rule]
        assert properties(intro) == {"class": ["lead"]}
        assert properties(hr) == {"id": "sep"}
        assert properties(code) == {"class": ["language-sh", "shell"]}
        assert properties(heading_rule) == {"id": "rule"}
        assert heading_rule.children is None
