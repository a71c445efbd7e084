"""Unit tests for heading extraction.

Covers line number tracking, empty anchor link removal, setext headings and
the extractor state machine when fed incomplete event sequences.
"""

import pytest

from md2toc.events import Event, EventKind
from md2toc.headings import ExtractionPhase, Heading, HeadingExtractor, extract_headings


def texts(markdown):
    return [heading.text for heading in extract_headings(markdown)]


@pytest.mark.unit
class TestExtractHeadings:
    """Test heading extraction from markdown documents."""

    def test_simple_headings(self):
        headings = extract_headings("# H1\n## H2\n### H3")
        assert headings == [
            Heading(level=1, line_number=1, text="# H1"),
            Heading(level=2, line_number=2, text="## H2"),
            Heading(level=3, line_number=3, text="### H3"),
        ]

    def test_skip_fenced_code_blocks(self):
        assert texts("# Real\n```\n# Fake\n```\n## Also Real") == ["# Real", "## Also Real"]

    def test_skip_indented_code_blocks(self):
        assert texts("# Real\n\n    # Not a heading (indented)\n\n## Real2") == ["# Real", "## Real2"]

    def test_setext_headings(self):
        headings = extract_headings("H1\n==\n\nH2\n--")
        assert [(h.level, h.line_number, h.text) for h in headings] == [(1, 1, "H1"), (2, 4, "H2")]

    def test_multi_line_setext_heading(self):
        """The paragraph keeps its inner newline, the underline is dropped."""
        headings = extract_headings("Part one\npart two\n========")
        assert headings == [Heading(level=1, line_number=1, text="Part one\npart two")]

    def test_setext_heading_with_crlf(self):
        assert texts("Title\r\n===\r\n") == ["Title"]

    def test_line_numbers_after_setext(self):
        headings = extract_headings("Intro\n====\n\n# Next")
        assert [h.line_number for h in headings] == [1, 4]

    def test_unicode_headings(self):
        headings = extract_headings("# 你好世界\n## 🎉 Emoji Heading")
        assert len(headings) == 2
        assert "你好世界" in headings[0].text
        assert "🎉" in headings[1].text

    def test_crlf_line_endings(self):
        headings = extract_headings("# First\r\n## Second\r\n### Third")
        assert [(h.line_number, h.text) for h in headings] == [(1, "# First"), (2, "## Second"), (3, "### Third")]

    def test_mixed_line_endings(self):
        headings = extract_headings("# First\n## Second\r\n### Third\n#### Fourth")
        assert [h.line_number for h in headings] == [1, 2, 3, 4]

    def test_inline_formatting_preserved(self):
        markdown = (
            "## **Bold** heading\n"
            "### Heading with `code`\n"
            "#### Heading with *italic* text\n"
            "##### Mix **bold** and `code` and [link](url)"
        )
        assert texts(markdown) == [
            "## **Bold** heading",
            "### Heading with `code`",
            "#### Heading with *italic* text",
            "##### Mix **bold** and `code` and [link](url)",
        ]

    def test_closing_sequence_kept(self):
        assert texts("## Title ##") == ["## Title ##"]

    def test_empty_document(self):
        assert extract_headings("") == []

    def test_document_with_no_headings(self):
        assert extract_headings("Just some paragraph text.\n\nAnd another paragraph.") == []

    def test_all_six_levels(self):
        markdown = "# Main\n\n## Level 2\n\n### Level 3\n\n#### Level 4\n\n##### Level 5\n\n###### Level 6\n"
        headings = extract_headings(markdown)
        assert [h.level for h in headings] == [1, 2, 3, 4, 5, 6]
        assert [h.line_number for h in headings] == [1, 3, 5, 7, 9, 11]

    def test_headings_without_content_dropped(self):
        assert extract_headings("#\n## ##\n###   ") == []

    def test_front_matter_skipped(self):
        headings = extract_headings("---\ntitle: Doc\n---\n# Real")
        assert headings == [Heading(level=1, line_number=4, text="# Real")]

    def test_html_comment_skipped(self):
        assert texts("<!--\n# Hidden\n-->\n# Shown") == ["# Shown"]

    def test_heading_in_block_quote(self):
        assert texts("> ## Note\n> Body text.\n") == ["## Note"]

    def test_heading_in_list_item(self):
        headings = extract_headings("Intro\n\n- # Item heading\n- plain item\n")
        assert headings == [Heading(level=1, line_number=3, text="# Item heading")]

    def test_anchor_in_quoted_heading(self):
        assert texts("> ### Tip [¶](#tip)") == ["### Tip"]

    def test_sample_document(self, sample_markdown):
        headings = extract_headings(sample_markdown)
        assert [(h.level, h.line_number, h.text) for h in headings] == [
            (1, 1, "# Sample Document"),
            (2, 5, "## Installation"),
            (2, 12, "Usage"),
            (3, 15, "### Options"),
        ]


@pytest.mark.unit
class TestEmptyLinkRemoval:
    """Test removal of permalink anchors from heading text."""

    @pytest.mark.parametrize(
        "markdown,expected",
        [
            ("## Writing markup with JSX [](#writing-markup-with-jsx)", "## Writing markup with JSX"),
            ("### Title [](#anchor1) [](#anchor2)", "### Title"),
            ("# Simple Heading", "# Simple Heading"),
            ("## Title [link](url) more text", "## Title [link](url) more text"),
            ("## Check [docs](url) for details [](#anchor)", "## Check [docs](url) for details"),
            ("## [¶](#anchor) Title with text", "## Title with text"),
            ("## Title [\ufeff](#title)", "## Title"),
            ("## Title [ ](#title)", "## Title"),
            ("## Title [![](icon.svg)](#title)", "## Title"),
            ("## Badge [![build](https://img)](https://ci)", "## Badge [![build](https://img)](https://ci)"),
            ("## [`Client`](#client) API", "## [`Client`](#client) API"),
            ("## Title [broken", "## Title [broken"),
            ("## Escaped \\[](#x)", "## Escaped \\[](#x)"),
            ("## Install [&para;](#install)", "## Install"),
            ("## Title [&ZeroWidthSpace;](#title)", "## Title"),
            ("## Title [&#x200B;](#title)", "## Title"),
            ("## Title [&amp;](#title)", "## Title [&amp;](#title)"),
            ("## Title [\\&para;](#title)", "## Title [\\&para;](#title)"),
            ('## Title [<a id="title"></a>](#title)', "## Title"),
            ("## Title [<span></span>](#t)", "## Title"),
            ("## Title <em>now</em>", "## Title <em>now</em>"),
        ],
    )
    def test_heading_text(self, markdown, expected):
        assert texts(markdown) == [expected]

    @pytest.mark.parametrize(
        "markdown",
        [
            "## [](#anchor) [¶](#another)",
            "### [\u200b](#anchor)",
            "### [&#8203;](#anchor)",
            "### [&ZeroWidthSpace;](#anchor)",
            "### [&para;](#anchor)",
            "### [&nbsp;](#anchor)",
        ],
    )
    def test_heading_of_only_anchors_dropped(self, markdown):
        assert extract_headings(markdown) == []

    def test_no_double_spaces_left(self):
        text = texts("## [¶](#anchor) Title with text")[0]
        assert "  " not in text

    def test_reference_style_anchor(self):
        assert texts("[anchor]: #intro\n\n## Intro [¶][anchor]") == ["## Intro"]

    def test_autolink_kept(self):
        assert texts("# Visit <https://example.com>") == ["# Visit <https://example.com>"]

    def test_setext_heading_anchor(self):
        assert texts("Install [](#install)\n-------") == ["Install"]


@pytest.mark.unit
class TestHeadingExtractor:
    """Test the extractor state machine with hand-built event sequences."""

    def test_phases(self):
        markdown = "## Title [x](y)"
        extractor = HeadingExtractor(markdown)
        assert extractor.phase is ExtractionPhase.IDLE

        extractor.feed(Event(EventKind.HEADING_START, 0, 15, level=2))
        assert extractor.phase is ExtractionPhase.IN_HEADING

        extractor.feed(Event(EventKind.LINK_START, 9, 15))
        assert extractor.phase is ExtractionPhase.IN_LINK

        extractor.feed(Event(EventKind.TEXT, 10, 11, text="x"))
        extractor.feed(Event(EventKind.LINK_END, 9, 15))
        assert extractor.phase is ExtractionPhase.IN_HEADING

        extractor.feed(Event(EventKind.HEADING_END, 0, 15, level=2))
        assert extractor.phase is ExtractionPhase.IDLE
        assert extractor.headings == [Heading(level=2, line_number=1, text="## Title [x](y)")]

    def test_empty_link_excised(self):
        extractor = HeadingExtractor("## Title [x](y)")
        for event in [
            Event(EventKind.HEADING_START, 0, 15, level=2),
            Event(EventKind.LINK_START, 9, 15),
            Event(EventKind.LINK_END, 9, 15),
            Event(EventKind.HEADING_END, 0, 15, level=2),
        ]:
            extractor.feed(event)
        assert extractor.headings == [Heading(level=2, line_number=1, text="## Title")]

    def test_unclosed_link_does_not_leak(self):
        """A link left open is discarded when its heading ends."""
        markdown = "## Title [x](y)\n# Next"
        extractor = HeadingExtractor(markdown)
        for event in [
            Event(EventKind.HEADING_START, 0, 15, level=2),
            Event(EventKind.LINK_START, 9, 15),
            Event(EventKind.TEXT, 10, 11, text="x"),
            Event(EventKind.HEADING_END, 0, 15, level=2),
            Event(EventKind.HEADING_START, 16, 22, level=1),
            Event(EventKind.HEADING_END, 16, 22, level=1),
        ]:
            extractor.feed(event)

        assert extractor.phase is ExtractionPhase.IDLE
        assert extractor.headings == [
            Heading(level=2, line_number=1, text="## Title [x](y)"),
            Heading(level=1, line_number=2, text="# Next"),
        ]

    def test_unterminated_heading_discarded(self):
        """A second heading start replaces a heading that never ended."""
        markdown = "# One\n# Two"
        extractor = HeadingExtractor(markdown)
        for event in [
            Event(EventKind.HEADING_START, 0, 5, level=1),
            Event(EventKind.HEADING_START, 6, 11, level=1),
            Event(EventKind.HEADING_END, 6, 11, level=1),
        ]:
            extractor.feed(event)
        assert extractor.headings == [Heading(level=1, line_number=2, text="# Two")]

    def test_backward_ranges_never_rewind_lines(self):
        extractor = HeadingExtractor("a\nb\n# H")
        for event in [
            Event(EventKind.HEADING_START, 4, 7, level=1),
            Event(EventKind.LINK_START, 0, 1),
            Event(EventKind.HEADING_END, 4, 7, level=1),
        ]:
            extractor.feed(event)
        assert extractor.headings == [Heading(level=1, line_number=3, text="# H")]

    def test_events_outside_heading_ignored(self):
        extractor = HeadingExtractor("text")
        extractor.feed(Event(EventKind.LINK_START, 0, 4))
        extractor.feed(Event(EventKind.TEXT, 0, 4, text="text"))
        extractor.feed(Event(EventKind.LINK_END, 0, 4))
        extractor.feed(Event(EventKind.HEADING_END, 0, 4))
        assert extractor.phase is ExtractionPhase.IDLE
        assert extractor.headings == []

    def test_link_end_without_open_link_ignored(self):
        """Stray link and text events inside a heading leave it intact."""
        extractor = HeadingExtractor("# Title")
        for event in [
            Event(EventKind.HEADING_START, 0, 7, level=1),
            Event(EventKind.TEXT, 2, 7, text="Title"),
            Event(EventKind.LINK_END, 2, 7),
            Event(EventKind.HEADING_END, 0, 7, level=1),
        ]:
            extractor.feed(event)
        assert extractor.headings == [Heading(level=1, line_number=1, text="# Title")]
