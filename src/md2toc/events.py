#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2toc/events.py
"""Streaming markdown events for heading and link tracking.

This module produces an ordered stream of ``Event`` records over a markdown
document, each carrying its ``(start, end)`` range in the original text. It is
deliberately not a full markdown parser: block structure is only followed as
far as needed to find headings (fenced and indented code, HTML blocks and
front matter are skipped as opaque, and block quote or list markers in front
of an ATX heading are stepped over), and inline structure is only tokenized
inside heading content (code spans, images, inline/reference links,
autolinks and raw inline HTML, which yields no text). Text events carry
literal content: backslash escapes and character references are resolved.
Link destinations and bracket nesting are matched with
mistune's link helpers so they follow the same rules as mistune's own
inline parser.

Event order for a heading::

    HEADING_START(level)  -- range covers the whole heading source
    TEXT / CODE / LINK_START ... LINK_END
    HEADING_END(level)    -- same range as HEADING_START

Offsets index into the Python ``str`` holding the document, so slicing with
them never splits a character.

Examples
--------
    >>> [event.kind.name for event in iter_events("## See [docs](url)")]
    ['HEADING_START', 'TEXT', 'LINK_START', 'TEXT', 'LINK_END', 'HEADING_END']

"""

from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from mistune.helpers import (
    BLOCK_TAGS,
    HTML_ATTRIBUTES,
    HTML_TAGNAME,
    LINK_LABEL,
    PRE_TAGS,
    PUNCTUATION,
    parse_link,
    parse_link_label,
    parse_link_text,
)
from mistune.util import unescape

logger = logging.getLogger(__name__)

# Block-level patterns, applied to a single line without its line ending
_ATX_HEADING = re.compile(r"^ {0,3}(?P<marks>#{1,6})(?=[ \t]|$)")
_ATX_CLOSING = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
_SETEXT_UNDERLINE = re.compile(r"^ {0,3}(?P<char>=+|-+)[ \t]*$")
_THEMATIC_BREAK = re.compile(r"^ {0,3}(?:(?:-[ \t]*){3,}|(?:_[ \t]*){3,}|(?:\*[ \t]*){3,})$")
_FENCE_OPEN = re.compile(r"^ {0,3}(?P<marker>`{3,}|~{3,})(?P<info>.*)$")
_BLOCK_QUOTE = re.compile(r"^ {0,3}>")
_LIST_ITEM = re.compile(r"^ {0,3}(?:[*+-]|\d{1,9}[.)])(?:[ \t]|$)")
_CONTAINER_MARKER = re.compile(r" {0,3}(?:>[ \t]?|(?:[*+-]|\d{1,9}[.)])[ \t])")
_REF_DEFINITION = re.compile(r"^ {0,3}\[(?P<label>" + LINK_LABEL + r")\]:")
_HTML_COMMENT_OPEN = re.compile(r"^ {0,3}<!--")
_HTML_COMMENT_CLOSE = re.compile(r"-->")
_HTML_RAW_OPEN = re.compile(r"^ {0,3}<(?P<tag>" + "|".join(PRE_TAGS) + r")(?:[ \t>]|$)", re.IGNORECASE)
_HTML_BLOCK_OPEN = re.compile(r"^ {0,3}</?(?:" + "|".join(BLOCK_TAGS) + r")(?:[ \t>]|/>|$)", re.IGNORECASE)

_FRONT_MATTER_CLOSERS = {"---": ("---", "..."), "+++": ("+++",)}

# Inline patterns
_ESCAPED_CHAR = re.compile(r"\\(" + PUNCTUATION + r")")
_INLINE_HTML = re.compile(
    r"<" + HTML_TAGNAME + HTML_ATTRIBUTES + r"\s*/?>"
    r"|</" + HTML_TAGNAME + r"\s*>"
    r"|<!--(?!>|->)(?:(?!--)[\s\S])+?(?<!-)-->"
)
_AUTOLINK = re.compile(
    r"<(?P<url>[A-Za-z][A-Za-z0-9.+-]{1,31}:[^<>\x00-\x20]*"
    r"|[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*)>"
)


class EventKind(Enum):
    """Kinds of events emitted by ``iter_events``."""

    HEADING_START = "heading_start"
    HEADING_END = "heading_end"
    LINK_START = "link_start"
    LINK_END = "link_end"
    TEXT = "text"
    CODE = "code"


@dataclass(frozen=True)
class Event:
    """A markdown event and the source range it covers.

    Parameters
    ----------
    kind : EventKind
        What the event marks
    start : int
        Offset of the first character of the range
    end : int
        Offset one past the last character of the range
    level : int or None
        Heading level for heading events
    text : str or None
        Literal content for text and code events

    """

    kind: EventKind
    start: int
    end: int
    level: int | None = None
    text: str | None = None


@dataclass(frozen=True)
class _Line:
    start: int
    end: int  # excludes the line ending
    text: str

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @property
    def first_char(self) -> int:
        return self.start + len(self.text) - len(self.text.lstrip(" \t"))


@dataclass
class _Paragraph:
    start: int
    end: int
    setext_capable: bool


@dataclass(frozen=True)
class _HeadingBlock:
    level: int
    start: int
    end: int
    content_start: int
    content_end: int


def _iter_lines(markdown: str) -> Iterator[_Line]:
    """Yield ``\\n``-terminated lines; a trailing ``\\r`` is excluded from the text."""
    pos = 0
    length = len(markdown)
    while pos < length:
        newline = markdown.find("\n", pos)
        line_end = length if newline == -1 else newline
        text_end = line_end - 1 if line_end > pos and markdown[line_end - 1] == "\r" else line_end
        yield _Line(start=pos, end=text_end, text=markdown[pos:text_end])
        pos = line_end + 1


def _indent_width(text: str) -> int:
    width = 0
    for char in text:
        if char == " ":
            width += 1
        elif char == "\t":
            width += 4 - width % 4
        else:
            break
    return width


def _strip_container_markers(line: _Line) -> _Line:
    """Return the part of a line after any block quote and list item markers."""
    offset = 0
    while True:
        marker = _CONTAINER_MARKER.match(line.text, offset)
        if marker is None or marker.end() == offset:
            break
        offset = marker.end()

    if offset == 0:
        return line
    return _Line(start=line.start + offset, end=line.end, text=line.text[offset:])


def normalize_label(label: str) -> str:
    """Normalize a link reference label for matching (case and whitespace)."""
    return " ".join(label.split()).casefold()


class _BlockScanner:
    """Line-oriented scanner that finds heading blocks and reference labels.

    Everything that is not a heading is only tracked to the extent needed to
    avoid false headings: code, HTML blocks and front matter are consumed as
    opaque regions, and paragraphs are remembered so that a following
    underline can turn them into setext headings.
    """

    def __init__(self, markdown: str):
        self.markdown = markdown
        self.reference_labels: set[str] = set()
        self._paragraph: _Paragraph | None = None
        self._fence: tuple[str, int] | None = None
        self._html_close: re.Pattern[str] | None = None
        self._html_until_blank = False

    def scan(self) -> list[_HeadingBlock]:
        lines = list(_iter_lines(self.markdown))
        headings: list[_HeadingBlock] = []

        for line in lines[self._front_matter_length(lines) :]:
            block = self._feed(line)
            if block is not None:
                headings.append(block)

        return headings

    @staticmethod
    def _front_matter_length(lines: list[_Line]) -> int:
        """Return the number of leading lines taken by a front matter block."""
        if not lines:
            return 0

        closers = _FRONT_MATTER_CLOSERS.get(lines[0].text.rstrip())
        if closers is None or len(lines) < 2 or lines[1].is_blank:
            return 0

        for index in range(1, len(lines)):
            if lines[index].text.rstrip() in closers:
                logger.debug("Skipping front matter block of %d lines", index + 1)
                return index + 1
        return 0

    def _feed(self, line: _Line) -> _HeadingBlock | None:
        text = line.text

        if self._fence is not None:
            self._close_fence(text)
            return None

        if self._html_close is not None:
            if self._html_close.search(text):
                self._html_close = None
            return None

        if self._html_until_blank:
            if line.is_blank:
                self._html_until_blank = False
            return None

        if line.is_blank:
            self._paragraph = None
            return None

        if _indent_width(text) >= 4:
            # Lazy continuation of an open paragraph, otherwise indented code
            if self._paragraph is not None:
                self._paragraph.end = line.end
            return None

        if self._open_fence(text) or self._open_html(text):
            self._paragraph = None
            return None

        content = _strip_container_markers(line)
        atx = _ATX_HEADING.match(content.text)
        if atx is not None:
            self._paragraph = None
            return self._atx_heading(content, atx)

        paragraph = self._paragraph
        if paragraph is not None and paragraph.setext_capable:
            underline = _SETEXT_UNDERLINE.match(text)
            if underline is not None:
                self._paragraph = None
                level = 1 if underline.group("char")[0] == "=" else 2
                return _HeadingBlock(
                    level=level,
                    start=paragraph.start,
                    end=line.end,
                    content_start=paragraph.start,
                    content_end=paragraph.end,
                )

        if _THEMATIC_BREAK.match(text):
            self._paragraph = None
            return None

        if paragraph is None:
            definition = _REF_DEFINITION.match(text)
            if definition is not None:
                self.reference_labels.add(normalize_label(definition.group("label")))
                return None

        if _BLOCK_QUOTE.match(text) or _LIST_ITEM.match(text):
            # Container content never forms a setext heading with a top-level underline
            self._paragraph = _Paragraph(start=line.first_char, end=line.end, setext_capable=False)
        elif paragraph is not None:
            paragraph.end = line.end
        else:
            self._paragraph = _Paragraph(start=line.first_char, end=line.end, setext_capable=True)
        return None

    def _open_fence(self, text: str) -> bool:
        match = _FENCE_OPEN.match(text)
        if match is None:
            return False

        marker = match.group("marker")
        if marker[0] == "`" and "`" in match.group("info"):
            return False

        self._fence = (marker[0], len(marker))
        return True

    def _close_fence(self, text: str) -> None:
        if self._fence is None:
            return
        char, length = self._fence
        stripped = text.strip(" \t")
        if _indent_width(text) < 4 and len(stripped) >= length and stripped == char * len(stripped):
            self._fence = None

    def _open_html(self, text: str) -> bool:
        if _HTML_COMMENT_OPEN.match(text):
            if not _HTML_COMMENT_CLOSE.search(text, text.index("<!--") + 4):
                self._html_close = _HTML_COMMENT_CLOSE
            return True

        raw = _HTML_RAW_OPEN.match(text)
        if raw is not None:
            closer = re.compile(r"</" + raw.group("tag") + r">", re.IGNORECASE)
            if not closer.search(text, raw.end()):
                self._html_close = closer
            return True

        if _HTML_BLOCK_OPEN.match(text):
            self._html_until_blank = True
            return True

        return False

    @staticmethod
    def _atx_heading(line: _Line, match: re.Match[str]) -> _HeadingBlock:
        text = line.text
        marks_start = match.start("marks")
        content_start = match.end("marks")
        content_end = len(text)

        closing = _ATX_CLOSING.search(text, content_start)
        if closing is not None:
            content_end = closing.start()

        while content_start < content_end and text[content_start] in " \t":
            content_start += 1

        return _HeadingBlock(
            level=len(match.group("marks")),
            start=line.start + marks_start,
            end=line.end,
            content_start=line.start + content_start,
            content_end=line.start + max(content_start, content_end),
        )


def _find_closing_backticks(src: str, pos: int, count: int) -> int:
    """Return the offset of a backtick run of exactly ``count``, or -1."""
    while True:
        index = src.find("`", pos)
        if index == -1:
            return -1
        run_end = index
        while run_end < len(src) and src[run_end] == "`":
            run_end += 1
        if run_end - index == count:
            return index
        pos = run_end


def _code_span_content(raw: str) -> str:
    content = raw.replace("\r\n", " ").replace("\n", " ")
    if len(content) >= 2 and content[0] == " " and content[-1] == " " and content.strip(" "):
        content = content[1:-1]
    return content


def _literal_text(raw: str) -> str:
    """Resolve backslash escapes and character references in inline text."""
    parts = []
    pos = 0
    for escaped in _ESCAPED_CHAR.finditer(raw):
        parts.append(unescape(raw[pos : escaped.start()]))
        parts.append(escaped.group(1))
        pos = escaped.end()
    parts.append(unescape(raw[pos:]))
    return "".join(parts)


class _InlineScanner:
    """Tokenize heading content into text, code and link events."""

    def __init__(self, reference_labels: set[str]):
        self.reference_labels = reference_labels

    def events(self, src: str, base: int, allow_links: bool = True) -> Iterator[Event]:
        pos = 0
        text_start = 0
        length = len(src)

        while pos < length:
            char = src[pos]

            if char == "\\" and pos + 1 < length and src[pos + 1] in string.punctuation:
                pos += 2
                continue

            if char == "`":
                run_end = pos
                while run_end < length and src[run_end] == "`":
                    run_end += 1
                close = _find_closing_backticks(src, run_end, run_end - pos)
                if close == -1:
                    pos = run_end
                    continue
                yield from self._text(src, base, text_start, pos)
                end = close + (run_end - pos)
                yield Event(EventKind.CODE, base + pos, base + end, text=_code_span_content(src[run_end:close]))
                pos = text_start = end
                continue

            if char == "<" and allow_links:
                autolink = _AUTOLINK.match(src, pos)
                if autolink is not None:
                    yield from self._text(src, base, text_start, pos)
                    start, end = base + pos, base + autolink.end()
                    yield Event(EventKind.LINK_START, start, end)
                    url_start, url_end = base + autolink.start("url"), base + autolink.end("url")
                    yield Event(EventKind.TEXT, url_start, url_end, text=autolink.group("url"))
                    yield Event(EventKind.LINK_END, start, end)
                    pos = text_start = autolink.end()
                    continue

            if char == "<":
                tag = _INLINE_HTML.match(src, pos)
                if tag is not None:
                    # Raw HTML is markup, not visible text
                    yield from self._text(src, base, text_start, pos)
                    pos = text_start = tag.end()
                    continue

            if char == "!" and pos + 1 < length and src[pos + 1] == "[":
                image = self._match_link(src, pos + 1)
                if image is not None:
                    label_end, end = image
                    yield from self._text(src, base, text_start, pos)
                    # Alt text counts as visible content of an enclosing link
                    yield from self.events(src[pos + 2 : label_end], base + pos + 2, allow_links=False)
                    pos = text_start = end
                    continue

            if char == "[" and allow_links:
                link = self._match_link(src, pos)
                if link is not None:
                    label_end, end = link
                    yield from self._text(src, base, text_start, pos)
                    yield Event(EventKind.LINK_START, base + pos, base + end)
                    yield from self.events(src[pos + 1 : label_end], base + pos + 1, allow_links=False)
                    yield Event(EventKind.LINK_END, base + pos, base + end)
                    pos = text_start = end
                    continue

            pos += 1

        yield from self._text(src, base, text_start, length)

    @staticmethod
    def _text(src: str, base: int, start: int, end: int) -> Iterator[Event]:
        if start < end:
            yield Event(EventKind.TEXT, base + start, base + end, text=_literal_text(src[start:end]))

    def _match_link(self, src: str, pos: int) -> tuple[int, int] | None:
        """Match a link starting at the ``[`` at ``pos``.

        Returns
        -------
        tuple of (int, int) or None
            Offset of the closing ``]`` of the link text and offset one past
            the end of the whole link, or None when no link starts here

        """
        label, after = parse_link_text(src, pos + 1)
        if label is None or after is None:
            return None
        label_end = after - 1

        if after < len(src) and src[after] == "(":
            attrs, end = parse_link(src, after + 1)
            if attrs is not None and end is not None:
                return label_end, end

        if after < len(src) and src[after] == "[":
            reference, reference_end = parse_link_label(src, after + 1)
            if reference is not None and reference_end is not None:
                if normalize_label(reference or label) in self.reference_labels:
                    return label_end, reference_end
                return None

        if normalize_label(label) in self.reference_labels:
            return label_end, after
        return None


def iter_events(markdown: str) -> Iterator[Event]:
    """Iterate over heading and link events of a markdown document.

    Parameters
    ----------
    markdown : str
        Markdown source

    Yields
    ------
    Event
        Events in document order. Each heading yields a ``HEADING_START``,
        the inline events of its content and a ``HEADING_END``.

    """
    scanner = _BlockScanner(markdown)
    headings = scanner.scan()
    inline = _InlineScanner(scanner.reference_labels)

    for heading in headings:
        yield Event(EventKind.HEADING_START, heading.start, heading.end, level=heading.level)
        content = markdown[heading.content_start : heading.content_end]
        yield from inline.events(content, heading.content_start)
        yield Event(EventKind.HEADING_END, heading.start, heading.end, level=heading.level)
