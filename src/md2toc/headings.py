#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2toc/headings.py
"""Heading extraction with originating line numbers.

Headings are materialized from the event stream of ``md2toc.events``. The
text of each heading is the raw source slice, so inline markdown (bold,
code, links) is preserved verbatim, except for:

- links whose visible text is empty or invisible (permalink anchors such as
  ``[](#intro)``, ``[\\u200b](#intro)`` or ``[¶](#intro)``, including the
  same glyphs written as character references like ``[&para;](#intro)``),
- a trailing setext underline line,
- runs of spaces, which are collapsed.

Headings left with nothing but whitespace and ``#`` are dropped.

Examples
--------
    >>> [h.text for h in extract_headings("# Intro [](#intro)\\n\\nText\\n\\nSetup\\n-----")]
    ['# Intro', 'Setup']

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

from md2toc.events import Event, EventKind, iter_events
from md2toc.utils.text import excise_spans, has_heading_content, is_empty_or_invisible, normalize_heading_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Heading:
    """Heading extracted from markdown.

    Parameters
    ----------
    level : int
        Heading level from 1 (H1) to 6 (H6)
    line_number : int
        1-indexed line where the heading starts
    text : str
        Heading source with formatting preserved

    """

    level: int
    line_number: int
    text: str


class ExtractionPhase(Enum):
    """Where the extractor is relative to heading and link boundaries."""

    IDLE = auto()
    IN_HEADING = auto()
    IN_LINK = auto()


@dataclass
class _LinkState:
    start: int
    text_parts: list[str] = field(default_factory=list)


@dataclass
class _HeadingState:
    level: int
    start: int
    line_number: int
    empty_link_spans: list[tuple[int, int]] = field(default_factory=list)
    link: _LinkState | None = None


class HeadingExtractor:
    """Consume markdown events and build ``Heading`` records.

    The extractor is a small state machine. Heading-start always opens a
    fresh heading and heading-end always returns to ``IDLE``, so unclosed
    links or headings never leak into the next heading.

    Parameters
    ----------
    markdown : str
        The document the events were produced from

    """

    def __init__(self, markdown: str):
        self.markdown = markdown
        self.headings: list[Heading] = []
        self._heading: _HeadingState | None = None
        self._current_line = 1
        self._last_pos = 0

    @property
    def phase(self) -> ExtractionPhase:
        """Current state of the extractor."""
        if self._heading is None:
            return ExtractionPhase.IDLE
        if self._heading.link is None:
            return ExtractionPhase.IN_HEADING
        return ExtractionPhase.IN_LINK

    def feed(self, event: Event) -> None:
        """Process one event."""
        self._advance_line(event.start)

        if event.kind is EventKind.HEADING_START:
            self._start_heading(event)
        elif event.kind is EventKind.LINK_START:
            self._start_link(event)
        elif event.kind in (EventKind.TEXT, EventKind.CODE):
            self._append_text(event)
        elif event.kind is EventKind.LINK_END:
            self._end_link(event)
        elif event.kind is EventKind.HEADING_END:
            self._end_heading(event)

    def _advance_line(self, position: int) -> None:
        # Ranges may overlap or go backwards (end events reuse the start offset)
        if position > self._last_pos:
            self._current_line += self.markdown.count("\n", self._last_pos, position)
        self._last_pos = max(self._last_pos, position)

    def _start_heading(self, event: Event) -> None:
        if self._heading is not None:
            logger.debug("Discarding unterminated heading at line %d", self._heading.line_number)

        self._heading = _HeadingState(
            level=event.level or 1,
            start=event.start,
            line_number=self._current_line,
        )

    def _start_link(self, event: Event) -> None:
        if self._heading is not None:
            self._heading.link = _LinkState(start=event.start)

    def _append_text(self, event: Event) -> None:
        heading = self._heading
        if heading is None or heading.link is None or not event.text:
            return
        heading.link.text_parts.append(event.text)

    def _end_link(self, event: Event) -> None:
        heading = self._heading
        if heading is None or heading.link is None:
            return

        link = heading.link
        heading.link = None
        if is_empty_or_invisible("".join(link.text_parts)):
            heading.empty_link_spans.append((link.start, event.end))

    def _end_heading(self, event: Event) -> None:
        heading = self._heading
        self._heading = None
        if heading is None:
            return

        source = self.markdown[heading.start : event.end]
        text = normalize_heading_text(excise_spans(source, heading.empty_link_spans, offset=heading.start))

        if not text or not has_heading_content(text):
            logger.debug("Dropping heading without content at line %d", heading.line_number)
            return

        self.headings.append(Heading(level=heading.level, line_number=heading.line_number, text=text))


def extract_headings(markdown: str) -> list[Heading]:
    """Extract headings with line numbers, dropping empty anchor links.

    Parameters
    ----------
    markdown : str
        Markdown source

    Returns
    -------
    list of Heading
        Headings in document order

    """
    extractor = HeadingExtractor(markdown)
    for event in iter_events(markdown):
        extractor.feed(event)

    logger.debug("Extracted %d headings", len(extractor.headings))
    return extractor.headings
