#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2toc/utils/text.py
"""Text normalization helpers for heading extraction.

These helpers turn the raw source slice of a heading into its final outline
text. They operate on ``str`` and never split a character, so multi-byte and
zero-width characters survive untouched.

Functions
---------
is_empty_or_invisible : Test whether link text renders as nothing
excise_spans : Remove absolute-offset spans from a slice
strip_setext_underline : Drop a trailing ``===``/``---`` line
collapse_spaces : Collapse runs of the space character
has_heading_content : Test for a character other than whitespace and ``#``
normalize_heading_text : Trim, strip the underline and collapse spaces

Examples
--------
    >>> excise_spans("## Title [](#t)", [(109, 115)], offset=100)
    '## Title '
    >>> strip_setext_underline("Title\\n=====")
    'Title'
    >>> collapse_spaces("##  Title   text")
    '## Title text'

"""

from __future__ import annotations

import re
from typing import Iterable

from md2toc.constants import INVISIBLE_CHARS, SETEXT_UNDERLINE_CHARS

_SPACE_RUN = re.compile(r" {2,}")


def is_empty_or_invisible(text: str) -> bool:
    """Check whether text is empty or made only of invisible characters.

    ``str.strip`` leaves zero-width spaces alone, yet documentation
    generators put them (or a pilcrow) inside permalink anchors such as
    ``[\\u200b](#anchor)`` and ``[¶](#anchor)``.

    Parameters
    ----------
    text : str
        Accumulated link text

    Returns
    -------
    bool
        True when every character is whitespace or an invisible/permalink
        glyph. The empty string qualifies.

    """
    return all(char.isspace() or char in INVISIBLE_CHARS for char in text)


def excise_spans(text: str, spans: Iterable[tuple[int, int]], offset: int) -> str:
    """Remove spans given in document offsets from a slice of that document.

    Parameters
    ----------
    text : str
        Slice of the document starting at ``offset``
    spans : iterable of (int, int)
        ``(start, end)`` pairs in absolute document offsets, in document order
    offset : int
        Document offset of ``text[0]``

    Returns
    -------
    str
        The un-removed portions of ``text`` concatenated in order

    Notes
    -----
    Spans that are inverted or run past the end of the slice are skipped.
    A span overlapping an earlier one only removes what is left of it.

    """
    pieces: list[str] = []
    last_end = 0

    for abs_start, abs_end in spans:
        start = max(abs_start - offset, 0)
        end = max(abs_end - offset, 0)
        if start >= end or end > len(text):
            continue

        if last_end < start:
            pieces.append(text[last_end:start])
        last_end = max(last_end, end)

    if last_end < len(text):
        pieces.append(text[last_end:])

    return "".join(pieces)


def strip_setext_underline(text: str) -> str:
    """Drop the last line of ``text`` if it is a setext underline.

    Only the final newline-delimited segment is inspected; it must be
    non-empty after trimming and consist solely of ``=`` or ``-``.
    """
    head, newline, last_line = text.rpartition("\n")
    if not newline:
        return text

    underline = last_line.strip()
    if underline and all(char in SETEXT_UNDERLINE_CHARS for char in underline):
        return head
    return text


def collapse_spaces(text: str) -> str:
    """Collapse runs of the literal space character into one space.

    Tabs and newlines are left as they are.
    """
    return _SPACE_RUN.sub(" ", text)


def has_heading_content(text: str) -> bool:
    """Return True if ``text`` has a character that is not whitespace or ``#``."""
    return any(not char.isspace() and char != "#" for char in text)


def normalize_heading_text(raw: str) -> str:
    """Normalize the raw source of a heading into outline text.

    Parameters
    ----------
    raw : str
        Heading source with empty link spans already removed

    Returns
    -------
    str
        Trimmed text without setext underline and with single spaces

    """
    text = strip_setext_underline(raw.strip())
    return collapse_spaces(text).strip()
