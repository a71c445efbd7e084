#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2toc/toc.py
"""Table of contents generation for markdown documents.

The outline lists one heading per line, prefixed with the line number where
the heading appears::

      1→# Getting Started
     12→## Installation
     48→## Configuration

The heading depth is chosen adaptively: the deepest level whose rendered
outline fits in the byte budget wins.

Functions
---------
render_toc : Render headings up to a maximum level
find_optimal_level : Pick the deepest level that fits a byte budget
generate_toc : Threshold gate, extraction and level selection in one call

"""

from __future__ import annotations

import logging
from typing import Sequence

from md2toc.constants import LINE_NUMBER_WIDTHS, MIN_LINE_NUMBER_WIDTH, TOC_SEPARATOR
from md2toc.headings import Heading, extract_headings
from md2toc.options import TocConfig

logger = logging.getLogger(__name__)


def _line_number_width(max_line_number: int) -> int:
    for upper_bound, width in LINE_NUMBER_WIDTHS:
        if max_line_number < upper_bound:
            return width
    return max(len(str(max_line_number)), MIN_LINE_NUMBER_WIDTH)


def render_toc(headings: Sequence[Heading], max_level: int) -> str:
    """Render headings with ``level <= max_level`` as outline text.

    Parameters
    ----------
    headings : sequence of Heading
        Headings in document order
    max_level : int
        Deepest heading level to include

    Returns
    -------
    str
        One ``{line_number}→{text}`` line per heading, line numbers right
        justified, joined by newlines without a trailing newline. Empty when
        no heading qualifies.

    """
    included = [heading for heading in headings if heading.level <= max_level]
    if not included:
        return ""

    width = _line_number_width(max(heading.line_number for heading in included))
    return "\n".join(f"{heading.line_number:>{width}}{TOC_SEPARATOR}{heading.text}" for heading in included)


def find_optimal_level(headings: Sequence[Heading], budget: int) -> tuple[int, str] | None:
    """Return the deepest heading level whose outline fits within ``budget``.

    Every level is tried: the rendered size is not assumed to grow with the
    level, so an early stop could miss a deeper level that fits.

    Parameters
    ----------
    headings : sequence of Heading
        Headings in document order
    budget : int
        Maximum outline size in UTF-8 bytes

    Returns
    -------
    tuple of (int, str) or None
        The selected level and its rendered outline, or None when no level
        has headings within budget

    """
    if not headings:
        return None

    max_level = max(heading.level for heading in headings)
    best: tuple[int, str] | None = None

    for level in range(1, max_level + 1):
        rendered = render_toc(headings, level)
        if not rendered:
            continue

        size = len(rendered.encode("utf-8"))
        if size <= budget:
            best = (level, rendered)
        else:
            logger.debug("Level %d outline is %d bytes, over budget of %d", level, size, budget)

    return best


def generate_toc(markdown: str, size_metric: int | None = None, config: TocConfig | None = None) -> str | None:
    """Generate a table of contents for a markdown document.

    Parameters
    ----------
    markdown : str
        Markdown source
    size_metric : int, optional
        Size of the document compared against
        ``config.full_content_threshold``. Defaults to the character count
        of ``markdown``; callers wanting a byte-based gate pass
        ``len(markdown.encode("utf-8"))``.
    config : TocConfig, optional
        Budget and threshold, defaults to ``TocConfig()``

    Returns
    -------
    str or None
        The outline, or None if the document is below the threshold, has no
        headings, or no heading level fits the budget

    Examples
    --------
    >>> print(generate_toc("# Title\\nContent.", config=TocConfig(toc_budget=1000, full_content_threshold=0)))
      1→# Title

    """
    config = config or TocConfig()
    if size_metric is None:
        size_metric = len(markdown)

    if size_metric < config.full_content_threshold:
        logger.debug("Document size %d below threshold %d", size_metric, config.full_content_threshold)
        return None

    headings = extract_headings(markdown)
    if not headings:
        return None

    selected = find_optimal_level(headings, config.toc_budget)
    if selected is None:
        logger.debug("No heading level fits within %d bytes", config.toc_budget)
        return None

    level, toc = selected
    if not toc:
        return None

    logger.debug("Selected heading level %d (%d headings total)", level, len(headings))
    return toc
