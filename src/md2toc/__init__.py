#  Copyright (c) 2025 Tom Villani, Ph.D.
"""md2toc - line-numbered tables of contents for markdown documents.

md2toc extracts the headings of a markdown document together with the line
each one starts on, drops decorative permalink anchors, and renders the
deepest outline that fits a byte budget. It is meant for tools that hand
large documents to readers (or language models) who navigate by line
number.

Examples
--------
    >>> from md2toc import TocConfig, generate_toc
    >>> markdown = "# Guide\\n\\n## Install [](#install)\\n\\n## Usage\\n"
    >>> print(generate_toc(markdown, config=TocConfig(full_content_threshold=0)))
      1→# Guide
      3→## Install
      5→## Usage

"""

from md2toc.constants import DEFAULT_TOC_BUDGET, DEFAULT_TOC_THRESHOLD, TOC_SEPARATOR
from md2toc.events import Event, EventKind, iter_events
from md2toc.exceptions import (
    DependencyError,
    FileAccessError,
    FileError,
    Md2TocError,
    ValidationError,
)
from md2toc.headings import Heading, extract_headings
from md2toc.options import TocConfig
from md2toc.stats import DocumentStats, count_stats
from md2toc.toc import find_optimal_level, generate_toc, render_toc

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TOC_BUDGET",
    "DEFAULT_TOC_THRESHOLD",
    "TOC_SEPARATOR",
    "DependencyError",
    "DocumentStats",
    "Event",
    "EventKind",
    "FileAccessError",
    "FileError",
    "Heading",
    "Md2TocError",
    "TocConfig",
    "ValidationError",
    "count_stats",
    "extract_headings",
    "find_optimal_level",
    "generate_toc",
    "iter_events",
    "render_toc",
    "__version__",
]
