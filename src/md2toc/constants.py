#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for md2toc.

This module centralizes the tunable defaults and glyphs
used by the table-of-contents engine.

Constants are organized by category:
1. Type Definitions - Literal types
2. Table of Contents Defaults - Budget and threshold
3. Rendering - Separator glyph and line-number widths
4. Heading Text Normalization - Invisible characters and underline glyphs
5. Environment Variables - Names read by the configuration layer
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

SizeMetric = Literal["characters", "bytes"]
OutputFormat = Literal["text", "json"]

# =============================================================================
# Table of Contents Defaults
# =============================================================================

# Maximum rendered outline size in UTF-8 bytes
DEFAULT_TOC_BUDGET = 4000

# Minimum document size before an outline is attempted
DEFAULT_TOC_THRESHOLD = 8000

DEFAULT_SIZE_METRIC: SizeMetric = "characters"
DEFAULT_OUTPUT_FORMAT: OutputFormat = "text"
DEFAULT_LOG_LEVEL = "WARNING"

# =============================================================================
# Rendering
# =============================================================================

# Never appears in ordinary heading text, so consumers can split on it
TOC_SEPARATOR = "→"

MIN_LINE_NUMBER_WIDTH = 3

# (exclusive upper bound, width) pairs checked in order
LINE_NUMBER_WIDTHS: tuple[tuple[int, int], ...] = (
    (100, 3),
    (1000, 4),
    (10000, 5),
)

# =============================================================================
# Heading Text Normalization
# =============================================================================

# Characters that ``str.strip`` keeps but that render as nothing, plus the
# pilcrow that documentation generators use for permalink anchors.
INVISIBLE_CHARS = frozenset(
    {
        "\u200b",  # ZERO WIDTH SPACE
        "\ufeff",  # ZERO WIDTH NO-BREAK SPACE
        "\u200c",  # ZERO WIDTH NON-JOINER
        "\u200d",  # ZERO WIDTH JOINER
        "\u00b6",  # PILCROW SIGN
    }
)

SETEXT_UNDERLINE_CHARS = frozenset("=-")

# =============================================================================
# Environment Variables
# =============================================================================

ENV_TOC_BUDGET = "MD2TOC_TOC_BUDGET"
ENV_TOC_THRESHOLD = "MD2TOC_TOC_THRESHOLD"
ENV_SIZE_METRIC = "MD2TOC_SIZE_METRIC"
ENV_LOG_LEVEL = "MD2TOC_LOG_LEVEL"
