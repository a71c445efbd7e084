#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2toc/options.py
"""Configuration values for table-of-contents generation.

Options are frozen dataclasses passed explicitly into every call; there is
no process-wide state. Use ``create_updated`` to derive modified copies.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from md2toc.constants import DEFAULT_TOC_BUDGET, DEFAULT_TOC_THRESHOLD


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class TocConfig(CloneFrozenMixin):
    """Budget and threshold controlling outline generation.

    Parameters
    ----------
    toc_budget : int, default 4000
        Maximum size of the rendered outline in UTF-8 bytes. The deepest
        heading level whose outline fits is selected.
    full_content_threshold : int, default 8000
        Minimum document size for an outline to be attempted. Smaller
        documents get none. The size is measured by the caller (see
        ``generate_toc``).

    Examples
    --------
    >>> config = TocConfig(toc_budget=2000)
    >>> config.create_updated(full_content_threshold=0).full_content_threshold
    0

    """

    toc_budget: int = field(
        default=DEFAULT_TOC_BUDGET,
        metadata={"help": "Maximum table of contents size in bytes", "type": int},
    )
    full_content_threshold: int = field(
        default=DEFAULT_TOC_THRESHOLD,
        metadata={"help": "Minimum document size to generate a table of contents", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field is not a non-negative integer.

        """
        for name in ("toc_budget", "full_content_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
