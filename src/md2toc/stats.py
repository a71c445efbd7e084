#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2toc/stats.py
"""Document size statistics."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from md2toc.constants import SizeMetric


@dataclass(frozen=True)
class DocumentStats:
    """Line, word, character and byte counts of a document."""

    lines: int
    words: int
    characters: int
    bytes: int

    def size(self, metric: SizeMetric) -> int:
        """Return the measurement named by ``metric``."""
        if metric == "bytes":
            return self.bytes
        return self.characters

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def count_stats(content: str) -> DocumentStats:
    """Count lines, words, characters and UTF-8 bytes.

    Lines are ``\\n`` separated; a final line ending does not start another
    line, so ``"a\\nb\\n"`` has two lines and ``""`` has none.

    Examples
    --------
    >>> count_stats("Line 1\\nLine 2\\nLine 3")
    DocumentStats(lines=3, words=6, characters=20, bytes=20)

    """
    lines = content.count("\n")
    if content and not content.endswith("\n"):
        lines += 1

    return DocumentStats(
        lines=lines,
        words=len(content.split()),
        characters=len(content),
        bytes=len(content.encode("utf-8")),
    )
