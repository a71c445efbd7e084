"""Command-line interface for md2toc.

Reads markdown documents and prints their line-numbered table of contents.

Examples
--------
Outline of a document::

    $ md2toc docs/guide.md

Per-file records with statistics::

    $ md2toc docs/*.md --format json

Smaller budget, no size gate::

    $ md2toc README.md --toc-budget 1000 --toc-threshold 0

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from md2toc.config import CLIConfig, create_argument_parser, load_config_from_args
from md2toc.exceptions import (
    DependencyError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    Md2TocError,
    ValidationError,
)
from md2toc.logging_utils import configure_logging
from md2toc.stats import DocumentStats, count_stats
from md2toc.toc import generate_toc

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

STDIN_PATH = "-"


@dataclass(frozen=True)
class FileReport:
    """Statistics and table of contents of one input document."""

    path: str
    stats: DocumentStats
    table_of_contents: str | None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict, omitting a missing table of contents."""
        record: dict[str, Any] = {"path": self.path, **self.stats.to_dict()}
        if self.table_of_contents is not None:
            record["table_of_contents"] = self.table_of_contents
        return record


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code."""
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    return EXIT_ERROR


def check_rich_available() -> bool:
    """Check if Rich library is available."""
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def read_markdown(path: str) -> str:
    """Read a markdown document as UTF-8.

    Parameters
    ----------
    path : str
        File path, or ``"-"`` for standard input

    Returns
    -------
    str
        Document text

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be read or is not valid UTF-8

    """
    if path == STDIN_PATH:
        return sys.stdin.read()

    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(path)

    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FileAccessError(path, message=f"File is not valid UTF-8: {path}", original_error=e) from e
    except OSError as e:
        raise FileAccessError(path, original_error=e) from e


def build_report(path: str, content: str, config: CLIConfig) -> FileReport:
    """Compute statistics and the table of contents for one document."""
    stats = count_stats(content)
    toc = generate_toc(content, stats.size(config.size_metric), config.toc)
    if toc is None:
        logger.info("No table of contents for %s", path)
    return FileReport(path=path, stats=stats, table_of_contents=toc)


def _print_text(reports: list[FileReport]) -> None:
    with_headers = len(reports) > 1
    printed = False
    for report in reports:
        if report.table_of_contents is None:
            continue
        if with_headers:
            if printed:
                print()
            print(f"==> {report.path} <==")
        print(report.table_of_contents)
        printed = True


def _print_rich(reports: list[FileReport]) -> None:
    if not check_rich_available():
        raise DependencyError(
            feature_name="Rich output",
            missing_packages=[("rich", "")],
            message="Rich output requires the optional 'rich' dependency. Install with: pip install md2toc[rich]",
        )

    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console()
    for report in reports:
        if report.table_of_contents is None:
            continue
        subtitle = f"{report.stats.lines} lines, {report.stats.words} words"
        console.print(Panel(Text(report.table_of_contents), title=Text(report.path), subtitle=subtitle, expand=False))


def _print_json(reports: list[FileReport]) -> None:
    print(json.dumps([report.to_dict() for report in reports], indent=2, ensure_ascii=False))


def main(args: list[str] | None = None) -> int:
    """Execute the md2toc command-line interface."""
    parser = create_argument_parser()
    parsed_args = parser.parse_args(args)

    try:
        config = load_config_from_args(parsed_args)
    except ValidationError as e:
        configure_logging(logging.WARNING)
        logger.error(e.message)
        return EXIT_VALIDATION_ERROR

    configure_logging(config.log_level, log_file=config.log_file, trace_mode=config.trace)

    paths = parsed_args.input or [STDIN_PATH]
    reports: list[FileReport] = []
    exit_code = EXIT_SUCCESS

    try:
        for path in paths:
            try:
                content = read_markdown(path)
            except FileError as e:
                logger.error(e.message)
                exit_code = get_exit_code_for_exception(e)
                continue

            reports.append(build_report(path, content, config))

        if config.output_format == "json":
            _print_json(reports)
        elif config.rich:
            _print_rich(reports)
        else:
            _print_text(reports)
    except Md2TocError as e:
        logger.error(e.message)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=config.trace)
        return EXIT_ERROR

    return exit_code
