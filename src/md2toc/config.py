"""Configuration management for the md2toc command-line interface.

This module handles configuration from environment variables and CLI
arguments, with CLI arguments taking precedence over environment variables.

Environment Variables
---------------------
MD2TOC_TOC_BUDGET       Maximum table of contents size in bytes (default: 4000)
MD2TOC_TOC_THRESHOLD    Minimum document size to generate a table of contents (default: 8000)
MD2TOC_SIZE_METRIC      Measurement compared against the threshold: characters or bytes
MD2TOC_LOG_LEVEL        Logging level (default: WARNING)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from typing import cast, get_args

from md2toc.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_SIZE_METRIC,
    ENV_LOG_LEVEL,
    ENV_SIZE_METRIC,
    ENV_TOC_BUDGET,
    ENV_TOC_THRESHOLD,
    OutputFormat,
    SizeMetric,
)
from md2toc.exceptions import ValidationError
from md2toc.options import CloneFrozenMixin, TocConfig

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CLIConfig(CloneFrozenMixin):
    """Resolved command-line configuration.

    Attributes
    ----------
    toc : TocConfig
        Budget and threshold passed to ``generate_toc``
    size_metric : {"characters", "bytes"}
        Measurement of each input compared against the threshold
    output_format : {"text", "json"}
        Plain outlines or JSON file records
    rich : bool
        Render text output with rich
    log_level : str
        Logging level (DEBUG|INFO|WARNING|ERROR|CRITICAL)
    log_file : str or None
        Optional file receiving log output as well as stderr
    trace : bool
        Timestamped log format with logger names

    """

    toc: TocConfig = field(default_factory=TocConfig)
    size_metric: SizeMetric = DEFAULT_SIZE_METRIC
    output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT
    rich: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str | None = None
    trace: bool = False


def _parse_non_negative_int(value: str | int | None, name: str, default: int) -> int:
    """Parse a non-negative integer setting.

    Parameters
    ----------
    value : str, int or None
        Raw value from the environment or CLI
    name : str
        Setting name used in error messages
    default : int
        Value used when ``value`` is None

    Returns
    -------
    int
        Parsed value

    Raises
    ------
    ValidationError
        If the value is not a non-negative integer

    """
    if value is None:
        return default

    try:
        parsed = int(str(value).strip())
    except ValueError as e:
        raise ValidationError(
            f"Invalid {name}: {value!r}. Must be a non-negative integer", parameter_name=name, parameter_value=value
        ) from e

    if parsed < 0:
        raise ValidationError(
            f"Invalid {name}: {value!r}. Must be a non-negative integer", parameter_name=name, parameter_value=value
        )
    return parsed


def _validate_log_level(value: str | None, default: str = DEFAULT_LOG_LEVEL) -> str:
    """Validate and normalize log level string.

    Raises
    ------
    ValidationError
        If value is not a valid log level

    """
    if value is None:
        return default

    normalized = value.upper().strip()
    if normalized not in _VALID_LOG_LEVELS:
        raise ValidationError(
            f"Invalid log level: {value!r}. Must be one of: {', '.join(_VALID_LOG_LEVELS)}",
            parameter_name="log_level",
            parameter_value=value,
        )
    return normalized


def _validate_size_metric(value: str | None, default: SizeMetric = DEFAULT_SIZE_METRIC) -> SizeMetric:
    """Validate and normalize size metric string.

    Raises
    ------
    ValidationError
        If value is not a known metric

    """
    if value is None:
        return default

    normalized = value.lower().strip()
    valid_metrics = get_args(SizeMetric)
    if normalized not in valid_metrics:
        raise ValidationError(
            f"Invalid size metric: {value!r}. Must be one of: {', '.join(valid_metrics)}",
            parameter_name="size_metric",
            parameter_value=value,
        )
    return cast(SizeMetric, normalized)


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables.

    Returns
    -------
    CLIConfig
        Configuration loaded from environment

    Raises
    ------
    ValidationError
        If an environment variable holds an invalid value

    """
    defaults = TocConfig()
    toc = TocConfig(
        toc_budget=_parse_non_negative_int(os.getenv(ENV_TOC_BUDGET), ENV_TOC_BUDGET, defaults.toc_budget),
        full_content_threshold=_parse_non_negative_int(
            os.getenv(ENV_TOC_THRESHOLD), ENV_TOC_THRESHOLD, defaults.full_content_threshold
        ),
    )

    return CLIConfig(
        toc=toc,
        size_metric=_validate_size_metric(os.getenv(ENV_SIZE_METRIC)),
        log_level=_validate_log_level(os.getenv(ENV_LOG_LEVEL)),
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for the md2toc CLI.

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser

    """
    parser = argparse.ArgumentParser(
        prog="md2toc",
        description="Print a line-numbered table of contents for markdown documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  MD2TOC_TOC_BUDGET       Maximum table of contents size in bytes (default: 4000)
  MD2TOC_TOC_THRESHOLD    Minimum document size to generate a table of contents (default: 8000)
  MD2TOC_SIZE_METRIC      Measurement compared against the threshold: characters, bytes
                          (default: characters)
  MD2TOC_LOG_LEVEL        Logging level (default: WARNING)

Examples:
  # Outline of a single document
  md2toc docs/guide.md

  # Always produce an outline, however small the document
  md2toc README.md --toc-threshold 0

  # JSON records with line/word/character counts
  cat page.md | md2toc --format json
        """,
    )

    try:
        version_string = f'md2toc {version("md2toc")}'
    except PackageNotFoundError:
        version_string = "md2toc (version unknown)"

    parser.add_argument("--version", action="version", version=version_string)

    parser.add_argument(
        "input", nargs="*", metavar="FILE", help="Markdown files to read ('-' or nothing for standard input)"
    )

    parser.add_argument("--toc-budget", type=str, metavar="BYTES", help="Maximum table of contents size in bytes")
    parser.add_argument(
        "--toc-threshold", type=str, metavar="SIZE", help="Minimum document size to generate a table of contents"
    )
    parser.add_argument(
        "--size-metric",
        type=str,
        choices=list(get_args(SizeMetric)),
        help="Measurement compared against the threshold (default: characters)",
    )

    parser.add_argument(
        "--format",
        dest="output_format",
        choices=list(get_args(OutputFormat)),
        help="Output format: plain outlines or JSON file records (default: text)",
    )
    parser.add_argument("--rich", action="store_true", default=None, help="Render text output with rich formatting")

    parser.add_argument(
        "--log-level", type=str, help="Logging level: DEBUG, INFO, WARNING, ERROR (case-insensitive, default: WARNING)"
    )
    parser.add_argument("--log-file", type=str, metavar="PATH", help="Also write log output to this file")
    parser.add_argument(
        "--trace", action="store_true", help="Debug logging with timestamps and logger names (implies DEBUG)"
    )

    return parser


def load_config_from_args(args: argparse.Namespace) -> CLIConfig:
    """Load configuration from parsed CLI arguments, using env as fallback.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments

    Returns
    -------
    CLIConfig
        Merged configuration (CLI overrides env)

    Raises
    ------
    ValidationError
        If any value is invalid

    """
    config = load_config_from_env()

    toc_kwargs: dict[str, int] = {}
    if args.toc_budget is not None:
        toc_kwargs.update(toc_budget=_parse_non_negative_int(args.toc_budget, "--toc-budget", 0))
    if args.toc_threshold is not None:
        toc_kwargs.update(
            full_content_threshold=_parse_non_negative_int(args.toc_threshold, "--toc-threshold", 0)
        )

    updated_kwargs: dict[str, object] = {}
    if toc_kwargs:
        updated_kwargs.update(toc=config.toc.create_updated(**toc_kwargs))

    if args.size_metric is not None:
        updated_kwargs.update(size_metric=_validate_size_metric(args.size_metric))

    if args.output_format is not None:
        updated_kwargs.update(output_format=args.output_format)

    if args.rich is not None:
        updated_kwargs.update(rich=args.rich)

    if args.log_level is not None:
        updated_kwargs.update(log_level=_validate_log_level(args.log_level))

    if args.log_file is not None:
        updated_kwargs.update(log_file=args.log_file)

    if args.trace:
        updated_kwargs.update(trace=True, log_level="DEBUG")

    if updated_kwargs:
        config = config.create_updated(**updated_kwargs)

    logger.debug("Resolved configuration: %s", config)
    return config
