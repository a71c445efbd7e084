#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2toc/logging_utils.py
"""Logging setup for the md2toc command-line interface."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_CONSOLE_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, log_level.upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send md2toc log records to stderr and, optionally, a log file.

    Handlers already attached to the root logger are replaced, so the CLI can
    call this once with a default level and again after its configuration
    has been loaded.

    Parameters
    ----------
    log_level : int | str
        Numeric level or level name such as ``"INFO"``
    log_file : str, optional
        File that receives a copy of every record (appended to)
    trace_mode : bool, default False
        Prefix records with a timestamp and the logger name

    Returns
    -------
    logging.Logger
        The root logger

    """
    if trace_mode:
        formatter = logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(_CONSOLE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(log_level))
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if file_error is not None:
        root_logger.warning("Could not open log file %s: %s", log_file, file_error)
    elif log_file:
        root_logger.info("Logging to file: %s", log_file)

    return root_logger
