"""Pytest configuration and shared fixtures for the md2toc test suite.

This module provides shared fixtures, test configuration, and markers
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding markdown documents used by integration tests."""
    return FIXTURES_DIR


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level changed by ``configure_logging``.

    Yields
    ------
    logging.Logger
        The root logger

    """
    root_logger = logging.getLogger()
    level = root_logger.level
    try:
        yield root_logger
    finally:
        # Only the plain handlers installed by configure_logging, pytest manages its own
        for handler in list(root_logger.handlers):
            if type(handler) in (logging.StreamHandler, logging.FileHandler):
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(level)


@pytest.fixture
def sample_markdown() -> str:
    """Provide a small document exercising headings, anchors and code blocks.

    Returns
    -------
    str
        Markdown with ATX and setext headings, permalink anchors and a fenced
        code block containing a fake heading.

    """
    return """# Sample Document [](#sample-document)

Intro paragraph with **bold** text.

## Installation [¶](#installation)

```bash
# not a heading
pip install md2toc
```

Usage
-----

### Options

Some options.
"""
