#!/usr/bin/env python3
"""Entry point for running md2toc as a module.

This allows the package to be executed as:
    python -m md2toc [arguments]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
