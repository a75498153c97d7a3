"""
Entry point for the asl_semantics package.

This allows the package to be executed as:
    python -m asl_semantics [file]
"""

import sys

from .analyzer_main import main

if __name__ == "__main__":
    sys.exit(main())
