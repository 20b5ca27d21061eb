#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Allow running pdfmd as a module: ``python -m pdfmd``."""

import sys

from pdfmd.cli import main

if __name__ == "__main__":
    sys.exit(main())
