#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/utils/__init__.py
"""Utility modules for the pdfmd package.

This package contains input validation, output writing and dependency
checking helpers shared by the converter and the command line interface.
"""

from pdfmd.utils.inputs import parse_page_ranges, validate_and_convert_input, validate_page_range
from pdfmd.utils.io_utils import sanitize_filename, sanitize_output_path, write_markdown

__all__ = [
    "parse_page_ranges",
    "sanitize_filename",
    "sanitize_output_path",
    "validate_and_convert_input",
    "validate_page_range",
    "write_markdown",
]
