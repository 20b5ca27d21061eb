#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for pdfmd.

Options are frozen dataclasses; derive a modified copy with
``options.create_updated(**changes)``.
"""

from pdfmd.options.base import BaseParserOptions, CloneFrozenMixin
from pdfmd.options.markdown import MarkdownOptions
from pdfmd.options.pdf import LayoutOptions, PdfOptions

__all__ = [
    "BaseParserOptions",
    "CloneFrozenMixin",
    "LayoutOptions",
    "MarkdownOptions",
    "PdfOptions",
]
