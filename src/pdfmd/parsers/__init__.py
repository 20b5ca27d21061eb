#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/pdfmd/parsers/__init__.py
"""Page sources and the per-page extraction steps.

- ``PageSource``: abstract access to a document's pages
- ``PyMuPDFPageSource``: page source backed by PyMuPDF (requires ``pymupdf``)
- ``extract_lines`` / ``lines_to_text``: reading-order line reconstruction
- ``locate_links``: association of link annotations with text runs

"""

from pdfmd.parsers._pdf_links import combine_text, link_target, locate_links
from pdfmd.parsers._pdf_text import estimate_width, extract_lines, group_runs_into_lines, lines_to_text
from pdfmd.parsers.base import PageSource
from pdfmd.parsers.pdf import PyMuPDFPageSource

__all__ = [
    "PageSource",
    "PyMuPDFPageSource",
    "combine_text",
    "estimate_width",
    "extract_lines",
    "group_runs_into_lines",
    "lines_to_text",
    "link_target",
    "locate_links",
]
