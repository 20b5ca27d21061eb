#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/pdfmd/renderers/__init__.py
"""Markdown rendering for reconstructed PDF text.

The formatter classifies lines with small replaceable rules (headers, bullet
and numbered list items), reflows hard-wrapped prose, splices candidate
links into the text and joins the pages into a single document.

Examples
--------
Format one page and assemble a document:

    >>> from pdfmd.renderers import assemble, format_page
    >>> page = format_page("INTRODUCTION\\nSome text\\nthat wraps")
    >>> page
    '## INTRODUCTION\\n\\nSome text that wraps'
    >>> assemble([page, "Second page"])
    '## INTRODUCTION\\n\\nSome text that wraps\\n\\n---\\n\\nSecond page'

"""

from pdfmd.renderers._line_rules import LineClass, LineClassifier, LineKind, classify_line
from pdfmd.renderers.markdown import (
    assemble,
    format_document,
    format_heading,
    format_page,
    format_structure,
    reflow,
    splice_links,
)

__all__ = [
    "LineClass",
    "LineClassifier",
    "LineKind",
    "assemble",
    "classify_line",
    "format_document",
    "format_heading",
    "format_page",
    "format_structure",
    "reflow",
    "splice_links",
]
