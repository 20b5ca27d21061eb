"""pdfmd - convert PDF documents to Markdown.

pdfmd reconstructs the reading order of a PDF page from positioned text runs,
recognizes headers and list items with simple line-shape rules, rejoins
hard-wrapped paragraphs and turns PDF link annotations into inline Markdown
links.

The pipeline has four stages:

- **Page text extraction**: text runs are grouped into lines by baseline and
  joined with reconstructed spacing (``pdfmd.parsers.extract_lines``)
- **Link location**: link rectangles are matched against the runs they cover
  and split runs are merged (``pdfmd.parsers.locate_links``)
- **Markdown formatting**: header and list detection, paragraph reflow and
  link splicing (``pdfmd.renderers.format_page``)
- **Document assembly**: pages joined in order (``pdfmd.renderers.assemble``)

Requirements
------------
- Python 3.10+
- PyMuPDF for reading PDF files

Examples
--------
    >>> from pdfmd import convert
    >>> markdown = convert("document.pdf")

With options:

    >>> from pdfmd import PdfOptions, PdfToMarkdown
    >>> converter = PdfToMarkdown(PdfOptions(preserve_links=False, pages="1-3"))
    >>> markdown = converter.convert("document.pdf", output="document.md")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/__init__.py
import sys

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"pdfmd requires Python 3.10 or later. You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from pdfmd.converter import PdfToMarkdown, convert, render_page  # noqa: E402
from pdfmd.exceptions import (  # noqa: E402
    DependencyError,
    FileError,
    MalformedFileError,
    OutputWriteError,
    PageExtractionError,
    PageRangeError,
    ParsingError,
    PasswordProtectedError,
    PdfMdError,
    RenderingError,
    ValidationError,
)
from pdfmd.models import (  # noqa: E402
    CandidateLink,
    Line,
    LinkAnnotation,
    LinkPosition,
    PageContent,
    PageData,
    Rectangle,
    TextRun,
)
from pdfmd.options import LayoutOptions, MarkdownOptions, PdfOptions  # noqa: E402
from pdfmd.parsers import PageSource, PyMuPDFPageSource, extract_lines, locate_links  # noqa: E402
from pdfmd.progress import ProgressCallback, ProgressEvent  # noqa: E402
from pdfmd.renderers import assemble, format_document, format_page  # noqa: E402

__all__ = [
    "__version__",
    # Conversion
    "PdfToMarkdown",
    "convert",
    "render_page",
    # Pipeline stages
    "assemble",
    "extract_lines",
    "format_document",
    "format_page",
    "locate_links",
    # Data model
    "CandidateLink",
    "Line",
    "LinkAnnotation",
    "LinkPosition",
    "PageContent",
    "PageData",
    "Rectangle",
    "TextRun",
    # Page sources
    "PageSource",
    "PyMuPDFPageSource",
    # Options
    "LayoutOptions",
    "MarkdownOptions",
    "PdfOptions",
    # Progress
    "ProgressCallback",
    "ProgressEvent",
    # Exceptions
    "DependencyError",
    "FileError",
    "MalformedFileError",
    "OutputWriteError",
    "PageExtractionError",
    "PageRangeError",
    "ParsingError",
    "PasswordProtectedError",
    "PdfMdError",
    "RenderingError",
    "ValidationError",
]
