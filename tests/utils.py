"""Test utilities for the pdfmd test suite.

This module provides an in-memory page source, helpers for building text
runs and link annotations, and a PyMuPDF-based PDF builder for integration
tests.
"""

import tempfile
from pathlib import Path
from typing import Optional

from pdfmd.models import LinkAnnotation, Rectangle, TextRun
from pdfmd.parsers.base import PageSource


class FakePageSource(PageSource):
    """Page source backed by lists of runs and annotations.

    Parameters
    ----------
    pages : list of list of TextRun
        Runs per page, page 1 first
    annotations : list of list of LinkAnnotation, optional
        Annotations per page
    failing_pages : dict, optional
        1-based page number -> exception raised by ``get_text_runs``
    failing_links : dict, optional
        1-based page number -> exception raised by ``get_link_annotations``

    """

    def __init__(
        self,
        pages: list,
        annotations: Optional[list] = None,
        failing_pages: Optional[dict] = None,
        failing_links: Optional[dict] = None,
    ):
        self.pages = pages
        self.annotations = annotations or [[] for _ in pages]
        self.failing_pages = failing_pages or {}
        self.failing_links = failing_links or {}
        self.closed = False
        self.text_requests: list[int] = []

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def get_text_runs(self, page_number: int) -> list:
        self.text_requests.append(page_number)
        if page_number in self.failing_pages:
            raise self.failing_pages[page_number]
        return list(self.pages[page_number - 1])

    def get_link_annotations(self, page_number: int) -> list:
        if page_number in self.failing_links:
            raise self.failing_links[page_number]
        return list(self.annotations[page_number - 1])

    def close(self) -> None:
        self.closed = True


def make_line_runs(lines: list[str], top: float = 700.0, line_height: float = 14.0, x: float = 72.0) -> list[TextRun]:
    """Build one run per line, top line first, with decreasing baselines."""
    return [TextRun(text=text, x=x, y=top - index * line_height) for index, text in enumerate(lines)]


def link_over(x: float, y: float, text: str, url: str, char_width: float = 8.0) -> LinkAnnotation:
    """Build a link annotation covering ``text`` drawn at (x, y)."""
    rect = Rectangle.from_points(x, y - 2, x + len(text) * char_width, y + 10)
    return LinkAnnotation(rect=rect, url=url)


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    import shutil

    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def create_pdf_document(pages: list[list[str]], links: Optional[dict] = None, password: Optional[str] = None) -> bytes:
    """Create a PDF with PyMuPDF and return its bytes.

    Parameters
    ----------
    pages : list of list of str
        Lines of text per page, drawn top to bottom
    links : dict, optional
        ``(page_number, line_index) -> uri or int``. A string adds a URI link
        over the line, an int a link to that 1-based page. A ``(target, phrase)``
        tuple covers only the first occurrence of ``phrase`` in the line.
    password : str, optional
        Encrypt the document with this user password

    """
    import fitz

    links = links or {}
    doc = fitz.open()
    for _ in pages:
        doc.new_page(width=612, height=792)

    for page_number, lines in enumerate(pages, start=1):
        page = doc[page_number - 1]
        for index, text in enumerate(lines):
            baseline = 72 + index * 20
            page.insert_text((72, baseline), text, fontsize=11, fontname="helv")
            target = links.get((page_number, index))
            if target is None:
                continue
            if isinstance(target, tuple):
                target, phrase = target
                offset = fitz.get_text_length(text[: text.index(phrase)], fontname="helv", fontsize=11)
                width = fitz.get_text_length(phrase, fontname="helv", fontsize=11)
                rect = fitz.Rect(71.5 + offset, baseline - 11, 72 + offset + width, baseline + 3)
            else:
                width = fitz.get_text_length(text, fontname="helv", fontsize=11)
                rect = fitz.Rect(70, baseline - 11, 74 + width, baseline + 3)
            if isinstance(target, int):
                page.insert_link({"kind": fitz.LINK_GOTO, "from": rect, "page": target - 1, "to": fitz.Point(0, 0)})
            else:
                page.insert_link({"kind": fitz.LINK_URI, "from": rect, "uri": target})

    if password:
        data = doc.tobytes(encryption=fitz.PDF_ENCRYPT_AES_256, user_pw=password, owner_pw=password + "-owner")
    else:
        data = doc.tobytes()
    doc.close()
    return data
