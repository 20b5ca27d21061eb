#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/parsers/pdf.py
"""PyMuPDF-backed page source.

PyMuPDF reports coordinates with the origin at the top-left of the page.
This module flips them to the bottom-left origin the rest of the pipeline
uses (``y = page_height - y``), so that a larger ``y`` means higher on the
page, and converts PyMuPDF link dictionaries to ``LinkAnnotation`` objects.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Union

from pdfmd.constants import DEPS_PDF, INTERNAL_PAGE_MARKER, LINK_SUBTYPE, PDF_MIN_PYMUPDF_VERSION
from pdfmd.exceptions import DependencyError, MalformedFileError, PasswordProtectedError, ValidationError
from pdfmd.models import LinkAnnotation, Rectangle, TextRun
from pdfmd.parsers.base import PageSource
from pdfmd.utils.decorators import requires_dependencies
from pdfmd.utils.inputs import validate_and_convert_input

logger = logging.getLogger(__name__)

# Lines whose writing direction deviates more than this from horizontal are skipped
_HORIZONTAL_TOLERANCE = 1e-3


def _word_runs(chars: list[dict[str, Any]], page_height: float) -> list[TextRun]:
    """Split a span's ``rawdict`` characters into word runs.

    A new word starts at the first non-space character after whitespace;
    trailing whitespace stays with the preceding word.
    """
    words: list[list[dict[str, Any]]] = []
    for char in chars:
        if not words or (not char["c"].isspace() and words[-1][-1]["c"].isspace()):
            words.append([char])
        else:
            words[-1].append(char)

    runs = []
    for word in words:
        origin_x, origin_y = word[0]["origin"]
        text = "".join(char["c"] for char in word)
        width = word[-1]["bbox"][2] - word[0]["bbox"][0]
        runs.append(TextRun(text=text, x=origin_x, y=page_height - origin_y, width=width))
    return runs


def _check_pymupdf_version() -> None:
    """Check that the installed PyMuPDF meets the minimum version.

    Raises
    ------
    DependencyError
        If PyMuPDF is too old

    """
    import fitz

    min_version = tuple(map(int, PDF_MIN_PYMUPDF_VERSION.split(".")))
    installed = tuple(fitz.pymupdf_version_tuple)
    if installed < min_version:
        raise DependencyError(
            converter_name="pdf",
            missing_packages=[],
            version_mismatches=[("pymupdf", f">={PDF_MIN_PYMUPDF_VERSION}", ".".join(map(str, installed)))],
        )


def _read_stream(stream: IO[bytes]) -> bytes:
    if hasattr(stream, "seek"):
        stream.seek(0)
    content = stream.read()
    if isinstance(content, str):
        raise ValidationError(
            "PDF input stream must be opened in binary mode", parameter_name="input_data", parameter_value=stream
        )
    return content


class PyMuPDFPageSource(PageSource):
    """Page source reading text spans and links with PyMuPDF.

    Parameters
    ----------
    input_data : str, Path, IO[bytes], bytes or fitz.Document
        The PDF to read. An already opened document is used as is and is
        not closed by :meth:`close`.
    password : str or None, default None
        Password for encrypted documents

    Raises
    ------
    DependencyError
        If PyMuPDF is missing or too old
    FileNotFoundError
        If a path does not exist
    MalformedFileError
        If the input cannot be opened as a PDF
    PasswordProtectedError
        If the document is encrypted and no or a wrong password was given

    Examples
    --------
        >>> with PyMuPDFPageSource("report.pdf") as source:
        ...     runs = source.get_text_runs(1)

    """

    @requires_dependencies("pdf", DEPS_PDF)
    def __init__(self, input_data: Union[str, Path, IO[bytes], bytes, Any], password: str | None = None):
        import fitz

        _check_pymupdf_version()

        doc_input, input_type = validate_and_convert_input(input_data)
        self.filename = str(input_data) if isinstance(input_data, (str, Path)) else None
        self._owns_document = input_type != "object"

        if input_type == "object" and not isinstance(doc_input, fitz.Document):
            raise ValidationError(
                f"Expected fitz.Document object, got {type(doc_input).__name__}",
                parameter_name="input_data",
                parameter_value=doc_input,
            )

        try:
            if input_type == "path":
                doc = fitz.open(filename=str(doc_input))
            elif input_type in ("file", "bytes"):
                doc = fitz.open(stream=_read_stream(doc_input), filetype="pdf")
            else:
                doc = doc_input
        except ValidationError:
            raise
        except Exception as e:
            raise MalformedFileError(
                f"Failed to open PDF document: {e!r}", file_path=self.filename, original_error=e
            ) from e

        if doc.is_encrypted:
            if not password:
                self._close_document(doc)
                raise PasswordProtectedError(
                    message="PDF document is password-protected. Please provide a password using the 'password' option.",
                    filename=self.filename,
                )
            # authenticate() returns 0 on failure
            if doc.authenticate(password) == 0:
                self._close_document(doc)
                raise PasswordProtectedError(
                    message="Failed to authenticate PDF with provided password. Please check the password is correct.",
                    filename=self.filename,
                )

        self._doc = doc
        logger.debug(f"Opened PDF ({input_type}) with {doc.page_count} page(s)")

    def _close_document(self, doc: Any) -> None:
        if self._owns_document:
            doc.close()

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def _load_page(self, page_number: int) -> Any:
        if not 1 <= page_number <= self.page_count:
            raise ValidationError(
                f"Page {page_number} is out of range (1-{self.page_count})",
                parameter_name="page_number",
                parameter_value=page_number,
            )
        return self._doc.load_page(page_number - 1)

    def get_text_runs(self, page_number: int) -> list[TextRun]:
        """Return one run per word, positioned at its first glyph's baseline origin.

        Words are cut from the characters of ``rawdict`` spans and keep the
        whitespace that follows them, so a link rectangle over part of a
        line only matches the words it covers. Spans of vertical or rotated
        lines are skipped.
        """
        page = self._load_page(page_number)
        height = page.rect.height
        text_dict = page.get_text("rawdict")

        runs: list[TextRun] = []
        for block in text_dict.get("blocks", []):
            if block.get("type", 0) != 0:
                continue
            for line in block.get("lines", []):
                dx, dy = line.get("dir", (1.0, 0.0))
                if dx <= 0 or abs(dy) > _HORIZONTAL_TOLERANCE:
                    continue
                for span in line.get("spans", []):
                    runs.extend(_word_runs(span.get("chars", []), height))

        return runs

    def get_link_annotations(self, page_number: int) -> list[LinkAnnotation]:
        """Convert the page's PyMuPDF links to annotations.

        URI links carry a ``url``. Go-to links within the document carry a
        ``#page-N`` destination and named destinations a ``#name`` one.
        Links to other files and launch actions are ignored.
        """
        import fitz

        page = self._load_page(page_number)
        height = page.rect.height

        annotations: list[LinkAnnotation] = []
        for link in page.get_links():
            r = link["from"]
            rect = Rectangle.from_points(r.x0, height - r.y1, r.x1, height - r.y0)
            kind = link.get("kind")

            if kind == fitz.LINK_URI and link.get("uri"):
                annotations.append(LinkAnnotation(rect=rect, url=link["uri"], subtype=LINK_SUBTYPE))
            elif kind == fitz.LINK_GOTO and link.get("page", -1) >= 0:
                destination = INTERNAL_PAGE_MARKER.format(page=link["page"] + 1)
                annotations.append(LinkAnnotation(rect=rect, destination=destination, subtype=LINK_SUBTYPE))
            elif kind == fitz.LINK_NAMED and (link.get("nameddest") or link.get("name")):
                destination = f"#{link.get('nameddest') or link.get('name')}"
                annotations.append(LinkAnnotation(rect=rect, destination=destination, subtype=LINK_SUBTYPE))
            else:
                logger.debug(f"Ignoring link of kind {kind} on page {page_number}")

        return annotations

    def close(self) -> None:
        self._close_document(self._doc)
