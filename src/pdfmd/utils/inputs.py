"""Input validation helpers.

These helpers accept the input shapes the converter supports (file paths,
raw bytes, binary file-like objects and already opened documents) and
normalize page selections given as lists or range strings.

Functions
---------
- validate_and_convert_input: Validate an input and classify its kind
- validate_page_range: Normalize a page selection to 0-based indices
- parse_page_ranges: Parse a range string such as ``"1-3,5,10-"``
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/utils/inputs.py
from __future__ import annotations

import os
from io import BytesIO
from pathlib import Path
from typing import IO, Any, Union

from pdfmd.exceptions import FileNotFoundError as PdfMdFileNotFoundError
from pdfmd.exceptions import PageRangeError, ValidationError

PathLike = Union[str, Path]
InputType = Union[PathLike, IO[bytes], bytes, Any]


def is_path_like(obj: Any) -> bool:
    """Check if an object is a string or ``pathlib.Path``."""
    return isinstance(obj, (str, Path))


def is_file_like(obj: Any) -> bool:
    """Check if an object has a callable ``read`` method."""
    return hasattr(obj, "read") and callable(obj.read)


def validate_and_convert_input(input_data: InputType) -> tuple[Any, str]:
    """Validate input and convert it to a form the page source can open.

    Parameters
    ----------
    input_data : str, Path, bytes, IO[bytes] or document object
        The PDF to convert

    Returns
    -------
    tuple[Any, str]
        ``(converted_input, kind)`` where kind is one of ``"path"``,
        ``"bytes"``, ``"file"`` or ``"object"``. Bytes are wrapped in a
        ``BytesIO``.

    Raises
    ------
    FileNotFoundError
        If a path does not exist
    ValidationError
        If a path is not a regular file, a stream is in text mode, or the
        input is empty or of an unsupported type

    Examples
    --------
    >>> data, kind = validate_and_convert_input(b"%PDF-1.7 ...")
    >>> kind
    'bytes'

    """
    if is_path_like(input_data):
        path_str = str(input_data)
        if not os.path.exists(path_str):
            raise PdfMdFileNotFoundError(file_path=path_str)
        if not os.path.isfile(path_str):
            raise ValidationError(
                f"Path is not a file: {path_str}", parameter_name="input_data", parameter_value=input_data
            )
        return input_data, "path"

    if isinstance(input_data, (bytes, bytearray)):
        if not input_data:
            raise ValidationError("Input bytes are empty", parameter_name="input_data", parameter_value=input_data)
        return BytesIO(bytes(input_data)), "bytes"

    if is_file_like(input_data):
        mode = getattr(input_data, "mode", None)
        if isinstance(mode, str) and "b" not in mode:
            raise ValidationError(
                f"File must be opened in binary mode, got mode: {mode}",
                parameter_name="input_data",
                parameter_value=input_data,
            )
        return input_data, "file"

    # Opened documents (e.g. a PyMuPDF Document) are used as they are
    if hasattr(input_data, "page_count") or hasattr(input_data, "load_page"):
        return input_data, "object"

    raise ValidationError(
        f"Unsupported input type: {type(input_data).__name__}. Supported types: path-like, file-like, bytes",
        parameter_name="input_data",
        parameter_value=input_data,
    )


def _check_page_number(page_num: Any, max_pages: int | None, selection: Any) -> int:
    """Return the 0-based index of one 1-based page number, or raise PageRangeError."""
    if isinstance(page_num, bool) or not isinstance(page_num, int):
        raise PageRangeError(
            f"Page numbers must be integers, got {type(page_num).__name__}: {page_num!r}", parameter_value=selection
        )
    if page_num < 1:
        raise PageRangeError(f"Page numbers start at 1, got {page_num}", parameter_value=selection)
    if max_pages is not None and page_num > max_pages:
        raise PageRangeError(
            f"Page {page_num} does not exist. Document has {max_pages} pages (1-{max_pages}).",
            parameter_value=selection,
        )
    return page_num - 1


def validate_page_range(pages: list[int] | str | None, max_pages: int | None = None) -> list[int] | None:
    """Validate and normalize a page selection.

    Parameters
    ----------
    pages : list[int], str, or None
        1-based pages to keep, e.g. ``[1, 2]`` or ``"1-3,5,10-"``; None keeps all
    max_pages : int or None, optional
        Page count of the document; required for range strings

    Returns
    -------
    list[int] or None
        Sorted, de-duplicated 0-based indices, or None if ``pages`` was None

    Raises
    ------
    PageRangeError
        If the selection is not a list or string, a page number is not an
        integer, is below 1 or exceeds the page count, or a range string
        selects no pages. Strings and lists are held to the same bounds.

    Examples
    --------
    >>> validate_page_range([3, 1], max_pages=5)
    [0, 2]
    >>> validate_page_range("1-3,5", max_pages=10)
    [0, 1, 2, 4]

    """
    if pages is None:
        return None

    if isinstance(pages, str):
        if max_pages is None:
            raise PageRangeError("A page range string needs the document's page count", parameter_value=pages)
        try:
            ranges = [_expand_range(part, max_pages) for part in _range_parts(pages)]
        except ValueError as e:
            raise PageRangeError(
                f"Invalid page range format {pages!r} ({e}); expected e.g. '1-3,5,10-'", parameter_value=pages
            ) from e
        if not any(ranges):
            raise PageRangeError(f"Page range {pages!r} selects no pages", parameter_value=pages)
        return sorted({_check_page_number(index + 1, max_pages, pages) for span in ranges for index in span})

    if not isinstance(pages, (list, tuple)):
        raise PageRangeError(
            f"pages must be a list of page numbers or a range string, not {type(pages).__name__}",
            parameter_value=pages,
        )

    return sorted({_check_page_number(page_num, max_pages, pages) for page_num in pages})


def _range_parts(page_spec: str) -> list[str]:
    return [piece.strip() for piece in page_spec.split(",") if piece.strip()]


def _expand_range(part: str, total_pages: int) -> range:
    """Expand ``"a-b"``, ``"a-"``, ``"-b"`` or ``"n"`` to a range of 0-based indices."""
    if "-" not in part:
        index = int(part) - 1
        return range(index, index + 1)

    first, _, last = (piece.strip() for piece in part.partition("-"))
    start = int(first) if first else 1
    stop = int(last) if last else total_pages
    low, high = sorted((start, stop))
    return range(low - 1, high)


def parse_page_ranges(page_spec: str, total_pages: int) -> list[int]:
    """Parse a page range string into sorted 0-based indices.

    Reversed ranges are swapped and pages beyond the document are dropped.

    Raises
    ------
    ValueError
        If a part is not a number or range

    Examples
    --------
    >>> parse_page_ranges("1-3,5", 10)
    [0, 1, 2, 4]
    >>> parse_page_ranges("8-", 10)
    [7, 8, 9]
    >>> parse_page_ranges("10-5", 10)
    [4, 5, 6, 7, 8, 9]

    """
    selected: set[int] = set()
    for part in _range_parts(page_spec):
        selected.update(index for index in _expand_range(part, total_pages) if 0 <= index < total_pages)
    return sorted(selected)
