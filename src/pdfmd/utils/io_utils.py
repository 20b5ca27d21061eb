#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/utils/io_utils.py
"""Output helpers for writing Markdown.

Output file paths are sanitized before anything is written: the file name is
reduced to safe characters and parent-directory references are rejected, so
a caller-supplied name cannot escape the intended directory.

"""

from __future__ import annotations

import io
import logging
import re
import unicodedata
from io import StringIO
from pathlib import Path
from typing import IO, Union, cast

from pdfmd.exceptions import ValidationError

logger = logging.getLogger(__name__)

OutputType = Union[str, Path, IO[str], IO[bytes]]

_WINDOWS_RESERVED = frozenset(
    {"con", "prn", "aux", "nul"} | {f"com{i}" for i in range(1, 10)} | {f"lpt{i}" for i in range(1, 10)}
)


def sanitize_filename(filename: str, default: str = "output.md", max_length: int = 255) -> str:
    """Reduce a file name to characters that are safe on every platform.

    Parameters
    ----------
    filename : str
        The file name component (no directories)
    default : str, default "output.md"
        Returned when nothing usable remains
    max_length : int, default 255
        Maximum length of the result; the extension is kept when truncating

    Returns
    -------
    str
        The sanitized name

    Examples
    --------
    >>> sanitize_filename("report<>|?.md")
    'report.md'
    >>> sanitize_filename("my notes.md")
    'my_notes.md'
    >>> sanitize_filename("con.md")
    'con_.md'

    """
    normalized = unicodedata.normalize("NFKC", filename)
    safe = re.sub(r"[\x00-\x1f\x7f]", "", normalized)
    safe = re.sub(r"[^\w.\-\s]", "", safe)
    safe = re.sub(r"\s+", "_", safe.strip())
    safe = re.sub(r"\.{2,}", ".", safe).strip(". ")

    if not safe:
        return default

    stem, dot, suffix = safe.rpartition(".")
    if not dot:
        stem, suffix = safe, ""
    if stem.lower() in _WINDOWS_RESERVED:
        stem = f"{stem}_"
    safe = f"{stem}.{suffix}" if dot else stem

    if len(safe) > max_length:
        extension = f".{suffix}" if dot else ""
        safe = stem[: max_length - len(extension)] + extension

    if safe != filename:
        logger.debug(f"Sanitized output file name {filename!r} to {safe!r}")
    return safe


def sanitize_output_path(path: str | Path) -> Path:
    """Sanitize an output path before writing to it.

    The directory part is kept; only the final component is cleaned with
    :func:`sanitize_filename`.

    Parameters
    ----------
    path : str or Path
        Requested output path

    Returns
    -------
    Path
        The path to write to

    Raises
    ------
    ValidationError
        If the path is empty or contains a ``..`` component

    """
    raw = str(path)
    if not raw.strip():
        raise ValidationError("Output path is empty", parameter_name="output", parameter_value=path)

    parts = re.split(r"[/\\]", raw)
    if ".." in parts:
        raise ValidationError(
            f"Output path must not contain parent directory references: {raw}",
            parameter_name="output",
            parameter_value=path,
        )

    candidate = Path(raw)
    return candidate.with_name(sanitize_filename(candidate.name))


def write_markdown(content: str, output: OutputType | None) -> Path | StringIO | None:
    """Write Markdown to a path or stream, or return it as a stream.

    Parameters
    ----------
    content : str
        The Markdown document
    output : str, Path, IO[str], IO[bytes] or None
        - None: return the content as a ``StringIO``
        - str or Path: sanitize the path, create missing parent directories
          and write UTF-8 text
        - file-like object: write text, or UTF-8 bytes to binary streams

    Returns
    -------
    Path, StringIO or None
        The sanitized path written to, the ``StringIO`` for ``output=None``,
        or None for streams

    Raises
    ------
    ValidationError
        If the output path is rejected by :func:`sanitize_output_path`
    OSError
        If the file cannot be written
    TypeError
        If the output type is not supported

    """
    if output is None:
        return StringIO(content)

    if isinstance(output, (str, Path)):
        output_path = sanitize_output_path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {len(content)} characters to {output_path}")
        return output_path

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output).__name__}")

    if _is_binary_stream(output):
        cast(IO[bytes], output).write(content.encode("utf-8"))
    else:
        cast(IO[str], output).write(content)
    return None


def _is_binary_stream(stream: object) -> bool:
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


__all__ = ["sanitize_filename", "sanitize_output_path", "write_markdown"]
