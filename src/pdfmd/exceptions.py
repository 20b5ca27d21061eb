#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/exceptions.py
"""Exceptions raised by pdfmd.

Only three kinds of failure exist during a conversion:

- the input cannot be used at all (missing file, not a PDF, wrong password,
  bad options), which aborts the conversion;
- one page cannot be decoded, which is recovered: the page becomes an empty
  section and :class:`PageExtractionError` is only logged;
- the result cannot be written, which raises :class:`OutputWriteError` with
  the Markdown attached.

A header that is not recognized or a link whose text cannot be found in the
page is a heuristic miss, never an error.

Hierarchy::

    PdfMdError
    ├── ValidationError
    │   └── PageRangeError
    ├── FileError
    │   ├── FileNotFoundError
    │   └── MalformedFileError
    ├── ParsingError
    │   ├── PasswordProtectedError
    │   └── PageExtractionError
    ├── RenderingError
    │   └── OutputWriteError
    └── DependencyError

"""

from typing import Any


class PdfMdError(Exception):
    """Root of all pdfmd errors.

    Parameters
    ----------
    message : str
        Description of the failure
    original_error : Exception, optional
        Lower-level exception that caused it

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(PdfMdError):
    """An argument or option value is not acceptable.

    ``parameter_name`` and ``parameter_value`` identify the offending value
    when it is known.
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class PageRangeError(ValidationError):
    """The ``pages`` selection is malformed or does not fit the document."""

    def __init__(self, message: str, parameter_value: Any = None, original_error: Exception | None = None):
        super().__init__(message, "pages", parameter_value, original_error)


class FileError(PdfMdError):
    """The input file cannot be read; ``file_path`` is set for path inputs."""

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """The input path does not exist."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(message or f"File not found: {file_path}", file_path, original_error)


class MalformedFileError(FileError):
    """The input could not be opened as a PDF document."""


class ParsingError(PdfMdError):
    """The document was opened but could not be decoded.

    Parameters
    ----------
    message : str
        Description of the failure
    parsing_stage : str, optional
        Step that failed, e.g. "authentication" or "text"
    original_error : Exception, optional
        The decoder exception

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class PasswordProtectedError(ParsingError):
    """The document is encrypted and no password, or a wrong one, was supplied."""

    def __init__(
        self, message: str | None = None, filename: str | None = None, original_error: Exception | None = None
    ):
        if message is None:
            subject = f"File '{filename}'" if filename else "File"
            message = f"{subject} is password-protected; supply the password option to open it"
        super().__init__(message, parsing_stage="authentication", original_error=original_error)
        self.filename = filename


class PageExtractionError(ParsingError):
    """One page could not be processed.

    The converter logs this error and renders the page as an empty section;
    the remaining pages are still converted.

    Parameters
    ----------
    page_number : int
        1-based number of the page that failed
    stage : str
        Which step failed: "text", "links" or "formatting"
    original_error : Exception, optional
        The exception raised by that step

    """

    def __init__(self, page_number: int, stage: str, original_error: Exception | None = None):
        message = f"Failed to extract {stage} from page {page_number}"
        if original_error is not None:
            message = f"{message}: {original_error}"
        super().__init__(message, parsing_stage=stage, original_error=original_error)
        self.page_number = page_number


class RenderingError(PdfMdError):
    """Producing or delivering the Markdown failed."""

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """The Markdown could not be written to the requested output.

    Parameters
    ----------
    file_path : str
        The output that was requested (a path, or a stream's type name)
    message : str, optional
        Overrides the default message
    original_error : Exception, optional
        The I/O or validation error
    markdown : str, optional
        The converted document, so the caller can still save it elsewhere

    """

    def __init__(
        self,
        file_path: str,
        message: str | None = None,
        original_error: Exception | None = None,
        markdown: str | None = None,
    ):
        super().__init__(
            message or f"Failed to write output file: {file_path}",
            rendering_stage="file_write",
            original_error=original_error,
        )
        self.file_path = file_path
        self.markdown = markdown


def _requirement(name: str, spec: str) -> str:
    return f"{name}{spec}" if spec else name


class DependencyError(PdfMdError):
    """A required package is missing or older than supported.

    Parameters
    ----------
    converter_name : str
        Feature needing the packages, e.g. "pdf"
    missing_packages : list[tuple[str, str]]
        ``(install_name, version_spec)`` of packages that cannot be imported
    version_mismatches : list[tuple[str, str, str]], optional
        ``(install_name, required_spec, installed_version)`` of outdated packages
    message : str, optional
        Overrides the generated message
    original_import_error : ImportError, optional
        The first import failure

    Notes
    -----
    The generated message ends with a ``pip install --upgrade`` command
    covering every listed package.

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        version_mismatches = version_mismatches or []
        if message is None:
            feature = converter_name.upper()
            lines = []
            if missing_packages:
                needed = ", ".join(f"'{_requirement(name, spec)}'" for name, spec in missing_packages)
                lines.append(f"{feature} support requires the following packages: {needed}")
            if version_mismatches:
                outdated = ", ".join(
                    f"'{name}' (requires {spec}, but {installed} is installed)"
                    for name, spec, installed in version_mismatches
                )
                lines.append(f"{feature} support has version mismatches: {outdated}")

            specs = list(missing_packages) + [(name, spec) for name, spec, _ in version_mismatches]
            if specs:
                install = " ".join(f'"{name}{spec}"' if spec else name for name, spec in specs)
                lines.append(f"Install with: pip install --upgrade {install}")
            message = "\n".join(lines)

        super().__init__(message, original_error=original_import_error)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
