#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/converter.py
"""PDF to Markdown conversion pipeline.

Each page flows through the same pure steps:

1. Read the page's text runs and link annotations from a ``PageSource``
2. Reconstruct reading-order lines (``extract_lines``)
3. Associate link annotations with runs (``locate_links``)
4. Format the page as Markdown (``format_page``)

and the formatted pages are assembled in page order. Steps 2 to 4 depend
only on the page's own data, so pages can be formatted in worker processes
and joined afterwards. A page whose data cannot be read, or whose processing
fails, becomes an empty section and the remaining pages are still converted.

"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, Union

from pdfmd.exceptions import OutputWriteError, PageExtractionError, ValidationError
from pdfmd.models import PageContent, PageData
from pdfmd.options import LayoutOptions, MarkdownOptions, PdfOptions
from pdfmd.parsers import PageSource, PyMuPDFPageSource, extract_lines, lines_to_text, locate_links
from pdfmd.progress import ProgressCallback, ProgressEvent
from pdfmd.renderers import format_document, format_page
from pdfmd.utils.decorators import debug_timer
from pdfmd.utils.inputs import validate_page_range
from pdfmd.utils.io_utils import write_markdown

logger = logging.getLogger(__name__)

InputData = Union[str, Path, IO[bytes], bytes, PageSource, Any]
OutputTarget = Union[str, Path, IO[str], IO[bytes]]


def render_page(page_data: PageData, options: PdfOptions) -> PageContent:
    """Run the per-page pipeline on decoded page data.

    This is a module-level function so it can be sent to worker processes.

    Parameters
    ----------
    page_data : PageData
        Runs and annotations of one page, or the error that prevented reading them
    options : PdfOptions
        Conversion options

    Returns
    -------
    PageContent
        The page's text, links and Markdown. Failed pages have empty
        Markdown and ``error`` set.

    """
    if page_data.error is not None:
        return PageContent(page_number=page_data.page_number, error=page_data.error)

    try:
        lines = extract_lines(page_data.runs, options.layout)
        text = lines_to_text(lines, options.layout)

        links = []
        if options.preserve_links:
            links = locate_links(
                page_data.runs,
                page_data.annotations,
                page_number=page_data.page_number,
                layout=options.layout,
                resolve_internal=options.resolve_internal_links,
            )

        markdown = format_page(text, links, options.markdown, apply_heuristics=options.preserve_formatting)
    except Exception as e:
        error = PageExtractionError(page_data.page_number, "formatting", original_error=e)
        logger.warning(str(error), exc_info=True)
        return PageContent(page_number=page_data.page_number, error=str(error))

    return PageContent(page_number=page_data.page_number, text=text, links=tuple(links), markdown=markdown)


class PdfToMarkdown:
    """Convert PDF documents to Markdown.

    Parameters
    ----------
    options : PdfOptions or None, default None
        Conversion options; defaults are used when omitted
    progress_callback : ProgressCallback or None, default None
        Receives a ``ProgressEvent`` when conversion starts, after each page,
        when links are found, when a page fails and when conversion finishes

    Notes
    -----
    The converter keeps no per-document state, so one instance can convert
    several documents, including concurrently.

    Examples
    --------
        >>> converter = PdfToMarkdown(PdfOptions(preserve_links=False))
        >>> markdown = converter.convert("report.pdf")

    """

    def __init__(self, options: PdfOptions | None = None, progress_callback: Optional[ProgressCallback] = None):
        if options is not None and not isinstance(options, PdfOptions):
            raise ValidationError(
                f"Expected PdfOptions, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )
        self.options: PdfOptions = options or PdfOptions()
        self.progress_callback = progress_callback

    def _emit_progress(self, event_type: str, message: str, current: int = 0, total: int = 0, **metadata: Any) -> None:
        """Send a progress event to the callback, if one is registered.

        Exceptions raised by the callback are logged and do not interrupt the
        conversion.
        """
        if not self.progress_callback:
            return

        try:
            event = ProgressEvent(
                event_type=event_type,  # type: ignore[arg-type]
                message=message,
                current=current,
                total=total,
                metadata=metadata,
            )
            self.progress_callback(event)
        except Exception as e:
            logger.warning(f"Progress callback raised exception: {e}", exc_info=True)

    def read_page(self, source: PageSource, page_number: int) -> PageData:
        """Read one page's runs and annotations, capturing decoder failures.

        Parameters
        ----------
        source : PageSource
            The open document
        page_number : int
            1-based page number

        Returns
        -------
        PageData
            The page data, or a ``PageData`` with ``error`` set when the
            decoder raised

        """
        stage = "text"
        try:
            runs = tuple(source.get_text_runs(page_number))
            annotations: tuple = ()
            if self.options.preserve_links:
                stage = "links"
                annotations = tuple(source.get_link_annotations(page_number))
        except Exception as e:
            error = PageExtractionError(page_number, stage, original_error=e)
            logger.warning(str(error), exc_info=logger.isEnabledFor(logging.DEBUG))
            return PageData(page_number=page_number, error=str(error))

        return PageData(page_number=page_number, runs=runs, annotations=annotations)

    def process_page(self, page_data: PageData) -> PageContent:
        """Format one page of decoded data with this converter's options."""
        return render_page(page_data, self.options)

    def _selected_pages(self, source: PageSource) -> list[int]:
        page_count = source.page_count
        indices = validate_page_range(self.options.pages, page_count)
        if indices is None:
            return list(range(1, page_count + 1))
        return [index + 1 for index in indices]

    def _report_page(self, content: PageContent, position: int, total: int) -> None:
        if content.failed:
            self._emit_progress(
                "error",
                f"Failed to convert page {content.page_number}",
                current=position,
                total=total,
                error=content.error,
                stage="page",
                page=content.page_number,
            )
        elif content.links:
            self._emit_progress(
                "detected",
                f"Found {len(content.links)} link(s) on page {content.page_number}",
                current=position,
                total=total,
                detected_type="link",
                link_count=len(content.links),
                page=content.page_number,
            )

        self._emit_progress(
            "item_done",
            f"Page {content.page_number} of {total}",
            current=position,
            total=total,
            item_type="page",
            page=content.page_number,
        )

    def _render_pages(self, page_data: list[PageData]) -> dict[int, PageContent]:
        total = len(page_data)
        results: dict[int, PageContent] = {}

        if self.options.max_workers > 1 and total > 1:
            with ProcessPoolExecutor(max_workers=min(self.options.max_workers, total)) as executor:
                futures = {executor.submit(render_page, data, self.options): data.page_number for data in page_data}
                for position, future in enumerate(as_completed(futures), start=1):
                    content = future.result()
                    results[futures[future]] = content
                    self._report_page(content, position, total)
        else:
            for position, data in enumerate(page_data, start=1):
                content = self.process_page(data)
                results[data.page_number] = content
                self._report_page(content, position, total)

        return results

    def convert_pages(self, source: PageSource) -> list[PageContent]:
        """Convert the selected pages of a source.

        Returns
        -------
        list[PageContent]
            One entry per selected page in ascending page order

        Raises
        ------
        PageRangeError
            If the ``pages`` option does not fit the document

        """
        page_numbers = self._selected_pages(source)
        total = len(page_numbers)
        self._emit_progress("started", f"Converting {total} page(s)", current=0, total=total)

        # Decoders are not safe for concurrent access, so reading is sequential
        page_data = [self.read_page(source, page_number) for page_number in page_numbers]
        results = self._render_pages(page_data)

        return [results[page_number] for page_number in sorted(results)]

    def convert_source(self, source: PageSource) -> str:
        """Convert an open page source to a Markdown document."""
        pages = self.convert_pages(source)
        failed = [page.page_number for page in pages if page.failed]
        if failed:
            logger.warning(f"{len(failed)} page(s) could not be converted and were left empty: {failed}")

        markdown = format_document([page.markdown for page in pages], self.options.markdown)
        self._emit_progress(
            "finished", "Conversion complete", current=len(pages), total=len(pages), failed_pages=failed
        )
        return markdown

    def convert(self, input_data: InputData, output: OutputTarget | None = None) -> str:
        """Convert a PDF to Markdown and optionally write it.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], bytes, fitz.Document or PageSource
            The PDF to convert. A ``PageSource`` is used directly and left open.
        output : str, Path, IO[str], IO[bytes] or None, default None
            Where to write the Markdown. Paths are sanitized first.

        Returns
        -------
        str
            The Markdown document

        Raises
        ------
        FileNotFoundError
            If the input path does not exist
        MalformedFileError
            If the input is not a readable PDF
        PasswordProtectedError
            If the document is encrypted and the password is missing or wrong
        DependencyError
            If PyMuPDF is not installed
        OutputWriteError
            If the output cannot be written; the Markdown is attached as
            ``markdown``

        """
        label = str(input_data) if isinstance(input_data, (str, Path)) else type(input_data).__name__
        with debug_timer(logger, f"Conversion of {label}"):
            if isinstance(input_data, PageSource):
                markdown = self.convert_source(input_data)
            else:
                with PyMuPDFPageSource(input_data, password=self.options.password) as source:
                    markdown = self.convert_source(source)

        if output is not None:
            try:
                write_markdown(markdown, output)
            except (OSError, ValidationError) as e:
                target = str(output) if isinstance(output, (str, Path)) else type(output).__name__
                raise OutputWriteError(
                    file_path=target,
                    message=f"Failed to write output to {target}: {e}",
                    original_error=e,
                    markdown=markdown,
                ) from e

        return markdown


def _apply_overrides(options: PdfOptions, overrides: dict[str, Any]) -> PdfOptions:
    """Apply keyword overrides, routing layout and Markdown fields to the nested options."""
    layout_fields = {f.name for f in fields(LayoutOptions)}
    markdown_fields = {f.name for f in fields(MarkdownOptions)}

    layout_updates = {k: overrides.pop(k) for k in list(overrides) if k in layout_fields}
    markdown_updates = {k: overrides.pop(k) for k in list(overrides) if k in markdown_fields}

    if layout_updates:
        overrides["layout"] = options.layout.create_updated(**layout_updates)
    if markdown_updates:
        overrides["markdown"] = options.markdown.create_updated(**markdown_updates)
    return options.create_updated(**overrides) if overrides else options


def convert(
    input_data: InputData,
    output: OutputTarget | None = None,
    options: PdfOptions | None = None,
    progress_callback: Optional[ProgressCallback] = None,
    **kwargs: Any,
) -> str:
    """Convert a PDF to Markdown.

    Parameters
    ----------
    input_data : str, Path, IO[bytes], bytes, fitz.Document or PageSource
        The PDF to convert
    output : str, Path, IO[str], IO[bytes] or None, default None
        Optional destination for the Markdown
    options : PdfOptions or None, default None
        Base options
    progress_callback : ProgressCallback or None, default None
        Optional progress event receiver
    **kwargs
        Option overrides. Fields of ``LayoutOptions`` and ``MarkdownOptions``
        may be given directly (e.g. ``page_separator="blank"``).

    Returns
    -------
    str
        The Markdown document

    Raises
    ------
    TypeError
        If a keyword does not name an option

    Examples
    --------
        >>> markdown = convert("report.pdf", preserve_links=False, pages="1-2")

    """
    options = _apply_overrides(options or PdfOptions(), dict(kwargs))
    return PdfToMarkdown(options, progress_callback=progress_callback).convert(input_data, output)
