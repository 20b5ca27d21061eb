#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/parsers/base.py
"""Base class for PDF page sources.

A page source is the only part of the pipeline that talks to a PDF decoding
library. It exposes a page count and, per 1-based page number, the page's
positioned text runs and link annotations in bottom-left-origin
coordinates. Everything downstream works on these plain data objects.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type

from pdfmd.models import LinkAnnotation, TextRun


class PageSource(ABC):
    """Abstract access to the pages of one PDF document.

    Subclasses must implement :attr:`page_count`, :meth:`get_text_runs` and
    :meth:`get_link_annotations`. Sources hold decoder resources, so they are
    context managers and release them in :meth:`close`.

    Examples
    --------
    A source backed by in-memory data, as used in tests:

        >>> class StaticSource(PageSource):
        ...     def __init__(self, pages):
        ...         self.pages = pages
        ...     @property
        ...     def page_count(self):
        ...         return len(self.pages)
        ...     def get_text_runs(self, page_number):
        ...         return self.pages[page_number - 1]
        ...     def get_link_annotations(self, page_number):
        ...         return []

    """

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""

    @abstractmethod
    def get_text_runs(self, page_number: int) -> list[TextRun]:
        """Return the text runs of a page.

        Parameters
        ----------
        page_number : int
            1-based page number

        Returns
        -------
        list[TextRun]
            Runs in decoder order

        """

    @abstractmethod
    def get_link_annotations(self, page_number: int) -> list[LinkAnnotation]:
        """Return the link annotations of a page (1-based page number)."""

    def close(self) -> None:
        """Release decoder resources. The default implementation does nothing."""

    def __enter__(self) -> PageSource:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()
