#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/progress.py
"""Progress callback system for PDF conversion.

The converter reports per-page progress to an optional callback so embedders
can update a UI while a long document is converted.

Examples
--------
    >>> from pdfmd import convert
    >>> from pdfmd.progress import ProgressEvent
    >>>
    >>> def on_progress(event: ProgressEvent) -> None:
    ...     print(event)
    >>>
    >>> markdown = convert("document.pdf", progress_callback=on_progress)
    [STARTED] Converting 3 page(s) (0/3)
    [ITEM_DONE] Page 1 of 3 (1/3)
    ...
    [FINISHED] Conversion complete (3/3)

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

EventType = Literal["started", "item_done", "detected", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event emitted during a conversion.

    Parameters
    ----------
    event_type : EventType
        - "started": conversion has begun; ``total`` is the number of pages
        - "item_done": a page has been formatted; ``metadata["item_type"]``
          is ``"page"`` and ``metadata["page"]`` its 1-based number
        - "detected": links were located on a page;
          ``metadata["detected_type"]`` is ``"link"`` and
          ``metadata["link_count"]`` the number of candidates
        - "finished": the document has been assembled
        - "error": a page failed; ``metadata["error"]``, ``metadata["stage"]``
          and ``metadata["page"]`` describe the failure. Conversion continues.
    message : str
        Human-readable description of the event
    current : int, default 0
        Current position, usually the page number
    total : int, default 0
        Number of pages to process, 0 if unknown
    metadata : dict, default empty
        Event-specific details

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


ProgressCallback = Callable[[ProgressEvent], None]
"""A callable that accepts a ProgressEvent and returns None.

Exceptions raised by a callback are logged and do not interrupt conversion.
"""
