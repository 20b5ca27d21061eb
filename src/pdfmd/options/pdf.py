#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for PDF conversion.

This module defines the geometric tolerances used by the layout
reconstruction and link location steps, and the top-level options that
control which parts of the pipeline run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pdfmd.constants import (
    DEFAULT_AVERAGE_CHAR_WIDTH,
    DEFAULT_INCLUDE_IMAGES,
    DEFAULT_LINE_TOLERANCE,
    DEFAULT_LINK_ADJACENCY_FACTOR,
    DEFAULT_LINK_LINE_TOLERANCE,
    DEFAULT_LINK_MARGIN,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PARAGRAPH_GAP_FACTOR,
    DEFAULT_PRESERVE_FORMATTING,
    DEFAULT_PRESERVE_LINKS,
    DEFAULT_RESOLVE_INTERNAL_LINKS,
    DEFAULT_SPACING_THRESHOLD,
)
from pdfmd.options.base import BaseParserOptions, CloneFrozenMixin
from pdfmd.options.markdown import MarkdownOptions

logger = logging.getLogger(__name__)


# src/pdfmd/options/pdf.py
@dataclass(frozen=True)
class LayoutOptions(CloneFrozenMixin):
    """Geometric tolerances for layout reconstruction and link location.

    All values are in PDF points.

    Parameters
    ----------
    line_tolerance : float, default 2.0
        Maximum baseline distance for two runs to be grouped into one line.
    spacing_threshold : float, default 3.0
        A horizontal gap wider than this between two runs becomes a space.
    average_char_width : float, default 8.0
        Per-character width estimate used when a run has no reported width.
    link_margin : float, default 2.0
        Tolerance added on every side of a link rectangle.
    link_line_tolerance : float, default 2.0
        Maximum baseline distance for two link runs to share a candidate link.
    link_adjacency_factor : float, default 2.0
        A run merges into a candidate link when it starts within this factor
        times the estimated width of the candidate's text.
    paragraph_gap_factor : float, default 0.0
        When positive, a vertical gap larger than this factor times the
        median line gap of the page produces a paragraph break. 0 disables it.

    """

    line_tolerance: float = field(
        default=DEFAULT_LINE_TOLERANCE,
        metadata={"help": "Maximum y-distance for runs on the same line", "type": float},
    )
    spacing_threshold: float = field(
        default=DEFAULT_SPACING_THRESHOLD,
        metadata={"help": "Horizontal gap between runs that is rendered as a space", "type": float},
    )
    average_char_width: float = field(
        default=DEFAULT_AVERAGE_CHAR_WIDTH,
        metadata={"help": "Character width estimate when runs carry no width", "type": float},
    )
    link_margin: float = field(
        default=DEFAULT_LINK_MARGIN,
        metadata={"help": "Tolerance around link rectangles", "type": float},
    )
    link_line_tolerance: float = field(
        default=DEFAULT_LINK_LINE_TOLERANCE,
        metadata={"help": "Maximum y-distance for runs of the same link", "type": float},
    )
    link_adjacency_factor: float = field(
        default=DEFAULT_LINK_ADJACENCY_FACTOR,
        metadata={"help": "Adjacency factor for merging link runs", "type": float},
    )
    paragraph_gap_factor: float = field(
        default=DEFAULT_PARAGRAPH_GAP_FACTOR,
        metadata={"help": "Vertical gap factor that starts a new paragraph (0 disables)", "type": float},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any tolerance is negative or a width estimate is not positive.

        """
        for name in ("line_tolerance", "spacing_threshold", "link_margin", "link_line_tolerance"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.average_char_width <= 0:
            raise ValueError(f"average_char_width must be positive, got {self.average_char_width}")
        if self.link_adjacency_factor <= 0:
            raise ValueError(f"link_adjacency_factor must be positive, got {self.link_adjacency_factor}")
        if self.paragraph_gap_factor < 0:
            raise ValueError(f"paragraph_gap_factor must be non-negative, got {self.paragraph_gap_factor}")


@dataclass(frozen=True)
class PdfOptions(BaseParserOptions):
    """Configuration options for PDF-to-Markdown conversion.

    Parameters
    ----------
    preserve_formatting : bool, default True
        Apply the header, list and paragraph reflow heuristics. When False the
        page text is emitted as reconstructed raw lines.
    preserve_links : bool, default True
        Run link location and splice Markdown links into the text.
    include_images : bool, default False
        Reserved. Image extraction is not implemented; enabling it only logs
        a warning.
    resolve_internal_links : bool, default False
        Emit internal navigation links (page or named destinations) using an
        anchor marker such as ``#page-3`` instead of dropping them.
    pages : list[int], str, or None, default None
        1-based pages to convert, e.g. ``[1, 2]`` or ``"1-3,5"``. None converts
        every page.
    password : str or None, default None
        Password for encrypted PDF documents.
    max_workers : int, default 1
        Number of worker processes used to format pages. 1 processes pages
        sequentially in the calling process.
    layout : LayoutOptions
        Geometric tolerances.
    markdown : MarkdownOptions
        Markdown formatting options.

    Examples
    --------
    Convert without link detection:
        >>> options = PdfOptions(preserve_links=False)

    Tighter line grouping:
        >>> options = PdfOptions(layout=LayoutOptions(line_tolerance=0.5))

    """

    preserve_formatting: bool = field(
        default=DEFAULT_PRESERVE_FORMATTING,
        metadata={"help": "Apply header/list/paragraph heuristics"},
    )
    preserve_links: bool = field(
        default=DEFAULT_PRESERVE_LINKS,
        metadata={"help": "Detect link annotations and emit Markdown links"},
    )
    include_images: bool = field(
        default=DEFAULT_INCLUDE_IMAGES,
        metadata={"help": "Reserved; image extraction is not implemented"},
    )
    resolve_internal_links: bool = field(
        default=DEFAULT_RESOLVE_INTERNAL_LINKS,
        metadata={"help": "Emit internal page/named destinations as anchor links"},
    )
    pages: list[int] | str | None = field(
        default=None,
        metadata={"help": "Pages to convert (1-based), e.g. '1-3,5'"},
    )
    password: str | None = field(default=None, metadata={"help": "Password for encrypted PDF documents"})
    max_workers: int = field(
        default=DEFAULT_MAX_WORKERS,
        metadata={"help": "Worker processes for page formatting (1 = sequential)", "type": int},
    )
    layout: LayoutOptions = field(
        default_factory=LayoutOptions,
        metadata={"help": "Geometric tolerances for layout and link reconstruction"},
    )
    markdown: MarkdownOptions = field(
        default_factory=MarkdownOptions,
        metadata={"help": "Markdown formatting options"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and reserved options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

        if self.include_images:
            logger.warning("include_images is reserved and has no effect; images are not extracted")
