#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/models.py
"""Data model shared by the conversion pipeline.

Every object here is a frozen dataclass: each pipeline phase consumes the
immutable output of the previous phase and produces new immutable output.
Coordinates are PDF user-space units with the origin at the bottom-left of
the page, so a larger ``y`` is higher on the page.

"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TextRun:
    """A contiguous glyph sequence as emitted by the PDF decoder.

    Parameters
    ----------
    text : str
        The run's text; may be a fragment of a word
    x : float
        Horizontal start position
    y : float
        Baseline position (bottom-left origin)
    width : float or None, default None
        Reported advance width, or None when the decoder does not report one

    """

    text: str
    x: float
    y: float
    width: float | None = None


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle in page coordinates."""

    x1: float
    y1: float
    x2: float
    y2: float

    @classmethod
    def from_points(cls, xa: float, ya: float, xb: float, yb: float) -> Rectangle:
        """Build a rectangle from two corners given in any order."""
        return cls(min(xa, xb), min(ya, yb), max(xa, xb), max(ya, yb))

    def normalized(self) -> Rectangle:
        """Return a copy with min/max-ordered corners."""
        return Rectangle.from_points(self.x1, self.y1, self.x2, self.y2)

    def contains(self, x: float, y: float, margin: float = 0.0) -> bool:
        """Check whether a point lies inside the rectangle grown by ``margin``.

        The rectangle is assumed to be normalized.
        """
        return self.x1 - margin <= x <= self.x2 + margin and self.y1 - margin <= y <= self.y2 + margin


@dataclass(frozen=True)
class LinkAnnotation:
    """A link annotation attached to a page region.

    Exactly one of ``url`` (external target) or ``destination`` (internal
    navigation marker such as ``#page-3``) is expected to be set.
    """

    rect: Rectangle
    url: str | None = None
    destination: str | None = None
    subtype: str = "Link"


@dataclass(frozen=True)
class Line:
    """Runs sharing approximately the same baseline, sorted by x.

    Attributes
    ----------
    y : float
        Baseline of the topmost run in the group
    runs : tuple[TextRun, ...]
        Runs ordered left to right
    text : str
        Line text with spacing reconstructed from the horizontal gaps

    """

    y: float
    runs: tuple[TextRun, ...]
    text: str


@dataclass(frozen=True)
class LinkPosition:
    """Where a candidate link starts on its page."""

    x: float
    y: float
    page: int


@dataclass(frozen=True)
class CandidateLink:
    """A span of link text associated with one link target."""

    text: str
    url: str
    position: LinkPosition


@dataclass(frozen=True)
class PageData:
    """Raw collaborator output for one page."""

    page_number: int
    runs: tuple[TextRun, ...] = ()
    annotations: tuple[LinkAnnotation, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class PageContent:
    """Result of processing one page.

    Attributes
    ----------
    page_number : int
        1-based page number
    text : str
        Reconstructed plain text (lines joined with newlines)
    links : tuple[CandidateLink, ...]
        Candidate links found on the page
    markdown : str
        Final Markdown for the page; empty when the page failed
    error : str or None
        Description of the failure when the page could not be extracted

    """

    page_number: int
    text: str = ""
    links: tuple[CandidateLink, ...] = field(default_factory=tuple)
    markdown: str = ""
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Whether the page could not be extracted."""
        return self.error is not None
