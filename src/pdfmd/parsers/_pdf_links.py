#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/parsers/_pdf_links.py
"""PDF link location utilities.

Link annotations are geometric regions that carry no text of their own. This
private module correlates them with the page's text runs: a run belongs to a
link when its start point lies inside the (slightly grown) link rectangle.
Runs of the same link that sit next to each other on one line are merged
into a single candidate, so a link split by the decoder into several runs,
or covered by several overlapping rectangles, yields one Markdown link.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from pdfmd.constants import LINK_SUBTYPE
from pdfmd.models import CandidateLink, LinkAnnotation, LinkPosition, Rectangle, TextRun
from pdfmd.options.pdf import LayoutOptions
from pdfmd.parsers._pdf_text import estimate_width, group_runs_into_lines

logger = logging.getLogger(__name__)

__all__ = ["combine_text", "link_target", "locate_links"]


@dataclass
class _LinkSpan:
    """Mutable accumulator for one candidate link while runs are matched."""

    url: str
    text: str
    x: float
    y: float
    end_x: float

    def absorb(self, text: str, x: float, end_x: float, spacing_threshold: float) -> None:
        """Merge a neighbouring piece of link text into this span.

        ``text`` is the raw run text: whitespace at its edges counts as a
        word break, whatever the measured gap.
        """
        if x < self.x:
            left, right, gap = text, self.text, self.x - end_x
        else:
            left, right, gap = self.text, text, x - self.end_x
        spaced = gap > spacing_threshold or left[-1:].isspace() or right[:1].isspace()
        overlapping = gap < 0 and (gap < -spacing_threshold or abs(x - self.x) <= spacing_threshold)

        merged = combine_text(left, right, " " if spaced else "", overlapping=overlapping)
        leading = " " if left[:1].isspace() else ""
        trailing = " " if right[-1:].isspace() else ""
        self.text = f"{leading}{merged}{trailing}"
        self.x = min(self.x, x)
        self.end_x = max(self.end_x, end_x)

    def freeze(self, page_number: int) -> CandidateLink:
        return CandidateLink(
            text=self.text.strip(), url=self.url, position=LinkPosition(x=self.x, y=self.y, page=page_number)
        )


def combine_text(existing: str, new: str, joiner: str = " ", overlapping: bool = True) -> str:
    """Combine two pieces of link text without duplicating content.

    Parameters
    ----------
    existing : str
        Text collected so far (left piece)
    new : str
        Text to add (right piece)
    joiner : str, default " "
        Inserted between the pieces when neither rule below applies
    overlapping : bool, default True
        Whether the pieces may cover the same glyphs. Pieces known to sit
        side by side are always joined, even when one contains the other.

    Returns
    -------
    str
        For overlapping pieces, the superstring when one piece contains the
        other, or the pieces joined without repeating a shared boundary
        word; otherwise ``existing + joiner + new``

    Examples
    --------
    >>> combine_text("Home", "Home")
    'Home'
    >>> combine_text("Go to", "to page")
    'Go to page'
    >>> combine_text("Go", "ogle", joiner="")
    'Google'
    >>> combine_text("Documentatio", "n", joiner="", overlapping=False)
    'Documentation'

    """
    existing = existing.strip()
    new = new.strip()
    if not overlapping:
        return existing + joiner + new
    if new in existing:
        return existing
    if existing in new:
        return new

    words = existing.split()
    new_words = new.split()
    if words[-1] == new_words[0]:
        return " ".join(words[:-1]) + " " + new

    return existing + joiner + new


def link_target(annotation: LinkAnnotation, resolve_internal: bool = False) -> str | None:
    """Return the Markdown destination of an annotation, or None to skip it.

    Only ``Link`` annotations are considered. External URLs are always used;
    internal destinations only when ``resolve_internal`` is enabled.
    """
    if annotation.subtype != LINK_SUBTYPE:
        return None
    if annotation.url:
        return annotation.url
    if resolve_internal and annotation.destination:
        return annotation.destination
    return None


def _text_width(text: str, average_char_width: float) -> float:
    return len(text) * average_char_width


def _find_adjacent_span(
    spans: Sequence[_LinkSpan], url: str, run: TextRun, layout: LayoutOptions
) -> _LinkSpan | None:
    """Find a span of the same link on the same line that the run continues."""
    for span in spans:
        if span.url != url or abs(span.y - run.y) >= layout.link_line_tolerance:
            continue
        threshold = layout.link_adjacency_factor * _text_width(span.text, layout.average_char_width)
        if abs(span.x - run.x) < threshold:
            return span
    return None


def _dedupe_spans(spans: Sequence[_LinkSpan], layout: LayoutOptions) -> list[_LinkSpan]:
    """Merge spans of the same link on the same line whose extents overlap or touch."""
    merged: list[_LinkSpan] = []
    for span in spans:
        for kept in merged:
            same_line = abs(kept.y - span.y) < layout.link_line_tolerance
            touching = span.x <= kept.end_x + layout.spacing_threshold and kept.x <= span.end_x + layout.spacing_threshold
            if kept.url == span.url and same_line and touching:
                kept.absorb(span.text, span.x, span.end_x, layout.spacing_threshold)
                logger.debug(f"Merged duplicate link candidate for {span.url!r}: {kept.text!r}")
                break
        else:
            merged.append(span)
    return merged


def locate_links(
    runs: Iterable[TextRun],
    annotations: Iterable[LinkAnnotation],
    page_number: int = 1,
    layout: LayoutOptions | None = None,
    resolve_internal: bool = False,
) -> list[CandidateLink]:
    """Associate link annotations with the text runs they cover.

    Parameters
    ----------
    runs : iterable of TextRun
        The page's text runs in decoder order
    annotations : iterable of LinkAnnotation
        The page's annotations; non-link annotations are ignored
    page_number : int, default 1
        1-based page number recorded in each candidate's position
    layout : LayoutOptions, optional
        Tolerances; defaults are used when omitted
    resolve_internal : bool, default False
        Also emit internal destinations (``#page-N``) as link targets

    Returns
    -------
    list[CandidateLink]
        One candidate per visually contiguous span of link text, in reading
        order of each span's first run

    Notes
    -----
    Runs are visited in reading order, so a span only ever grows to the
    right; a final pass merges any spans that still overlap.

    """
    layout = layout or LayoutOptions()

    targets: list[tuple[Rectangle, str]] = []
    for annotation in annotations:
        target = link_target(annotation, resolve_internal)
        if target is not None:
            targets.append((annotation.rect.normalized(), target))

    if not targets:
        return []

    spans: list[_LinkSpan] = []
    for line_runs in group_runs_into_lines(runs, layout.line_tolerance):
        for run in line_runs:
            text = run.text
            if not text.strip():
                continue
            end_x = run.x + estimate_width(run, layout.average_char_width)
            for rect, url in targets:
                if not rect.contains(run.x, run.y, layout.link_margin):
                    continue
                span = _find_adjacent_span(spans, url, run, layout)
                if span is None:
                    spans.append(_LinkSpan(url=url, text=text, x=run.x, y=run.y, end_x=end_x))
                else:
                    span.absorb(text, run.x, end_x, layout.spacing_threshold)

    candidates = [span.freeze(page_number) for span in _dedupe_spans(spans, layout)]
    logger.debug(f"Located {len(candidates)} link candidate(s) on page {page_number}")
    return [candidate for candidate in candidates if candidate.text]
