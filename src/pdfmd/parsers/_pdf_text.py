#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/parsers/_pdf_text.py
"""PDF text reconstruction utilities.

This private module turns the positioned text runs of one page into
reading-order lines. Runs are grouped by baseline within a tolerance band,
sorted left to right, and joined with a space wherever the horizontal gap
between two runs is wider than the spacing threshold. Decoders often split
words mid-glyph, so narrow gaps are concatenated directly.

"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from pdfmd.constants import DEFAULT_AVERAGE_CHAR_WIDTH
from pdfmd.models import Line, TextRun
from pdfmd.options.pdf import LayoutOptions

__all__ = ["estimate_width", "extract_lines", "group_runs_into_lines", "join_line_runs", "lines_to_text"]

_WHITESPACE = re.compile(r"\s+")


def estimate_width(run: TextRun, average_char_width: float = DEFAULT_AVERAGE_CHAR_WIDTH) -> float:
    """Return the run's reported width, or an estimate from its length.

    The estimate (``len(text) * average_char_width``) ignores the actual
    font, so spacing decisions based on it are approximate.
    """
    if run.width is not None and run.width > 0:
        return run.width
    return len(run.text) * average_char_width


def group_runs_into_lines(runs: Iterable[TextRun], tolerance: float) -> list[list[TextRun]]:
    """Group runs whose baselines are within ``tolerance`` of each other.

    Parameters
    ----------
    runs : iterable of TextRun
        Runs in decoder order
    tolerance : float
        Maximum baseline distance from the first run of a group

    Returns
    -------
    list[list[TextRun]]
        Groups ordered top to bottom (descending y), each sorted by x

    """
    # Descending y is top-to-bottom because the PDF origin is bottom-left
    ordered = sorted((run for run in runs if run.text), key=lambda run: (-run.y, run.x))

    groups: list[list[TextRun]] = []
    anchor_y = 0.0
    for run in ordered:
        if groups and abs(anchor_y - run.y) <= tolerance:
            groups[-1].append(run)
        else:
            groups.append([run])
            anchor_y = run.y

    return [sorted(group, key=lambda run: run.x) for group in groups]


def join_line_runs(runs: Sequence[TextRun], layout: LayoutOptions | None = None) -> str:
    """Join the runs of one line, inserting spaces at wide horizontal gaps.

    Parameters
    ----------
    runs : sequence of TextRun
        Runs of a single line, sorted by x
    layout : LayoutOptions, optional
        Tolerances; defaults are used when omitted

    Returns
    -------
    str
        The line text with internal whitespace collapsed and ends trimmed

    """
    layout = layout or LayoutOptions()
    parts: list[str] = []
    previous: TextRun | None = None

    for run in runs:
        if previous is not None:
            gap = run.x - (previous.x + estimate_width(previous, layout.average_char_width))
            already_spaced = parts[-1][-1:].isspace() or run.text[:1].isspace()
            if gap > layout.spacing_threshold and not already_spaced:
                parts.append(" ")
        parts.append(run.text)
        previous = run

    return _WHITESPACE.sub(" ", "".join(parts)).strip()


def extract_lines(runs: Iterable[TextRun], layout: LayoutOptions | None = None) -> list[Line]:
    """Reconstruct the reading-order lines of a page.

    Parameters
    ----------
    runs : iterable of TextRun
        The page's runs in decoder order
    layout : LayoutOptions, optional
        Tolerances; defaults are used when omitted

    Returns
    -------
    list[Line]
        Non-empty lines ordered top to bottom

    """
    layout = layout or LayoutOptions()
    lines = []
    for group in group_runs_into_lines(runs, layout.line_tolerance):
        text = join_line_runs(group, layout)
        if text:
            lines.append(Line(y=max(run.y for run in group), runs=tuple(group), text=text))
    return lines


def lines_to_text(lines: Sequence[Line], layout: LayoutOptions | None = None) -> str:
    """Join lines with newlines, optionally breaking paragraphs at large vertical gaps.

    When ``layout.paragraph_gap_factor`` is positive and the page has at
    least three lines, a blank line is inserted wherever the distance to the
    previous line exceeds the factor times the median line distance.
    """
    layout = layout or LayoutOptions()
    if not lines:
        return ""

    factor = layout.paragraph_gap_factor
    if factor <= 0 or len(lines) < 3:
        return "\n".join(line.text for line in lines)

    gaps = [upper.y - lower.y for upper, lower in zip(lines, lines[1:])]
    # Median is robust against the very gaps we are trying to detect
    median_gap = sorted(gaps)[len(gaps) // 2]
    threshold = median_gap * factor

    out = [lines[0].text]
    for gap, line in zip(gaps, lines[1:]):
        if median_gap > 0 and gap > threshold:
            out.append("")
        out.append(line.text)
    return "\n".join(out)
