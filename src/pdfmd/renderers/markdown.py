#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/renderers/markdown.py
"""Markdown formatting for reconstructed PDF text.

This module turns the plain line text of a page into Markdown and joins the
pages into one document. Formatting happens in three steps:

1. Structure: a single pass over the lines classifies each one (header,
   list item, continuation, blank, plain) and emits ``## `` headers and
   ``- `` / ``1.`` list items with the blank lines Markdown needs around
   them.
2. Reflow: decoder-level hard line breaks inside prose are joined back into
   flowing paragraphs while blank-line paragraph breaks survive.
3. Link splicing: each candidate link's text is wrapped as ``[text](url)``
   exactly once, never inside an existing Markdown link.

None of these steps raise on unexpected input; anything unrecognized passes
through as plain text.

"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from pdfmd.constants import HEADER_PREFIX, PAGE_SEPARATORS
from pdfmd.exceptions import ValidationError
from pdfmd.models import CandidateLink
from pdfmd.options.markdown import MarkdownOptions
from pdfmd.renderers._line_rules import LineClass, LineClassifier, LineKind

logger = logging.getLogger(__name__)

__all__ = [
    "assemble",
    "format_document",
    "format_heading",
    "format_page",
    "format_structure",
    "reflow",
    "splice_links",
]

# Lines that must keep their own line: headings, list items, indented
# continuations, horizontal rules and block quotes
_BLOCK_LINE = re.compile(r"^(?:#{1,6}\s|[-*+]\s|\d+[.)]\s|\s|-{3,}\s*$|>)")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")

# An existing Markdown link ``[label](dest)`` or a bare ``[label]``
_PROTECTED_SPAN = re.compile(r"\[[^\[\]\n]*\](?:\([^()\s]*\))?")


def format_heading(line_class: LineClass) -> str:
    """Render a header line, leaving lines that already are headings unchanged."""
    if line_class.marker:
        return f"{line_class.marker} {line_class.text}"
    return f"{HEADER_PREFIX}{line_class.text}"


def format_structure(text: str, classifier: LineClassifier | None = None) -> str:
    """Apply the header and list heuristics to page text.

    The list handling is a two-state machine: a bullet or numbered line
    enters the list, indented lines inside it are kept as continuations, and
    a blank line or a dedented non-list line leaves it.

    Parameters
    ----------
    text : str
        Page text, one decoder line per line
    classifier : LineClassifier, optional
        Rule set to use; the default rules are used when omitted

    Returns
    -------
    str
        Text with Markdown headers and list items

    """
    classifier = classifier or LineClassifier()
    out: list[str] = []
    in_list = False
    previous_kind: LineKind | None = None

    def ensure_blank() -> None:
        if out and out[-1] != "":
            out.append("")

    for raw_line in text.split("\n"):
        line_class = classifier.classify(raw_line, in_list=in_list)
        kind = line_class.kind

        if kind is LineKind.BLANK:
            in_list = False
            ensure_blank()
        elif kind is LineKind.CONTINUATION:
            out.append(line_class.text)
        elif kind is LineKind.BULLET or kind is LineKind.ORDERED:
            if not in_list:
                ensure_blank()
            marker = line_class.marker if kind is LineKind.ORDERED else "-"
            out.append(f"{marker} {line_class.text}")
            in_list = True
        elif kind is LineKind.HEADER:
            in_list = False
            if previous_kind is not LineKind.HEADER:
                ensure_blank()
            out.append(format_heading(line_class))
        else:
            if in_list or previous_kind is LineKind.HEADER:
                ensure_blank()
            in_list = False
            out.append(line_class.text)

        previous_kind = kind

    return "\n".join(out)


def _is_block_line(line: str) -> bool:
    return bool(_BLOCK_LINE.match(line))


def reflow(text: str) -> str:
    """Rejoin hard-wrapped prose lines into paragraphs.

    A lone newline between two non-blank prose lines becomes a single space;
    runs of three or more newlines collapse to one blank line. Markdown block
    lines (headings, list items, indented continuations, rules) are never
    joined to their neighbours.

    Examples
    --------
    >>> reflow("first line\\nsecond line\\n\\n\\n\\nnext paragraph")
    'first line second line\\n\\nnext paragraph'

    """
    out: list[str] = []
    for raw_line in text.replace("\r\n", "\n").split("\n"):
        # Lines are classified as stored, so a second pass sees the same blocks
        line = raw_line.rstrip()
        previous = out[-1] if out else ""
        if previous and line and not _is_block_line(previous) and not _is_block_line(line):
            out[-1] = f"{previous} {line.strip()}"
        else:
            out.append(line)

    return _EXCESS_NEWLINES.sub("\n\n", "\n".join(out)).strip("\n")


def _protected_spans(text: str) -> list[tuple[int, int]]:
    return [m.span() for m in _PROTECTED_SPAN.finditer(text)]


def _find_unprotected(pattern: re.Pattern[str], text: str) -> re.Match[str] | None:
    """Return the first match that does not touch an existing Markdown link."""
    protected = _protected_spans(text)
    for m in pattern.finditer(text):
        start, end = m.span()
        if not any(p_start < end and start < p_end for p_start, p_end in protected):
            return m
    return None


def _exact_pattern(link_text: str) -> re.Pattern[str]:
    """Literal match that does not start or end inside a word."""
    prefix = r"(?<!\w)" if re.match(r"\w", link_text[0]) else ""
    suffix = r"(?!\w)" if re.match(r"\w", link_text[-1]) else ""
    return re.compile(prefix + re.escape(link_text) + suffix)


def _loose_patterns(link_text: str) -> Iterable[re.Pattern[str]]:
    """Fallback matches, from strictest to loosest."""
    yield re.compile(re.escape(link_text))
    compact = re.sub(r"\s+", "", link_text)
    if len(compact) > 1:
        # Tolerates spaces inserted or dropped by the spacing heuristics
        yield re.compile(" ?".join(re.escape(char) for char in compact))


def _format_destination(url: str) -> str:
    return url.strip().replace(" ", "%20").replace("(", "%28").replace(")", "%29")


def splice_links(text: str, links: Sequence[CandidateLink], loose: bool = True) -> str:
    """Wrap each candidate link's text in Markdown link syntax.

    Parameters
    ----------
    text : str
        Formatted page text
    links : sequence of CandidateLink
        Candidate links of the page
    loose : bool, default True
        When no word-bounded occurrence exists, fall back to a substring
        match and then to a whitespace-tolerant match

    Returns
    -------
    str
        Text with one ``[text](url)`` per candidate that could be placed

    Notes
    -----
    Longer link texts are placed first so a short link cannot claim part of
    a longer one. Each candidate replaces one occurrence only: the first one
    outside existing ``[...]`` and ``[...](...)`` spans. Candidates that
    cannot be placed are logged and left out; the text is never altered for
    them.

    """
    usable = [link for link in links if link.text.strip() and link.url and link.url.strip()]
    ordered = sorted(
        usable,
        key=lambda link: (-len(link.text.strip()), link.position.page, -link.position.y, link.position.x),
    )

    for link in ordered:
        link_text = link.text.strip()
        match = _find_unprotected(_exact_pattern(link_text), text)

        if match is None and loose:
            for pattern in _loose_patterns(link_text):
                match = _find_unprotected(pattern, text)
                if match is not None:
                    logger.debug(f"Placed link {link_text!r} with loose match {match.group(0)!r}")
                    break

        if match is None:
            logger.debug(f"Link text {link_text!r} ({link.url}) not found in page text; left untranslated")
            continue

        start, end = match.span()
        markdown_link = f"[{match.group(0)}]({_format_destination(link.url)})"
        text = text[:start] + markdown_link + text[end:]

    return text


def format_page(
    text: str,
    links: Sequence[CandidateLink] = (),
    options: MarkdownOptions | None = None,
    apply_heuristics: bool = True,
) -> str:
    """Format the text of one page as Markdown.

    Parameters
    ----------
    text : str
        Reconstructed page text (lines joined with newlines)
    links : sequence of CandidateLink, default ()
        Candidate links to splice into the page
    options : MarkdownOptions, optional
        Formatting options; defaults are used when omitted
    apply_heuristics : bool, default True
        Apply header/list detection and paragraph reflow. When False only
        the links are spliced into the raw lines.

    Returns
    -------
    str
        The page's Markdown, trimmed

    """
    options = options or MarkdownOptions()

    if apply_heuristics:
        text = format_structure(text, LineClassifier(options))
        text = reflow(text)

    if links:
        text = splice_links(text, links, loose=options.loose_link_matching)

    return text.strip()


def assemble(page_outputs: Iterable[str], separator: str = "rule") -> str:
    """Join per-page Markdown into one document.

    Parameters
    ----------
    page_outputs : iterable of str
        Page Markdown in ascending page order; failed pages are empty strings
    separator : {"rule", "blank"}, default "rule"
        ``---`` between pages, or just a blank line

    Returns
    -------
    str
        The document; only its leading and trailing whitespace is trimmed

    Raises
    ------
    ValidationError
        If the separator name is unknown

    """
    try:
        joiner = PAGE_SEPARATORS[separator]
    except KeyError as e:
        raise ValidationError(
            f"Unknown page separator: {separator!r}", parameter_name="page_separator", parameter_value=separator
        ) from e
    return joiner.join(page_outputs).strip()


def format_document(pages: Sequence[str], options: MarkdownOptions | None = None) -> str:
    """Assemble formatted pages using the configured page separator."""
    options = options or MarkdownOptions()
    return assemble(pages, options.page_separator)
