#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown formatting.

These options drive the heuristic line classification (headers and lists),
the hyperlink splice step and the page separator used when assembling the
final document.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pdfmd.constants import (
    DEFAULT_HEADER_MAX_LENGTH,
    DEFAULT_HEADER_MAX_WORDS,
    DEFAULT_LOOSE_LINK_MATCHING,
    DEFAULT_PAGE_SEPARATOR,
    PAGE_SEPARATORS,
    PageSeparator,
)
from pdfmd.options.base import CloneFrozenMixin


# src/pdfmd/options/markdown.py
@dataclass(frozen=True)
class MarkdownOptions(CloneFrozenMixin):
    """Markdown formatting options.

    Parameters
    ----------
    header_max_length : int, default 70
        Lines longer than this (after trimming) are never treated as headers.
    header_max_words : int, default 10
        Maximum number of words for a title-case line to count as a header.
    page_separator : {"rule", "blank"}, default "rule"
        "rule" puts a ``---`` horizontal rule between pages, "blank" a blank line.
    loose_link_matching : bool, default True
        When a link's text has no exact word-bounded occurrence, fall back to
        a substring or whitespace-tolerant match instead of leaving the link
        out.

    """

    header_max_length: int = field(
        default=DEFAULT_HEADER_MAX_LENGTH,
        metadata={"help": "Maximum trimmed line length for header detection", "type": int},
    )
    header_max_words: int = field(
        default=DEFAULT_HEADER_MAX_WORDS,
        metadata={"help": "Maximum word count for a title-case header", "type": int},
    )
    page_separator: PageSeparator = field(
        default=DEFAULT_PAGE_SEPARATOR,
        metadata={"help": "Separator between pages: 'rule' (---) or 'blank'", "choices": ["rule", "blank"]},
    )
    loose_link_matching: bool = field(
        default=DEFAULT_LOOSE_LINK_MATCHING,
        metadata={"help": "Fall back to loose matching when link text is not found exactly"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and choices.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.header_max_length <= 0:
            raise ValueError(f"header_max_length must be positive, got {self.header_max_length}")
        if self.header_max_words <= 0:
            raise ValueError(f"header_max_words must be positive, got {self.header_max_words}")
        if self.page_separator not in PAGE_SEPARATORS:
            raise ValueError(
                f"page_separator must be one of {sorted(PAGE_SEPARATORS)}, got {self.page_separator!r}"
            )
