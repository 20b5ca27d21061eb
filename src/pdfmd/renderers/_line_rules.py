#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/renderers/_line_rules.py
"""Heuristic line classification rules.

PDF text carries no structural markers, so headers and list items are
recognized from the shape of a line alone: case patterns, bullet glyphs and
numbering tokens. Each rule is a small predicate object with a ``match``
method so rules can be tested and replaced independently of the reflow and
link splicing logic.

"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from pdfmd.constants import BULLET_CHARACTERS, MINOR_TITLE_WORDS
from pdfmd.options.markdown import MarkdownOptions

__all__ = [
    "BulletRule",
    "HeaderRule",
    "LineClass",
    "LineClassifier",
    "LineKind",
    "LineRule",
    "OrderedRule",
    "classify_line",
]


class LineKind(Enum):
    """Structural role of a line."""

    BLANK = "blank"
    HEADER = "header"
    BULLET = "bullet"
    ORDERED = "ordered"
    CONTINUATION = "continuation"
    PLAIN = "plain"


@dataclass(frozen=True)
class LineClass:
    """Classification result for one line.

    Attributes
    ----------
    kind : LineKind
        The line's role
    text : str
        Content without its marker (header text, list item text) or the
        trimmed line for plain text; continuation lines keep their indent
    marker : str
        Numbering token of an ordered item (``"3."``) or the hashes of a line
        that already is a Markdown heading; empty otherwise

    """

    kind: LineKind
    text: str = ""
    marker: str = ""


class LineRule(ABC):
    """A single line-shape predicate."""

    @abstractmethod
    def match(self, line: str) -> LineClass | None:
        """Return a classification if the rule applies to ``line``."""


class BulletRule(LineRule):
    """Bullet glyph followed by whitespace, e.g. ``• item`` or ``- item``."""

    pattern = re.compile(rf"^[{re.escape(BULLET_CHARACTERS)}]\s+(?P<rest>\S.*)$")

    def match(self, line: str) -> LineClass | None:
        m = self.pattern.match(line.strip())
        if m is None:
            return None
        return LineClass(LineKind.BULLET, m.group("rest"))


class OrderedRule(LineRule):
    """Numbered item such as ``1. item`` or ``2) item``; the token is preserved."""

    pattern = re.compile(r"^(?P<marker>\d+[.)])\s+(?P<rest>\S.*)$")

    def match(self, line: str) -> LineClass | None:
        m = self.pattern.match(line.strip())
        if m is None:
            return None
        return LineClass(LineKind.ORDERED, m.group("rest"), marker=m.group("marker"))


class HeaderRule(LineRule):
    """Short upper-case or title-case line without contact details or URLs.

    Parameters
    ----------
    max_length : int
        Maximum trimmed length of a header line
    max_words : int
        Maximum word count for the title-case pattern

    """

    markdown_heading = re.compile(r"^(?P<hashes>#{1,6})\s+(?P<text>\S.*?)\s*$")
    heavy_punctuation = re.compile(r"[^\w\s,&'’()/\-]")
    sentence_end = ".!?:;"

    def __init__(self, max_length: int, max_words: int):
        self.max_length = max_length
        self.max_words = max_words

    def match(self, line: str) -> LineClass | None:
        text = line.strip()
        if not text:
            return None

        # Lines that already are headings pass through untouched
        m = self.markdown_heading.match(text)
        if m is not None:
            return LineClass(LineKind.HEADER, m.group("text"), marker=m.group("hashes"))

        if len(text) > self.max_length or "@" in text or "http" in text.lower():
            return None

        if self.is_upper_case(text) or self.is_title_case(text):
            return LineClass(LineKind.HEADER, text)
        return None

    @staticmethod
    def is_upper_case(text: str) -> bool:
        return any(c.isupper() for c in text) and text == text.upper()

    def is_title_case(self, text: str) -> bool:
        if not text[0].isupper() or text[-1] in self.sentence_end:
            return False
        if self.heavy_punctuation.search(text):
            return False

        words = text.split()
        if len(words) > self.max_words:
            return False

        for word in words[1:]:
            bare = word.lstrip("('\"‘“")
            if not bare:
                continue
            if not (bare[0].isupper() or bare[0].isdigit() or bare.lower().strip(",") in MINOR_TITLE_WORDS):
                return False
        return True


class LineClassifier:
    """Apply the list and header rules to lines.

    List rules take precedence over the header rule, and an indented line
    inside a list is a continuation whatever it looks like.

    Parameters
    ----------
    options : MarkdownOptions, optional
        Header limits; defaults are used when omitted

    """

    def __init__(self, options: MarkdownOptions | None = None):
        options = options or MarkdownOptions()
        self.list_rules: list[LineRule] = [BulletRule(), OrderedRule()]
        self.header_rule: LineRule = HeaderRule(options.header_max_length, options.header_max_words)

    def classify(self, line: str, in_list: bool = False) -> LineClass:
        """Classify one line.

        Parameters
        ----------
        line : str
            The raw line, including any indentation
        in_list : bool, default False
            Whether the previous lines opened a list

        Returns
        -------
        LineClass
            The classification; unrecognized lines are ``PLAIN``

        """
        if not line.strip():
            return LineClass(LineKind.BLANK)

        if in_list and line[:1].isspace():
            return LineClass(LineKind.CONTINUATION, line.rstrip())

        for rule in self.list_rules:
            result = rule.match(line)
            if result is not None:
                return result

        result = self.header_rule.match(line)
        if result is not None:
            return result

        return LineClass(LineKind.PLAIN, line.strip())


def classify_line(line: str, in_list: bool = False, options: MarkdownOptions | None = None) -> LineClass:
    """Classify a single line with the default rule set."""
    return LineClassifier(options).classify(line, in_list=in_list)
