#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the pdfmd library.

This module centralizes the tolerances, thresholds and defaults used across
the conversion pipeline. The geometric values are in PDF user-space units
(points) and are exposed through ``LayoutOptions`` so they can be tuned
without touching the pipeline code.

Constants are organized by category:
1. Type Definitions
2. Layout Reconstruction
3. Link Location
4. Markdown Formatting
5. Dependencies
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

PageSeparator = Literal["rule", "blank"]

# =============================================================================
# Layout Reconstruction
# =============================================================================

DEFAULT_LINE_TOLERANCE = 2.0  # Max y-distance for two runs to share a line
DEFAULT_SPACING_THRESHOLD = 3.0  # Horizontal gap that becomes a space
DEFAULT_AVERAGE_CHAR_WIDTH = 8.0  # Width estimate when the decoder reports none
DEFAULT_PARAGRAPH_GAP_FACTOR = 0.0  # 0 disables vertical-gap paragraph breaks

# =============================================================================
# Link Location
# =============================================================================

DEFAULT_LINK_MARGIN = 2.0
DEFAULT_LINK_LINE_TOLERANCE = 2.0
DEFAULT_LINK_ADJACENCY_FACTOR = 2.0
DEFAULT_RESOLVE_INTERNAL_LINKS = False

LINK_SUBTYPE = "Link"
INTERNAL_PAGE_MARKER = "#page-{page}"

# =============================================================================
# Markdown Formatting
# =============================================================================

DEFAULT_PRESERVE_FORMATTING = True
DEFAULT_PRESERVE_LINKS = True
DEFAULT_INCLUDE_IMAGES = False
DEFAULT_HEADER_MAX_LENGTH = 70
DEFAULT_HEADER_MAX_WORDS = 10
DEFAULT_PAGE_SEPARATOR: PageSeparator = "rule"
DEFAULT_LOOSE_LINK_MATCHING = True

HEADER_PREFIX = "## "
BULLET_CHARACTERS = "•-*◦▪‣●"
MINOR_TITLE_WORDS = frozenset(
    {"a", "an", "and", "as", "at", "but", "by", "for", "in", "nor", "of", "on", "or", "the", "to", "via", "with"}
)

PAGE_SEPARATORS: dict[str, str] = {
    "rule": "\n\n---\n\n",
    "blank": "\n\n",
}

# =============================================================================
# Conversion
# =============================================================================

DEFAULT_MAX_WORKERS = 1

# =============================================================================
# Dependencies
# =============================================================================

PDF_MIN_PYMUPDF_VERSION = "1.24.0"
DEPS_PDF = [("pymupdf", "fitz", ">=1.24.0")]
