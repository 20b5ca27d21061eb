"""Base classes for pdfmd options.

All options are frozen dataclasses so a configured converter can be shared
between conversions (and pickled to worker processes) without any risk of
one call mutating the settings of another.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        Raises
        ------
        TypeError
            If a keyword does not name a field of this options class

        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise TypeError(f"{type(self).__name__} has no option(s): {', '.join(unknown)}")
        return replace(self, **kwargs)

    @classmethod
    def option_help(cls) -> dict[str, str]:
        """Return the help text of every field, keyed by field name."""
        return {f.name: f.metadata.get("help", "") for f in fields(cls)}


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options.

    Notes
    -----
    Subclasses define format-specific options as frozen dataclass fields and
    validate them in ``__post_init__``.

    """

    def __post_init__(self) -> None:
        """Validate field values; subclasses extend this."""
        pass
