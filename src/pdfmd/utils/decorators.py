#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/utils/decorators.py
"""Decorators shared by the page sources and the converter."""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from pdfmd.exceptions import DependencyError
from pdfmd.utils.packages import check_version_requirement


def requires_dependencies(converter_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before a call.

    Parameters
    ----------
    converter_name : str
        Name shown in the error message (e.g., "pdf")
    packages : list of tuple
        Required packages as ``(install_name, import_name, version_spec)``,
        e.g. ``("pymupdf", "fitz", ">=1.24.0")``. An empty ``version_spec``
        accepts any installed version.

    Returns
    -------
    Callable
        Decorator that raises before the wrapped call when a dependency is
        missing or too old

    Raises
    ------
    DependencyError
        Listing every missing package and version mismatch, with the
        install command

    Examples
    --------
        >>> @requires_dependencies("pdf", [("pymupdf", "fitz", ">=1.24.0")])
        ... def open_document(path):
        ...     import fitz
        ...     return fitz.open(path)

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                    if not meets_requirement:
                        version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

            if missing or version_mismatches:
                raise DependencyError(
                    converter_name=converter_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log the elapsed time of a block at DEBUG level.

    Nothing is measured when the logger is not enabled for DEBUG.

    Examples
    --------
        >>> with debug_timer(logger, "Conversion of report.pdf"):
        ...     markdown = converter.convert("report.pdf")
        ... # Logs: "Conversion of report.pdf completed in 0.42s"

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
