#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/logging_utils.py
"""Logging setup for the pdfmd command line.

Library modules only create module-level loggers; handlers are installed
here, by the CLI. While a progress bar is shown, log records are routed
through the bar's ``write`` method so warnings about failed pages appear
above the bar instead of breaking it.

"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

LOG_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Return a numeric level for a level number or name; unknown names map to INFO."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


class ProgressBarLogHandler(logging.Handler):
    """Emit records with a progress bar class's ``write`` method (e.g. ``tqdm.write``)."""

    def __init__(self, bar_class: Any, level: int = logging.NOTSET):
        super().__init__(level)
        self.bar_class = bar_class

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.bar_class.write(self.format(record), file=sys.stderr)
        except Exception:
            self.handleError(record)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    progress_bar_class: Any = None,
) -> logging.Logger:
    """Install the console (and optional file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO").
    log_file : str, optional
        Also append log records to this file.
    trace_mode : bool, default False
        Include timestamps and logger names in every record.
    progress_bar_class : type, optional
        Progress bar class with a ``write`` classmethod, such as ``tqdm``.
        When given, console records are written through it.

    Returns
    -------
    logging.Logger
        The configured root logger.

    """
    level = resolve_log_level(log_level)

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler: logging.Handler
    if progress_bar_class is not None:
        console_handler = ProgressBarLogHandler(progress_bar_class)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning(f"Could not open log file {log_file}: {exc}")
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info(f"Logging to file: {log_file}")

    # PyMuPDF reports recoverable syntax problems through its own logger
    logging.getLogger("fitz").setLevel(max(level, logging.WARNING))

    return root_logger
