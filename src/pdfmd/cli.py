"""Command-line interface for pdfmd.

Examples
--------
Convert to stdout:
    $ pdfmd report.pdf

Write to a file:
    $ pdfmd report.pdf -o report.md

Plain text lines without headers and lists, no links:
    $ pdfmd report.pdf --no-formatting --no-links

Selected pages, separated by blank lines instead of rules:
    $ pdfmd report.pdf --pages 1-3,7 --page-separator blank

Read the PDF from stdin:
    $ cat report.pdf | pdfmd - > report.md

Use environment variables for defaults:
    $ export PDFMD_PAGE_SEPARATOR=blank
    $ export PDFMD_MAX_WORKERS=4
    $ pdfmd report.pdf
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdfmd/cli.py
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Optional

from pdfmd.constants import DEFAULT_MAX_WORKERS, DEFAULT_PAGE_SEPARATOR, PAGE_SEPARATORS
from pdfmd.converter import PdfToMarkdown
from pdfmd.exceptions import DependencyError, PdfMdError
from pdfmd.logging_utils import configure_logging
from pdfmd.options import LayoutOptions, MarkdownOptions, PdfOptions
from pdfmd.progress import ProgressCallback, ProgressEvent

logger = logging.getLogger(__name__)

ENV_PREFIX = "PDFMD_"
_TRUE_VALUES = ("true", "1", "yes", "on")


def get_env_var_value(key: str) -> Optional[str]:
    """Return the ``PDFMD_``-prefixed environment variable for an argument dest."""
    return os.environ.get(f"{ENV_PREFIX}{key.upper().replace('-', '_')}")


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> list[str]:
    """Use ``PDFMD_*`` environment variables as argument defaults.

    Arguments given on the command line still take precedence. Invalid
    values are ignored; a message for each is returned so the caller can
    log it once logging is configured.
    """
    problems: list[str] = []
    for action in parser._actions:
        if not action.dest or action.dest in ("help", "version", "input"):
            continue

        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        env_key = f"{ENV_PREFIX}{action.dest.upper()}"
        if isinstance(action, (argparse._StoreTrueAction, argparse._StoreFalseAction)):
            # dest names the option value itself, e.g. PDFMD_PRESERVE_LINKS=false for --no-links
            action.default = env_value.lower() in _TRUE_VALUES
        elif action.type is int or action.type is float:
            try:
                action.default = action.type(env_value)
            except ValueError:
                problems.append(f"Invalid numeric value for {env_key}: {env_value}")
        elif action.choices:
            if env_value in action.choices:
                action.default = env_value
            else:
                problems.append(f"Invalid choice for {env_key}: {env_value}. Choices: {list(action.choices)}")
        else:
            action.default = env_value

    return problems


def _get_version() -> str:
    from pdfmd import __version__

    return __version__


def create_parser(env_problems: Optional[list[str]] = None) -> argparse.ArgumentParser:
    """Build the argument parser.

    Parameters
    ----------
    env_problems : list of str, optional
        Collects messages about invalid ``PDFMD_*`` values. When omitted
        they are logged right away.
    """
    parser = argparse.ArgumentParser(
        prog="pdfmd",
        description="Convert PDF documents to Markdown, keeping headers, lists and hyperlinks.",
        epilog=f"Every option can also be set with an environment variable, e.g. {ENV_PREFIX}MAX_WORKERS=4.",
    )
    parser.add_argument("input", help="PDF file to convert, or '-' to read from stdin")
    parser.add_argument("-o", "--out", dest="out", help="Output Markdown file (default: stdout)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")

    conversion = parser.add_argument_group("conversion")
    conversion.add_argument(
        "--no-formatting",
        dest="preserve_formatting",
        action="store_false",
        help="Emit raw text lines without header, list and paragraph heuristics",
    )
    conversion.add_argument(
        "--no-links", dest="preserve_links", action="store_false", help="Do not convert link annotations"
    )
    conversion.add_argument(
        "--internal-links",
        dest="resolve_internal_links",
        action="store_true",
        help="Emit links to pages and named destinations as #page-N / #name anchors",
    )
    conversion.add_argument(
        "--page-separator",
        choices=sorted(PAGE_SEPARATORS),
        default=DEFAULT_PAGE_SEPARATOR,
        help="Separator between pages: 'rule' (---) or 'blank' (default: %(default)s)",
    )
    conversion.add_argument("--pages", help="Pages to convert (1-based), e.g. '1-3,5,10-'")
    conversion.add_argument("--password", help="Password for encrypted PDF documents")
    conversion.add_argument(
        "--max-workers",
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help="Worker processes used to format pages (default: %(default)s)",
    )
    conversion.add_argument(
        "--paragraph-gap-factor",
        type=float,
        default=LayoutOptions().paragraph_gap_factor,
        help="Start a new paragraph at vertical gaps this many times the median line gap (0 disables)",
    )

    output = parser.add_argument_group("output")
    output.add_argument("--progress", action="store_true", help="Show a page progress bar (requires tqdm)")
    output.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: %(default)s)",
    )
    output.add_argument("--log-file", help="Also write log messages to this file")
    output.add_argument("--trace", action="store_true", help="Include timestamps and logger names in log output")

    problems = apply_env_vars_to_parser(parser)
    if env_problems is None:
        for message in problems:
            logger.warning(message)
    else:
        env_problems.extend(problems)
    return parser


def build_options(parsed_args: argparse.Namespace) -> PdfOptions:
    """Map parsed arguments to ``PdfOptions``.

    Raises
    ------
    ValueError
        If an option value is out of range
    """
    return PdfOptions(
        preserve_formatting=parsed_args.preserve_formatting,
        preserve_links=parsed_args.preserve_links,
        resolve_internal_links=parsed_args.resolve_internal_links,
        pages=parsed_args.pages,
        password=parsed_args.password,
        max_workers=parsed_args.max_workers,
        layout=LayoutOptions(paragraph_gap_factor=parsed_args.paragraph_gap_factor),
        markdown=MarkdownOptions(page_separator=parsed_args.page_separator),
    )


def _progress_bar_callback() -> tuple[ProgressCallback | None, Any]:
    """Create a tqdm-backed progress callback, or None when tqdm is not installed."""
    try:
        from tqdm import tqdm
    except ImportError:
        print("Warning: tqdm not installed. Install with: pip install pdfmd[progress]", file=sys.stderr)
        return None, None

    bar = tqdm(desc="Converting", unit="page", file=sys.stderr)

    def on_progress(event: ProgressEvent) -> None:
        if event.event_type == "started":
            bar.reset(total=event.total)
        elif event.event_type == "item_done":
            bar.update(1)
        elif event.event_type == "error":
            bar.write(f"Warning: {event.message}: {event.metadata.get('error', '')}")

    return on_progress, bar


def main(args: Optional[list[str]] = None) -> int:
    """Run the command line interface and return the exit code."""
    env_problems: list[str] = []
    parser = create_parser(env_problems)
    parsed_args = parser.parse_args(args)

    try:
        options = build_options(parsed_args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    input_source: Any = parsed_args.input
    if parsed_args.input == "-":
        input_source = sys.stdin.buffer.read()
        if not input_source:
            print("Error: No data received from stdin", file=sys.stderr)
            return 1

    callback, bar = _progress_bar_callback() if parsed_args.progress else (None, None)
    configure_logging(
        parsed_args.log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        progress_bar_class=type(bar) if bar is not None else None,
    )
    for message in env_problems:
        logger.warning(message)

    converter = PdfToMarkdown(options, progress_callback=callback)

    try:
        markdown = converter.convert(input_source, output=parsed_args.out)
    except DependencyError as e:
        print(f"Missing dependency: {e}", file=sys.stderr)
        return 1
    except PdfMdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if bar is not None:
            bar.close()

    if parsed_args.out:
        print(f"Converted {parsed_args.input} -> {parsed_args.out}", file=sys.stderr)
    else:
        sys.stdout.write(markdown + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
