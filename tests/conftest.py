"""Pytest configuration and shared fixtures for the pdfmd test suite."""

import logging
import os
import sys
from pathlib import Path
from typing import Generator

import pytest
from utils import FakePageSource, cleanup_test_dir, create_test_temp_dir, make_line_runs

try:
    from hypothesis import settings

    settings.register_profile("ci", max_examples=200)
    settings.register_profile("dev", max_examples=50)
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Property tests import hypothesis themselves and are skipped without it
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is removed after the test."""
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def three_page_source() -> FakePageSource:
    """A three-page document with a heading, a paragraph and a link on page 1."""
    page1 = make_line_runs(["INTRODUCTION", "This is the first", "line of a paragraph."], top=700)
    page2 = make_line_runs(["Second page text"], top=700)
    page3 = make_line_runs(["- First item", "- Second item"], top=700)
    return FakePageSource([page1, page2, page3])


@pytest.fixture
def fitz_module():
    """PyMuPDF, or skip the test when it is not installed."""
    return pytest.importorskip("fitz")


@pytest.fixture
def no_tqdm(monkeypatch):
    """Hide tqdm from the import system."""
    monkeypatch.setitem(sys.modules, "tqdm", None)



@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level changed by the CLI."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
