"""Unit tests for the options dataclasses."""

import dataclasses
import logging

import pytest

from pdfmd.options import LayoutOptions, MarkdownOptions, PdfOptions


@pytest.mark.unit
class TestPdfOptions:
    """Tests for PdfOptions."""

    def test_defaults(self):
        options = PdfOptions()

        assert options.preserve_formatting is True
        assert options.preserve_links is True
        assert options.resolve_internal_links is False
        assert options.include_images is False
        assert options.pages is None
        assert options.max_workers == 1
        assert options.markdown.page_separator == "rule"

    def test_options_are_frozen(self):
        options = PdfOptions()

        with pytest.raises(dataclasses.FrozenInstanceError):
            options.preserve_links = False

    def test_create_updated_returns_new_instance(self):
        options = PdfOptions()

        updated = options.create_updated(preserve_links=False)

        assert updated.preserve_links is False
        assert options.preserve_links is True

    def test_create_updated_rejects_unknown_fields(self):
        with pytest.raises(TypeError, match="no option"):
            PdfOptions().create_updated(colour=True)

    def test_max_workers_must_be_positive(self):
        with pytest.raises(ValueError, match="max_workers"):
            PdfOptions(max_workers=0)

    def test_include_images_only_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            options = PdfOptions(include_images=True)

        assert options.include_images is True
        assert "include_images" in caplog.text

    def test_option_help(self):
        help_text = PdfOptions.option_help()

        assert "preserve_links" in help_text
        assert help_text["password"] == "Password for encrypted PDF documents"


@pytest.mark.unit
class TestLayoutOptions:
    """Tests for LayoutOptions."""

    def test_defaults(self):
        layout = LayoutOptions()

        assert layout.line_tolerance == 2.0
        assert layout.spacing_threshold == 3.0
        assert layout.average_char_width == 8.0
        assert layout.paragraph_gap_factor == 0.0

    @pytest.mark.parametrize(
        "field_name,value",
        [
            ("line_tolerance", -1.0),
            ("spacing_threshold", -0.5),
            ("link_margin", -2.0),
            ("average_char_width", 0.0),
            ("link_adjacency_factor", 0.0),
            ("paragraph_gap_factor", -1.0),
        ],
    )
    def test_invalid_values(self, field_name, value):
        with pytest.raises(ValueError, match=field_name):
            LayoutOptions(**{field_name: value})


@pytest.mark.unit
class TestMarkdownOptions:
    """Tests for MarkdownOptions."""

    def test_defaults(self):
        options = MarkdownOptions()

        assert options.header_max_length == 70
        assert options.header_max_words == 10
        assert options.loose_link_matching is True

    def test_unknown_separator(self):
        with pytest.raises(ValueError, match="page_separator"):
            MarkdownOptions(page_separator="dots")

    def test_header_limits_must_be_positive(self):
        with pytest.raises(ValueError):
            MarkdownOptions(header_max_length=0)
        with pytest.raises(ValueError):
            MarkdownOptions(header_max_words=-1)
