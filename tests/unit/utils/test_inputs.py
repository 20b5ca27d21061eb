"""Unit tests for input validation and page range parsing."""

from io import BytesIO, StringIO

import pytest

from pdfmd.exceptions import FileNotFoundError as PdfMdFileNotFoundError
from pdfmd.exceptions import PageRangeError, ValidationError
from pdfmd.utils.inputs import parse_page_ranges, validate_and_convert_input, validate_page_range


@pytest.mark.unit
class TestValidateAndConvertInput:
    """Tests for validate_and_convert_input."""

    def test_existing_path(self, temp_dir):
        pdf_path = temp_dir / "doc.pdf"
        pdf_path.write_bytes(b"%PDF-1.7")

        data, kind = validate_and_convert_input(pdf_path)

        assert kind == "path"
        assert data == pdf_path

    def test_missing_path(self, temp_dir):
        with pytest.raises(PdfMdFileNotFoundError) as exc_info:
            validate_and_convert_input(str(temp_dir / "missing.pdf"))

        assert exc_info.value.file_path.endswith("missing.pdf")

    def test_directory_is_rejected(self, temp_dir):
        with pytest.raises(ValidationError, match="not a file"):
            validate_and_convert_input(temp_dir)

    def test_bytes_are_wrapped(self):
        data, kind = validate_and_convert_input(b"%PDF-1.7")

        assert kind == "bytes"
        assert data.read() == b"%PDF-1.7"

    def test_empty_bytes(self):
        with pytest.raises(ValidationError, match="empty"):
            validate_and_convert_input(b"")

    def test_binary_stream(self):
        stream = BytesIO(b"%PDF")

        data, kind = validate_and_convert_input(stream)

        assert kind == "file"
        assert data is stream

    def test_text_mode_file_is_rejected(self, temp_dir):
        path = temp_dir / "doc.pdf"
        path.write_text("text")

        with open(path, "r") as handle:
            with pytest.raises(ValidationError, match="binary mode"):
                validate_and_convert_input(handle)

    def test_stringio_has_no_mode(self):
        # StringIO carries no mode attribute; the page source rejects its str content later
        data, kind = validate_and_convert_input(StringIO("abc"))

        assert kind == "file"

    def test_document_object(self):
        class Document:
            page_count = 1

        document = Document()

        assert validate_and_convert_input(document) == (document, "object")

    def test_unsupported_type(self):
        with pytest.raises(ValidationError, match="Unsupported input type"):
            validate_and_convert_input(42)


@pytest.mark.unit
class TestValidatePageRange:
    """Tests for validate_page_range."""

    def test_none_keeps_all_pages(self):
        assert validate_page_range(None, 10) is None

    def test_list_is_sorted_and_deduplicated(self):
        assert validate_page_range([3, 1, 3], max_pages=5) == [0, 2]

    def test_range_string(self):
        assert validate_page_range("1-3,5", max_pages=10) == [0, 1, 2, 4]

    def test_string_without_page_count(self):
        with pytest.raises(PageRangeError, match="page count"):
            validate_page_range("1-2")

    def test_malformed_string(self):
        with pytest.raises(PageRangeError, match="Invalid page range format"):
            validate_page_range("one-two", max_pages=5)

    @pytest.mark.parametrize("pages", ["9", "2-9", "6-", "0"])
    def test_range_string_beyond_document(self, pages):
        with pytest.raises(PageRangeError, match="does not exist|start at 1"):
            validate_page_range(pages, max_pages=3)

    @pytest.mark.parametrize("pages", ["", " , ,"])
    def test_range_string_selecting_nothing(self, pages):
        with pytest.raises(PageRangeError, match="selects no pages"):
            validate_page_range(pages, max_pages=3)

    def test_open_range_ends_at_last_page(self):
        assert validate_page_range("2-", max_pages=3) == [1, 2]

    @pytest.mark.parametrize("pages", [[0], [-1], [6], ["1"], [True], 3])
    def test_invalid_pages(self, pages):
        with pytest.raises(PageRangeError):
            validate_page_range(pages, max_pages=5)

    def test_error_names_the_parameter(self):
        with pytest.raises(PageRangeError) as exc_info:
            validate_page_range([9], max_pages=2)

        assert exc_info.value.parameter_name == "pages"
        assert "Document has 2 pages" in str(exc_info.value)


@pytest.mark.unit
class TestParsePageRanges:
    """Tests for parse_page_ranges."""

    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("5", [4]),
            ("1-3", [0, 1, 2]),
            ("8-", [7, 8, 9]),
            ("-2", [0, 1]),
            ("10-5", [4, 5, 6, 7, 8, 9]),
            ("1, 3 ,,5", [0, 2, 4]),
            ("9-20", [8, 9]),
            ("42", []),
        ],
    )
    def test_specs(self, spec, expected):
        assert parse_page_ranges(spec, 10) == expected

    def test_non_numeric_part(self):
        with pytest.raises(ValueError):
            parse_page_ranges("a-b", 10)
