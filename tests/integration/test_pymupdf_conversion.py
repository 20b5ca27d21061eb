"""Integration tests converting real PDF documents built with PyMuPDF."""

import pytest
from utils import create_pdf_document

from pdfmd import PdfOptions, PdfToMarkdown, convert
from pdfmd.cli import main
from pdfmd.exceptions import FileNotFoundError as PdfMdFileNotFoundError
from pdfmd.exceptions import MalformedFileError, PasswordProtectedError, ValidationError
from pdfmd.parsers import PyMuPDFPageSource

PAGE_HEIGHT = 792


@pytest.mark.integration
class TestPyMuPDFPageSource:
    """Reading runs and links from PyMuPDF documents."""

    def test_runs_use_bottom_left_origin(self, fitz_module):
        data = create_pdf_document([["First line", "Second line"]])

        with PyMuPDFPageSource(data) as source:
            runs = source.get_text_runs(1)

        assert [run.text for run in runs] == ["First ", "line", "Second ", "line"]
        assert runs[0].x == pytest.approx(72, abs=1)
        assert runs[0].y == pytest.approx(PAGE_HEIGHT - 72, abs=1)
        assert runs[1].y == pytest.approx(runs[0].y)
        assert runs[0].y > runs[2].y
        assert runs[0].width > 0
        assert runs[1].x == pytest.approx(runs[0].x + runs[0].width, abs=0.5)

    def test_uri_link_annotation(self, fitz_module):
        data = create_pdf_document([["Visit Example Site today"]], links={(1, 0): "https://example.com"})

        with PyMuPDFPageSource(data) as source:
            annotations = source.get_link_annotations(1)

        assert len(annotations) == 1
        assert annotations[0].url == "https://example.com"
        assert annotations[0].rect.contains(72, PAGE_HEIGHT - 72)

    def test_internal_link_annotation(self, fitz_module):
        data = create_pdf_document([["Go to end"], ["The end"]], links={(1, 0): 2})

        with PyMuPDFPageSource(data) as source:
            annotations = source.get_link_annotations(1)

        assert annotations[0].url is None
        assert annotations[0].destination == "#page-2"

    def test_page_count_and_range(self, fitz_module):
        data = create_pdf_document([["a"], ["b"]])

        with PyMuPDFPageSource(data) as source:
            assert source.page_count == 2
            with pytest.raises(ValidationError, match="out of range"):
                source.get_text_runs(3)

    def test_opened_document_is_not_closed(self, fitz_module):
        document = fitz_module.open(stream=create_pdf_document([["hello world"]]), filetype="pdf")

        assert convert(document) == "hello world"
        assert not document.is_closed
        document.close()


@pytest.mark.integration
class TestInputErrors:
    """Invalid, missing and encrypted inputs."""

    def test_not_a_pdf(self, fitz_module):
        with pytest.raises(MalformedFileError):
            convert(b"not a pdf")

    def test_missing_file(self, fitz_module, temp_dir):
        with pytest.raises(PdfMdFileNotFoundError):
            convert(temp_dir / "missing.pdf")

    def test_password_required(self, fitz_module):
        data = create_pdf_document([["Secret text"]], password="hunter2")

        with pytest.raises(PasswordProtectedError):
            convert(data)

    def test_wrong_password(self, fitz_module):
        data = create_pdf_document([["Secret text"]], password="hunter2")

        with pytest.raises(PasswordProtectedError, match="Failed to authenticate"):
            convert(data, password="wrong")

    def test_correct_password(self, fitz_module):
        data = create_pdf_document([["Secret text"]], password="hunter2")

        assert convert(data, password="hunter2") == "Secret text"


@pytest.mark.integration
@pytest.mark.e2e
class TestDocumentConversion:
    """Full conversions of generated documents."""

    def test_structured_page(self, fitz_module):
        data = create_pdf_document(
            [["OVERVIEW", "This paragraph is", "wrapped by the PDF.", "- point one", "- point two"]]
        )

        result = convert(data)

        assert result == "## OVERVIEW\n\nThis paragraph is wrapped by the PDF.\n\n- point one\n- point two"

    def test_external_link(self, fitz_module):
        data = create_pdf_document([["Visit Example Site today"]], links={(1, 0): "https://example.com"})

        assert convert(data) == "[Visit Example Site today](https://example.com)"

    def test_link_over_one_word_of_a_line(self, fitz_module):
        data = create_pdf_document([["Click Home for info"]], links={(1, 0): ("http://a.com", "Home")})

        assert convert(data) == "Click [Home](http://a.com) for info"

    def test_link_over_last_words_of_a_line(self, fitz_module):
        data = create_pdf_document(
            [["please read the user guide first"]], links={(1, 0): ("http://g.com", "user guide")}
        )

        assert convert(data) == "please read the [user guide](http://g.com) first"

    def test_internal_link_needs_opt_in(self, fitz_module):
        data = create_pdf_document([["Go to end"], ["The end"]], links={(1, 0): 2})

        assert convert(data).startswith("Go to end\n\n---")
        assert convert(data, resolve_internal_links=True).startswith("[Go to end](#page-2)\n\n---")

    def test_pages_are_separated_in_order(self, fitz_module):
        data = create_pdf_document([["page one text"], ["page two text"], ["page three text"]])

        assert convert(data) == "page one text\n\n---\n\npage two text\n\n---\n\npage three text"
        assert convert(data, page_separator="blank") == "page one text\n\npage two text\n\npage three text"
        assert convert(data, pages="2") == "page two text"

    def test_path_input_and_output(self, fitz_module, temp_dir):
        pdf_path = temp_dir / "doc.pdf"
        pdf_path.write_bytes(create_pdf_document([["from a file"]]))
        out_path = temp_dir / "doc.md"

        result = PdfToMarkdown(PdfOptions(preserve_links=False)).convert(pdf_path, output=out_path)

        assert result == "from a file"
        assert out_path.read_text(encoding="utf-8") == "from a file"

    def test_binary_stream_input(self, fitz_module, temp_dir):
        pdf_path = temp_dir / "doc.pdf"
        pdf_path.write_bytes(create_pdf_document([["streamed text"]]))

        with open(pdf_path, "rb") as handle:
            assert convert(handle) == "streamed text"

    @pytest.mark.cli
    @pytest.mark.usefixtures("restore_root_logger")
    def test_command_line(self, fitz_module, temp_dir):
        pdf_path = temp_dir / "doc.pdf"
        pdf_path.write_bytes(create_pdf_document([["SUMMARY", "all good"]]))
        out_path = temp_dir / "doc.md"

        assert main([str(pdf_path), "-o", str(out_path), "--log-level", "ERROR"]) == 0

        assert out_path.read_text(encoding="utf-8") == "## SUMMARY\n\nall good"
