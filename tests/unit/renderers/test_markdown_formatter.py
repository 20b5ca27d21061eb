"""Unit tests for Markdown page formatting, link splicing and assembly."""

import pytest

from pdfmd.exceptions import ValidationError
from pdfmd.models import CandidateLink, LinkPosition
from pdfmd.options import MarkdownOptions
from pdfmd.renderers.markdown import (
    assemble,
    format_document,
    format_page,
    format_structure,
    reflow,
    splice_links,
)


def make_link(text, url, x=0.0, y=100.0, page=1):
    return CandidateLink(text=text, url=url, position=LinkPosition(x=x, y=y, page=page))


@pytest.mark.unit
class TestHeaders:
    """Header formatting."""

    def test_header_is_prefixed(self):
        assert format_page("INTRODUCTION") == "## INTRODUCTION"

    def test_header_formatting_is_idempotent(self):
        """Formatting an already prefixed header does not prefix it again."""
        assert format_page("## INTRODUCTION") == "## INTRODUCTION"

    def test_formatting_a_formatted_page_changes_nothing(self):
        text = "INTRODUCTION\nSome text\nthat wraps\n- one\n- two\nCLOSING"

        once = format_page(text)

        assert format_page(once) == once

    def test_header_gets_blank_lines_around_it(self):
        text = "Intro text here\nSUMMARY\nMore text"

        assert format_page(text) == "Intro text here\n\n## SUMMARY\n\nMore text"

    def test_adjacent_headers_stay_together(self):
        assert format_page("TITLE\nSUBTITLE") == "## TITLE\n## SUBTITLE"


@pytest.mark.unit
class TestLists:
    """List detection and continuation."""

    def test_list_continuation_ends_at_blank_line(self):
        text = "- Item one\n  continued\n\nNot a list"

        result = format_page(text)

        assert result == "- Item one\n  continued\n\nNot a list"

    def test_bullet_glyphs_become_dashes(self):
        assert format_page("• Apple\n• Banana") == "- Apple\n- Banana"

    def test_ordered_items_keep_numbering(self):
        assert format_page("1. First\n2) Second") == "1. First\n2) Second"

    def test_list_is_separated_from_preceding_paragraph(self):
        assert format_page("some intro text\n- one\n- two") == "some intro text\n\n- one\n- two"

    def test_dedented_plain_line_ends_list(self):
        assert format_page("- one\nplain text after") == "- one\n\nplain text after"

    def test_list_items_are_not_reflowed_together(self):
        assert format_structure("- one\n- two") == "- one\n- two"


@pytest.mark.unit
class TestReflow:
    """Paragraph reflow."""

    def test_hard_wraps_are_joined(self):
        assert reflow("first line\nsecond line") == "first line second line"

    def test_paragraph_breaks_survive_and_collapse(self):
        assert reflow("first line\nsecond line\n\n\n\nnext paragraph") == "first line second line\n\nnext paragraph"

    def test_block_lines_are_not_joined(self):
        text = "## Heading\ntext below\n- item\n  indented\n---\nafter rule"

        assert reflow(text) == "## Heading\ntext below\n- item\n  indented\n---\nafter rule"

    def test_page_paragraph_is_reflowed(self):
        text = "This is the first\nline of a paragraph."

        assert format_page(text) == "This is the first line of a paragraph."

    def test_raw_mode_keeps_lines(self):
        text = "INTRODUCTION\nline one\nline two"

        assert format_page(text, apply_heuristics=False) == text


@pytest.mark.unit
class TestSpliceLinks:
    """Inserting Markdown links into page text."""

    def test_exact_substitution(self):
        result = splice_links("Click Home for info", [make_link("Home", "http://a.com")])

        assert result == "Click [Home](http://a.com) for info"
        assert result.count("[Home](http://a.com)") == 1

    def test_existing_link_is_not_wrapped_again(self):
        text = "Visit [Home](http://x.com) today"

        assert splice_links(text, [make_link("Home", "http://x.com")]) == text

    def test_page_with_existing_link_is_unchanged(self):
        text = "Visit [Home](http://x.com) today"

        assert format_page(text, [make_link("Home", "http://x.com")]) == text

    def test_exact_substitution_through_format_page(self):
        result = format_page("Click Home for info", [make_link("Home", "http://a.com")])

        assert result == "Click [Home](http://a.com) for info"

    def test_only_first_unlinked_occurrence_is_replaced(self):
        result = splice_links("Home and Home", [make_link("Home", "u")])

        assert result == "[Home](u) and Home"

    def test_two_candidates_with_same_text_take_successive_occurrences(self):
        links = [make_link("Home", "u", x=0), make_link("Home", "u", x=100)]

        assert splice_links("Home and Home", links) == "[Home](u) and [Home](u)"

    def test_longer_text_is_placed_first(self):
        links = [make_link("Python", "u2"), make_link("Python docs", "u1")]

        result = splice_links("Read the Python docs and Python", links)

        assert result == "Read the [Python docs](u1) and [Python](u2)"

    def test_word_boundaries_are_respected(self):
        result = splice_links("Homework at Home", [make_link("Home", "u")])

        assert result == "Homework at [Home](u)"

    def test_substring_fallback(self):
        result = splice_links("See Homepage", [make_link("Home", "u")])

        assert result == "See [Home](u)page"

    def test_whitespace_tolerant_fallback(self):
        result = splice_links("Visit Goo gle now", [make_link("Google", "http://g.com")])

        assert result == "Visit [Goo gle](http://g.com) now"

    def test_strict_mode_skips_fallbacks(self):
        text = "Visit Goo gle now"

        assert splice_links(text, [make_link("Google", "http://g.com")], loose=False) == text

    def test_missing_text_leaves_page_untouched(self):
        text = "Nothing to link here"

        assert splice_links(text, [make_link("Absent", "u")]) == text

    def test_destination_characters_are_escaped(self):
        result = splice_links("Read the doc", [make_link("doc", "http://x.com/a b(1)")])

        assert result == "Read the [doc](http://x.com/a%20b%281%29)"

    def test_candidates_without_url_or_text_are_ignored(self):
        text = "Click Home"

        assert splice_links(text, [make_link("Home", "  "), make_link("   ", "u")]) == text

    def test_links_spliced_in_raw_mode(self):
        result = format_page("Click Home\nfor info", [make_link("Home", "u")], apply_heuristics=False)

        assert result == "Click [Home](u)\nfor info"

    def test_strict_matching_option(self):
        options = MarkdownOptions(loose_link_matching=False)

        assert format_page("see the Homepage", [make_link("Home", "u")], options) == "see the Homepage"


@pytest.mark.unit
class TestAssemble:
    """Joining pages."""

    def test_rule_separator(self):
        assert assemble(["a", "b"]) == "a\n\n---\n\nb"

    def test_blank_separator(self):
        assert assemble(["a", "b"], separator="blank") == "a\n\nb"

    def test_failed_page_is_an_empty_section(self):
        assert assemble(["a", "", "c"]) == "a\n\n---\n\n\n\n---\n\nc"

    def test_only_outer_whitespace_is_trimmed(self):
        assert assemble(["\n a  ", "b \n"]) == "a  \n\n---\n\nb"

    def test_single_page(self):
        assert assemble(["only"]) == "only"

    def test_no_pages(self):
        assert assemble([]) == ""

    def test_unknown_separator(self):
        with pytest.raises(ValidationError):
            assemble(["a"], separator="dots")

    def test_format_document_uses_configured_separator(self):
        assert format_document(["a", "b"], MarkdownOptions(page_separator="blank")) == "a\n\nb"
        assert format_document(["a", "b"]) == "a\n\n---\n\nb"
