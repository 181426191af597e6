import pytest

from blindcheck.structure import (
    PageStructureAnalyzer, count_line_numbers, strip_line_numbers,
)


def analyzer(document_factory, *pages, **metadata):
    return PageStructureAnalyzer(document_factory(*pages, **metadata))


class TestReferencesPage:
    @pytest.mark.parametrize("heading", [
        "References",
        "    References",
        "Publications",
        "R E F E R E N C E S",
        "REFERENCES",
    ])
    def test_heading_found(self, document_factory, heading):
        page = f"TEXT-BEFORE\n{heading}\nTEXT-AFTER"
        assert analyzer(document_factory, page).references_page() == 1

    @pytest.mark.parametrize("line", [
        "Reference\n",
        "My References\n",
        "References of this paper\n",
    ])
    def test_heading_not_found(self, document_factory, line):
        page = f"TEXT-BEFORE\n{line}TEXT-AFTER"
        assert analyzer(document_factory, page).references_page() == 0

    def test_multi_page(self, document_factory):
        structure = analyzer(
            document_factory,
            "Title page\nAbstract",
            "Introduction",
            "References",
            "[1] Test Infected",
        )
        assert structure.references_page() == 3

    def test_last_heading_wins(self, document_factory):
        structure = analyzer(document_factory, "References\nintro", "body", "REFERENCES\n[1] X")
        assert structure.references_page() == 3

    def test_empty_document(self, document_factory):
        assert analyzer(document_factory).references_page() == 0


class TestPrecedingText:
    def test_text_before_heading(self, document_factory):
        structure = analyzer(document_factory, "ABCDEFGHIJ\nREFERENCES\n[1] Test Infected")
        assert structure.preceding_text(1) == "ABCDEFGHIJ\n"

    def test_heading_at_top(self, document_factory):
        structure = analyzer(document_factory, "REFERENCES\n[1] Test Infected")
        assert structure.preceding_text(1) == ""

    def test_no_heading(self, document_factory):
        assert analyzer(document_factory, "Just text").preceding_text(1) is None

    def test_out_of_range(self, document_factory):
        with pytest.raises(IndexError):
            analyzer(document_factory, "Just text").preceding_text(2)


class TestLineNumbers:
    def test_counting(self):
        assert count_line_numbers(["10", "11", "12", "13", "HELLO WORLD"]) == 4

    def test_counting_non_consecutive(self):
        assert count_line_numbers(["10", "11", "14", "15", "HELLO WORLD"]) == 2

    def test_counting_none(self):
        assert count_line_numbers(["HELLO WORLD"]) == 0

    def test_counting_empty(self):
        assert count_line_numbers([]) == 0

    def test_stripping_non_sequential(self):
        assert strip_line_numbers("10\n11\n14\n15\nHELLO WORLD") == "14\n15\nHELLO WORLD\n"

    def test_stripping_sequential(self):
        assert strip_line_numbers("10\n11\n12\n13\nHELLO WORLD") == "HELLO WORLD\n"

    def test_stripping_is_idempotent(self):
        once = strip_line_numbers("1\n2\n3\nHELLO\nWORLD")
        assert strip_line_numbers(once) == once
        assert count_line_numbers(once.split("\n")) == 0


class TestStripHeader:
    def test_unnumbered_title_header(self, document_factory):
        pages = [
            "Title\nAuthors\nAbstract",
            "Conference Header\nIntroduction",
            "Title Header\nRelated Work",
        ]
        structure = analyzer(document_factory, *pages)
        assert structure.strip_header(pages[1]) == "Introduction"

    def test_no_title_header(self, document_factory):
        pages = ["Title\nAbstract", "Header\nIntroduction", "Other\nRelated Work"]
        structure = analyzer(document_factory, *pages)
        assert structure.strip_header(pages[1]) == pages[1]

    def test_short_document_untouched(self, document_factory):
        pages = ["Title\nAbstract", "Title\nIntroduction"]
        structure = analyzer(document_factory, *pages)
        assert structure.strip_header(pages[1]) == pages[1]

    def test_numbered_two_columns(self, document_factory):
        left = "\n".join(str(n) for n in range(1, 41))
        right = "\n".join(str(n) for n in range(41, 81))
        page = f"{left}\nConference'21, Somewhere\n{right}\nLeft text\nRight text"
        structure = analyzer(document_factory, page)
        assert structure.strip_header(page) == "Left text\nRight text"

    def test_numbered_three_line_header(self, document_factory):
        left = "\n".join(str(n) for n in range(1, 41))
        right = "\n".join(str(n) for n in range(41, 81))
        page = f"{left}\nHeader one\nHeader two\nHeader three\n{right}\nBody"
        structure = analyzer(document_factory, page)
        assert structure.strip_header(page) == "Body"

    def test_numbered_left_column_only(self, document_factory):
        left = "\n".join(str(n) for n in range(1, 41))
        page = f"{left}\nHeader\n1\n2\nBody"
        structure = analyzer(document_factory, page)
        assert structure.strip_header(page) == "1\n2\nBody"


class TestTitle:
    def test_first_line(self, document_factory):
        assert analyzer(document_factory, "Test Infected\nAbstract\nBla bla").title() == "Test Infected"

    def test_numbered_first_line(self, document_factory):
        structure = analyzer(document_factory, "1\n2\n3\nTest Infected\nAbstract\nBla bla")
        assert structure.title() == "Test Infected"

    def test_ieee_copyright_skipped(self, document_factory):
        structure = analyzer(document_factory, "XXXX 20XX IEEE \nTest Infected\nAbstract")
        assert structure.title() == "Test Infected"

    def test_content_preferred_over_metadata(self, document_factory):
        structure = analyzer(
            document_factory, "Test Infected: A long title\nAbstract\n", title="Test Infected"
        )
        assert structure.title() == "Test Infected: A long title"

    def test_empty_page_uses_metadata(self, document_factory):
        structure = analyzer(document_factory, "", "Page 2\nAbstract", title="Test Infected")
        assert structure.title() == "Test Infected"

    def test_no_title(self, document_factory):
        assert analyzer(document_factory, "").title() is None

    def test_empty_document_uses_metadata(self, document_factory):
        assert analyzer(document_factory, title="X").title() == "X"

    def test_title_only(self, document_factory):
        assert analyzer(document_factory, "Just a Title\n").title() == "Just a Title"

    def test_whitespace_trimmed(self, document_factory):
        assert analyzer(document_factory, "   Test Infected   \nFnerk\n").title() == "Test Infected"

    def test_content_title_ignores_metadata(self, document_factory):
        assert analyzer(document_factory, "", title="X").content_title() is None
