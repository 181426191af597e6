"""
Page Structure Analyzer Module
Locates the references section and the title, and strips page furniture
(line numbers, running headers) from page text.
"""

import logging
from typing import List, Optional

from .config import MAX_HEADER_LINES, MIN_NUMBERED_COLUMN
from .document import Document
from .patterns import IEEE_COPYRIGHT, REFERENCES_HEADING, is_line_number


logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    """Split text into lines, ignoring trailing empty lines."""
    lines = text.split("\n")
    while len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def count_line_numbers(lines: List[str]) -> int:
    """
    Count how many of the starting lines are pure line numbers,
    i.e., a consecutive series of numbers on separate lines.

    Args:
        lines: Lines potentially starting with line numbers

    Returns:
        Number of leading lines that are consecutive numbers
    """
    count = 0
    previous = None
    for line in lines:
        if not is_line_number(line):
            # First line of real text
            break
        number = int(line)
        if previous is not None and number != previous + 1:
            # Numbers not consecutive
            break
        previous = number
        count += 1
    return count


def strip_line_numbers(text: str) -> str:
    """
    Strip initial line numbers from text, if present (as is the case for ACM
    review formatting).

    Args:
        text: Text potentially starting with line numbers

    Returns:
        Remaining text, terminated by a newline
    """
    lines = split_lines(text)
    count = count_line_numbers(lines)
    return "\n".join(lines[count:]) + "\n"


def first_line(text: str) -> str:
    return text.split("\n", 1)[0]


class PageStructureAnalyzer:
    """Finds structural landmarks in a document's page texts."""

    def __init__(self, document: Document):
        self.document = document

    def references_page(self) -> int:
        """
        Find the page of the references section.

        Searches from the back, as the References heading is expected once,
        near the end of the paper.

        Returns:
            Page number of the references section, or 0 if not found
        """
        for pagenr in range(self.document.page_count(), 0, -1):
            if REFERENCES_HEADING.search(self.document.text_at_page(pagenr)):
                logger.debug("References found on page %d of %s", pagenr, self.document.file_name())
                return pagenr
        return 0

    def preceding_text(self, pagenr: int) -> Optional[str]:
        """
        Text on a references page that precedes the References heading.

        Args:
            pagenr: Page that may contain the references section

        Returns:
            Header-stripped text before the heading (empty if references start
            at the top of the page), or None if the page has no heading
        """
        page_text = self.document.text_at_page(pagenr)
        match = REFERENCES_HEADING.search(page_text)
        if match is None:
            return None
        return self.strip_header(page_text[:match.start()])

    def strip_header(self, page_text: str) -> str:
        """
        Remove line numbers and the running header from (part of) a page.

        In numbered two-column layouts the text reads as the left column's
        numbers, the header, then the right column's numbers.
        """
        lines = split_lines(page_text)
        left_column = count_line_numbers(lines)

        if not (MIN_NUMBERED_COLUMN < left_column < len(lines)):
            return self.strip_unnumbered_header(page_text)

        # The header is in lines[left_column], but can take up to three lines.
        header_end = left_column
        for _ in range(MAX_HEADER_LINES - 1):
            if header_end + 1 < len(lines) and not is_line_number(lines[header_end + 1]):
                header_end += 1
            else:
                break
        logger.debug("Stripping numbered header: %r", lines[left_column:header_end + 1])

        remaining = lines[header_end + 1:]
        right_column = count_line_numbers(remaining)
        if right_column > MIN_NUMBERED_COLUMN:
            return "\n".join(remaining[right_column:])
        # Left column numbered, but right one not
        return "\n".join(remaining)

    def strip_unnumbered_header(self, page_text: str) -> str:
        """
        Drop a one-line running title header, if the document uses one.

        Odd pages of ACM papers can carry the title as header; page 3 is used
        to find out whether that is the case.
        """
        if self.document.page_count() < 3:
            # Cannot determine whether headers are used
            return page_text

        title = self.title()
        page3_header = first_line(self.document.text_at_page(3))
        if title and page3_header.startswith(title):
            logger.debug("Stripping title header from page text")
            return page_text.split("\n", 1)[-1]
        return page_text

    def content_title(self) -> Optional[str]:
        """
        Title as typeset on the first page, ignoring metadata.

        Returns:
            First non-blank line of page 1 (skipping line numbers and IEEE
            copyright boilerplate), or None
        """
        if self.document.page_count() == 0:
            return None

        page1 = strip_line_numbers(self.document.text_at_page(1))
        candidates = [line.strip() for line in split_lines(page1) if line.strip()]
        if candidates and IEEE_COPYRIGHT.search(candidates[0]):
            # Old MS Word template puts "XXXX 20XX IEEE" above the title
            candidates = candidates[1:]
        return candidates[0] if candidates else None

    def title(self) -> Optional[str]:
        """
        Obtain the title of the document.

        The first line of page 1 is assumed to hold the title; the metadata
        title is rarely set and only used as fallback.

        Returns:
            Title, or None if neither page 1 nor the metadata provide one
        """
        title = self.content_title()
        if title is None:
            return self.document.metadata_title()
        return title
