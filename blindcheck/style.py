"""
Style Classifier Module
Decides whether a paper was typeset with the ACM or the IEEE template.
"""

import logging

from .config import MIN_NUMBERED_COLUMN, STYLE_ACM, STYLE_IEEE
from .document import Document
from .patterns import (
    ACM_CREATOR, ACM_PERMISSIONS, ACM_REFERENCE_FORMAT, IEEE_COPYRIGHT,
    literal, search,
)
from .structure import count_line_numbers, first_line, split_lines


logger = logging.getLogger(__name__)


class StyleClassifier:
    """Classifies the formatting style of a document."""

    def __init__(self, document: Document):
        self.document = document

    def _first_page(self) -> str:
        if self.document.page_count() == 0:
            return ""
        return self.document.text_at_page(1)

    def is_acm(self) -> bool:
        """
        Establish whether the paper was created with the acmart style.

        Tries, in order: the creator metadata, the ACM permissions email,
        the "ACM Reference format" block and the review line numbers.
        """
        creator = self.document.metadata_creator()
        if creator is not None and ACM_CREATOR.search(creator):
            logger.debug("ACM creator metadata: %s", creator)
            return True

        page1 = self._first_page()
        if search(literal(ACM_PERMISSIONS), page1):
            return True
        if search(literal(ACM_REFERENCE_FORMAT), page1):
            return True

        # acmart review mode numbers every line
        return count_line_numbers(split_lines(page1)) > MIN_NUMBERED_COLUMN

    def is_ieee(self) -> bool:
        """
        Establish whether the paper was created with the IEEE style.

        No positive test exists, so any paper that is not ACM counts as IEEE.
        """
        if self.is_acm():
            return False
        if IEEE_COPYRIGHT.search(first_line(self._first_page())):
            # An old MS Word template, but ok for now
            logger.debug("IEEE copyright line on page 1 of %s", self.document.file_name())
        return True

    def classify(self) -> str:
        return STYLE_ACM if self.is_acm() else STYLE_IEEE

    def matches(self, style: str) -> bool:
        """Check whether the document conforms to the named style."""
        if style == STYLE_ACM:
            return self.is_acm()
        if style == STYLE_IEEE:
            return self.is_ieee()
        raise ValueError(f"Unknown style '{style}'")
