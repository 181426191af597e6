"""
Anonymity Detector Module
Finds signals that a double-blind submission reveals its authors.

All checks are heuristics: they flag text for human review, and a clean
result does not guarantee the paper is anonymous.
"""

import logging
import re
from typing import List, Optional, Pattern, Tuple

from .document import Document
from .patterns import (
    BLINDED_IDENTITY, EMAIL, FLAGS,
    literal, normalize_title, previous_work_pattern, search,
)
from .roster import PaperMetaData
from .structure import PageStructureAnalyzer


logger = logging.getLogger(__name__)

# Title sources, in reporting precedence
TEXT_TITLE = "text-title"
PDF_TITLE = "pdf-title"
ROSTER_TITLE = "roster-title"


def is_blinded_identity(text: str) -> bool:
    """
    Check whether a name or email looks intentionally anonymized,
    e.g. "anonymous@fnerk.com" or "john.doe@example.org".
    """
    return BLINDED_IDENTITY.search(text) is not None


class AnonymityDetector:
    """Detects author-revealing content in a document."""

    def __init__(self, document: Document, structure: Optional[PageStructureAnalyzer] = None):
        """
        Initialize detector.

        Args:
            document: Document to inspect
            structure: Structure analyzer for the same document (created if omitted)
        """
        self.document = document
        self.structure = structure or PageStructureAnalyzer(document)

    def _search_first_page(self, pattern: Pattern) -> Optional[str]:
        if self.document.page_count() == 0:
            return None
        return search(pattern, self.document.text_at_page(1))

    def revealing_email(self, email: str) -> Optional[str]:
        """
        Search page 1 for a literal text, such as a specific email address.

        Args:
            email: Text to look for (not a regular expression)

        Returns:
            Matching text, or None
        """
        return self._search_first_page(literal(email))

    def find_emails(self) -> Optional[str]:
        """
        Find an email address on page 1 that is not an anonymization placeholder.

        Returns:
            First email-like text on page 1, or None if absent or blinded
        """
        found = self._search_first_page(EMAIL)
        if found is not None and is_blinded_identity(found):
            logger.debug("Blinded email on page 1: %s", found)
            return None
        return found

    def find_author_identity(self) -> Optional[str]:
        """Author set in the document metadata, unless it is a placeholder."""
        author = self.document.metadata_author()
        if author is None or is_blinded_identity(author):
            return None
        return author

    def previous_work(self) -> Optional[str]:
        """
        Identify identity-revealing references to previous work,
        such as "our previous work [12]".

        This check produces many false positives and negatives; treat the
        result as advisory only.
        """
        # TODO: look up the cited reference, as it is sometimes properly anonymized.
        return search(previous_work_pattern(), self.document.full_text())

    def revealing_metadata(self, paper: Optional[PaperMetaData]) -> Optional[str]:
        """
        Find names or emails of the paper's known authors on page 1.

        Args:
            paper: Roster entry for the paper, if available

        Returns:
            Comma-separated list of matches, or None if nothing was found
        """
        if paper is None or self.document.page_count() == 0:
            return None

        page1 = self.document.text_at_page(1)
        found: List[str] = []
        for author in paper.authors:
            alternatives = [
                re.escape(text)
                for text in (author.name, author.email)
                if text and text.strip()
            ]
            if not alternatives:
                continue
            match = search(re.compile("|".join(alternatives), FLAGS), page1)
            if match:
                found.append(match)

        return ",".join(found) if found else None

    def titles_consistent(self, paper: Optional[PaperMetaData]) -> Optional[str]:
        """
        Compare the typeset title with the PDF metadata and roster titles.

        Subtitles after a colon, punctuation and case are ignored, and near
        identical titles are accepted. This check gives false alarms on
        legitimately revised titles.

        Args:
            paper: Roster entry for the paper, if available

        Returns:
            Description of the first disagreeing pair, or None if consistent
        """
        sources = [
            (TEXT_TITLE, self.structure.content_title()),
            (PDF_TITLE, self.document.metadata_title()),
            (ROSTER_TITLE, paper.title if paper else None),
        ]
        available = [(label, title) for label, title in sources if title]
        if len(available) < 2:
            return None

        for i, (label, title) in enumerate(available):
            for other_label, other in available[i + 1:]:
                if not titles_agree(title, other):
                    return f"{label}:``{title}'' <> {other_label}:``{other}''"
        return None


def _title_variants(title: str) -> Tuple[str, ...]:
    full = normalize_title(title)
    main = normalize_title(title.split(":", 1)[0])
    return (full, main) if main and main != full else (full,)


def _one_edit_apart(a: str, b: str) -> bool:
    if len(a) == len(b):
        return sum(x != y for x, y in zip(a, b)) == 1
    if abs(len(a) - len(b)) != 1:
        return False
    shorter, longer = sorted((a, b), key=len)
    return any(longer[:i] + longer[i + 1:] == shorter for i in range(len(longer)))


def _nearly_equal(a: str, b: str) -> bool:
    # A single typo in one word; numbers such as years must match exactly
    words, other_words = a.split(), b.split()
    if len(words) != len(other_words):
        return False
    differing = [(x, y) for x, y in zip(words, other_words) if x != y]
    if len(differing) != 1:
        return False
    x, y = differing[0]
    return not (x.isdigit() or y.isdigit()) and _one_edit_apart(x, y)


def titles_agree(first: str, second: str) -> bool:
    """
    Check whether two titles are the same up to case, punctuation and subtitle.

    One mistyped character in a single non-numeric word is tolerated.
    """
    for a in _title_variants(first):
        for b in _title_variants(second):
            if a == b or _nearly_equal(a, b):
                return True
    return False
