"""
Paper Checker Module
Runs the formatting and double-blind checks on a paper and collects the
issues found, in a fixed order.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .anonymity import AnonymityDetector
from .config import CheckerConfig, LEEWAY_FOR_PAGE_NR, MIN_VERY_SHORT_PAGES
from .document import Document
from .patterns import FIGURE_CAPTION, search
from .roster import PaperMetaData
from .structure import PageStructureAnalyzer
from .style import StyleClassifier


logger = logging.getLogger(__name__)

# Issue tags
WRONG_TEMPLATE = "wrong-template"
OVERSIZE = "oversize"
VERY_SHORT = "paper-very-short"
REFERENCES_AFTER_LIMIT = "reference-page-after-limit"
CONTENT_AFTER_LIMIT = "non-references-after-limit"
REVEALING_EMAIL = "author-revealing-email"
REVEALING_AUTHOR_METADATA = "possibly-author-revealing-meta-data"
PREVIOUS_WORK = "previous-work-mentioned"
REVEALING_ROSTER_DATA = "possibly-identity-revealing-data"
INCONSISTENT_TITLES = "inconsistent-titles"


@dataclass(frozen=True)
class Issue:
    """A detected policy deviation with its evidence."""
    tag: str
    evidence: str
    quoted: bool = False

    def __str__(self) -> str:
        if self.quoted:
            return f"{self.tag}:``{self.evidence}''"
        return f"{self.tag}:{self.evidence}"

    def to_dict(self) -> dict:
        return {"tag": self.tag, "evidence": self.evidence}


class PdfChecker:
    """
    Conducts a series of checks on a paper to make sure it meets double
    blind and formatting standards.

    Takes ICSE (IEEE style, 10 + 2 pages) as starting point; limits and
    style are configurable.
    """

    def __init__(
        self,
        document: Document,
        config: Optional[CheckerConfig] = None,
        paper: Optional[PaperMetaData] = None
    ):
        """
        Initialize checker.

        Args:
            document: Document to check
            config: Page limits and target style (default: CheckerConfig())
            paper: Roster entry with the paper's known authors, if available
        """
        self.document = document
        self.config = config or CheckerConfig()
        self.paper = paper
        self.structure = PageStructureAnalyzer(document)
        self.anonymity = AnonymityDetector(document, self.structure)
        self.style = StyleClassifier(document)

    def page_count(self) -> int:
        return self.document.page_count()

    def file_name(self) -> str:
        return self.document.file_name()

    def title(self) -> Optional[str]:
        return self.structure.title()

    def page_contains_figure(self, pagenr: int) -> Optional[str]:
        """Figure or table caption, appendix or acknowledgments heading on a page."""
        return search(FIGURE_CAPTION, self.document.text_at_page(pagenr))

    def pages_after_limit(self) -> Optional[str]:
        """
        Find non-reference content on the pages beyond the page limit.

        Returns:
            The first figure/table/appendix text found scanning backwards,
            a summary of text preceding the References heading on the first
            page after the limit, or None if only references follow the limit
        """
        page_limit = self.config.page_limit
        if self.page_count() <= page_limit:
            return None

        for pagenr in range(self.page_count(), page_limit, -1):
            figure = self.page_contains_figure(pagenr)
            if figure is not None:
                return figure

        before_references = self.structure.preceding_text(page_limit + 1)
        if before_references is None or len(before_references) <= LEEWAY_FOR_PAGE_NR:
            return None

        content = before_references[:LEEWAY_FOR_PAGE_NR].replace("\n", "\\n")
        return f"{len(before_references)}-chars-before-REFERENCES: {content}"

    def compute_issues(self) -> List[Issue]:
        """
        Run all checks.

        Returns:
            Issues found, in a fixed order
        """
        config = self.config
        page_count = self.page_count()
        issues: List[Issue] = []

        if not self.style.matches(config.style):
            issues.append(Issue(WRONG_TEMPLATE, f"must-be-{config.style}"))

        if page_count > config.total_limit:
            issues.append(Issue(OVERSIZE, str(page_count)))
        elif page_count <= max(MIN_VERY_SHORT_PAGES, config.page_limit // 2):
            issues.append(Issue(VERY_SHORT, str(page_count)))

        references_page = self.structure.references_page()
        if references_page > config.page_limit + 1:
            issues.append(Issue(REFERENCES_AFTER_LIMIT, str(references_page)))

        quoted_checks = [
            (CONTENT_AFTER_LIMIT, self.pages_after_limit),
            (REVEALING_EMAIL, self.anonymity.find_emails),
            (REVEALING_AUTHOR_METADATA, self.anonymity.find_author_identity),
            (PREVIOUS_WORK, self.anonymity.previous_work),
            (REVEALING_ROSTER_DATA, lambda: self.anonymity.revealing_metadata(self.paper)),
        ]
        if config.check_titles:
            quoted_checks.append(
                (INCONSISTENT_TITLES, lambda: self.anonymity.titles_consistent(self.paper))
            )

        for tag, check in quoted_checks:
            evidence = check()
            if evidence is not None:
                issues.append(Issue(tag, evidence, quoted=True))

        logger.debug("%s: %d issue(s)", self.file_name(), len(issues))
        return issues

    def report_line(self, issues: Optional[List[Issue]] = None) -> str:
        """
        One-line summary for batch reports.

        Args:
            issues: Previously computed issues (computed if omitted)

        Returns:
            File name, issues and title on a single line
        """
        if issues is None:
            issues = self.compute_issues()
        if issues:
            result = "issues-found {" + ", ".join(str(issue) for issue in issues) + "}"
        else:
            result = "no-issues   "
        return f"{self.file_name():<24} {result} ``{self.title() or ''}''"
