"""
Document Access Module
Page text and metadata of a submitted paper.

The checks only depend on the abstract Document capability, so they can be
exercised with in-memory documents. PdfDocument is the PyMuPDF-backed
implementation used for real submissions.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

import fitz  # PyMuPDF


class Document(ABC):
    """Read-only view of a paper: 1-indexed page texts plus metadata."""

    @abstractmethod
    def page_count(self) -> int:
        ...

    @abstractmethod
    def text_at_page(self, pagenr: int) -> str:
        """
        Return the text of a specific page.

        Args:
            pagenr: Page number, from 1 to page_count()

        Raises:
            IndexError: If the page number is out of range
        """

    @abstractmethod
    def full_text(self) -> str:
        ...

    @abstractmethod
    def metadata_author(self) -> Optional[str]:
        ...

    @abstractmethod
    def metadata_creator(self) -> Optional[str]:
        ...

    @abstractmethod
    def metadata_title(self) -> Optional[str]:
        ...

    @abstractmethod
    def file_name(self) -> str:
        ...

    def check_page(self, pagenr: int):
        """Fail fast on page numbers outside 1..page_count()."""
        if not 1 <= pagenr <= self.page_count():
            raise IndexError(
                f"Page {pagenr} out of range for {self.file_name()} "
                f"({self.page_count()} pages)"
            )


def _clean_metadata(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class PdfDocument(Document):
    """PDF paper opened with PyMuPDF."""

    def __init__(self, pdf_path: str):
        """
        Open a PDF document.

        Args:
            pdf_path: Path to PDF file
        """
        self.pdf_path = pdf_path
        self.doc = fitz.open(pdf_path)
        self._pages: Dict[int, str] = {}

    def close(self):
        """Close the PDF document."""
        if self.doc:
            self.doc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def page_count(self) -> int:
        return len(self.doc)

    def text_at_page(self, pagenr: int) -> str:
        self.check_page(pagenr)
        if pagenr not in self._pages:
            # PyMuPDF pages are 0-indexed
            self._pages[pagenr] = self.doc[pagenr - 1].get_text("text")
        return self._pages[pagenr]

    def full_text(self) -> str:
        return "".join(
            self.text_at_page(pagenr)
            for pagenr in range(1, self.page_count() + 1)
        )

    def metadata_author(self) -> Optional[str]:
        """
        Author name set in the PDF metadata.
        A properly used acmart template sets it to "Anonymous Author(s)".
        """
        return _clean_metadata(self._metadata().get("author"))

    def metadata_creator(self) -> Optional[str]:
        """
        Creating tool, e.g. "LaTeX with acmart ..." for the ACM template.
        """
        return _clean_metadata(self._metadata().get("creator"))

    def metadata_title(self) -> Optional[str]:
        return _clean_metadata(self._metadata().get("title"))

    def file_name(self) -> str:
        return Path(self.pdf_path).name

    def _metadata(self) -> Dict[str, str]:
        return self.doc.metadata or {}
