from typing import List, Optional

import pytest

from blindcheck.document import Document
from blindcheck.roster import Author, PaperMetaData


class FakeDocument(Document):
    """In-memory document with fixed page texts and metadata."""

    def __init__(
        self,
        pages: List[str],
        author: Optional[str] = None,
        creator: Optional[str] = None,
        title: Optional[str] = None,
        file_name: str = "paper.pdf"
    ):
        self.pages = list(pages)
        self.author = author
        self.creator = creator
        self.title = title
        self.name = file_name

    def page_count(self) -> int:
        return len(self.pages)

    def text_at_page(self, pagenr: int) -> str:
        self.check_page(pagenr)
        return self.pages[pagenr - 1]

    def full_text(self) -> str:
        return "\n".join(self.pages)

    def metadata_author(self) -> Optional[str]:
        return self.author

    def metadata_creator(self) -> Optional[str]:
        return self.creator

    def metadata_title(self) -> Optional[str]:
        return self.title

    def file_name(self) -> str:
        return self.name

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def make_document(*pages: str, **metadata) -> FakeDocument:
    """Document whose pages end in a newline, as extracted text does."""
    return FakeDocument([page + "\n" for page in pages], **metadata)


def make_paper(title, first, last, email, paper_id="1234") -> PaperMetaData:
    paper = PaperMetaData(paper_id, title)
    paper.add_author(Author(first_name=first, last_name=last, email=email))
    return paper


@pytest.fixture
def document_factory():
    return make_document


@pytest.fixture
def paper_factory():
    return make_paper
