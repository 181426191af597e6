"""
Author Roster Module
Loads known authors per paper from a HotCRP author export (CSV).

Expected columns: paper,title,first,last,affiliation,email
with one row per author.
"""

import csv
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, TextIO


REQUIRED_COLUMNS = ['paper', 'title', 'first', 'last', 'email']

# HotCRP download names look like "icse2021-paper123.pdf"
PAPER_FILE_PATTERN = re.compile(r'-paper(?P<id>[^-]+)\.pdf$', re.IGNORECASE)


class RosterError(ValueError):
    """Raised when a roster file cannot be loaded."""


@dataclass
class Author:
    """Author of a paper."""
    first_name: str
    last_name: str
    email: str

    @property
    def name(self) -> str:
        # LaTeX escapes such as K{\"a}stner are kept as-is
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class PaperMetaData:
    """Roster entry for a single paper."""
    id: str
    title: Optional[str] = None
    authors: List[Author] = field(default_factory=list)

    def add_author(self, author: Author):
        self.authors.append(author)


class Roster:
    """Papers and their authors, indexed by paper id."""

    def __init__(self):
        self.papers: Dict[str, PaperMetaData] = {}

    def __len__(self):
        return len(self.papers)

    def get_paper(self, paper_id: str) -> Optional[PaperMetaData]:
        return self.papers.get(paper_id)

    def load_csv(self, csv_path: str):
        """
        Load a HotCRP author export from disk.

        Args:
            csv_path: Path to CSV file

        Raises:
            FileNotFoundError: If the file does not exist
            RosterError: If the file is malformed
        """
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(f"Roster file not found: {csv_path}")
        with open(path, newline='', encoding='utf-8') as f:
            self.load(f)

    def load(self, stream: TextIO):
        """
        Load a HotCRP author export from an open text stream.

        The roster is only updated if every row is valid.

        Raises:
            RosterError: On malformed CSV, missing columns or rows without a paper id
        """
        reader = csv.DictReader(stream)
        try:
            papers = self._read_rows(reader)
        except csv.Error as e:
            raise RosterError(f"Roster row {reader.line_num}: {e}") from e
        self.papers.update(papers)

    def _read_rows(self, reader: csv.DictReader) -> Dict[str, PaperMetaData]:
        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise RosterError(f"Roster is missing column(s): {', '.join(missing)}")

        papers: Dict[str, PaperMetaData] = {}
        for row in reader:
            paper_id = (row.get('paper') or '').strip()
            if not paper_id:
                raise RosterError(f"Roster row {reader.line_num} has no paper id")

            paper = papers.get(paper_id)
            if paper is None:
                known = self.papers.get(paper_id)
                if known is not None:
                    # Copy, so a failing load leaves known papers untouched
                    paper = PaperMetaData(known.id, known.title, list(known.authors))
                else:
                    paper = PaperMetaData(paper_id, (row.get('title') or '').strip() or None)
                papers[paper_id] = paper
            paper.add_author(Author(
                first_name=(row.get('first') or '').strip(),
                last_name=(row.get('last') or '').strip(),
                email=(row.get('email') or '').strip(),
            ))
        return papers

    def paper_for(self, file_name: str) -> Optional[PaperMetaData]:
        """
        Find the roster entry for a submitted file.

        Args:
            file_name: Name of the PDF, e.g. "icse2021-paper123.pdf"

        Returns:
            Paper metadata, or None if the paper is unknown
        """
        name = Path(file_name).name
        match = PAPER_FILE_PATTERN.search(name)
        paper_id = match.group('id') if match else Path(name).stem
        return self.get_paper(paper_id)
