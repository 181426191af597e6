"""
Double-blind paper checker.

This package screens submitted papers against a conference's formatting and
double-blind policy:
- patterns: Regular expressions shared by the checks
- document: Document capability and PyMuPDF implementation
- structure: References section, title and page furniture
- anonymity: Author-revealing emails, metadata and self-citations
- style: ACM vs IEEE template classification
- checker: Issue collection per paper
- roster: HotCRP author roster
- output_generator: JSON output formatting
"""

from .config import CheckerConfig, STYLE_ACM, STYLE_IEEE, STYLES
from .document import Document, PdfDocument
from .structure import PageStructureAnalyzer, count_line_numbers, strip_line_numbers
from .anonymity import AnonymityDetector, is_blinded_identity, titles_agree
from .style import StyleClassifier
from .checker import Issue, PdfChecker
from .roster import Author, PaperMetaData, Roster, RosterError
from .output_generator import OutputGenerator

__all__ = [
    'CheckerConfig',
    'STYLE_ACM',
    'STYLE_IEEE',
    'STYLES',
    'Document',
    'PdfDocument',
    'PageStructureAnalyzer',
    'count_line_numbers',
    'strip_line_numbers',
    'AnonymityDetector',
    'is_blinded_identity',
    'titles_agree',
    'StyleClassifier',
    'Issue',
    'PdfChecker',
    'Author',
    'PaperMetaData',
    'Roster',
    'RosterError',
    'OutputGenerator',
]

__version__ = '1.0.0'
