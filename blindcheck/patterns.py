"""
Pattern Library Module
Regular expressions shared by the structure, anonymity and style checks.

All patterns are case-insensitive and multiline. A search returns the
first match only, stripped of surrounding whitespace.
"""

import re
from functools import lru_cache
from typing import Optional, Pattern


FLAGS = re.MULTILINE | re.IGNORECASE

# Section heading on its own line
REFERENCES_HEADING = re.compile(
    r'^\s*((REFERENCES)|(R E F E R E N C E S)|(PUBLICATIONS))\s*$',
    FLAGS
)

# Floats and back matter that must not appear beyond the page limit
FIGURE_CAPTION = re.compile(
    r'^\s*((((Fig\.)|(Figure))\s*\d+)|(TABLE\s*[IVX]+)|(APPENDIX)|ACKNOWLEDGE?MENTS)',
    FLAGS
)

# Authors can be sloppy when writing their email in the paper,
# e.g. "{bill, melinda}@gates.foundation" or "bill @ gates.com".
_EMAIL_NAME = r'\w+[\w.\-]*'
_EMAIL_NAMES = rf'(\{{)?{_EMAIL_NAME}(,\s*{_EMAIL_NAME})*(\}})?'
_EMAIL_DOMAIN = r'\w+(\.[a-zA-Z]\w*)+'
EMAIL = re.compile(rf'{_EMAIL_NAMES}\s*@\s*{_EMAIL_DOMAIN}', FLAGS)

# Placeholders that indicate intentional anonymization
SAFE_NAMES = [
    'anonymous', 'anon', 'doe', 'blinded', 'nn', 'nobody', 'none', 'email',
    'anonymized', 'firstname', 'lastname', 'xyz', 'xxx', 'author',
]
SAFE_DOMAINS = ['email', 'example', 'domain', 'address', 'blind', 'review']
ACM_PERMISSIONS = 'permissions@acm.org'
BLINDED_IDENTITY = re.compile(
    '|'.join(SAFE_NAMES + SAFE_DOMAINS + [re.escape(ACM_PERMISSIONS)]),
    FLAGS
)

# Style fingerprints
ACM_CREATOR = re.compile(r'acmart', FLAGS)
ACM_REFERENCE_FORMAT = 'ACM Reference format:'
IEEE_COPYRIGHT = re.compile(r'20XX IEEE', FLAGS)

LINE_NUMBER = re.compile(r'\d+')

_TITLE_PUNCTUATION = re.compile(r'[^\w\s]')
_WHITESPACE = re.compile(r'\s+')


@lru_cache(maxsize=None)
def previous_work_pattern() -> Pattern:
    """
    Pattern for un-blinded references to the authors' own earlier work,
    e.g. "our previous work [12]".

    Compiled on first use and shared afterwards; the full text scan is the
    most expensive check.
    """
    our = 'our|my'
    previous = 'previous|earlier|prior'
    work = 'work|study|studies|approach|papers?|publications?|result|findings?'
    citation = r'\[[\d,]+\]'
    regex = r'\b(' + r')\s+('.join([our, previous, work, citation]) + ')'
    return re.compile(regex, FLAGS)


def search(pattern: Pattern, text: str) -> Optional[str]:
    """
    Find the first match of a pattern in text.

    Args:
        pattern: Compiled pattern
        text: Text to search

    Returns:
        Stripped matching text, or None if there is no match
    """
    match = pattern.search(text)
    if match is None:
        return None
    return match.group(0).strip()


def literal(text: str) -> Pattern:
    """Compile text as a literal, case-insensitive pattern."""
    return re.compile(re.escape(text), FLAGS)


def is_line_number(line: str) -> bool:
    return LINE_NUMBER.fullmatch(line) is not None


def normalize_title(title: str) -> str:
    """Case-fold, drop punctuation and collapse whitespace."""
    title = _TITLE_PUNCTUATION.sub(' ', title.casefold())
    return _WHITESPACE.sub(' ', title).strip()
