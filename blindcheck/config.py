"""
Checker Configuration Module
Page limits, target style and heuristic thresholds.
"""

import os
from dataclasses import dataclass
from typing import Optional, Mapping


# Conference styles
STYLE_ACM = "ACM"
STYLE_IEEE = "IEEE"
STYLES = (STYLE_ACM, STYLE_IEEE)

# Defaults (ICSE-like limits)
DEFAULT_PAGE_LIMIT = 10
DEFAULT_REFERENCE_LIMIT = 2
DEFAULT_STYLE = STYLE_IEEE

# Heuristic thresholds
MIN_NUMBERED_COLUMN = 30      # line numbers needed to call a column numbered
MAX_HEADER_LINES = 3          # running headers rarely take more than 3 lines
LEEWAY_FOR_PAGE_NR = 8        # chars tolerated before the References heading
MIN_VERY_SHORT_PAGES = 2

# Environment variables
ENV_PAGE_LIMIT = "BLINDCHECK_PAGE_LIMIT"
ENV_REFERENCE_LIMIT = "BLINDCHECK_REFERENCE_LIMIT"
ENV_STYLE = "BLINDCHECK_STYLE"
ENV_CHECK_TITLES = "BLINDCHECK_CHECK_TITLES"


@dataclass
class CheckerConfig:
    """Limits and target style for one analysis run."""
    page_limit: int = DEFAULT_PAGE_LIMIT
    reference_limit: int = DEFAULT_REFERENCE_LIMIT
    style: str = DEFAULT_STYLE
    check_titles: bool = False

    def __post_init__(self):
        self.style = self.style.upper()
        if self.style not in STYLES:
            raise ValueError(
                f"Unknown style '{self.style}', expected one of: {', '.join(STYLES)}"
            )
        if self.page_limit < 0:
            raise ValueError(f"Page limit must not be negative: {self.page_limit}")
        if self.reference_limit < 0:
            raise ValueError(f"Reference limit must not be negative: {self.reference_limit}")

    @property
    def total_limit(self) -> int:
        return self.page_limit + self.reference_limit

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CheckerConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            CheckerConfig with defaults for unset variables

        Raises:
            ValueError: If a variable is set to an invalid value
        """
        if environ is None:
            environ = os.environ

        page_limit = _int_setting(environ, ENV_PAGE_LIMIT, DEFAULT_PAGE_LIMIT)
        if page_limit <= 0:
            raise ValueError(f"{ENV_PAGE_LIMIT} must be positive, got {page_limit}")

        return cls(
            page_limit=page_limit,
            reference_limit=_int_setting(environ, ENV_REFERENCE_LIMIT, DEFAULT_REFERENCE_LIMIT),
            style=environ.get(ENV_STYLE, "").strip() or DEFAULT_STYLE,
            check_titles=_bool_setting(environ, ENV_CHECK_TITLES),
        )


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")


def _bool_setting(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be true or false, got '{raw}'")
