"""Text normalization for inbound text and scraped fields.

All functions are pure and total: None or empty input yields an empty string
and no input raises.
"""

import re
from typing import Optional

# One or more leading "crumb >" segments. The separator must be surrounded by
# whitespace so titles like "C>D" or "1/2 cup" are left alone.
BREADCRUMB_PREFIX = re.compile(r"^\s*(?:[^\n›»>]{1,120}?\s+[›»>]\s+)+")

_WHITESPACE_RUN = re.compile(r"\s+")


def strip_breadcrumb(text: Optional[str]) -> str:
    """Remove a leading navigational prefix such as "site.com › docs › ".

    Strings without the prefix are returned unchanged.
    """
    if not text:
        return ""

    match = BREADCRUMB_PREFIX.match(text)
    if not match:
        return text

    remainder = text[match.end():]
    # A title made only of crumbs keeps its last segment
    if not remainder.strip():
        return text
    return remainder


def clean_text(text: Optional[str]) -> str:
    """Drop non-printable characters and collapse whitespace runs.

    Idempotent: clean_text(clean_text(s)) == clean_text(s).
    """
    if not text:
        return ""

    kept = []
    for ch in text:
        if ch.isspace():
            kept.append(" ")
        elif ch.isprintable():
            kept.append(ch)

    return _WHITESPACE_RUN.sub(" ", "".join(kept)).strip()


def clean_title(text: Optional[str]) -> str:
    """Breadcrumb-stripped, whitespace-normalized title."""
    return clean_text(strip_breadcrumb(text))
