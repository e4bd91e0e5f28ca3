"""Filename-based score overrides used for demo and test determinism."""
import re
from typing import Optional

AI_PATTERNS = ("ai", "gen", "fake", "aigen")
AUTHENTIC_PATTERNS = ("og", "original")

AI_OVERRIDE = 95
AUTHENTIC_OVERRIDE = 5


def filename_override(source_identifier: Optional[str]) -> Optional[int]:
    """Return a fixed probability for known test filenames, else None.

    Only the last path segment is inspected, case-insensitively.  AI
    patterns are checked first, so a name matching both sets gets 95.
    """
    if not source_identifier:
        return None

    filename = re.split(r"[/\\]", source_identifier)[-1].lower()
    if any(pattern in filename for pattern in AI_PATTERNS):
        return AI_OVERRIDE
    if any(pattern in filename for pattern in AUTHENTIC_PATTERNS):
        return AUTHENTIC_OVERRIDE
    return None
