"""Syntax validators for start URLs and scope regexes.

Both validators are advisory: they report problems to the progress sink
and never drop, rewrite or raise. Strings holding an unresolved ``${...}``
placeholder cannot be judged until substitution and are skipped.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from scopekit.automation.progress import AutomationProgress

PLACEHOLDER_TOKEN = "${"

# RFC 3986 unreserved + reserved + "%" for escapes
_URI_CHARS = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+$")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def has_placeholder(text: Optional[str]) -> bool:
    return text is not None and PLACEHOLDER_TOKEN in text


def is_valid_uri(text: str) -> bool:
    """Strict URI-reference check.

    Rejects characters outside the RFC 3986 set (spaces, braces, quotes,
    backslashes...), malformed ``%`` escapes, unbalanced IPv6 brackets and
    non-numeric or out-of-range ports.
    """
    if not text or not _URI_CHARS.match(text) or _BAD_ESCAPE.search(text):
        return False
    try:
        parts = urlsplit(text)
        # Accessing .port validates it
        parts.port
    except ValueError:
        return False
    return True


def validate_url(url: str, progress: AutomationProgress) -> None:
    """Report ``url`` as ``badurl`` unless it is a valid URI or templated."""
    if has_placeholder(url):
        return
    if not is_valid_uri(url):
        progress.error("badurl", url)


def validate_regex(pattern: str, progress: AutomationProgress) -> bool:
    """Compile ``pattern`` and report a ``badregex`` error if it fails.

    Returns:
        False only when the pattern was compiled and rejected.
    """
    if has_placeholder(pattern):
        return True
    try:
        re.compile(pattern)
    except re.error as e:
        progress.error("badregex", pattern, str(e))
        return False
    return True


def validate_regex_list(patterns: list[str], progress: AutomationProgress) -> list[str]:
    """Validate every pattern and return ``patterns`` unchanged."""
    for pattern in patterns:
        validate_regex(pattern, progress)
    return patterns
