"""
Validation utilities shared by the request schemas.
"""

import re
from typing import Iterable, List, Optional

USERNAME_REGEX = re.compile(r"^[A-Za-z0-9_.\-]+$")


def normalize_whitespace(text: str) -> str:
    """
    Collapses runs of whitespace into single spaces and trims the ends.

    Example:
        >>> normalize_whitespace('  Kathmandu   Durbar  Square ')
        'Kathmandu Durbar Square'
    """
    return re.sub(r"\s+", " ", text).strip()


def contains_xss(content: str) -> bool:
    """
    Detects script tags and inline event handlers in free text.

    Example:
        >>> contains_xss('<script>alert("hack")</script>')
        True
        >>> contains_xss('Golden hour portraits')
        False
    """
    content_lower = content.lower()
    return bool(
        re.search(r"<\s*script[^>]*>", content_lower)
        or re.search(r"\bon\w+\s*=", content_lower)
        or "javascript:" in content_lower
    )


def is_valid_username(username: str) -> bool:
    return bool(USERNAME_REGEX.fullmatch(username))


def clean_string_list(items: Optional[Iterable[str]]) -> List[str]:
    """
    Trims entries, drops empty ones and removes case-insensitive duplicates
    while keeping the first spelling and the original order.
    """
    if not items:
        return []
    seen = set()
    cleaned: List[str] = []
    for item in items:
        value = normalize_whitespace(str(item))
        key = value.lower()
        if value and key not in seen:
            seen.add(key)
            cleaned.append(value)
    return cleaned


def split_csv(value: Optional[str]) -> List[str]:
    """Splits a comma separated form field such as ``tags``."""
    if not value:
        return []
    return clean_string_list(value.split(","))
