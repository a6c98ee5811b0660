"""Utility functions for vaultmap."""

import re

_UNSAFE = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def normalize_slug(text: str) -> str:
    """
    Convert text to a URL-safe slug.

    - Lowercase
    - Remove everything except ASCII letters, digits, whitespace and `-`
    - Convert whitespace runs to a single `-`
    - Collapse multiple `-` to single, strip leading/trailing `-`

    The result only contains ``[a-z0-9-]`` and normalizing it again
    returns it unchanged.

    Examples:
        >>> normalize_slug("Go: Understanding & Learning")
        'go-understanding-learning'
        >>> normalize_slug("Part 1 of 10")
        'part-1-of-10'
    """
    text = text.lower()

    # Non-ASCII letters are dropped, not transliterated
    text = _UNSAFE.sub("", text)

    text = _WHITESPACE.sub("-", text)
    text = _HYPHENS.sub("-", text)

    return text.strip("-").strip()
