"""Offset arithmetic for Google Docs text.

The Docs API addresses document positions in **UTF-16 code units**, not
Python code points.  A character outside the Basic Multilingual Plane
(most emoji) occupies two positions, so ``len(text)`` under-counts and
every later operation would land at the wrong offset.
"""

from __future__ import annotations


def utf16_len(text: str) -> int:
    """Return the length of *text* in UTF-16 code units.

    Examples
    --------
    >>> utf16_len("abc")
    3
    >>> utf16_len("a\\n")
    2
    >>> utf16_len("\\U0001f600")  # one emoji, a surrogate pair
    2
    """
    if not text:
        return 0
    return len(text.encode("utf-16-le")) // 2


def strip_one_trailing_newline(text: str) -> tuple[str, bool]:
    """Split a single trailing ``"\\n"`` off *text*.

    Returns the remaining text and whether a newline was removed.  Only
    one newline is stripped: ``"a\\n\\n"`` yields ``("a\\n", True)``.
    """
    if text.endswith("\n"):
        return text[:-1], True
    return text, False
