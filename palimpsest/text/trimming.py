"""Character-set counting and trimming helpers."""

from __future__ import annotations

from typing import Collection

from palimpsest.constants import WHITESPACE_AND_NEWLINE


def count_leading_characters(text: str, characters: Collection[str]) -> int:
    """Return the number of contiguous characters at the start of ``text`` in ``characters``."""
    count = 0
    for char in text:
        if char not in characters:
            break
        count += 1
    return count


def trim_trailing_characters(text: str, characters: Collection[str]) -> str:
    """Return ``text`` with trailing characters belonging to ``characters`` removed."""
    end = len(text)
    while end > 0 and text[end - 1] in characters:
        end -= 1
    return text[:end]


def trim_whitespace_and_opening_brace(text: str) -> str:
    """Trim surrounding whitespace and opening curly braces.

    Turns a declaration's source text such as ``"  struct Foo {"`` into
    ``"struct Foo"``.
    """
    unwanted = WHITESPACE_AND_NEWLINE | {"{"}
    start = count_leading_characters(text, unwanted)
    return trim_trailing_characters(text[start:], unwanted)
