"""Line terminator scanning.

Lines are delimited by ``\\r\\n``, ``\\n``, ``\\r``, NEL, LINE SEPARATOR and
PARAGRAPH SEPARATOR. A text that ends in a terminator has no trailing empty
line, so ``"a\\nb\\n"`` is two lines and ``""`` is none.
"""

from __future__ import annotations

import re
from typing import Iterator

from palimpsest.constants import LINE_TERMINATORS

_TERMINATOR_RE = re.compile("|".join(re.escape(t) for t in LINE_TERMINATORS))


def iter_line_spans(text: str) -> Iterator[tuple[int, int, int]]:
    """Yield ``(start, content_end, end)`` code point indices for each line.

    ``content_end`` excludes the terminator, ``end`` includes it.
    """
    start = 0
    length = len(text)
    for match in _TERMINATOR_RE.finditer(text):
        yield start, match.start(), match.end()
        start = match.end()
    if start < length:
        yield start, length, length


def split_lines(text: str) -> list[tuple[str, str]]:
    """Split text into ``(content, terminator)`` pairs."""
    return [(text[start:content_end], text[content_end:end]) for start, content_end, end in iter_line_spans(text)]
