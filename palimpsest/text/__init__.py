"""Text handling: coordinate translation, line splitting and trimming.

Components:
- SourceTextView: One text with byte, code unit and line/column queries
- ByteOffsetCache: Amortizing code unit -> byte offset memo
- split_lines / iter_line_spans: Line splitting that keeps terminators
- trimming helpers used by comment normalization
"""

from .cache import ByteOffsetCache, TextPosition, utf8_length
from .lines import iter_line_spans, split_lines
from .trimming import (
    count_leading_characters,
    trim_trailing_characters,
    trim_whitespace_and_opening_brace,
)
from .view import SourceTextView

__all__ = [
    "ByteOffsetCache",
    "SourceTextView",
    "TextPosition",
    "count_leading_characters",
    "iter_line_spans",
    "split_lines",
    "trim_trailing_characters",
    "trim_whitespace_and_opening_brace",
    "utf8_length",
]
