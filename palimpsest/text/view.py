"""Source text view: one immutable text plus its coordinate cache.

The syntax service reports positions as byte offsets into the UTF-8
encoding, slicing and pattern matching work in UTF-16 code units, and
people read line/column numbers. SourceTextView translates between the
three for a single text.

Every query is total: offsets that fall outside the text, or that split a
multi-byte UTF-8 sequence or a surrogate pair, produce ``None`` rather than
an exception. The syntax service can hand over such ranges, so callers skip
them.

Usage:
    view = SourceTextView(source, file="Sources/App.swift")
    code_units = view.byte_range_to_code_unit_range(token.offset, token.length)
    name = view.substring_with_byte_range(token.offset, token.length)
    lines = view.line_range_with_byte_range(token.offset, 0)
"""

from __future__ import annotations

import bisect
import re
from functools import cached_property
from typing import TYPE_CHECKING

from palimpsest.config import TextConfig, get_default_config
from palimpsest.text.cache import ByteOffsetCache, utf8_length
from palimpsest.text.lines import iter_line_spans
from palimpsest.types.core import ByteRange, CodeUnitRange, Line, LineColumn, LineRange
from palimpsest.types.errors import (
    ErrorCode,
    ErrorContext,
    TranslationFailure,
    ValidationError,
)

if TYPE_CHECKING:
    from palimpsest.extraction.types import SourceLocation

_ASTRAL_RE = re.compile(r"[\U00010000-\U0010ffff]")
_SURROGATE_RE = re.compile(f"[{chr(0xD800)}-{chr(0xDFFF)}]")


class _LineTable:
    """Line boundaries of a text in code unit and code point space."""

    def __init__(self, view: SourceTextView):
        self.starts: list[int] = []  # code unit offset of each line start
        self.ends: list[int] = []  # code unit offset past each line's terminator
        self.scalar_spans: list[tuple[int, int, int]] = []  # (start, content_end, end)
        for start, content_end, end in iter_line_spans(view.text):
            self.starts.append(view.scalar_to_code_unit(start))
            self.ends.append(view.scalar_to_code_unit(end))
            self.scalar_spans.append((start, content_end, end))

    def __len__(self) -> int:
        return len(self.starts)

    @property
    def last_line_terminated(self) -> bool:
        if not self.scalar_spans:
            return True
        _, content_end, end = self.scalar_spans[-1]
        return content_end != end


class SourceTextView:
    """An immutable text with byte, code unit and line/column translation.

    The view owns its ByteOffsetCache; the cache is never shared between
    texts. A changed text needs a new view.

    Cache policy: texts of at most ``config.cache_threshold`` code units
    compute byte offsets by encoding from the start, longer texts go through
    the cache. Both paths return identical offsets.
    """

    def __init__(
        self,
        text: str,
        file: str | None = None,
        config: TextConfig | None = None,
    ):
        """Initialize a view over ``text``.

        Args:
            text: Source text. Must be a sequence of Unicode scalars.
            file: Opaque file identifier copied into produced locations.
            config: Tunables; defaults to the environment-derived config.

        Raises:
            ValidationError: If ``text`` is not a str or contains lone
                surrogate code points.
        """
        if not isinstance(text, str):
            raise ValidationError(
                f"text must be str, got {type(text).__name__}",
                context=ErrorContext(operation="SourceTextView", file_path=file),
                code=ErrorCode.INVALID_TEXT,
            )
        surrogate = _SURROGATE_RE.search(text)
        if surrogate is not None:
            raise ValidationError(
                f"text contains a lone surrogate at code point {surrogate.start()}",
                user_message="Text is not valid Unicode.",
                context=ErrorContext(operation="SourceTextView", file_path=file),
                code=ErrorCode.INVALID_TEXT,
            )

        self._text = text
        self._file = file
        self._config = config or get_default_config()
        self._astral_scalars = [m.start() for m in _ASTRAL_RE.finditer(text)]
        # Code unit offset of the high surrogate of each astral character
        self._astral_units = [s + i for i, s in enumerate(self._astral_scalars)]
        self._cache = ByteOffsetCache(text, thread_safe=self._config.thread_safe)

    def __repr__(self) -> str:
        return f"SourceTextView(file={self._file!r}, utf16_length={self.utf16_length})"

    # ----------------------------------------------------------------
    # Properties
    # ----------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def file(self) -> str | None:
        return self._file

    @property
    def config(self) -> TextConfig:
        return self._config

    @property
    def cache(self) -> ByteOffsetCache:
        return self._cache

    @property
    def utf8(self) -> bytes:
        """The text encoded as UTF-8."""
        return self._cache.utf8

    @property
    def byte_length(self) -> int:
        return len(self.utf8)

    @property
    def utf16_length(self) -> int:
        return len(self._text) + len(self._astral_scalars)

    @property
    def uses_cache(self) -> bool:
        """Whether byte offset lookups go through the cache."""
        return self.utf16_length > self._config.cache_threshold

    @cached_property
    def _line_table(self) -> _LineTable:
        return _LineTable(self)

    # ----------------------------------------------------------------
    # Offset space conversion
    # ----------------------------------------------------------------

    def scalar_to_code_unit(self, index: int) -> int:
        """Convert a code point index (0..len(text)) to a code unit offset."""
        return index + bisect.bisect_left(self._astral_scalars, index)

    def code_unit_to_scalar(self, offset: int) -> int | None:
        """Convert a code unit offset to a code point index.

        Returns None when the offset is outside the text or falls between
        the two halves of a surrogate pair.
        """
        if offset < 0 or offset > self.utf16_length:
            return None
        preceding = bisect.bisect_left(self._astral_units, offset)
        if preceding and self._astral_units[preceding - 1] + 1 == offset:
            return None
        return offset - preceding

    def byte_to_scalar(self, offset: int) -> int | None:
        """Convert a byte offset to a code point index.

        Returns None when the offset is outside the text or lands on a
        UTF-8 continuation byte. Long texts decode from the nearest cached
        position below the offset instead of from the start.
        """
        data = self.utf8
        if offset < 0 or offset > len(data):
            return None
        if offset < len(data) and data[offset] & 0xC0 == 0x80:
            return None
        if self.uses_cache:
            return self._cache.position_for_byte(offset, self.scalar_to_code_unit).scalar
        return len(data[:offset].decode("utf-8"))

    def _byte_offset_for(self, code_unit: int, scalar: int) -> int:
        if self.uses_cache:
            return self._cache.byte_offset(code_unit, scalar)
        return utf8_length(self._text[:scalar])

    def _scalar_span_for_byte_range(self, start: int, length: int) -> tuple[int, int] | None:
        if start < 0 or length < 0:
            return None
        start_scalar = self.byte_to_scalar(start)
        if start_scalar is None:
            return None
        end_scalar = self.byte_to_scalar(start + length)
        if end_scalar is None:
            return None
        return start_scalar, end_scalar

    # ----------------------------------------------------------------
    # Range translation
    # ----------------------------------------------------------------

    def byte_range_to_code_unit_range(self, start: int, length: int) -> CodeUnitRange | None:
        """Convert a UTF-8 byte range to the equivalent code unit range.

        Args:
            start: Starting byte offset.
            length: Number of bytes in the range.

        Returns:
            The equivalent CodeUnitRange, or None if either end is outside
            the text or inside a multi-byte sequence.
        """
        span = self._scalar_span_for_byte_range(start, length)
        if span is None:
            return None
        location = self.scalar_to_code_unit(span[0])
        end = self.scalar_to_code_unit(span[1])
        return CodeUnitRange(location=location, length=end - location)

    def code_unit_range_to_byte_range(self, start: int, length: int) -> ByteRange | None:
        """Convert a code unit range to the equivalent UTF-8 byte range.

        The byte offset of ``start`` is looked up through the cache when the
        text is long enough; the length is measured from there.

        Args:
            start: Starting code unit offset.
            length: Number of code units in the range.

        Returns:
            The equivalent ByteRange, or None if either end is outside the
            text or splits a surrogate pair.
        """
        if start < 0 or length < 0:
            return None
        start_scalar = self.code_unit_to_scalar(start)
        if start_scalar is None:
            return None
        end_scalar = self.code_unit_to_scalar(start + length)
        if end_scalar is None:
            return None

        byte_offset = self._byte_offset_for(start, start_scalar)
        byte_length = utf8_length(self._text[start_scalar:end_scalar])
        return ByteRange(offset=byte_offset, length=byte_length)

    def diagnose_byte_range(self, start: int, length: int) -> TranslationFailure | None:
        """Explain why a byte range cannot be translated (None if it can)."""
        if start < 0 or length < 0 or start + length > self.byte_length:
            return TranslationFailure.OUT_OF_RANGE
        if self._scalar_span_for_byte_range(start, length) is None:
            return TranslationFailure.BOUNDARY_MISALIGNMENT
        return None

    # ----------------------------------------------------------------
    # Slicing
    # ----------------------------------------------------------------

    def substring(self, code_units: CodeUnitRange) -> str | None:
        """Return the text covered by a code unit range."""
        start = self.code_unit_to_scalar(code_units.location)
        end = self.code_unit_to_scalar(code_units.end)
        if start is None or end is None:
            return None
        return self._text[start:end]

    def substring_with_byte_range(self, start: int, length: int) -> str | None:
        """Return the text covered by a byte range.

        Args:
            start: Starting byte offset.
            length: Number of bytes to include.
        """
        span = self._scalar_span_for_byte_range(start, length)
        if span is None:
            return None
        return self._text[span[0] : span[1]]

    def substring_lines_with_byte_range(self, start: int, length: int) -> str | None:
        """Return the full lines touched by a byte range.

        Runs from the start of the line containing ``start`` through the end
        (terminator included) of the line containing the last byte of the
        range. A zero-length range yields its enclosing line.

        Args:
            start: Starting byte offset.
            length: Number of bytes to include.
        """
        span = self._scalar_span_for_byte_range(start, length)
        if span is None:
            return None
        start_scalar, end_scalar = span
        last_scalar = end_scalar - 1 if end_scalar > start_scalar else start_scalar
        line_start, _ = self._enclosing_line_scalars(start_scalar)
        _, line_end = self._enclosing_line_scalars(last_scalar)
        return self._text[line_start:line_end]

    def substring_with_source_range(self, start: SourceLocation, end: SourceLocation) -> str | None:
        """Return the text between two source locations (by byte offset)."""
        return self.substring_with_byte_range(start.offset, end.offset - start.offset)

    def enclosing_line(self, offset: int) -> str | None:
        """Return the line (terminator included) containing a code unit offset."""
        scalar = self.code_unit_to_scalar(offset)
        if scalar is None:
            return None
        start, end = self._enclosing_line_scalars(scalar)
        return self._text[start:end]

    def _enclosing_line_scalars(self, scalar: int) -> tuple[int, int]:
        """Code point bounds (start, end incl. terminator) of the line holding ``scalar``."""
        table = self._line_table
        index = bisect.bisect_right(table.starts, self.scalar_to_code_unit(scalar)) - 1
        if index >= 0:
            line_start, _, line_end = table.scalar_spans[index]
            if scalar < line_end:
                return line_start, line_end
            if index == len(table) - 1 and not table.last_line_terminated:
                return line_start, line_end
        # Past a trailing terminator: the empty line at the end of the text
        return scalar, scalar

    # ----------------------------------------------------------------
    # Lines
    # ----------------------------------------------------------------

    def line_range_with_byte_range(self, start: int, length: int) -> LineRange | None:
        """Return the 1-based lines containing the start and end of a byte range.

        The end line is the first line whose end (past its terminator) lies
        beyond the end of the range. Returns None if the range cannot be
        translated or no such line exists (e.g. the range ends at the very
        end of the text).

        Args:
            start: Starting byte offset.
            length: Number of bytes in the range.
        """
        code_units = self.byte_range_to_code_unit_range(start, length)
        if code_units is None:
            return None
        table = self._line_table
        end_index = bisect.bisect_right(table.ends, code_units.end)
        if end_index >= len(table):
            return None
        start_line = bisect.bisect_right(table.starts, code_units.location)
        return LineRange(start=start_line, end=end_index + 1)

    def line_and_column_for_offset(self, offset: int) -> LineColumn | None:
        """Return the 1-based line and column of a code unit offset.

        The column counts code units from the start of the line. Returns
        None for an empty text or an offset outside ``0..utf16_length``.
        """
        table = self._line_table
        if len(table) == 0 or offset < 0 or offset > self.utf16_length:
            return None
        line = bisect.bisect_right(table.starts, offset)
        return LineColumn(line=line, column=offset - table.starts[line - 1] + 1)

    def lines(self) -> list[Line]:
        """Return every line of the text, 1-based, with its terminator."""
        text = self._text
        return [
            Line(index=i, content=text[start:content_end], terminator=text[content_end:end])
            for i, (start, content_end, end) in enumerate(self._line_table.scalar_spans, start=1)
        ]
