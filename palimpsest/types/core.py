"""
Core value types for coordinate translation.

Three coordinate spaces describe positions in the same text:

- byte offsets into the UTF-8 encoding (what the syntax service reports)
- UTF-16 code unit offsets (the native space for slicing and matching)
- 1-based line and column numbers (what humans read)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ByteRange:
    """A range of UTF-8 byte offsets."""

    offset: int
    length: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("offset must be non-negative")
        if self.length < 0:
            raise ValueError("length must be non-negative")

    @property
    def end(self) -> int:
        """Offset one past the last byte."""
        return self.offset + self.length


@dataclass(frozen=True)
class CodeUnitRange:
    """A range of UTF-16 code unit offsets."""

    location: int
    length: int

    def __post_init__(self) -> None:
        if self.location < 0:
            raise ValueError("location must be non-negative")
        if self.length < 0:
            raise ValueError("length must be non-negative")

    @property
    def end(self) -> int:
        """Offset one past the last code unit."""
        return self.location + self.length

    def intersection_length(self, other: "CodeUnitRange") -> int:
        """Number of code units shared with ``other`` (0 when disjoint)."""
        return max(0, min(self.end, other.end) - max(self.location, other.location))

    def intersects(self, other: "CodeUnitRange") -> bool:
        """True when the two ranges share at least one code unit."""
        return self.intersection_length(other) > 0


@dataclass(frozen=True)
class LineRange:
    """Represents a range of lines in a source file."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("start must be non-negative")
        if self.end < self.start:
            raise ValueError("end must be >= start")


@dataclass(frozen=True)
class LineColumn:
    """A 1-based line number and 1-based code unit column."""

    line: int
    column: int


@dataclass(frozen=True)
class Line:
    """One line of text: 1-based index, content, and its terminator.

    The terminator is empty only for a final line that does not end in one.
    """

    index: int
    content: str
    terminator: str = ""
