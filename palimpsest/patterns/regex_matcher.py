"""Regex-based pattern matching over code unit ranges.

Provides the builtin patterns for documentation comments, section markers
and doc-comment terminators, and runs them over a SourceTextView.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from loguru import logger

from palimpsest.types.core import CodeUnitRange

from .matcher import PatternMatch, PatternMatcher

if TYPE_CHECKING:
    from palimpsest.text.view import SourceTextView

# Python's re only breaks lines at "\n"; the builtins break at every
# terminator SourceTextView.lines() recognizes.
_LINE_BREAKS = "\r\n\x85" + chr(0x2028) + chr(0x2029)
_LINE_START = rf"(?:^|(?<=[{_LINE_BREAKS}]))"
_LINE_CHAR = rf"[^{_LINE_BREAKS}]"
_LINE_END = rf"(?:\r\n|[{_LINE_BREAKS}])"


@dataclass
class RegexPattern:
    """A named regex pattern with metadata."""

    name: str
    pattern: str
    flags: int = 0
    description: str = ""
    concern: str | None = None  # None means not part of a builtin group


class RegexPatternMatcher(PatternMatcher):
    """Regex-based pattern matching.

    Features:
    - Builtin patterns for doc comments, section markers and terminators
    - Custom pattern support
    - Numbered capture groups reported as code unit ranges
    - Search restricted to a code unit range, whose start and end act as
      line boundaries for ``^`` and ``$``

    Usage:
        matcher = RegexPatternMatcher.with_builtins(["marker"])
        for match in matcher.match_pattern(view, "pragma_mark"):
            print(match.group_text(2))
    """

    BUILTIN_PATTERNS: dict[str, list[RegexPattern]] = {
        "comment": [
            RegexPattern(
                name="doc_block",
                pattern=rf"{_LINE_START}\s*/\*\*\s*(.*?)\*/",
                flags=re.MULTILINE | re.DOTALL,
                description="Block documentation comment /** ... */",
                concern="comment",
            ),
            RegexPattern(
                name="doc_line",
                pattern=rf"{_LINE_START}\s*///({_LINE_CHAR}+)?",
                flags=re.MULTILINE,
                description="Line documentation comment ///",
                concern="comment",
            ),
        ],
        "marker": [
            RegexPattern(
                name="pragma_mark",
                pattern=rf"(?:(#pragma\smark|@name)[ -]*|//[ \t]*MARK:)({_LINE_CHAR}+)",
                description="Section marker: #pragma mark, @name or // MARK:",
                concern="marker",
            ),
        ],
        "terminator": [
            RegexPattern(
                name="doc_terminator",
                pattern=rf"(///{_LINE_CHAR}*{_LINE_END}|\*/{_LINE_END})",
                description="Last line of a doc comment followed by a line terminator",
                concern="terminator",
            ),
        ],
    }

    def __init__(self, patterns: list[RegexPattern] | None = None):
        """Initialize with custom patterns.

        Args:
            patterns: Optional list of patterns to use instead of builtins.
        """
        self._patterns: dict[str, RegexPattern] = {}
        self._compiled: dict[str, re.Pattern] = {}

        for p in patterns or []:
            self.add_pattern(p)

    @classmethod
    def with_builtins(
        cls,
        concerns: list[str] | None = None,
        additional: list[RegexPattern] | None = None,
    ) -> "RegexPatternMatcher":
        """Create matcher with builtin patterns.

        Args:
            concerns: Builtin groups to include (None = all).
            additional: Additional custom patterns.

        Returns:
            Configured RegexPatternMatcher.
        """
        patterns = []
        for concern in concerns or list(cls.BUILTIN_PATTERNS.keys()):
            patterns.extend(cls.BUILTIN_PATTERNS.get(concern, []))

        if additional:
            patterns.extend(additional)

        return cls(patterns)

    def add_pattern(self, pattern: RegexPattern) -> None:
        """Add a pattern dynamically.

        Args:
            pattern: Pattern to add.

        Raises:
            re.error: If the pattern does not compile.
        """
        self._compiled[pattern.name] = re.compile(pattern.pattern, pattern.flags)
        self._patterns[pattern.name] = pattern

    @property
    def pattern_names(self) -> list[str]:
        return list(self._patterns)

    def _search_window(
        self,
        view: SourceTextView,
        limit: CodeUnitRange | None,
    ) -> tuple[int, int] | None:
        """Code point bounds of the searched region, or None if it is empty/invalid."""
        if limit is None:
            return 0, len(view.text)

        total = view.utf16_length
        if limit.location > total:
            return None
        end = limit.location + min(total - limit.location, limit.length)
        start_scalar = view.code_unit_to_scalar(limit.location)
        end_scalar = view.code_unit_to_scalar(end)
        if start_scalar is None or end_scalar is None:
            logger.debug(f"Search limit {limit} splits a surrogate pair in {view.file}, skipping")
            return None
        return start_scalar, end_scalar

    def _create_match(
        self,
        match: re.Match,
        view: SourceTextView,
        base: int,
        pattern_name: str,
    ) -> PatternMatch:
        """Create PatternMatch from a regex match on a slice starting at code point ``base``."""

        def to_range(start: int, end: int) -> CodeUnitRange:
            location = view.scalar_to_code_unit(base + start)
            return CodeUnitRange(location=location, length=view.scalar_to_code_unit(base + end) - location)

        groups: list[CodeUnitRange | None] = []
        for number in range(1, match.re.groups + 1):
            start, end = match.span(number)
            groups.append(None if start == -1 else to_range(start, end))

        return PatternMatch(
            pattern_name=pattern_name,
            range=to_range(*match.span()),
            matched_text=match.group(0),
            groups=tuple(groups),
            group_texts=match.groups(),
        )

    def match(
        self,
        view: SourceTextView,
        limit: CodeUnitRange | None = None,
    ) -> Iterator[PatternMatch]:
        """Find all matches across all configured patterns.

        Args:
            view: Text to search.
            limit: Optional code unit range to restrict the search to.

        Yields:
            PatternMatch for each match found.
        """
        for name in self._patterns:
            yield from self.match_pattern(view, name, limit)

    def match_pattern(
        self,
        view: SourceTextView,
        name: str,
        limit: CodeUnitRange | None = None,
    ) -> Iterator[PatternMatch]:
        """Find all matches of one configured pattern, in text order.

        Args:
            view: Text to search.
            name: Pattern name.
            limit: Optional code unit range to restrict the search to.

        Yields:
            PatternMatch for each match found.
        """
        compiled = self._compiled[name]
        window = self._search_window(view, limit)
        if window is None:
            return

        start, end = window
        region = view.text[start:end]
        for match in compiled.finditer(region):
            yield self._create_match(match, view, start, name)

    def get_patterns_for_concern(self, concern: str) -> list[RegexPattern]:
        """Get all configured patterns belonging to a builtin group.

        Args:
            concern: Group name ("comment", "marker", "terminator").

        Returns:
            List of applicable patterns.
        """
        return [p for p in self._patterns.values() if p.concern == concern]
