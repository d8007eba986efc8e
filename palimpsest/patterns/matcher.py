"""Pattern matcher base classes and types.

This module defines the abstract base for pattern matchers and the
PatternMatch result type. Matches are reported in UTF-16 code units, the
same space SourceTextView slices in, so any matcher implementation
(Python's ``re``, a third-party engine, a hand-written scanner) can be
swapped in behind the same contract: ordered, non-overlapping matches with
numbered capture groups.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from palimpsest.types.core import CodeUnitRange

if TYPE_CHECKING:
    from palimpsest.text.view import SourceTextView


@dataclass(frozen=True)
class PatternMatch:
    """A single pattern match result.

    ``groups[0]`` is the range of the first capture group; a group that did
    not participate in the match is None.
    """

    pattern_name: str
    range: CodeUnitRange
    matched_text: str
    groups: tuple[CodeUnitRange | None, ...] = field(default_factory=tuple)
    group_texts: tuple[str | None, ...] = field(default_factory=tuple)

    def group(self, number: int) -> CodeUnitRange | None:
        """Range of capture group ``number`` (1-based, like ``re.Match.group``)."""
        if number == 0:
            return self.range
        if number > len(self.groups):
            return None
        return self.groups[number - 1]

    def group_text(self, number: int) -> str | None:
        """Text of capture group ``number`` (1-based)."""
        if number == 0:
            return self.matched_text
        if number > len(self.group_texts):
            return None
        return self.group_texts[number - 1]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "pattern_name": self.pattern_name,
            "location": self.range.location,
            "length": self.range.length,
            "matched_text": self.matched_text,
            "groups": [
                None if g is None else {"location": g.location, "length": g.length}
                for g in self.groups
            ],
        }


class PatternMatcher(ABC):
    """Abstract base class for pattern matchers.

    Implementations must provide:
    - match(): Find all matches for every configured pattern
    - match_pattern(): Find matches for one named pattern
    """

    @abstractmethod
    def match(
        self,
        view: SourceTextView,
        limit: CodeUnitRange | None = None,
    ) -> Iterator[PatternMatch]:
        """Find all matches of every configured pattern.

        Args:
            view: Text to search.
            limit: Optional code unit range to restrict the search to.

        Yields:
            PatternMatch for each match found, pattern by pattern, each in
            text order.
        """
        pass

    @abstractmethod
    def match_pattern(
        self,
        view: SourceTextView,
        name: str,
        limit: CodeUnitRange | None = None,
    ) -> Iterator[PatternMatch]:
        """Find all matches of the pattern called ``name``, in text order.

        Raises:
            KeyError: If no pattern with that name is configured.
        """
        pass

    def first_matching(
        self,
        view: SourceTextView,
        names: list[str],
        limit: CodeUnitRange | None = None,
    ) -> tuple[str, list[PatternMatch]] | None:
        """Try patterns in order and return the matches of the first that matches.

        Args:
            view: Text to search.
            names: Pattern names in priority order.
            limit: Optional code unit range to restrict the search to.

        Returns:
            ``(name, matches)`` for the first pattern with any match, else None.
        """
        for name in names:
            matches = list(self.match_pattern(view, name, limit))
            if matches:
                return name, matches
        return None
