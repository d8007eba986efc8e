"""Pattern Matching Engine.

This package provides the matcher abstraction used by the comment and
marker extractors: ordered, non-overlapping matches with numbered capture
groups, reported as UTF-16 code unit ranges.

Components:
- PatternMatch: Result type for pattern matches
- PatternMatcher: Abstract base class for matchers
- RegexPatternMatcher: Regex-based pattern matching with builtins

Usage:
    from palimpsest.patterns import RegexPatternMatcher

    matcher = RegexPatternMatcher.with_builtins()
    for match in matcher.match_pattern(view, "doc_line"):
        print(match.range, match.group_text(1))
"""

from .matcher import PatternMatch, PatternMatcher
from .regex_matcher import RegexPattern, RegexPatternMatcher

__all__ = [
    "PatternMatch",
    "PatternMatcher",
    "RegexPattern",
    "RegexPatternMatcher",
]
