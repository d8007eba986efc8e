"""Section marker extraction.

Finds ``#pragma mark``, ``@name`` and ``// MARK:`` lines and turns each into
a marker declaration located at the start of its line.
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from palimpsest.patterns import PatternMatch, PatternMatcher, RegexPatternMatcher
from palimpsest.text.view import SourceTextView
from palimpsest.types.core import CodeUnitRange
from palimpsest.utils.logger import is_debug_enabled

from .types import DeclarationKind, SourceDeclaration, SourceLocation

MARKER_PATTERN_NAME = "pragma_mark"
MARKER_NAME_GROUP = 2

_default_matcher = RegexPatternMatcher.with_builtins(["marker"])


def _marker_from_match(
    view: SourceTextView,
    match: PatternMatch,
    exclude_ranges: Iterable[CodeUnitRange],
) -> SourceDeclaration | None:
    name_range = match.group(MARKER_NAME_GROUP)
    if name_range is None:
        return None
    if any(name_range.intersects(excluded) for excluded in exclude_ranges):
        return None

    name = (match.group_text(MARKER_NAME_GROUP) or "").strip()
    if not name:
        return None

    byte_range = view.code_unit_range_to_byte_range(name_range.location, name_range.length)
    if byte_range is None:
        logger.debug(f"Skipping marker {name!r} in {view.file}: range {name_range} has no byte equivalent")
        return None

    lines = view.line_range_with_byte_range(byte_range.offset, 0)
    if lines is None:
        if is_debug_enabled():
            failure = view.diagnose_byte_range(byte_range.offset, 0)
            logger.debug(f"Skipping marker {name!r} in {view.file}: no line for byte {byte_range.offset} ({failure})")
        return None

    location = SourceLocation(file=view.file, line=lines.start, column=1, offset=byte_range.offset)
    return SourceDeclaration(
        kind=DeclarationKind.MARKER,
        location=location,
        extent=(location, location),
        name=name,
    )


def extract_markers(
    view: SourceTextView,
    exclude_ranges: Iterable[CodeUnitRange] = (),
    limit: CodeUnitRange | None = None,
    matcher: PatternMatcher | None = None,
) -> list[SourceDeclaration]:
    """Extract marker declarations from ``view``, in text order.

    Args:
        view: Text to search.
        exclude_ranges: Code unit ranges (typically doc comments) whose
            markers are ignored.
        limit: Optional code unit range to restrict the search to.
        matcher: Matcher providing the ``pragma_mark`` pattern.

    Returns:
        One declaration per marker with a non-empty name.
    """
    excluded = list(exclude_ranges)
    declarations = (
        _marker_from_match(view, match, excluded)
        for match in (matcher or _default_matcher).match_pattern(view, MARKER_PATTERN_NAME, limit)
    )
    return [declaration for declaration in declarations if declaration is not None]
