"""Attach doc comments to the tokens they document.

A doc comment documents the first identifier (or ``init``, ``deinit`` or
``subscript`` keyword) that follows its last line.
"""

from __future__ import annotations

import bisect
from typing import Iterable

from loguru import logger

from palimpsest.constants import DOCUMENTABLE_KEYWORDS
from palimpsest.patterns import PatternMatch, PatternMatcher, RegexPatternMatcher
from palimpsest.text.view import SourceTextView

from .types import SyntaxKind, SyntaxMap, SyntaxToken

TERMINATOR_PATTERN_NAME = "doc_terminator"

_default_matcher = RegexPatternMatcher.with_builtins(["terminator"])


def is_token_documentable(view: SourceTextView, token: SyntaxToken) -> bool:
    """Whether a doc comment can attach to ``token``."""
    if token.kind == SyntaxKind.KEYWORD:
        return view.substring_with_byte_range(token.offset, token.length) in DOCUMENTABLE_KEYWORDS
    return token.kind == SyntaxKind.IDENTIFIER


def _documented_offset(view: SourceTextView, match: PatternMatch, offsets: list[int]) -> int | None:
    terminator_end = view.code_unit_range_to_byte_range(match.range.end, 0)
    if terminator_end is None:
        logger.debug(f"Skipping doc comment terminator at {match.range} in {view.file}: no byte equivalent")
        return None
    index = bisect.bisect_left(offsets, terminator_end.offset)
    if index == len(offsets):
        return None
    return offsets[index]


def documented_token_offsets(
    view: SourceTextView,
    syntax_map: SyntaxMap | Iterable[SyntaxToken],
    matcher: PatternMatcher | None = None,
) -> list[int]:
    """Byte offsets of the tokens documented by doc comments in ``view``.

    For each doc comment terminator, in text order, reports the offset of
    the first documentable token at or after the end of the terminator.
    Terminators with no following documentable token are skipped. Two
    terminators can report the same token.

    Args:
        view: Text the syntax map was produced for.
        syntax_map: Classified tokens of ``view``.
        matcher: Matcher providing the ``doc_terminator`` pattern.
    """
    offsets = sorted(token.offset for token in syntax_map if is_token_documentable(view, token))
    documented = (
        _documented_offset(view, match, offsets)
        for match in (matcher or _default_matcher).match_pattern(view, TERMINATOR_PATTERN_NAME)
    )
    return [offset for offset in documented if offset is not None]
