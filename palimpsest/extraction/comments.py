"""Documentation comment body extraction.

Recognizes two doc comment forms, tried in order:

1. Block: ``/** ... */`` starting a line (after indentation).
2. Line: one or more lines starting with ``///``.

The captured text is reassembled line by line, directive lines are dropped,
trailing whitespace is trimmed and the indentation common to all lines is
removed, so the result reads the way a documentation renderer expects.
"""

from __future__ import annotations

from loguru import logger

from palimpsest.constants import (
    AUTHORING_DIRECTIVE,
    COMMENT_LINE_PREFIX,
    WHITESPACE_AND_NEWLINE,
)
from palimpsest.patterns import PatternMatch, PatternMatcher, RegexPatternMatcher
from palimpsest.text.lines import split_lines
from palimpsest.text.trimming import count_leading_characters, trim_trailing_characters
from palimpsest.text.view import SourceTextView
from palimpsest.types.core import CodeUnitRange
from palimpsest.types.errors import TranslationFailure
from palimpsest.utils.logger import is_debug_enabled

COMMENT_PATTERN_NAMES = ["doc_block", "doc_line"]

_default_matcher = RegexPatternMatcher.with_builtins(["comment"])


def remove_common_leading_whitespace(text: str) -> str:
    """Remove the leading whitespace common to every line of ``text``.

    Lines made only of whitespace do not take part in computing the common
    prefix. The prefix may include ``*`` so that wall-of-asterisks block
    comments are unwrapped. Lines shorter than the prefix are kept as is.
    Tabs count as a single character.
    """
    lines = [content for content, _ in split_lines(text)]

    min_leading: int | None = None
    for line in lines:
        leading_whitespace = count_leading_characters(line, WHITESPACE_AND_NEWLINE)
        leading = count_leading_characters(line, COMMENT_LINE_PREFIX)
        if leading_whitespace != len(line) and (min_leading is None or leading < min_leading):
            min_leading = leading

    if min_leading is None:
        return "\n".join(lines)
    return "\n".join(line[min_leading:] if len(line) >= min_leading else line for line in lines)


def _body_line(view: SourceTextView, match: PatternMatch, number: int) -> str:
    group = match.group(number)
    if group is None:
        return ""
    body = match.group_text(number) or ""
    if AUTHORING_DIRECTIVE in body:
        return ""

    # Re-indent by the source line's own indentation so the first line of a
    # block comment lines up with its continuation lines.
    line = view.enclosing_line(group.location) or ""
    indent = count_leading_characters(line, WHITESPACE_AND_NEWLINE)
    return " " * indent + body


def extract_comment_body(
    view: SourceTextView,
    limit: CodeUnitRange | None = None,
    matcher: PatternMatcher | None = None,
) -> str | None:
    """Return the body of the doc comment in ``view``, if there is one.

    Args:
        view: Text to search.
        limit: Optional code unit range to restrict the search to.
        matcher: Matcher providing ``doc_block`` and ``doc_line`` patterns.

    Returns:
        The normalized comment body, or None if no doc comment matched or
        the body is empty.
    """
    found = (matcher or _default_matcher).first_matching(view, COMMENT_PATTERN_NAMES, limit)
    if found is None:
        if is_debug_enabled():
            logger.debug(f"No doc comment in {view.file} within {limit}: {TranslationFailure.NO_MATCH}")
        return None

    _, matches = found
    parts = [
        _body_line(view, match, number)
        for match in matches
        for number in range(1, len(match.groups) + 1)
    ]
    body = trim_trailing_characters("\n".join(parts), WHITESPACE_AND_NEWLINE)
    body = remove_common_leading_whitespace(body)
    return body or None
