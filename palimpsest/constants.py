"""Shared constants for Palimpsest.

Centralizes the cache engagement threshold, the documentable keyword set,
authoring directive markers, and the character sets used by the trimming
and normalization helpers.
"""

# Texts with at most this many UTF-16 code units skip the byte offset cache.
# Tunable per view through TextConfig.cache_threshold.
DEFAULT_CACHE_THRESHOLD: int = 50

# Environment variables read by TextConfig.from_env()
ENV_CACHE_THRESHOLD = "PALIMPSEST_CACHE_THRESHOLD"
ENV_THREAD_SAFE = "PALIMPSEST_THREAD_SAFE"
ENV_DEBUG = "PALIMPSEST_DEBUG"

# Keywords the syntax service classifies as keywords but which introduce a
# declaration that can carry documentation.
DOCUMENTABLE_KEYWORDS: frozenset[str] = frozenset({"subscript", "init", "deinit"})

# appledoc directive; a comment line containing it is dropped from the body
AUTHORING_DIRECTIVE = "@name"

# Line terminators recognized when partitioning text into lines.
# "\r\n" is a single terminator and is matched before "\r".
LINE_TERMINATORS: tuple[str, ...] = ("\r\n", "\n", "\r", "\u0085", "\u2028", "\u2029")

# Whitespace and newline characters (Unicode White_Space property)
WHITESPACE_AND_NEWLINE: frozenset[str] = frozenset(
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

# Characters stripped as "comment decoration" when removing common
# indentation, so wall-of-asterisks block comments line up.
COMMENT_LINE_PREFIX: frozenset[str] = WHITESPACE_AND_NEWLINE | {"*"}
