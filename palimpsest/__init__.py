"""
Palimpsest - Coordinate translation and doc-comment extraction over source text.

Provides:
- Byte offset <-> UTF-16 code unit translation with an amortizing cache
- Byte-range substring, line-range and line/column queries
- Documentation comment body extraction with indentation normalization
- Section marker (``#pragma mark`` / ``// MARK:``) extraction
- Matching of doc-comment terminators to the tokens they document

A palimpsest is a manuscript scraped and written over, its earlier text still
legible underneath. Fitting for a library that reads one text through three
different coordinate systems at once.
"""

from palimpsest.config import TextConfig, get_default_config
from palimpsest.text.view import SourceTextView

__version__ = "0.1.0"

__all__ = [
    "SourceTextView",
    "TextConfig",
    "get_default_config",
    "__version__",
]
