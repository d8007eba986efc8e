"""Extraction of documentation and structure from source text.

Components:
- extract_comment_body: Normalized body of a ``/** */`` or ``///`` doc comment
- extract_markers: Marker declarations from ``#pragma mark`` / ``// MARK:`` lines
- documented_token_offsets: Tokens that doc comments attach to
- SourceDeclaration, SourceLocation, SyntaxMap: Record types

Usage:
    from palimpsest import SourceTextView
    from palimpsest.extraction import extract_markers

    view = SourceTextView(source, file="App.swift")
    for mark in extract_markers(view):
        print(mark.location.line, mark.name)
"""

from .comments import extract_comment_body, remove_common_leading_whitespace
from .documentable import documented_token_offsets, is_token_documentable
from .markers import extract_markers
from .types import (
    DeclarationKind,
    SourceDeclaration,
    SourceLocation,
    SyntaxKind,
    SyntaxMap,
    SyntaxToken,
)

__all__ = [
    # Types
    "DeclarationKind",
    "SourceDeclaration",
    "SourceLocation",
    "SyntaxKind",
    "SyntaxMap",
    "SyntaxToken",
    # Extractors
    "documented_token_offsets",
    "extract_comment_body",
    "extract_markers",
    "is_token_documentable",
    "remove_common_leading_whitespace",
]
