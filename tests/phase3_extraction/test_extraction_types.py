"""
Phase 3 Tests: Extraction types

Covers SourceLocation / SourceDeclaration serialization and SyntaxMap
construction from syntax service responses.
"""

import pytest

from palimpsest.extraction import (
    DeclarationKind,
    SourceDeclaration,
    SourceLocation,
    SyntaxKind,
    SyntaxMap,
    SyntaxToken,
)


class TestSourceDeclaration:
    """Tests for SourceDeclaration."""

    def make_location(self, line=1, offset=0):
        return SourceLocation(file="A.swift", line=line, column=1, offset=offset)

    def test_defaults(self):
        location = self.make_location()
        declaration = SourceDeclaration(kind=DeclarationKind.MARKER, location=location, extent=(location, location))
        assert declaration.name is None
        assert declaration.children == []

    def test_to_dict_includes_optional_fields(self):
        start = self.make_location(line=1, offset=0)
        end = self.make_location(line=3, offset=40)
        child = SourceDeclaration(kind="source.lang.swift.decl.var.instance", location=start, extent=(start, start))
        declaration = SourceDeclaration(
            kind="source.lang.swift.decl.struct",
            location=start,
            extent=(start, end),
            name="S",
            usr="s:1A1SV",
            declaration="struct S",
            documentation="Doc.",
            comment_body="Doc.",
            children=[child],
        )
        data = declaration.to_dict()
        assert data["kind"] == "source.lang.swift.decl.struct"
        assert data["extent"][1]["line"] == 3
        assert data["usr"] == "s:1A1SV"
        assert data["declaration"] == "struct S"
        assert data["documentation"] == "Doc."
        assert data["comment_body"] == "Doc."
        assert data["children"] == [child.to_dict()]


class TestSyntaxMap:
    """Tests for SyntaxMap.from_response()."""

    def test_from_response(self):
        syntax_map = SyntaxMap.from_response(
            [
                {"key.kind": "source.lang.swift.syntaxtype.identifier", "key.offset": 5, "key.length": 1},
                {"key.kind": "source.lang.swift.syntaxtype.keyword", "key.offset": 0, "key.length": 4},
            ]
        )
        assert len(syntax_map) == 2
        assert list(syntax_map) == [
            SyntaxToken(kind=SyntaxKind.KEYWORD, offset=0, length=4),
            SyntaxToken(kind=SyntaxKind.IDENTIFIER, offset=5, length=1),
        ]

    def test_unknown_kind_kept_as_string(self):
        syntax_map = SyntaxMap.from_response(
            [{"key.kind": "source.lang.swift.syntaxtype.future", "key.offset": 0, "key.length": 1}]
        )
        assert syntax_map.tokens[0].kind == "source.lang.swift.syntaxtype.future"
        assert not isinstance(syntax_map.tokens[0].kind, SyntaxKind)

    def test_missing_key_raises(self):
        with pytest.raises(KeyError):
            SyntaxMap.from_response([{"key.kind": "source.lang.swift.syntaxtype.keyword", "key.offset": 0}])

    def test_empty(self):
        assert len(SyntaxMap.from_response([])) == 0
