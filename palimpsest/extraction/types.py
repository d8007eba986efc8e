"""Declaration and syntax token types.

SourceLocation and SourceDeclaration are the two leaf record kinds this
library populates; an external declaration builder assembles the rest of
the declaration model around them. SyntaxToken and SyntaxMap carry the
classified token stream handed over by the syntax-analysis service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Iterable, Mapping


class DeclarationKind(StrEnum):
    """Declaration kinds produced by this library."""

    MARKER = "marker"


class SyntaxKind(StrEnum):
    """Syntax classifications reported by the syntax-analysis service."""

    ARGUMENT = "source.lang.swift.syntaxtype.argument"
    ATTRIBUTE_BUILTIN = "source.lang.swift.syntaxtype.attribute.builtin"
    ATTRIBUTE_ID = "source.lang.swift.syntaxtype.attribute.id"
    BUILDCONFIG_ID = "source.lang.swift.syntaxtype.buildconfig.id"
    BUILDCONFIG_KEYWORD = "source.lang.swift.syntaxtype.buildconfig.keyword"
    COMMENT = "source.lang.swift.syntaxtype.comment"
    COMMENT_MARK = "source.lang.swift.syntaxtype.comment.mark"
    COMMENT_URL = "source.lang.swift.syntaxtype.comment.url"
    DOC_COMMENT = "source.lang.swift.syntaxtype.doccomment"
    DOC_COMMENT_FIELD = "source.lang.swift.syntaxtype.doccomment.field"
    IDENTIFIER = "source.lang.swift.syntaxtype.identifier"
    KEYWORD = "source.lang.swift.syntaxtype.keyword"
    NUMBER = "source.lang.swift.syntaxtype.number"
    OBJECT_LITERAL = "source.lang.swift.syntaxtype.objectliteral"
    PARAMETER = "source.lang.swift.syntaxtype.parameter"
    PLACEHOLDER = "source.lang.swift.syntaxtype.placeholder"
    STRING = "source.lang.swift.syntaxtype.string"
    STRING_INTERPOLATION_ANCHOR = "source.lang.swift.syntaxtype.string_interpolation_anchor"
    TYPE_IDENTIFIER = "source.lang.swift.syntaxtype.typeidentifier"


@dataclass(frozen=True)
class SourceLocation:
    """A point in a file: 1-based line and column, plus its byte offset."""

    file: str | None
    line: int
    column: int
    offset: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "offset": self.offset,
        }


@dataclass
class SourceDeclaration:
    """A declaration with its location, extent and optional documentation."""

    kind: DeclarationKind | str
    location: SourceLocation
    extent: tuple[SourceLocation, SourceLocation]
    name: str | None = None
    usr: str | None = None
    declaration: str | None = None
    documentation: str | None = None
    comment_body: str | None = None
    children: list[SourceDeclaration] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "kind": str(self.kind),
            "location": self.location.to_dict(),
            "extent": [self.extent[0].to_dict(), self.extent[1].to_dict()],
        }
        if self.name is not None:
            result["name"] = self.name
        if self.usr is not None:
            result["usr"] = self.usr
        if self.declaration is not None:
            result["declaration"] = self.declaration
        if self.documentation is not None:
            result["documentation"] = self.documentation
        if self.comment_body is not None:
            result["comment_body"] = self.comment_body
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@dataclass(frozen=True)
class SyntaxToken:
    """A classified token: kind tag, byte offset and byte length."""

    kind: SyntaxKind | str
    offset: int
    length: int


@dataclass
class SyntaxMap:
    """The classified token stream for one text, ordered by offset."""

    tokens: list[SyntaxToken] = field(default_factory=list)

    @classmethod
    def from_response(cls, items: Iterable[Mapping[str, Any]]) -> "SyntaxMap":
        """Build a SyntaxMap from the service's syntax map entries.

        Each entry is a mapping with ``key.kind``, ``key.offset`` and
        ``key.length``. Unknown kinds are kept as plain strings.

        Raises:
            KeyError: If an entry lacks one of the three keys.
        """
        tokens = []
        for item in items:
            raw_kind = item["key.kind"]
            try:
                kind: SyntaxKind | str = SyntaxKind(raw_kind)
            except ValueError:
                kind = raw_kind
            tokens.append(
                SyntaxToken(kind=kind, offset=int(item["key.offset"]), length=int(item["key.length"]))
            )
        tokens.sort(key=lambda t: t.offset)
        return cls(tokens=tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)
