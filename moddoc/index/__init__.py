"""Go source indexing: package discovery, declarations and positions."""

from .corpus import Corpus
from .positions import PositionTable, SourcePosition
from .types import (
    FieldSpec,
    FuncSpec,
    Ident,
    IdentifierIndex,
    MethodSpec,
    PackageInfo,
    SpotKind,
    SyntaxNode,
    TypeSpec,
    ValueSpec,
)

__all__ = [
    "Corpus",
    "FieldSpec",
    "FuncSpec",
    "Ident",
    "IdentifierIndex",
    "MethodSpec",
    "PackageInfo",
    "PositionTable",
    "SourcePosition",
    "SpotKind",
    "SyntaxNode",
    "TypeSpec",
    "ValueSpec",
]
