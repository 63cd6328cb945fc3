"""Page data and identifier index produced by the corpus."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .positions import PositionTable


class SpotKind(Enum):
    """Buckets of the identifier index, in scan order."""

    PACKAGE_CLAUSE = "Packages"
    CONST_DECL = "Constants"
    TYPE_DECL = "Types"
    VAR_DECL = "Variables"
    FUNC_DECL = "Functions"
    METHOD_DECL = "Methods"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Ident:
    """One exported identifier recorded by the corpus."""

    path: str
    package: str
    name: str
    doc: str = ""
    receiver: Optional[str] = None


IdentifierIndex = Dict[SpotKind, Dict[str, List[Ident]]]


@dataclass(frozen=True)
class SyntaxNode:
    """Corpus-side handle on a declaration: unit-wide offset and canonical text."""

    kind: str
    pos: int
    text: str


@dataclass(frozen=True)
class FieldSpec:
    names: Tuple[str, ...]
    type_text: str
    tag: str = ""

    @property
    def embedded(self) -> bool:
        return not self.names


@dataclass(frozen=True)
class MethodSpec:
    name: str
    signature: str


@dataclass
class TypeSpec:
    """A named type. `underlying.kind` is the tree-sitter node type of its shape."""

    name: str
    doc: str
    node: SyntaxNode
    underlying: SyntaxNode
    fields: List[FieldSpec] = field(default_factory=list)
    methods: List[MethodSpec] = field(default_factory=list)
    embeds: List[str] = field(default_factory=list)


@dataclass
class FuncSpec:
    """A function or, when `receiver` is set, a method."""

    name: str
    doc: str
    node: SyntaxNode
    signature: str
    receiver: Optional[str] = None
    pointer_receiver: bool = False


@dataclass
class ValueSpec:
    kind: str
    names: Tuple[str, ...]
    doc: str
    node: SyntaxNode


@dataclass
class PackageInfo:
    """Everything the corpus knows about one compilation unit."""

    name: str
    path: str
    directory: str
    doc: str
    positions: PositionTable
    filenames: List[str] = field(default_factory=list)
    types: List[TypeSpec] = field(default_factory=list)
    funcs: List[FuncSpec] = field(default_factory=list)
    methods: List[FuncSpec] = field(default_factory=list)
    vars: List[ValueSpec] = field(default_factory=list)
    consts: List[ValueSpec] = field(default_factory=list)


__all__ = [
    "FieldSpec",
    "FuncSpec",
    "Ident",
    "IdentifierIndex",
    "MethodSpec",
    "PackageInfo",
    "SpotKind",
    "SyntaxNode",
    "TypeSpec",
    "ValueSpec",
]
