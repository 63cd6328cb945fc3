"""Document model shared by the builder, renderer and server."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .index.positions import PositionTable

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .xref import CrossReferenceIndex


@dataclass(frozen=True)
class FoundInFile:
    """Source location of a declaration; `filename` is absolute."""

    filename: str
    line: int
    column: int


@dataclass
class BaseDef:
    """Fields shared by every documented declaration."""

    name: str
    snippet: str
    found_in_file: FoundInFile
    doc: str = ""

    @property
    def anchor(self) -> str:
        return self.name


@dataclass(frozen=True)
class FieldSummary:
    names: Tuple[str, ...]
    type_text: str
    tag: str = ""

    @property
    def embedded(self) -> bool:
        return not self.names


@dataclass(frozen=True)
class MethodSummary:
    name: str
    signature: str


@dataclass
class FunctionDef(BaseDef):
    signature: str = ""


@dataclass
class MethodDef(FunctionDef):
    receiver: str = ""
    pointer_receiver: bool = False

    @property
    def anchor(self) -> str:
        return f"{self.receiver}.{self.name}"


@dataclass
class StructDef(BaseDef):
    fields: List[FieldSummary] = field(default_factory=list)
    methods: List[MethodDef] = field(default_factory=list)


@dataclass
class InterfaceDef(BaseDef):
    methods: List[MethodSummary] = field(default_factory=list)
    embeds: List[str] = field(default_factory=list)


@dataclass
class ValueDef(BaseDef):
    """A `var` or `const` spec; `names` lists every exported name it declares."""

    kind: str = "var"
    names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScopedIdentifier:
    """Cross-reference record: where an exported name is declared and as what."""

    package_path: str
    name: str
    is_function: bool = False
    is_method: bool = False
    is_type: bool = False
    receiver: Optional[str] = None

    @property
    def anchor(self) -> str:
        return f"{self.receiver}.{self.name}" if self.receiver else self.name


@dataclass
class PackageDoc:
    """One compilation unit of the module."""

    module: "ModuleDoc" = field(repr=False, compare=False)
    name: str
    relative_path: str
    absolute_path: Path
    doc: str
    positions: PositionTable = field(repr=False, compare=False)
    structs: List[StructDef] = field(default_factory=list)
    interfaces: List[InterfaceDef] = field(default_factory=list)
    functions: List[FunctionDef] = field(default_factory=list)
    variables: List[ValueDef] = field(default_factory=list)
    constants: List[ValueDef] = field(default_factory=list)
    file_decls: Dict[str, List[BaseDef]] = field(default_factory=dict)

    @property
    def import_path(self) -> str:
        if self.relative_path == "/":
            return self.module.import_path
        return f"{self.module.import_path}{self.relative_path}"

    def definitions(self) -> List[BaseDef]:
        """Every top-level definition plus struct methods, in display order."""
        result: List[BaseDef] = [*self.constants, *self.variables]
        for struct in self.structs:
            result.append(struct)
            result.extend(struct.methods)
        result.extend(self.interfaces)
        result.extend(self.functions)
        return result


@dataclass
class ModuleDoc:
    """Root of the document model; rebuilt from scratch on every build."""

    absolute_path: Path
    import_path: str
    packages: List[PackageDoc] = field(default_factory=list)
    exports: "CrossReferenceIndex" = field(default_factory=lambda: _empty_exports(), repr=False)

    def package(self, relative_path: str) -> Optional[PackageDoc]:
        for package in self.packages:
            if package.relative_path == relative_path:
                return package
        return None


def _empty_exports() -> "CrossReferenceIndex":
    from .xref import CrossReferenceIndex

    return CrossReferenceIndex()


__all__ = [
    "BaseDef",
    "FieldSummary",
    "FoundInFile",
    "FunctionDef",
    "InterfaceDef",
    "MethodDef",
    "MethodSummary",
    "ModuleDoc",
    "PackageDoc",
    "ScopedIdentifier",
    "StructDef",
    "ValueDef",
]
