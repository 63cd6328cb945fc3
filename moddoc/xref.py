"""Module-wide cross-reference index of exported names."""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Tuple

from .index.types import IdentifierIndex, SpotKind
from .models import ScopedIdentifier


class CrossReferenceIndex:
    """Maps a bare name to every scoped declaration sharing it, in discovery order.

    Entries are only ever appended, never merged or deduplicated. Once frozen
    the index rejects further writes so readers never see it mid-build.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, List[ScopedIdentifier]] = {}
        self._frozen = False

    def add(self, identifier: ScopedIdentifier) -> None:
        if self._frozen:
            raise RuntimeError("Cross-reference index is frozen")
        self._entries.setdefault(identifier.name, []).append(identifier)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> Tuple[ScopedIdentifier, ...]:
        return tuple(self._entries.get(name, ()))

    def names(self) -> List[str]:
        return list(self._entries)

    def as_dict(self) -> Mapping[str, Tuple[ScopedIdentifier, ...]]:
        return {name: tuple(entries) for name, entries in self._entries.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def build_cross_reference(index: IdentifierIndex) -> CrossReferenceIndex:
    """Flatten every bucket except package names into a cross-reference index."""
    exports = CrossReferenceIndex()
    for kind, symbols in index.items():
        if kind is SpotKind.PACKAGE_CLAUSE:
            continue
        for name, idents in symbols.items():
            for ident in idents:
                exports.add(
                    ScopedIdentifier(
                        package_path=ident.path,
                        name=name,
                        is_function=kind is SpotKind.FUNC_DECL,
                        is_method=kind is SpotKind.METHOD_DECL,
                        is_type=kind is SpotKind.TYPE_DECL,
                        receiver=ident.receiver if kind is SpotKind.METHOD_DECL else None,
                    )
                )
    return exports


def unit_paths(index: IdentifierIndex) -> Dict[str, str]:
    """Return `unit path -> package name` from the package bucket, in discovery order.

    The bucket is keyed by package name, so walk order (parents first, sorted
    siblings) is restored by sorting on path segments.
    """
    units: Dict[str, str] = {}
    for name, idents in index.get(SpotKind.PACKAGE_CLAUSE, {}).items():
        for ident in idents:
            units.setdefault(ident.path, name)
    return {path: units[path] for path in sorted(units, key=_walk_key)}


def _walk_key(path: str) -> List[str]:
    return path.strip("/").split("/")


__all__ = ["CrossReferenceIndex", "build_cross_reference", "unit_paths"]
