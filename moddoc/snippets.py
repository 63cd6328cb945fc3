"""Snippet text and source provenance for declarations of one package."""

from __future__ import annotations

from pathlib import Path

from .index.types import SyntaxNode
from .models import BaseDef, FoundInFile, PackageDoc


class SnippetExtractor:
    """Renders declaration snippets and resolves where they were found.

    Snippet text is the corpus' canonical rendering of the node with any
    literal prefix tokens in front, e.g. `snippet(node, "type ", "Foo", " ")`.
    """

    def __init__(self, package: PackageDoc) -> None:
        self._package = package

    def snippet(self, node: SyntaxNode, *prefix: str) -> str:
        return "".join(prefix) + node.text

    def found_in_file(self, node: SyntaxNode) -> FoundInFile:
        position = self._package.positions.resolve(node.pos)
        filename = position.filename
        root = Path(self._package.absolute_path)
        if Path(filename).parent != root:
            raise ValueError(f"{filename} does not belong to package directory {root}")
        return FoundInFile(filename=filename, line=position.line, column=position.column)

    def record(self, definition: BaseDef) -> None:
        """File `definition` under the same file key its FoundInFile names."""
        self._package.file_decls.setdefault(definition.found_in_file.filename, []).append(definition)


__all__ = ["SnippetExtractor"]
