"""Tests for snippet rendering and provenance."""

from __future__ import annotations

from pathlib import Path

import pytest

from moddoc.index.positions import PositionTable
from moddoc.index.types import SyntaxNode
from moddoc.models import FoundInFile, FunctionDef, ModuleDoc, PackageDoc
from moddoc.snippets import SnippetExtractor


def _package(tmp_path: Path) -> PackageDoc:
    module = ModuleDoc(absolute_path=tmp_path, import_path="example.com/m")
    positions = PositionTable()
    positions.add_file(str(tmp_path / "greet" / "greet.go"), b"package greet\n\ntype Greeting struct{}\n")
    positions.add_file(str(tmp_path / "elsewhere.go"), b"package greet\n")
    return PackageDoc(
        module=module,
        name="greet",
        relative_path="/greet",
        absolute_path=tmp_path / "greet",
        doc="",
        positions=positions,
    )


def test_snippet_prepends_prefix_tokens(tmp_path: Path) -> None:
    extractor = SnippetExtractor(_package(tmp_path))
    node = SyntaxNode(kind="struct_type", pos=21, text="struct{}")

    assert extractor.snippet(node, "type ", "Greeting", " ") == "type Greeting struct{}"
    assert extractor.snippet(node) == "struct{}"


def test_found_in_file_resolves_through_position_table(tmp_path: Path) -> None:
    extractor = SnippetExtractor(_package(tmp_path))
    node = SyntaxNode(kind="type_spec", pos=1 + len(b"package greet\n\ntype "), text="")

    found = extractor.found_in_file(node)

    assert found == FoundInFile(filename=str(tmp_path / "greet" / "greet.go"), line=3, column=6)


def test_found_in_file_rejects_files_outside_the_package(tmp_path: Path) -> None:
    package = _package(tmp_path)
    extractor = SnippetExtractor(package)
    second_base = 1 + len(b"package greet\n\ntype Greeting struct{}\n") + 1

    with pytest.raises(ValueError):
        extractor.found_in_file(SyntaxNode(kind="x", pos=second_base, text=""))


def test_record_groups_definitions_by_file(tmp_path: Path) -> None:
    package = _package(tmp_path)
    extractor = SnippetExtractor(package)
    node = SyntaxNode(kind="function_declaration", pos=1, text="func F()")
    definition = FunctionDef(name="F", snippet="func F()", found_in_file=extractor.found_in_file(node))

    extractor.record(definition)

    assert package.file_decls == {str(tmp_path / "greet" / "greet.go"): [definition]}
