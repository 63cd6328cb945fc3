"""Tree-sitter powered declaration extraction for Go source files."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Parser

from .printer import join_doc, node_text, render_node
from .types import FieldSpec, FuncSpec, Ident, MethodSpec, PackageInfo, SpotKind, SyntaxNode, TypeSpec, ValueSpec

GO_LANGUAGE = Language(tree_sitter_go.language())

_METHOD_ELEMS = {"method_elem", "method_spec"}


def new_parser() -> Parser:
    return Parser(GO_LANGUAGE)


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


def package_clause(root) -> Optional[object]:  # type: ignore[no-untyped-def]
    for child in root.named_children:
        if child.type == "package_clause":
            return child
    return None


def package_name(root, source: bytes) -> Optional[str]:  # type: ignore[no-untyped-def]
    clause = package_clause(root)
    if clause is None:
        return None
    for child in clause.named_children:
        if child.type == "package_identifier":
            return node_text(child, source)
    return None


def package_doc(root, source: bytes) -> str:  # type: ignore[no-untyped-def]
    clause = package_clause(root)
    return doc_comment(clause, source) if clause is not None else ""


def doc_comment(node, source: bytes) -> str:  # type: ignore[no-untyped-def]
    """Return the comment block directly above `node` (no blank line between)."""
    comments: List[str] = []
    current = node
    sibling = node.prev_named_sibling
    while (
        sibling is not None
        and sibling.type == "comment"
        and sibling.end_point[0] + 1 >= current.start_point[0]
        and _starts_line(sibling, source)
    ):
        comments.append(node_text(sibling, source))
        current = sibling
        sibling = sibling.prev_named_sibling
    comments.reverse()
    return join_doc(comments)


def _starts_line(node, source: bytes) -> bool:  # type: ignore[no-untyped-def]
    line_start = source.rfind(b"\n", 0, node.start_byte) + 1
    return not source[line_start : node.start_byte].strip()


def _is_grouped(decl) -> bool:  # type: ignore[no-untyped-def]
    return any(child.type == "(" or child.type.endswith("_spec_list") for child in decl.children)


class DeclarationCollector:
    """Collects the exported declarations of one parsed file into a PackageInfo."""

    def __init__(self, info: PackageInfo, source: bytes, root, base: int) -> None:  # type: ignore[no-untyped-def]
        self._info = info
        self._source = source
        self._root = root
        self._base = base
        self.idents: List[Tuple[SpotKind, Ident]] = []

    def collect(self) -> None:
        for child in self._root.named_children:
            if child.type == "type_declaration":
                self._collect_types(child)
            elif child.type == "function_declaration":
                self._collect_function(child)
            elif child.type == "method_declaration":
                self._collect_method(child)
            elif child.type == "var_declaration":
                self._collect_values(child, "var")
            elif child.type == "const_declaration":
                self._collect_values(child, "const")

    def _text(self, node) -> str:  # type: ignore[no-untyped-def]
        return node_text(node, self._source)

    def _node(self, node) -> SyntaxNode:  # type: ignore[no-untyped-def]
        return SyntaxNode(kind=node.type, pos=self._base + node.start_byte, text=render_node(node, self._source))

    def _record(self, kind: SpotKind, name: str, doc: str, receiver: Optional[str] = None) -> None:
        ident = Ident(path=self._info.path, package=self._info.name, name=name, doc=doc, receiver=receiver)
        self.idents.append((kind, ident))

    def _collect_types(self, decl) -> None:  # type: ignore[no-untyped-def]
        grouped = _is_grouped(decl)
        decl_doc = doc_comment(decl, self._source)
        for spec in decl.named_children:
            if spec.type not in {"type_spec", "type_alias"}:
                continue
            name_node = spec.child_by_field_name("name")
            type_node = spec.child_by_field_name("type")
            if name_node is None or type_node is None:
                continue
            name = self._text(name_node)
            if not is_exported(name):
                continue
            doc = doc_comment(spec, self._source) if grouped else decl_doc
            type_spec = TypeSpec(name=name, doc=doc, node=self._node(spec), underlying=self._node(type_node))
            if type_node.type == "struct_type":
                type_spec.fields = self._struct_fields(type_node)
            elif type_node.type == "interface_type":
                type_spec.methods, type_spec.embeds = self._interface_elems(type_node)
            self._info.types.append(type_spec)
            self._record(SpotKind.TYPE_DECL, name, doc)

    def _struct_fields(self, struct_node) -> List[FieldSpec]:  # type: ignore[no-untyped-def]
        fields: List[FieldSpec] = []
        for field_list in struct_node.named_children:
            if field_list.type != "field_declaration_list":
                continue
            for decl in field_list.named_children:
                if decl.type != "field_declaration":
                    continue
                tag_node = decl.child_by_field_name("tag")
                tag = self._text(tag_node) if tag_node is not None else ""
                names = tuple(
                    self._text(node) for node in decl.children_by_field_name("name") if node.is_named
                )
                if names:
                    exported = tuple(name for name in names if is_exported(name))
                    if not exported:
                        continue
                    type_node = decl.child_by_field_name("type")
                    type_text = self._text(type_node) if type_node is not None else ""
                    fields.append(FieldSpec(names=exported, type_text=type_text, tag=tag))
                else:
                    end = tag_node.start_byte if tag_node is not None else decl.end_byte
                    type_text = self._source[decl.start_byte : end].decode("utf-8", errors="replace").strip()
                    fields.append(FieldSpec(names=(), type_text=type_text, tag=tag))
        return fields

    def _interface_elems(self, interface_node) -> Tuple[List[MethodSpec], List[str]]:  # type: ignore[no-untyped-def]
        methods: List[MethodSpec] = []
        embeds: List[str] = []
        for elem in interface_node.named_children:
            if elem.type == "comment":
                continue
            if elem.type in _METHOD_ELEMS:
                name_node = elem.child_by_field_name("name")
                params = elem.child_by_field_name("parameters")
                if name_node is None or params is None:
                    continue
                name = self._text(name_node)
                if not is_exported(name):
                    continue
                result = elem.child_by_field_name("result")
                end = (result if result is not None else params).end_byte
                signature = self._source[params.start_byte : end].decode("utf-8", errors="replace")
                methods.append(MethodSpec(name=name, signature=signature))
            else:
                embeds.append(self._text(elem))
        return methods, embeds

    def _signature(self, node) -> str:  # type: ignore[no-untyped-def]
        params = node.child_by_field_name("parameters")
        if params is None:
            return ""
        start = node.child_by_field_name("type_parameters")
        if start is None:
            start = params
        end = node.child_by_field_name("result")
        if end is None:
            end = params
        return self._source[start.start_byte : end.end_byte].decode("utf-8", errors="replace")

    def _collect_function(self, node) -> None:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        name = self._text(name_node)
        if not is_exported(name):
            return
        doc = doc_comment(node, self._source)
        self._info.funcs.append(
            FuncSpec(name=name, doc=doc, node=self._node(node), signature=self._signature(node))
        )
        self._record(SpotKind.FUNC_DECL, name, doc)

    def _collect_method(self, node) -> None:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        receiver_list = node.child_by_field_name("receiver")
        if name_node is None or receiver_list is None:
            return
        name = self._text(name_node)
        receiver, pointer = self._receiver(receiver_list)
        if not is_exported(name) or receiver is None or not is_exported(receiver):
            return
        doc = doc_comment(node, self._source)
        self._info.methods.append(
            FuncSpec(
                name=name,
                doc=doc,
                node=self._node(node),
                signature=self._signature(node),
                receiver=receiver,
                pointer_receiver=pointer,
            )
        )
        self._record(SpotKind.METHOD_DECL, name, doc, receiver=receiver)

    def _receiver(self, receiver_list) -> Tuple[Optional[str], bool]:  # type: ignore[no-untyped-def]
        for param in receiver_list.named_children:
            if param.type != "parameter_declaration":
                continue
            type_node = param.child_by_field_name("type")
            pointer = False
            if type_node is not None and type_node.type == "pointer_type":
                pointer = True
                type_node = type_node.named_children[0] if type_node.named_children else None
            if type_node is not None and type_node.type == "generic_type":
                type_node = type_node.child_by_field_name("type")
            if type_node is None:
                return None, pointer
            return self._text(type_node), pointer
        return None, False

    def _collect_values(self, decl, kind: str) -> None:  # type: ignore[no-untyped-def]
        grouped = _is_grouped(decl)
        decl_doc = doc_comment(decl, self._source)
        spot = SpotKind.VAR_DECL if kind == "var" else SpotKind.CONST_DECL
        for spec in self._value_specs(decl, f"{kind}_spec"):
            names = tuple(
                self._text(node)
                for node in spec.children_by_field_name("name")
                if node.type == "identifier"
            )
            exported = tuple(name for name in names if is_exported(name))
            if not exported:
                continue
            doc = doc_comment(spec, self._source) if grouped else decl_doc
            value = ValueSpec(kind=kind, names=exported, doc=doc, node=self._node(spec))
            (self._info.vars if kind == "var" else self._info.consts).append(value)
            for name in exported:
                self._record(spot, name, doc)

    @staticmethod
    def _value_specs(decl, spec_type: str) -> Iterator[object]:  # type: ignore[no-untyped-def]
        for child in decl.named_children:
            if child.type == spec_type:
                yield child
            elif child.type.endswith("_spec_list"):
                for nested in child.named_children:
                    if nested.type == spec_type:
                        yield nested


__all__ = [
    "DeclarationCollector",
    "GO_LANGUAGE",
    "doc_comment",
    "is_exported",
    "new_parser",
    "package_doc",
    "package_name",
]
