"""Canonical text rendering of Go declaration nodes."""

from __future__ import annotations

from typing import List

_BODY_OWNERS = {"function_declaration", "method_declaration"}


def node_text(node, source: bytes) -> str:  # type: ignore[no-untyped-def]
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def render_node(node, source: bytes) -> str:  # type: ignore[no-untyped-def]
    """Render `node` the way it reads in the source, minus function bodies.

    Continuation lines lose the indentation of the line the node starts on, so
    a spec inside `type ( ... )` renders like a top-level declaration.
    """
    end = node.end_byte
    if node.type in _BODY_OWNERS:
        body = node.child_by_field_name("body")
        if body is not None:
            end = body.start_byte
    text = source[node.start_byte : end].decode("utf-8", errors="replace").rstrip()
    return _reindent(text, _line_indent(source, node.start_byte))


def comment_text(raw: str) -> str:
    """Strip comment markers from a single `//` or `/* */` comment."""
    if raw.startswith("//"):
        line = raw[2:]
        return line[1:] if line.startswith(" ") else line
    if raw.startswith("/*"):
        inner = raw[2:-2] if raw.endswith("*/") else raw[2:]
        lines = [line.strip() for line in inner.strip("\n").splitlines()]
        return "\n".join(lines).strip()
    return raw


def join_doc(comments: List[str]) -> str:
    lines = []
    for raw in comments:
        text = comment_text(raw)
        if text.startswith("go:") or text.startswith("+build"):
            continue
        lines.append(text)
    return "\n".join(lines).strip()


def _line_indent(source: bytes, offset: int) -> str:
    line_start = source.rfind(b"\n", 0, offset) + 1
    prefix = source[line_start:offset]
    indent = len(prefix) - len(prefix.lstrip(b" \t"))
    return prefix[:indent].decode("utf-8", errors="replace")


def _reindent(text: str, indent: str) -> str:
    if not indent:
        return text
    lines = text.split("\n")
    return "\n".join([lines[0]] + [line[len(indent):] if line.startswith(indent) else line for line in lines[1:]])


__all__ = ["comment_text", "join_doc", "node_text", "render_node"]
