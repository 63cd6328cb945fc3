"""Identifier linking policy for rendered snippets."""

from __future__ import annotations

import re
from typing import List, Mapping, Optional, Set

from markupsafe import Markup, escape

from ..models import ScopedIdentifier
from ..xref import CrossReferenceIndex

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<comment>//[^\n]*|/\*.*?\*/)
  | (?P<string>"(?:\\.|[^"\\\n])*"|`[^`]*`|'(?:\\.|[^'\\\n])*')
  | (?P<number>\d\w*)
  | (?P<ident>[^\W\d]\w*)
    """,
    re.VERBOSE | re.DOTALL,
)


class SymbolLinker:
    """Resolves snippet identifiers to declaration anchors.

    `pages` maps unit path to page file name; `anchors` maps unit path to the
    anchors its page actually contains. A candidate declared in the current
    unit always wins, otherwise the first candidate in discovery order does.
    """

    def __init__(
        self,
        exports: CrossReferenceIndex,
        pages: Mapping[str, str],
        anchors: Mapping[str, Set[str]],
    ) -> None:
        self._exports = exports
        self._pages = pages
        self._anchors = anchors

    def resolve(self, name: str, current_path: str) -> Optional[ScopedIdentifier]:
        candidates: List[ScopedIdentifier] = [
            candidate
            for candidate in self._exports.lookup(name)
            if candidate.anchor in self._anchors.get(candidate.package_path, ())
        ]
        for candidate in candidates:
            if candidate.package_path == current_path:
                return candidate
        return candidates[0] if candidates else None

    def href(self, identifier: ScopedIdentifier) -> str:
        return f"{self._pages[identifier.package_path]}#{identifier.anchor}"

    def link(self, snippet: str, current_path: str) -> Markup:
        """Escape `snippet` and wrap every resolvable identifier in a link."""
        parts: List[Markup] = []
        last = 0
        for match in _TOKEN_PATTERN.finditer(snippet):
            parts.append(escape(snippet[last : match.start()]))
            token = match.group(0)
            kind = match.lastgroup
            if kind == "ident":
                target = self.resolve(token, current_path)
                if target is not None:
                    parts.append(Markup('<a href="{}">{}</a>').format(self.href(target), token))
                else:
                    parts.append(escape(token))
            elif kind == "comment":
                parts.append(Markup('<span class="comment">{}</span>').format(token))
            else:
                parts.append(escape(token))
            last = match.end()
        parts.append(escape(snippet[last:]))
        return Markup("").join(parts)


__all__ = ["SymbolLinker"]
