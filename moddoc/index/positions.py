"""Position bookkeeping for the files of one compilation unit."""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class SourcePosition:
    """A resolved position: file name with 1-based line and column."""

    filename: str
    line: int
    column: int


@dataclass
class _FileEntry:
    filename: str
    base: int
    size: int
    line_offsets: List[int]


class PositionTable:
    """Maps unit-wide offsets back to file, line and column.

    Every file added gets a disjoint range of offsets starting at its base, so
    a single integer identifies a byte in any file of the unit. Offsets start
    at 1; 0 is never a valid position.
    """

    def __init__(self) -> None:
        self._files: List[_FileEntry] = []
        self._bases: List[int] = []
        self._next_base = 1

    def add_file(self, filename: str, content: bytes) -> int:
        """Register `content` under `filename` and return the file's base offset."""
        base = self._next_base
        line_offsets = [0] + [match.end() for match in re.finditer(b"\n", content)]
        self._files.append(_FileEntry(filename, base, len(content), line_offsets))
        self._bases.append(base)
        self._next_base = base + len(content) + 1
        return base

    def resolve(self, pos: int) -> SourcePosition:
        index = bisect_right(self._bases, pos) - 1
        if index < 0:
            raise ValueError(f"Position {pos} is outside every registered file")
        entry = self._files[index]
        offset = pos - entry.base
        if offset > entry.size:
            raise ValueError(f"Position {pos} is outside every registered file")
        line_index = bisect_right(entry.line_offsets, offset) - 1
        return SourcePosition(
            filename=entry.filename,
            line=line_index + 1,
            column=offset - entry.line_offsets[line_index] + 1,
        )

    def filenames(self) -> List[str]:
        return [entry.filename for entry in self._files]

    def __len__(self) -> int:
        return len(self._files)


__all__ = ["PositionTable", "SourcePosition"]
