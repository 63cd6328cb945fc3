"""Helper utilities for constructing throwaway Go modules in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping


class GoModuleBuilder:
    """Writes a go.mod plus source files under a temporary module root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "mod"
        self.root.mkdir()

    def go_mod(self, import_path: str = "example.com/greetings") -> Path:
        descriptor = self.root / "go.mod"
        descriptor.write_text(f"module {import_path}\n\ngo 1.21\n", encoding="utf-8")
        return descriptor

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the module."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def path(self) -> Path:
        return self.root


GREET_SOURCE = """
    // Package greet builds greetings.
    package greet

    // Greeting is a message for someone.
    type Greeting struct {
        Text string
    }

    // NewGreeting returns an empty greeting.
    func NewGreeting() Greeting {
        return Greeting{}
    }
"""


__all__ = ["GREET_SOURCE", "GoModuleBuilder"]
