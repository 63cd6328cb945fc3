"""Locate a Go module root and read its canonical import path."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from .errors import ModuleResolutionError
from .logging import get_logger

DESCRIPTOR_FILENAME = "go.mod"

_MODULE_DIRECTIVE = re.compile(r"^\s*module\s+(?P<path>\"(?:\\.|[^\"\\])*\"|`[^`]*`|[^\s/(]\S*)")

logger = get_logger("resolver")


@dataclass(frozen=True)
class ModuleInfo:
    """Resolved module root and import path."""

    root: Path
    import_path: str
    descriptor: Path


def resolve_module(path: Path | str) -> ModuleInfo:
    """Resolve `path` (a directory or a file inside it) to its module."""
    candidate = Path(path).expanduser()
    try:
        absolute = candidate.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise ModuleResolutionError(f"Module path {candidate} is not readable: {exc}") from exc

    root = absolute if absolute.is_dir() else absolute.parent
    descriptor = root / DESCRIPTOR_FILENAME
    try:
        content = descriptor.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ModuleResolutionError(f"No {DESCRIPTOR_FILENAME} found in {root}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ModuleResolutionError(f"Cannot read {descriptor}: {exc}") from exc

    import_path = parse_module_path(content)
    if not import_path:
        raise ModuleResolutionError(f"{descriptor} has no module directive")

    logger.debug("Resolved module %s at %s", import_path, root)
    return ModuleInfo(root=root, import_path=import_path, descriptor=descriptor)


def parse_module_path(content: str) -> str:
    """Return the path named by the first `module` directive, or an empty string."""
    for line in content.splitlines():
        match = _MODULE_DIRECTIVE.match(line)
        if not match:
            continue
        token = match.group("path")
        if token[0] == '"':
            try:
                return json.loads(token)
            except ValueError:
                return token[1:-1]
        if token[0] == "`":
            return token[1:-1]
        return token
    return ""


__all__ = ["DESCRIPTOR_FILENAME", "ModuleInfo", "parse_module_path", "resolve_module"]
