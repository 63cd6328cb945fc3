"""Output directory guard and page housekeeping."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from .errors import OutputDirectoryError
from .logging import get_logger

PAGE_SUFFIX = ".html"

logger = get_logger("output")


def ensure_output_dir(path: Path | str) -> Path:
    """Return the absolute output directory, refusing to touch foreign files.

    A missing directory is created. An existing directory may only contain
    previously generated pages (and sub-directories); anything else aborts the
    run before a single file is written.
    """
    out_dir = Path(path).expanduser().resolve()
    if out_dir.exists() and not out_dir.is_dir():
        raise OutputDirectoryError(f"Output path {out_dir} is not a directory")

    if out_dir.is_dir():
        foreign = _foreign_entries(out_dir)
        if foreign:
            raise OutputDirectoryError(
                f"Output path {out_dir} is not empty (contains non-generated entries: {', '.join(foreign[:5])})"
            )
        return out_dir

    try:
        out_dir.mkdir(parents=True)
    except OSError as exc:
        raise OutputDirectoryError(f"Cannot create output directory {out_dir}: {exc}") from exc
    return out_dir


def remove_stale_pages(out_dir: Path, keep: Iterable[str]) -> List[Path]:
    """Delete generated pages under `out_dir` whose relative path is not in `keep`."""
    keep_set = set(keep)
    removed: List[Path] = []
    for page in sorted(out_dir.rglob(f"*{PAGE_SUFFIX}")):
        if not page.is_file():
            continue
        if page.relative_to(out_dir).as_posix() in keep_set:
            continue
        page.unlink()
        removed.append(page)
    if removed:
        logger.debug("Removed %d stale pages from %s", len(removed), out_dir)
    return removed


def _foreign_entries(out_dir: Path) -> List[str]:
    foreign: List[str] = []
    for current, dirnames, filenames in os.walk(out_dir):
        dirnames.sort()
        for name in sorted(filenames):
            entry = Path(current) / name
            if entry.suffix != PAGE_SUFFIX:
                foreign.append(entry.relative_to(out_dir).as_posix())
    return foreign


__all__ = ["PAGE_SUFFIX", "ensure_output_dir", "remove_stale_pages"]
