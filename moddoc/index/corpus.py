"""Background indexing of every compilation unit below a module root."""

from __future__ import annotations

import os
from concurrent.futures import Future, ThreadPoolExecutor
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..errors import IndexerError
from ..logging import get_logger
from .golang import DeclarationCollector, new_parser, package_doc, package_name
from .positions import PositionTable
from .types import Ident, IdentifierIndex, PackageInfo, SpotKind

_SKIPPED_DIRS = {"testdata", "vendor", "node_modules"}

logger = get_logger("index")


class Corpus:
    """Indexes the Go packages of a module on a background worker.

    `start()` returns a future that resolves to the identifier index once the
    whole tree has been scanned; `page_info()` is only meaningful after that.
    """

    def __init__(self, root: Path | str, *, exclude_paths: Sequence[str] = ()) -> None:
        self.root = Path(root)
        self._exclude_paths = [pattern.strip().strip("/") for pattern in exclude_paths if pattern.strip()]
        self._future: Optional[Future[IdentifierIndex]] = None
        self._packages: Dict[str, PackageInfo] = {}
        self._index: Optional[IdentifierIndex] = None

    def init(self) -> None:
        if not self.root.is_dir():
            raise IndexerError(f"Corpus root {self.root} is not a directory")

    def start(self) -> Future[IdentifierIndex]:
        """Kick off indexing once and return its completion future."""
        if self._future is None:
            executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="moddoc-index")
            self._future = executor.submit(self._run_indexer)
            executor.shutdown(wait=False)
        return self._future

    def current_index(self) -> IdentifierIndex:
        if self._index is None:
            raise IndexerError("Index requested before indexing completed")
        return self._index

    def page_info(self, path: str) -> Optional[PackageInfo]:
        return self._packages.get(path)

    def _run_indexer(self) -> IdentifierIndex:
        self.init()
        parser = new_parser()
        index: IdentifierIndex = {kind: {} for kind in SpotKind}
        packages: Dict[str, PackageInfo] = {}

        for directory in self._unit_directories():
            info, idents = self._index_unit(parser, directory)
            if info is None:
                continue
            packages[info.path] = info
            index[SpotKind.PACKAGE_CLAUSE].setdefault(info.name, []).append(
                Ident(path=info.path, package=info.name, name=info.name, doc=info.doc)
            )
            for kind, ident in idents:
                index[kind].setdefault(ident.name, []).append(ident)

        self._packages = packages
        self._index = index
        logger.debug("Indexed %d packages under %s", len(packages), self.root)
        return index

    def _unit_directories(self) -> Iterator[Path]:
        for current, dirnames, filenames in os.walk(self.root):
            directory = Path(current)
            rel = directory.relative_to(self.root).as_posix()
            dirnames[:] = sorted(
                name
                for name in dirnames
                if not name.startswith((".", "_"))
                and name not in _SKIPPED_DIRS
                and not (directory / name / "go.mod").exists()
                and not self._is_excluded(name if rel == "." else f"{rel}/{name}")
            )
            if any(name.endswith(".go") for name in filenames):
                yield directory

    def _is_excluded(self, rel_path: str) -> bool:
        for pattern in self._exclude_paths:
            if fnmatchcase(rel_path, pattern) or rel_path.startswith(f"{pattern}/"):
                return True
        return False

    def _index_unit(self, parser, directory: Path) -> Tuple[Optional[PackageInfo], List[Tuple[SpotKind, Ident]]]:  # type: ignore[no-untyped-def]
        rel = directory.relative_to(self.root).as_posix()
        path = "/" if rel == "." else f"/{rel}"
        files = sorted(
            entry
            for entry in directory.iterdir()
            if entry.suffix == ".go" and not entry.name.endswith("_test.go") and entry.is_file()
        )

        positions = PositionTable()
        info: Optional[PackageInfo] = None
        docs: List[str] = []
        idents: List[Tuple[SpotKind, Ident]] = []
        for file in files:
            try:
                source = file.read_bytes()
            except OSError as exc:
                logger.warning("Skipping unreadable file %s: %s", file, exc)
                continue
            tree = parser.parse(source)
            name = package_name(tree.root_node, source)
            if name is None:
                logger.warning("Skipping %s: no package clause", file)
                continue
            if info is None:
                info = PackageInfo(name=name, path=path, directory=str(directory), doc="", positions=positions)
            elif name != info.name:
                logger.debug("Skipping %s: package %s differs from %s", file, name, info.name)
                continue

            base = positions.add_file(str(file), source)
            info.filenames.append(str(file))
            doc = package_doc(tree.root_node, source)
            if doc:
                docs.append(doc)
            collector = DeclarationCollector(info, source, tree.root_node, base)
            collector.collect()
            idents.extend(collector.idents)

        if info is not None:
            info.doc = "\n\n".join(docs)
        return info, idents


__all__ = ["Corpus"]
