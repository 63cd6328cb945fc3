"""Build cycle orchestration: resolve, index, build, render."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .builder import DocumentModelBuilder
from .config import ModDocConfig
from .logging import get_logger
from .models import ModuleDoc
from .render import HtmlRenderer
from .resolver import resolve_module


@dataclass
class BuildResult:
    """Outcome of one build cycle."""

    model: ModuleDoc
    pages: List[Path]


class Snapshot:
    """Holds the most recently completed ModuleDoc.

    A model is published only after it is fully built, by replacing a single
    reference, so readers see either the previous model or the new one. The
    bundled server serves the written pages instead; `get()` is for callers
    that embed an Orchestrator and want the model itself.
    """

    def __init__(self) -> None:
        self._model: Optional[ModuleDoc] = None

    def get(self) -> Optional[ModuleDoc]:
        return self._model

    def swap(self, model: ModuleDoc) -> Optional[ModuleDoc]:
        previous, self._model = self._model, model
        return previous


class Orchestrator:
    """Coordinates one documentation build and owns the published snapshot."""

    def __init__(
        self,
        config: ModDocConfig,
        *,
        builder: DocumentModelBuilder | None = None,
        renderer: HtmlRenderer | None = None,
    ) -> None:
        self.config = config
        self.builder = builder or DocumentModelBuilder(
            exclude_paths=config.exclude_paths,
            index_timeout=config.index_timeout,
        )
        self.renderer = renderer or HtmlRenderer()
        self.snapshot = Snapshot()
        self.logger = get_logger("orchestrator")
        # Serialises rebuilds and reads of the output directory.
        self.lock = threading.RLock()

    def run_build(self) -> BuildResult:
        """Rebuild the model from scratch and regenerate every page."""
        with self.lock:
            module = resolve_module(self.config.module)
            self.logger.debug("Building documentation for %s", module.import_path)
            model = self.builder.build(module)
            pages = self.renderer.generate(model, self.config.output_dir)
            self.snapshot.swap(model)
            return BuildResult(model=model, pages=pages)


__all__ = ["BuildResult", "Orchestrator", "Snapshot"]
