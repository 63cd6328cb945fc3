"""End-to-end tests for the build cycle."""

from __future__ import annotations

from pathlib import Path

import pytest

from moddoc.config import ModDocConfig
from moddoc.errors import ModuleResolutionError, OutputDirectoryError
from moddoc.orchestrator import Orchestrator, Snapshot
from tests._fixtures.go_module import GoModuleBuilder


def _config(module: GoModuleBuilder, out_dir: Path) -> ModDocConfig:
    return ModDocConfig(module=module.path(), output_dir=out_dir)


def test_run_build_writes_pages_and_publishes_snapshot(greet_module: GoModuleBuilder, tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    orchestrator = Orchestrator(_config(greet_module, out_dir))

    result = orchestrator.run_build()

    assert sorted(path.name for path in result.pages) == ["greet.html", "index.html"]
    assert orchestrator.snapshot.get() is result.model
    assert result.model.import_path == "example.com/greetings"


def test_every_build_replaces_the_model(greet_module: GoModuleBuilder, tmp_path: Path) -> None:
    orchestrator = Orchestrator(_config(greet_module, tmp_path / "out"))

    first = orchestrator.run_build().model
    greet_module.write({"greet/extra.go": "package greet\n\n// Bye says goodbye.\nfunc Bye() {}\n"})
    second = orchestrator.run_build().model

    assert first is not second
    assert [f.name for f in first.packages[0].functions] == ["NewGreeting"]
    assert sorted(f.name for f in second.packages[0].functions) == ["Bye", "NewGreeting"]
    assert orchestrator.snapshot.get() is second


def test_failed_build_keeps_previous_snapshot(greet_module: GoModuleBuilder, tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    orchestrator = Orchestrator(_config(greet_module, out_dir))
    published = orchestrator.run_build().model

    (out_dir / "README.md").write_text("mine", encoding="utf-8")
    with pytest.raises(OutputDirectoryError):
        orchestrator.run_build()

    assert orchestrator.snapshot.get() is published
    assert (out_dir / "README.md").read_text(encoding="utf-8") == "mine"


def test_missing_descriptor_fails(tmp_path: Path) -> None:
    orchestrator = Orchestrator(ModDocConfig(module=tmp_path, output_dir=tmp_path / "out"))

    with pytest.raises(ModuleResolutionError):
        orchestrator.run_build()

    assert not (tmp_path / "out").exists()


def test_snapshot_swap_returns_previous() -> None:
    snapshot = Snapshot()

    assert snapshot.get() is None
    assert snapshot.swap("first") is None  # type: ignore[arg-type]
    assert snapshot.swap("second") == "first"  # type: ignore[arg-type]
    assert snapshot.get() == "second"
