"""Tests for the command line entrypoint."""

from __future__ import annotations

from pathlib import Path

import pytest

from moddoc import cli
from tests._fixtures.go_module import GoModuleBuilder


def test_parser_defaults() -> None:
    args = cli._build_parser().parse_args([])

    assert args.module == "."
    assert args.out is None
    assert args.serve is False
    assert args.verbose is False
    assert args.host is None
    assert args.port is None


def test_parser_accepts_all_flags() -> None:
    args = cli._build_parser().parse_args(
        ["-v", "-o", "site", "--serve", "--host", "0.0.0.0", "--port", "9000", "mod"]
    )

    assert args.verbose is True
    assert args.out == "site"
    assert args.serve is True
    assert (args.host, args.port) == ("0.0.0.0", 9000)
    assert args.module == "mod"


def test_main_writes_pages(greet_module: GoModuleBuilder, tmp_path: Path) -> None:
    out_dir = tmp_path / "site"

    cli.main(["-o", str(out_dir), str(greet_module.path())])

    assert sorted(path.name for path in out_dir.iterdir()) == ["greet.html", "index.html"]


def test_main_serves_after_build(
    greet_module: GoModuleBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls = []

    def fake_run_service(orchestrator, host, port):  # type: ignore[no-untyped-def]
        calls.append((orchestrator.snapshot.get().import_path, host, port))

    monkeypatch.setattr(cli, "run_service", fake_run_service)

    cli.main(["--serve", "--port", "9001", "-o", str(tmp_path / "site"), str(greet_module.path())])

    assert calls == [("example.com/greetings", "127.0.0.1", 9001)]


def test_main_exits_when_module_is_missing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-o", str(tmp_path / "site"), str(tmp_path)])

    assert excinfo.value.code == 1
    assert "No go.mod found" in capsys.readouterr().err
