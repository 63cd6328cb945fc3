"""Tests for the output directory guard."""

from __future__ import annotations

from pathlib import Path

import pytest

from moddoc.errors import OutputDirectoryError
from moddoc.output import ensure_output_dir, remove_stale_pages


def test_missing_directory_is_created(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"

    assert ensure_output_dir(target) == target.resolve()
    assert target.is_dir()


def test_directory_with_only_pages_is_accepted(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("old", encoding="utf-8")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "page.html").write_text("old", encoding="utf-8")

    assert ensure_output_dir(tmp_path) == tmp_path.resolve()


def test_unrelated_file_aborts(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("old", encoding="utf-8")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "data.json").write_text("{}", encoding="utf-8")

    with pytest.raises(OutputDirectoryError, match="nested/data.json"):
        ensure_output_dir(tmp_path)

    assert (tmp_path / "index.html").read_text(encoding="utf-8") == "old"


def test_file_in_place_of_directory_aborts(tmp_path: Path) -> None:
    target = tmp_path / "out"
    target.write_text("", encoding="utf-8")

    with pytest.raises(OutputDirectoryError, match="not a directory"):
        ensure_output_dir(target)


def test_remove_stale_pages_keeps_listed_pages(tmp_path: Path) -> None:
    for name in ("index.html", "greet.html", "gone.html"):
        (tmp_path / name).write_text("", encoding="utf-8")

    removed = remove_stale_pages(tmp_path, ["index.html", "greet.html"])

    assert removed == [tmp_path / "gone.html"]
    assert sorted(path.name for path in tmp_path.iterdir()) == ["greet.html", "index.html"]
