"""Tests for the regenerate-on-request HTTP service."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from moddoc.config import ModDocConfig
from moddoc.orchestrator import Orchestrator
from moddoc.service.app import create_app, resolve_request_path
from tests._fixtures.go_module import GoModuleBuilder


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def orchestrator(greet_module: GoModuleBuilder, out_dir: Path) -> Orchestrator:
    return Orchestrator(ModDocConfig(module=greet_module.path(), output_dir=out_dir))


@pytest.fixture
def client(orchestrator: Orchestrator) -> TestClient:
    return TestClient(create_app(orchestrator))


def test_root_serves_index(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Module example.com/greetings" in response.text


def test_package_page_is_served(client: TestClient) -> None:
    response = client.get("/greet.html")

    assert response.status_code == 200
    assert 'id="NewGreeting"' in response.text


def test_each_request_regenerates(client: TestClient, greet_module: GoModuleBuilder, orchestrator: Orchestrator) -> None:
    first = client.get("/greet.html")
    model = orchestrator.snapshot.get()
    greet_module.write({"greet/bye.go": "package greet\n\n// Bye says goodbye.\nfunc Bye() {}\n"})

    second = client.get("/greet.html")

    assert 'id="Bye"' not in first.text
    assert 'id="Bye"' in second.text
    assert orchestrator.snapshot.get() is not model


def test_unknown_page_is_404(client: TestClient) -> None:
    response = client.get("/missing.html")

    assert response.status_code == 404
    assert response.text == "404 page not found\n"


def test_build_failure_is_500(client: TestClient, out_dir: Path) -> None:
    out_dir.mkdir()
    (out_dir / "notes.txt").write_text("mine", encoding="utf-8")

    response = client.get("/")

    assert response.status_code == 500
    assert response.text.startswith("documentation build failed:")
    assert (out_dir / "notes.txt").read_text(encoding="utf-8") == "mine"


def test_resolve_request_path_stays_inside_output(tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    (out_dir / "index.html").write_text("", encoding="utf-8")
    (tmp_path / "secret.html").write_text("", encoding="utf-8")

    assert resolve_request_path(out_dir, "") == (out_dir / "index.html").resolve()
    assert resolve_request_path(out_dir, "/index.html") == (out_dir / "index.html").resolve()
    assert resolve_request_path(out_dir, "../secret.html") is None
    assert resolve_request_path(out_dir, "nope.html") is None
