from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.go_module import GREET_SOURCE, GoModuleBuilder


@pytest.fixture
def go_module(tmp_path: Path) -> GoModuleBuilder:
    """Provide an empty Go module rooted under the pytest tmp_path."""
    builder = GoModuleBuilder(tmp_path)
    builder.go_mod()
    return builder


@pytest.fixture
def greet_module(go_module: GoModuleBuilder) -> GoModuleBuilder:
    """Module with a single `greet` package exporting Greeting and NewGreeting."""
    go_module.write({"greet/greet.go": GREET_SOURCE})
    return go_module
