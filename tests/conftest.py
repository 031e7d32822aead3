"""Shared pytest fixtures for calcparse tests."""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def expression_file(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory writing an expression to a temporary file."""

    def _write(text: str, name: str = "expr.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_file(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory writing a calcparse.toml into a temporary directory."""

    def _write(text: str) -> Path:
        path = tmp_path / "calcparse.toml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
