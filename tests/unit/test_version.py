"""Tests for the version lookup."""

from __future__ import annotations

from pathlib import Path

import pytest

import calcparse
from calcparse import _version


class TestVersion:
    def test_reads_checkout_pyproject(self) -> None:
        pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
        assert _version.get_version() == _version._version_from_pyproject(pyproject)
        assert calcparse.__version__ == _version.get_version()

    def test_pyproject_of_another_project_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "other"\nversion = "9.9.9"\n', encoding="utf-8")
        assert _version._version_from_pyproject(path) is None

    def test_unreadable_pyproject(self, tmp_path: Path) -> None:
        assert _version._version_from_pyproject(tmp_path / "missing.toml") is None
        broken = tmp_path / "pyproject.toml"
        broken.write_text("[project\n", encoding="utf-8")
        assert _version._version_from_pyproject(broken) is None

    def test_falls_back_to_unknown(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(_version, "_PYPROJECT", tmp_path / "pyproject.toml")
        monkeypatch.setattr(_version, "DIST_NAME", "calcparse-not-installed")
        assert _version.get_version() == _version.UNKNOWN_VERSION
