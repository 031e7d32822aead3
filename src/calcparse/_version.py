"""Version lookup for calcparse.

A source checkout reads ``[project] version`` from the adjacent
pyproject.toml so the number never drifts during development; an installed
wheel has no pyproject beside it and falls back to the distribution metadata.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DIST_NAME = "calcparse"
UNKNOWN_VERSION = "0.0.0"

# src/calcparse/_version.py -> repository root
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _version_from_pyproject(path: Path) -> str | None:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return None
    project = data.get("project")
    if not isinstance(project, dict) or project.get("name") != DIST_NAME:
        return None
    value = project.get("version")
    return value if isinstance(value, str) else None


def get_version() -> str:
    """Version of the running calcparse, or ``0.0.0`` when it cannot be found."""
    found = _version_from_pyproject(_PYPROJECT)
    if found is not None:
        return found
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
