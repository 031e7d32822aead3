"""
calcparse.toml loading.

All settings are optional; a missing file yields the defaults below.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from calcparse.core.errors import ConfigError

CONFIG_FILENAME = "calcparse.toml"
LOG_LEVEL_ENV = "CALCPARSE_LOG_LEVEL"

EVAL_MODES = ("tree", "eager")


@dataclass
class EvaluationConfig:
    """How expressions are parsed and evaluated."""

    mode: str = "tree"  # "tree" | "eager"


@dataclass
class OutputConfig:
    """How results are presented."""

    display_threshold: int = 1000  # print the expression only up to this many nodes
    precision: int = 2
    group_thousands: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class CalcConfig:
    """Top-level calcparse configuration."""

    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Path | None = None


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` (default: cwd) looking for calcparse.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None) -> CalcConfig:
    """Load configuration from ``path``, or defaults when it is None.

    The ``CALCPARSE_LOG_LEVEL`` environment variable overrides
    ``[logging] level``.

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values.
    """
    data: dict = {}
    if path is not None:
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"{path}: invalid TOML: {e}") from e

    evaluation_data = _section(data, "evaluation", path)
    output_data = _section(data, "output", path)
    logging_data = _section(data, "logging", path)

    evaluation = EvaluationConfig(mode=evaluation_data.get("mode", "tree"))
    if evaluation.mode not in EVAL_MODES:
        raise ConfigError(
            f"{path}: evaluation.mode must be one of {', '.join(EVAL_MODES)}, "
            f"got {evaluation.mode!r}"
        )

    output = OutputConfig(
        display_threshold=output_data.get("display_threshold", 1000),
        precision=output_data.get("precision", 2),
        group_thousands=output_data.get("group_thousands", True),
    )
    if not _is_int(output.display_threshold) or output.display_threshold <= 0:
        raise ConfigError(
            f"{path}: output.display_threshold must be a positive integer, "
            f"got {output.display_threshold!r}"
        )
    if not _is_int(output.precision) or output.precision < 0:
        raise ConfigError(
            f"{path}: output.precision must be a non-negative integer, got {output.precision!r}"
        )
    if not isinstance(output.group_thousands, bool):
        raise ConfigError(
            f"{path}: output.group_thousands must be true or false, "
            f"got {output.group_thousands!r}"
        )

    level = os.environ.get(LOG_LEVEL_ENV) or logging_data.get("level", "WARNING")
    if not isinstance(level, str):
        raise ConfigError(f"{path}: logging.level must be a string, got {level!r}")

    return CalcConfig(
        evaluation=evaluation,
        output=output,
        logging=LoggingConfig(level=level.upper()),
        source=path,
    )


def _section(data: dict, name: str, path: Path | None) -> dict:
    """Return the ``[name]`` table, or an empty one when absent."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: [{name}] must be a table, got {section!r}")
    return section


def _is_int(value: object) -> bool:
    # TOML booleans load as bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)
