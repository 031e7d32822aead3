"""
calcparse CLI utilities.

Shared helpers used across CLI modules: version reporting, logging setup,
and configuration lookup.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer

from calcparse._version import get_version
from calcparse.core.manifest import CalcConfig, find_config, load_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"calcparse version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo(f"  Architecture:  {platform.machine()}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Configure root logging once for a CLI run."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
    )


def resolve_config(config_path: Path | None) -> CalcConfig:
    """Load an explicit config file, or the nearest calcparse.toml, or defaults."""
    if config_path is not None:
        if not config_path.is_file():
            raise typer.BadParameter(f"config file not found: {config_path}")
        return load_config(config_path)
    return load_config(find_config())
