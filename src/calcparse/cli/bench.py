"""
Benchmark CLI commands.

- bench: time tree and eager parsing plus evaluation on expression files
- generate: write random expressions of a given size for benchmarking
"""

from __future__ import annotations

import io
import logging
import time
from collections.abc import Callable
from pathlib import Path

import typer
from rich.table import Table

from calcparse.cli_ui import console, print_error
from calcparse.core.errors import CalcError
from calcparse.core.expression_lang import parse, parse_eagerly
from calcparse.core.ir.expressions import Expr
from calcparse.testing.generator import write_expression

logger = logging.getLogger(__name__)

MODES: dict[str, Callable[[io.BytesIO], Expr]] = {
    "tree": parse,
    "eager": parse_eagerly,
}


def time_mode(
    content: bytes, parse_fn: Callable[[io.BytesIO], Expr], repeat: int
) -> tuple[float, float, int]:
    """Best-of-``repeat`` parse and evaluate times in seconds, plus result size."""
    best_parse = best_eval = float("inf")
    size = 0
    for _ in range(repeat):
        # A fresh reader per run so every run scans the full input
        reader = io.BytesIO(content)
        started = time.perf_counter()
        expr = parse_fn(reader)
        parsed = time.perf_counter()
        expr.evaluate()
        evaluated = time.perf_counter()
        best_parse = min(best_parse, parsed - started)
        best_eval = min(best_eval, evaluated - parsed)
        size = expr.size()
    return best_parse, best_eval, size


def bench_command(
    files: list[Path] = typer.Argument(..., help="Expression files to benchmark"),
    repeat: int = typer.Option(3, "--repeat", "-r", min=1, help="Runs per file and mode"),
) -> None:
    """Time parsing and evaluation in tree and eager mode."""
    table = Table(title="calcparse benchmark")
    table.add_column("File")
    table.add_column("Mode")
    table.add_column("Parse (ms)", justify="right")
    table.add_column("Eval (ms)", justify="right")
    table.add_column("Nodes", justify="right")

    for path in files:
        try:
            content = path.read_bytes()
        except OSError as e:
            print_error(f"Could not open file {path}: {e}")
            raise typer.Exit(1)

        for mode, parse_fn in MODES.items():
            try:
                parse_s, eval_s, size = time_mode(content, parse_fn, repeat)
            except CalcError as e:
                print_error(f"{path}: {e}")
                raise typer.Exit(1)
            except RecursionError:
                print_error(f"{path}: nested too deeply")
                raise typer.Exit(1)
            logger.info("%s [%s]: parse %.6fs eval %.6fs", path, mode, parse_s, eval_s)
            table.add_row(
                str(path), mode, f"{parse_s * 1000:.3f}", f"{eval_s * 1000:.3f}", f"{size:,}"
            )

    console.print(table)


def generate_command(
    output: Path = typer.Argument(..., help="File to write"),
    terms: int = typer.Option(1000, "--terms", "-n", min=1, help="Number of numeric terms"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed for reproducible output"),
) -> None:
    """Write a random valid expression for benchmarking."""
    write_expression(output, terms, seed)
    console.print(f"[green]Wrote {terms:,} terms to {output}[/green]")
