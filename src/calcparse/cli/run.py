"""
Evaluation command.

Reads an expression from the command line, a file, or stdin, parses it in
tree or eager mode, evaluates it, and prints the result.
"""

from __future__ import annotations

import cProfile
import logging
import sys
import time
import tracemalloc
from contextlib import ExitStack
from pathlib import Path
from typing import IO

import typer

from calcparse.cli.utils import configure_logging, resolve_config
from calcparse.cli_ui import print_error, print_result, render_result
from calcparse.core.errors import CalcError
from calcparse.core.expression_lang import parse, parse_eagerly
from calcparse.core.ir.expressions import Expr

logger = logging.getLogger(__name__)


def _open_source(
    stack: ExitStack, expression: str | None, file: Path | None, stdin: bool
) -> str | IO[bytes] | IO[str]:
    chosen = sum([expression is not None, file is not None, stdin])
    if chosen != 1:
        raise typer.BadParameter("give exactly one of EXPRESSION, --file or --stdin")

    if expression is not None:
        logger.debug("Reading expression from the command line")
        return expression
    if file is not None:
        logger.info("Reading expression from %s", file)
        try:
            return stack.enter_context(file.open("rb"))
        except OSError as e:
            print_error(f"Could not open file {file}: {e}")
            raise typer.Exit(1)

    if sys.stdin.isatty():
        typer.echo("Enter your math expression (CTRL+D to submit):", err=True)
    logger.info("Reading expression from stdin")
    return sys.stdin


def _report_memory(stage: str) -> None:
    current, peak = tracemalloc.get_traced_memory()
    logger.info("Memory %s: current=%d bytes, peak=%d bytes", stage, current, peak)
    typer.echo(f"memory {stage}: current={current:,} B peak={peak:,} B", err=True)


def eval_command(
    expression: str | None = typer.Argument(
        None, help="Expression text (omit when using --file or --stdin)"
    ),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="Path to a file containing the expression"
    ),
    stdin: bool = typer.Option(
        False, "--stdin", "-i", help="Read the expression from stdin until EOF"
    ),
    eager: bool | None = typer.Option(
        None,
        "--eager/--tree",
        help="Evaluate while parsing (default: evaluation.mode from calcparse.toml)",
    ),
    profile: bool = typer.Option(
        False, "--profile", help="Write cProfile stats and report traced memory"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to calcparse.toml"
    ),
) -> None:
    """Parse and evaluate an arithmetic expression."""
    try:
        config = resolve_config(config_path)
    except CalcError as e:
        print_error(str(e))
        raise typer.Exit(1)
    configure_logging(config.logging.level)

    use_eager = eager if eager is not None else config.evaluation.mode == "eager"
    parse_fn = parse_eagerly if use_eager else parse
    logger.debug("Parsing in %s mode", "eager" if use_eager else "tree")

    with ExitStack() as stack:
        source = _open_source(stack, expression, file, stdin)

        profiler: cProfile.Profile | None = None
        if profile:
            profiler = cProfile.Profile()
            tracemalloc.start()
            stack.callback(tracemalloc.stop)
            profiler.enable()

        started = time.perf_counter()
        try:
            expr: Expr = parse_fn(source)
        except CalcError as e:
            print_error(f"Could not parse expression: {e}")
            raise typer.Exit(1)
        except RecursionError:
            print_error("Could not parse expression: nested too deeply")
            raise typer.Exit(1)
        finally:
            if profiler is not None:
                profiler.disable()
        logger.info("Parsed in %.3f ms", (time.perf_counter() - started) * 1000)
        if profile:
            _report_memory("after parse")

        started = time.perf_counter()
        try:
            value = expr.evaluate()
        except CalcError as e:
            print_error(f"Failed evaluation: {e}")
            raise typer.Exit(1)
        logger.info("Evaluated in %.3f ms", (time.perf_counter() - started) * 1000)
        if profile:
            _report_memory("after evaluation")

        if profiler is not None:
            stats_file = Path("cpu_profile_eager.prof" if use_eager else "cpu_profile.prof")
            profiler.dump_stats(stats_file)
            logger.info("CPU profile written to %s", stats_file)

    print_result(render_result(expr, value, config.output))
