"""
calcparse CLI package.

- run.py: eval command
- bench.py: bench and generate commands
- utils.py: shared utilities
"""

import typer

from calcparse.cli.bench import bench_command, generate_command
from calcparse.cli.run import eval_command
from calcparse.cli.utils import version_callback

app = typer.Typer(
    help="Parse and evaluate arithmetic expressions",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """calcparse: precedence-climbing arithmetic parser."""


app.command(name="eval")(eval_command)
app.command(name="bench")(bench_command)
app.command(name="generate")(generate_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
