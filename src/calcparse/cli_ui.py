"""
Result presentation for the calcparse CLI.

Number formatting with thousands grouping, and the policy deciding whether
an expression is small enough to be echoed next to its result.
"""

from rich.console import Console
from rich.style import Style
from rich.text import Text

from calcparse.core.ir.expressions import Expr
from calcparse.core.manifest import OutputConfig

console = Console()
err_console = Console(stderr=True)

STYLES = {
    "result": Style(color="bright_white", bold=True),
    "error": Style(color="red", bold=True),
}


def format_number(value: float, precision: int = 2, group_thousands: bool = True) -> str:
    """Format a float with fixed decimals, e.g. ``1,234,567.89``."""
    if group_thousands:
        return f"{value:,.{precision}f}"
    return f"{value:.{precision}f}"


def render_result(expr: Expr, value: float, output: OutputConfig) -> str:
    """Build the ``Eval(<expr>) = <value>`` line.

    The expression text is only included when it has at most
    ``output.display_threshold`` nodes.
    """
    number = format_number(value, output.precision, output.group_thousands)
    if expr.size() <= output.display_threshold:
        return f"Eval({expr.format()}) = {number}"
    return f"Eval() = {number}"


def print_result(line: str) -> None:
    console.print(Text(line, style=STYLES["result"]), soft_wrap=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(Text(message, style=STYLES["error"]), soft_wrap=True)
