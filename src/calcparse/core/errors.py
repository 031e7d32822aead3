"""
Error types for calcparse lexing, parsing, and evaluation.
"""

from __future__ import annotations


class CalcError(Exception):
    """
    Base exception for all calcparse errors.

    Errors collect a breadcrumb trail while they propagate out of the
    recursive parser: every frame that lets the error pass calls
    ``add_context`` on the same exception object, so the original type and
    message are never lost.
    """

    def __init__(self, message: str, pos: int | None = None):
        self.message = message
        self.pos = pos
        self.trail: list[str] = []
        super().__init__(message)

    def add_context(self, context: str) -> CalcError:
        """Record a breadcrumb from an enclosing frame and return self."""
        self.trail.append(context)
        return self

    def _format_message(self) -> str:
        """Format as ``outermost: ...: innermost: message``."""
        if not self.trail:
            return self.message
        return ": ".join([*reversed(self.trail), self.message])

    def __str__(self) -> str:
        return self._format_message()


class LexError(CalcError):
    """
    Raised when a numeric literal cannot be converted to a float.

    Examples:
    - Exponent without digits (``1e``, ``2.5e+``)
    """

    pass


class ExpressionSyntaxError(CalcError):
    """
    Raised when the token stream does not match the grammar.

    Examples:
    - Missing operand (``1+``, empty input)
    - Unmatched parenthesis (``(1+2``)
    - Unexpected token (``1 + x``, ``3 $ 4``)
    - Trailing input after a complete expression (``1 2``)
    """

    pass


class EvalError(CalcError):
    """
    Raised when an expression tree cannot be evaluated.

    An unsupported operator signals a defect: the grammar never produces one.
    """

    pass


class DivisionByZeroError(EvalError):
    """Raised when the divisor of ``/`` is exactly zero."""

    pass


class ConfigError(CalcError):
    """Raised when ``calcparse.toml`` holds an invalid setting."""

    pass
