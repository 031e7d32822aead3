"""
calcparse - precedence-climbing parser and evaluator for arithmetic expressions.

Parses text made of floating-point numbers, ``+ - * /``, unary signs and
parentheses either into an expression tree (``parse``) or straight into its
value (``parse_eagerly``).
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import (
    CalcError,
    DivisionByZeroError,
    EvalError,
    ExpressionSyntaxError,
    LexError,
)
from .core.expression_lang import evaluate, expr_size, format_expr, parse, parse_eagerly
from .core.ir import BinaryExpr, BinaryOp, Expr, Literal, UnaryExpr, UnaryOp

__version__ = get_version()

__all__ = [
    "__version__",
    "BinaryExpr",
    "BinaryOp",
    "CalcError",
    "DivisionByZeroError",
    "EvalError",
    "Expr",
    "ExpressionSyntaxError",
    "LexError",
    "Literal",
    "UnaryExpr",
    "UnaryOp",
    "evaluate",
    "expr_size",
    "format_expr",
    "parse",
    "parse_eagerly",
]
