"""
calcparse expression language.

Lexer, tree-building parser, fused eager parser, and evaluator for
arithmetic expressions over doubles.

Usage:
    from calcparse.core.expression_lang import parse, parse_eagerly, evaluate

    expr = parse("2 * (1 + 2)")
    result = evaluate(expr)
    # result == 6.0

    parse_eagerly("2 * (1 + 2)")
    # Literal(value=6.0)
"""

from calcparse.core.expression_lang.eager_parser import parse_eagerly
from calcparse.core.expression_lang.evaluator import evaluate, expr_size, format_expr
from calcparse.core.expression_lang.parser import parse

__all__ = ["evaluate", "expr_size", "format_expr", "parse", "parse_eagerly"]
