"""
Fused parse-and-evaluate mode.

Runs the same precedence-climbing descent as the tree-building parser, but
each unary or binary node is evaluated the moment it is assembled and
replaced by a Literal holding its value. The caller only ever receives a
single Literal; intermediate nodes live for one fold step.

An evaluation error while collapsing a node (division by zero) aborts the
whole parse, exactly as it would abort a later ``evaluate()`` of the tree.
"""

from __future__ import annotations

from calcparse.core.errors import EvalError
from calcparse.core.expression_lang.evaluator import evaluate
from calcparse.core.expression_lang.lexer import Lexer, Source
from calcparse.core.expression_lang.parser import _Parser
from calcparse.core.ir.expressions import BinaryOp, Expr, Literal, UnaryOp


class _EagerParser(_Parser):
    """Parser whose node constructors collapse their result to a Literal."""

    def make_unary(self, op: UnaryOp, operand: Expr) -> Expr:
        return self._collapse(super().make_unary(op, operand))

    def make_binary(self, op: BinaryOp, left: Expr, right: Expr) -> Expr:
        return self._collapse(super().make_binary(op, left, right))

    def _collapse(self, node: Expr) -> Literal:
        try:
            value = evaluate(node)
        except EvalError as err:
            err.add_context(f"could not evaluate {node} before {self.lex}")
            raise
        return Literal.model_construct(value=value)


def parse_eagerly(source: Source) -> Expr:
    """Parse and evaluate in one pass.

    Args:
        source: Expression text, or a readable text or binary stream.

    Returns:
        A Literal holding the value of the whole expression.

    Raises:
        ExpressionSyntaxError: If the input does not match the grammar.
        LexError: If a numeric literal is malformed.
        DivisionByZeroError: If any divisor evaluates to exactly zero.
    """
    return _EagerParser(Lexer(source)).parse()
