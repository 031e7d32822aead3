"""
Expression evaluator for calcparse.

Post-order walks over the expression IR: evaluation, infix formatting, and
node counting. Pure computation, no I/O.

The walk keeps its own stack instead of recursing, so a left-deep chain such
as ``1+2+3+...`` with hundreds of thousands of terms evaluates without
hitting the interpreter recursion limit. The left operand of a binary node is
always finished before the right one is started, and the first error stops
the walk.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from calcparse.core.errors import CalcError, DivisionByZeroError, EvalError
from calcparse.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Literal,
    UnaryExpr,
    UnaryOp,
)

T = TypeVar("T")

# Formatting priority of leaves and signed operands: tighter than any binary op
_ATOM_PRIORITY = 3


def evaluate(expr: Expr) -> float:
    """Evaluate an expression tree to a float.

    Args:
        expr: Parsed expression IR.

    Returns:
        The computed value (IEEE double semantics, no rounding).

    Raises:
        DivisionByZeroError: If a divisor evaluates to exactly zero.
        EvalError: If a node carries an unsupported operator.
    """
    return _walk(expr, _interpret_literal, _interpret_unary, _interpret_binary)


def format_expr(expr: Expr) -> str:
    """Render an expression as infix text with two-decimal literals.

    Parentheses are emitted only where they are needed to keep the tree
    shape when the text is parsed again.
    """
    text, _ = _walk(expr, _format_literal, _format_unary, _format_binary)
    return text


def expr_size(expr: Expr) -> int:
    """Count the nodes of an expression: literals plus operators."""
    return _walk(
        expr,
        lambda node: 1,
        lambda node, operand: operand + 1,
        lambda node, left, right: left + right + 1,
    )


def _walk(
    expr: Expr,
    on_literal: Callable[[Literal], T],
    on_unary: Callable[[UnaryExpr, T], T],
    on_binary: Callable[[BinaryExpr, T, T], T],
) -> T:
    """Fold an expression bottom-up, children before parents, left before right."""
    stack: list[tuple[Expr, bool]] = [(expr, False)]
    results: list[T] = []

    while stack:
        node, expanded = stack.pop()
        try:
            if isinstance(node, Literal):
                results.append(on_literal(node))
            elif isinstance(node, UnaryExpr):
                if expanded:
                    results.append(on_unary(node, results.pop()))
                else:
                    stack.append((node, True))
                    stack.append((node.operand, False))
            elif isinstance(node, BinaryExpr):
                if expanded:
                    right = results.pop()
                    left = results.pop()
                    results.append(on_binary(node, left, right))
                else:
                    stack.append((node, True))
                    stack.append((node.right, False))
                    stack.append((node.left, False))
            else:
                raise EvalError(f"Unknown expression type: {type(node).__name__}")
        except CalcError as err:
            _add_ancestor_context(err, stack)
            raise

    return results.pop()


def _add_ancestor_context(err: CalcError, stack: list[tuple[Expr, bool]]) -> None:
    """Leave one breadcrumb per enclosing operator, innermost first."""
    for node, expanded in reversed(stack):
        if not expanded:
            continue
        if isinstance(node, UnaryExpr):
            err.add_context(f"evaluation of operand in unary {node.op.value!r} failed")
        elif isinstance(node, BinaryExpr):
            err.add_context(f"evaluation of operand in binary {node.op.value!r} failed")


# -- Evaluation --


def _interpret_literal(node: Literal) -> float:
    return node.value


def _interpret_unary(node: UnaryExpr, operand: float) -> float:
    if node.op == UnaryOp.POS:
        return +operand
    if node.op == UnaryOp.NEG:
        return -operand
    raise EvalError(f"unsupported unary operator: {node.op!r}")


def _interpret_binary(node: BinaryExpr, left: float, right: float) -> float:
    return apply_binary(node.op, left, right)


def apply_binary(op: BinaryOp, left: float, right: float) -> float:
    """Apply one binary operator to two evaluated operands."""
    if op == BinaryOp.ADD:
        return left + right
    if op == BinaryOp.SUB:
        return left - right
    if op == BinaryOp.MUL:
        return left * right
    if op == BinaryOp.DIV:
        if right == 0:
            raise DivisionByZeroError("division by zero")
        return left / right
    raise EvalError(f"unsupported binary operator: {op!r}")


# -- Formatting --


def _format_literal(node: Literal) -> tuple[str, int]:
    return f"{node.value:.2f}", _ATOM_PRIORITY


def _format_unary(node: UnaryExpr, operand: tuple[str, int]) -> tuple[str, int]:
    text, priority = operand
    if priority < _ATOM_PRIORITY:
        text = f"({text})"
    return f"{node.op.value}{text}", _ATOM_PRIORITY


def _format_binary(
    node: BinaryExpr, left: tuple[str, int], right: tuple[str, int]
) -> tuple[str, int]:
    prio = node.op.priority
    left_text, left_prio = left
    right_text, right_prio = right
    if left_prio < prio:
        left_text = f"({left_text})"
    # Operators are left-associative: an equal-priority right operand is grouped
    if right_prio <= prio:
        right_text = f"({right_text})"
    return f"{left_text} {node.op.value} {right_text}", prio
