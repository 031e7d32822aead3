"""
Expression types for calcparse IR.

A closed set of three immutable node kinds built by the parsers:

- Literal: a double-precision number (leaf)
- UnaryExpr: a sign applied to one operand (``-x``, ``+x``)
- BinaryExpr: one of ``+ - * /`` applied to two operands

Every node owns its children and is never mutated after construction.
Evaluation, formatting and node counting are shared walks implemented in
``calcparse.core.expression_lang.evaluator``; the methods here delegate to it.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def priority(self) -> int:
        """Binding strength: ``*`` and ``/`` bind tighter than ``+`` and ``-``."""
        if self in (BinaryOp.MUL, BinaryOp.DIV):
            return 2
        return 1


class UnaryOp(StrEnum):
    """Unary sign operators."""

    POS = "+"
    NEG = "-"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class _ExprNode(BaseModel):
    """Capabilities shared by every expression node."""

    model_config = ConfigDict(frozen=True)

    def evaluate(self) -> float:
        """Compute the numeric value of this expression."""
        from calcparse.core.expression_lang.evaluator import evaluate

        return evaluate(self)  # type: ignore[arg-type]

    def format(self) -> str:
        """Render as infix text, literals with two decimals."""
        from calcparse.core.expression_lang.evaluator import format_expr

        return format_expr(self)  # type: ignore[arg-type]

    def size(self) -> int:
        """Number of nodes (literals plus operators)."""
        from calcparse.core.expression_lang.evaluator import expr_size

        return expr_size(self)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.format()


class Literal(_ExprNode):
    """A numeric literal."""

    value: float = Field(description="The literal value")


class UnaryExpr(_ExprNode):
    """Unary operation: op operand."""

    op: UnaryOp
    operand: Expr


class BinaryExpr(_ExprNode):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | UnaryExpr | BinaryExpr

# Rebuild models for recursive forward references
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()
