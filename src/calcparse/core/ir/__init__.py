"""Intermediate representation for parsed arithmetic expressions."""

from calcparse.core.ir.expressions import BinaryExpr, BinaryOp, Expr, Literal, UnaryExpr, UnaryOp

__all__ = ["BinaryExpr", "BinaryOp", "Expr", "Literal", "UnaryExpr", "UnaryOp"]
