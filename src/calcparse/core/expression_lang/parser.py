"""
Precedence-climbing parser for calcparse arithmetic expressions.

Grammar:
    expr        → binary(1)
    binary(p)   → unary (OP binary(prio(OP) + 1))*      where prio(OP) >= p
    unary       → ("+" | "-") unary | primary
    primary     → NUMBER | "(" expr ")"

Priorities: "*" "/" → 2, "+" "-" → 1, any other token → 0 (ends the climb).

``binary(p0)`` parses one operand, then walks the priority levels from the
current operator's level down to ``p0``, folding every operator of that
level into a left-associative BinaryExpr. The right operand is parsed at
``prio + 1`` so tighter operators are resolved first.
"""

from __future__ import annotations

import math

from calcparse.core.errors import CalcError, ExpressionSyntaxError, LexError
from calcparse.core.expression_lang.lexer import Lexer, Source, Token, TokenKind
from calcparse.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Literal,
    UnaryExpr,
    UnaryOp,
)

_PRIORITIES: dict[str, int] = {
    "*": 2,
    "/": 2,
    "+": 1,
    "-": 1,
}

_SIGNS = ("+", "-")


def priority(token: Token) -> int:
    """Binding strength of ``token`` as a binary operator (0 if it is none)."""
    if token.kind != TokenKind.SYMBOL:
        return 0
    return _PRIORITIES.get(token.value, 0)


class _Parser:
    """Recursive descent parser building an expression tree.

    Node construction goes through ``make_literal``, ``make_unary`` and
    ``make_binary`` so the eager parser can reuse the descent unchanged.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lex = lexer

    # -- Node construction --
    # Operands are already typed here, so validation is skipped.

    def make_literal(self, value: float) -> Expr:
        return Literal.model_construct(value=value)

    def make_unary(self, op: UnaryOp, operand: Expr) -> Expr:
        return UnaryExpr.model_construct(op=op, operand=operand)

    def make_binary(self, op: BinaryOp, left: Expr, right: Expr) -> Expr:
        return BinaryExpr.model_construct(op=op, left=left, right=right)

    # -- Grammar rules --

    def parse(self) -> Expr:
        """Parse the whole stream; anything after the expression is an error."""
        self.lex.advance()  # initial lookahead
        try:
            expr = self.parse_expr()
        except CalcError as err:
            err.add_context(f"could not parse {self.lex}")
            raise

        if self.lex.kind != TokenKind.EOF:
            raise ExpressionSyntaxError(f"unexpected {self.lex}", self.lex.token.pos)
        return expr

    def parse_expr(self) -> Expr:
        """Lowest priority level: a sum or difference."""
        return self.parse_binary(1)

    def parse_binary(self, prio0: int) -> Expr:
        """Operand chain; stops at an operator of lower priority than prio0."""
        try:
            left = self.parse_unary()
        except CalcError as err:
            err.add_context(f"could not parse expression in unary {self.lex}")
            raise

        prio = priority(self.lex.token)
        while prio >= prio0:
            while priority(self.lex.token) == prio:
                op = BinaryOp(self.lex.text)
                self.lex.advance()  # consume operator
                try:
                    right = self.parse_binary(prio + 1)
                except CalcError as err:
                    err.add_context(f"could not parse right operand of {op.value!r} at {self.lex}")
                    raise
                left = self.make_binary(op, left, right)
            prio -= 1
        return left

    def parse_unary(self) -> Expr:
        """Signed operand: -A, +A, --A, or a primary."""
        tok = self.lex.token
        if tok.kind == TokenKind.SYMBOL and tok.value in _SIGNS:
            op = UnaryOp(tok.value)
            self.lex.advance()  # consume sign
            try:
                operand = self.parse_unary()
            except CalcError as err:
                err.add_context(f"could not parse operand of unary {op.value!r} at offset {tok.pos}")
                raise
            return self.make_unary(op, operand)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        """Number or parenthesised group."""
        tok = self.lex.token

        if tok.kind in (TokenKind.INT, TokenKind.FLOAT):
            value = _parse_number(tok)
            self.lex.advance()  # consume number
            return self.make_literal(value)

        if tok.kind == TokenKind.SYMBOL and tok.value == "(":
            self.lex.advance()  # consume '('
            try:
                expr = self.parse_expr()
            except CalcError as err:
                err.add_context(f"could not parse group opened at offset {tok.pos}")
                raise
            if not (self.lex.kind == TokenKind.SYMBOL and self.lex.text == ")"):
                raise ExpressionSyntaxError(f"got {self.lex}, want ')'", self.lex.token.pos)
            self.lex.advance()  # consume ')'
            return expr

        raise ExpressionSyntaxError(f"unexpected {self.lex}", tok.pos)


def _parse_number(tok: Token) -> float:
    """Convert a number token; malformed or out-of-range text is a LexError."""
    try:
        value = float(tok.value)
    except ValueError as e:
        raise LexError(f"could not parse the float number {tok.value!r}", tok.pos) from e
    if math.isinf(value):
        raise LexError(f"number {tok.value} is out of range", tok.pos)
    return value


def parse(source: Source) -> Expr:
    """Parse an arithmetic expression into a tree without evaluating it.

    Args:
        source: Expression text, or a readable text or binary stream.

    Returns:
        Parsed expression IR.

    Raises:
        ExpressionSyntaxError: If the input does not match the grammar.
        LexError: If a numeric literal is malformed.
    """
    return _Parser(Lexer(source)).parse()
