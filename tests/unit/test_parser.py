"""Tests for the tree-building parser.

Covers:
- Precedence and left-associativity
- Unary sign chains and parenthesised groups
- Syntax and lex errors with their breadcrumb trail
- Stream inputs and long operator chains
"""

from __future__ import annotations

import io

import pytest
from pydantic import ValidationError

from calcparse.core.errors import CalcError, ExpressionSyntaxError, LexError
from calcparse.core.expression_lang.parser import parse
from calcparse.core.ir.expressions import BinaryExpr, BinaryOp, Literal, UnaryExpr, UnaryOp


class TestParserLiterals:
    def test_integer(self) -> None:
        expr = parse("42")
        assert isinstance(expr, Literal)
        assert expr.value == 42.0

    def test_float_with_exponent(self) -> None:
        expr = parse("1.5e2")
        assert isinstance(expr, Literal)
        assert expr.value == 150.0

    def test_parenthesised_literal(self) -> None:
        assert parse("((7))") == Literal(value=7)


class TestParserPrecedence:
    """Multiplicative operators bind tighter than additive ones."""

    def test_mul_before_add_on_left(self) -> None:
        expr = parse("2*1+2")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.ADD
        assert expr.left == BinaryExpr(op=BinaryOp.MUL, left=Literal(value=2), right=Literal(value=1))
        assert expr.right == Literal(value=2)
        assert expr.evaluate() == 4.0

    def test_mul_before_add_on_right(self) -> None:
        expr = parse("2+1*2")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.ADD
        assert expr.left == Literal(value=2)
        assert expr.right == BinaryExpr(op=BinaryOp.MUL, left=Literal(value=1), right=Literal(value=2))
        assert expr.evaluate() == 4.0

    def test_parentheses_override_precedence(self) -> None:
        expr = parse("(1+2)*3")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.MUL
        assert isinstance(expr.left, BinaryExpr)
        assert expr.left.op == BinaryOp.ADD
        assert expr.evaluate() == 9.0

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("2*3+4*5-6/3", 24.0),
            ("1+2*3-4/2", 5.0),
            ("10/4*2", 5.0),
            ("2*(3+4)*5", 70.0),
            ("1.5 + .5", 2.0),
        ],
    )
    def test_mixed_precedence(self, source: str, expected: float) -> None:
        assert parse(source).evaluate() == pytest.approx(expected)


class TestParserAssociativity:
    def test_addition_chain_is_left_associative(self) -> None:
        expr = parse("1+2+3+4")
        assert isinstance(expr, BinaryExpr)
        assert expr.right == Literal(value=4)
        assert isinstance(expr.left, BinaryExpr)
        assert expr.left.right == Literal(value=3)
        assert expr.left.left == BinaryExpr(op=BinaryOp.ADD, left=Literal(value=1), right=Literal(value=2))
        assert expr.evaluate() == 10.0

    def test_subtraction_chain(self) -> None:
        assert parse("2-3-4").evaluate() == -5.0

    def test_division_chain(self) -> None:
        assert parse("8/4/2").evaluate() == 1.0


class TestParserUnary:
    def test_double_negation(self) -> None:
        expr = parse("--3")
        assert expr == UnaryExpr(
            op=UnaryOp.NEG, operand=UnaryExpr(op=UnaryOp.NEG, operand=Literal(value=3))
        )
        assert expr.evaluate() == 3.0

    def test_negated_plus(self) -> None:
        assert parse("-+3").evaluate() == -3.0

    def test_sign_binds_tighter_than_multiplication(self) -> None:
        expr = parse("-2*3")
        assert isinstance(expr, BinaryExpr)
        assert isinstance(expr.left, UnaryExpr)
        assert expr.evaluate() == -6.0

    def test_sign_after_operator(self) -> None:
        assert parse("2*-3").evaluate() == -6.0

    def test_signed_group(self) -> None:
        assert parse("-(1+2)").evaluate() == -3.0


class TestParserErrors:
    """Every grammar violation fails as a whole, never as a partial tree."""

    @pytest.mark.parametrize("source", ["", "   ", "1+", "(1+2", "1 2", "1 + x", "3 $ 4", ")", "*2", "()"])
    def test_syntax_errors(self, source: str) -> None:
        with pytest.raises(ExpressionSyntaxError):
            parse(source)

    def test_empty_input(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="unexpected end of file"):
            parse("")

    def test_unmatched_parenthesis_message(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="want '\\)'"):
            parse("(1+2")

    def test_trailing_input(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="unexpected number 2") as exc_info:
            parse("1 2")
        assert exc_info.value.pos == 2

    def test_identifier_rejected(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="identifier x"):
            parse("1 + x")

    @pytest.mark.parametrize("source", ["1e", "2 * 1e+", "1e400"])
    def test_malformed_numbers(self, source: str) -> None:
        with pytest.raises(LexError):
            parse(source)

    def test_breadcrumbs_from_every_frame(self) -> None:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            parse("(1+")
        err = exc_info.value
        assert err.pos == 3
        assert err.message == "unexpected end of file"
        message = str(err)
        assert message.startswith("could not parse end of file")
        assert "could not parse group opened at offset 0" in message
        assert "could not parse right operand of '+'" in message
        assert message.endswith("unexpected end of file")

    def test_errors_share_base_class(self) -> None:
        with pytest.raises(CalcError):
            parse("1e")


class TestParserInputs:
    def test_text_stream(self) -> None:
        assert parse(io.StringIO("1 + 2")).evaluate() == 3.0

    def test_byte_stream(self) -> None:
        assert parse(io.BytesIO(b"(4 - 1) * 2\n")).evaluate() == 6.0

    def test_long_chain(self) -> None:
        terms = 20000
        expr = parse("+".join(["1"] * terms))
        assert expr.evaluate() == float(terms)
        assert expr.size() == 2 * terms - 1

    def test_independent_parses_do_not_share_state(self) -> None:
        first = parse("1+2")
        second = parse("3*4")
        assert first.evaluate() == 3.0
        assert second.evaluate() == 12.0


class TestParserNodes:
    """Nodes built by the parser match validated models."""

    def test_tree_survives_revalidation(self) -> None:
        expr = parse("-(1+2)*3/4")
        assert type(expr).model_validate(expr.model_dump()) == expr

    def test_node_fields_are_typed(self) -> None:
        expr = parse("-2*3")
        assert isinstance(expr, BinaryExpr)
        assert isinstance(expr.op, BinaryOp)
        assert isinstance(expr.left, UnaryExpr)
        assert isinstance(expr.left.op, UnaryOp)
        assert isinstance(expr.right, Literal)
        assert type(expr.right.value) is float

    def test_nodes_stay_frozen(self) -> None:
        expr = parse("1+2")
        with pytest.raises(ValidationError):
            expr.op = BinaryOp.SUB  # type: ignore[misc]
