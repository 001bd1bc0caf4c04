"""Tests for the dice expression parser.

Covers:
- Literals, grouping and dice rolls
- Operator precedence and associativity
- Structured errors: spans, messages and labels
"""

from __future__ import annotations

import pytest

from dicelang.errors import ParseError
from dicelang.expression_lang.parser import MAX_NESTING, Parser, parse_expr
from dicelang.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Grouping,
    Literal,
    RollExpr,
    UnaryExpr,
    UnaryOp,
)
from dicelang.ir.values import INT_MAX, Value
from dicelang.location import Span


def lit(n: int) -> Literal:
    return Literal(value=Value.direct(n))


# ============================================================================
# Parser tests
# ============================================================================


class TestParserLiterals:
    """Parser handles number literals and grouping."""

    def test_integer(self) -> None:
        expr = parse_expr("1")
        assert isinstance(expr, Literal)
        assert expr.value == 1

    def test_large_integer(self) -> None:
        expr = parse_expr("4000")
        assert isinstance(expr, Literal)
        assert expr.value == 4000

    def test_largest_integer(self) -> None:
        expr = parse_expr(str(INT_MAX))
        assert isinstance(expr, Literal)
        assert expr.value == INT_MAX

    def test_grouping(self) -> None:
        expr = parse_expr("(1)")
        assert expr == Grouping(inner=lit(1))

    def test_str_round_trip(self) -> None:
        assert str(parse_expr("2d6 + 5")) == "(2d6 + 5)"


class TestParserArithmetic:
    """Parser handles arithmetic with correct precedence."""

    def test_addition(self) -> None:
        expr = parse_expr("1 + 2")
        assert expr == BinaryExpr(op=BinaryOp.ADD, left=lit(1), right=lit(2))

    def test_mul_before_add(self) -> None:
        # 2 + 3 * 2 should be 2 + (3 * 2)
        expr = parse_expr("2 + 3 * 2")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.ADD
        assert isinstance(expr.right, BinaryExpr)
        assert expr.right.op == BinaryOp.MUL

    def test_parentheses_override_precedence(self) -> None:
        expr = parse_expr("2 * (3 + 2)")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.MUL
        assert isinstance(expr.right, Grouping)
        assert isinstance(expr.right.inner, BinaryExpr)
        assert expr.right.inner.op == BinaryOp.ADD

    def test_left_associative_subtraction(self) -> None:
        # 5 - 1 - 1 is (5 - 1) - 1
        expr = parse_expr("5 - 1 - 1")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.SUB
        assert isinstance(expr.left, BinaryExpr)
        assert expr.left.op == BinaryOp.SUB
        assert expr.right == lit(1)

    def test_unary_minus(self) -> None:
        expr = parse_expr("-1")
        assert expr == UnaryExpr(op=UnaryOp.NEG, operand=lit(1))

    def test_double_negation(self) -> None:
        expr = parse_expr("--1")
        assert isinstance(expr, UnaryExpr)
        assert isinstance(expr.operand, UnaryExpr)

    def test_unicode_operators(self) -> None:
        assert parse_expr("5 − 1") == BinaryExpr(op=BinaryOp.SUB, left=lit(5), right=lit(1))
        assert parse_expr("3 × 2") == BinaryExpr(op=BinaryOp.MUL, left=lit(3), right=lit(2))
        assert parse_expr("3 x 2") == BinaryExpr(op=BinaryOp.MUL, left=lit(3), right=lit(2))
        assert parse_expr("6 ÷ 3") == BinaryExpr(op=BinaryOp.DIV, left=lit(6), right=lit(3))


class TestParserDice:
    """Parser handles dice rolls and their precedence."""

    def test_simple_roll(self) -> None:
        expr = parse_expr("2d6")
        assert expr == RollExpr(quantity=lit(2), faces=lit(6))

    def test_uppercase_dice(self) -> None:
        assert parse_expr("2D6") == RollExpr(quantity=lit(2), faces=lit(6))

    def test_chained_roll_is_left_associative(self) -> None:
        expr = parse_expr("2d6d2")
        assert expr == RollExpr(quantity=RollExpr(quantity=lit(2), faces=lit(6)), faces=lit(2))

    def test_roll_binds_tighter_than_multiply(self) -> None:
        expr = parse_expr("2d6*3")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.MUL
        assert isinstance(expr.left, RollExpr)

    def test_roll_binds_tighter_than_add(self) -> None:
        expr = parse_expr("2d6+1")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.ADD
        assert isinstance(expr.left, RollExpr)

    def test_unary_binds_tighter_than_roll(self) -> None:
        expr = parse_expr("-1d6")
        assert expr == RollExpr(quantity=UnaryExpr(op=UnaryOp.NEG, operand=lit(1)), faces=lit(6))

    def test_sub_expressions_on_both_sides(self) -> None:
        expr = parse_expr("(1+1)d(3*2)")
        assert isinstance(expr, RollExpr)
        assert isinstance(expr.quantity, Grouping)
        assert isinstance(expr.faces, Grouping)


# ============================================================================
# Error tests
# ============================================================================


class TestParserErrors:
    """Malformed input produces structured ParseErrors."""

    def test_empty_input(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expr("")
        diag = exc_info.value.diagnostic
        assert diag.message == "expected a number or parenthesis, found `EoF`"
        assert diag.span == Span(start=0, end=0)
        assert diag.source == ""

    def test_unrecognized_character_fails_on_first_fetch(self) -> None:
        with pytest.raises(ParseError, match="unrecognized character `a`"):
            Parser("a")

    def test_unrecognized_character_after_number(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expr("400a")
        assert exc_info.value.diagnostic.span == Span(start=3, end=4)
        assert exc_info.value.diagnostic.label == "unrecognized"

    def test_float_rejected(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expr("4000.53.10")
        diag = exc_info.value.diagnostic
        assert diag.message == "expected a number or parenthesis, found `float`"
        assert diag.span == Span(start=0, end=7)

    def test_missing_operand(self) -> None:
        with pytest.raises(ParseError, match="found `EoF`"):
            parse_expr("1 +")

    def test_leading_operator(self) -> None:
        with pytest.raises(ParseError, match=r"found `\+`"):
            parse_expr("+1")

    def test_unclosed_parenthesis(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expr("(1 + 2")
        diag = exc_info.value.diagnostic
        assert diag.message == "expected `)`, found `EoF`"
        assert diag.label == "expected `)`"
        assert diag.span == Span(start=6, end=6)

    def test_trailing_input(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expr("1 2")
        diag = exc_info.value.diagnostic
        assert diag.message == "unexpected trailing characters `2`"
        assert diag.span == Span(start=2, end=3)

    def test_trailing_input_preview_is_truncated(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expr("1)))))))))))))))")
        assert exc_info.value.diagnostic.message == "unexpected trailing characters `))))))))))`"
        assert exc_info.value.diagnostic.span == Span(start=1, end=16)

    def test_number_too_large(self) -> None:
        with pytest.raises(ParseError, match="number too large") as exc_info:
            parse_expr("99999999999999999999 + 1")
        assert exc_info.value.diagnostic.span == Span(start=0, end=20)

    def test_nesting_limit(self) -> None:
        depth = MAX_NESTING + 1
        with pytest.raises(ParseError, match="nested"):
            parse_expr("(" * depth + "1" + ")" * depth)

    def test_nesting_at_limit_is_fine(self) -> None:
        expr = parse_expr("(" * MAX_NESTING + "1" + ")" * MAX_NESTING)
        assert isinstance(expr, Grouping)

    def test_deep_negation_hits_limit(self) -> None:
        with pytest.raises(ParseError, match="nested"):
            parse_expr("-" * (MAX_NESTING + 1) + "1")

    def test_error_span_after_unicode_operator(self) -> None:
        source = "2 × a"
        with pytest.raises(ParseError) as exc_info:
            parse_expr(source)
        diag = exc_info.value.diagnostic
        assert diag.span == Span(start=5, end=6)
        assert source.encode()[diag.span.start : diag.span.end] == b"a"
        assert diag.snippet == "a"
        assert diag.column == 5

    def test_trailing_span_ends_at_byte_length(self) -> None:
        source = "1 − 2 3"
        with pytest.raises(ParseError) as exc_info:
            parse_expr(source)
        diag = exc_info.value.diagnostic
        assert diag.span == Span(start=8, end=9)
        assert diag.span.end == len(source.encode())
