"""
Expression evaluator for dice expressions.

Walks the AST post-order and reduces it to a Value whose provenance
records every literal, die face and operator visited. Pure apart from
dice: each RollExpr draws from the interpreter's random source once per
evaluation, so re-evaluating a tree with rolls gives fresh results.
"""

from __future__ import annotations

import logging

from dicelang.config import EvaluatorConfig
from dicelang.errors import EvaluationError, InvalidDiceError
from dicelang.expression_lang.parser import parse_expr
from dicelang.expression_lang.randomness import RandomSource, default_source
from dicelang.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Grouping,
    Literal,
    RollExpr,
    UnaryExpr,
    UnaryOp,
)
from dicelang.ir.values import Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Tree-walking evaluator that owns its random source.

    One interpreter per concurrent evaluation; the source is not shared.

    Args:
        rng: Source of die results. Defaults to a fresh private generator.
        config: Evaluation limits. Defaults to EvaluatorConfig().
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        config: EvaluatorConfig | None = None,
    ) -> None:
        self.rng = rng if rng is not None else default_source()
        self.config = config or EvaluatorConfig()

    def evaluate(self, expr: Expr) -> Value:
        """Reduce an expression to a Value.

        Raises:
            DivisionByZeroError: On ``x / 0``.
            ArithmeticOverflowError: When a result leaves the 64-bit range.
            InvalidDiceError: On fewer than one face or more dice than
                ``config.max_dice``.
            EvaluationError: If the tree is too deep to walk.
        """
        try:
            return self._interpret(expr)
        except RecursionError as e:
            raise EvaluationError("expression too deeply nested to evaluate") from e

    def _interpret(self, expr: Expr) -> Value:
        """Dispatch evaluation to the appropriate handler."""
        if isinstance(expr, Literal):
            return expr.value

        if isinstance(expr, Grouping):
            return self._interpret(expr.inner)

        if isinstance(expr, UnaryExpr):
            return self._interpret_unary(expr)

        if isinstance(expr, (BinaryExpr, RollExpr)):
            return self._interpret_chain(expr)

        raise EvaluationError(f"Unknown expression type: {type(expr).__name__}")

    def _interpret_unary(self, expr: UnaryExpr) -> Value:
        operand = self._interpret(expr.operand)
        if expr.op == UnaryOp.NEG:
            return -operand
        raise EvaluationError(f"Unknown unary op: {expr.op}")

    def _interpret_chain(self, expr: BinaryExpr | RollExpr) -> Value:
        """Evaluate a left-nested run of binary ops and rolls without recursing down it.

        ``1 + 2 + 3`` parses as ``((1 + 2) + 3)``; the spine is collected
        first, then folded left to right so left operands still evaluate
        (and roll) before right ones.
        """
        spine: list[BinaryExpr | RollExpr] = []
        node: Expr = expr
        while isinstance(node, (BinaryExpr, RollExpr)):
            spine.append(node)
            node = node.left if isinstance(node, BinaryExpr) else node.quantity

        value = self._interpret(node)
        for link in reversed(spine):
            if isinstance(link, BinaryExpr):
                value = self._apply_binary(link.op, value, self._interpret(link.right))
            else:
                value = self._roll(value, self._interpret(link.faces))
        return value

    def _apply_binary(self, op: BinaryOp, left: Value, right: Value) -> Value:
        if op == BinaryOp.ADD:
            return left + right
        if op == BinaryOp.SUB:
            return left - right
        if op == BinaryOp.MUL:
            return left * right
        if op == BinaryOp.DIV:
            return left / right

        raise EvaluationError(f"Unknown binary op: {op}")

    def _roll(self, quantity_value: Value, faces_value: Value) -> Value:
        quantity = quantity_value.current
        faces = faces_value.current

        if faces < 1:
            raise InvalidDiceError(f"dice need at least one face ({quantity}d{faces})")
        if abs(quantity) > self.config.max_dice:
            raise InvalidDiceError(
                f"cannot roll {quantity} dice, the limit is {self.config.max_dice}"
            )

        # -1d6 parses as (-1)d6: a negative quantity rolls |n| dice and negates the total.
        results = [self.rng.randint(1, faces) for _ in range(abs(quantity))]
        logger.debug("Rolled %dd%d: %s", quantity, faces, results)
        return Value.from_roll(results, negated=quantity < 0)


def evaluate(
    expr: Expr,
    rng: RandomSource | None = None,
    config: EvaluatorConfig | None = None,
) -> Value:
    """Evaluate a parsed expression with a one-off Interpreter.

    Args:
        expr: Parsed expression AST.
        rng: Source of die results. Defaults to a fresh private generator.
        config: Evaluation limits.

    Returns:
        The computed Value.

    Raises:
        EvaluationError: If evaluation fails.
    """
    return Interpreter(rng=rng, config=config).evaluate(expr)


def roll(
    source: str,
    rng: RandomSource | None = None,
    config: EvaluatorConfig | None = None,
) -> Value:
    """Parse and evaluate an expression string in one step.

    Example:
        >>> roll("2d6 + 5", rng=FixedSequence([2, 3])).trace
        '10 <= (5 (2 + 3) + 5)'

    Raises:
        ParseError: If the expression is invalid.
        EvaluationError: If evaluation fails.
    """
    return evaluate(parse_expr(source), rng=rng, config=config)
