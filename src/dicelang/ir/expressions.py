"""
Expression AST for dice expressions.

Supports:
- Integer literals: 1, 4000
- Arithmetic: +, -, *, / (integer, truncating)
- Unary negation: -x
- Grouping: (a + b)
- Dice rolls: NdF, where both sides are arbitrary sub-expressions

Every node owns its children; the tree has no sharing and no cycles.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from dicelang.ir.values import Value

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class UnaryOp(StrEnum):
    """Unary operators."""

    NEG = "-"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A number literal, already lifted to a Value."""

    value: Value = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value.current)


class UnaryExpr(BaseModel):
    """Unary operation: op operand."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"-{self.operand}"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class Grouping(BaseModel):
    """
    A parenthesized expression.

    Kept in the tree so it mirrors the source; it has no effect on the
    value or on the derivation trail.
    """

    inner: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.inner})"


class RollExpr(BaseModel):
    """
    Dice roll: quantity d faces.

    Examples:
        - 2d6 → RollExpr(quantity=Literal(2), faces=Literal(6))
        - (1+1)d(3*2) → both sides are full sub-expressions
        - 2d6d2 → RollExpr(quantity=RollExpr(2, 6), faces=Literal(2))
    """

    quantity: Expr = Field(description="Number of dice to roll")
    faces: Expr = Field(description="Number of faces on each die")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.quantity}d{self.faces}"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | UnaryExpr | BinaryExpr | Grouping | RollExpr

# Rebuild models for recursive forward references
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()
Grouping.model_rebuild()
RollExpr.model_rebuild()
