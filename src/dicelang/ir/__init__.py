"""
dicelang intermediate representation.

Expression AST nodes produced by the parser and the Value/provenance
model produced by the evaluator.
"""

from .expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Grouping,
    Literal,
    RollExpr,
    UnaryExpr,
    UnaryOp,
)
from .values import (
    INT_MAX,
    INT_MIN,
    Direct,
    Kind,
    OpToken,
    Roll,
    Value,
)

__all__ = [
    # Expressions
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "Grouping",
    "Literal",
    "RollExpr",
    "UnaryExpr",
    "UnaryOp",
    # Values
    "INT_MAX",
    "INT_MIN",
    "Direct",
    "Kind",
    "OpToken",
    "Roll",
    "Value",
]
