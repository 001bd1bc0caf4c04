"""
dicelang - arithmetic expressions with dice notation.

Evaluates expressions such as ``2d6 + 3`` and returns both the integer
result and a trace of how it was reached (each die face, each operator).
"""

from __future__ import annotations

from ._version import get_version
from .config import EvaluatorConfig, load_config
from .errors import (
    ArithmeticOverflowError,
    DiceError,
    Diagnostic,
    DivisionByZeroError,
    EvaluationError,
    InvalidDiceError,
    ParseError,
)
from .expression_lang import FixedSequence, Interpreter, evaluate, parse_expr, roll
from .ir import Value

__version__ = get_version()

__all__ = [
    "__version__",
    "ArithmeticOverflowError",
    "DiceError",
    "Diagnostic",
    "DivisionByZeroError",
    "EvaluationError",
    "EvaluatorConfig",
    "FixedSequence",
    "Interpreter",
    "InvalidDiceError",
    "ParseError",
    "Value",
    "evaluate",
    "load_config",
    "parse_expr",
    "roll",
]
