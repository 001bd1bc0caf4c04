"""
Error types for dicelang parsing and evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dicelang.location import Span, encode_source


class DiceError(Exception):
    """Base exception for all dicelang errors."""

    def __init__(self, message: str, diagnostic: Diagnostic | None = None):
        self.message = message
        self.diagnostic = diagnostic
        super().__init__(message)


class ParseError(DiceError):
    """
    Raised when an expression cannot be parsed.

    Examples:
    - Unrecognized characters
    - A missing number or closing parenthesis
    - Trailing input after a complete expression
    - Number literals too large for a 64-bit integer
    """

    diagnostic: Diagnostic

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message, diagnostic)


class EvaluationError(DiceError):
    """Raised when a parsed expression cannot be reduced to a value."""

    pass


class DivisionByZeroError(EvaluationError):
    pass


class ArithmeticOverflowError(EvaluationError):
    """An operation left the signed 64-bit integer range."""

    pass


class InvalidDiceError(EvaluationError):
    """
    Raised when a roll cannot be performed.

    Examples:
    - Zero or negative face count (``2d0``)
    - More dice than the configured limit
    """

    pass


@dataclass(frozen=True)
class Diagnostic:
    """
    Structured description of a parse failure.

    Handed as-is to a presentation layer, which decides how to draw it.

    Attributes:
        source: Full source text of the expression
        span: Half-open UTF-8 byte range of the offending input
        message: One-line human readable description
        label: Short text to attach to the highlighted span
    """

    source: str
    span: Span
    message: str
    label: str = ""

    @property
    def encoded(self) -> bytes:
        """The source as the UTF-8 bytes the span indexes into."""
        return encode_source(self.source)

    @property
    def line(self) -> int:
        """1-indexed line of the span start."""
        return self.encoded.count(b"\n", 0, self.span.start) + 1

    @property
    def column(self) -> int:
        """1-indexed column of the span start, counted in characters."""
        encoded = self.encoded
        line_start = encoded.rfind(b"\n", 0, self.span.start) + 1
        return len(encoded[line_start : self.span.start].decode("utf-8", "surrogatepass")) + 1

    @property
    def snippet(self) -> str:
        """The source text covered by the span."""
        return self.encoded[self.span.start : self.span.end].decode("utf-8", "surrogatepass")

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "label": self.label,
            "source": self.source,
            "span": {"start": self.span.start, "end": self.span.end},
            "line": self.line,
            "column": self.column,
        }


def make_parse_error(source: str, span: Span, message: str, label: str = "") -> ParseError:
    """
    Helper to create a ParseError with its diagnostic.

    Args:
        source: Full expression source
        span: Offending range
        message: Error description
        label: Short span label

    Returns:
        ParseError ready to raise
    """
    return ParseError(Diagnostic(source=source, span=span, message=message, label=label))
