"""
Result values and their derivation trail.

A Value pairs an integer result with the provenance that produced it:
the literals, individual die faces and operator glyphs visited while
evaluating, in left-to-right order. Arithmetic on Values builds both
halves together, so the scalar and the trail never disagree.

Example:
    >>> (Value.direct(5) + Value.from_roll([2, 3])).trace
    '10 <= (5 + 5 (2 + 3))'
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dicelang.errors import ArithmeticOverflowError, DivisionByZeroError

# Values are signed 64-bit integers; anything outside is an overflow.
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

# ---------------------------------------------------------------------------
# Provenance nodes
# ---------------------------------------------------------------------------


class Direct(BaseModel):
    """A literal or computed scalar."""

    value: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class Roll(BaseModel):
    """The individual die outcomes of one roll, in roll order, joined by '+' glyphs."""

    items: list[Kind] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "(" + " ".join(str(item) for item in self.items) + ")"

    @property
    def faces(self) -> list[int]:
        """Die faces only, without the glyphs between them."""
        return [item.value for item in self.items if isinstance(item, Direct)]


class OpToken(BaseModel):
    """An operator glyph placed between operands for display."""

    symbol: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.symbol


Kind = Direct | Roll | OpToken

Roll.model_rebuild()


def _checked(result: int, operation: str) -> int:
    if result < INT_MIN or result > INT_MAX:
        raise ArithmeticOverflowError(f"integer overflow in {operation}")
    return result


# ---------------------------------------------------------------------------
# Value
# ---------------------------------------------------------------------------


class Value(BaseModel):
    """
    An integer result together with its derivation trail.

    Equality only looks at ``current``; two rolls that both came to 7
    are equal however the dice fell. A Value also compares equal to a
    plain int.
    """

    current: int
    provenance: list[Kind] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def direct(cls, value: int) -> Value:
        """A scalar whose trail is just itself."""
        return cls(current=value, provenance=[Direct(value=value)])

    @classmethod
    def from_roll(cls, results: list[int], negated: bool = False) -> Value:
        """Sum of die faces, trail showing the total then each face.

        With ``negated`` the total is subtracted instead, as for ``-1d6``.
        """
        total = _checked(-sum(results) if negated else sum(results), "dice total")
        items: list[Kind] = []
        for i, face in enumerate(results):
            if i:
                items.append(OpToken(symbol="+"))
            items.append(Direct(value=face))
        return cls(current=total, provenance=[Direct(value=total), Roll(items=items)])

    def _combine(self, other: Value, result: int, symbol: str) -> Value:
        return Value(
            current=result,
            provenance=[*self.provenance, OpToken(symbol=symbol), *other.provenance],
        )

    def __add__(self, other: Value) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        result = _checked(self.current + other.current, "addition")
        return self._combine(other, result, "+")

    def __sub__(self, other: Value) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        result = _checked(self.current - other.current, "subtraction")
        return self._combine(other, result, "-")

    def __mul__(self, other: Value) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        result = _checked(self.current * other.current, "multiplication")
        return self._combine(other, result, "x")

    def __truediv__(self, other: Value) -> Value:
        """Integer division, truncating toward zero."""
        if not isinstance(other, Value):
            return NotImplemented
        if other.current == 0:
            raise DivisionByZeroError(f"division by zero: {self.current} / 0")
        quotient = abs(self.current) // abs(other.current)
        if (self.current < 0) != (other.current < 0):
            quotient = -quotient
        result = _checked(quotient, "division")
        return self._combine(other, result, "÷")

    def __neg__(self) -> Value:
        return Value.direct(_checked(-self.current, "negation"))

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Value):
            return self.current == other.current
        if isinstance(other, int) and not isinstance(other, bool):
            return self.current == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.current)

    def __int__(self) -> int:
        return self.current

    @property
    def trace(self) -> str:
        """Result followed by the parenthesized derivation, e.g. ``10 <= (5 (2 + 3) + 5)``."""
        return f"{self.current} <= (" + " ".join(str(kind) for kind in self.provenance) + ")"

    def dice(self) -> list[list[int]]:
        """Faces of every roll group in the trail, in evaluation order."""
        return [kind.faces for kind in self.provenance if isinstance(kind, Roll)]

    def __str__(self) -> str:
        return self.trace
