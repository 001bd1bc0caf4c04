"""
Tokenizer for dice expressions.

Converts an expression string into typed tokens, one at a time. The
lexer never raises: input it does not recognize comes back as an ERROR
token carrying its own span, and the parser decides how to report it.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import StrEnum, auto

from dicelang.location import Span, encode_source


class TokenKind(StrEnum):
    """Token types for the dice expression language."""

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Operators
    MINUS = auto()
    PLUS = auto()
    SLASH = auto()
    STAR = auto()
    DICE = auto()

    # Literals
    NUMBER = auto()
    FLOAT = auto()

    # Unrecognized input
    ERROR = auto()

    # End of input
    EOF = auto()

    @property
    def display(self) -> str:
        """Name of the kind as shown in error messages."""
        return _DISPLAY[self]


_DISPLAY: dict[TokenKind, str] = {
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
    TokenKind.MINUS: "\u2212",
    TokenKind.PLUS: "+",
    TokenKind.SLASH: "/",
    TokenKind.STAR: "*",
    TokenKind.DICE: "dice",
    TokenKind.NUMBER: "number",
    TokenKind.FLOAT: "float",
    TokenKind.ERROR: "error",
    TokenKind.EOF: "EoF",
}


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "lexeme", "span")

    def __init__(self, kind: TokenKind, lexeme: str, span: Span) -> None:
        self.kind = kind
        self.lexeme = lexeme
        self.span = span

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, span={self.span})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.lexeme, self.span) == (other.kind, other.lexeme, other.span)


# ASCII and Unicode spellings that share a kind. Only the kind drives parsing.
_SINGLE_CHAR: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "-": TokenKind.MINUS,
    "\u2212": TokenKind.MINUS,  # minus sign
    "+": TokenKind.PLUS,
    "/": TokenKind.SLASH,
    "\u00f7": TokenKind.SLASH,  # division sign
    "*": TokenKind.STAR,
    "\u00d7": TokenKind.STAR,  # multiplication sign
    "x": TokenKind.STAR,
    "X": TokenKind.STAR,
    "d": TokenKind.DICE,
    "D": TokenKind.DICE,
}

_WHITESPACE = " \t\r\n\u00a0"

# Number pattern: digits, optionally followed by a dot and more digits (float)
_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]*)?")


class Lexer:
    """
    Pull-based scanner over an expression string.

    Usage:
        lexer = Lexer("2d6 + 3")
        token = lexer.next_token()

    Or for streaming:
        for token in Lexer("2d6 + 3"):
            process(token)

    Once the input is exhausted every call returns an EOF token. Token
    spans are UTF-8 byte offsets, so `−`, `×` and `÷` each cover two bytes.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0  # Character index into source
        self.offset = 0  # Byte offset matching pos
        self.byte_length = len(encode_source(source))

    @property
    def remainder(self) -> str:
        """Source text not yet scanned."""
        return self.source[self.pos :]

    def next_token(self) -> Token:
        source = self.source
        n = len(source)

        while self.pos < n and source[self.pos] in _WHITESPACE:
            self._consume(source[self.pos])

        if self.pos >= n:
            return Token(TokenKind.EOF, "", Span(start=self.offset, end=self.offset))

        start = self.offset
        c = source[self.pos]

        if c in _SINGLE_CHAR:
            self._consume(c)
            return Token(_SINGLE_CHAR[c], c, Span(start=start, end=self.offset))

        m = _NUMBER_RE.match(source, self.pos)
        if m:
            self._consume(m.group(0))
            kind = TokenKind.FLOAT if m.group(1) is not None else TokenKind.NUMBER
            return Token(kind, m.group(0), Span(start=start, end=self.offset))

        self._consume(c)
        return Token(TokenKind.ERROR, c, Span(start=start, end=self.offset))

    def _consume(self, text: str) -> None:
        self.pos += len(text)
        self.offset += len(encode_source(text))

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending in EOF."""
    return list(Lexer(source))
