"""
Recursive descent parser for dice expressions.

Grammar (precedence low to high, all binary forms left-associative):
    expression  → term
    term        → factor (("+" | "-") factor)*
    factor      → roll (("*" | "/") roll)*
    roll        → unary ("d" unary)*
    unary       → "-" unary | primary
    primary     → NUMBER | "(" expression ")"

Dice bind tighter than multiply/divide and looser than negation, as in
tabletop notation: ``-1d6`` negates one die, ``2d6*3`` triples the roll,
``2d6+1`` adds after rolling.

Tokens are pulled from the lexer on demand; the parser only ever holds
the previous and current token. The first error ends the parse.
"""

from __future__ import annotations

import logging

from dicelang.errors import ParseError, make_parse_error
from dicelang.expression_lang.tokenizer import Lexer, Token, TokenKind
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
from dicelang.ir.values import INT_MAX, Value
from dicelang.location import Span

logger = logging.getLogger(__name__)

# Nesting limit for parentheses and unary minus, well inside the interpreter stack.
MAX_NESTING = 64

# Longest slice of trailing input quoted in an error message
_TRAILING_PREVIEW = 10


class Parser:
    """Recursive descent parser with a single token of lookahead."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.lexer = Lexer(source)
        self._depth = 0
        self.current = self._fetch()
        self.previous = self.current

    # -- Token handling --

    def _fetch(self) -> Token:
        token = self.lexer.next_token()
        if token.kind == TokenKind.ERROR:
            raise self.error(
                token.span,
                f"unrecognized character `{token.lexeme}`",
                "unrecognized",
            )
        return token

    def is_at_end(self) -> bool:
        return self.current.kind == TokenKind.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.previous = self.current
            self.current = self._fetch()
        return self.previous

    def expect(self, kind: TokenKind) -> Token:
        if self.current.kind != kind:
            raise self.error(
                self.current.span,
                f"expected `{kind.display}`, found `{self.current.kind.display}`",
                f"expected `{kind.display}`",
            )
        return self.advance()

    def error(self, span: Span, message: str, label: str = "") -> ParseError:
        return make_parse_error(self.source, span, message, label)

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING:
            raise self.error(
                self.current.span,
                f"expression nested more than {MAX_NESTING} levels deep",
                "too deep",
            )

    # -- Grammar rules --

    def parse(self) -> Expr:
        """Parse the whole source, rejecting anything left over."""
        expr = self.parse_expression()
        if not self.is_at_end():
            rest = self.current.lexeme + self.lexer.remainder
            raise self.error(
                Span(start=self.current.span.start, end=self.lexer.byte_length),
                f"unexpected trailing characters `{rest[:_TRAILING_PREVIEW]}`",
                "here",
            )
        return expr

    def parse_expression(self) -> Expr:
        return self.parse_term()

    def parse_term(self) -> Expr:
        """factor (('+' | '-') factor)*"""
        left = self.parse_factor()
        while self.current.kind in (TokenKind.PLUS, TokenKind.MINUS):
            op = BinaryOp.ADD if self.current.kind == TokenKind.PLUS else BinaryOp.SUB
            self.advance()
            right = self.parse_factor()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """roll (('*' | '/') roll)*"""
        left = self.parse_roll()
        while self.current.kind in (TokenKind.STAR, TokenKind.SLASH):
            op = BinaryOp.MUL if self.current.kind == TokenKind.STAR else BinaryOp.DIV
            self.advance()
            right = self.parse_roll()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_roll(self) -> Expr:
        """unary ('d' unary)*"""
        expr = self.parse_unary()
        while self.current.kind == TokenKind.DICE:
            self.advance()
            faces = self.parse_unary()
            expr = RollExpr(quantity=expr, faces=faces)
        return expr

    def parse_unary(self) -> Expr:
        """'-' unary | primary"""
        if self.current.kind == TokenKind.MINUS:
            self._enter()
            self.advance()
            operand = self.parse_unary()
            self._depth -= 1
            return UnaryExpr(op=UnaryOp.NEG, operand=operand)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        """NUMBER | '(' expression ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return self._number(tok)

        if tok.kind == TokenKind.LPAREN:
            self._enter()
            self.advance()
            inner = self.parse_expression()
            self.expect(TokenKind.RPAREN)
            self._depth -= 1
            return Grouping(inner=inner)

        raise self.error(
            tok.span,
            f"expected a number or parenthesis, found `{tok.kind.display}`",
            "expected a number",
        )

    def _number(self, tok: Token) -> Literal:
        value = int(tok.lexeme)
        if value > INT_MAX:
            raise self.error(
                tok.span,
                "could not parse number: number too large to fit in target type",
                "number too large",
            )
        return Literal(value=Value.direct(value))


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "2d6 + 3")

    Returns:
        Parsed expression AST.

    Raises:
        ParseError: If the expression is invalid. The error's diagnostic
            carries the source, span, message and label.
    """
    try:
        expr = Parser(source).parse()
    except ParseError as e:
        logger.debug("Failed to parse %r at %s: %s", source, e.diagnostic.span, e.message)
        raise
    logger.debug("Parsed %r as %s", source, expr)
    return expr
