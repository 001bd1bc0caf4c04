"""
dicelang expression language.

Tokenizer, parser and evaluator for arithmetic with dice notation.

Usage:
    from dicelang.expression_lang import parse_expr, evaluate

    expr = parse_expr("2d6 + 3")
    result = evaluate(expr)
    # result.current is between 5 and 15, result.trace shows the dice
"""

from dicelang.expression_lang.evaluator import Interpreter, evaluate, roll
from dicelang.expression_lang.parser import Parser, parse_expr
from dicelang.expression_lang.randomness import FixedSequence, RandomSource, default_source
from dicelang.expression_lang.tokenizer import Lexer, Token, TokenKind, tokenize

__all__ = [
    "FixedSequence",
    "Interpreter",
    "Lexer",
    "Parser",
    "RandomSource",
    "Token",
    "TokenKind",
    "default_source",
    "evaluate",
    "parse_expr",
    "roll",
    "tokenize",
]
