"""
mathparser expression language.

Tokenizer, parser, evaluator and printer for infix math expressions.

Usage:
    from mathparser.core.expression_lang import parse, evaluate

    expr = parse("sin(x)^2 + 3*y")
    result = evaluate(expr, {"x": 0.5, "y": 2})
"""

from mathparser.core.expression_lang.evaluator import Evaluator, evaluate
from mathparser.core.expression_lang.parser import parse, parse_tokens
from mathparser.core.expression_lang.printer import ASCIIPrinter, to_ascii
from mathparser.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "ASCIIPrinter",
    "Evaluator",
    "Token",
    "TokenKind",
    "evaluate",
    "parse",
    "parse_tokens",
    "to_ascii",
    "tokenize",
]
