"""
Tokenizer for mathparser expressions.

Converts an expression string into a sequence of typed tokens with
1-based line/column tracking for diagnostics.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum, auto

from mathparser.core.errors import UnknownTokenException
from mathparser.core.expression_lang.functions import OPERATORS


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = auto()
    IDENT = auto()
    OPERATOR = auto()
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # End of input
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the expression tokenizer."""

    kind: TokenKind
    value: str
    line: int
    column: int

    @property
    def number(self) -> float:
        """Numeric value of a NUMBER token."""
        return float(self.value)

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, {self.line}:{self.column})"


_PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}

# Decimal literal without sign or exponent: "12", "1.5", "3.", ".25"
_NUMBER_RE = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")
# Identifier: letter followed by letters/digits
_IDENT_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    The returned list always ends with an EOF token.

    Raises:
        UnknownTokenException: If a character starts no token.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)
    line = 1
    line_start = 0

    while i < n:
        c = source[i]
        column = i - line_start + 1

        if c == "\n":
            i += 1
            line += 1
            line_start = i
            continue

        if c.isspace():
            i += 1
            continue

        m = _NUMBER_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.NUMBER, m.group(0), line, column))
            i = m.end()
            continue

        m = _IDENT_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.IDENT, m.group(0), line, column))
            i = m.end()
            continue

        if c in OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, c, line, column))
            i += 1
            continue

        if c in _PUNCTUATION:
            tokens.append(Token(_PUNCTUATION[c], c, line, column))
            i += 1
            continue

        raise UnknownTokenException(line, column)

    tokens.append(Token(TokenKind.EOF, "", line, n - line_start + 1))
    return tokens
