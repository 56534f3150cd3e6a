"""
Recursive descent parser for mathparser expressions.

Grammar (precedence low to high):
    expression  → term (("+" | "-") term)*
    term        → factor (("*" | "/") factor)*
    factor      → unary ("^" factor)?          right-associative
    unary       → "-" unary | atom
    atom        → NUMBER | func_call | IDENT | "(" expression ")"
    func_call   → IDENT "(" expression ")"

A bare identifier is a ConstantNode when its name is a known constant and
a VariableNode otherwise. Function and constant names are not checked
here; unknown names surface when the tree is evaluated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from mathparser.core.errors import ParenthesisMismatchException, SyntaxErrorException
from mathparser.core.expression_lang.functions import DEFAULT_CONSTANTS
from mathparser.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from mathparser.core.ir.nodes import (
    ConstantNode,
    ExpressionNode,
    FunctionNode,
    Node,
    NumberNode,
    VariableNode,
)

logger = logging.getLogger(__name__)

# Maximum depth of nested parentheses and function calls
MAX_NESTING = 100


class _Parser:
    """Recursive descent parser over a token list ending in EOF."""

    def __init__(self, tokens: list[Token], constants: Iterable[str]) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("Token sequence must end with an EOF token")
        self.tokens = tokens
        self.constants = frozenset(constants)
        self.pos = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def at_operator(self, *symbols: str) -> bool:
        return self.current.kind == TokenKind.OPERATOR and self.current.value in symbols

    def enter_group(self, opener: Token) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise SyntaxErrorException(
                "Expression nested too deeply", opener.line, opener.column
            )

    def expect_close(self, opener: Token) -> None:
        tok = self.current
        if tok.kind == TokenKind.RPAREN:
            self.advance()
            self.depth -= 1
            return
        if tok.kind == TokenKind.EOF:
            raise ParenthesisMismatchException("Unclosed '('", opener.line, opener.column)
        raise SyntaxErrorException(f"Expected ')', got {tok.value!r}", tok.line, tok.column)

    # -- Grammar rules --

    def parse(self) -> Node:
        node = self.parse_expression()

        # Ensure all tokens consumed
        tok = self.current
        if tok.kind == TokenKind.RPAREN:
            raise ParenthesisMismatchException("Unmatched ')'", tok.line, tok.column)
        if tok.kind != TokenKind.EOF:
            raise SyntaxErrorException(
                f"Unexpected token after expression: {tok.value!r}", tok.line, tok.column
            )
        return node

    def parse_expression(self) -> Node:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.at_operator("+", "-"):
            op = self.advance().value
            right = self.parse_term()
            left = ExpressionNode(operator=op, left=left, right=right)
        return left

    def parse_term(self) -> Node:
        """factor (('*' | '/') factor)*"""
        left = self.parse_factor()
        while self.at_operator("*", "/"):
            op = self.advance().value
            right = self.parse_factor()
            left = ExpressionNode(operator=op, left=left, right=right)
        return left

    def parse_factor(self) -> Node:
        """unary ('^' factor)?"""
        base = self.parse_unary()
        if self.at_operator("^"):
            self.advance()
            exponent = self.parse_factor()
            return ExpressionNode(operator="^", left=base, right=exponent)
        return base

    def parse_unary(self) -> Node:
        """'-' unary | atom"""
        if self.at_operator("-"):
            self.advance()
            return _negate(self.parse_unary())
        return self.parse_atom()

    def parse_atom(self) -> Node:
        """NUMBER | func_call | IDENT | '(' expression ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return NumberNode(value=tok.number)

        if tok.kind == TokenKind.IDENT:
            if self.peek(1).kind == TokenKind.LPAREN:
                return self._parse_func_call()
            self.advance()
            if tok.value in self.constants:
                return ConstantNode(name=tok.value)
            return VariableNode(name=tok.value)

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            self.enter_group(tok)
            if self.current.kind == TokenKind.RPAREN:
                raise SyntaxErrorException("Empty parentheses", tok.line, tok.column)
            node = self.parse_expression()
            self.expect_close(tok)
            return node

        if tok.kind == TokenKind.RPAREN:
            if self.depth == 0:
                raise ParenthesisMismatchException("Unmatched ')'", tok.line, tok.column)
            raise SyntaxErrorException("Missing operand before ')'", tok.line, tok.column)

        if tok.kind == TokenKind.EOF:
            if self.pos == 0:
                raise SyntaxErrorException("Empty expression")
            raise SyntaxErrorException("Unexpected end of input", tok.line, tok.column)

        raise SyntaxErrorException(f"Unexpected token {tok.value!r}", tok.line, tok.column)

    def _parse_func_call(self) -> FunctionNode:
        """IDENT '(' expression ')'"""
        name_tok = self.advance()
        opener = self.advance()
        self.enter_group(opener)

        if self.current.kind == TokenKind.RPAREN:
            raise SyntaxErrorException(
                f"Function {name_tok.value!r} requires an argument",
                opener.line,
                opener.column,
            )

        operand = self.parse_expression()

        if self.current.kind == TokenKind.COMMA:
            comma = self.current
            raise SyntaxErrorException(
                f"Function {name_tok.value!r} takes exactly one argument",
                comma.line,
                comma.column,
            )

        self.expect_close(opener)
        return FunctionNode(name=name_tok.value, operand=operand)


def _negate(operand: Node) -> Node:
    """Unary minus: fold into literals, otherwise ``0 - operand``."""
    if isinstance(operand, NumberNode):
        return NumberNode(value=-operand.value)
    return ExpressionNode(operator="-", left=NumberNode(value=0), right=operand)


def parse_tokens(tokens: list[Token], constants: Iterable[str] | None = None) -> Node:
    """Parse a token list (as produced by ``tokenize``) into a tree.

    Args:
        tokens: Token list ending with an EOF token.
        constants: Names treated as constants rather than variables.
            Defaults to the names of the default constant table.

    Raises:
        SyntaxErrorException: If the tokens violate the grammar or nest
            deeper than the parser can follow.
    """
    names = DEFAULT_CONSTANTS.keys() if constants is None else constants
    try:
        return _Parser(tokens, names).parse()
    except RecursionError:
        # long "^" or unary minus chains recurse without opening a group
        raise SyntaxErrorException("Expression nested too deeply") from None


def parse(source: str, constants: Iterable[str] | None = None) -> Node:
    """Parse an expression string into a tree.

    Args:
        source: Expression string (e.g., "sin(x)^2 + 3*y")
        constants: Names treated as constants rather than variables.

    Returns:
        Root node of the parsed tree.

    Raises:
        UnknownTokenException: If tokenization fails.
        SyntaxErrorException: If the expression is invalid.
    """
    node = parse_tokens(tokenize(source), constants)
    logger.debug("Parsed %r into %s", source, type(node).__name__)
    return node
