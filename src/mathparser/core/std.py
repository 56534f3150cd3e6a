"""
StdMathParser: tokenizer, parser and evaluator preconfigured with the
default symbol tables, plus optional extra constants, functions and
default variable values.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from mathparser.core.expression_lang.evaluator import evaluate
from mathparser.core.expression_lang.functions import (
    DEFAULT_CONSTANTS,
    DEFAULT_FUNCTIONS,
    UnaryFunction,
)
from mathparser.core.expression_lang.parser import parse_tokens
from mathparser.core.expression_lang.tokenizer import Token, tokenize
from mathparser.core.ir.nodes import Node, NodeBase
from mathparser.core.manifest import MathParserConfig


class StdMathParser:
    """Convenience front end for parsing and evaluating expressions.

    Example:
        >>> parser = StdMathParser(constants={"tau": 6.283185307179586})
        >>> parser.evaluate("tau / 2")
        3.141592653589793
    """

    def __init__(
        self,
        constants: Mapping[str, float] | None = None,
        functions: Mapping[str, UnaryFunction] | None = None,
        variables: Mapping[str, float] | None = None,
    ) -> None:
        self.constants: Mapping[str, float] = MappingProxyType(
            {**DEFAULT_CONSTANTS, **(constants or {})}
        )
        self.functions: Mapping[str, UnaryFunction] = MappingProxyType(
            {**DEFAULT_FUNCTIONS, **(functions or {})}
        )
        self.variables: Mapping[str, float] = MappingProxyType(dict(variables or {}))

    @classmethod
    def from_config(cls, config: MathParserConfig) -> StdMathParser:
        """Build a parser from a loaded mathparser.toml."""
        aliases = {
            alias: DEFAULT_FUNCTIONS[target] for alias, target in config.function_aliases.items()
        }
        return cls(constants=config.constants, functions=aliases, variables=config.variables)

    def tokenize(self, text: str) -> list[Token]:
        return tokenize(text)

    def parse(self, text: str) -> Node:
        """Parse ``text``, treating every configured constant name as a constant."""
        return parse_tokens(self.tokenize(text), self.constants.keys())

    def evaluate(self, expr: Node | str, variables: Mapping[str, float] | None = None) -> float:
        """Evaluate a tree or expression string.

        ``variables`` are layered over the default variables given at
        construction.
        """
        node = self.parse(expr) if isinstance(expr, str) else expr
        if not isinstance(node, NodeBase):
            raise TypeError(f"Expected an expression string or node, got {type(expr).__name__}")
        bindings = {**self.variables, **(variables or {})}
        return evaluate(node, bindings, constants=self.constants, functions=self.functions)
