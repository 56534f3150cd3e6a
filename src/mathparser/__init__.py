"""
mathparser - parse infix math expressions once, evaluate them many times.

    >>> from mathparser import parse, evaluate
    >>> tree = parse("sin(x)^2 + 3*y")
    >>> evaluate(tree, {"x": 0.0, "y": 2})
    6.0
"""

from __future__ import annotations

from mathparser._version import get_version
from mathparser.core import ir
from mathparser.core.errors import (
    ConfigError,
    DivisionByZeroException,
    ErrorKind,
    EvaluationError,
    ExpressionTooDeepException,
    MathParserError,
    ParenthesisMismatchException,
    ParseError,
    SourceLocation,
    SyntaxErrorException,
    UnknownConstantException,
    UnknownFunctionException,
    UnknownOperatorException,
    UnknownTokenException,
    UnknownVariableException,
)
from mathparser.core.expression_lang import (
    ASCIIPrinter,
    Evaluator,
    Token,
    TokenKind,
    evaluate,
    parse,
    parse_tokens,
    to_ascii,
    tokenize,
)
from mathparser.core.expression_lang.functions import (
    DEFAULT_CONSTANTS,
    DEFAULT_FUNCTIONS,
    OPERATORS,
)
from mathparser.core.manifest import MathParserConfig, find_config, load_config
from mathparser.core.std import StdMathParser

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    # Entry points
    "tokenize",
    "parse",
    "parse_tokens",
    "evaluate",
    "to_ascii",
    "Token",
    "TokenKind",
    "Evaluator",
    "ASCIIPrinter",
    "StdMathParser",
    # Tables
    "DEFAULT_CONSTANTS",
    "DEFAULT_FUNCTIONS",
    "OPERATORS",
    # Configuration
    "MathParserConfig",
    "find_config",
    "load_config",
    # Errors
    "ErrorKind",
    "SourceLocation",
    "MathParserError",
    "ParseError",
    "UnknownTokenException",
    "SyntaxErrorException",
    "ParenthesisMismatchException",
    "EvaluationError",
    "UnknownConstantException",
    "UnknownVariableException",
    "UnknownFunctionException",
    "UnknownOperatorException",
    "DivisionByZeroException",
    "ExpressionTooDeepException",
    "ConfigError",
]
