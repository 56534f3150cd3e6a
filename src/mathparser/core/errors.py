"""
Error types for mathparser tokenizing, parsing, evaluation and configuration.

Every failure the library signals is a subclass of MathParserError and
carries an ErrorKind, so callers can branch on ``err.kind`` instead of on
the concrete class when that is more convenient.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    """The fixed set of failure kinds."""

    UNKNOWN_TOKEN = "unknown_token"
    SYNTAX = "syntax"
    UNKNOWN_CONSTANT = "unknown_constant"
    UNKNOWN_VARIABLE = "unknown_variable"
    UNKNOWN_FUNCTION = "unknown_function"
    UNKNOWN_OPERATOR = "unknown_operator"
    DIVISION_BY_ZERO = "division_by_zero"
    TOO_DEEP = "too_deep"
    CONFIG = "config"


@dataclass(frozen=True)
class SourceLocation:
    """
    Position of an error in the expression source.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    line: int
    column: int

    def format(self) -> str:
        """Format as ``line:column``."""
        return f"{self.line}:{self.column}"


class MathParserError(Exception):
    """Base exception for all mathparser errors."""

    kind: ErrorKind

    def __init__(self, message: str, location: SourceLocation | None = None):
        self.message = message
        self.location = location
        super().__init__(message)

    @property
    def line(self) -> int | None:
        return self.location.line if self.location else None

    @property
    def column(self) -> int | None:
        return self.location.column if self.location else None


# =============================================================================
# Parse-time errors
# =============================================================================


class ParseError(MathParserError):
    """Raised when the expression source cannot be turned into a tree."""

    kind = ErrorKind.SYNTAX


class UnknownTokenException(ParseError):
    """Raised by the tokenizer for a character that starts no token."""

    kind = ErrorKind.UNKNOWN_TOKEN

    def __init__(self, line: int, column: int):
        super().__init__(
            f"Unknown token encountered at position {line}:{column}",
            SourceLocation(line, column),
        )


class SyntaxErrorException(ParseError):
    """
    Raised when the token sequence violates the grammar.

    Examples:
    - Empty input
    - Dangling operator ("1 +")
    - Empty or multi-argument function call ("sin()", "sin(1, 2)")
    - Trailing tokens ("1 2")
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        location = SourceLocation(line, column) if line is not None and column is not None else None
        if location:
            message = f"{message} at position {location.format()}"
        super().__init__(message, location)


class ParenthesisMismatchException(SyntaxErrorException):
    """Raised for an unclosed '(' or a stray ')'."""


# =============================================================================
# Evaluation-time errors
# =============================================================================


class EvaluationError(MathParserError):
    """Raised when a well-formed tree cannot be evaluated."""


class UnknownConstantException(EvaluationError):
    kind = ErrorKind.UNKNOWN_CONSTANT

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown constant {name!r}.")


class UnknownVariableException(EvaluationError):
    kind = ErrorKind.UNKNOWN_VARIABLE

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown variable {name!r}.")


class UnknownFunctionException(EvaluationError):
    kind = ErrorKind.UNKNOWN_FUNCTION

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown function {name!r}.")


class UnknownOperatorException(EvaluationError):
    kind = ErrorKind.UNKNOWN_OPERATOR

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"Unknown operator {operator!r}.")


class DivisionByZeroException(EvaluationError):
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self) -> None:
        super().__init__("Division by zero.")


class ExpressionTooDeepException(MathParserError):
    """Raised when a tree is nested too deeply to walk recursively."""

    kind = ErrorKind.TOO_DEEP

    def __init__(self) -> None:
        super().__init__("Expression nested too deeply to traverse.")


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigError(MathParserError):
    """
    Raised when mathparser.toml cannot be loaded.

    Examples:
    - Malformed TOML
    - Non-numeric constant or variable value
    - Alias pointing at a function that does not exist
    """

    kind = ErrorKind.CONFIG
