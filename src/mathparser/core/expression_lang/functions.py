"""
Default symbol tables: constants, unary functions and operators.

Functions are numpy ufuncs so that domain violations and overflow follow
IEEE-754 (NaN / +-inf) instead of raising like the ``math`` module does.
Callers evaluate them through ``apply_function``, which silences numpy's
floating-point warnings.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from types import MappingProxyType

import numpy as np

UnaryFunction = Callable[[np.float64], np.float64]

OPERATORS = frozenset({"+", "-", "*", "/", "^"})

DEFAULT_CONSTANTS: Mapping[str, float] = MappingProxyType(
    {
        "pi": math.pi,
        "e": math.e,
    }
)


def _cot(v: np.float64) -> np.float64:
    return np.reciprocal(np.tan(v))


def _arccot(v: np.float64) -> np.float64:
    return np.pi / 2 - np.arctan(v)


def _coth(v: np.float64) -> np.float64:
    return np.reciprocal(np.tanh(v))


def _arcoth(v: np.float64) -> np.float64:
    return np.arctanh(np.reciprocal(v))


DEFAULT_FUNCTIONS: Mapping[str, UnaryFunction] = MappingProxyType(
    {
        # Trigonometric
        "sin": np.sin,
        "cos": np.cos,
        "tan": np.tan,
        "cot": _cot,
        "arcsin": np.arcsin,
        "arccos": np.arccos,
        "arctan": np.arctan,
        "arccot": _arccot,
        # Exponential / logarithmic
        "exp": np.exp,
        "log": np.log,
        "log10": np.log10,
        "sqrt": np.sqrt,
        # Hyperbolic
        "sinh": np.sinh,
        "cosh": np.cosh,
        "tanh": np.tanh,
        "coth": _coth,
        "arsinh": np.arcsinh,
        "arcosh": np.arccosh,
        "artanh": np.arctanh,
        "arcoth": _arcoth,
    }
)


def apply_function(func: UnaryFunction, value: float) -> float:
    """Apply a unary function with IEEE-754 semantics and return a float."""
    with np.errstate(all="ignore"):
        return float(func(np.float64(value)))


def power(base: float, exponent: float) -> float:
    """``base ^ exponent`` with 0^0 = 1, 0^-n = inf and (-a)^(p/q) = NaN."""
    # np.power(-0.0, -1) is -inf; a zero base is unsigned here
    if base == 0 and exponent < 0:
        return math.inf
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))
