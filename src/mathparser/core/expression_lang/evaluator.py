"""
Expression evaluator for mathparser.

Evaluates a tree against a mapping of variable names to numbers. Pure
evaluation: no I/O, no caching, no mutation of the tree or the bindings.
Does NOT use Python's eval().
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from mathparser.core.errors import (
    DivisionByZeroException,
    ExpressionTooDeepException,
    UnknownConstantException,
    UnknownFunctionException,
    UnknownOperatorException,
    UnknownVariableException,
)
from mathparser.core.expression_lang.functions import (
    DEFAULT_CONSTANTS,
    DEFAULT_FUNCTIONS,
    OPERATORS,
    UnaryFunction,
    apply_function,
    power,
)
from mathparser.core.ir.nodes import (
    ConstantNode,
    ExpressionNode,
    FunctionNode,
    Node,
    NumberNode,
    VariableNode,
)
from mathparser.core.ir.visitor import Visitor

logger = logging.getLogger(__name__)


class Evaluator(Visitor[float]):
    """Visitor computing the numeric value of a tree.

    An Evaluator is bound to one set of variables at construction and is
    read-only afterwards. Build a new one (or call ``evaluate``) for each
    binding map rather than sharing an instance across threads with
    changing variables.

    Args:
        variables: Variable name -> value. Values are coerced with float().
        constants: Constant table; defaults to ``{"pi", "e"}``.
        functions: Function table; defaults to DEFAULT_FUNCTIONS.
    """

    def __init__(
        self,
        variables: Mapping[str, float] | None = None,
        constants: Mapping[str, float] | None = None,
        functions: Mapping[str, UnaryFunction] | None = None,
    ) -> None:
        self.variables: Mapping[str, float] = MappingProxyType(
            {name: float(value) for name, value in (variables or {}).items()}
        )
        self.constants = DEFAULT_CONSTANTS if constants is None else constants
        self.functions = DEFAULT_FUNCTIONS if functions is None else functions

    def visit_number_node(self, node: NumberNode) -> float:
        return node.value

    def visit_constant_node(self, node: ConstantNode) -> float:
        if node.name not in self.constants:
            raise UnknownConstantException(node.name)
        return float(self.constants[node.name])

    def visit_variable_node(self, node: VariableNode) -> float:
        if node.name not in self.variables:
            raise UnknownVariableException(node.name)
        return self.variables[node.name]

    def visit_function_node(self, node: FunctionNode) -> float:
        func = self.functions.get(node.name)
        if func is None:
            raise UnknownFunctionException(node.name)
        return apply_function(func, node.operand.accept(self))

    def visit_expression_node(self, node: ExpressionNode) -> float:
        op = node.operator
        if op not in OPERATORS:
            raise UnknownOperatorException(op)

        left = node.left.accept(self)
        right = node.right.accept(self)

        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op == "/":
            if right == 0:
                raise DivisionByZeroException()
            return left / right
        return power(left, right)


def evaluate(
    node: Node,
    variables: Mapping[str, float] | None = None,
    *,
    constants: Mapping[str, float] | None = None,
    functions: Mapping[str, UnaryFunction] | None = None,
) -> float:
    """Evaluate a tree against a variable binding map.

    Each call walks the tree afresh with its own Evaluator, so the same
    tree can be evaluated repeatedly (or concurrently) with different
    bindings.

    Args:
        node: Root of a parsed or hand-built tree.
        variables: Variable name -> value.
        constants: Optional replacement constant table.
        functions: Optional replacement function table.

    Returns:
        The value as a float. Domain violations yield NaN or +-inf.

    Raises:
        UnknownConstantException: Constant not in the constant table.
        UnknownVariableException: Variable not in ``variables``.
        UnknownFunctionException: Function not in the function table.
        UnknownOperatorException: Operator outside + - * / ^.
        DivisionByZeroException: Division by an exact zero.
        ExpressionTooDeepException: Tree deeper than the interpreter stack allows.
    """
    evaluator = Evaluator(variables, constants=constants, functions=functions)
    try:
        value = node.accept(evaluator)
    except RecursionError:
        raise ExpressionTooDeepException() from None
    logger.debug(
        "Evaluated %s with %d variable(s) -> %r",
        type(node).__name__,
        len(evaluator.variables),
        value,
    )
    return value
