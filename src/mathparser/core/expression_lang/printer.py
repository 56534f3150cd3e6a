"""
ASCII printer for mathparser trees.

Renders a tree back into expression text that parses to an equivalent
tree. Parentheses are only emitted where precedence or associativity
requires them.
"""

from __future__ import annotations

import numpy as np

from mathparser.core.errors import ExpressionTooDeepException
from mathparser.core.ir.nodes import (
    ConstantNode,
    ExpressionNode,
    FunctionNode,
    Node,
    NumberNode,
    VariableNode,
)
from mathparser.core.ir.visitor import Visitor

_PRECEDENCE: dict[str, int] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
}

# Anything that is not a binary operation binds tighter than every operator
_ATOM = 4


class ASCIIPrinter(Visitor[str]):
    """Visitor rendering a tree as plain infix text."""

    def visit_number_node(self, node: NumberNode) -> str:
        text = np.format_float_positional(node.value, trim="-")
        if node.value < 0:
            return f"({text})"
        return text

    def visit_constant_node(self, node: ConstantNode) -> str:
        return node.name

    def visit_variable_node(self, node: VariableNode) -> str:
        return node.name

    def visit_function_node(self, node: FunctionNode) -> str:
        return f"{node.name}({node.operand.accept(self)})"

    def visit_expression_node(self, node: ExpressionNode) -> str:
        op = node.operator
        prec = _PRECEDENCE.get(op, 0)

        left = node.left.accept(self)
        left_prec = _precedence_of(node.left)
        # ^ is right-associative: (a^b)^c keeps its parentheses
        if left_prec < prec or (op == "^" and left_prec == prec):
            left = f"({left})"

        right = node.right.accept(self)
        right_prec = _precedence_of(node.right)
        # Everything else is left-associative: a-(b-c), a+(b+c) keep theirs
        if right_prec < prec or (op != "^" and right_prec == prec):
            right = f"({right})"

        return f"{left}{op}{right}"


def _precedence_of(node: Node) -> int:
    if isinstance(node, ExpressionNode):
        return _PRECEDENCE.get(node.operator, 0)
    return _ATOM


def to_ascii(node: Node) -> str:
    """Render a tree as infix text.

    Raises:
        ExpressionTooDeepException: Tree deeper than the interpreter stack allows.
    """
    try:
        return node.accept(ASCIIPrinter())
    except RecursionError:
        raise ExpressionTooDeepException() from None
