"""
mathparser intermediate representation: expression tree nodes and the
visitor contract used to traverse them.
"""

from .nodes import (
    ConstantNode,
    ExpressionNode,
    FunctionNode,
    Node,
    NodeBase,
    NumberNode,
    VariableNode,
)
from .visitor import Visitor

__all__ = [
    "ConstantNode",
    "ExpressionNode",
    "FunctionNode",
    "Node",
    "NodeBase",
    "NumberNode",
    "VariableNode",
    "Visitor",
]
