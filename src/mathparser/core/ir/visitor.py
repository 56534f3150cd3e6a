"""
Visitor base class for expression trees.

A traversal (evaluation, printing, ...) subclasses Visitor and implements
one method per node type. Node types never import their traversals, so new
traversals are added without touching nodes.py.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from mathparser.core.ir.nodes import (
        ConstantNode,
        ExpressionNode,
        FunctionNode,
        NumberNode,
        VariableNode,
    )

T = TypeVar("T")


class Visitor(ABC, Generic[T]):
    """Abstract visitor over the five node types."""

    @abstractmethod
    def visit_number_node(self, node: NumberNode) -> T: ...

    @abstractmethod
    def visit_constant_node(self, node: ConstantNode) -> T: ...

    @abstractmethod
    def visit_variable_node(self, node: VariableNode) -> T: ...

    @abstractmethod
    def visit_function_node(self, node: FunctionNode) -> T: ...

    @abstractmethod
    def visit_expression_node(self, node: ExpressionNode) -> T: ...
