"""
Expression tree types for mathparser.

The tree is a closed set of five frozen node models:

- NumberNode: numeric literal, e.g. 3.5
- ConstantNode: named constant, e.g. pi, e
- VariableNode: variable reference, e.g. x
- FunctionNode: single-argument function application, e.g. sin(x)
- ExpressionNode: binary operation, e.g. x + 1

Nodes know nothing about the operations performed on them. Each one only
offers ``accept(visitor)``, which hands itself to the matching
``visit_*`` method of a Visitor (see visitor.py).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Annotated, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from mathparser.core.ir.visitor import Visitor

T = TypeVar("T")


class NodeBase(BaseModel):
    """Common base of all tree nodes."""

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def accept(self, visitor: Visitor[T]) -> T:
        """Dispatch to the visitor method for this node type."""


class NumberNode(NodeBase):
    """A numeric literal."""

    node_type: Literal["number"] = "number"
    value: float = Field(description="The literal value")

    def accept(self, visitor: Visitor[T]) -> T:
        return visitor.visit_number_node(self)


class ConstantNode(NodeBase):
    """
    A named constant such as ``pi``.

    The name is resolved to a value by the evaluator, not by the parser.
    """

    node_type: Literal["constant"] = "constant"
    name: str = Field(description="Constant name")

    def accept(self, visitor: Visitor[T]) -> T:
        return visitor.visit_constant_node(self)


class VariableNode(NodeBase):
    """A variable reference, bound at evaluation time."""

    node_type: Literal["variable"] = "variable"
    name: str = Field(description="Variable name")

    def accept(self, visitor: Visitor[T]) -> T:
        return visitor.visit_variable_node(self)


class FunctionNode(NodeBase):
    """Function application: name(operand)."""

    node_type: Literal["function"] = "function"
    name: str = Field(description="Function name")
    operand: Node = Field(description="The single argument")

    def accept(self, visitor: Visitor[T]) -> T:
        return visitor.visit_function_node(self)


class ExpressionNode(NodeBase):
    """
    Binary operation: left operator right.

    The parser only produces the operators ``+ - * / ^``. Trees built by
    hand may carry any symbol; the evaluator rejects unknown ones.
    """

    node_type: Literal["expression"] = "expression"
    operator: str = Field(description="Operator symbol")
    left: Node
    right: Node

    def accept(self, visitor: Visitor[T]) -> T:
        return visitor.visit_expression_node(self)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Node = Annotated[
    NumberNode | ConstantNode | VariableNode | FunctionNode | ExpressionNode,
    Field(discriminator="node_type"),
]

# Rebuild models for recursive forward references
FunctionNode.model_rebuild()
ExpressionNode.model_rebuild()
