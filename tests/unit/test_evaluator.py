"""Tests for the mathparser evaluator."""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from mathparser.core.errors import (
    DivisionByZeroException,
    ErrorKind,
    EvaluationError,
    ExpressionTooDeepException,
    UnknownConstantException,
    UnknownFunctionException,
    UnknownOperatorException,
    UnknownVariableException,
)
from mathparser.core.expression_lang.evaluator import Evaluator, evaluate
from mathparser.core.expression_lang.parser import parse
from mathparser.core.ir.nodes import (
    ConstantNode,
    ExpressionNode,
    FunctionNode,
    NumberNode,
    VariableNode,
)
from mathparser.core.ir.visitor import Visitor


def ev(source: str, variables: dict[str, float] | None = None) -> float:
    return evaluate(parse(source), variables or {"x": 0.7, "y": 2.1})


class TestEvalLeaves:
    """Numbers, constants and variables."""

    def test_number(self) -> None:
        assert ev("3") == 3
        assert ev("-2") == -2

    def test_result_is_float(self) -> None:
        assert isinstance(ev("3"), float)
        assert isinstance(ev("2^3"), float)
        assert isinstance(ev("sin(0)"), float)

    @pytest.mark.parametrize("literal", [0, 1, 42, 3.5, 0.25, 123.456, -7, -0.5])
    def test_literal_round_trip(self, literal: float) -> None:
        assert evaluate(parse(str(literal))) == literal

    def test_constants(self) -> None:
        assert ev("pi") == math.pi
        assert ev("e") == math.e

    def test_unknown_constant(self) -> None:
        with pytest.raises(UnknownConstantException, match="sdf") as exc_info:
            evaluate(ConstantNode(name="sdf"))
        assert exc_info.value.name == "sdf"
        assert exc_info.value.kind == ErrorKind.UNKNOWN_CONSTANT

    def test_variable(self, variables: dict[str, float]) -> None:
        assert evaluate(parse("x"), variables) == 0.7

    def test_unknown_variable(self, variables: dict[str, float]) -> None:
        with pytest.raises(UnknownVariableException, match="'q'") as exc_info:
            evaluate(parse("q"), variables)
        assert exc_info.value.kind == ErrorKind.UNKNOWN_VARIABLE

    def test_missing_bindings(self) -> None:
        with pytest.raises(UnknownVariableException):
            evaluate(VariableNode(name="x"))

    def test_variable_values_are_coerced_to_float(self) -> None:
        values = {"x": "0.7", "y": 2}
        assert evaluate(parse("x + y"), values) == pytest.approx(2.7)  # type: ignore[arg-type]


class TestEvalArithmetic:
    """Binary operators."""

    def test_addition(self) -> None:
        assert ev("3+5") == 8
        assert ev("3+5+1") == 9

    def test_subtraction(self) -> None:
        assert ev("3-5") == -2
        assert ev("3-5-1") == -3

    def test_multiplication(self) -> None:
        assert ev("3*5") == 15
        assert ev("3*5*2") == 30

    def test_division(self) -> None:
        assert ev("3/5") == pytest.approx(0.6)
        assert ev("20/2/5") == 2

    def test_precedence(self) -> None:
        assert ev("3+5*2") == 13

    def test_parentheses(self) -> None:
        assert ev("(3+5)*2") == 16

    def test_unary_minus_on_variable(self) -> None:
        assert ev("-x") == -0.7
        assert ev("-x^2") == pytest.approx(0.49)

    def test_with_variables(self, variables: dict[str, float]) -> None:
        assert evaluate(parse("x*y - 1"), variables) == pytest.approx(0.7 * 2.1 - 1)

    def test_overflow_is_infinite(self) -> None:
        assert math.isinf(ev("10^308 * 10"))


class TestDivisionByZero:
    """Division by an exact zero raises; other singularities do not."""

    def test_literal_zero(self) -> None:
        with pytest.raises(DivisionByZeroException, match="Division by zero"):
            ev("3/0")

    def test_computed_zero(self) -> None:
        with pytest.raises(DivisionByZeroException):
            ev("x/(y-y)")

    def test_negative_zero(self) -> None:
        with pytest.raises(DivisionByZeroException):
            ev("1/(-0)")

    def test_zero_numerator(self) -> None:
        assert ev("0/5") == 0

    def test_kind(self) -> None:
        with pytest.raises(EvaluationError) as exc_info:
            ev("1/0")
        assert exc_info.value.kind == ErrorKind.DIVISION_BY_ZERO


class TestEvalExponentiation:
    """^ follows floating-point pow conventions."""

    def test_basic(self) -> None:
        assert ev("2^3") == 8

    def test_right_associative(self) -> None:
        assert ev("2^3^2") == 512

    def test_zero_to_zero(self) -> None:
        assert ev("0^0") == 1

    def test_negative_base_integer_exponent(self) -> None:
        assert ev("(-1)^(-1)") == -1
        assert ev("(-2)^3") == -8

    def test_zero_to_negative_is_positive_infinity(self) -> None:
        value = ev("0^(-1)")
        assert math.isinf(value)
        assert value > 0

    @pytest.mark.parametrize("source", ["(-0)^(-1)", "(-0)^(-3)", "-0^(-2)"])
    def test_negative_zero_to_negative_is_positive_infinity(self, source: str) -> None:
        assert ev(source) == math.inf

    def test_bound_negative_zero_to_negative_is_positive_infinity(self) -> None:
        assert ev("x^(-1)", {"x": -0.0}) == math.inf

    def test_negative_zero_to_positive_power(self) -> None:
        assert ev("(-0)^3") == 0

    def test_negative_base_fractional_exponent_is_nan(self) -> None:
        assert math.isnan(ev("(-1)^(1/2)"))

    def test_fractional_exponent(self) -> None:
        assert ev("4^0.5") == 2


class TestEvalTrigonometric:
    """Trigonometric functions and their inverses."""

    def test_sine(self) -> None:
        assert ev("sin(pi)") == pytest.approx(0, abs=1e-12)
        assert ev("sin(pi/2)") == pytest.approx(1)
        assert ev("sin(pi/6)") == pytest.approx(0.5)
        assert ev("sin(x)") == pytest.approx(math.sin(0.7))

    def test_cosine(self) -> None:
        assert ev("cos(pi)") == pytest.approx(-1)
        assert ev("cos(pi/2)") == pytest.approx(0, abs=1e-12)
        assert ev("cos(pi/3)") == pytest.approx(0.5)
        assert ev("cos(x)") == pytest.approx(math.cos(0.7))

    def test_tangent(self) -> None:
        assert ev("tan(pi)") == pytest.approx(0, abs=1e-12)
        assert ev("tan(pi/4)") == pytest.approx(1)
        assert ev("tan(x)") == pytest.approx(math.tan(0.7))

    def test_cotangent(self) -> None:
        assert ev("cot(pi/2)") == pytest.approx(0, abs=1e-12)
        assert ev("cot(pi/4)") == pytest.approx(1)
        assert ev("cot(x)") == pytest.approx(1 / math.tan(0.7))

    def test_cotangent_of_zero_is_infinite(self) -> None:
        assert ev("cot(0)") == math.inf

    def test_arcsin(self) -> None:
        assert ev("arcsin(1)") == pytest.approx(math.pi / 2)
        assert ev("arcsin(1/2)") == pytest.approx(math.pi / 6)
        assert ev("arcsin(x)") == pytest.approx(math.asin(0.7))
        assert math.isnan(ev("arcsin(2)"))

    def test_arccos(self) -> None:
        assert ev("arccos(0)") == pytest.approx(math.pi / 2)
        assert ev("arccos(1/2)") == pytest.approx(math.pi / 3)
        assert ev("arccos(x)") == pytest.approx(math.acos(0.7))
        assert math.isnan(ev("arccos(2)"))

    def test_arctan(self) -> None:
        assert ev("arctan(1)") == pytest.approx(math.pi / 4)
        assert ev("arctan(x)") == pytest.approx(math.atan(0.7))

    def test_arccot(self) -> None:
        assert ev("arccot(1)") == pytest.approx(math.pi / 4)
        assert ev("arccot(x)") == pytest.approx(math.pi / 2 - math.atan(0.7))


class TestEvalExponentialLogarithmic:
    """exp, log, log10 and sqrt."""

    def test_exp(self) -> None:
        assert ev("exp(x)") == pytest.approx(math.exp(0.7))

    def test_exp_overflow_is_infinite(self) -> None:
        assert ev("exp(1000)") == math.inf

    def test_log(self) -> None:
        assert ev("log(x)") == pytest.approx(math.log(0.7))
        assert ev("log(e)") == pytest.approx(1)

    def test_log_of_negative_is_nan(self) -> None:
        assert math.isnan(ev("log(-1)"))

    def test_log_of_zero_is_negative_infinity(self) -> None:
        assert ev("log(0)") == -math.inf

    def test_log10(self) -> None:
        assert ev("log10(x)") == pytest.approx(math.log(0.7) / math.log(10))
        assert ev("log10(1000)") == pytest.approx(3)

    def test_sqrt(self) -> None:
        assert ev("sqrt(x)") == pytest.approx(math.sqrt(0.7))
        assert math.isnan(ev("sqrt(-2)"))


class TestEvalHyperbolic:
    """Hyperbolic functions and their inverses."""

    def test_sinh(self) -> None:
        assert ev("sinh(0)") == 0
        assert ev("sinh(x)") == pytest.approx(math.sinh(0.7))

    def test_cosh(self) -> None:
        assert ev("cosh(0)") == 1
        assert ev("cosh(x)") == pytest.approx(math.cosh(0.7))

    def test_tanh(self) -> None:
        assert ev("tanh(0)") == 0
        assert ev("tanh(x)") == pytest.approx(math.tanh(0.7))

    def test_coth(self) -> None:
        assert ev("coth(x)") == pytest.approx(1 / math.tanh(0.7))
        assert ev("coth(0)") == math.inf

    def test_arsinh(self) -> None:
        assert ev("arsinh(0)") == 0
        assert ev("arsinh(x)") == pytest.approx(math.asinh(0.7))

    def test_arcosh(self) -> None:
        assert ev("arcosh(1)") == 0
        assert ev("arcosh(3)") == pytest.approx(math.acosh(3))
        assert math.isnan(ev("arcosh(0)"))

    def test_artanh(self) -> None:
        assert ev("artanh(0)") == 0
        assert ev("artanh(x)") == pytest.approx(math.atanh(0.7))
        assert ev("artanh(1)") == math.inf

    def test_arcoth(self) -> None:
        assert ev("arcoth(3)") == pytest.approx(math.atanh(1 / 3))
        assert math.isnan(ev("arcoth(0)"))


class TestUnknownSymbols:
    """Hand-built trees with unknown names raise the matching exception."""

    def test_unknown_function(self) -> None:
        node = FunctionNode(name="sdf", operand=NumberNode(value=1))
        with pytest.raises(UnknownFunctionException) as exc_info:
            evaluate(node)
        assert exc_info.value.name == "sdf"
        assert exc_info.value.kind == ErrorKind.UNKNOWN_FUNCTION

    def test_unknown_function_from_source(self) -> None:
        with pytest.raises(UnknownFunctionException):
            ev("frobnicate(1)")

    def test_unknown_operator(self) -> None:
        node = ExpressionNode(operator="@", left=NumberNode(value=2), right=NumberNode(value=1))
        with pytest.raises(UnknownOperatorException, match="'@'") as exc_info:
            evaluate(node)
        assert exc_info.value.operator == "@"
        assert exc_info.value.kind == ErrorKind.UNKNOWN_OPERATOR

    def test_unknown_operator_deep_in_tree(self) -> None:
        node = FunctionNode(
            name="sin",
            operand=ExpressionNode(
                operator="%", left=NumberNode(value=5), right=NumberNode(value=3)
            ),
        )
        with pytest.raises(UnknownOperatorException):
            evaluate(node)


class TestCustomTables:
    """Alternate constant and function tables can be injected."""

    def test_custom_constant(self) -> None:
        assert evaluate(ConstantNode(name="tau"), constants={"tau": 2 * math.pi}) == 2 * math.pi

    def test_replacing_constants_drops_defaults(self) -> None:
        with pytest.raises(UnknownConstantException):
            evaluate(ConstantNode(name="pi"), constants={"tau": 2 * math.pi})

    def test_custom_function(self) -> None:
        node = parse("double(x)")
        assert evaluate(node, {"x": 4}, functions={"double": lambda v: v * 2}) == 8

    def test_numpy_ufunc_as_custom_function(self) -> None:
        assert evaluate(parse("ln(e)"), functions={"ln": np.log}) == pytest.approx(1)


class TestEvaluatorState:
    """Evaluation is pure and repeatable."""

    def test_idempotent(self, variables: dict[str, float]) -> None:
        tree = parse("sin(x)^2 + 3*y")
        snapshot = tree.model_copy(deep=True)
        first = evaluate(tree, variables)
        second = evaluate(tree, variables)
        assert first == second
        assert tree == snapshot

    def test_varying_bindings(self) -> None:
        tree = parse("x^2 + 1")
        assert [evaluate(tree, {"x": v}) for v in (0, 1, 2, 3)] == [1, 2, 5, 10]

    def test_bindings_are_not_modified(self, variables: dict[str, float]) -> None:
        before = dict(variables)
        evaluate(parse("x + y"), variables)
        assert variables == before

    def test_evaluator_bindings_are_read_only(self, variables: dict[str, float]) -> None:
        evaluator = Evaluator(variables)
        with pytest.raises(TypeError):
            evaluator.variables["x"] = 1.0  # type: ignore[index]

    def test_evaluator_copies_bindings(self) -> None:
        bindings = {"x": 1.0}
        evaluator = Evaluator(bindings)
        bindings["x"] = 2.0
        assert parse("x").accept(evaluator) == 1.0

    def test_evaluator_is_a_visitor(self) -> None:
        assert isinstance(Evaluator(), Visitor)

    def test_concurrent_evaluation_of_shared_tree(self) -> None:
        tree = parse("x * 2 + sin(x)")
        inputs = [float(i) for i in range(50)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda v: evaluate(tree, {"x": v}), inputs))
        assert results == pytest.approx([v * 2 + math.sin(v) for v in inputs])


def _deep_sum(depth: int) -> ExpressionNode:
    node: ExpressionNode = ExpressionNode(
        operator="+", left=NumberNode(value=1), right=NumberNode(value=1)
    )
    for _ in range(depth - 1):
        node = ExpressionNode(operator="+", left=node, right=NumberNode(value=1))
    return node


class TestDeepTrees:
    """Trees deeper than the interpreter stack fail with a library error."""

    def test_moderately_deep_tree(self) -> None:
        assert evaluate(_deep_sum(300)) == 301

    def test_too_deep_tree(self) -> None:
        with pytest.raises(ExpressionTooDeepException) as exc_info:
            evaluate(_deep_sum(5000))
        assert exc_info.value.kind == ErrorKind.TOO_DEEP

    def test_long_parsed_power_chain(self) -> None:
        tree = parse("^".join(["1"] * 600))
        with pytest.raises(ExpressionTooDeepException):
            evaluate(tree)
