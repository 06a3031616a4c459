"""Tests for the node model and the factory functions."""

import math

import pytest

import memograph as mg
from memograph import OperatorKind


class TestCreateInput:
    """Tests for create_input."""

    def test_parameter_has_no_operands(self) -> None:
        x = mg.create_input("x")
        assert x.kind == OperatorKind.PARAMETER
        assert x.is_parameter
        assert x.operands == ()
        assert x.label == "x"

    def test_parameter_starts_unset(self) -> None:
        x = mg.create_input("x")
        assert x.cache is None
        assert not x.is_cached

    def test_each_call_creates_a_distinct_node(self) -> None:
        a = mg.create_input("x")
        b = mg.create_input("x")
        assert a is not b
        assert a != b


class TestOperatorFactories:
    """Tests for add, mul, pow and sin."""

    def test_add_wires_operands_in_order(self) -> None:
        x = mg.create_input("x")
        y = mg.create_input("y")
        node = mg.add(x, y)
        assert node.kind == OperatorKind.BINARY
        assert node.operands == (x, y)
        assert node.label == "add"

    def test_mul_is_binary(self) -> None:
        x = mg.create_input("x")
        y = mg.create_input("y")
        node = mg.mul(x, y)
        assert node.kind == OperatorKind.BINARY
        assert node.label == "mul"

    def test_pow_binds_constant(self) -> None:
        x = mg.create_input("x")
        node = mg.pow(x, 3)
        assert node.kind == OperatorKind.BINARY_WITH_CONSTANT
        assert node.operands == (x,)
        assert isinstance(node.operator, mg.BinaryOperatorWithConstant)
        assert node.operator.constant == 3.0
        assert isinstance(node.operator.constant, float)

    def test_sin_is_unary(self) -> None:
        x = mg.create_input("x")
        node = mg.sin(x)
        assert node.kind == OperatorKind.UNARY
        assert node.operands == (x,)
        assert node.operator == mg.UnaryOperator(math.sin)

    def test_new_node_is_not_cached(self) -> None:
        x = mg.create_input("x")
        x.set(1.0)
        assert mg.sin(x).cache is None

    def test_generic_constructors_use_given_label(self) -> None:
        x = mg.create_input("x")
        y = mg.create_input("y")
        assert mg.unary_op(abs, x, label="abs").label == "abs"
        assert mg.binary_op(max, x, y, label="max").label == "max"
        assert mg.binary_op_with_constant(min, x, 0.0, label="clip").label == "clip"

    def test_operator_arity(self) -> None:
        assert mg.Parameter.arity == 0
        assert mg.UnaryOperator.arity == 1
        assert mg.BinaryOperator.arity == 2
        assert mg.BinaryOperatorWithConstant.arity == 1


class TestDependents:
    """Tests for dependent registration at construction time."""

    def test_operands_gain_new_node_as_dependent(self) -> None:
        x = mg.create_input("x")
        y = mg.create_input("y")
        node = mg.add(x, y)
        assert x.dependents == [node]
        assert y.dependents == [node]

    def test_dependents_keep_registration_order(self) -> None:
        x = mg.create_input("x")
        first = mg.sin(x)
        second = mg.pow(x, 2.0)
        third = mg.add(x, first)
        assert x.dependents == [first, second, third]
        assert first.dependents == [third]

    def test_shared_operand_registers_once(self) -> None:
        x = mg.create_input("x")
        node = mg.add(x, x)
        assert node.operands == (x, x)
        assert x.dependents == [node]

    def test_new_node_has_no_dependents(self) -> None:
        x = mg.create_input("x")
        assert mg.sin(x).dependents == []


class TestDirectConstruction:
    """Tests for building nodes with the Node constructor."""

    def test_constructor_registers_dependents(self) -> None:
        x = mg.create_input("x")
        node = mg.Node("n", mg.UnaryOperator(math.sin), (x,))

        assert x.dependents == [node]

    def test_set_invalidates_directly_constructed_node(self) -> None:
        x = mg.create_input("x")
        node = mg.Node("n", mg.UnaryOperator(math.sin), (x,))
        x.set(0.0)
        assert node.compute() == 0.0

        x.set(1.0)

        assert node.cache is None
        assert node.compute() == pytest.approx(math.sin(1.0))

    def test_operand_count_must_match_arity(self) -> None:
        x = mg.create_input("x")
        with pytest.raises(ValueError, match=r"takes 2 operand\(s\), got 1"):
            mg.Node("n", mg.BinaryOperator(math.pow), (x,))

    @pytest.mark.parametrize("attribute", ["label", "operator", "operands"])
    def test_structure_is_read_only(self, attribute: str) -> None:
        x = mg.create_input("x")
        node = mg.sin(x)
        with pytest.raises(AttributeError):
            setattr(node, attribute, getattr(x, attribute))
        assert node.operands == (x,)
        assert node.label == "sin"

    def test_cache_is_writable(self) -> None:
        x = mg.create_input("x")
        x.cache = 3.0
        assert x.is_cached


class TestOperatorOverloads:
    """Tests for arithmetic operators on nodes."""

    def test_add_operator(self) -> None:
        x = mg.create_input("x")
        y = mg.create_input("y")
        node = x + y
        assert node.label == "add"
        assert node.operands == (x, y)

    def test_mul_operator(self) -> None:
        x = mg.create_input("x")
        y = mg.create_input("y")
        node = x * y
        assert node.label == "mul"

    def test_pow_operator(self) -> None:
        x = mg.create_input("x")
        node = x**2
        assert node.label == "pow"
        assert node.operator.constant == 2.0

    def test_expression_evaluates(self) -> None:
        x = mg.create_input("x")
        y = mg.create_input("y")
        node = (x + y) * x**2
        x.set(3.0)
        y.set(1.0)
        assert node.compute() == pytest.approx(36.0)

    def test_add_with_number_is_rejected(self) -> None:
        x = mg.create_input("x")
        with pytest.raises(TypeError):
            x + 1.0  # noqa: B018

    def test_pow_with_node_exponent_is_rejected(self) -> None:
        x = mg.create_input("x")
        with pytest.raises(TypeError):
            x ** mg.create_input("y")  # noqa: B018


class TestRepr:
    """Tests for the node repr."""

    def test_repr_shows_label_kind_and_operands(self) -> None:
        x = mg.create_input("x")
        node = mg.add(x, x)
        assert repr(node) == "Node('add', kind=binary, operands=[x, x], cache=None)"

    def test_repr_shows_cache(self) -> None:
        x = mg.create_input("x")
        x.set(2.0)
        assert repr(x) == "Node('x', kind=parameter, operands=[], cache=2.0)"
