"""Factory functions that build nodes."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from ._node import BinaryOperator, BinaryOperatorWithConstant, Node, Operator, Parameter, UnaryOperator

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def _new_node(label: str, operator: Operator, operands: tuple[Node, ...]) -> Node:
    node = Node(label, operator, operands)
    logger.debug("Created %s node '%s' with %d operand(s)", operator.kind, label, len(operands))
    return node


def create_input(label: str) -> Node:
    """Create a parameter node with no value.

    The value must be assigned with ``set_value`` (or ``Node.set``) before any
    node depending on it is computed.
    """
    return _new_node(label, Parameter(), ())


def unary_op(fn: Callable[[float], float], operand: Node, *, label: str) -> Node:
    """Create a node computing ``fn(operand)``."""
    return _new_node(label, UnaryOperator(fn), (operand,))


def binary_op(fn: Callable[[float, float], float], left: Node, right: Node, *, label: str) -> Node:
    """Create a node computing ``fn(left, right)``."""
    return _new_node(label, BinaryOperator(fn), (left, right))


def binary_op_with_constant(
    fn: Callable[[float, float], float],
    operand: Node,
    constant: float,
    *,
    label: str,
) -> Node:
    """Create a node computing ``fn(operand, constant)``.

    Args:
        fn: Function applied to the operand value and the constant.
        operand: The node supplying the first argument.
        constant: Second argument, fixed for the lifetime of the node.
        label: Diagnostic name of the node.

    Returns:
        The new node.

    """
    return _new_node(label, BinaryOperatorWithConstant(fn, float(constant)), (operand,))


def _add(x: float, y: float) -> float:
    return x + y


def _mul(x: float, y: float) -> float:
    return x * y


def add(a: Node, b: Node) -> Node:
    """Create a node computing ``a + b``."""
    return binary_op(_add, a, b, label="add")


def mul(a: Node, b: Node) -> Node:
    """Create a node computing ``a * b``."""
    return binary_op(_mul, a, b, label="mul")


def pow(a: Node, exponent: float) -> Node:  # noqa: A001
    """Create a node computing ``a`` raised to a fixed real ``exponent``.

    Uses ``math.pow``, so a negative base with a non-integral exponent raises
    ``ValueError`` when the node is computed.
    """
    return binary_op_with_constant(math.pow, a, exponent, label="pow")


def sin(a: Node) -> Node:
    """Create a node computing the sine of ``a`` (radians)."""
    return unary_op(math.sin, a, label="sin")
