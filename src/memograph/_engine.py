"""Demand-driven evaluation, invalidation and mutation of computation graphs.

Evaluation walks operand edges and memoizes every result on the node it
belongs to. Assigning a parameter walks dependent edges the other way and
clears every cache downstream, so the next evaluation recomputes exactly the
stale part of the graph.
"""

from __future__ import annotations

import logging

from ._config import active_config
from ._errors import NotAParameterError, UnsetParameterError
from ._node import BinaryOperator, BinaryOperatorWithConstant, Node, Parameter, UnaryOperator

logger = logging.getLogger(__name__)


def _apply(node: Node) -> float:
    """Apply the operator of ``node`` to the cached values of its operands."""
    values = [operand.cache for operand in node.operands]
    match node.operator:
        case UnaryOperator(fn):
            return fn(values[0])
        case BinaryOperator(fn):
            return fn(values[0], values[1])
        case BinaryOperatorWithConstant(fn, constant):
            return fn(values[0], constant)
        case Parameter():
            # Parameters are never applied; an unset one is reported before this point
            raise UnsetParameterError(node)


def compute(node: Node) -> float:
    """Return the value of ``node``, computing stale nodes on demand.

    A cached value is returned immediately. Otherwise the operands are
    evaluated depth-first, left operand first, and every computed value is
    stored on its node. A node shared by several operands is computed once.

    Args:
        node: The node to evaluate.

    Returns:
        The value of the node.

    Raises:
        UnsetParameterError: If evaluation reaches a parameter with no value.
            Nodes fully computed before the failure keep their values.

    """
    if node.cache is not None:
        logger.debug("Cache hit for '%s'", node.label)
        return node.cache

    # Each entry is (node, operands_pushed)
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, operands_pushed = stack.pop()
        if current.cache is not None:
            continue
        if current.is_parameter:
            raise UnsetParameterError(current)
        if not operands_pushed:
            stack.append((current, True))
            stack.extend((operand, False) for operand in reversed(current.operands) if operand.cache is None)
            continue

        current.cache = _apply(current)
        logger.debug("Computed '%s' = %r", current.label, current.cache)

    return node.cache


def invalidate(node: Node) -> None:
    """Clear the cached value of ``node`` and of every node downstream of it.

    Dependents are reached through weak references; those already reclaimed
    are skipped.

    Args:
        node: The node whose value is no longer valid.

    """
    visited: set[Node] | None = set() if active_config().track_visited else None
    cleared = 0

    stack = [node]
    while stack:
        current = stack.pop()
        if visited is not None:
            if current in visited:
                continue
            visited.add(current)
        current.cache = None
        cleared += 1
        # Reversed so the first registered dependent is cleared first
        stack.extend(reversed(current.dependents))

    logger.debug("Invalidated '%s' (%d node visit(s))", node.label, cleared)


def set_value(node: Node, value: float) -> None:
    """Assign ``value`` to the parameter ``node``.

    The node and everything downstream of it are invalidated first, so the
    next ``compute`` on any dependent uses the new value.

    Args:
        node: A parameter node.
        value: The new value.

    Raises:
        NotAParameterError: If ``node`` is not a parameter and the active
            config has ``strict_set`` enabled. Otherwise the call is ignored.

    """
    if not node.is_parameter:
        if active_config().strict_set:
            raise NotAParameterError(node)
        logger.warning("Ignoring value assigned to non-parameter node '%s'", node.label)
        return

    invalidate(node)
    node.cache = float(value)
    logger.debug("Set '%s' = %r", node.label, node.cache)
