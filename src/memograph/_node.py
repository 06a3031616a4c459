"""Node model for demand-driven computation graphs."""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from enum import StrEnum, auto
from numbers import Real
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable


class OperatorKind(StrEnum):
    """The kind of operator a node applies."""

    PARAMETER = auto()  # Leaf whose value is supplied externally
    UNARY = auto()
    BINARY = auto()
    BINARY_WITH_CONSTANT = auto()  # One operand plus a constant fixed at construction


@dataclass(frozen=True, slots=True)
class Parameter:
    """Leaf operator: the node holds an externally supplied value."""

    kind: ClassVar[OperatorKind] = OperatorKind.PARAMETER
    arity: ClassVar[int] = 0


@dataclass(frozen=True, slots=True)
class UnaryOperator:
    """Operator applying ``fn`` to a single operand."""

    kind: ClassVar[OperatorKind] = OperatorKind.UNARY
    arity: ClassVar[int] = 1

    fn: Callable[[float], float]


@dataclass(frozen=True, slots=True)
class BinaryOperator:
    """Operator applying ``fn`` to two operands, left first."""

    kind: ClassVar[OperatorKind] = OperatorKind.BINARY
    arity: ClassVar[int] = 2

    fn: Callable[[float, float], float]


@dataclass(frozen=True, slots=True)
class BinaryOperatorWithConstant:
    """Operator applying ``fn(operand, constant)`` to a single operand."""

    kind: ClassVar[OperatorKind] = OperatorKind.BINARY_WITH_CONSTANT
    arity: ClassVar[int] = 1

    fn: Callable[[float, float], float]
    constant: float


Operator = Parameter | UnaryOperator | BinaryOperator | BinaryOperatorWithConstant


class Node:
    """A node in the computation graph.

    Nodes are usually created by the factory functions (``create_input``,
    ``add``, ...). Constructing one directly registers it as a dependent of
    each of its operands, exactly as the factories do. Nodes are compared and
    hashed by identity, so the same node can be shared as an operand of several
    other nodes.

    Operands are held by strong references: a node keeps everything it is
    computed from alive. Dependents are held by weak references and never
    extend the lifetime of the node that uses this one; a reference is dropped
    from the list as soon as its dependent is reclaimed.

    ``label``, ``operator`` and ``operands`` are fixed at construction. Only
    ``cache`` changes afterwards.

    Attributes:
        label: Diagnostic name of the node.
        operator: The operator variant applied by this node.
        operands: Nodes this node is computed from, in argument order.
        cache: The memoized value, or None when the value must be recomputed.

    """

    __slots__ = ("__weakref__", "_dependents", "_label", "_operands", "_operator", "cache")

    def __init__(self, label: str, operator: Operator, operands: tuple[Node, ...] = ()) -> None:
        operands = tuple(operands)
        if len(operands) != operator.arity:
            msg = f"{operator.kind} node '{label}' takes {operator.arity} operand(s), got {len(operands)}"
            raise ValueError(msg)

        self._label = label
        self._operator = operator
        self._operands = operands
        self._dependents: list[weakref.ref[Node]] = []
        self.cache: float | None = None

        # A node used twice as an operand (e.g. add(x, x)) is registered once
        for operand in dict.fromkeys(operands):
            operand._add_dependent(self)  # noqa: SLF001

    @property
    def label(self) -> str:
        return self._label

    @property
    def operator(self) -> Operator:
        return self._operator

    @property
    def operands(self) -> tuple[Node, ...]:
        return self._operands

    @property
    def kind(self) -> OperatorKind:
        """The kind of operator applied by this node."""
        return self._operator.kind

    @property
    def is_parameter(self) -> bool:
        return isinstance(self._operator, Parameter)

    @property
    def is_cached(self) -> bool:
        return self.cache is not None

    @property
    def dependents(self) -> list[Node]:
        """Live nodes that use this node as an operand, in registration order."""
        return [node for ref in self._dependents if (node := ref()) is not None]

    def _add_dependent(self, node: Node) -> None:
        self._dependents.append(weakref.ref(node, self._dependents.remove))

    def compute(self) -> float:
        """Return the value of this node, evaluating stale operands on demand."""
        from ._engine import compute

        return compute(self)

    def set(self, value: float) -> None:
        """Assign a value to this parameter and invalidate everything downstream."""
        from ._engine import set_value

        set_value(self, value)

    def invalidate(self) -> None:
        """Clear the cached value of this node and of all its dependents."""
        from ._engine import invalidate

        invalidate(self)

    def __add__(self, other: object) -> Node:
        if not isinstance(other, Node):
            return NotImplemented
        from ._factory import add

        return add(self, other)

    def __mul__(self, other: object) -> Node:
        if not isinstance(other, Node):
            return NotImplemented
        from ._factory import mul

        return mul(self, other)

    def __pow__(self, exponent: object) -> Node:
        if isinstance(exponent, bool) or not isinstance(exponent, Real):
            return NotImplemented
        from ._factory import pow  # noqa: A004

        return pow(self, float(exponent))

    def __repr__(self) -> str:
        operands = ", ".join(operand.label for operand in self.operands)
        return f"Node({self.label!r}, kind={self.kind}, operands=[{operands}], cache={self.cache!r})"
