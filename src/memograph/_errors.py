"""Exceptions raised by memograph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._node import Node


class MemographError(Exception):
    """Base class for memograph errors."""


class UnsetParameterError(MemographError):
    """Raised when evaluation reaches a parameter that has no value yet."""

    def __init__(self, node: Node) -> None:
        self.node = node
        self.label = node.label
        super().__init__(f"Parameter '{node.label}' must be set before it is computed")


class NotAParameterError(MemographError, TypeError):
    """Raised when a value is assigned to a node that is not a parameter."""

    def __init__(self, node: Node) -> None:
        self.node = node
        super().__init__(f"Cannot set value of '{node.label}': it is a {node.kind} node, not a parameter")


class ConfigError(MemographError):
    """Error in memograph configuration."""
