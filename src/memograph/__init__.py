"""Demand-driven scalar computation graphs with memoization and invalidation."""

__all__ = [
    "BinaryOperator",
    "BinaryOperatorWithConstant",
    "ConfigError",
    "EngineConfig",
    "MemographError",
    "Node",
    "NodeDetail",
    "NotAParameterError",
    "OperatorKind",
    "Parameter",
    "TreeNode",
    "UnaryOperator",
    "UnsetParameterError",
    "active_config",
    "add",
    "binary_op",
    "binary_op_with_constant",
    "compute",
    "create_input",
    "dependency_graph",
    "describe",
    "find_pyproject_toml",
    "get_config",
    "get_dependency_tree",
    "invalidate",
    "load_config",
    "mul",
    "pow",
    "render_node_table",
    "render_tree",
    "set_value",
    "sin",
    "unary_op",
]

from ._config import EngineConfig, active_config, find_pyproject_toml, get_config, load_config
from ._engine import compute, invalidate, set_value
from ._errors import ConfigError, MemographError, NotAParameterError, UnsetParameterError
from ._factory import add, binary_op, binary_op_with_constant, create_input, mul, pow, sin, unary_op  # noqa: A004
from ._inspect import NodeDetail, TreeNode, dependency_graph, describe, get_dependency_tree
from ._node import BinaryOperator, BinaryOperatorWithConstant, Node, OperatorKind, Parameter, UnaryOperator
from ._render import render_node_table, render_tree
