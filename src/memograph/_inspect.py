"""Read-only introspection of live computation graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._node import Node, OperatorKind


@dataclass(frozen=True, slots=True)
class NodeDetail:
    """Summary of a single node for display."""

    label: str
    kind: OperatorKind
    cache: float | None
    operand_labels: tuple[str, ...]
    dependent_count: int

    @property
    def is_stale(self) -> bool:
        return self.cache is None


@dataclass(slots=True)
class TreeNode:
    """A node in a dependency tree for rendering."""

    node: Node
    children: list[TreeNode] = field(default_factory=list)


def dependency_graph(*roots: Node) -> dict[Node, tuple[Node, ...]]:
    """Map every node reachable from ``roots`` to its operands.

    Args:
        *roots: Nodes to start from, typically the outputs of interest.

    Returns:
        Adjacency mapping from each reachable node to its operands, in
        argument order. Keys follow depth-first discovery order from the
        first root. Parameters map to an empty tuple.

    """
    graph: dict[Node, tuple[Node, ...]] = {}
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        if node in graph:
            continue
        graph[node] = node.operands
        stack.extend(operand for operand in reversed(node.operands) if operand not in graph)

    return graph


def describe(node: Node) -> NodeDetail:
    """Summarize ``node`` without computing anything."""
    return NodeDetail(
        label=node.label,
        kind=node.kind,
        cache=node.cache,
        operand_labels=tuple(operand.label for operand in node.operands),
        dependent_count=len(node.dependents),
    )


def get_dependency_tree(
    node: Node,
    *,
    invert: bool = False,
    max_depth: int | None = None,
) -> TreeNode:
    """Build a dependency tree for visualization.

    A node reachable through several paths is expanded only the first time
    it is met, in depth-first order.

    Args:
        node: The root node of the tree.
        invert: If False, show what the node is computed from.
                If True, show the live nodes computed from it.
        max_depth: Maximum depth to traverse (None for unlimited).

    Returns:
        TreeNode representing the dependency tree.

    """

    def neighbors(current: Node, depth: int) -> Iterator[Node]:
        if max_depth is not None and depth >= max_depth:
            return iter(())
        return iter(current.dependents if invert else current.operands)

    root = TreeNode(node=node)
    visited = {node}
    stack = [(root, 0, neighbors(node, 0))]
    while stack:
        parent, depth, pending = stack[-1]
        for neighbor in pending:
            if neighbor not in visited:
                visited.add(neighbor)
                child = TreeNode(node=neighbor)
                parent.children.append(child)
                stack.append((child, depth + 1, neighbors(neighbor, depth + 1)))
                break
        else:
            stack.pop()

    return root
