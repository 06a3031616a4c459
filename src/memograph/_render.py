"""Rich rendering of computation graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from ._inspect import describe, get_dependency_tree
from ._node import OperatorKind

if TYPE_CHECKING:
    from rich.console import Console

    from ._inspect import TreeNode
    from ._node import Node


def _get_kind_style(kind: OperatorKind) -> str:
    match kind:
        case OperatorKind.PARAMETER:
            return "blue"
        case OperatorKind.UNARY:
            return "green"
        case OperatorKind.BINARY:
            return "cyan"
        case OperatorKind.BINARY_WITH_CONSTANT:
            return "magenta"


def _format_value(cache: float | None) -> str:
    if cache is None:
        return "[yellow]stale[/yellow]"
    return f"{cache:g}"


def _format_node(node: Node) -> str:
    style = _get_kind_style(node.kind)
    return f"[bold]{escape(node.label)}[/bold] [{style}]{node.kind}[/{style}] = {_format_value(node.cache)}"


def render_node_table(nodes: list[Node], console: Console) -> None:
    """Render nodes as a Rich table.

    Args:
        nodes: Nodes to render, in display order.
        console: Rich Console to output to.

    """
    if not nodes:
        console.print("[dim]No nodes to show[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Label", style="bold")
    table.add_column("Kind")
    table.add_column("Operands", style="dim")
    table.add_column("Dependents", justify="right")
    table.add_column("Value", justify="right")

    for node in nodes:
        detail = describe(node)
        style = _get_kind_style(detail.kind)
        table.add_row(
            escape(detail.label),
            f"[{style}]{detail.kind.upper()}[/{style}]",
            escape(", ".join(detail.operand_labels)),
            str(detail.dependent_count),
            _format_value(detail.cache),
        )

    console.print(table)


def render_tree(
    node: Node,
    console: Console,
    *,
    invert: bool = False,
    max_depth: int | None = None,
) -> None:
    """Render the operands of ``node`` (or its dependents) as a Rich tree.

    Args:
        node: Root of the tree.
        console: Rich Console to output to.
        invert: Show the nodes computed from ``node`` instead of its operands.
        max_depth: Maximum depth to render (None for unlimited).

    """
    tree_node = get_dependency_tree(node, invert=invert, max_depth=max_depth)
    console.print(_build_rich_tree(tree_node))


def _build_rich_tree(tree_node: TreeNode) -> Tree:
    rich_tree = Tree(_format_node(tree_node.node))
    stack = [(rich_tree, tree_node)]
    while stack:
        parent, current = stack.pop()
        for child in current.children:
            stack.append((parent.add(_format_node(child.node)), child))
    return rich_tree
