"""Graphviz DOT serializer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from render._common import cycle_membership, is_cycle_edge
from utils import short_name

if TYPE_CHECKING:
    from graph.builder import DependencyGraph
    from models.graph import DependencyCycle


def _quote(label: str) -> str:
    return label.replace("\\", "\\\\").replace('"', '\\"')


def render_dot(
    graph: DependencyGraph,
    cycles: list[DependencyCycle] | None = None,
    *,
    rankdir: str = "TB",
    max_nodes: int = 100,
    show_weights: bool = False,
) -> str:
    """Render the graph as a ``digraph``; cycle members and edges are red."""
    nodes = graph.nodes()
    if not nodes:
        return 'digraph G {\n  empty [label="No dependencies found"]\n}'

    shown = nodes[:max_nodes]
    node_ids = {node: f"n{index}" for index, node in enumerate(shown)}
    membership = cycle_membership(cycles or [])

    lines = [
        "digraph G {",
        f"  rankdir={rankdir};",
        "  node [shape=box, style=rounded];",
    ]
    for node in shown:
        label = _quote(short_name(node))
        if node in membership:
            lines.append(f'  {node_ids[node]} [label="{label}", color=red, penwidth=2];')
        else:
            lines.append(f'  {node_ids[node]} [label="{label}"];')

    for source, target, data in graph.edges():
        if source not in node_ids or target not in node_ids:
            continue
        attrs: list[str] = []
        if show_weights:
            attrs.append(f'label="{data.weight}"')
        if is_cycle_edge(membership, source, target):
            attrs.append("color=red")
        suffix = f" [{', '.join(attrs)}]" if attrs else ""
        lines.append(f"  {node_ids[source]} -> {node_ids[target]}{suffix};")

    lines.append("}")
    return "\n".join(lines)


__all__ = ["render_dot"]
