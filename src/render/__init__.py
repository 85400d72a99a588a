"""Graph serializers (Mermaid, DOT, JSON)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from render.dot import render_dot
from render.json_graph import graph_payload, render_json
from render.mermaid import render_architecture_diagram, render_mermaid

if TYPE_CHECKING:
    from graph.builder import DependencyGraph
    from models.graph import DependencyCycle
    from models.options import OutputFormat
    from rules.config import GraphConfig


def render_graph(
    graph: DependencyGraph,
    output_format: OutputFormat,
    cycles: list[DependencyCycle],
    graph_config: GraphConfig,
) -> str:
    """Serialize ``graph`` in the requested format."""
    if output_format == "json":
        return render_json(graph)
    if output_format == "dot":
        return render_dot(
            graph,
            cycles,
            rankdir=graph_config.direction,
            max_nodes=graph_config.max_nodes,
            show_weights=graph_config.show_weights,
        )
    return render_mermaid(
        graph,
        cycles,
        direction=graph_config.direction,
        max_nodes=graph_config.max_nodes,
        show_weights=graph_config.show_weights,
    )


__all__ = [
    "graph_payload",
    "render_architecture_diagram",
    "render_dot",
    "render_graph",
    "render_json",
    "render_mermaid",
]
