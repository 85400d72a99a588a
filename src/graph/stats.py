"""Summary statistics for a dependency graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

from models.graph import GraphStats

if TYPE_CHECKING:
    from graph.builder import DependencyGraph


def compute_graph_stats(graph: DependencyGraph) -> GraphStats:
    """Count nodes and edges and find hubs, entry points and leaves.

    Connections are distinct neighbors (in plus out), so
    ``average_dependencies`` is the mean connection count halved, i.e.
    edges per node.
    """
    nodes = graph.nodes()
    if not nodes:
        return GraphStats()

    max_connections = 0
    most_connected: list[str] = []
    total_connections = 0
    for node in nodes:
        connections = graph.in_degree(node) + graph.out_degree(node)
        total_connections += connections
        if connections > max_connections:
            max_connections = connections
            most_connected = [node]
        elif connections == max_connections:
            most_connected.append(node)

    return GraphStats(
        total_nodes=len(nodes),
        total_edges=graph.number_of_edges(),
        average_dependencies=total_connections / len(nodes) / 2,
        max_dependencies=max_connections,
        most_connected=most_connected,
        entry_points=[node for node in nodes if graph.in_degree(node) == 0],
        leaf_nodes=[node for node in nodes if graph.out_degree(node) == 0],
    )


__all__ = ["compute_graph_stats"]
