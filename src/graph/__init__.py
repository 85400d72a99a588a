"""Module graph construction and analysis."""

from graph.algos import (
    find_all_paths,
    has_cycle,
    is_dag,
    node_depth,
    reverse_dependencies,
    strongly_connected_components,
    topological_order,
    transitive_dependencies,
)
from graph.builder import DependencyGraph, EdgeData, build_graph
from graph.cycles import cycle_recommendations, find_cycles
from graph.stats import compute_graph_stats

__all__ = [
    "DependencyGraph",
    "EdgeData",
    "build_graph",
    "compute_graph_stats",
    "cycle_recommendations",
    "find_all_paths",
    "find_cycles",
    "has_cycle",
    "is_dag",
    "node_depth",
    "reverse_dependencies",
    "strongly_connected_components",
    "topological_order",
    "transitive_dependencies",
]
