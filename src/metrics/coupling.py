"""Coupling, cohesion and package-distance metrics over the module graph."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from models.metrics import CouplingMetrics, ModuleGroup

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from graph.builder import DependencyGraph

_ABSTRACT_RE = re.compile(r"\b(interface|abstract|types?|contracts?)\b", re.I)


def abstractness(path: str) -> float:
    """Heuristic abstractness: 1.0 for interface/type/contract modules, else 0."""
    return 1.0 if _ABSTRACT_RE.search(path) else 0.0


def module_coupling(graph: DependencyGraph, node: str) -> CouplingMetrics:
    afferent = graph.in_degree(node)
    efferent = graph.out_degree(node)
    total = afferent + efferent
    instability = efferent / total if total else 0.0
    abstract = abstractness(node)
    return CouplingMetrics(
        afferent=afferent,
        efferent=efferent,
        instability=instability,
        abstractness=abstract,
        distance=abs(abstract + instability - 1),
    )


def compute_coupling_metrics(
    graph: DependencyGraph, nodes: Iterable[str] | None = None
) -> dict[str, CouplingMetrics]:
    """Afferent/efferent coupling, instability and distance per module.

    Args:
        graph: The module graph (edges already collapsed).
        nodes: Restrict the report to these nodes; defaults to every node.
    """
    targets = graph.nodes() if nodes is None else list(nodes)
    return {node: module_coupling(graph, node) for node in targets}


def group_cohesion(members: list[str], graph: DependencyGraph) -> float:
    """Internal edges over the n(n-1) possible ordered pairs; 1.0 for n <= 1."""
    n = len(members)
    if n <= 1:
        return 1.0
    member_set = set(members)
    internal = sum(
        1
        for source, target, _data in graph.edges()
        if source != target and source in member_set and target in member_set
    )
    return min(1.0, internal / (n * (n - 1)))


def group_coupling(
    members: list[str], all_nodes: list[str], graph: DependencyGraph
) -> float:
    """Edges crossing the group boundary over (n * m + 1), clamped to 1.0.

    ``m`` is the number of nodes outside the group. A single-module group,
    or a group holding every node, has coupling 0.
    """
    member_set = set(members)
    outside = sum(1 for node in all_nodes if node not in member_set)
    if len(members) <= 1 or outside == 0:
        return 0.0
    crossing = sum(
        1
        for source, target, _data in graph.edges()
        if (source in member_set) != (target in member_set)
    )
    return min(1.0, crossing / (len(members) * outside + 1))


def build_module_groups(
    groups: Mapping[str, list[str]], graph: DependencyGraph
) -> list[ModuleGroup]:
    all_nodes = [node for node in graph.nodes() if not graph.node_attrs(node)["external"]]
    return [
        ModuleGroup(
            name=name,
            modules=members,
            cohesion=group_cohesion(members, graph),
            coupling=group_coupling(members, all_nodes, graph),
        )
        for name, members in groups.items()
    ]


def overall_cohesion(groups: list[ModuleGroup]) -> float:
    """Size-weighted mean cohesion across groups; 0.0 when there are none."""
    total = sum(len(group.modules) for group in groups)
    if total == 0:
        return 0.0
    weighted = sum(group.cohesion * len(group.modules) for group in groups)
    return weighted / total


__all__ = [
    "abstractness",
    "build_module_groups",
    "compute_coupling_metrics",
    "group_cohesion",
    "group_coupling",
    "module_coupling",
    "overall_cohesion",
]
