"""Circular dependency detection, severity scoring and advice."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graph.algos import strongly_connected_components
from models.graph import SEVERITY_ORDER, CycleSeverity, DependencyCycle
from utils import short_name

if TYPE_CHECKING:
    from graph.builder import DependencyGraph

GENERIC_SUGGESTIONS: tuple[str, ...] = (
    "Extract shared code into a separate module that both can depend on.",
    "Use dependency injection to invert the dependency direction.",
    "Consider using interfaces/protocols to break the direct dependency.",
    "Evaluate if the circular dependency indicates a design issue that needs refactoring.",
)

GENERAL_TIPS: tuple[str, ...] = (
    "General tips for breaking cycles:",
    "- Extract shared code into a separate utility module",
    "- Use dependency injection to invert dependencies",
    "- Implement interfaces/protocols to decouple modules",
    "- Consider using an event bus for cross-module communication",
    "- Apply the Dependency Inversion Principle",
)


def affected_count(scc: list[str], graph: DependencyGraph) -> int:
    """Number of distinct modules outside the cycle that import into it."""
    members = set(scc)
    outside = {
        pred for node in scc for pred in graph.predecessors(node) if pred not in members
    }
    return len(outside)


def cycle_severity(length: int, affected: int) -> CycleSeverity:
    if length >= 5 or affected >= 10:
        return "critical"
    if length >= 4 or affected >= 5:
        return "high"
    if length >= 3 or affected >= 2:
        return "medium"
    return "low"


def weakest_edge(scc: list[str], graph: DependencyGraph) -> tuple[str, str] | None:
    """Lowest-weight edge with both endpoints in the cycle.

    Ties go to the edge found first when walking members in cycle order.
    """
    members = set(scc)
    best: tuple[str, str] | None = None
    best_weight = 0
    for node in scc:
        for successor in graph.successors(node):
            if successor == node or successor not in members:
                continue
            edge = graph.edge(node, successor)
            weight = edge.weight if edge is not None else 1
            if best is None or weight < best_weight:
                best = (node, successor)
                best_weight = weight
    return best


def cycle_suggestions(scc: list[str], graph: DependencyGraph) -> list[str]:
    suggestions: list[str] = []
    weakest = weakest_edge(scc, graph)
    if weakest is not None:
        source, target = weakest
        suggestions.append(
            f"Consider breaking the dependency from '{short_name(source)}' to "
            f"'{short_name(target)}' as it appears to be the weakest link."
        )
    suggestions.extend(GENERIC_SUGGESTIONS)
    return suggestions


def find_cycles(graph: DependencyGraph) -> list[DependencyCycle]:
    """Detect circular dependencies, most severe first.

    Every strongly connected component with two or more modules is one
    cycle. Sorting by severity is stable, so cycles of equal severity keep
    the order in which they were found.
    """
    cycles: list[DependencyCycle] = []
    for scc in strongly_connected_components(graph.adjacency()):
        chain = " -> ".join(short_name(node) for node in [*scc, scc[0]])
        cycles.append(
            DependencyCycle(
                nodes=scc,
                length=len(scc),
                severity=cycle_severity(len(scc), affected_count(scc, graph)),
                description=(
                    f"Circular dependency involving {len(scc)} modules: {chain}"
                ),
                suggestions=cycle_suggestions(scc, graph),
            )
        )
    cycles.sort(key=lambda cycle: SEVERITY_ORDER[cycle.severity])
    return cycles


def cycle_recommendations(cycles: list[DependencyCycle]) -> list[str]:
    """Project-level advice for a set of detected cycles."""
    if not cycles:
        return ["No circular dependencies detected."]

    recommendations: list[str] = []
    critical = sum(1 for cycle in cycles if cycle.severity == "critical")
    high = sum(1 for cycle in cycles if cycle.severity == "high")

    if critical:
        recommendations.append(
            f"URGENT: {critical} critical cycle(s) found. These should be "
            "addressed immediately as they can cause unpredictable behavior."
        )
    if high:
        recommendations.append(
            f"{high} high-severity cycle(s) need attention. "
            "Consider refactoring these modules."
        )
    if len(cycles) > 5:
        recommendations.append(
            "Multiple cycles detected. Consider a broader architectural review "
            "to identify design issues."
        )
    if any(cycle.length == 2 for cycle in cycles):
        recommendations.append(
            "Two-node cycles often indicate modules that should be merged or "
            "have a common dependency extracted."
        )
    if any(cycle.length >= 4 for cycle in cycles):
        recommendations.append(
            "Larger cycles (4+ modules) suggest a need for dependency injection "
            "or event-based communication."
        )
    recommendations.extend(GENERAL_TIPS)
    return recommendations


__all__ = [
    "GENERIC_SUGGESTIONS",
    "affected_count",
    "cycle_recommendations",
    "cycle_severity",
    "cycle_suggestions",
    "find_cycles",
    "weakest_edge",
]
