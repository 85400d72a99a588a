"""detect_circular_dependencies: strongly connected components as cycles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from analysis.pipeline import extract_relationships, scan_project
from graph.builder import build_graph
from graph.cycles import cycle_recommendations, find_cycles
from models.results import CircularDependencyResult, SeveritySummary

if TYPE_CHECKING:
    from models.graph import DependencyCycle
    from models.options import CycleOptions
    from parse.extract import ParseCache
    from rules.config import DepgraphConfig

logger = structlog.get_logger(__name__)

NO_FILES_RECOMMENDATION = "No files found to analyze."


def summarize_severity(cycles: list[DependencyCycle]) -> SeveritySummary:
    summary = SeveritySummary()
    for cycle in cycles:
        setattr(summary, cycle.severity, getattr(summary, cycle.severity) + 1)
    return summary


def detect_circular_dependencies(
    options: CycleOptions,
    *,
    config: DepgraphConfig | None = None,
    cache: ParseCache | None = None,
) -> CircularDependencyResult:
    """Find every circular import chain under a directory.

    Only the first ``max_cycles`` cycles (most severe first) are returned;
    the severity summary, affected files and recommendations always cover
    all of them.

    Raises:
        InvalidInputError: If ``options.path`` is missing or not a directory.
        ConfigError: If ``depgraph.toml`` is invalid.
    """
    scan = scan_project(options, config=config, cache=cache)
    if not scan.files:
        return CircularDependencyResult(
            has_cycles=False,
            total_cycles=0,
            recommendations=[NO_FILES_RECOMMENDATION],
            diagnostics=scan.diagnostics,
        )

    relationships, _dependencies = extract_relationships(scan)
    graph = build_graph(scan.files, relationships)
    cycles = find_cycles(graph)

    max_cycles = (
        options.max_cycles
        if options.max_cycles is not None
        else scan.config.cycles.max_cycles
    )

    affected: list[str] = []
    seen: set[str] = set()
    for cycle in cycles:
        for node in cycle.nodes:
            if node not in seen:
                seen.add(node)
                affected.append(node)

    logger.info("analysis.cycles", total=len(cycles), affected=len(affected))
    return CircularDependencyResult(
        has_cycles=bool(cycles),
        total_cycles=len(cycles),
        cycles=cycles[:max_cycles],
        summary=summarize_severity(cycles),
        affected_files=affected,
        recommendations=cycle_recommendations(cycles),
        diagnostics=scan.diagnostics,
    )


__all__ = [
    "NO_FILES_RECOMMENDATION",
    "detect_circular_dependencies",
    "summarize_severity",
]
