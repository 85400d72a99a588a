"""generate_dependency_graph: the module graph in Mermaid, DOT or JSON."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from analysis.pipeline import extract_relationships, scan_project
from graph.builder import build_graph
from graph.cycles import find_cycles
from graph.stats import compute_graph_stats
from models.results import DependencyGraphResult
from render import render_graph

if TYPE_CHECKING:
    from models.options import GraphOptions
    from parse.extract import ParseCache
    from rules.config import DepgraphConfig

logger = structlog.get_logger(__name__)

EMPTY_MERMAID = "graph TB\n  empty[No files found]"


def generate_dependency_graph(
    options: GraphOptions,
    *,
    config: DepgraphConfig | None = None,
    cache: ParseCache | None = None,
) -> DependencyGraphResult:
    """Build the dependency graph of a file or directory and serialize it.

    ``options.depth`` overrides the configured maximum scan depth. External
    and unresolved targets become extra nodes only with
    ``options.include_external``.

    Raises:
        InvalidInputError: If ``options.path`` does not exist.
        ConfigError: If ``depgraph.toml`` is invalid.
    """
    scan = scan_project(
        options,
        require_directory=False,
        config=config,
        cache=cache,
        max_depth=options.depth,
    )
    relationships, _dependencies = extract_relationships(
        scan, include_external=options.include_external
    )
    graph = build_graph(
        scan.files, relationships, include_external=options.include_external
    )
    cycles = find_cycles(graph)

    if not scan.files and options.format == "mermaid":
        rendered = EMPTY_MERMAID
    else:
        rendered = render_graph(graph, options.format, cycles, scan.config.graph)

    logger.info(
        "analysis.graph",
        nodes=graph.number_of_nodes(),
        edges=graph.number_of_edges(),
        cycles=len(cycles),
        format=options.format,
    )
    return DependencyGraphResult(
        graph=rendered,
        format=options.format,
        language=scan.language.value,
        stats=compute_graph_stats(graph),
        file_count=len(scan.files),
        has_cycles=bool(cycles),
        cycle_count=len(cycles),
        diagnostics=scan.diagnostics,
    )


__all__ = ["EMPTY_MERMAID", "generate_dependency_graph"]
