"""get_architecture_overview: layers, entry points, externals and style."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from analysis.pipeline import extract_relationships, scan_project
from graph.builder import build_graph
from grouping.architecture import (
    STYLE_EMPTY,
    assign_layer_dependencies,
    determine_architecture_style,
    find_entry_points,
    identify_external_dependencies,
    identify_layers,
)
from models.results import ArchitectureOverviewResult, OverviewSummary
from render.mermaid import render_architecture_diagram

if TYPE_CHECKING:
    from models.options import OverviewOptions
    from parse.extract import ParseCache
    from rules.config import DepgraphConfig

logger = structlog.get_logger(__name__)


def get_architecture_overview(
    options: OverviewOptions,
    *,
    config: DepgraphConfig | None = None,
    cache: ParseCache | None = None,
) -> ArchitectureOverviewResult:
    """Describe a project's layers and how they depend on each other.

    Layer ``depends_on`` lists are derived from the file-level import graph,
    so a layer only depends on another when some file in it imports a file
    in the other.

    Raises:
        InvalidInputError: If ``options.path`` is missing or not a directory.
        ConfigError: If ``depgraph.toml`` is invalid.
    """
    scan = scan_project(options, config=config, cache=cache)
    if not scan.files:
        return ArchitectureOverviewResult(
            architecture_style=STYLE_EMPTY,
            diagram=render_architecture_diagram([], []),
            diagnostics=scan.diagnostics,
        )

    relationships, dependencies = extract_relationships(scan)
    graph = build_graph(scan.files, relationships)

    layers = identify_layers(scan.files, scan.config.layers)
    assign_layer_dependencies(layers, graph)
    externals = identify_external_dependencies(dependencies)

    logger.info(
        "analysis.overview",
        layers=len(layers),
        external_dependencies=len(externals),
    )
    return ArchitectureOverviewResult(
        layers=layers,
        entry_points=find_entry_points(scan.files),
        external_dependencies=externals,
        architecture_style=determine_architecture_style(layers, scan.files),
        diagram=render_architecture_diagram(layers, externals),
        summary=OverviewSummary(
            total_files=len(scan.files),
            total_dependencies=sum(entry.usage_count for entry in externals),
            layer_count=len(layers),
            external_dependency_count=len(externals),
        ),
        diagnostics=scan.diagnostics,
    )


__all__ = ["get_architecture_overview"]
