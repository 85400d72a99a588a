"""map_module_relationships: modules, grouping, coupling and cohesion."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from analysis.pipeline import extract_relationships, scan_project
from graph.builder import build_graph
from grouping.strategies import group_files
from metrics.coupling import (
    build_module_groups,
    compute_coupling_metrics,
    overall_cohesion,
)
from models.results import ModuleMapResult

if TYPE_CHECKING:
    from models.options import ModuleMapOptions
    from parse.extract import ParseCache
    from rules.config import DepgraphConfig

logger = structlog.get_logger(__name__)


def map_module_relationships(
    options: ModuleMapOptions,
    *,
    config: DepgraphConfig | None = None,
    cache: ParseCache | None = None,
) -> ModuleMapResult:
    """Group modules and score how tightly each group hangs together.

    Raises:
        InvalidInputError: If ``options.path`` is missing or not a directory.
        ConfigError: If ``depgraph.toml`` is invalid.
    """
    scan = scan_project(options, config=config, cache=cache)
    grouping = scan.config.grouping
    group_by = options.group_by or grouping.group_by
    depth = options.depth or grouping.depth

    if not scan.files:
        return ModuleMapResult(
            group_by=group_by, cohesion_score=0.0, diagnostics=scan.diagnostics
        )

    relationships, _dependencies = extract_relationships(scan)
    graph = build_graph(scan.files, relationships)
    groups = build_module_groups(
        group_files(
            scan.files,
            group_by,
            root=scan.root,
            depth=depth,
            layers_config=scan.config.layers,
        ),
        graph,
    )

    logger.info(
        "analysis.modules",
        group_by=group_by,
        groups=len(groups),
        relationships=len(relationships),
    )
    return ModuleMapResult(
        group_by=group_by,
        modules=scan.modules,
        relationships=relationships,
        coupling=compute_coupling_metrics(graph),
        cohesion_score=overall_cohesion(groups),
        groups=groups,
        diagnostics=scan.diagnostics,
    )


__all__ = ["map_module_relationships"]
