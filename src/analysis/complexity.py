"""analyze_complexity: per-function and per-file complexity with hotspots."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from analysis.pipeline import scan_project
from metrics.complexity import complexity_distribution, file_complexity
from metrics.hotspots import identify_hotspots
from models.results import ComplexityResult

if TYPE_CHECKING:
    from models.options import ComplexityOptions
    from parse.extract import ParseCache
    from rules.config import DepgraphConfig

logger = structlog.get_logger(__name__)


def analyze_complexity(
    options: ComplexityOptions,
    *,
    config: DepgraphConfig | None = None,
    cache: ParseCache | None = None,
) -> ComplexityResult:
    """Measure cyclomatic complexity of a file or every file in a directory.

    Files are reported most complex first. ``average_complexity`` is per
    file.

    Raises:
        InvalidInputError: If ``options.path`` does not exist.
        ConfigError: If ``depgraph.toml`` is invalid.
    """
    scan = scan_project(options, require_directory=False, config=config, cache=cache)
    policy = scan.config.complexity
    threshold = options.threshold if options.threshold is not None else policy.threshold

    files = [
        file_complexity(
            path,
            scan.extractions[path].functions,
            scan.extractions[path].lines_of_code,
        )
        for path in scan.files
    ]
    files.sort(key=lambda record: -record.cyclomatic_complexity)

    total = sum(record.cyclomatic_complexity for record in files)
    hotspots = identify_hotspots(files, threshold, policy)

    logger.info(
        "analysis.complexity",
        files=len(files),
        total=total,
        hotspots=len(hotspots),
    )
    return ComplexityResult(
        threshold=threshold,
        total_files=len(files),
        total_functions=sum(record.function_count for record in files),
        total_complexity=total,
        average_complexity=total / len(files) if files else 0.0,
        files=files,
        hotspots=hotspots,
        distribution=complexity_distribution(files, threshold),
        diagnostics=scan.diagnostics,
    )


__all__ = ["analyze_complexity"]
