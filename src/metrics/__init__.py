"""Coupling, cohesion and complexity metrics."""

from metrics.complexity import (
    complexity_distribution,
    file_complexity,
    maintainability_index,
)
from metrics.coupling import (
    build_module_groups,
    compute_coupling_metrics,
    group_cohesion,
    group_coupling,
    overall_cohesion,
)
from metrics.hotspots import identify_hotspots

__all__ = [
    "build_module_groups",
    "complexity_distribution",
    "compute_coupling_metrics",
    "file_complexity",
    "group_cohesion",
    "group_coupling",
    "identify_hotspots",
    "maintainability_index",
    "overall_cohesion",
]
