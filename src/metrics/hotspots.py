"""Complexity hotspot detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from models.graph import SEVERITY_ORDER
from models.metrics import ComplexityHotspot, HotspotPriority

if TYPE_CHECKING:
    from collections.abc import Iterable

    from models.metrics import FileComplexity
    from rules.config import ComplexityConfig


def _function_priority(
    complexity: int, threshold: float, policy: ComplexityConfig
) -> HotspotPriority:
    if complexity >= threshold * policy.critical_factor:
        return "critical"
    if complexity >= threshold * policy.high_factor:
        return "high"
    if complexity >= threshold * policy.medium_factor:
        return "medium"
    return "low"


def identify_hotspots(
    files: Iterable[FileComplexity],
    threshold: float,
    policy: ComplexityConfig,
) -> list[ComplexityHotspot]:
    """Flag complex functions, complex files and hard-to-maintain files.

    Args:
        files: Per-file complexity records.
        threshold: Function complexity threshold.
        policy: Multipliers and maintainability floors from configuration.

    Returns:
        Hotspots ordered critical first; equal priorities keep file order.
    """
    hotspots: list[ComplexityHotspot] = []
    file_threshold = threshold * policy.file_factor

    for record in files:
        if record.cyclomatic_complexity >= file_threshold:
            critical = (
                record.cyclomatic_complexity
                >= threshold * policy.file_critical_factor
            )
            hotspots.append(
                ComplexityHotspot(
                    path=record.path,
                    line=1,
                    complexity=record.cyclomatic_complexity,
                    threshold=file_threshold,
                    reason=(
                        "File has very high total complexity "
                        f"({record.cyclomatic_complexity})"
                    ),
                    priority="critical" if critical else "high",
                )
            )

        for fn in record.functions:
            if fn.complexity < threshold:
                continue
            hotspots.append(
                ComplexityHotspot(
                    path=record.path,
                    function_name=fn.name,
                    line=fn.start_line,
                    complexity=fn.complexity,
                    threshold=threshold,
                    reason=(
                        f"Function '{fn.name}' has complexity {fn.complexity} "
                        f"(threshold: {threshold:g})"
                    ),
                    priority=_function_priority(fn.complexity, threshold, policy),
                )
            )

        if record.maintainability_index < policy.maintainability_floor:
            critical = record.maintainability_index < policy.maintainability_critical
            hotspots.append(
                ComplexityHotspot(
                    path=record.path,
                    line=1,
                    complexity=record.cyclomatic_complexity,
                    threshold=policy.maintainability_floor,
                    reason=(
                        "Low maintainability index "
                        f"({record.maintainability_index}/100)"
                    ),
                    priority="critical" if critical else "high",
                )
            )

    hotspots.sort(key=lambda hotspot: SEVERITY_ORDER[hotspot.priority])
    return hotspots


__all__ = ["identify_hotspots"]
