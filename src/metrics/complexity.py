"""File-level complexity aggregation and the maintainability index."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from models.metrics import ComplexityDistribution, FileComplexity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from models.metrics import FunctionComplexity


def maintainability_index(average_complexity: float, lines_of_code: int) -> int:
    """Simplified maintainability index, clamped to [0, 100] and rounded.

    ``171 - 5.2 ln(avg + 1) - 0.23 avg - 16.2 ln(loc + 1)``
    """
    raw = (
        171
        - 5.2 * math.log(average_complexity + 1)
        - 0.23 * average_complexity
        - 16.2 * math.log(lines_of_code + 1)
    )
    return round(max(0.0, min(100.0, raw)))


def file_complexity(
    path: str, functions: list[FunctionComplexity], lines_of_code: int
) -> FileComplexity:
    """Aggregate per-function complexity into a file record.

    A file without functions has complexity 1. The average used for the
    maintainability index is per function, or 1 when there are none.
    """
    total = sum(fn.complexity for fn in functions)
    average = total / len(functions) if functions else 1.0
    return FileComplexity(
        path=path,
        cyclomatic_complexity=total or 1,
        function_count=len(functions),
        lines_of_code=lines_of_code,
        functions=functions,
        maintainability_index=maintainability_index(average, lines_of_code),
    )


def complexity_distribution(
    files: Iterable[FileComplexity], threshold: float
) -> ComplexityDistribution:
    """Bucket files: low < t <= medium < 2t <= high < 4t <= very high."""
    distribution = ComplexityDistribution()
    for record in files:
        value = record.cyclomatic_complexity
        if value < threshold:
            distribution.low += 1
        elif value < threshold * 2:
            distribution.medium += 1
        elif value < threshold * 4:
            distribution.high += 1
        else:
            distribution.very_high += 1
    return distribution


__all__ = ["complexity_distribution", "file_complexity", "maintainability_index"]
