"""Graph-level models: statistics and cycles."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

CycleSeverity = Literal["low", "medium", "high", "critical"]

SEVERITY_ORDER: dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}


class GraphStats(BaseModel):
    """Summary statistics for a dependency graph."""

    total_nodes: int = 0
    total_edges: int = 0
    average_dependencies: float = 0.0
    max_dependencies: int = 0
    most_connected: list[str] = Field(default_factory=list)
    entry_points: list[str] = Field(default_factory=list)
    leaf_nodes: list[str] = Field(default_factory=list)


class DependencyCycle(BaseModel):
    """A strongly connected component with at least two modules."""

    nodes: list[str] = Field(min_length=2)
    length: int
    severity: CycleSeverity
    description: str
    suggestions: list[str] = Field(default_factory=list)


__all__ = ["SEVERITY_ORDER", "CycleSeverity", "DependencyCycle", "GraphStats"]
