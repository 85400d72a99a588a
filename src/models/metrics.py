"""Coupling, cohesion and complexity models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

HotspotPriority = Literal["low", "medium", "high", "critical"]


class CouplingMetrics(BaseModel):
    """Robert C. Martin package metrics for a single module."""

    afferent: int = Field(ge=0, description="Incoming dependencies (Ca)")
    efferent: int = Field(ge=0, description="Outgoing dependencies (Ce)")
    instability: float = Field(ge=0.0, le=1.0)
    abstractness: float = Field(ge=0.0, le=1.0)
    distance: float = Field(ge=0.0, le=1.0, description="|A + I - 1|")


class ModuleGroup(BaseModel):
    """A named group of modules with its cohesion and coupling."""

    name: str
    modules: list[str] = Field(default_factory=list)
    cohesion: float = Field(default=1.0, ge=0.0, le=1.0)
    coupling: float = Field(default=0.0, ge=0.0, le=1.0)


class FunctionComplexity(BaseModel):
    """Cyclomatic complexity of one function."""

    name: str
    start_line: int
    end_line: int
    complexity: int = Field(default=1, ge=1)
    parameter_count: int = Field(default=0, ge=0)
    max_nesting_depth: int = Field(default=0, ge=0)


class FileComplexity(BaseModel):
    """Aggregated complexity of one file."""

    path: str
    cyclomatic_complexity: int = Field(ge=1)
    function_count: int = Field(ge=0)
    lines_of_code: int = Field(ge=0)
    functions: list[FunctionComplexity] = Field(default_factory=list)
    maintainability_index: int = Field(ge=0, le=100)


class ComplexityHotspot(BaseModel):
    """A function or file that needs attention."""

    path: str
    function_name: str | None = None
    line: int | None = None
    complexity: float
    threshold: float
    reason: str
    priority: HotspotPriority


class ComplexityDistribution(BaseModel):
    """Counts of files per complexity bucket."""

    low: int = 0
    medium: int = 0
    high: int = 0
    very_high: int = 0


__all__ = [
    "ComplexityDistribution",
    "ComplexityHotspot",
    "CouplingMetrics",
    "FileComplexity",
    "FunctionComplexity",
    "HotspotPriority",
    "ModuleGroup",
]
