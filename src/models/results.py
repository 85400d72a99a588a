"""Result models returned by the analysis operations."""

from __future__ import annotations

from pydantic import BaseModel, Field

from models.architecture import ArchitectureLayer, ExternalDependency
from models.graph import DependencyCycle, GraphStats
from models.metrics import (
    ComplexityDistribution,
    ComplexityHotspot,
    CouplingMetrics,
    FileComplexity,
    ModuleGroup,
)
from models.modules import Diagnostic, ModuleInfo, Relationship
from models.options import GroupBy, OutputFormat


class DependencyGraphResult(BaseModel):
    graph: str = Field(description="Serialized graph in the requested format")
    format: OutputFormat
    language: str
    stats: GraphStats
    file_count: int
    has_cycles: bool
    cycle_count: int
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class SeveritySummary(BaseModel):
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


class CircularDependencyResult(BaseModel):
    has_cycles: bool
    total_cycles: int = Field(description="Number of cycles before truncation")
    cycles: list[DependencyCycle] = Field(default_factory=list)
    summary: SeveritySummary = Field(default_factory=SeveritySummary)
    affected_files: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class ModuleMapResult(BaseModel):
    group_by: GroupBy
    modules: list[ModuleInfo] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)
    coupling: dict[str, CouplingMetrics] = Field(default_factory=dict)
    cohesion_score: float = Field(default=1.0, ge=0.0, le=1.0)
    groups: list[ModuleGroup] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class ComplexityResult(BaseModel):
    threshold: float
    total_files: int = 0
    total_functions: int = 0
    total_complexity: int = 0
    average_complexity: float = 0.0
    files: list[FileComplexity] = Field(default_factory=list)
    hotspots: list[ComplexityHotspot] = Field(default_factory=list)
    distribution: ComplexityDistribution = Field(
        default_factory=ComplexityDistribution
    )
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class OverviewSummary(BaseModel):
    total_files: int = 0
    total_dependencies: int = 0
    layer_count: int = 0
    external_dependency_count: int = 0


class ArchitectureOverviewResult(BaseModel):
    layers: list[ArchitectureLayer] = Field(default_factory=list)
    entry_points: list[str] = Field(default_factory=list)
    external_dependencies: list[ExternalDependency] = Field(default_factory=list)
    architecture_style: str
    diagram: str
    summary: OverviewSummary = Field(default_factory=OverviewSummary)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


__all__ = [
    "ArchitectureOverviewResult",
    "CircularDependencyResult",
    "ComplexityResult",
    "DependencyGraphResult",
    "ModuleMapResult",
    "OverviewSummary",
    "SeveritySummary",
]
