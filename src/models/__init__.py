"""Pydantic models shared across depgraph-core."""

from models.architecture import (
    ArchitectureLayer,
    ExternalCategory,
    ExternalDependency,
    LayerType,
)
from models.graph import SEVERITY_ORDER, CycleSeverity, DependencyCycle, GraphStats
from models.metrics import (
    ComplexityDistribution,
    ComplexityHotspot,
    CouplingMetrics,
    FileComplexity,
    FunctionComplexity,
    HotspotPriority,
    ModuleGroup,
)
from models.modules import (
    Dependency,
    DependencyKind,
    Diagnostic,
    ImportKind,
    ImportRecord,
    ModuleInfo,
    ModuleLanguage,
    Relationship,
)
from models.options import (
    AnalysisOptions,
    ComplexityOptions,
    CycleOptions,
    GraphOptions,
    GroupBy,
    LanguageOption,
    ModuleMapOptions,
    OutputFormat,
    OverviewOptions,
)
from models.results import (
    ArchitectureOverviewResult,
    CircularDependencyResult,
    ComplexityResult,
    DependencyGraphResult,
    ModuleMapResult,
    OverviewSummary,
    SeveritySummary,
)

__all__ = [
    "SEVERITY_ORDER",
    "AnalysisOptions",
    "ArchitectureLayer",
    "ArchitectureOverviewResult",
    "CircularDependencyResult",
    "ComplexityDistribution",
    "ComplexityHotspot",
    "ComplexityOptions",
    "ComplexityResult",
    "CouplingMetrics",
    "CycleOptions",
    "CycleSeverity",
    "Dependency",
    "DependencyCycle",
    "DependencyGraphResult",
    "DependencyKind",
    "Diagnostic",
    "ExternalCategory",
    "ExternalDependency",
    "FileComplexity",
    "FunctionComplexity",
    "GraphOptions",
    "GraphStats",
    "GroupBy",
    "HotspotPriority",
    "ImportKind",
    "ImportRecord",
    "LanguageOption",
    "LayerType",
    "ModuleGroup",
    "ModuleInfo",
    "ModuleLanguage",
    "ModuleMapOptions",
    "ModuleMapResult",
    "OutputFormat",
    "OverviewOptions",
    "OverviewSummary",
    "Relationship",
    "SeveritySummary",
]
