"""Input models for the analysis operations.

Every field left as ``None`` falls back to the value from ``depgraph.toml``
(or its built-in default).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LanguageOption = Literal["auto", "typescript", "javascript", "python"]

OutputFormat = Literal["mermaid", "dot", "json"]

GroupBy = Literal["directory", "package", "feature", "layer"]


class AnalysisOptions(BaseModel):
    """Options shared by every operation."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field(description="File or directory to analyze")
    language: LanguageOption = "auto"
    exclude: list[str] = Field(
        default_factory=list,
        description="Extra name/suffix patterns unioned with the default excludes",
    )


class GraphOptions(AnalysisOptions):
    format: OutputFormat = "mermaid"
    depth: int | None = Field(
        default=None, ge=1, description="Maximum directory depth to scan"
    )
    include_external: bool = False


class CycleOptions(AnalysisOptions):
    max_cycles: int | None = Field(default=None, ge=0)


class ModuleMapOptions(AnalysisOptions):
    group_by: GroupBy | None = None
    depth: int | None = Field(
        default=None, ge=1, description="Directory depth for directory grouping"
    )


class ComplexityOptions(AnalysisOptions):
    threshold: float | None = Field(default=None, gt=0)


class OverviewOptions(AnalysisOptions):
    pass


__all__ = [
    "AnalysisOptions",
    "ComplexityOptions",
    "CycleOptions",
    "GraphOptions",
    "GroupBy",
    "LanguageOption",
    "ModuleMapOptions",
    "OutputFormat",
    "OverviewOptions",
]
