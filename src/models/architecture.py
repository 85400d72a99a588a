"""Architecture overview models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LayerType = Literal[
    "presentation", "business", "data", "infrastructure", "utility", "unknown"
]

ExternalCategory = Literal["framework", "library", "utility", "dev", "unknown"]


class ArchitectureLayer(BaseModel):
    """A detected architectural layer and the modules that belong to it."""

    name: str
    description: str = ""
    modules: list[str] = Field(default_factory=list)
    depends_on: list[str] = Field(
        default_factory=list,
        description="Names of other layers reached by at least one edge",
    )
    type: LayerType = "unknown"


class ExternalDependency(BaseModel):
    """A third-party package and the modules that import it."""

    name: str
    used_by: list[str] = Field(default_factory=list)
    usage_count: int = 0
    category: ExternalCategory = "unknown"


__all__ = [
    "ArchitectureLayer",
    "ExternalCategory",
    "ExternalDependency",
    "LayerType",
]
