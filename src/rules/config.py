"""Project configuration loaded from ``depgraph.toml``."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from errors import DepgraphError
from models.architecture import LayerType
from models.options import GroupBy
from scan.files import DEFAULT_MAX_DEPTH

CONFIG_FILENAME = "depgraph.toml"

GraphDirection = Literal["TB", "BT", "LR", "RL"]


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class LayerDef(_StrictModel):
    """Definition of a single architectural layer."""

    name: str = Field(description="Layer name (e.g., 'presentation', 'business')")
    globs: list[str] = Field(
        description="Glob patterns for files belonging to this layer"
    )
    type: LayerType = Field(
        default="unknown", description="Layer category used for style detection"
    )
    description: str = ""


class LayersConfig(_StrictModel):
    """User-defined layers; when present they replace the built-in rules."""

    layer: list[LayerDef] = Field(
        default_factory=list,
        description="Layer definitions (first match wins)",
    )


class ComplexityConfig(_StrictModel):
    """Threshold and hotspot multipliers for complexity analysis."""

    threshold: float = Field(default=10, gt=0)
    medium_factor: float = Field(default=1.5, gt=0)
    high_factor: float = Field(default=2.0, gt=0)
    critical_factor: float = Field(default=3.0, gt=0)
    file_factor: float = Field(
        default=2.0, gt=0, description="File total above threshold * factor"
    )
    file_critical_factor: float = Field(default=4.0, gt=0)
    maintainability_floor: float = Field(default=20, ge=0, le=100)
    maintainability_critical: float = Field(default=10, ge=0, le=100)

    @model_validator(mode="after")
    def check_ordering(self) -> ComplexityConfig:
        if not (
            1 <= self.medium_factor <= self.high_factor <= self.critical_factor
        ):
            msg = "complexity factors must satisfy 1 <= medium <= high <= critical"
            raise ValueError(msg)
        if self.file_critical_factor < self.file_factor:
            msg = "file_critical_factor must be >= file_factor"
            raise ValueError(msg)
        if self.maintainability_critical > self.maintainability_floor:
            msg = "maintainability_critical must be <= maintainability_floor"
            raise ValueError(msg)
        return self


class CyclesConfig(_StrictModel):
    max_cycles: int = Field(default=20, ge=0)


class GroupingConfig(_StrictModel):
    group_by: GroupBy = "directory"
    depth: int = Field(default=2, ge=1)


class GraphConfig(_StrictModel):
    max_nodes: int = Field(
        default=100, ge=1, description="Node cap for Mermaid and DOT output"
    )
    direction: GraphDirection = "TB"
    show_weights: bool = Field(
        default=False, description="Label Mermaid and DOT edges with their weight"
    )


class DepgraphConfig(_StrictModel):
    """Configuration for depgraph-core analysis."""

    exclude: list[str] = Field(
        default_factory=list,
        description="Exclude patterns added to the built-in defaults",
    )
    max_scan_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    gitignore: bool = Field(
        default=True, description="Skip files ignored by the root .gitignore"
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    complexity: ComplexityConfig = Field(default_factory=ComplexityConfig)
    cycles: CyclesConfig = Field(default_factory=CyclesConfig)
    grouping: GroupingConfig = Field(default_factory=GroupingConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    layers: LayersConfig = Field(default_factory=LayersConfig)


class ConfigError(DepgraphError):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> DepgraphConfig:
    """Load configuration from depgraph.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return DepgraphConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return DepgraphConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "ComplexityConfig",
    "ConfigError",
    "CyclesConfig",
    "DepgraphConfig",
    "GraphConfig",
    "GraphDirection",
    "GroupingConfig",
    "LayerDef",
    "LayersConfig",
    "load_config",
]
