"""Configuration and layer rules."""

from rules.config import (
    ConfigError,
    DepgraphConfig,
    LayerDef,
    LayersConfig,
    load_config,
)
from rules.layers import LayerAssignment, classify_layer

__all__ = [
    "ConfigError",
    "DepgraphConfig",
    "LayerAssignment",
    "LayerDef",
    "LayersConfig",
    "classify_layer",
    "load_config",
]
