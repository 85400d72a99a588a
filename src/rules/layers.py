"""Architectural layer classification."""

from __future__ import annotations

import re
from fnmatch import fnmatch
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from models.architecture import LayerType
    from rules.config import LayersConfig


class LayerAssignment(NamedTuple):
    """The layer a file belongs to.

    ``key`` is the grouping key: the layer type for the built-in rules, the
    layer name for user-defined layers.
    """

    key: str
    name: str
    type: LayerType
    description: str


class _LayerRule(NamedTuple):
    pattern: re.Pattern[str]
    name: str
    type: LayerType
    description: str


BUILTIN_LAYER_RULES: tuple[_LayerRule, ...] = (
    _LayerRule(
        re.compile(r"/(controllers?|api|routes?|handlers?|endpoints?)/", re.I),
        "Presentation",
        "presentation",
        "Handles HTTP requests and responses",
    ),
    _LayerRule(
        re.compile(r"/(services?|business|domain|usecases?|core)/", re.I),
        "Business Logic",
        "business",
        "Contains core business logic and rules",
    ),
    _LayerRule(
        re.compile(r"/(repositories?|data|db|database|models?|entities?)/", re.I),
        "Data Access",
        "data",
        "Manages data persistence and retrieval",
    ),
    _LayerRule(
        re.compile(r"/(infrastructure|external|adapters?|clients?)/", re.I),
        "Infrastructure",
        "infrastructure",
        "External service integrations and infrastructure concerns",
    ),
    _LayerRule(
        re.compile(r"/(utils?|helpers?|lib|common|shared)/", re.I),
        "Utilities",
        "utility",
        "Shared utilities and helper functions",
    ),
)

UNCLASSIFIED = LayerAssignment(
    key="unknown",
    name="Other",
    type="unknown",
    description="Files not matching standard layer patterns",
)


def classify_layer(
    path: str, layers_config: LayersConfig | None = None
) -> LayerAssignment:
    """Classify a root-relative file path into an architectural layer.

    Uses first-match-wins semantics. When ``layers_config`` defines layers,
    their glob patterns replace the built-in directory rules entirely.
    Unmatched files land in :data:`UNCLASSIFIED`.
    """
    if layers_config is not None and layers_config.layer:
        for layer_def in layers_config.layer:
            if any(fnmatch(path, glob_pattern) for glob_pattern in layer_def.globs):
                return LayerAssignment(
                    key=layer_def.name,
                    name=layer_def.name,
                    type=layer_def.type,
                    description=layer_def.description,
                )
        return UNCLASSIFIED

    anchored = "/" + path
    for rule in BUILTIN_LAYER_RULES:
        if rule.pattern.search(anchored):
            return LayerAssignment(rule.type, rule.name, rule.type, rule.description)
    return UNCLASSIFIED


__all__ = ["BUILTIN_LAYER_RULES", "UNCLASSIFIED", "LayerAssignment", "classify_layer"]
