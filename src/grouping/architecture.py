"""Architecture overview: layers, style, entry points and third-party usage."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from models.architecture import ArchitectureLayer, ExternalCategory, ExternalDependency
from rules.layers import UNCLASSIFIED, classify_layer

if TYPE_CHECKING:
    from collections.abc import Iterable

    from graph.builder import DependencyGraph
    from models.modules import Dependency
    from rules.config import LayersConfig

STYLE_FEATURE_SLICED = "Feature-Sliced / Modular Architecture"
STYLE_COMPONENT_FRONTEND = "Component-Based Frontend Architecture"
STYLE_CLEAN = "Clean Architecture / Hexagonal"
STYLE_LAYERED = "Layered Architecture (3-tier)"
STYLE_MVC = "MVC-like Architecture"
STYLE_FLAT = "Flat / Monolithic Structure"
STYLE_MIXED = "Mixed / Custom Architecture"
STYLE_EMPTY = "Empty project"

_COMPONENTS_RE = re.compile(r"/components?/", re.I)
_PAGES_RE = re.compile(r"/pages?/", re.I)
_HOOKS_RE = re.compile(r"/hooks?/", re.I)
_FEATURES_RE = re.compile(r"/features?/", re.I)
_MODULES_RE = re.compile(r"/modules?/", re.I)

_ENTRY_POINT_RES = (
    re.compile(r"/(index|main|app|server|cli)\.(ts|js|py)$", re.I),
    re.compile(r"/__init__\.py$"),
)

_FRAMEWORK_RE = re.compile(
    r"^(react|vue|angular|express|fastapi|django|flask|next|nuxt|nest|koa)"
)
_UTILITY_RE = re.compile(r"^(lodash|underscore|moment|dayjs|uuid|axios|fetch)")


def identify_layers(
    files: Iterable[str], layers_config: LayersConfig | None = None
) -> list[ArchitectureLayer]:
    """Assign every file to a layer.

    Layers appear in the order their first file was seen; the catch-all
    ``Other`` layer always comes last.
    """
    layers: dict[str, ArchitectureLayer] = {}
    unmatched: ArchitectureLayer | None = None
    for path in files:
        assignment = classify_layer(path, layers_config)
        if assignment is UNCLASSIFIED:
            if unmatched is None:
                unmatched = ArchitectureLayer(
                    name=assignment.name,
                    description=assignment.description,
                    type=assignment.type,
                )
            unmatched.modules.append(path)
            continue
        layer = layers.get(assignment.name)
        if layer is None:
            layer = ArchitectureLayer(
                name=assignment.name,
                description=assignment.description,
                type=assignment.type,
            )
            layers[assignment.name] = layer
        layer.modules.append(path)

    result = list(layers.values())
    if unmatched is not None:
        result.append(unmatched)
    return result


def assign_layer_dependencies(
    layers: list[ArchitectureLayer], graph: DependencyGraph
) -> None:
    """Fill ``depends_on`` from edges that cross between two layers."""
    layer_of = {module: layer.name for layer in layers for module in layer.modules}
    order = {layer.name: index for index, layer in enumerate(layers)}
    reached: dict[str, set[str]] = {layer.name: set() for layer in layers}
    for source, target, _data in graph.edges():
        source_layer = layer_of.get(source)
        target_layer = layer_of.get(target)
        if source_layer and target_layer and source_layer != target_layer:
            reached[source_layer].add(target_layer)
    for layer in layers:
        layer.depends_on = sorted(reached[layer.name], key=order.__getitem__)


def determine_architecture_style(
    layers: list[ArchitectureLayer], files: list[str]
) -> str:
    if not files:
        return STYLE_EMPTY

    types = {layer.type for layer in layers}
    anchored = ["/" + path for path in files]

    def any_path(pattern: re.Pattern[str]) -> bool:
        return any(pattern.search(path) for path in anchored)

    if any_path(_FEATURES_RE) or any_path(_MODULES_RE):
        return STYLE_FEATURE_SLICED
    if any_path(_COMPONENTS_RE) and any_path(_PAGES_RE) and any_path(_HOOKS_RE):
        return STYLE_COMPONENT_FRONTEND
    if {"presentation", "business", "data"} <= types:
        return STYLE_CLEAN if "infrastructure" in types else STYLE_LAYERED
    if {"presentation", "data"} <= types:
        return STYLE_MVC
    if len(layers) == 1:
        return STYLE_FLAT
    return STYLE_MIXED


def find_entry_points(files: Iterable[str]) -> list[str]:
    """Files named like an application entry point (index, main, app, ...)."""
    return [
        path
        for path in files
        if any(pattern.search("/" + path) for pattern in _ENTRY_POINT_RES)
    ]


def categorize_package(name: str) -> ExternalCategory:
    if _FRAMEWORK_RE.match(name):
        return "framework"
    if "dev" in name or name.startswith("@types/"):
        return "dev"
    if _UTILITY_RE.match(name):
        return "utility"
    return "library"


def identify_external_dependencies(
    dependencies: Iterable[Dependency],
) -> list[ExternalDependency]:
    """Aggregate external imports per package, most used first."""
    usage: dict[str, ExternalDependency] = {}
    for dep in dependencies:
        if dep.kind != "external" or not dep.package_name:
            continue
        entry = usage.get(dep.package_name)
        if entry is None:
            entry = ExternalDependency(
                name=dep.package_name, category=categorize_package(dep.package_name)
            )
            usage[dep.package_name] = entry
        if dep.source not in entry.used_by:
            entry.used_by.append(dep.source)
        entry.usage_count += 1
    return sorted(usage.values(), key=lambda entry: -entry.usage_count)


__all__ = [
    "STYLE_CLEAN",
    "STYLE_COMPONENT_FRONTEND",
    "STYLE_EMPTY",
    "STYLE_FEATURE_SLICED",
    "STYLE_FLAT",
    "STYLE_LAYERED",
    "STYLE_MIXED",
    "STYLE_MVC",
    "assign_layer_dependencies",
    "categorize_package",
    "determine_architecture_style",
    "find_entry_points",
    "identify_external_dependencies",
    "identify_layers",
]
