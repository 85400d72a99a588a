"""Mermaid flowchart serializers."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from render._common import cycle_membership, is_cycle_edge
from utils import short_name

if TYPE_CHECKING:
    from graph.builder import DependencyGraph
    from models.architecture import ArchitectureLayer, ExternalDependency
    from models.graph import DependencyCycle

_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9]")

CYCLE_CLASS_DEF = "  classDef cycle fill:#ff6b6b,stroke:#c92a2a,stroke-width:2px"

_LAYER_CLASS_DEFS = (
    "  classDef presentation fill:#a8e6cf,stroke:#2d6a4f",
    "  classDef business fill:#ffd3b6,stroke:#f4a261",
    "  classDef data fill:#dcedc1,stroke:#52796f",
    "  classDef infrastructure fill:#ffaaa5,stroke:#e07a5f",
    "  classDef utility fill:#d4a5a5,stroke:#9b5de5",
)

_CANONICAL_LAYER_ORDER = ("Presentation", "Business Logic", "Data Access", "Infrastructure")


def sanitize(label: str) -> str:
    return _UNSAFE_RE.sub("_", label)


def render_mermaid(
    graph: DependencyGraph,
    cycles: list[DependencyCycle] | None = None,
    *,
    direction: str = "TB",
    max_nodes: int = 100,
    show_weights: bool = False,
    highlight_cycles: bool = True,
) -> str:
    """Render the graph as a Mermaid ``graph`` block.

    Only the first ``max_nodes`` nodes (and the edges between them) are drawn;
    a note reports the truncation. Cycle members get the ``cycle`` class and
    edges inside a cycle are dotted.
    """
    nodes = graph.nodes()
    if not nodes:
        return f"graph {direction}\n  empty[No dependencies found]"

    shown = nodes[:max_nodes]
    node_ids = {node: f"n{index}" for index, node in enumerate(shown)}
    membership = cycle_membership(cycles or []) if highlight_cycles else {}

    lines = [f"graph {direction}"]
    for node in shown:
        label = sanitize(short_name(node))
        suffix = ":::cycle" if node in membership else ""
        lines.append(f"  {node_ids[node]}[{label}]{suffix}")

    for source, target, data in graph.edges():
        if source not in node_ids or target not in node_ids:
            continue
        from_id, to_id = node_ids[source], node_ids[target]
        arrow = "-.->" if is_cycle_edge(membership, source, target) else "-->"
        label = f"|{data.weight}|" if show_weights else ""
        lines.append(f"  {from_id} {arrow}{label} {to_id}")

    if any(node in membership for node in shown):
        lines.append(CYCLE_CLASS_DEF)
    if len(nodes) > max_nodes:
        lines.append(f"  note[Showing {max_nodes} of {len(nodes)} nodes]")

    return "\n".join(lines)


def render_architecture_diagram(
    layers: list[ArchitectureLayer],
    external_dependencies: list[ExternalDependency],
    *,
    max_external: int = 5,
) -> str:
    """Layer-level Mermaid diagram with the most used third-party packages.

    Arrows follow the canonical presentation -> business -> data ->
    infrastructure chain; every layer gets a dotted link to ``Utilities``.
    """
    if not layers:
        return "graph TB\n  empty[No files found]"

    lines = ["graph TB"]
    layer_ids: dict[str, str] = {}
    counter = 0

    for layer in layers:
        layer_id = f"layer{counter}"
        counter += 1
        layer_ids[layer.name] = layer_id
        lines.append(f"  {layer_id}[{sanitize(layer.name)}<br/>{len(layer.modules)} modules]")
        css_class = (
            layer.type
            if layer.type in ("presentation", "business", "data", "infrastructure")
            else "utility"
        )
        lines.append(f"  class {layer_id} {css_class}")

    top = external_dependencies[:max_external]
    if top:
        lines.append("  subgraph External")
        for dep in top:
            lines.append(f"    ext{counter}(({sanitize(dep.name)[:15]}))")
            counter += 1
        lines.append("  end")

    for upper, lower in zip(_CANONICAL_LAYER_ORDER, _CANONICAL_LAYER_ORDER[1:]):
        if upper in layer_ids and lower in layer_ids:
            lines.append(f"  {layer_ids[upper]} --> {layer_ids[lower]}")

    utility_id = layer_ids.get("Utilities")
    if utility_id is not None:
        for name, layer_id in layer_ids.items():
            if name != "Utilities":
                lines.append(f"  {layer_id} -.-> {utility_id}")

    lines.extend(_LAYER_CLASS_DEFS)
    return "\n".join(lines)


__all__ = ["render_architecture_diagram", "render_mermaid", "sanitize"]
