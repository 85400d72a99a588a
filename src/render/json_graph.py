"""JSON node/edge serializer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson

from utils import short_name

if TYPE_CHECKING:
    from graph.builder import DependencyGraph


def graph_payload(graph: DependencyGraph) -> dict[str, list[dict[str, Any]]]:
    """Every node and edge, with no truncation."""
    nodes = [
        {"id": node, "label": short_name(node), "data": dict(graph.node_attrs(node))}
        for node in graph.nodes()
    ]
    edges = [
        {
            "source": source,
            "target": target,
            "data": {
                "weight": data.weight,
                "kinds": list(data.kinds),
                "imports": list(data.imports),
            },
        }
        for source, target, data in graph.edges()
    ]
    return {"nodes": nodes, "edges": edges}


def render_json(graph: DependencyGraph) -> str:
    return orjson.dumps(graph_payload(graph), option=orjson.OPT_INDENT_2).decode()


__all__ = ["graph_payload", "render_json"]
