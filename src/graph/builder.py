"""Directed, weighted module graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from models.modules import ImportKind, Relationship


@dataclass
class EdgeData:
    """Collapsed data for every relationship between one ordered node pair."""

    weight: int = 0
    kinds: list[ImportKind] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)


class DependencyGraph:
    """Directed graph keyed by node id with insertion-ordered nodes and edges.

    Parallel edges collapse into a single edge whose weight is the sum of the
    individual relationship weights.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, dict[str, Any]] = {}
        self._succ: dict[str, dict[str, EdgeData]] = {}
        self._pred: dict[str, dict[str, None]] = {}

    def add_node(self, node: str, **attrs: Any) -> None:
        if node not in self._nodes:
            self._nodes[node] = {}
            self._succ[node] = {}
            self._pred[node] = {}
        self._nodes[node].update(attrs)

    def add_edge(
        self,
        source: str,
        target: str,
        *,
        weight: int = 1,
        kind: ImportKind = "import",
        imports: Iterable[str] = (),
    ) -> None:
        """Add an edge, merging into an existing one between the same pair."""
        self.add_node(source)
        self.add_node(target)
        edge = self._succ[source].get(target)
        if edge is None:
            edge = EdgeData()
            self._succ[source][target] = edge
            self._pred[target][source] = None
        edge.weight += weight
        if kind not in edge.kinds:
            edge.kinds.append(kind)
        for name in imports:
            if name not in edge.imports:
                edge.imports.append(name)

    def has_node(self, node: str) -> bool:
        return node in self._nodes

    def has_edge(self, source: str, target: str) -> bool:
        return target in self._succ.get(source, {})

    def node_attrs(self, node: str) -> dict[str, Any]:
        return self._nodes[node]

    def edge(self, source: str, target: str) -> EdgeData | None:
        return self._succ.get(source, {}).get(target)

    def nodes(self) -> list[str]:
        return list(self._nodes)

    def edges(self) -> Iterator[tuple[str, str, EdgeData]]:
        for source, targets in self._succ.items():
            for target, data in targets.items():
                yield source, target, data

    def successors(self, node: str) -> list[str]:
        return list(self._succ.get(node, ()))

    def predecessors(self, node: str) -> list[str]:
        return list(self._pred.get(node, ()))

    def in_degree(self, node: str) -> int:
        return len(self._pred.get(node, ()))

    def out_degree(self, node: str) -> int:
        return len(self._succ.get(node, ()))

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    def number_of_edges(self) -> int:
        return sum(len(targets) for targets in self._succ.values())

    def adjacency(self) -> dict[str, list[str]]:
        """Successor lists for every node, in node insertion order."""
        return {node: list(targets) for node, targets in self._succ.items()}

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)


def build_graph(
    files: Iterable[str],
    relationships: Iterable[Relationship],
    *,
    include_external: bool = False,
) -> DependencyGraph:
    """Build the module graph.

    Every file becomes a node, in the order given. A relationship becomes an
    edge only when both endpoints are files, unless ``include_external`` is
    set, in which case a target outside the file set is added as an extra
    node flagged ``external``.

    Args:
        files: Root-relative file ids, already sorted.
        relationships: Relationships extracted from those files.
        include_external: Keep edges to unresolved and third-party targets.
    """
    graph = DependencyGraph()
    for path in files:
        graph.add_node(path, path=path, external=False)

    for rel in relationships:
        if not graph.has_node(rel.source) or graph.node_attrs(rel.source)["external"]:
            continue
        if not graph.has_node(rel.target):
            if not include_external:
                continue
            graph.add_node(rel.target, path=rel.target, external=True)
        graph.add_edge(
            rel.source,
            rel.target,
            weight=rel.weight,
            kind=rel.kind,
            imports=rel.imports,
        )
    return graph


__all__ = ["DependencyGraph", "EdgeData", "build_graph"]
