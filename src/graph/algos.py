"""Graph algorithms for depgraph-core."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping

    from graph.builder import DependencyGraph


class _TarjanState:
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self) -> None:
        self.index = 0
        self.indices: dict[str, int] = {}
        self.low_link: dict[str, int] = {}
        self.on_stack: set[str] = set()
        self.stack: list[str] = []
        self.sccs: list[list[str]] = []

    def enter(self, node: str) -> None:
        self.indices[node] = self.index
        self.low_link[node] = self.index
        self.index += 1
        self.stack.append(node)
        self.on_stack.add(node)


def _extract_scc(state: _TarjanState, root: str) -> list[str]:
    """Pop a strongly connected component off the stack, in discovery order."""
    scc: list[str] = []
    while state.stack:
        w = state.stack.pop()
        state.on_stack.remove(w)
        scc.append(w)
        if w == root:
            break
    if root not in scc:
        msg = (
            f"Tarjan algorithm invariant violated: root node {root!r} "
            "not found in stack during SCC extraction."
        )
        raise RuntimeError(msg)
    scc.reverse()
    return scc


def _strongconnect(
    start: str, graph: Mapping[str, Iterable[str]], state: _TarjanState
) -> None:
    """Run Tarjan from ``start`` using an explicit frame stack.

    Each frame holds a node and the iterator over its remaining neighbors,
    so arbitrarily deep import chains never touch the interpreter's
    recursion limit.
    """
    state.enter(start)
    frames: list[tuple[str, Iterator[str]]] = [
        (start, iter(sorted(graph.get(start, ()))))
    ]

    while frames:
        node, neighbors = frames[-1]
        descended = False
        for neighbor in neighbors:
            if neighbor not in state.indices:
                state.enter(neighbor)
                frames.append((neighbor, iter(sorted(graph.get(neighbor, ())))))
                descended = True
                break
            if neighbor in state.on_stack:
                state.low_link[node] = min(
                    state.low_link[node], state.indices[neighbor]
                )
        if descended:
            continue

        frames.pop()
        if frames:
            parent = frames[-1][0]
            state.low_link[parent] = min(state.low_link[parent], state.low_link[node])

        if state.low_link[node] == state.indices[node]:
            scc = _extract_scc(state, node)
            # Singletons, including modules that import themselves, are not cycles.
            if len(scc) > 1:
                state.sccs.append(scc)


def strongly_connected_components(
    graph: Mapping[str, Iterable[str]],
) -> list[list[str]]:
    """Find cycles in a directed graph using Tarjan's algorithm.

    Args:
        graph: Mapping of node to the nodes it depends on.

    Returns:
        Every strongly connected component with at least two nodes, in the
        order the components are completed. Members are listed in discovery
        order.
    """
    state = _TarjanState()

    for node in graph:
        if node not in state.indices:
            _strongconnect(node, graph, state)

    return state.sccs


def has_cycle(graph: DependencyGraph) -> bool:
    return bool(strongly_connected_components(graph.adjacency()))


def is_dag(graph: DependencyGraph) -> bool:
    return not has_cycle(graph)


def topological_order(graph: DependencyGraph) -> list[str] | None:
    """Order nodes so that every module precedes the modules it imports.

    Self-imports are ignored. Returns ``None`` when the graph has a cycle.
    """
    in_degree = {node: 0 for node in graph.nodes()}
    for source, target, _data in graph.edges():
        if source != target:
            in_degree[target] += 1

    queue = deque(node for node, degree in in_degree.items() if degree == 0)
    order: list[str] = []
    while queue:
        node = queue.popleft()
        order.append(node)
        for successor in graph.successors(node):
            if successor == node:
                continue
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                queue.append(successor)

    if len(order) != graph.number_of_nodes():
        return None
    return order


def _reachable(start: str, step: Callable[[str], list[str]]) -> list[str]:
    seen = {start}
    order: list[str] = []
    queue = deque([start])
    while queue:
        for neighbor in step(queue.popleft()):
            if neighbor not in seen:
                seen.add(neighbor)
                order.append(neighbor)
                queue.append(neighbor)
    return order


def transitive_dependencies(graph: DependencyGraph, node: str) -> list[str]:
    """All modules reachable from ``node``, nearest first."""
    if not graph.has_node(node):
        return []
    return _reachable(node, graph.successors)


def reverse_dependencies(graph: DependencyGraph, node: str) -> list[str]:
    """All modules that reach ``node``, nearest first."""
    if not graph.has_node(node):
        return []
    return _reachable(node, graph.predecessors)


def find_all_paths(
    graph: DependencyGraph, source: str, target: str, *, max_paths: int = 10
) -> list[list[str]]:
    """Simple paths from ``source`` to ``target``, at most ``max_paths`` of them."""
    if source == target or max_paths <= 0:
        return []
    if not (graph.has_node(source) and graph.has_node(target)):
        return []

    paths: list[list[str]] = []
    stack: list[list[str]] = [[source]]
    while stack and len(paths) < max_paths:
        path = stack.pop()
        node = path[-1]
        if node == target:
            paths.append(path)
            continue
        for successor in reversed(graph.successors(node)):
            if successor not in path:
                stack.append([*path, successor])
    return paths


def node_depth(graph: DependencyGraph, node: str) -> int:
    """Longest distance from any entry point (no importers) to ``node``.

    Each entry point contributes the length of the first path found to
    ``node``; nodes unreachable from every entry point have depth 0.
    """
    depth = 0
    for entry in graph.nodes():
        if graph.in_degree(entry) != 0 or entry == node:
            continue
        found = find_all_paths(graph, entry, node, max_paths=1)
        if found:
            depth = max(depth, len(found[0]) - 1)
    return depth


__all__ = [
    "find_all_paths",
    "has_cycle",
    "is_dag",
    "node_depth",
    "reverse_dependencies",
    "strongly_connected_components",
    "topological_order",
    "transitive_dependencies",
]
