from __future__ import annotations

from graph.builder import build_graph
from graph.cycles import (
    GENERIC_SUGGESTIONS,
    cycle_recommendations,
    cycle_severity,
    find_cycles,
    weakest_edge,
)
from models.modules import Relationship


def _rel(source: str, target: str, weight: int = 1) -> Relationship:
    return Relationship(source=source, target=target, kind="import", weight=weight)


def test_three_module_ring_is_one_medium_cycle() -> None:
    files = ["a.ts", "b.ts", "c.ts"]
    graph = build_graph(
        files, [_rel("a.ts", "b.ts"), _rel("b.ts", "c.ts"), _rel("c.ts", "a.ts")]
    )

    cycles = find_cycles(graph)

    assert len(cycles) == 1
    cycle = cycles[0]
    assert cycle.length == 3
    assert cycle.severity == "medium"
    assert set(cycle.nodes) == set(files)
    assert cycle.description.startswith("Circular dependency involving 3 modules:")


def test_mutual_import_is_length_two_cycle() -> None:
    graph = build_graph(["a.py", "b.py"], [_rel("a.py", "b.py"), _rel("b.py", "a.py")])

    cycles = find_cycles(graph)

    assert len(cycles) == 1
    assert cycles[0].length == 2
    assert cycles[0].severity == "low"


def test_self_import_produces_no_cycle() -> None:
    graph = build_graph(["a.py"], [_rel("a.py", "a.py")])

    assert find_cycles(graph) == []


def test_severity_grows_with_length_and_importers() -> None:
    assert cycle_severity(2, 0) == "low"
    assert cycle_severity(2, 2) == "medium"
    assert cycle_severity(4, 0) == "high"
    assert cycle_severity(2, 5) == "high"
    assert cycle_severity(5, 0) == "critical"
    assert cycle_severity(2, 10) == "critical"


def test_outside_importers_raise_severity() -> None:
    files = ["a", "b", "x", "y"]
    graph = build_graph(
        files,
        [_rel("a", "b"), _rel("b", "a"), _rel("x", "a"), _rel("y", "b"), _rel("x", "b")],
    )

    (cycle,) = find_cycles(graph)

    assert cycle.severity == "medium"


def test_weakest_edge_suggestion_names_lowest_weight_edge() -> None:
    graph = build_graph(
        ["src/a.ts", "src/b.ts"],
        [_rel("src/a.ts", "src/b.ts", weight=3), _rel("src/b.ts", "src/a.ts", weight=1)],
    )

    (cycle,) = find_cycles(graph)

    assert weakest_edge(cycle.nodes, graph) == ("src/b.ts", "src/a.ts")
    assert cycle.suggestions[0] == (
        "Consider breaking the dependency from 'b.ts' to 'a.ts' "
        "as it appears to be the weakest link."
    )
    assert cycle.suggestions[1:] == list(GENERIC_SUGGESTIONS)


def test_cycles_sorted_most_severe_first() -> None:
    ring = [f"r{i}" for i in range(5)]
    rels = [_rel(ring[i], ring[(i + 1) % 5]) for i in range(5)]
    rels += [_rel("p", "q"), _rel("q", "p")]
    graph = build_graph(["p", "q", *ring], rels)

    cycles = find_cycles(graph)

    assert [cycle.severity for cycle in cycles] == ["critical", "low"]


def test_recommendations_for_no_cycles() -> None:
    assert cycle_recommendations([]) == ["No circular dependencies detected."]


def test_recommendations_mention_two_node_cycles() -> None:
    graph = build_graph(["a", "b"], [_rel("a", "b"), _rel("b", "a")])

    recommendations = cycle_recommendations(find_cycles(graph))

    assert any("Two-node cycles" in line for line in recommendations)
