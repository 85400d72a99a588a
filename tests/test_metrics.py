from __future__ import annotations

import pytest

from graph.builder import build_graph
from metrics.complexity import (
    complexity_distribution,
    file_complexity,
    maintainability_index,
)
from metrics.coupling import (
    abstractness,
    build_module_groups,
    compute_coupling_metrics,
    group_cohesion,
    group_coupling,
    overall_cohesion,
)
from metrics.hotspots import identify_hotspots
from models.metrics import FunctionComplexity, ModuleGroup
from models.modules import Relationship
from rules.config import ComplexityConfig


def _rel(source: str, target: str) -> Relationship:
    return Relationship(source=source, target=target)


def _fn(name: str, complexity: int, line: int = 1) -> FunctionComplexity:
    return FunctionComplexity(
        name=name, start_line=line, end_line=line + 5, complexity=complexity
    )


def test_instability_and_distance_stay_in_unit_interval() -> None:
    files = ["src/app.ts", "src/service.ts", "src/types.ts", "src/lone.ts"]
    graph = build_graph(
        files,
        [
            _rel("src/app.ts", "src/service.ts"),
            _rel("src/service.ts", "src/types.ts"),
            _rel("src/app.ts", "src/types.ts"),
        ],
    )

    metrics = compute_coupling_metrics(graph)

    assert set(metrics) == set(files)
    for value in metrics.values():
        assert 0.0 <= value.instability <= 1.0
        assert 0.0 <= value.distance <= 1.0
    assert metrics["src/app.ts"].instability == 1.0
    assert metrics["src/types.ts"].instability == 0.0
    assert metrics["src/types.ts"].abstractness == 1.0
    assert metrics["src/types.ts"].distance == 0.0
    assert metrics["src/service.ts"].instability == pytest.approx(0.5)
    assert metrics["src/lone.ts"].instability == 0.0


def test_abstractness_matches_interface_like_paths() -> None:
    assert abstractness("src/interfaces/user.ts") == 0.0
    assert abstractness("src/interface/user.ts") == 1.0
    assert abstractness("src/user.types.ts") == 1.0
    assert abstractness("src/user.ts") == 0.0


def test_single_file_group_has_full_cohesion_and_no_coupling() -> None:
    graph = build_graph(["a.py", "b.py"], [_rel("a.py", "b.py")])

    assert group_cohesion(["a.py"], graph) == 1.0
    assert group_coupling(["a.py"], graph.nodes(), graph) == 0.0


def test_cohesion_counts_internal_edges_only() -> None:
    files = ["g/a", "g/b", "g/c", "other"]
    graph = build_graph(
        files,
        [_rel("g/a", "g/b"), _rel("g/b", "g/a"), _rel("g/a", "other"), _rel("g/a", "g/a")],
    )

    assert group_cohesion(["g/a", "g/b", "g/c"], graph) == pytest.approx(2 / 6)


def test_coupling_is_zero_when_group_holds_every_node() -> None:
    graph = build_graph(["a", "b"], [_rel("a", "b")])

    assert group_coupling(["a", "b"], ["a", "b"], graph) == 0.0


def test_coupling_counts_boundary_crossings() -> None:
    graph = build_graph(
        ["a", "b", "c"], [_rel("a", "c"), _rel("c", "b"), _rel("a", "b")]
    )

    assert group_coupling(["a", "b"], graph.nodes(), graph) == pytest.approx(2 / 3)


def test_overall_cohesion_is_size_weighted() -> None:
    groups = [
        ModuleGroup(name="x", modules=["a", "b", "c"], cohesion=0.5),
        ModuleGroup(name="y", modules=["d"], cohesion=1.0),
    ]

    assert overall_cohesion(groups) == pytest.approx((1.5 + 1.0) / 4)
    assert overall_cohesion([]) == 0.0


def test_build_module_groups_skips_external_nodes_for_coupling() -> None:
    graph = build_graph(
        ["a", "b"],
        [_rel("a", "b"), _rel("a", "lodash")],
        include_external=True,
    )

    (group,) = build_module_groups({"all": ["a", "b"]}, graph)

    assert group.cohesion == pytest.approx(0.5)
    assert group.coupling == 0.0


def test_function_without_branches_has_complexity_one() -> None:
    record = file_complexity("a.py", [_fn("f", 1)], 3)

    assert record.cyclomatic_complexity == 1
    assert record.function_count == 1


def test_file_without_functions_has_complexity_one() -> None:
    record = file_complexity("consts.py", [], 10)

    assert record.cyclomatic_complexity == 1
    assert record.function_count == 0
    assert 0 <= record.maintainability_index <= 100


def test_file_complexity_sums_functions() -> None:
    record = file_complexity("a.py", [_fn("f", 3), _fn("g", 4, line=10)], 40)

    assert record.cyclomatic_complexity == 7


def test_maintainability_index_is_clamped() -> None:
    assert maintainability_index(1, 0) == 100
    assert maintainability_index(1000, 1_000_000) == 0
    assert 0 < maintainability_index(5, 200) < 100


def test_complexity_distribution_buckets() -> None:
    files = [
        file_complexity("low", [_fn("f", 3)], 10),
        file_complexity("medium", [_fn("f", 12)], 10),
        file_complexity("high", [_fn("f", 25)], 10),
        file_complexity("very_high", [_fn("f", 40)], 10),
    ]

    distribution = complexity_distribution(files, 10)

    assert distribution.model_dump() == {
        "low": 1,
        "medium": 1,
        "high": 1,
        "very_high": 1,
    }


def test_hotspots_flag_functions_at_threshold_and_sort_by_priority() -> None:
    files = [
        file_complexity("a.py", [_fn("small", 10, line=4)], 20),
        file_complexity("b.py", [_fn("huge", 31, line=7)], 20),
    ]

    hotspots = identify_hotspots(files, 10, ComplexityConfig())

    assert hotspots[0].priority == "critical"
    assert hotspots[0].path == "b.py"
    function_hotspots = [h for h in hotspots if h.function_name is not None]
    assert [(h.function_name, h.priority) for h in function_hotspots] == [
        ("huge", "critical"),
        ("small", "low"),
    ]
    assert function_hotspots[1].reason == "Function 'small' has complexity 10 (threshold: 10)"


def test_hotspots_flag_low_maintainability() -> None:
    record = file_complexity("big.py", [_fn("f", 2)], 100_000)

    hotspots = identify_hotspots([record], 10, ComplexityConfig())

    assert record.maintainability_index < 10
    assert [h.reason for h in hotspots] == [
        f"Low maintainability index ({record.maintainability_index}/100)"
    ]
    assert hotspots[0].priority == "critical"


def test_complexity_config_rejects_unordered_factors() -> None:
    with pytest.raises(ValueError, match="medium <= high <= critical"):
        ComplexityConfig(medium_factor=3.0, high_factor=2.0)
