from __future__ import annotations

from typing import TYPE_CHECKING

from graph.builder import build_graph
from grouping.architecture import (
    STYLE_CLEAN,
    STYLE_EMPTY,
    STYLE_FEATURE_SLICED,
    STYLE_FLAT,
    STYLE_LAYERED,
    STYLE_MVC,
    assign_layer_dependencies,
    categorize_package,
    determine_architecture_style,
    find_entry_points,
    identify_external_dependencies,
    identify_layers,
)
from grouping.strategies import (
    ROOT_GROUP,
    group_by_directory,
    group_by_feature,
    group_by_layer,
    group_by_package,
    group_files,
)
from models.modules import Dependency, Relationship
from rules.config import LayersConfig

if TYPE_CHECKING:
    from pathlib import Path


def test_group_by_directory_truncates_to_depth() -> None:
    files = ["main.ts", "src/app/a.ts", "src/app/deep/b.ts", "src/lib/c.ts"]

    assert group_by_directory(files, depth=2) == {
        ROOT_GROUP: ["main.ts"],
        "src/app": ["src/app/a.ts", "src/app/deep/b.ts"],
        "src/lib": ["src/lib/c.ts"],
    }
    assert group_by_directory(files, depth=1) == {
        ROOT_GROUP: ["main.ts"],
        "src": ["src/app/a.ts", "src/app/deep/b.ts", "src/lib/c.ts"],
    }


def test_every_file_lands_in_exactly_one_group() -> None:
    files = ["a.py", "api/x.py", "models/y.py", "weird/z.py"]

    for groups in (
        group_by_directory(files),
        group_by_feature(files),
        group_by_layer(files),
    ):
        members = [path for group in groups.values() for path in group]
        assert sorted(members) == sorted(files)


def test_group_by_package_uses_nearest_marker(tmp_path: Path) -> None:
    (tmp_path / "pkg" / "sub").mkdir(parents=True)
    (tmp_path / "pkg" / "__init__.py").write_text("", encoding="utf-8")
    (tmp_path / "web").mkdir()
    (tmp_path / "web" / "package.json").write_text("{}", encoding="utf-8")
    files = ["pkg/a.py", "pkg/sub/b.py", "web/index.js", "loose.py"]

    assert group_by_package(files, tmp_path) == {
        "pkg": ["pkg/a.py", "pkg/sub/b.py"],
        "web": ["web/index.js"],
        ROOT_GROUP: ["loose.py"],
    }


def test_group_by_feature_uses_conventional_directories() -> None:
    groups = group_by_feature(
        ["src/api/users.ts", "src/models/user.ts", "src/components/Btn.tsx", "src/x.ts"]
    )

    assert groups == {
        "api": ["src/api/users.ts"],
        "models": ["src/models/user.ts"],
        "ui": ["src/components/Btn.tsx"],
        "other": ["src/x.ts"],
    }


def test_group_by_layer_with_custom_layers() -> None:
    config = LayersConfig.model_validate(
        {"layer": [{"name": "web", "globs": ["web/*"]}]}
    )

    groups = group_by_layer(["web/a.ts", "lib/b.ts"], config)

    assert groups == {"web": ["web/a.ts"], "unknown": ["lib/b.ts"]}


def test_group_files_dispatches_on_strategy(tmp_path: Path) -> None:
    files = ["src/services/a.ts"]

    assert group_files(files, "directory", root=tmp_path) == {"src/services": files}
    assert group_files(files, "feature", root=tmp_path) == {"services": files}
    assert group_files(files, "layer", root=tmp_path) == {"business": files}
    assert group_files(files, "package", root=tmp_path) == {ROOT_GROUP: files}


def test_identify_layers_puts_other_last() -> None:
    layers = identify_layers(
        ["src/index.ts", "src/controllers/a.ts", "src/services/b.ts"]
    )

    assert [layer.name for layer in layers] == ["Presentation", "Business Logic", "Other"]
    assert layers[-1].modules == ["src/index.ts"]


def test_layer_dependencies_follow_real_edges() -> None:
    files = ["src/controllers/a.ts", "src/services/b.ts", "src/db/c.ts"]
    graph = build_graph(
        files,
        [
            Relationship(source="src/controllers/a.ts", target="src/services/b.ts"),
            Relationship(source="src/services/b.ts", target="src/db/c.ts"),
        ],
    )
    layers = identify_layers(files)

    assign_layer_dependencies(layers, graph)

    by_name = {layer.name: layer for layer in layers}
    assert by_name["Presentation"].depends_on == ["Business Logic"]
    assert by_name["Business Logic"].depends_on == ["Data Access"]
    assert by_name["Data Access"].depends_on == []


def test_architecture_styles() -> None:
    def style(files: list[str]) -> str:
        return determine_architecture_style(identify_layers(files), files)

    assert style([]) == STYLE_EMPTY
    assert style(["src/features/auth/login.ts"]) == STYLE_FEATURE_SLICED
    assert style(["api/a.py", "services/b.py", "models/c.py"]) == STYLE_LAYERED
    assert (
        style(["api/a.py", "services/b.py", "models/c.py", "adapters/d.py"])
        == STYLE_CLEAN
    )
    assert style(["controllers/a.py", "models/c.py"]) == STYLE_MVC
    assert style(["a.py", "b.py"]) == STYLE_FLAT


def test_find_entry_points() -> None:
    files = ["src/index.ts", "src/app.ts", "src/util.ts", "pkg/__init__.py", "cli.py"]

    assert find_entry_points(files) == [
        "src/index.ts",
        "src/app.ts",
        "pkg/__init__.py",
        "cli.py",
    ]


def test_external_dependencies_aggregate_usage() -> None:
    deps = [
        Dependency(source="a.ts", target="react", kind="external", package_name="react"),
        Dependency(source="b.ts", target="react", kind="external", package_name="react"),
        Dependency(source="a.ts", target="lodash/fp", kind="external", package_name="lodash"),
        Dependency(source="a.ts", target="fs", kind="builtin", package_name="fs"),
    ]

    externals = identify_external_dependencies(deps)

    assert [(e.name, e.usage_count, e.used_by) for e in externals] == [
        ("react", 2, ["a.ts", "b.ts"]),
        ("lodash", 1, ["a.ts"]),
    ]
    assert externals[0].category == "framework"
    assert externals[1].category == "utility"


def test_categorize_package() -> None:
    assert categorize_package("@types/node") == "dev"
    assert categorize_package("pydantic") == "library"
