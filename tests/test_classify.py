from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from resolve.builtins import is_node_builtin, is_python_builtin
from resolve.classify import (
    classify_ecmascript,
    classify_python,
    ecmascript_package_name,
    get_classifier,
)
from scan.languages import Language

if TYPE_CHECKING:
    from pathlib import Path


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    ("specifier", "expected"),
    [
        ("fs", True),
        ("fs/promises", True),
        ("node:test", True),
        ("lodash", False),
        ("./fs", False),
    ],
)
def test_is_node_builtin(specifier: str, expected: bool) -> None:
    assert is_node_builtin(specifier) is expected


def test_is_python_builtin_uses_top_level_package() -> None:
    assert is_python_builtin("os.path") is True
    assert is_python_builtin("collections") is True
    assert is_python_builtin("requests") is False
    assert is_python_builtin(".os") is False


def test_ecmascript_package_name() -> None:
    assert ecmascript_package_name("@babel/core/lib/parse") == "@babel/core"
    assert ecmascript_package_name("lodash/fp") == "lodash"
    assert ecmascript_package_name("react") == "react"


def test_relative_import_resolves_through_extensions_and_index(tmp_path: Path) -> None:
    source = _touch(tmp_path / "src" / "app.ts")
    _touch(tmp_path / "src" / "util.ts")
    _touch(tmp_path / "src" / "widgets" / "index.tsx")

    util = classify_ecmascript("./util", source, tmp_path)
    widgets = classify_ecmascript("./widgets", source, tmp_path)

    assert (util.kind, util.target) == ("internal", "src/util.ts")
    assert (widgets.kind, widgets.target) == ("internal", "src/widgets/index.tsx")
    assert util.source == "src/app.ts"


def test_esm_js_extension_maps_to_typescript_source(tmp_path: Path) -> None:
    source = _touch(tmp_path / "src" / "app.ts")
    _touch(tmp_path / "src" / "util.ts")

    dep = classify_ecmascript("./util.js", source, tmp_path)

    assert dep.target == "src/util.ts"


def test_unresolved_relative_import_stays_internal(tmp_path: Path) -> None:
    source = _touch(tmp_path / "src" / "app.ts")

    dep = classify_ecmascript("../missing/thing", source, tmp_path)

    assert dep.kind == "internal"
    assert dep.target == "missing/thing"


def test_bare_and_builtin_specifiers(tmp_path: Path) -> None:
    source = _touch(tmp_path / "app.js")

    external = classify_ecmascript("@scope/pkg/sub", source, tmp_path)
    builtin = classify_ecmascript("node:path", source, tmp_path)

    assert (external.kind, external.package_name) == ("external", "@scope/pkg")
    assert builtin.kind == "builtin"


def test_python_relative_imports(tmp_path: Path) -> None:
    source = _touch(tmp_path / "pkg" / "sub" / "mod.py")
    _touch(tmp_path / "pkg" / "sub" / "__init__.py")
    _touch(tmp_path / "pkg" / "sub" / "sibling.py")
    _touch(tmp_path / "pkg" / "helpers.py")

    sibling = classify_python(".sibling", source, tmp_path)
    package = classify_python(".", source, tmp_path)
    parent = classify_python("..helpers", source, tmp_path)

    assert sibling.target == "pkg/sub/sibling.py"
    assert package.target == "pkg/sub/__init__.py"
    assert parent.target == "pkg/helpers.py"
    assert {sibling.kind, package.kind, parent.kind} == {"internal"}


def test_python_absolute_imports(tmp_path: Path) -> None:
    source = _touch(tmp_path / "app.py")
    _touch(tmp_path / "src" / "core" / "__init__.py")
    _touch(tmp_path / "src" / "core" / "engine.py")

    local = classify_python("core.engine", source, tmp_path)
    stdlib = classify_python("json", source, tmp_path)
    external = classify_python("requests.adapters", source, tmp_path)

    assert (local.kind, local.target) == ("internal", "src/core/engine.py")
    assert stdlib.kind == "builtin"
    assert (external.kind, external.target, external.package_name) == (
        "external",
        "requests.adapters",
        "requests",
    )


def test_get_classifier_dispatches_by_language(tmp_path: Path) -> None:
    source = _touch(tmp_path / "app.py")

    dep = get_classifier(Language.PYTHON)("os", source, tmp_path)

    assert dep.kind == "builtin"
    assert get_classifier(Language.JAVASCRIPT)("os", source, tmp_path).kind == "builtin"
