from __future__ import annotations

from typing import TYPE_CHECKING

from parse.ecmascript import extract_ecmascript

if TYPE_CHECKING:
    from pathlib import Path

TS_SOURCE = """import React from "react";
import { a, b as c } from "./util";
import * as ns from "./ns";
export { x } from "./x";
export * from "./all";

const lazy = () => import("./lazy");
const fs = require("fs");

export function run(flag: boolean, n: number): number {
  if (flag && n > 0) {
    return 1;
  }
  for (let i = 0; i < n; i++) {
    if (i % 2) {
      continue;
    }
  }
  return 0;
}

export const helper = (x: number) => x * 2;

export default class App {
  render(): string {
    return this.ready ? "ready" : "waiting";
  }
}
"""

JS_SOURCE = """const path = require("path");
const util = require("./util");

function outer(items) {
  return items.map((item) => (item ? item.value : null));
}

module.exports = outer;
exports.helper = function () {
  return path.sep;
};
"""


def _write(tmp_path: Path, name: str, source: str) -> Path:
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return path


def test_typescript_imports_by_kind(tmp_path: Path) -> None:
    result = extract_ecmascript(_write(tmp_path, "app.ts", TS_SOURCE), "app.ts")

    records = [(r.specifier, r.kind, r.names) for r in result.imports]
    assert records == [
        ("react", "import", ["default"]),
        ("./util", "import", ["a", "b"]),
        ("./ns", "import", ["*"]),
        ("./x", "re-export", ["x"]),
        ("./all", "re-export", ["*"]),
        ("./lazy", "dynamic-import", []),
        ("fs", "require", []),
    ]
    assert result.imports[1].weight == 2
    assert result.imports[0].line == 1


def test_typescript_exports(tmp_path: Path) -> None:
    result = extract_ecmascript(_write(tmp_path, "app.ts", TS_SOURCE), "app.ts")

    assert set(result.module.exports) == {"x", "run", "helper", "default"}
    assert result.module.language == "typescript"
    assert result.module.name == "app"


def test_typescript_function_complexity(tmp_path: Path) -> None:
    result = extract_ecmascript(_write(tmp_path, "app.ts", TS_SOURCE), "app.ts")

    by_name = {fn.name: fn for fn in result.functions}
    assert set(by_name) == {"lazy", "run", "helper", "render"}

    run = by_name["run"]
    assert run.complexity == 5
    assert run.parameter_count == 2
    assert run.max_nesting_depth == 2
    assert run.start_line == 10

    assert by_name["lazy"].complexity == 1
    assert by_name["helper"].complexity == 1
    assert by_name["helper"].parameter_count == 1
    assert by_name["render"].complexity == 2
    assert result.partial is False


def test_javascript_commonjs_requires_and_exports(tmp_path: Path) -> None:
    result = extract_ecmascript(_write(tmp_path, "lib.js", JS_SOURCE), "lib.js")

    assert [(r.specifier, r.kind) for r in result.imports] == [
        ("path", "require"),
        ("./util", "require"),
    ]
    assert result.module.exports == ["default", "helper"]
    assert result.module.language == "javascript"


def test_anonymous_callbacks_count_toward_enclosing_function(tmp_path: Path) -> None:
    result = extract_ecmascript(_write(tmp_path, "lib.js", JS_SOURCE), "lib.js")

    by_name = {fn.name: fn for fn in result.functions}
    assert set(by_name) == {"outer", "helper"}
    assert by_name["outer"].complexity == 2
    assert by_name["helper"].parameter_count == 0


def test_tsx_uses_jsx_aware_grammar(tmp_path: Path) -> None:
    source = """import { useState } from "react";

export function Button({ label }: { label: string }) {
  const [on, setOn] = useState(false);
  return <button onClick={() => setOn(!on)}>{on && label}</button>;
}
"""
    result = extract_ecmascript(_write(tmp_path, "Button.tsx", source), "Button.tsx")

    assert result.partial is False
    assert [fn.name for fn in result.functions] == ["Button"]
    assert result.functions[0].complexity == 2
    assert result.module.exports == ["Button"]


def test_syntax_errors_produce_partial_result(tmp_path: Path) -> None:
    source = 'import { a } from "./a";\nfunction broken( {\n'
    result = extract_ecmascript(_write(tmp_path, "broken.js", source), "broken.js")

    assert result.partial is True
    assert [r.specifier for r in result.imports] == ["./a"]
