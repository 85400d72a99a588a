from __future__ import annotations

import io
import shutil
import sys
from pathlib import Path

import orjson
import pytest

from analysis import detect_circular_dependencies
from cli import main
from models.options import CycleOptions


def _copy_mini_repo_fixture(root: Path) -> None:
    fixture_repo = Path(__file__).parent / "fixtures" / "mini_repo"
    shutil.copytree(fixture_repo, root)


def test_cli_graph_writes_json_to_out(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)

    out = tmp_path / "reports" / "graph.json"
    exit_code = main(["graph", str(repo_root), "--format", "json", "--out", str(out)])

    assert exit_code == 0
    result = orjson.loads(out.read_bytes())
    assert result["format"] == "json"
    assert result["file_count"] == 6
    assert len(orjson.loads(result["graph"])["nodes"]) == 6


def test_cli_cycles_prints_sorted_json(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)

    exit_code = main(["cycles", str(repo_root), "--max-cycles", "5"])

    assert exit_code == 0
    result = orjson.loads(capsys.readouterr().out)
    assert result["has_cycles"] is True
    assert result["total_cycles"] == 1
    assert list(result) == sorted(result)


@pytest.mark.parametrize(
    "argv",
    [
        ["modules", "--group-by", "feature"],
        ["complexity", "--threshold", "3"],
        ["overview"],
    ],
)
def test_cli_subcommands_succeed(tmp_path: Path, argv: list[str]) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)
    out = tmp_path / "out.json"

    exit_code = main([argv[0], str(repo_root), *argv[1:], "--out", str(out)])

    assert exit_code == 0
    assert out.read_bytes().startswith(b"{")


def test_cli_defaults_to_current_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)
    out = tmp_path / "overview.json"

    monkeypatch.chdir(repo_root)
    exit_code = main(["overview", "--out", str(out)])

    assert exit_code == 0
    assert orjson.loads(out.read_bytes())["summary"]["total_files"] == 6


def test_cli_missing_path_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "missing"

    exit_code = main(["cycles", str(missing)])

    assert exit_code == 2
    captured = capsys.readouterr()
    assert f"Path does not exist: {missing}" in captured.err
    assert captured.out == ""


def test_cli_invalid_config_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)
    (repo_root / "depgraph.toml").write_text("[graph]\nmax_nodes = 0\n", encoding="utf-8")

    exit_code = main(["graph", str(repo_root)])

    assert exit_code == 2
    assert "Invalid config" in capsys.readouterr().err


def test_cli_rejects_invalid_option_values(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["graph", str(tmp_path), "--depth", "0"])

    assert exit_code == 2
    assert "depth" in capsys.readouterr().err


def test_cli_requires_subcommand() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 2


def test_warnings_after_cli_run_follow_the_current_stderr(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)
    (repo_root / "pkg_a" / "broken.py").write_bytes(b"\xff\xfe\xfa")

    stale_stderr = io.StringIO()
    monkeypatch.setattr(sys, "stderr", stale_stderr)
    assert main(["overview", str(repo_root), "--out", str(tmp_path / "a.json")]) == 0
    monkeypatch.undo()
    stale_stderr.close()

    result = detect_circular_dependencies(CycleOptions(path=str(repo_root)))

    assert [(d.path, d.stage) for d in result.diagnostics] == [
        ("pkg_a/broken.py", "read")
    ]
    assert "parse.skipped" in capsys.readouterr().err
