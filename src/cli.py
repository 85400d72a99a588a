"""Command-line interface for depgraph-core."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from analysis import (
    analyze_complexity,
    detect_circular_dependencies,
    generate_dependency_graph,
    get_architecture_overview,
    map_module_relationships,
)
from errors import DepgraphError
from logconfig import setup_logging
from models.options import (
    ComplexityOptions,
    CycleOptions,
    GraphOptions,
    ModuleMapOptions,
    OverviewOptions,
)
from utils import dump_json, write_json

if TYPE_CHECKING:
    from pydantic import BaseModel

_LANGUAGES = ("auto", "typescript", "javascript", "python")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="File or directory to analyze (default: .)",
    )
    parser.add_argument(
        "--language",
        choices=_LANGUAGES,
        default="auto",
        help="Source language (default: detect from project files)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Extra exclude pattern; may be repeated",
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Write the JSON result to this file instead of stdout",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="depgraph")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for messages on stderr (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    graph_parser = subparsers.add_parser("graph", help="Generate a dependency graph")
    _add_common_arguments(graph_parser)
    graph_parser.add_argument(
        "--format",
        choices=("mermaid", "dot", "json"),
        default="mermaid",
        help="Graph output format (default: mermaid)",
    )
    graph_parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Maximum directory depth to scan (default: config max_scan_depth)",
    )
    graph_parser.add_argument(
        "--include-external",
        action="store_true",
        help="Keep third-party and unresolved imports as graph nodes",
    )

    cycles_parser = subparsers.add_parser(
        "cycles", help="Detect circular dependencies"
    )
    _add_common_arguments(cycles_parser)
    cycles_parser.add_argument(
        "--max-cycles",
        type=int,
        default=None,
        help="Maximum number of cycles to report (default: config, 20)",
    )

    modules_parser = subparsers.add_parser(
        "modules", help="Map module relationships, coupling and cohesion"
    )
    _add_common_arguments(modules_parser)
    modules_parser.add_argument(
        "--group-by",
        choices=("directory", "package", "feature", "layer"),
        default=None,
        help="Grouping strategy (default: config, directory)",
    )
    modules_parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Directory depth for directory grouping (default: config, 2)",
    )

    complexity_parser = subparsers.add_parser(
        "complexity", help="Analyze cyclomatic complexity"
    )
    _add_common_arguments(complexity_parser)
    complexity_parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Complexity threshold for hotspots (default: config, 10)",
    )

    overview_parser = subparsers.add_parser(
        "overview", help="Summarize the project's architecture"
    )
    _add_common_arguments(overview_parser)

    return parser


def _common_options(args: argparse.Namespace) -> dict[str, object]:
    return {"path": args.path, "language": args.language, "exclude": args.exclude}


def _run(args: argparse.Namespace) -> BaseModel:
    common = _common_options(args)
    if args.command == "graph":
        return generate_dependency_graph(
            GraphOptions(
                **common,
                format=args.format,
                depth=args.depth,
                include_external=args.include_external,
            )
        )
    if args.command == "cycles":
        return detect_circular_dependencies(
            CycleOptions(**common, max_cycles=args.max_cycles)
        )
    if args.command == "modules":
        return map_module_relationships(
            ModuleMapOptions(**common, group_by=args.group_by, depth=args.depth)
        )
    if args.command == "complexity":
        return analyze_complexity(
            ComplexityOptions(**common, threshold=args.threshold)
        )
    if args.command == "overview":
        return get_architecture_overview(OverviewOptions(**common))
    raise AssertionError


def _emit(result: BaseModel, out: str | None) -> None:
    if out is None:
        sys.stdout.buffer.write(dump_json(result))
        sys.stdout.buffer.write(b"\n")
        sys.stdout.flush()
        return
    write_json(Path(out).expanduser().resolve(), result)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        result = _run(args)
    except (DepgraphError, ValidationError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    _emit(result, args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
