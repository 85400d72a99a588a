"""Strategies that partition the module set into named groups.

Every strategy returns an insertion-ordered mapping of group name to member
file ids; each file belongs to exactly one group.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from rules.layers import classify_layer

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from models.options import GroupBy
    from rules.config import LayersConfig

ROOT_GROUP = "root"

PACKAGE_MARKERS: tuple[str, ...] = (
    "package.json",
    "__init__.py",
    "setup.py",
    "pyproject.toml",
)

FEATURE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"/(api|routes?|endpoints?|handlers?)/", re.I), "api"),
    (re.compile(r"/(models?|entities?|schemas?)/", re.I), "models"),
    (re.compile(r"/(services?|business|domain)/", re.I), "services"),
    (re.compile(r"/(utils?|helpers?|lib|common)/", re.I), "utilities"),
    (re.compile(r"/(components?|ui|views?|pages?)/", re.I), "ui"),
    (re.compile(r"/(tests?|spec|__tests__)/", re.I), "tests"),
    (re.compile(r"/(config|settings?|constants?)/", re.I), "config"),
    (re.compile(r"/(middlewares?)/", re.I), "middleware"),
    (re.compile(r"/(repositories?|data|db|database)/", re.I), "data"),
)

OTHER_FEATURE = "other"


def _group(files: Iterable[str], key: Callable[[str], str]) -> dict[str, list[str]]:
    groups: dict[str, list[str]] = {}
    for path in files:
        groups.setdefault(key(path), []).append(path)
    return groups


def group_by_directory(files: Iterable[str], depth: int = 2) -> dict[str, list[str]]:
    """Group by the first ``depth`` directory segments; top-level files go to ``root``."""

    def key(path: str) -> str:
        parts = PurePosixPath(path).parent.parts[:depth]
        return "/".join(parts) or ROOT_GROUP

    return _group(files, key)


def group_by_package(files: Iterable[str], root: Path) -> dict[str, list[str]]:
    """Group by the nearest enclosing directory holding a package marker.

    The search never climbs above ``root``; files with no marker between
    themselves and the root go to ``root``.
    """
    package_of_dir: dict[str, str] = {}

    def find_package(rel_dir: PurePosixPath) -> str:
        cache_key = rel_dir.as_posix()
        if cache_key in package_of_dir:
            return package_of_dir[cache_key]
        current = rel_dir
        result = ROOT_GROUP
        while True:
            directory = root.joinpath(*current.parts)
            if any((directory / marker).is_file() for marker in PACKAGE_MARKERS):
                result = current.as_posix() if current.parts else ROOT_GROUP
                break
            if not current.parts:
                break
            current = current.parent
        package_of_dir[cache_key] = result
        return result

    return _group(files, lambda path: find_package(PurePosixPath(path).parent))


def feature_of(path: str) -> str:
    anchored = "/" + path
    for pattern, feature in FEATURE_RULES:
        if pattern.search(anchored):
            return feature
    return OTHER_FEATURE


def group_by_feature(files: Iterable[str]) -> dict[str, list[str]]:
    """Group by conventional feature directories (api, models, ui, ...)."""
    return _group(files, feature_of)


def group_by_layer(
    files: Iterable[str], layers_config: LayersConfig | None = None
) -> dict[str, list[str]]:
    """Group by architectural layer; unmatched files go to ``unknown``."""
    return _group(files, lambda path: classify_layer(path, layers_config).key)


def group_files(
    files: Iterable[str],
    strategy: GroupBy,
    *,
    root: Path,
    depth: int = 2,
    layers_config: LayersConfig | None = None,
) -> dict[str, list[str]]:
    """Dispatch to the grouping strategy named by ``strategy``."""
    if strategy == "package":
        return group_by_package(files, root)
    if strategy == "feature":
        return group_by_feature(files)
    if strategy == "layer":
        return group_by_layer(files, layers_config)
    return group_by_directory(files, depth)


__all__ = [
    "FEATURE_RULES",
    "PACKAGE_MARKERS",
    "ROOT_GROUP",
    "feature_of",
    "group_by_directory",
    "group_by_feature",
    "group_by_layer",
    "group_by_package",
    "group_files",
]
