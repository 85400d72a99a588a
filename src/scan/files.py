"""Source file discovery for depgraph-core."""

from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, cast

import structlog
from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

logger = structlog.get_logger(__name__)

DEFAULT_EXCLUDES: tuple[str, ...] = (
    "node_modules",
    "dist",
    "build",
    ".git",
    "coverage",
    "__pycache__",
    "venv",
    ".venv",
)

DEFAULT_MAX_DEPTH = 20

_GLOB_CHARS = frozenset("*?[")


def merge_excludes(extra: Iterable[str] | None = None) -> list[str]:
    """Union the default exclude set with user patterns, preserving order."""
    merged = dict.fromkeys(DEFAULT_EXCLUDES)
    merged.update(dict.fromkeys(pattern for pattern in extra or () if pattern))
    return list(merged)


def is_excluded(name: str, rel_path: str, patterns: Iterable[str]) -> bool:
    """Return True when an entry matches any exclude pattern.

    A plain pattern matches an entry whose name equals it or ends with it.
    Patterns containing glob characters are also matched with ``fnmatch``
    against the entry name and its root-relative path.
    """
    for pattern in patterns:
        if name == pattern or name.endswith(pattern):
            return True
        if _GLOB_CHARS.intersection(pattern) and (
            fnmatch(name, pattern) or fnmatch(rel_path, pattern)
        ):
            return True
    return False


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        path.resolve().relative_to(root)
    except (OSError, ValueError):
        return False
    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(root.rglob(".gitignore"))
    unique_paths = {path for path in gitignore_paths if path.is_file()}
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                # Path lies outside this .gitignore's directory.
                continue
        return False

    return matches


def _should_include_file(
    path: Path,
    root: Path,
    rel_path: str,
    extensions: tuple[str, ...],
    exclude_patterns: list[str],
    gitignore_matches: Callable[[str], bool] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if path.is_symlink() or not path.is_file():
        return False

    if path.suffix not in extensions:
        return False

    if is_excluded(path.name, rel_path, exclude_patterns):
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    return _is_within_root(path, root)


def find_source_files(
    directory: Path,
    *,
    extensions: tuple[str, ...],
    exclude_patterns: Iterable[str] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    use_gitignore: bool = True,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find source files under ``directory``.

    The walk never follows symlinks, never leaves the root and does not
    descend more than ``max_depth`` directories below it.

    Args:
        directory: Project root to scan.
        extensions: File suffixes to collect (e.g. ``(".py",)``).
        exclude_patterns: Extra patterns, unioned with :data:`DEFAULT_EXCLUDES`.
        max_depth: Maximum directory depth below the root.
        use_gitignore: Skip paths ignored by the root ``.gitignore``.
        nested_gitignore: Also honor ``.gitignore`` files in subdirectories.

    Yields:
        Absolute paths, sorted by their root-relative posix path.
    """
    root = directory.resolve()
    patterns = merge_excludes(exclude_patterns)
    gitignore_matches = (
        _build_gitignore_matcher(root, nested_gitignore=nested_gitignore)
        if use_gitignore
        else None
    )

    def _on_walk_error(err: OSError) -> None:
        logger.warning("scan.unreadable_dir", path=err.filename, error=err.strerror)

    matched: list[tuple[str, Path]] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        current = Path(dirpath)
        rel_dir = current.relative_to(root)
        depth = len(rel_dir.parts)

        kept: list[str] = []
        for name in sorted(dirnames):
            child = current / name
            rel_child = (rel_dir / name).as_posix()
            if child.is_symlink() or depth + 1 > max_depth:
                continue
            if is_excluded(name, rel_child, patterns):
                continue
            if gitignore_matches is not None and gitignore_matches(str(child)):
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in filenames:
            path = current / name
            rel_path = (rel_dir / name).as_posix()
            if _should_include_file(
                path, root, rel_path, extensions, patterns, gitignore_matches
            ):
                matched.append((rel_path, path))

    matched.sort(key=lambda item: item[0])
    logger.debug("scan.complete", root=str(root), files=len(matched))

    yield from (path for _rel, path in matched)


__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_MAX_DEPTH",
    "find_source_files",
    "is_excluded",
    "merge_excludes",
]
