"""Shared utilities for depgraph-core."""

from __future__ import annotations

import os
from dataclasses import asdict, is_dataclass
from pathlib import Path, PurePosixPath

import orjson


def relative_posix(path: str | Path, root: str | Path) -> str:
    """Return ``path`` relative to ``root`` as a posix string.

    Paths outside ``root`` keep their ``..`` segments rather than raising, so
    unresolved imports that point above the project still get a stable id.

    Examples:
        >>> relative_posix("/repo/src/a.ts", "/repo")
        'src/a.ts'
        >>> relative_posix("/repo/../lib/b.ts", "/repo")
        '../lib/b.ts'
    """
    rel = os.path.relpath(os.path.normpath(path), os.path.normpath(root))
    return PurePosixPath(*Path(rel).parts).as_posix()


def short_name(path: str) -> str:
    """Return the last path segment of a node id."""
    return path.rsplit("/", 1)[-1] or path


def strip_extension(name: str) -> str:
    """Drop the final extension from a file name (``a.test.ts`` -> ``a.test``)."""
    stem, dot, _ext = name.rpartition(".")
    return stem if dot and stem else name


def to_dict(obj: object) -> object:
    """Convert pydantic models and dataclasses to plain data for JSON output."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return obj


def dump_json(obj: object) -> bytes:
    """Serialize ``obj`` as sorted, indented JSON bytes."""
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(to_dict(obj), option=opts)


def write_json(path: Path, obj: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dump_json(obj) + b"\n")


__all__ = [
    "dump_json",
    "relative_posix",
    "short_name",
    "strip_extension",
    "to_dict",
    "write_json",
]
