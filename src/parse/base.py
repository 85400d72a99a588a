"""Shared types and helpers for the language extractors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from errors import FileParseError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from models.metrics import FunctionComplexity
    from models.modules import ImportRecord, ModuleInfo


@dataclass(frozen=True)
class ExtractionResult:
    """Everything one extractor pass learns about a single file."""

    module: ModuleInfo
    imports: list[ImportRecord] = field(default_factory=list)
    functions: list[FunctionComplexity] = field(default_factory=list)
    lines_of_code: int = 0
    partial: bool = False


def read_source(path: Path) -> tuple[bytes, str]:
    """Read a source file, returning its raw bytes and decoded text.

    Raises:
        FileParseError: If the file cannot be read or is not UTF-8 text.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"cannot read file: {exc.strerror or exc}"
        raise FileParseError(path, msg) from exc

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        msg = f"not valid UTF-8 text: {exc.reason} at byte {exc.start}"
        raise FileParseError(path, msg) from exc

    return raw, text


def count_lines(text: str) -> int:
    return text.count("\n") + 1


def count_code_lines(text: str, comment_prefixes: tuple[str, ...]) -> int:
    """Count non-blank lines that do not start with a comment marker."""
    total = 0
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith(comment_prefixes):
            total += 1
    return total


def dedupe(values: Iterable[str]) -> list[str]:
    """Drop duplicates and empty strings, keeping first-seen order."""
    return [value for value in dict.fromkeys(values) if value]


__all__ = [
    "ExtractionResult",
    "count_code_lines",
    "count_lines",
    "dedupe",
    "read_source",
]
