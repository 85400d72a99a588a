"""Supported languages and project language detection."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

    from models.modules import ModuleLanguage

logger = structlog.get_logger(__name__)


class Language(str, Enum):
    """Scan language; selects the file set, extractor and resolver."""

    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"


# TypeScript projects routinely mix in plain JavaScript sources.
SCAN_EXTENSIONS: dict[Language, tuple[str, ...]] = {
    Language.TYPESCRIPT: (".ts", ".tsx", ".mts", ".cts", ".js", ".jsx"),
    Language.JAVASCRIPT: (".js", ".jsx", ".mjs", ".cjs"),
    Language.PYTHON: (".py",),
}

_TS_EXTENSIONS = frozenset({".ts", ".tsx", ".mts", ".cts"})
_JS_EXTENSIONS = frozenset({".js", ".jsx", ".mjs", ".cjs"})

_PYTHON_MARKERS = ("requirements.txt", "setup.py", "pyproject.toml")


def detect_language(directory: Path) -> Language:
    """Guess the dominant language of a project directory.

    Marker files win (``tsconfig.json`` for TypeScript, then the Python
    packaging files); otherwise the top-level file extensions are counted.
    Falls back to JavaScript.
    """
    if (directory / "tsconfig.json").is_file():
        return Language.TYPESCRIPT
    if any((directory / marker).is_file() for marker in _PYTHON_MARKERS):
        return Language.PYTHON

    ts_count = js_count = py_count = 0
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.warning("scan.detect_failed", path=str(directory), error=str(exc))
        return Language.JAVASCRIPT

    for entry in entries:
        if not entry.is_file():
            continue
        suffix = entry.suffix
        if suffix in _TS_EXTENSIONS:
            ts_count += 1
        elif suffix in _JS_EXTENSIONS:
            js_count += 1
        elif suffix == ".py":
            py_count += 1

    if ts_count > js_count and ts_count > py_count:
        return Language.TYPESCRIPT
    if py_count > js_count:
        return Language.PYTHON
    return Language.JAVASCRIPT


def language_for_extension(suffix: str) -> Language | None:
    """Map a single file extension to its scan language, if supported."""
    if suffix in _TS_EXTENSIONS:
        return Language.TYPESCRIPT
    if suffix in _JS_EXTENSIONS:
        return Language.JAVASCRIPT
    if suffix == ".py":
        return Language.PYTHON
    return None


def resolve_language(requested: str, path: Path) -> Language:
    """Turn a language option (possibly ``"auto"``) into a :class:`Language`.

    For a single file the extension decides; for a directory the marker and
    extension heuristics of :func:`detect_language` apply.
    """
    if requested != "auto":
        return Language(requested)
    if path.is_file():
        by_extension = language_for_extension(path.suffix)
        if by_extension is not None:
            return by_extension
        return detect_language(path.parent)
    return detect_language(path)


def module_language(suffix: str) -> ModuleLanguage:
    """Language tag recorded on a :class:`~models.modules.ModuleInfo`."""
    language = language_for_extension(suffix)
    return language.value if language is not None else "unknown"


__all__ = [
    "SCAN_EXTENSIONS",
    "Language",
    "detect_language",
    "language_for_extension",
    "module_language",
    "resolve_language",
]
