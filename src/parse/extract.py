"""Language dispatch and per-run memoization of extraction results."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from parse.ecmascript import extract_ecmascript
from parse.python_scanner import extract_python
from scan.languages import Language

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from parse.base import ExtractionResult

    Extractor = Callable[[Path, str], ExtractionResult]

logger = structlog.get_logger(__name__)

_EXTRACTORS: dict[Language, Extractor] = {
    Language.TYPESCRIPT: extract_ecmascript,
    Language.JAVASCRIPT: extract_ecmascript,
    Language.PYTHON: extract_python,
}


def get_extractor(language: Language) -> Extractor:
    """Return the extractor used for every file of a scan in ``language``."""
    return _EXTRACTORS[language]


class ParseCache:
    """Memoizes extraction results by absolute path for one analysis run.

    Pass the same instance to several operations to parse each file once.
    Failed reads are not cached.
    """

    def __init__(self) -> None:
        self._results: dict[Path, ExtractionResult] = {}
        self.hits = 0
        self.misses = 0

    def get_or_extract(
        self, path: Path, rel_path: str, extractor: Extractor
    ) -> ExtractionResult:
        cached = self._results.get(path)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        result = extractor(path, rel_path)
        self._results[path] = result
        return result

    def __contains__(self, path: object) -> bool:
        return path in self._results

    def __len__(self) -> int:
        return len(self._results)

    def clear(self) -> None:
        self._results.clear()
        self.hits = 0
        self.misses = 0


__all__ = ["ParseCache", "get_extractor"]
