"""Exception hierarchy for depgraph-core."""

from __future__ import annotations

from pathlib import Path


class DepgraphError(Exception):
    """Base class for all errors raised by depgraph-core."""


class InvalidInputError(DepgraphError):
    """Raised when the analysis path is missing or has the wrong type."""


class FileParseError(DepgraphError):
    """Raised when a single source file cannot be read or decoded.

    Operations recover from this error: the file is skipped and a
    diagnostic is recorded in the result.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path).as_posix()
        self.message = message
        super().__init__(f"{self.path}: {message}")


__all__ = ["DepgraphError", "FileParseError", "InvalidInputError"]
