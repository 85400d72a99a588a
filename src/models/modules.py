"""Module and import models.

These models describe what the language extractors pull out of a single
source file, and how each raw import specifier is classified.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ModuleLanguage = Literal["typescript", "javascript", "python", "unknown"]

ImportKind = Literal["import", "re-export", "dynamic-import", "require"]

DependencyKind = Literal["internal", "external", "builtin"]


class ImportRecord(BaseModel):
    """One syntactic import site inside a source file."""

    specifier: str = Field(description="Raw module specifier as written")
    kind: ImportKind = "import"
    names: list[str] = Field(
        default_factory=list,
        description="Imported bindings ('default', '*' or a named binding)",
    )
    line: int = Field(default=1, ge=1)

    @property
    def weight(self) -> int:
        """Number of bindings pulled in by this import (at least 1)."""
        return max(1, len(self.names))


class ModuleInfo(BaseModel):
    """A scanned source file."""

    path: str = Field(description="Path relative to the analysis root (posix)")
    name: str = Field(description="Base name without extension")
    language: ModuleLanguage
    imports: list[str] = Field(
        default_factory=list,
        description="Raw import specifiers, deduplicated in first-seen order",
    )
    exports: list[str] = Field(
        default_factory=list,
        description="Exported names, deduplicated in first-seen order",
    )
    size: int = Field(default=0, ge=0, description="File size in bytes")
    lines: int = Field(default=0, ge=0)


class Dependency(BaseModel):
    """A classified import from one module."""

    source: str
    target: str = Field(
        description=(
            "Resolved file path for internal imports, raw specifier for "
            "external and builtin imports"
        )
    )
    kind: DependencyKind
    package_name: str | None = Field(
        default=None, description="Package identity for external imports"
    )
    import_statements: list[str] = Field(default_factory=list)


class Relationship(BaseModel):
    """A directed file-to-file relationship derived from an import."""

    source: str
    target: str
    kind: ImportKind = "import"
    imports: list[str] = Field(default_factory=list)
    weight: int = Field(default=1, ge=1)


class Diagnostic(BaseModel):
    """A recovered problem encountered while analyzing a single file."""

    path: str
    stage: Literal["read", "parse", "scan"] = "read"
    message: str


__all__ = [
    "Dependency",
    "DependencyKind",
    "Diagnostic",
    "ImportKind",
    "ImportRecord",
    "ModuleInfo",
    "ModuleLanguage",
    "Relationship",
]
