"""Shared scan → extract → classify pipeline used by every operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from errors import FileParseError, InvalidInputError
from models.modules import Dependency, Diagnostic, Relationship
from parse.extract import ParseCache, get_extractor
from resolve.classify import get_classifier
from rules.config import load_config
from scan.files import find_source_files
from scan.languages import SCAN_EXTENSIONS, Language, resolve_language
from utils import relative_posix

if TYPE_CHECKING:
    from models.metrics import FunctionComplexity
    from models.modules import ModuleInfo
    from models.options import AnalysisOptions
    from parse.base import ExtractionResult
    from rules.config import DepgraphConfig

logger = structlog.get_logger(__name__)


@dataclass
class ScanResult:
    """Files discovered under one root and what the extractor found in them.

    ``files`` holds the root-relative ids of every successfully extracted
    file, sorted; files that failed to read appear only in ``diagnostics``.
    Files Tree-sitter could only partially parse stay in ``files`` and also
    get a ``parse`` diagnostic.
    """

    root: Path
    language: Language
    config: DepgraphConfig
    files: list[str] = field(default_factory=list)
    extractions: dict[str, ExtractionResult] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def modules(self) -> list[ModuleInfo]:
        return [self.extractions[path].module for path in self.files]

    def functions(self, path: str) -> list[FunctionComplexity]:
        return self.extractions[path].functions


def validate_path(path: str, *, require_directory: bool) -> Path:
    """Check that the analysis path exists and has the right type.

    Raises:
        InvalidInputError: If the path is missing, or is not a directory
            when one is required.
    """
    target = Path(path).expanduser()
    if not target.exists():
        msg = f"Path does not exist: {path}"
        raise InvalidInputError(msg)
    if require_directory and not target.is_dir():
        msg = f"Path must be a directory: {path}"
        raise InvalidInputError(msg)
    if not target.is_dir() and not target.is_file():
        msg = f"Path must be a file or directory: {path}"
        raise InvalidInputError(msg)
    return target.resolve()


def scan_project(
    options: AnalysisOptions,
    *,
    require_directory: bool = True,
    config: DepgraphConfig | None = None,
    cache: ParseCache | None = None,
    max_depth: int | None = None,
) -> ScanResult:
    """Discover and extract every source file for an operation.

    Args:
        options: Path, language and exclude patterns.
        require_directory: Reject single-file input.
        config: Preloaded configuration; read from ``depgraph.toml`` under
            the analysis root when omitted.
        cache: Parse cache shared across operations of one run.
        max_depth: Override for the configured maximum scan depth.

    Raises:
        InvalidInputError: If the path is invalid.
        ConfigError: If ``depgraph.toml`` exists but is invalid.
    """
    target = validate_path(options.path, require_directory=require_directory)
    root = target if target.is_dir() else target.parent
    if config is None:
        config = load_config(root)
    language = resolve_language(options.language, target)
    cache = cache if cache is not None else ParseCache()

    if target.is_dir():
        paths = list(
            find_source_files(
                root,
                extensions=SCAN_EXTENSIONS[language],
                exclude_patterns=[*config.exclude, *options.exclude],
                max_depth=max_depth or config.max_scan_depth,
                use_gitignore=config.gitignore,
                nested_gitignore=config.nested_gitignore,
            )
        )
    else:
        paths = [target]

    result = ScanResult(root=root, language=language, config=config)
    extractor = get_extractor(language)
    for path in paths:
        rel_path = relative_posix(path, root)
        try:
            extraction = cache.get_or_extract(path, rel_path, extractor)
        except FileParseError as exc:
            logger.warning("parse.skipped", path=rel_path, error=exc.message)
            result.diagnostics.append(
                Diagnostic(path=rel_path, stage="read", message=exc.message)
            )
            continue
        if extraction.partial:
            logger.warning("parse.partial", path=rel_path)
            result.diagnostics.append(
                Diagnostic(
                    path=rel_path,
                    stage="parse",
                    message="syntax errors; partial extraction",
                )
            )
        result.files.append(rel_path)
        result.extractions[rel_path] = extraction

    logger.info(
        "analysis.scanned",
        root=str(root),
        language=language.value,
        files=len(result.files),
        skipped=sum(1 for d in result.diagnostics if d.stage == "read"),
    )
    return result


def extract_relationships(
    scan: ScanResult, *, include_external: bool = False
) -> tuple[list[Relationship], list[Dependency]]:
    """Turn import sites into file-to-file relationships.

    Internal imports whose target is a scanned file always yield a
    relationship. With ``include_external``, unresolved internal targets
    and third-party packages (by package name) are kept as well. Builtins
    never produce relationships.

    Returns:
        The relationships, and the classified dependency for every import.
    """
    file_set = set(scan.files)
    classify = get_classifier(scan.language)
    relationships: list[Relationship] = []
    dependencies: list[Dependency] = []

    for rel_path in scan.files:
        source = scan.root / rel_path
        for record in scan.extractions[rel_path].imports:
            dep = classify(record.specifier, source, scan.root)
            dependencies.append(dep)
            if dep.kind == "builtin":
                continue
            if dep.kind == "internal":
                if dep.target not in file_set and not include_external:
                    continue
                target = dep.target
            elif include_external:
                target = dep.package_name or dep.target
            else:
                continue
            relationships.append(
                Relationship(
                    source=rel_path,
                    target=target,
                    kind=record.kind,
                    imports=record.names,
                    weight=record.weight,
                )
            )

    logger.debug(
        "analysis.relationships",
        relationships=len(relationships),
        dependencies=len(dependencies),
    )
    return relationships, dependencies


__all__ = [
    "ScanResult",
    "extract_relationships",
    "scan_project",
    "validate_path",
]
