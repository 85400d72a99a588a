"""Classification of raw import specifiers into dependencies.

Every specifier ends up as exactly one of ``builtin``, ``internal`` or
``external``. Internal specifiers are resolved against the filesystem; a
specifier that cannot be resolved stays internal and keeps its unresolved
path as the target.
"""

from __future__ import annotations

import os
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

from models.modules import Dependency
from resolve.builtins import is_node_builtin, is_python_builtin
from scan.languages import Language
from utils import relative_posix

if TYPE_CHECKING:
    from collections.abc import Callable

    Classifier = Callable[[str, Path, Path], Dependency]

TS_RESOLVE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")
JS_RESOLVE_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx")


def ecmascript_package_name(specifier: str) -> str:
    """Package identity of a bare specifier: ``@scope/name`` or first segment.

    Examples:
        >>> ecmascript_package_name("@babel/core/lib/x")
        '@babel/core'
        >>> ecmascript_package_name("lodash/fp")
        'lodash'
    """
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) >= 2:
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def _first_file(candidates: list[Path]) -> Path | None:
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def resolve_ecmascript_path(
    specifier: str, source_file: Path, extensions: tuple[str, ...]
) -> Path:
    """Resolve a relative or absolute ECMAScript specifier to a file path.

    Probes the literal path, then each extension, then ``index.<ext>``. When
    nothing exists the normalized (unresolved) path is returned.
    """
    base = Path(os.path.normpath(source_file.parent / specifier))
    if base.is_file():
        return base

    if base.suffix == ".js":
        # ESM-style TypeScript imports name the compiled .js file.
        base = base.with_suffix("")
        found = _first_file([Path(f"{base}.ts"), Path(f"{base}.tsx")])
        if found is not None:
            return found

    found = _first_file(
        [Path(f"{base}{ext}") for ext in extensions]
        + [base / f"index{ext}" for ext in extensions]
    )
    return found if found is not None else base


def resolve_python_relative(specifier: str, source_file: Path) -> Path:
    """Resolve ``.mod``/``..pkg.mod`` relative to the importing file.

    One leading dot is the importing file's package; each extra dot climbs
    one directory.
    """
    module = specifier.lstrip(".")
    dots = len(specifier) - len(module)

    target = source_file.parent
    for _ in range(dots - 1):
        target = target.parent
    for part in module.split("."):
        if part:
            target = target / part

    found = _first_file([Path(f"{target}.py"), target / "__init__.py"])
    return found if found is not None else target


def resolve_python_local(specifier: str, root: Path) -> Path | None:
    """Find an absolute import among the project's own modules, if present."""
    rel = Path(*specifier.split("."))
    candidates: list[Path] = []
    for base in (root, root / "src"):
        candidates.extend([base / f"{rel}.py", base / rel / "__init__.py"])
    return _first_file(candidates)


def _internal(source_id: str, resolved: Path, root: Path, specifier: str) -> Dependency:
    return Dependency(
        source=source_id,
        target=relative_posix(resolved, root),
        kind="internal",
        import_statements=[specifier],
    )


def classify_ecmascript(
    specifier: str,
    source_file: Path,
    root: Path,
    *,
    extensions: tuple[str, ...] = TS_RESOLVE_EXTENSIONS,
) -> Dependency:
    source_id = relative_posix(source_file, root)

    if is_node_builtin(specifier):
        return Dependency(
            source=source_id,
            target=specifier,
            kind="builtin",
            package_name=specifier,
            import_statements=[specifier],
        )

    if specifier.startswith((".", "/")):
        resolved = resolve_ecmascript_path(specifier, source_file, extensions)
        return _internal(source_id, resolved, root, specifier)

    return Dependency(
        source=source_id,
        target=specifier,
        kind="external",
        package_name=ecmascript_package_name(specifier),
        import_statements=[specifier],
    )


def classify_python(specifier: str, source_file: Path, root: Path) -> Dependency:
    source_id = relative_posix(source_file, root)

    if is_python_builtin(specifier):
        return Dependency(
            source=source_id,
            target=specifier,
            kind="builtin",
            package_name=specifier.split(".", 1)[0],
            import_statements=[specifier],
        )

    if specifier.startswith("."):
        resolved = resolve_python_relative(specifier, source_file)
        return _internal(source_id, resolved, root, specifier)

    local = resolve_python_local(specifier, root)
    if local is not None:
        return _internal(source_id, local, root, specifier)

    return Dependency(
        source=source_id,
        target=specifier,
        kind="external",
        package_name=specifier.split(".", 1)[0],
        import_statements=[specifier],
    )


_CLASSIFIERS: dict[Language, Classifier] = {
    Language.TYPESCRIPT: partial(classify_ecmascript, extensions=TS_RESOLVE_EXTENSIONS),
    Language.JAVASCRIPT: partial(classify_ecmascript, extensions=JS_RESOLVE_EXTENSIONS),
    Language.PYTHON: classify_python,
}


def get_classifier(language: Language) -> Classifier:
    """Return the classifier used for every import of a scan in ``language``."""
    return _CLASSIFIERS[language]


__all__ = [
    "JS_RESOLVE_EXTENSIONS",
    "TS_RESOLVE_EXTENSIONS",
    "classify_ecmascript",
    "classify_python",
    "ecmascript_package_name",
    "get_classifier",
    "resolve_ecmascript_path",
    "resolve_python_local",
    "resolve_python_relative",
]
