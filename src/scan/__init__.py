"""File discovery and language detection."""

from scan.files import (
    DEFAULT_EXCLUDES,
    DEFAULT_MAX_DEPTH,
    find_source_files,
    is_excluded,
    merge_excludes,
)
from scan.languages import (
    SCAN_EXTENSIONS,
    Language,
    detect_language,
    language_for_extension,
    module_language,
    resolve_language,
)

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_MAX_DEPTH",
    "SCAN_EXTENSIONS",
    "Language",
    "detect_language",
    "find_source_files",
    "is_excluded",
    "language_for_extension",
    "merge_excludes",
    "module_language",
    "resolve_language",
]
