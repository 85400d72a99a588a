"""Language extractors for depgraph-core."""

from parse.base import ExtractionResult, read_source
from parse.ecmascript import NodeKind, extract_ecmascript
from parse.extract import ParseCache, get_extractor
from parse.python_scanner import extract_python, scan_python_source

__all__ = [
    "ExtractionResult",
    "NodeKind",
    "ParseCache",
    "extract_ecmascript",
    "extract_python",
    "get_extractor",
    "read_source",
    "scan_python_source",
]
