"""The five analysis operations."""

from analysis.circular import detect_circular_dependencies
from analysis.complexity import analyze_complexity
from analysis.dependency_graph import generate_dependency_graph
from analysis.module_map import map_module_relationships
from analysis.overview import get_architecture_overview
from analysis.pipeline import ScanResult, extract_relationships, scan_project

__all__ = [
    "ScanResult",
    "analyze_complexity",
    "detect_circular_dependencies",
    "extract_relationships",
    "generate_dependency_graph",
    "get_architecture_overview",
    "map_module_relationships",
    "scan_project",
]
