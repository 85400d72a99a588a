"""Module grouping strategies and architecture detection."""

from grouping.architecture import (
    assign_layer_dependencies,
    determine_architecture_style,
    find_entry_points,
    identify_external_dependencies,
    identify_layers,
)
from grouping.strategies import (
    group_by_directory,
    group_by_feature,
    group_by_layer,
    group_by_package,
    group_files,
)

__all__ = [
    "assign_layer_dependencies",
    "determine_architecture_style",
    "find_entry_points",
    "group_by_directory",
    "group_by_feature",
    "group_by_layer",
    "group_by_package",
    "group_files",
    "identify_external_dependencies",
    "identify_layers",
]
