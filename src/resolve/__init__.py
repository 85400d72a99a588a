"""Dependency classification and module resolution."""

from resolve.builtins import is_node_builtin, is_python_builtin
from resolve.classify import (
    classify_ecmascript,
    classify_python,
    ecmascript_package_name,
    get_classifier,
)

__all__ = [
    "classify_ecmascript",
    "classify_python",
    "ecmascript_package_name",
    "get_classifier",
    "is_node_builtin",
    "is_python_builtin",
]
