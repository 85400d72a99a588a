"""Core symbols for the mini fixture package."""

import os

from pkg_a.registry import register


class Greeter:
    """Simple class with a documented method."""

    def greet(self, name: str) -> str:
        """Return a deterministic greeting."""
        if not name:
            return "hello"
        return f"hello, {name}"


def compute_value(x: int) -> int:
    return x + 1


register("greeter", Greeter)
DEFAULT_HOME = os.sep
