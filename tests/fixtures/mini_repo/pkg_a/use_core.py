"""Use core module to create internal dependency edges."""

from .core import Greeter, compute_value


def run(flag: bool = True) -> str:
    greeter = Greeter()
    if flag and compute_value(1) > 1:
        return greeter.greet("fixture")
    for attempt in range(3):
        if attempt == 2:
            return str(compute_value(attempt))
    return ""
