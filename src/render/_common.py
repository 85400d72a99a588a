"""Helpers shared by the graph serializers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from models.graph import DependencyCycle


def cycle_membership(cycles: Iterable[DependencyCycle]) -> dict[str, int]:
    """Map each node in a cycle to the index of its cycle.

    An edge is a cycle edge when both endpoints map to the same index.
    """
    membership: dict[str, int] = {}
    for index, cycle in enumerate(cycles):
        for node in cycle.nodes:
            membership.setdefault(node, index)
    return membership


def is_cycle_edge(membership: dict[str, int], source: str, target: str) -> bool:
    return (
        source != target
        and source in membership
        and membership.get(target) == membership[source]
    )


__all__ = ["cycle_membership", "is_cycle_edge"]
