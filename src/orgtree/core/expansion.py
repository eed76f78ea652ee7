"""
Expanded-set operations.

The expanded set is caller-owned state. Every helper here returns a new set
and leaves its input untouched.
"""

from typing import AbstractSet, Iterable, Optional, Set

from .tree import iter_nodes
from .types import OrgNode


def toggle(expanded: AbstractSet[int], node_id: int) -> Set[int]:
    result = set(expanded)
    if node_id in result:
        result.discard(node_id)
    else:
        result.add(node_id)
    return result


def expand_all(roots: Iterable[OrgNode]) -> Set[int]:
    """Every node id in the forest."""
    return {node.id for node in iter_nodes(roots)}


def collapse_all() -> Set[int]:
    return set()


def expand_to_level(roots: Iterable[OrgNode], depth: Optional[int]) -> Set[int]:
    """
    Expand nodes whose level is below `depth`.

    depth=2 expands roots and their direct reports, so three levels are
    visible. depth=None expands everything.
    """
    if depth is None:
        return expand_all(roots)
    return {node.id for node in iter_nodes(roots) if node.level < depth}
