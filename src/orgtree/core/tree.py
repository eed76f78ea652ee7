"""
Tree Builder.

Converts a flat list of entities (id + optional parent id) into a forest of
OrgNodes annotated with depth level and total descendant count.

Malformed references never fail the build: a missing or self-referencing
parent makes the entity a root. True cycles are resolved according to a
CyclePolicy (broken at their lowest id by default).
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import HierarchyCycleError
from .graph import HierarchyGraph
from .types import CyclePolicy, Entity, OrgNode

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Builds a sorted forest from flat entity records.

    After build() the builder exposes what it had to repair:
    - broken_cycles: ids whose parent link was cut to break a cycle
    - duplicates: ids that appeared more than once (first occurrence kept)
    """

    def __init__(self, cycle_policy: CyclePolicy = CyclePolicy.BREAK):
        self.cycle_policy = CyclePolicy(cycle_policy)
        self.broken_cycles: List[int] = []
        self.duplicates: List[int] = []

    def build(self, entities: Iterable[Entity]) -> List[OrgNode]:
        graph = HierarchyGraph.from_entities(entities)
        self.duplicates = graph.duplicates
        self.broken_cycles = []

        cycles = graph.find_cycles()
        if cycles:
            if self.cycle_policy == CyclePolicy.RAISE:
                raise HierarchyCycleError(cycles[0])
            self.broken_cycles = graph.break_cycles()

        nodes: Dict[int, OrgNode] = {
            entity.id: OrgNode(entity=entity) for entity in graph.iter_entities()
        }
        roots: List[OrgNode] = []
        for node in nodes.values():
            parent_id = graph.parent_of(node.id)
            if parent_id is None:
                roots.append(node)
            else:
                nodes[parent_id].children.append(node)

        for node in nodes.values():
            node.children.sort(key=lambda child: child.entity.sort_key)

        _annotate(roots)
        roots.sort(key=lambda root: (-root.total_descendants, *root.entity.sort_key))
        logger.debug("Built forest: %d entities, %d roots", len(nodes), len(roots))
        return roots


def build_forest(entities: Iterable[Entity],
                 cycle_policy: CyclePolicy = CyclePolicy.BREAK) -> List[OrgNode]:
    """Build a forest of OrgNodes from flat entities. Roots largest first."""
    return TreeBuilder(cycle_policy).build(entities)


def _annotate(roots: List[OrgNode]) -> None:
    """Assign levels top-down, then descendant counts bottom-up."""
    order: List[OrgNode] = []
    stack = [(root, 0) for root in reversed(roots)]
    while stack:
        node, level = stack.pop()
        node.level = level
        order.append(node)
        for child in reversed(node.children):
            stack.append((child, level + 1))

    # Pre-order reversed visits every child before its parent.
    for node in reversed(order):
        node.total_descendants = sum(1 + child.total_descendants for child in node.children)


def iter_nodes(roots: Iterable[OrgNode]) -> Iterator[OrgNode]:
    """Pre-order walk over a forest, roots in order."""
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(roots: Iterable[OrgNode], node_id: int) -> Optional[OrgNode]:
    for node in iter_nodes(roots):
        if node.id == node_id:
            return node
    return None


def max_depth(roots: Iterable[OrgNode]) -> int:
    """Deepest level in the forest, or -1 when it is empty."""
    return max((node.level for node in iter_nodes(roots)), default=-1)
