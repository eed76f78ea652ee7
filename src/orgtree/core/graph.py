"""
Reporting graph backed by rustworkx.

The flat parent_id relationship is really a graph of back-references that
may contain cycles. This module holds it as an arena: entities live in a
rustworkx PyDiGraph addressed by integer indices, with a bimap between
entity ids and graph indices. Edges point from a report to their manager.

It manages:
- The bimap between entity ids and rustworkx node indices.
- Resolution of parent references (missing and self references are dropped).
- Cycle detection and deterministic cycle breaking.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

import rustworkx as rx

from .types import Entity

logger = logging.getLogger(__name__)


class HierarchyGraph:
    """
    Arena representation of a reporting hierarchy.

    Each node has at most one outgoing edge (to its manager), so every
    strongly connected component with more than one member is exactly one
    simple cycle.
    """

    def __init__(self):
        self._graph = rx.PyDiGraph(multigraph=False)
        self._id_to_idx: Dict[int, int] = {}
        self._idx_to_id: Dict[int, int] = {}
        self._duplicates: List[int] = []

    @classmethod
    def from_entities(cls, entities: Iterable[Entity]) -> "HierarchyGraph":
        """Build the graph, keeping the first occurrence of each id."""
        graph = cls()
        kept: List[Entity] = []
        for entity in entities:
            if graph.add_entity(entity):
                kept.append(entity)
        for entity in kept:
            graph.link(entity)
        return graph

    def add_entity(self, entity: Entity) -> bool:
        """Add an entity. Returns False if its id is already present."""
        if entity.id in self._id_to_idx:
            logger.warning("Duplicate entity id %s ignored", entity.id)
            self._duplicates.append(entity.id)
            return False
        idx = self._graph.add_node(entity)
        self._id_to_idx[entity.id] = idx
        self._idx_to_id[idx] = entity.id
        return True

    def link(self, entity: Entity) -> None:
        """Connect an entity to its manager if the reference resolves."""
        if not entity.has_own_parent():
            return
        if entity.parent_id not in self._id_to_idx:
            logger.debug("Entity %s references unknown parent %s; treated as root",
                         entity.id, entity.parent_id)
            return
        self._graph.add_edge(self._id_to_idx[entity.id], self._id_to_idx[entity.parent_id], None)

    def unlink(self, entity_id: int) -> None:
        """Drop the manager link of an entity, turning it into a root."""
        idx = self._id_to_idx.get(entity_id)
        if idx is None:
            return
        for _, target, _ in list(self._graph.out_edges(idx)):
            self._graph.remove_edge(idx, target)

    def parent_of(self, entity_id: int) -> Optional[int]:
        """Resolved manager id, or None for roots."""
        idx = self._id_to_idx.get(entity_id)
        if idx is None:
            return None
        successors = self._graph.successor_indices(idx)
        if not successors:
            return None
        return self._idx_to_id[successors[0]]

    def find_cycles(self) -> List[List[int]]:
        """
        Find every reporting cycle.

        Each cycle starts at its lowest id and follows manager links, and
        the list of cycles is ordered by that starting id.
        """
        cycles: List[List[int]] = []
        for component in rx.strongly_connected_components(self._graph):
            if len(component) < 2:
                continue
            start = min(self._idx_to_id[idx] for idx in component)
            cycle = [start]
            current = self.parent_of(start)
            while current is not None and current != start:
                cycle.append(current)
                current = self.parent_of(current)
            cycles.append(cycle)
        return sorted(cycles, key=lambda c: c[0])

    def break_cycles(self) -> List[int]:
        """
        Cut every cycle at its lowest id.

        Returns the ids whose manager link was removed.
        """
        cut: List[int] = []
        for cycle in self.find_cycles():
            logger.warning("Breaking reporting cycle %s at %s", cycle, cycle[0])
            self.unlink(cycle[0])
            cut.append(cycle[0])
        return cut

    def iter_entities(self) -> Iterator[Entity]:
        return iter(self._graph.nodes())

    @property
    def duplicates(self) -> List[int]:
        return list(self._duplicates)

