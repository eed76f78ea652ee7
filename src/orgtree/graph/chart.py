"""
Org Chart Module.

Ties the engine together for callers that start from raw records: loading
and normalizing entities, building the forest, laying out a scene with
connectors and highlights, searching, and exporting.

The chart keeps the entity list and the built forest; the expanded set and
viewport stay with the caller and are passed in on every call.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import AbstractSet, Any, Dict, List, Optional, Set

from pydantic import BaseModel, Field

from ..config import OrgTreeConfig
from ..core import expansion
from ..core.connectors import build_connectors
from ..core.errors import RecordError
from ..core.highlight import ensure_visible, highlight_path, reporting_chain, reveal, search
from ..core.layout import compute_positions, layout_bounds
from ..core.tree import TreeBuilder, iter_nodes, max_depth
from ..core.types import (
    Connector,
    ConnectorStyle,
    Entity,
    LayoutBounds,
    NodePosition,
    OrgNode,
    SearchReveal,
)

logger = logging.getLogger(__name__)

PARENT_KEYS = ("parent_id", "parentId", "manager_id", "managerId")
NAME_KEYS = ("name", "full_name", "fullName")
RESERVED_KEYS = {"id", "is_active", "isActive", "display_fields", *PARENT_KEYS, *NAME_KEYS}


def entity_from_record(record: Dict[str, Any]) -> Entity:
    """
    Normalize one raw record into an Entity.

    The parent may be spelled parent_id, parentId, manager_id or managerId
    and the name name, full_name or fullName. Everything else lands in
    display_fields.
    """
    parent = next((record[k] for k in PARENT_KEYS if record.get(k) is not None), None)
    name = next((record[k] for k in NAME_KEYS if record.get(k)), "")
    fields = dict(record.get("display_fields") or {})
    fields.update({k: v for k, v in record.items() if k not in RESERVED_KEYS})
    return Entity.model_validate({
        "id": record["id"],
        "parent_id": parent,
        "name": name,
        "display_fields": fields,
        "is_active": record.get("is_active", record.get("isActive", True)),
    })


class SceneNode(BaseModel):
    """A positioned node plus what a renderer needs to draw its card."""
    position: NodePosition
    name: str
    direct_reports: int
    total_descendants: int
    expanded: bool
    highlighted: bool = False
    display_fields: Dict[str, Any] = Field(default_factory=dict)


class Scene(BaseModel):
    """Everything produced by one layout pass."""
    nodes: List[SceneNode] = Field(default_factory=list)
    connectors: List[Connector] = Field(default_factory=list)
    bounds: Optional[LayoutBounds] = None
    highlighted: Set[int] = Field(default_factory=set)

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json")
        data["highlighted"] = sorted(self.highlighted)
        return data


class OrgChart:
    """
    An organization chart built from flat records.

    Provides:
    - Record loading with field aliases and an active-only filter
    - Forest building (rebuilt lazily when entities change)
    - Scene layout with connectors and highlights
    - Search, path highlighting and reveal
    - Statistics and JSON export
    """

    def __init__(self, config: Optional[OrgTreeConfig] = None):
        self.config = config or OrgTreeConfig()
        self._entities: List[Entity] = []
        self._entity_index: Dict[int, Entity] = {}
        self._roots: Optional[List[OrgNode]] = None
        self._nodes: Dict[int, OrgNode] = {}
        self._builder = TreeBuilder(self.config.layout.cycle_policy)

    # =========================================================================
    # Loading
    # =========================================================================

    def add_entity(self, entity: Entity) -> None:
        self._entities.append(entity)
        self._entity_index.setdefault(entity.id, entity)
        self._roots = None

    def load_from_dict(self, data: Any, active_only: Optional[bool] = None) -> None:
        """
        Load entities from parsed JSON.

        Accepts {"entities": [...]}, {"users": [...]}, {"data": [...]} or a
        bare list of records. Records without an id are skipped.

        Raises:
            RecordError: If the records are not a list of objects.
        """
        if active_only is None:
            active_only = self.config.expansion.active_only

        if isinstance(data, dict):
            records = data.get("entities") or data.get("users") or data.get("data") or []
        else:
            records = data

        if not isinstance(records, list):
            raise RecordError(f"Expected a list of records, got {type(records).__name__}")

        skipped = 0
        for position, record in enumerate(records):
            if not isinstance(record, dict):
                raise RecordError(
                    f"Record {position} is {type(record).__name__}, expected an object"
                )
            if record.get("id") is None:
                logger.warning("Skipping record without id: %r", record)
                continue
            entity = entity_from_record(record)
            if active_only and not entity.is_active:
                skipped += 1
                continue
            self.add_entity(entity)
        logger.debug("Loaded %d entities (%d inactive skipped)", len(self._entities), skipped)

    def load_from_json(self, json_str: str, active_only: Optional[bool] = None) -> None:
        self.load_from_dict(json.loads(json_str), active_only=active_only)

    @classmethod
    def from_file(cls, path: Path, config: Optional[OrgTreeConfig] = None) -> "OrgChart":
        chart = cls(config)
        chart.load_from_json(Path(path).read_text())
        return chart

    # =========================================================================
    # Forest
    # =========================================================================

    @property
    def entities(self) -> List[Entity]:
        return list(self._entities)

    def build(self) -> List[OrgNode]:
        """
        Build the forest if the entities changed since the last build.

        Raises:
            HierarchyCycleError: If the cycle policy is RAISE and the
                records contain a reporting cycle.
        """
        if self._roots is None:
            roots = self._builder.build(self._entities)
            self._nodes = {node.id: node for node in iter_nodes(roots)}
            self._roots = roots
        return self._roots

    @property
    def roots(self) -> List[OrgNode]:
        return self.build()

    @property
    def broken_cycles(self) -> List[int]:
        self.build()
        return list(self._builder.broken_cycles)

    def get_entity(self, entity_id: int) -> Optional[Entity]:
        return self._entity_index.get(entity_id)

    def default_expanded(self) -> Set[int]:
        return expansion.expand_to_level(self.roots, self.config.expansion.depth)

    def expand_all(self) -> Set[int]:
        return expansion.expand_all(self.roots)

    # =========================================================================
    # Layout
    # =========================================================================

    def scene(self, expanded: AbstractSet[int],
              style: Optional[ConnectorStyle | str] = None,
              highlighted: AbstractSet[int] = frozenset(),
              origin_x: float = 0.0, origin_y: float = 0.0) -> Scene:
        """Lay out the visible nodes and their connectors."""
        settings = self.config.layout
        positions = compute_positions(
            self.roots, expanded,
            origin_x=origin_x, origin_y=origin_y,
            card_width=settings.card_width, card_height=settings.card_height,
            h_gap=settings.h_gap, v_gap=settings.v_gap, root_gap=settings.root_gap,
        )
        scene_nodes = []
        for position in positions:
            node = self._nodes[position.id]
            scene_nodes.append(SceneNode(
                position=position,
                name=node.name,
                direct_reports=node.direct_reports,
                total_descendants=node.total_descendants,
                expanded=node.id in expanded and not node.is_leaf(),
                highlighted=node.id in highlighted,
                display_fields=node.entity.display_fields,
            ))
        return Scene(
            nodes=scene_nodes,
            connectors=build_connectors(positions, expanded,
                                        style or self.config.connectors.style),
            bounds=layout_bounds(positions),
            highlighted=set(highlighted),
        )

    # =========================================================================
    # Search
    # =========================================================================

    def find(self, query: str) -> List[int]:
        return search(self._entities, query)

    def highlight(self, target_id: int) -> Set[int]:
        return highlight_path(self._entities, target_id)

    def chain(self, target_id: int) -> List[int]:
        return reporting_chain(self._entities, target_id)

    def ensure_visible(self, expanded: AbstractSet[int], target_id: int) -> Set[int]:
        return ensure_visible(self._entities, expanded, target_id)

    def reveal(self, expanded: AbstractSet[int], query: str) -> SearchReveal:
        return reveal(self._entities, expanded, query)

    def resolve(self, ref: str) -> Optional[int]:
        """Resolve a CLI reference: a numeric id first, then the best name match."""
        if ref.strip().lstrip("-").isdigit() and self.get_entity(int(ref)) is not None:
            return int(ref)
        matches = self.find(ref)
        if not matches:
            return None
        exact = [m for m in matches if self.get_entity(m).name.casefold() == ref.casefold()]
        return (exact or matches)[0]

    # =========================================================================
    # Statistics / Export
    # =========================================================================

    def stats(self) -> Dict[str, Any]:
        roots = self.build()
        nodes = self._nodes.values()
        widest = max(nodes, key=lambda n: (n.direct_reports, -n.id), default=None)
        return {
            "total_entities": len(nodes),
            "roots": len(roots),
            "max_depth": max_depth(roots),
            "largest_span_of_control": widest.direct_reports if widest else 0,
            "largest_span_owner": widest.id if widest and widest.direct_reports else None,
            "cycles_broken": self.broken_cycles,
            "duplicates": list(self._builder.duplicates),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entities": [e.model_dump() for e in self._entities],
            "stats": self.stats(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)
