"""
Core type definitions for orgtree.

Entities are external input records, OrgNodes are the derived forest, and
NodePositions/Connectors are the per-pass layout output consumed by renderers.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ConnectorStyle(StrEnum):
    """Shapes available for parent -> child connectors."""
    CURVE = "curve"
    STEP = "step"
    ARC = "arc"


class CyclePolicy(StrEnum):
    """What the tree builder does when parent references form a cycle."""
    BREAK = "break"
    RAISE = "raise"


class Entity(BaseModel):
    """
    A flat input record: one employee and the id of their manager.
    """
    id: int
    parent_id: int | None = None
    name: str = ""
    display_fields: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="after")
    def _default_name(self) -> "Entity":
        if not self.name.strip():
            object.__setattr__(self, "name", str(self.id))
        return self

    @property
    def sort_key(self) -> tuple:
        """Deterministic sibling ordering: collated name, exact name, then id."""
        return (self.name.casefold(), self.name, self.id)

    def has_own_parent(self) -> bool:
        return self.parent_id is not None and self.parent_id != self.id


@dataclass
class OrgNode:
    """A node of the built forest. Owned by the forest returned by build_forest."""
    entity: Entity
    children: List["OrgNode"] = field(default_factory=list)
    level: int = 0
    total_descendants: int = 0

    @property
    def id(self) -> int:
        return self.entity.id

    @property
    def name(self) -> str:
        return self.entity.name

    @property
    def direct_reports(self) -> int:
        return len(self.children)

    def is_leaf(self) -> bool:
        return not self.children


class NodePosition(BaseModel):
    """Absolute placement of one visible node, in diagram units."""
    id: int
    x: float
    y: float
    width: float
    height: float
    parent_id: int | None = None
    level: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height


class Connector(BaseModel):
    """One drawn edge between a rendered parent and a rendered child."""
    parent_id: int
    child_id: int
    style: ConnectorStyle
    d: str

    model_config = ConfigDict(frozen=True)


class LayoutBounds(BaseModel):
    """Axis-aligned box enclosing every position of a layout pass."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    model_config = ConfigDict(frozen=True)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


class SearchReveal(BaseModel):
    """Result of a search that also reveals its matches."""
    matches: List[int] = Field(default_factory=list)
    expanded: set[int] = Field(default_factory=set)
    highlighted: set[int] = Field(default_factory=set)

    @property
    def first_match(self) -> Optional[int]:
        return self.matches[0] if self.matches else None
