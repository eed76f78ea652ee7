"""
Layout Engine.

Two passes over the visible part of the forest:

1. Subtree width, bottom-up: a collapsed node or a leaf is one card wide; an
   expanded node spans its children plus the gaps between them.
2. Position assignment, top-down in pre-order: each node is centered over
   the span allocated to its subtree and its children are packed left to
   right from the start of that span.

Both passes are iterative and never descend into collapsed subtrees, so a
pass costs O(visible nodes). No state survives between calls.
"""

from typing import AbstractSet, Dict, Iterable, List, Optional

from ..config import (
    DEFAULT_CARD_HEIGHT,
    DEFAULT_CARD_WIDTH,
    DEFAULT_H_GAP,
    DEFAULT_V_GAP,
)
from .types import LayoutBounds, NodePosition, OrgNode


def _measure(roots: Iterable[OrgNode], expanded: AbstractSet[int],
             card_width: float, h_gap: float) -> Dict[int, float]:
    """Subtree widths of every visible node, keyed by id."""
    widths: Dict[int, float] = {}
    stack = [(root, False) for root in roots]
    while stack:
        node, children_done = stack.pop()
        opened = node.id in expanded and bool(node.children)
        if not opened:
            widths[node.id] = card_width
        elif children_done:
            span = sum(widths[child.id] for child in node.children)
            span += (len(node.children) - 1) * h_gap
            widths[node.id] = max(card_width, span)
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
    return widths


def subtree_width(node: OrgNode, expanded: AbstractSet[int],
                  card_width: float = DEFAULT_CARD_WIDTH,
                  h_gap: float = DEFAULT_H_GAP) -> float:
    """Horizontal space needed by a node and its visible descendants."""
    return _measure([node], expanded, card_width, h_gap)[node.id]


def compute_positions(roots: List[OrgNode],
                      expanded: AbstractSet[int],
                      origin_x: float = 0.0,
                      origin_y: float = 0.0,
                      card_width: float = DEFAULT_CARD_WIDTH,
                      card_height: float = DEFAULT_CARD_HEIGHT,
                      h_gap: float = DEFAULT_H_GAP,
                      v_gap: float = DEFAULT_V_GAP,
                      root_gap: Optional[float] = None) -> List[NodePosition]:
    """
    Place every visible node.

    Roots are laid out left to right; the horizontal offset advances by each
    root's subtree width plus root_gap (h_gap when not given). A node absent
    from `expanded` contributes only itself.

    Returns positions in pre-order, which matches OrgNode.children order.
    """
    expanded = frozenset(expanded)
    widths = _measure(roots, expanded, card_width, h_gap)
    gap = h_gap if root_gap is None else root_gap

    positions: List[NodePosition] = []
    offset = origin_x
    for root in roots:
        stack = [(root, offset, origin_y, None)]
        while stack:
            node, span_start, y, parent_id = stack.pop()
            positions.append(NodePosition(
                id=node.id,
                x=span_start + widths[node.id] / 2 - card_width / 2,
                y=y,
                width=card_width,
                height=card_height,
                parent_id=parent_id,
                level=node.level,
            ))
            if node.id not in expanded or not node.children:
                continue

            child_y = y + card_height + v_gap
            placed = []
            cursor = span_start
            for child in node.children:
                placed.append((child, cursor, child_y, node.id))
                cursor += widths[child.id] + h_gap
            stack.extend(reversed(placed))

        offset += widths[root.id] + gap
    return positions


def layout_bounds(positions: Iterable[NodePosition]) -> Optional[LayoutBounds]:
    """Bounding box of a layout pass, or None if nothing is visible."""
    positions = list(positions)
    if not positions:
        return None
    return LayoutBounds(
        min_x=min(p.x for p in positions),
        min_y=min(p.y for p in positions),
        max_x=max(p.x + p.width for p in positions),
        max_y=max(p.y + p.height for p in positions),
    )
