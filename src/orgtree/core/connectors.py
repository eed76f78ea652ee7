"""
Connector Geometry.

Pure functions producing SVG path data between a parent's bottom-center
anchor and a child's top-center anchor.
"""

import math
from typing import AbstractSet, Iterable, List

from .types import Connector, ConnectorStyle, NodePosition

# Control points sit this fraction of the horizontal distance inward.
CURVE_OFFSET_RATIO = 0.1


def format_number(value: float) -> str:
    """Compact number formatting for path data."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _point(x: float, y: float) -> str:
    return f"{format_number(x)} {format_number(y)}"


def curve_path(x1: float, y1: float, x2: float, y2: float) -> str:
    """Cubic S-curve through the vertical midpoint; straight when x1 == x2."""
    mid_y = (y1 + y2) / 2
    offset = (x2 - x1) * CURVE_OFFSET_RATIO
    return (f"M {_point(x1, y1)} "
            f"C {_point(x1 + offset, mid_y)}, {_point(x2 - offset, mid_y)}, {_point(x2, y2)}")


def step_path(x1: float, y1: float, x2: float, y2: float) -> str:
    """Orthogonal vertical-horizontal-vertical route through the midpoint."""
    mid_y = (y1 + y2) / 2
    return (f"M {_point(x1, y1)} L {_point(x1, mid_y)} "
            f"L {_point(x2, mid_y)} L {_point(x2, y2)}")


def arc_path(x1: float, y1: float, x2: float, y2: float) -> str:
    """Single circular arc with radius equal to the endpoint distance."""
    radius = math.hypot(x2 - x1, y2 - y1)
    if radius == 0:
        return f"M {_point(x1, y1)} L {_point(x2, y2)}"
    # Bulge outward, away from the parent's center line.
    sweep = 1 if x2 < x1 else 0
    return f"M {_point(x1, y1)} A {format_number(radius)} {format_number(radius)} 0 0 {sweep} {_point(x2, y2)}"


_BUILDERS = {
    ConnectorStyle.CURVE: curve_path,
    ConnectorStyle.STEP: step_path,
    ConnectorStyle.ARC: arc_path,
}


def connector_path(x1: float, y1: float, x2: float, y2: float,
                   style: ConnectorStyle | str = ConnectorStyle.CURVE) -> str:
    """
    Path description between two points.

    Raises:
        ValueError: if `style` is not one of curve, step or arc.
    """
    return _BUILDERS[ConnectorStyle(style)](x1, y1, x2, y2)


def build_connectors(positions: Iterable[NodePosition],
                     expanded: AbstractSet[int],
                     style: ConnectorStyle | str = ConnectorStyle.CURVE) -> List[Connector]:
    """
    One connector per rendered child whose parent is rendered and expanded.

    Output follows the order of `positions`.
    """
    style = ConnectorStyle(style)
    positions = list(positions)
    by_id = {p.id: p for p in positions}
    connectors: List[Connector] = []
    for child in positions:
        parent = by_id.get(child.parent_id) if child.parent_id is not None else None
        if parent is None or parent.id not in expanded:
            continue
        connectors.append(Connector(
            parent_id=parent.id,
            child_id=child.id,
            style=style,
            d=connector_path(parent.center_x, parent.bottom, child.center_x, child.y, style),
        ))
    return connectors
