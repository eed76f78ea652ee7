"""
SVG export for a laid-out scene.

Produces a plain, unstyled SVG document: one group per node card, one path
per connector, and the viewport transform applied to the whole scene.
Highlighted nodes and connectors carry a `highlight` class so a stylesheet
can pick them out.
"""

from html import escape
from pathlib import Path
from typing import List, Optional

from ..core.connectors import format_number as fmt
from ..core.viewport import ViewportController
from .chart import Scene

SVG_TEMPLATE = """<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">
  <g class="scene" transform="{transform}">
    <g class="connectors" fill="none" stroke="currentColor">
{connectors}
    </g>
    <g class="nodes">
{nodes}
    </g>
  </g>
</svg>
"""


def _classes(*names: Optional[str]) -> str:
    return " ".join(n for n in names if n)


def generate_svg(scene: Scene, viewport: Optional[ViewportController] = None,
                 width: Optional[float] = None, height: Optional[float] = None) -> str:
    """
    Render a scene to SVG markup.

    Without explicit dimensions the document is sized to the scene bounds
    plus the viewport margin on every side.
    """
    viewport = viewport or ViewportController()
    bounds = scene.bounds
    if width is None:
        width = (bounds.max_x * viewport.scale if bounds else 0) + 2 * viewport.margin
    if height is None:
        height = (bounds.max_y * viewport.scale if bounds else 0) + 2 * viewport.margin

    connector_lines: List[str] = []
    for connector in scene.connectors:
        lit = connector.parent_id in scene.highlighted and connector.child_id in scene.highlighted
        connector_lines.append(
            f'      <path class="{_classes("connector", connector.style.value, "highlight" if lit else None)}" '
            f'data-parent="{connector.parent_id}" data-child="{connector.child_id}" d="{connector.d}"/>'
        )

    node_lines: List[str] = []
    for node in scene.nodes:
        p = node.position
        cls = _classes("node", f"level-{p.level}",
                       "expanded" if node.expanded else None,
                       "highlight" if node.highlighted else None)
        subtitle = node.display_fields.get("position") or node.display_fields.get("code") or ""
        node_lines.append(f'      <g class="{cls}" data-id="{p.id}">')
        node_lines.append(f'        <rect x="{fmt(p.x)}" y="{fmt(p.y)}" width="{fmt(p.width)}" '
                          f'height="{fmt(p.height)}" rx="12" fill="none" stroke="currentColor"/>')
        node_lines.append(f'        <text x="{fmt(p.center_x)}" y="{fmt(p.y + p.height * 0.4)}" '
                          f'text-anchor="middle">{escape(node.name)}</text>')
        if subtitle:
            node_lines.append(f'        <text x="{fmt(p.center_x)}" y="{fmt(p.y + p.height * 0.6)}" '
                              f'text-anchor="middle">{escape(str(subtitle))}</text>')
        if node.direct_reports:
            label = f"{node.direct_reports} report{'s' if node.direct_reports > 1 else ''}"
            node_lines.append(f'        <text x="{fmt(p.center_x)}" y="{fmt(p.y + p.height * 0.85)}" '
                              f'text-anchor="middle">{label}</text>')
        node_lines.append("      </g>")

    return SVG_TEMPLATE.format(
        width=fmt(width),
        height=fmt(height),
        transform=viewport.transform(),
        connectors="\n".join(connector_lines),
        nodes="\n".join(node_lines),
    )


def export_svg(scene: Scene, output_path: Path,
               viewport: Optional[ViewportController] = None,
               width: Optional[float] = None, height: Optional[float] = None) -> None:
    output_path.write_text(generate_svg(scene, viewport, width, height))
