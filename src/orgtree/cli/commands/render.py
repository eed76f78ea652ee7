"""
Render Command - Export the chart as SVG.
"""

from pathlib import Path
from typing import Optional, Tuple

import click

from ...core import expansion
from ...core.types import ConnectorStyle
from ...core.viewport import ViewportController
from ...graph.render import export_svg
from ..utils import echo_error, echo_info, echo_success, echo_warning, get_config, load_chart


@click.command()
@click.argument("input_file", type=click.Path())
@click.option("-o", "--output", default="orgchart.svg", help="Output SVG file")
@click.option("--expand-all", is_flag=True, help="Expand every node")
@click.option("--highlight", "query", default=None,
              help="Reveal and highlight employees matching this text")
@click.option("-s", "--style", type=click.Choice([s.value for s in ConnectorStyle]),
              default=None, help="Connector style (default from config)")
@click.option("--fit", nargs=2, type=float, default=None, metavar="WIDTH HEIGHT",
              help="Scale the scene to fit a viewport of this size")
def render(input_file: str, output: str, expand_all: bool, query: Optional[str],
           style: Optional[str], fit: Optional[Tuple[float, float]]):
    """
    Render the org chart to an SVG file.
    """
    config = get_config()
    chart = load_chart(input_file, config)
    if chart is None:
        raise SystemExit(1)

    expanded = chart.expand_all() if expand_all else chart.default_expanded()
    highlighted = set()
    if query:
        revealed = chart.reveal(expanded, query)
        if revealed.matches:
            expanded, highlighted = revealed.expanded, revealed.highlighted
        else:
            echo_warning(f"No employee matches: {query}")

    scene = chart.scene(expanded, style=style, highlighted=highlighted)
    if scene.bounds is None:
        echo_error("Nothing to render: no employees in input")
        raise SystemExit(1)

    settings = config.viewport
    viewport = ViewportController(settings.min_scale, settings.max_scale,
                                  settings.zoom_step, settings.margin)
    bounds = scene.bounds
    if fit:
        width, height = fit
        viewport.fit(bounds.max_x, bounds.max_y, width, height)
    else:
        width = bounds.max_x + 2 * settings.margin
        height = bounds.max_y + 2 * settings.margin
        viewport.center_on(bounds.max_x, bounds.max_y, width, height)

    output_path = Path(output)
    export_svg(scene, output_path, viewport, width, height)
    echo_success(f"Generated: {output_path}")
    echo_info(f"{len(scene.nodes)} nodes, {len(scene.connectors)} connectors, "
              f"zoom {viewport.scale:.0%}")
