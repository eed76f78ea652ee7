"""
Layout Command - Compute a positioned scene.

Builds the forest from a records file, applies an expansion policy and
prints (or writes) the JSON scene: node positions, connectors and bounds.
"""

import json
from pathlib import Path
from typing import Optional, Tuple

import click

from ...core import expansion
from ...core.types import ConnectorStyle
from ..utils import echo_error, echo_success, get_config, load_chart


@click.command()
@click.argument("input_file", type=click.Path())
@click.option("-d", "--expand-depth", type=int, default=None,
              help="Expand nodes above this level (default from config)")
@click.option("--expand-all", is_flag=True, help="Expand every node")
@click.option("-t", "--toggle", "toggles", type=int, multiple=True,
              help="Toggle the expansion of a node id (repeatable)")
@click.option("-r", "--reveal", "query", default=None,
              help="Expand and highlight the reporting chain of search matches")
@click.option("-s", "--style", type=click.Choice([s.value for s in ConnectorStyle]),
              default=None, help="Connector style (default from config)")
@click.option("-o", "--output", default=None, help="Write the scene JSON to a file")
def layout(input_file: str, expand_depth: Optional[int], expand_all: bool,
           toggles: Tuple[int, ...], query: Optional[str], style: Optional[str],
           output: Optional[str]):
    """
    Lay out an org chart and emit the scene as JSON.
    """
    config = get_config()
    chart = load_chart(input_file, config)
    if chart is None:
        raise SystemExit(1)

    if expand_all:
        expanded = chart.expand_all()
    elif expand_depth is not None:
        expanded = expansion.expand_to_level(chart.roots, expand_depth)
    else:
        expanded = chart.default_expanded()

    for node_id in toggles:
        expanded = expansion.toggle(expanded, node_id)

    highlighted = set()
    if query:
        revealed = chart.reveal(expanded, query)
        if not revealed.matches:
            echo_error(f"No employee matches: {query}")
        expanded, highlighted = revealed.expanded, revealed.highlighted

    scene = chart.scene(expanded, style=style, highlighted=highlighted)
    payload = json.dumps({
        "meta": {"status": "success", "expanded": sorted(expanded)},
        "data": scene.to_dict(),
    }, indent=2)

    if output:
        Path(output).write_text(payload)
        echo_success(f"Wrote {len(scene.nodes)} positioned nodes to {output}")
    else:
        click.echo(payload)
