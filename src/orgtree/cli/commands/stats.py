"""
Stats Command - Summarize the hierarchy.
"""

import click
from rich.console import Console
from rich.table import Table

from ..utils import get_config, load_chart

console = Console()


@click.command()
@click.argument("input_file", type=click.Path())
def stats(input_file: str):
    """
    Show hierarchy statistics: size, depth, span of control, repairs.
    """
    chart = load_chart(input_file, get_config())
    if chart is None:
        raise SystemExit(1)

    data = chart.stats()
    table = Table(title="Organization Summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Employees", str(data["total_entities"]))
    table.add_row("Top-level roots", str(data["roots"]))
    table.add_row("Levels", str(data["max_depth"] + 1))
    owner = data["largest_span_owner"]
    span = str(data["largest_span_of_control"])
    if owner is not None:
        span += f" ({chart.get_entity(owner).name})"
    table.add_row("Largest span of control", span)
    table.add_row("Cycles broken", ", ".join(map(str, data["cycles_broken"])) or "none")
    table.add_row("Duplicate ids", ", ".join(map(str, data["duplicates"])) or "none")

    console.print(table)
