"""
Path Command - Show the reporting chain of an employee.
"""

import click

from ..utils import echo_error, get_config, load_chart


@click.command()
@click.argument("input_file", type=click.Path())
@click.argument("target")
def path(input_file: str, target: str) -> None:
    """
    Print the chain of managers from the top down to TARGET.

    TARGET is an entity id or a (partial) name.
    """
    chart = load_chart(input_file, get_config())
    if chart is None:
        raise SystemExit(1)

    target_id = chart.resolve(target)
    if target_id is None:
        echo_error(f"No employee found matching: {target}")
        raise SystemExit(1)

    chain = list(reversed(chart.chain(target_id)))

    click.echo()
    click.echo(f"🔗 {click.style('Reporting Chain', bold=True)}")
    click.echo("═" * 60)
    for depth, entity_id in enumerate(chain):
        entity = chart.get_entity(entity_id)
        connector = "└─" if depth == len(chain) - 1 else "├─"
        color = "green" if entity_id == target_id else "cyan"
        click.echo(f"{'   ' * depth}{connector} {click.style(entity.name, fg=color)} "
                   f"{click.style(f'#{entity_id}', dim=True)}")
    click.echo()
    click.echo(f"{len(chain)} level(s) from the top")
