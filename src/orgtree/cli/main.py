"""
orgtree CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging
import sys

import click

from ..config import load_config
from ..core.errors import ConfigError
from .commands import initialize, layout, path, render, stats
from .utils import echo_error


@click.group()
@click.version_option(package_name="orgtree")
@click.option("-c", "--config", "config_file", default=None,
              help="Path to config.yaml (default: .orgtree/config.yaml)")
@click.option("-v", "--verbose", is_flag=True, help="Log engine decisions to stderr")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, verbose: bool):
    """orgtree: Organization chart layout engine.

    Turns flat reports-to records into a positioned tree diagram.

    \b
    Quick Start:
      orgtree init
      orgtree layout employees.json --output scene.json
      orgtree render employees.json --highlight "Jane" --output chart.svg
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="[%X]",
        )

    try:
        config = load_config(config_file)
    except ConfigError as e:
        echo_error(str(e))
        sys.exit(2)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# Register commands
main.add_command(initialize.init)
main.add_command(layout.layout)
main.add_command(path.path)
main.add_command(render.render)
main.add_command(stats.stats)

if __name__ == "__main__":
    main()
