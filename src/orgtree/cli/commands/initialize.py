"""
Init Command - Write a starter configuration.

Creates `.orgtree/config.yaml` with every default spelled out so it can be
edited in place.
"""

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from ...config import OrgTreeConfig, default_config_path

console = Console()


@click.command()
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
def init(force: bool):
    """
    Initialize orgtree in the current directory.
    """
    console.print(Panel.fit("🚀 [bold blue]orgtree Initialization[/bold blue]", border_style="blue"))

    config_file = default_config_path(Path.cwd())
    if config_file.exists() and not force:
        console.print(f"[yellow]Configuration already exists at {config_file}[/yellow]")
        if not Confirm.ask("Do you want to overwrite it?"):
            console.print("Aborted.")
            return

    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(OrgTreeConfig().to_yaml())

    console.print("\n✨ [bold green]Initialized successfully![/bold green]")
    console.print(f"   Config created at: [dim]{config_file}[/dim]")
