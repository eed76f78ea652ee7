"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, configuration loading and the
chart loading logic shared by every command.
"""

import json
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from ..config import OrgTreeConfig, load_config
from ..core.errors import OrgTreeError
from ..graph.chart import OrgChart


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """Print a warning message with a yellow alert symbol."""
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def get_config(ctx: Optional[click.Context] = None) -> OrgTreeConfig:
    """
    Configuration for the current invocation.

    Uses the config attached by the root group when present, otherwise the
    project file in the working directory.
    """
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None and ctx.find_root().obj and "config" in ctx.find_root().obj:
        return ctx.find_root().obj["config"]
    return load_config()


def load_chart(input_file: str, config: OrgTreeConfig) -> Optional[OrgChart]:
    """
    Load an OrgChart from a JSON records file.

    Args:
        input_file (str): Path to a JSON file holding a list of records or
            an object with an "entities" list.
        config (OrgTreeConfig): Active configuration.

    Returns:
        Optional[OrgChart]: The loaded chart with its forest built, or None
            if loading failed (including a reporting cycle under the RAISE
            policy).
    """
    path = Path(input_file)
    if not path.exists():
        echo_error(f"Input file not found: {input_file}")
        return None

    try:
        chart = OrgChart.from_file(path, config)
        chart.build()
        return chart
    except json.JSONDecodeError as e:
        echo_error(f"Invalid JSON in {input_file}: {e}")
    except (ValidationError, OrgTreeError) as e:
        echo_error(f"Failed to load records: {e}")
    return None
