"""CLI utilities."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from sharpcheck.config.loader import load_config
from sharpcheck.config.models import SharpCheckConfig
from sharpcheck.core.errors import ConfigError
from sharpcheck.rules.models import CheckResult


def load_cli_config(config_file: Path | None = None) -> SharpCheckConfig:
    """Load configuration for the current directory.

    Raises:
        click.ClickException: On any ConfigError, with its message.
    """
    try:
        return load_config(Path.cwd(), config_file=config_file)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def get_config(ctx: click.Context) -> SharpCheckConfig:
    obj = ctx.find_root().obj or {}
    config = obj.get("config")
    return config if config is not None else load_cli_config()


def diagnostics_table(result: CheckResult) -> Table:
    """Render every diagnostic of ``result`` as a rich table."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Location", style="cyan", no_wrap=True)
    table.add_column("Rule", style="yellow")
    table.add_column("Message")
    for diagnostic in result.diagnostics:
        table.add_row(
            f"{diagnostic.path}:{diagnostic.line}:{diagnostic.column}",
            diagnostic.rule_id,
            diagnostic.message,
        )
    return table
