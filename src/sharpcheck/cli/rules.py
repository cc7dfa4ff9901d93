"""sharpcheck rules command - list registered rules."""

import json

import click
from rich.table import Table

from sharpcheck.cli.utils import get_config
from sharpcheck.core.progress import get_output_console
from sharpcheck.rules import registry


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def rules_command(ctx: click.Context, as_json: bool) -> None:
    """List available rules and whether they are enabled."""
    config = get_config(ctx)
    rules = registry.all()

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": rule.rule_id,
                        "title": rule.title,
                        "category": rule.category,
                        "severity": rule.severity.value,
                        "enabled": rule.is_enabled(config),
                        "fix": rule.fix_title,
                        "description": rule.description,
                    }
                    for rule in rules
                ],
                indent=2,
            )
        )
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Rule", style="cyan")
    table.add_column("Category")
    table.add_column("Enabled")
    table.add_column("Fix")
    table.add_column("Description")
    for rule in rules:
        table.add_row(
            rule.rule_id,
            rule.category,
            "yes" if rule.is_enabled(config) else "no",
            rule.fix_title or "-",
            rule.description,
        )
    get_output_console().print(table)
