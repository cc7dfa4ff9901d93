"""sharpcheck check command - report diagnostics."""

import json
from pathlib import Path

import click

from sharpcheck.cli.utils import diagnostics_table, get_config
from sharpcheck.core.errors import AnalysisCancelledError
from sharpcheck.core.progress import get_output_console, pluralize, status
from sharpcheck.rules import CheckOps, registry


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--rule", "rule_ids", multiple=True, help="Only run this rule (repeatable)")
@click.pass_context
def check_command(ctx: click.Context, paths: tuple[Path, ...], as_json: bool, rule_ids: tuple[str, ...]) -> None:
    """Check C# sources for commented-out code and console output.

    PATHS are files or directories (default: current directory). Exits with
    status 1 when anything is reported.
    """
    unknown = [rid for rid in rule_ids if registry.get(rid) is None]
    if unknown:
        raise click.BadParameter(f"Unknown rule(s): {', '.join(unknown)}", param_hint="--rule")

    ops = CheckOps(get_config(ctx))
    try:
        result = ops.check(paths or (Path("."),), rule_ids=list(rule_ids) or None)
    except AnalysisCancelledError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        if result.total_diagnostics:
            get_output_console().print(diagnostics_table(result))
        for failed in (f for f in result.files if f.status == "error"):
            status(f"{failed.path}: {failed.error_detail}", style="error")
        summary = (
            f"{pluralize(result.total_diagnostics, 'problem')} in "
            f"{pluralize(result.files_checked, 'file')}"
        )
        status(summary, style="warning" if result.total_diagnostics else "success")

    if result.total_diagnostics or result.status == "error":
        ctx.exit(1)
