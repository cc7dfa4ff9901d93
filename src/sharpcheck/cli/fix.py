"""sharpcheck fix command - apply code fixes."""

import json
from pathlib import Path

import click

from sharpcheck.cli.utils import get_config
from sharpcheck.core.errors import AnalysisCancelledError
from sharpcheck.core.progress import pluralize, status
from sharpcheck.rules import CheckOps


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option("--dry-run", is_flag=True, help="Print a diff instead of writing files")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def fix_command(ctx: click.Context, paths: tuple[Path, ...], dry_run: bool, as_json: bool) -> None:
    """Remove commented-out code from C# sources.

    PATHS are files or directories (default: current directory). Findings
    without a fix (console output) are left in place and reported.
    """
    ops = CheckOps(get_config(ctx))
    try:
        result = ops.fix(paths or (Path("."),), dry_run=dry_run)
    except AnalysisCancelledError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    for file_result in result.files:
        if file_result.diff:
            click.echo(file_result.diff, nl=False)
        if file_result.status == "error":
            status(f"{file_result.path}: {file_result.error_detail}", style="error")

    verb = "Would fix" if dry_run else "Fixed"
    status(f"{verb} {pluralize(result.files_modified, 'file')}", style="success")
    if result.total_diagnostics:
        status(f"{pluralize(result.total_diagnostics, 'problem')} left without a fix", style="warning")
