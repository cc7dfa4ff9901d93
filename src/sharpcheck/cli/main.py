"""SharpCheck CLI - sharpcheck command."""

from pathlib import Path

import click

from sharpcheck import __version__
from sharpcheck.cli.check import check_command
from sharpcheck.cli.fix import fix_command
from sharpcheck.cli.rules import rules_command
from sharpcheck.cli.utils import load_cli_config
from sharpcheck.core.logging import configure_logging, set_run_id


@click.group()
@click.version_option(version=__version__, prog_name="sharpcheck")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of .sharpcheck.yaml discovery",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_file: Path | None) -> None:
    """SharpCheck - find commented-out code and console output in C# sources."""
    ctx.ensure_object(dict)
    config = load_cli_config(config_file)
    if verbose:
        config.logging.level = "DEBUG"
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config
    configure_logging(config=config.logging)
    set_run_id()


cli.add_command(check_command, name="check")
cli.add_command(fix_command, name="fix")
cli.add_command(rules_command, name="rules")


if __name__ == "__main__":
    cli()
