"""Allow running as python -m sharpcheck."""

from sharpcheck.cli.main import cli

if __name__ == "__main__":
    cli()
