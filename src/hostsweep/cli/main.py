"""hostsweep CLI entry point and global options."""

import sys
from typing import Literal

import click

from hostsweep import __version__
from hostsweep.cli.config import config
from hostsweep.cli.output import OutputFormat, OutputFormatter, set_output_format
from hostsweep.cli.run import run
from hostsweep.core.logging import configure_logging, error, set_verbose


@click.group()
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "human"]),
    default="json",
    help="Stdout format for summaries and errors (default: json)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging to stderr",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress progress output",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Log format for stderr (default: text)",
)
@click.version_option(version=__version__, prog_name="hostsweep")
@click.pass_context
def cli(
    ctx: click.Context,
    format: OutputFormat,
    verbose: bool,
    quiet: bool,
    log_format: Literal["text", "json"],
) -> None:
    """hostsweep: sweep a Windows host for traces of cheat and hack tools.

    Inspects registry values, user directories, the Recycle Bin and the
    Prefetch folder for names matching a keyword list, and writes a
    tagged plain-text report.
    """
    ctx.ensure_object(dict)
    ctx.obj = {
        "format": format,
        "verbose": verbose,
        "quiet": quiet,
        "log_format": log_format,
        "formatter": OutputFormatter(format=format),
    }

    set_output_format(format)
    set_verbose(verbose)
    configure_logging(log_format=log_format, quiet=quiet)


cli.add_command(run)
cli.add_command(config)


EXIT_ERROR = 1


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        error(f"Unexpected error: {e}", type=type(e).__name__)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
