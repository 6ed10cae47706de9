"""Configuration CLI commands."""

from pathlib import Path

import click

from hostsweep.cli.output import OutputFormatter
from hostsweep.core.config import load_config
from hostsweep.core.errors import SweepError, handle_error


@click.group()
def config() -> None:
    """Inspect the sweep configuration."""
    pass


@config.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file overriding the defaults",
)
@click.pass_context
def show(ctx: click.Context, config_path: Path | None) -> None:
    """Show the effective configuration."""
    formatter: OutputFormatter = ctx.obj["formatter"]

    try:
        sweep_config = load_config(config_path)
        formatter.output(sweep_config.model_dump(mode="json"), title="Sweep configuration")
    except SweepError as e:
        handle_error(e)
