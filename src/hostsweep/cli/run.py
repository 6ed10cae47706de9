"""Sweep CLI command."""

from pathlib import Path

import click

from hostsweep.cli.output import OutputFormatter
from hostsweep.core.config import load_config
from hostsweep.core.errors import SweepError, handle_error
from hostsweep.core.logging import info
from hostsweep.core.report import open_report
from hostsweep.core.sweep import SweepEngine


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file overriding the default keywords, exclusions and locations",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Report file (default: RegistryScannerResults.txt on the desktop)",
)
@click.option(
    "--report-format",
    type=click.Choice(["text", "jsonl"]),
    default="text",
    help="Report file format (default: text)",
)
@click.pass_context
def run(
    ctx: click.Context,
    config_path: Path | None,
    output: Path | None,
    report_format: str,
) -> None:
    """Sweep the host and write the findings report.

    Findings and per-item failures go to the report. The command only
    fails when the report itself cannot be written.
    """
    formatter: OutputFormatter = ctx.obj["formatter"]

    try:
        sweep_config = load_config(config_path)
        report_path = str(output) if output else sweep_config.report_path

        info("Scanning for suspicious registry keys, files and execution traces...")
        with open_report(report_path, report_format) as sink:
            summary = SweepEngine(sweep_config).run(sink)

        info(f"Scan completed. Results saved to: {report_path}")
        formatter.output(summary, title="Sweep summary")
    except SweepError as e:
        handle_error(e)
