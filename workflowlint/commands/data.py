"""Show which reference datasets are loaded."""

import json

import click
from rich.table import Table

from workflowlint.config_runtime import load_runtime_config
from workflowlint.pipeline.ui import console, print_header, print_warning
from workflowlint.reference import load_reference_data
from workflowlint.utils.error_handler import handle_exceptions


@click.command("data")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    help="Reference data directory (default: bundled snapshot)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the health report as JSON")
@handle_exceptions
def data(data_dir, as_json):
    """Report count, source and age of each reference dataset.

    A dataset that is missing or unreadable shows source "fallback"; the
    checks that depend on it are skipped, never failed.
    """
    config = load_runtime_config()
    reference = load_reference_data(data_dir or config["paths"]["data_dir"] or None)
    datasets = {name: info.to_dict() for name, info in reference.datasets.items()}
    status = "ok" if all(info.loaded for info in reference.datasets.values()) else "degraded"

    if as_json:
        click.echo(json.dumps({"status": status, "data": datasets}, indent=2))
        return

    print_header("REFERENCE DATA")
    table = Table(show_header=True, header_style="bold", expand=False)
    table.add_column("Dataset", style="path")
    table.add_column("Count", justify="right")
    table.add_column("Source", overflow="fold")
    table.add_column("Updated", style="dim")
    for name, info in datasets.items():
        table.add_row(name, str(info["count"]), info["source"], info["updated"] or "-")
    console.print(table)

    if status == "degraded":
        missing = [name for name, info in datasets.items() if not info["loaded"]]
        print_warning(f"Running with fallback data for: {', '.join(missing)}")
