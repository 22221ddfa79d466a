"""Frameworks command implementation."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from testsmith.core.frameworks import FRAMEWORKS

console = Console()


def frameworks_command(
    base_name: str = typer.Option("e2e_scenario", "--base-name", help="Base name of the generated files"),
) -> None:
    """Show the id, output file and run command of every supported framework."""
    table = Table(title="Supported frameworks")
    table.add_column("Id", style="bold")
    table.add_column("Name")
    table.add_column("Output file")
    table.add_column("Run command")

    for framework, spec in FRAMEWORKS.items():
        output_file = spec.output_filename(base_name)
        table.add_row(framework.value, spec.display_name, output_file, spec.run_command.format(file=output_file))

    console.print(table)
