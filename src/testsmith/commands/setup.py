"""Setup command implementation."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.text import Text

from testsmith.core.config.main import TestsmithConfig
from testsmith.core.frameworks import get_framework_spec
from testsmith.core.setup import setup_workspace

console = Console()


def setup_command(
    skip_install: bool = typer.Option(False, "--skip-install", help="Only create directories and config files"),
) -> None:
    """Prepare the project so generated scripts can be executed."""
    config = TestsmithConfig.load_config()

    console.print("\n[bold blue]📦 Setting up the test workspace[/bold blue]")
    report = setup_workspace(
        project_root=config.project.root_path,
        test_directory=config.project.test_path,
        frameworks=config.generation.frameworks,
        install=not skip_install,
    )

    for framework in report.installed:
        console.print(f"[green]✅ {get_framework_spec(framework).display_name} dependencies installed[/green]")
    for framework, error in report.failed.items():
        console.print(Text.assemble((f"❌ {get_framework_spec(framework).display_name}: ", "red"), error))
    if not report.created_files:
        console.print("[dim]Configuration files already present[/dim]")
