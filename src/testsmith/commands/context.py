"""Context command implementation."""

from __future__ import annotations

import typer
from rich.console import Console

from testsmith.core.config.main import TestsmithConfig
from testsmith.core.context import scan_project

console = Console()


def load_context(config: TestsmithConfig) -> str:
    """Scan the configured project root. An unreadable root is fatal."""
    root = config.project.root_path
    try:
        return scan_project(
            root,
            extensions=config.generation.source_extensions,
            excluded=config.generation.excluded_directories,
        )
    except OSError as e:
        console.print(f"[red]❌ Error:[/red] Can not read project root {root}: {e}")
        raise typer.Exit(1) from e


def context_command() -> None:
    """Print the project structure manifest that grounds every prompt."""
    config = TestsmithConfig.load_config()
    manifest = load_context(config)
    if not manifest:
        console.print("[dim]No source files found[/dim]")
        return
    console.print(manifest, markup=False, highlight=False, soft_wrap=True)
