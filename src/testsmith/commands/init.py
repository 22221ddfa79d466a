"""Init command implementation."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from testsmith.ai.connectors.factory import CONNECTOR_REGISTRY
from testsmith.core.config.main import AIConfig, GenerationConfig, ProjectConfig, TestsmithConfig

console = Console()

MAIN_CONNECTORS = ["google", "anthropic", "openai"]


def init_command(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing testsmith.yaml"),
) -> None:
    """Interactively create testsmith.yaml in the current directory."""
    console.print("\n[bold blue]🛠  Initializing testsmith[/bold blue]")

    config_path = TestsmithConfig.get_config_path()
    if config_path.exists() and not force:
        console.print(f"[yellow]{config_path.name} already exists.[/yellow] Use [bold]--force[/bold] to overwrite it.")
        raise typer.Exit(1)

    name = Prompt.ask("Project name", default=Path.cwd().name)
    test_directory = Prompt.ask("Directory for generated tests", default="./tests")
    connector = Prompt.ask("AI connector", choices=MAIN_CONNECTORS, default="google")
    connector_class = CONNECTOR_REGISTRY[connector]
    model = Prompt.ask("Model", default=connector_class.DEFAULT_MODEL)
    max_attempts = IntPrompt.ask("Attempts per framework", default=GenerationConfig().max_attempts)

    config = TestsmithConfig(
        project=ProjectConfig(name=name, test_directory=test_directory),
        ai=AIConfig(connector=connector, model=model),
        generation=GenerationConfig(max_attempts=max(max_attempts, 1)),
    )
    config.save()

    console.print(f"\nSet [bold]{connector_class.API_KEY_ENV_VAR}[/bold] in your environment or a .env file.")
    console.print("Then run [bold]testsmith setup[/bold] and [bold]testsmith generate[/bold].")
