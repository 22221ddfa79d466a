"""Generate command implementation."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from testsmith.ai.agent import MultiFrameworkDriver
from testsmith.ai.connectors import connect
from testsmith.ai.synthesizer import ScriptSynthesizer
from testsmith.core.config.main import TestsmithConfig
from testsmith.core.frameworks import Framework
from testsmith.core.test import run_script
from testsmith.utils.errors import InitError

from .context import load_context

if TYPE_CHECKING:
    from testsmith.ai.agent import RepairState
    from testsmith.ai.connectors import AIConnector

console = Console()


def _parse_frameworks(values: list[str] | None) -> list[Framework] | None:
    if not values:
        return None
    try:
        return [Framework.parse(value) for value in values]
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--framework") from e


def _create_connector(config: TestsmithConfig) -> AIConnector:
    """Create the configured connector. A missing credential stops the whole run."""
    try:
        connector = connect(config.ai.connector, config.ai.model)
    except InitError as e:
        console.print(f"[red]❌ Error:[/red] {e}")
        raise typer.Exit(1) from e

    if not connector.is_available:
        env_var = connector.API_KEY_ENV_VAR
        console.print(f"[red]❌ Error:[/red] {env_var} environment variable not set.")
        console.print(f"[dim]export {env_var}=your_api_key_here[/dim] or add it to a .env file")
        raise typer.Exit(1)

    return connector


def _print_summary(outcomes: dict[Framework, RepairState]) -> None:
    table = Table(title="Results")
    table.add_column("Framework", style="bold")
    table.add_column("Result")
    table.add_column("Attempts", justify="right")
    table.add_column("Script")

    for state in outcomes.values():
        result = "[green]passed[/green]" if state.succeeded else "[red]failed[/red]"
        table.add_row(state.spec.display_name, result, f"{state.attempt}/{state.max_attempts}", str(state.output_path))

    console.print(table)


def generate_command(
    framework: list[str] | None = typer.Option(
        None, "--framework", "-f", help="Framework to generate for, repeatable. Defaults to the configured ones"
    ),
    scenario: str | None = typer.Option(None, "--scenario", "-s", help="Scenario text, overrides the configured one"),
    scenario_file: Path | None = typer.Option(
        None, "--scenario-file", exists=True, dir_okay=False, readable=True, help="Read the scenario from a file"
    ),
    max_attempts: int | None = typer.Option(None, "--max-attempts", min=1, help="Attempts per framework"),
) -> None:
    """Generate a test script per framework, run it and repair it until it passes."""
    frameworks = _parse_frameworks(framework)
    if scenario is not None and scenario_file is not None:
        raise typer.BadParameter("Use either --scenario or --scenario-file", param_hint="--scenario")
    if scenario_file is not None:
        scenario = scenario_file.read_text(encoding="utf-8")

    config = TestsmithConfig.load_config()
    if max_attempts is not None:
        config.generation.max_attempts = max_attempts

    connector = _create_connector(config)
    context = load_context(config)

    console.print(f"Using {connector.model_name} from {config.ai.connector}")

    driver = MultiFrameworkDriver(
        config,
        synthesizer=ScriptSynthesizer(connector, temperature=config.ai.temperature),
        context=context,
        frameworks=frameworks,
        scenario=scenario,
        runner=run_script,
        console=console,
    )
    outcomes = asyncio.run(driver.run())

    _print_summary(outcomes)
    if not all(state.succeeded for state in outcomes.values()):
        raise typer.Exit(1)
