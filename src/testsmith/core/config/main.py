"""Configuration management for testsmith."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Self

import typer
import yaml
from pydantic import BaseModel, Field
from rich.console import Console

from testsmith.core.context import DEFAULT_EXCLUDED_DIRECTORIES, DEFAULT_SOURCE_EXTENSIONS
from testsmith.core.frameworks import Framework
from testsmith.utils.errors import ConfigLoadingError

console = Console()

DEFAULT_SCENARIO = """\
Navigate to https://www.webpagetest.org/ and handle any popups,
wait for 2 seconds,
then navigate to thoughtworks.com and wait for 2 seconds,
then close the browser"""


class ProjectConfig(BaseModel):
    """Project configuration settings."""

    name: str
    root: str = "."
    test_directory: str = "./tests"

    @property
    def root_path(self) -> Path:
        return Path(self.root).resolve()

    @property
    def test_path(self) -> Path:
        return Path(self.test_directory).resolve()


class AIConfig(BaseModel):
    """AI configuration settings."""

    connector: str = "google"
    model: str = "gemini-2.0-flash"
    temperature: float | None = None


class GenerationConfig(BaseModel):
    """Settings of the generate, run and repair loop."""

    max_attempts: int = Field(default=3, ge=1)
    frameworks: list[Framework] = Field(default_factory=lambda: list(Framework))
    base_name: str = "e2e_scenario"
    scenario: str = DEFAULT_SCENARIO
    source_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE_EXTENSIONS))
    excluded_directories: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRECTORIES))
    timeout: float | None = None  # Seconds, None means wait for the external tool forever


class TestsmithConfig(BaseModel):
    """Main testsmith configuration."""

    __test__: ClassVar[bool] = False  # Keep pytest from collecting this class

    project: ProjectConfig
    ai: AIConfig = Field(default_factory=AIConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    verbose: bool = True  # Show generated scripts

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the path to the configuration file."""
        return Path.cwd() / "testsmith.yaml"

    @classmethod
    def from_file(cls, config_path: Path) -> Self:
        """Parse a configuration file, raising ConfigLoadingError if it is unreadable or invalid."""
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
            return cls(**config_data)
        except (OSError, ValueError, TypeError) as e:
            raise ConfigLoadingError(f"{e.__class__.__name__}: {e}") from e

    @classmethod
    def load_config(cls) -> Self:
        """Load configuration from testsmith.yaml file."""
        config_path = cls.get_config_path()

        if not config_path.exists():
            console.print("[red]Error:[/red] No testsmith.yaml found.")
            console.print("Run [bold]testsmith init[/bold] to create a configuration file.")
            raise typer.Exit(1)

        try:
            return cls.from_file(config_path)
        except ConfigLoadingError as e:
            console.print(f"[red]Error loading configuration:[/red] {e}")
            raise typer.Exit(-1) from e

    def save(self) -> Path:
        """Save configuration to testsmith.yaml file."""
        config_path = self.get_config_path()

        try:
            with open(config_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.model_dump(mode="json"), f, sort_keys=False)
        except (OSError, ValueError) as e:
            console.print(f"[red]Error saving configuration:[/red] {e}")
            raise typer.Exit(-1) from e
        else:
            console.print(f"[green]Configuration saved to {config_path}[/green]")

        return config_path
