"""Main CLI application for testsmith."""

import typer
from rich.console import Console

from . import __version__
from .commands import context as context_module
from .commands import frameworks as frameworks_module
from .commands import generate as generate_module
from .commands import init as init_module
from .commands import setup as setup_module

console = Console()
app = typer.Typer(
    name="testsmith",
    help="AI-generated, self-repairing E2E tests for Playwright, TestCafe and Selenium",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version information."""
    if value:
        console.print(f"testsmith v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """
    testsmith: write one scenario, get working tests for every framework.

    Scripts are generated by an AI model, run with the framework's own CLI and
    regenerated with the failure output until they pass.
    """


app.command("init", help="Initialize testsmith in your project")(init_module.init_command)
app.command("generate", help="Generate, run and repair test scripts")(generate_module.generate_command)
app.command("context", help="Show the project context sent to the model")(context_module.context_command)
app.command("frameworks", help="List supported test frameworks")(frameworks_module.frameworks_command)
app.command("setup", help="Install framework dependencies and config files")(setup_module.setup_command)


if __name__ == "__main__":
    app()
