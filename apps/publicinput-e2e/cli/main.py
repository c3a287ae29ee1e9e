"""
@PURPOSE: CLI entry point - PublicInput end-to-end suite tooling
@OUTLINE:
  - app: Typer root application
  - sub-commands: config / accounts / artifacts, plus run and version
@GOTCHAS:
  - Environment selection follows $ENV unless a command takes --env
  - Logging is configured once per invocation from settings.logging
@DEPENDENCIES:
  - Internal: cli.commands.*, config.settings, src.utils.logger_setup
  - External: typer, rich
"""

import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from pathlib import Path

import typer
from rich.console import Console

from cli.commands.accounts import accounts_app
from cli.commands.artifacts import artifacts_app
from cli.commands.config import config_app
from cli.commands.run import run
from config.settings import get_configuration_manager
from src.utils.logger_setup import setup_logger

app = typer.Typer(
    name="publicinput-e2e",
    help="PublicInput end-to-end UI test suite",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(config_app, name="config")
app.add_typer(accounts_app, name="accounts")
app.add_typer(artifacts_app, name="artifacts")
app.command("run")(run)


def _installed_version() -> str:
    try:
        return package_version("publicinput-e2e")
    except PackageNotFoundError:
        return "unknown"


@app.command()
def version():
    """Show version and environment information.

    Examples:
        publicinput-e2e version
    """
    manager = get_configuration_manager()
    console.print("\n[bold cyan]PublicInput E2E[/bold cyan]")
    console.print(f"Version: [bold]{_installed_version()}[/bold]")
    console.print("\nEnvironment:")
    console.print(f"  ENV: {manager.get_environment()}")
    console.print(f"  Base URL: {manager.get_base_url()}")
    console.print(f"  Python: {sys.version.split()[0]}")
    console.print(f"  Working directory: {Path.cwd()}")


@app.callback()
def main():
    """PublicInput end-to-end UI test suite.

    Quick start:
      1. Check accounts: publicinput-e2e accounts list
      2. Run the suite: publicinput-e2e run --env qa
    """
    setup_logger()


if __name__ == "__main__":
    app()
