"""
@PURPOSE: CLI config commands - inspect and validate environment configuration
@OUTLINE:
  - config_app: Typer command group
  - show(): print resolved settings (secrets masked)
  - validate(): check an environment YAML file against the settings models
@DEPENDENCIES:
  - Internal: config.settings
  - External: typer, rich, pyyaml, pydantic
"""

import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.syntax import Syntax

from config.settings import AppSettings, ConfigurationManager, create_settings, get_configuration_manager

config_app = typer.Typer(
    name="config",
    help="Configuration management",
)

console = Console()


@config_app.command("show")
def show(
    env: Optional[str] = typer.Option(None, "--env", help="Environment name"),
    format: str = typer.Option("yaml", "--format", "-f", help="Output format (yaml/json)"),
):
    """Show the resolved configuration.

    Examples:
        publicinput-e2e config show
        publicinput-e2e config show --env prod -f json
    """
    manager = ConfigurationManager(env) if env else get_configuration_manager()
    console.print(f"\n[bold]Environment:[/bold] {manager.get_environment()}\n")

    config_dict = manager.get_settings().to_dict()

    if format == "json":
        output = json.dumps(config_dict, indent=2, ensure_ascii=False)
        syntax = Syntax(output, "json", theme="monokai", line_numbers=True)
    elif format == "yaml":
        output = yaml.dump(config_dict, allow_unicode=True, default_flow_style=False)
        syntax = Syntax(output, "yaml", theme="monokai", line_numbers=True)
    else:
        console.print(f"[red]✗[/red] Unknown format: {format}")
        raise typer.Exit(1) from None

    console.print(syntax)


@config_app.command("validate")
def validate(
    config_file: Path = typer.Argument(..., help="Environment YAML file"),
):
    """Validate an environment file.

    Examples:
        publicinput-e2e config validate config/environments/qa.yaml
    """
    if not config_file.exists():
        console.print(f"[red]✗[/red] File not found: {config_file}")
        raise typer.Exit(1) from None

    console.print(f"Validating: {config_file}")

    try:
        with config_file.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f) or {}

        if isinstance(content, str):
            console.print(f"[green]✓[/green] Alias for environment: {content.strip()}")
            return

        if not isinstance(content, dict):
            console.print(f"[red]✗[/red] Expected a mapping, got {type(content).__name__}")
            raise typer.Exit(1) from None

        unknown = [key for key in content if key not in AppSettings.model_fields]
        if unknown:
            console.print(f"[yellow]⚠[/yellow] Unknown sections ignored: {', '.join(unknown)}")

        settings = create_settings(config_file.stem, content)
        console.print(f"[green]✓[/green] Base URL: {settings.cityzen_settings.base_url}")
        console.print(f"[green]✓[/green] Browser: {settings.browser_settings.browser}")
        console.print("\n[green]✓ Configuration is valid[/green]")

    except yaml.YAMLError as e:
        console.print(f"[red]✗[/red] YAML syntax error: {e}")
        raise typer.Exit(1) from None
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid settings:\n{e}")
        raise typer.Exit(1) from None
