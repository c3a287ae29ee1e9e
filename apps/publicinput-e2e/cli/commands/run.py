"""
@PURPOSE: CLI run command - launch the live scenarios under pytest
@OUTLINE:
  - run(): set environment overrides, enable live tests, call pytest.main on tests/e2e
@GOTCHAS:
  - Overrides go through os.environ so the ConfigurationManager built inside pytest sees them
  - tests/e2e is not packaged; only a source checkout or editable install can run it
@DEPENDENCIES:
  - Internal: config.settings
  - External: typer, rich, pytest
"""

import os
from pathlib import Path
from typing import Optional

import pytest
import typer
from rich.console import Console

from config.settings import reset_configuration_manager

E2E_TESTS_DIR = Path(__file__).resolve().parents[2] / "tests" / "e2e"

console = Console()


def run(
    env: Optional[str] = typer.Option(None, "--env", help="Environment name (dev/qa/prod)"),
    browser: Optional[str] = typer.Option(None, "--browser", help="chromium/firefox/webkit"),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window"),
    keyword: Optional[str] = typer.Option(None, "-k", help="pytest -k expression"),
    marker: Optional[str] = typer.Option(None, "-m", help="pytest -m expression"),
):
    """Run the end-to-end scenarios.

    Examples:
        publicinput-e2e run --env qa
        publicinput-e2e run --browser firefox --headed -k login
    """
    if not E2E_TESTS_DIR.is_dir():
        console.print(
            f"[red]✗[/red] Scenario directory not found: {E2E_TESTS_DIR} "
            "(the scenarios ship with the source tree, install with `pip install -e .`)"
        )
        raise typer.Exit(2)

    os.environ["RUN_E2E"] = "1"
    if env:
        os.environ["ENV"] = env
    if browser:
        os.environ["BROWSER"] = browser
    if headed:
        os.environ["HEADLESS"] = "false"
    reset_configuration_manager()

    args = [str(E2E_TESTS_DIR)]
    if keyword:
        args += ["-k", keyword]
    if marker:
        args += ["-m", marker]

    console.print(f"[bold blue]Running:[/bold blue] pytest {' '.join(args)}")
    exit_code = pytest.main(args)
    raise typer.Exit(int(exit_code))
