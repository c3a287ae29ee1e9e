"""
@PURPOSE: CLI artifact commands - push test results to Azure Blob Storage
@OUTLINE:
  - artifacts_app: Typer command group
  - upload(): upload the results directory into a per-run container
  - list_artifacts(): list blobs in a container
@GOTCHAS:
  - Both commands exit 1 when AZURE_STORAGE_CONNECTION_STRING is not configured
@DEPENDENCIES:
  - Internal: src.services.storage_service, src.core.errors
  - External: typer, rich
"""

from typing import Optional

import typer
from rich.console import Console

from src.core.errors import StorageError
from src.services.storage_service import AzureBlobStorageService

artifacts_app = typer.Typer(
    name="artifacts",
    help="Test artifact storage",
)

console = Console()


@artifacts_app.command("upload")
def upload(run_id: Optional[str] = typer.Option(None, "--run-id", help="Container suffix for this run")):
    """Upload screenshots, traces and videos.

    Examples:
        publicinput-e2e artifacts upload --run-id nightly-42
    """
    try:
        uploaded = AzureBlobStorageService().upload_test_artifacts(run_id)
    except StorageError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1) from None

    console.print(f"[green]✓[/green] Uploaded {len(uploaded)} artifacts")
    for name in uploaded:
        console.print(f"  {name}")


@artifacts_app.command("list")
def list_artifacts(container: Optional[str] = typer.Option(None, "--container", help="Container name")):
    """List stored artifacts.

    Examples:
        publicinput-e2e artifacts list --container test-screenshots-nightly-42
    """
    try:
        files = AzureBlobStorageService().list_files(container)
    except StorageError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1) from None

    console.print(f"[bold]{len(files)} artifacts[/bold]")
    for name in files:
        console.print(f"  {name}")
