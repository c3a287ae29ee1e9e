"""
@PURPOSE: CLI account commands - inspect the test-account secret map without printing passwords
@OUTLINE:
  - accounts_app: Typer command group
  - list_accounts(): table of email / secret key / role / password presence
  - check(): resolve one account and report where its password comes from
@DEPENDENCIES:
  - Internal: src.core.secret_manager, src.core.env_config
  - External: typer, rich
"""

import typer
from rich.console import Console
from rich.table import Table

from src.core.env_config import get_env_config
from src.core.secret_manager import get_secret_manager

accounts_app = typer.Typer(
    name="accounts",
    help="Test account management",
)

console = Console()


def _roles_by_email():
    return {email: user_type.display_name for user_type, email in get_env_config().get_user_emails().items()}


@accounts_app.command("list")
def list_accounts():
    """List configured test accounts.

    Examples:
        publicinput-e2e accounts list
    """
    secret_manager = get_secret_manager()
    roles = _roles_by_email()

    table = Table(title="Test accounts")
    table.add_column("Email", style="cyan")
    table.add_column("Secret key")
    table.add_column("Role")
    table.add_column("Password", justify="center")

    for email in secret_manager.get_available_accounts():
        info = secret_manager.get_account_info(email)
        table.add_row(
            email,
            info.secret_key,
            roles.get(email, "-"),
            "[green]✓[/green]" if info.has_password else "[red]✗[/red]",
        )

    console.print(table)


@accounts_app.command("check")
def check(email: str = typer.Argument(..., help="Account email")):
    """Check that an account has a password in the environment.

    Examples:
        publicinput-e2e accounts check admin_test@publicinput.org
    """
    info = get_secret_manager().get_account_info(email)
    if info is None:
        console.print(f"[red]✗[/red] No secret key configured for {email}")
        raise typer.Exit(1) from None

    console.print(f"Secret key: {info.secret_key}")
    if info.has_password:
        console.print(f"[green]✓[/green] Password available for {email}")
    else:
        console.print("[yellow]⚠[/yellow] No password variable set, the secret key will be used as the password")
        raise typer.Exit(1) from None
