"""
Human-readable output formatting.

Centralizes all CLI output so commands stay thin and the facade can switch
between rendered text and JSON in one place.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List

import typer
from rich.console import Console
from rich.table import Table

from ..api.models import (
    PostgresAttachment,
    PostgresClusterDatabase,
    PostgresClusterUser,
    TemplateDeployment,
)
from ..config_tree import DEFAULT_MAX_DEPTH
from ..render import RenderDiagnostic, ValueRenderer

_console = Console()


def _relative(path: Path) -> str:
    """Path relative to the cwd when it is underneath it."""
    try:
        return os.path.relpath(path)
    except ValueError:
        return str(path)


def print_config_tree(definition: Dict[str, Any], key: str,
                      max_depth: int = DEFAULT_MAX_DEPTH) -> List[RenderDiagnostic]:
    """
    Print a configuration definition as indented text.

    Returns:
        Diagnostics for values that could not be rendered
    """
    return ValueRenderer(write=typer.echo, max_depth=max_depth).render(definition, key, 0)


def print_config_json(definition: Dict[str, Any]) -> None:
    typer.echo(json.dumps(definition, indent=2))


def print_config_written(path: Path) -> None:
    typer.echo(f"Wrote config file {_relative(path)}")


def print_config_kept(path: Path) -> None:
    typer.echo(f"Kept existing config file {_relative(path)}")


def print_existing_config_warning(path: Path) -> None:
    _console.print(f"[red]An existing configuration file has been found:[/] {_relative(path)}")


def print_validating(path: Path) -> None:
    _console.print(f"[bold]Validating[/] {_relative(path)}")


def print_validation_success() -> None:
    _console.print("[green]✓[/] Configuration is valid")


def print_validation_errors(errors: List[str]) -> None:
    """
    Print formatted validation errors, one per line.

    Args:
        errors: Error lines already carrying the failure marker
    """
    typer.echo()
    for error in errors:
        typer.echo(f"    {error}")
    typer.echo()


def print_error(exc: BaseException) -> None:
    typer.echo(f"Error: {exc}", err=True)


def print_deployment(deployment: TemplateDeployment) -> None:
    """
    Print a template deployment with its apps.

    Args:
        deployment: Deployment to display
    """
    _console.print(f"[bold]Deployment:[/] {deployment.id}")
    _console.print(f"[bold]Status:[/] {deployment.status}")

    if not deployment.apps:
        _console.print("[dim]No apps yet[/]")
        return

    table = Table(title="Apps")
    table.add_column("Name", style="cyan")
    table.add_column("State", style="yellow")
    table.add_column("Status")
    for app in deployment.apps:
        table.add_row(app.name, app.state or "", app.status or "")
    _console.print(table)


def print_attachment(attachment: PostgresAttachment) -> None:
    typer.echo(
        f"Postgres cluster {attachment.resource_app.name} is now attached to {attachment.primary_app.name}"
    )


def print_detached(postgres_app_name: str, app_name: str) -> None:
    typer.echo(f"Postgres cluster {postgres_app_name} is now detached from {app_name}")


def print_databases(databases: List[PostgresClusterDatabase]) -> None:
    if not databases:
        typer.echo("No databases")
        return

    table = Table(title="Databases")
    table.add_column("Name", style="cyan")
    table.add_column("Users")
    for db in databases:
        table.add_row(db.name, ", ".join(db.users))
    _console.print(table)


def print_users(users: List[PostgresClusterUser]) -> None:
    if not users:
        typer.echo("No users")
        return

    table = Table(title="Users")
    table.add_column("Username", style="cyan")
    table.add_column("Superuser", style="yellow")
    table.add_column("Databases")
    for user in users:
        table.add_row(user.username, "yes" if user.is_superuser else "no", ", ".join(user.databases))
    _console.print(table)
