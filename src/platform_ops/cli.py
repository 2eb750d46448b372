"""
Platform Ops CLI

Command groups:
- config show/save/validate: inspect, download and check app configuration
- postgres create/status/attach/detach: manage Postgres clusters
- postgres db list / postgres users list: inspect a cluster's databases and users
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .app_config import load_app_config, resolve_config_path
from .cli_context import CLIContext
from .logging_setup import configure_logging
from .operations import Operations, OpsConfig, run_and_exit
from .operations.printers import (
    print_attachment, print_config_kept, print_config_written, print_databases,
    print_deployment, print_detached, print_existing_config_warning, print_users,
    print_validating, print_validation_success
)

app = typer.Typer(name="platform-ops", help="Platform Ops CLI")
config_app = typer.Typer(help="Manage app configuration")
postgres_app = typer.Typer(help="Manage Postgres clusters")
postgres_db_app = typer.Typer(help="Postgres cluster databases")
postgres_users_app = typer.Typer(help="Postgres cluster users")

app.add_typer(config_app, name="config")
app.add_typer(postgres_app, name="postgres")
postgres_app.add_typer(postgres_db_app, name="db")
postgres_app.add_typer(postgres_users_app, name="users")

APP_HELP = "App name"


def _operations(context: CLIContext, json_output: bool = False) -> Operations:
    config = OpsConfig(json_output=json_output, render_max_depth=context.settings.render_max_depth)
    return Operations(config=config, client=context.client)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")
) -> None:
    """Operator client for the platform control plane."""
    configure_logging(verbose)


@config_app.command("show")
def config_show(
    app_name: str = typer.Option(..., "--app", "-a", envvar="PLATFORM_APP", help=APP_HELP),
    json_output: bool = typer.Option(False, "--json", help="Print the definition as JSON")
) -> None:
    """Show an app's configuration."""

    def _show() -> None:
        with CLIContext.from_env() as context:
            _operations(context, json_output=json_output).show_config(app_name)

    run_and_exit(_show)


@config_app.command("save")
def config_save(
    app_name: str = typer.Option(..., "--app", "-a", envvar="PLATFORM_APP", help=APP_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Config file or directory"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Overwrite an existing file without asking")
) -> None:
    """Save an app's configuration to a local file."""

    def _confirm(existing: Path) -> bool:
        if yes:
            return True
        print_existing_config_warning(existing)
        return typer.confirm(f"Overwrite file '{existing}'", default=False)

    def _save() -> None:
        path = resolve_config_path(config_path)
        with CLIContext.from_env() as context:
            result = _operations(context).save_config(app_name, path, _confirm)

        if result.written:
            print_config_written(result.path)
        else:
            print_config_kept(result.path)

    run_and_exit(_save)


@config_app.command("validate")
def config_validate(
    app_name: Optional[str] = typer.Option(None, "--app", "-a", envvar="PLATFORM_APP",
                                           help="App name (defaults to the app in the config file)"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Config file or directory")
) -> None:
    """Validate a local configuration file against the control plane."""

    def _validate() -> None:
        path = resolve_config_path(config_path)
        app_config = load_app_config(path)
        target = app_name or app_config.app_name
        if not target:
            raise ValueError(f"No app name given and none found in {path}")

        print_validating(path)
        with CLIContext.from_env() as context:
            _operations(context).validate_config(target, app_config.definition)
        print_validation_success()

    run_and_exit(_validate)


@postgres_app.command("create")
def postgres_create(
    organization: str = typer.Option(..., "--org", help="Organization id"),
    name: str = typer.Option(..., "--name", help="Cluster app name"),
    region: str = typer.Option(..., "--region", help="Primary region")
) -> None:
    """Create a Postgres cluster."""

    def _create() -> None:
        with CLIContext.from_env() as context:
            deployment = _operations(context).create_postgres(organization, name, region)
        print_deployment(deployment)

    run_and_exit(_create)


@postgres_app.command("status")
def postgres_status(
    deployment_id: str = typer.Argument(..., help="Template deployment id")
) -> None:
    """Show the status of a Postgres cluster deployment."""

    def _status() -> None:
        with CLIContext.from_env() as context:
            deployment = _operations(context).get_deployment(deployment_id)
        print_deployment(deployment)

    run_and_exit(_status)


@postgres_app.command("attach")
def postgres_attach(
    app_name: str = typer.Option(..., "--app", "-a", envvar="PLATFORM_APP", help=APP_HELP),
    postgres_app_name: str = typer.Option(..., "--postgres-app", help="Postgres cluster app name"),
    database_name: Optional[str] = typer.Option(None, "--database-name", help="Database to create for the app"),
    variable_name: Optional[str] = typer.Option(None, "--variable-name", help="Secret holding the connection string")
) -> None:
    """Attach a Postgres cluster to an app."""

    def _attach() -> None:
        with CLIContext.from_env() as context:
            attachment = _operations(context).attach_postgres(
                app_name,
                postgres_app_name,
                database_name=database_name,
                variable_name=variable_name
            )
        print_attachment(attachment)

    run_and_exit(_attach)


@postgres_app.command("detach")
def postgres_detach(
    app_name: str = typer.Option(..., "--app", "-a", envvar="PLATFORM_APP", help=APP_HELP),
    postgres_app_name: str = typer.Option(..., "--postgres-app", help="Postgres cluster app name")
) -> None:
    """Detach a Postgres cluster from an app."""

    def _detach() -> None:
        with CLIContext.from_env() as context:
            _operations(context).detach_postgres(app_name, postgres_app_name)
        print_detached(postgres_app_name, app_name)

    run_and_exit(_detach)


@postgres_db_app.command("list")
def postgres_db_list(
    app_name: str = typer.Option(..., "--app", "-a", envvar="PLATFORM_APP", help="Postgres cluster app name")
) -> None:
    """List databases in a Postgres cluster."""

    def _list() -> None:
        with CLIContext.from_env() as context:
            databases = _operations(context).list_postgres_databases(app_name)
        print_databases(databases)

    run_and_exit(_list)


@postgres_users_app.command("list")
def postgres_users_list(
    app_name: str = typer.Option(..., "--app", "-a", envvar="PLATFORM_APP", help="Postgres cluster app name")
) -> None:
    """List users in a Postgres cluster."""

    def _list() -> None:
        with CLIContext.from_env() as context:
            users = _operations(context).list_postgres_users(app_name)
        print_users(users)

    run_and_exit(_list)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
