"""
Operations Facade - Application service layer.

Provides a clean interface between the CLI and the control plane client,
centralizing command orchestration and output mode decisions while keeping
CLI commands thin and testable.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..api.client import PlatformClient
from ..api.models import (
    AttachPostgresClusterInput,
    PostgresAttachment,
    PostgresClusterDatabase,
    PostgresClusterUser,
    TemplateDeployment,
    ValidationResult,
)
from ..app_config import AppConfig, write_app_config
from ..config_tree import DEFAULT_MAX_DEPTH
from ..errors import ValidationFailed
from ..render import RenderDiagnostic
from .printers import print_config_json, print_config_tree

logger = logging.getLogger(__name__)

FAILURE_MARKER = "✘"
CONFIG_SECTION_KEY = "services"


def format_validation_errors(errors: List[str]) -> List[str]:
    """Prefix every remote validation error with the failure marker."""
    return [f"{FAILURE_MARKER} {error}" for error in errors]


@dataclass(frozen=True)
class OpsConfig:
    """
    Configuration for Operations facade.

    Centralizes output policy so commands don't each decide it.
    """
    json_output: bool = False             # Machine-readable output instead of rendered text
    render_max_depth: int = DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class SaveResult:
    """Outcome of saving remote configuration to a local file."""
    path: Path
    written: bool


class Operations:
    """
    Application service facade for CLI operations.

    One method per CLI verb. Exceptions from the client bubble up unchanged
    for the central exit-code mapping in ``mappers.run_and_exit``.
    """

    def __init__(self, config: OpsConfig, client: PlatformClient):
        """
        Initialize Operations facade.

        Args:
            config: Output and rendering policy
            client: Control plane client
        """
        self.cfg = config
        self.client = client

    # Configuration

    def fetch_config(self, app_name: str) -> Dict[str, Any]:
        """Fetch the server-side configuration definition for an app."""
        return self.client.get_config(app_name).definition

    def show_config(self, app_name: str) -> List[RenderDiagnostic]:
        """
        Fetch and print an app's configuration.

        Returns:
            Render diagnostics (always empty in JSON mode)
        """
        definition = self.fetch_config(app_name)
        if self.cfg.json_output:
            print_config_json(definition)
            return []
        return print_config_tree(definition, CONFIG_SECTION_KEY, max_depth=self.cfg.render_max_depth)

    def save_config(self, app_name: str, path: Path,
                    confirm: Callable[[Path], bool]) -> SaveResult:
        """
        Save an app's remote configuration to ``path``.

        If the file already exists ``confirm`` is asked first; declining is
        a successful no-op and nothing is fetched or written.

        Args:
            app_name: App whose configuration to fetch
            path: Destination file
            confirm: Callback asked before overwriting an existing file

        Returns:
            SaveResult telling whether the file was written
        """
        if path.exists() and not confirm(path):
            logger.info(f"Kept existing config file {path}")
            return SaveResult(path=path, written=False)

        definition = self.fetch_config(app_name)
        written = write_app_config(path, AppConfig(app_name=app_name, definition=definition))
        return SaveResult(path=written, written=True)

    def validate_config(self, app_name: str, definition: Dict[str, Any]) -> ValidationResult:
        """
        Validate a configuration definition against the control plane.

        Returns:
            The validation result when the definition is valid

        Raises:
            ValidationFailed: If the control plane reports the definition invalid
        """
        result = self.client.parse_config(app_name, definition)
        if result.valid:
            return result
        raise ValidationFailed(format_validation_errors(result.errors))

    # Postgres clusters

    def create_postgres(self, organization_id: str, name: str, region: str) -> TemplateDeployment:
        return self.client.create_postgres_cluster(organization_id, name, region)

    def get_deployment(self, deployment_id: str) -> TemplateDeployment:
        return self.client.get_template_deployment(deployment_id)

    def attach_postgres(self, app_name: str, postgres_app_name: str, *,
                        database_name: Optional[str] = None,
                        variable_name: Optional[str] = None) -> PostgresAttachment:
        attach_input = AttachPostgresClusterInput(
            app_id=app_name,
            postgres_cluster_app_id=postgres_app_name,
            database_name=database_name,
            variable_name=variable_name,
        )
        return self.client.attach_postgres_cluster(attach_input)

    def detach_postgres(self, app_name: str, postgres_app_name: str) -> None:
        self.client.detach_postgres_cluster(postgres_app_name, app_name)

    def list_postgres_databases(self, app_name: str) -> List[PostgresClusterDatabase]:
        return self.client.list_postgres_databases(app_name)

    def list_postgres_users(self, app_name: str) -> List[PostgresClusterUser]:
        return self.client.list_postgres_users(app_name)
