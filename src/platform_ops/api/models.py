"""
Typed results for control plane operations.

One Pydantic model per operation result shape. Remote field names are
camelCase and map through aliases; connection shapes (``{"nodes": [...]}``)
are flattened to plain lists.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RemoteModel(BaseModel):
    """Base for models decoded from remote responses."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _flatten_nodes(value: Any) -> Any:
    if isinstance(value, dict) and "nodes" in value:
        return value["nodes"] or []
    return value


class App(RemoteModel):
    """App summary as it appears inside other results."""
    name: str
    state: Optional[str] = None
    status: Optional[str] = None


class TemplateDeployment(RemoteModel):
    """Provisioning job that creates the apps behind a Postgres cluster."""
    id: str
    status: str
    apps: List[App] = Field(default_factory=list)

    @field_validator("apps", mode="before")
    @classmethod
    def flatten_apps(cls, v):
        return _flatten_nodes(v) if v is not None else []


class AttachPostgresClusterInput(RemoteModel):
    """Input for attaching a Postgres cluster to an app."""
    app_id: str = Field(..., alias="appId")
    postgres_cluster_app_id: str = Field(..., alias="postgresClusterAppId")
    database_name: Optional[str] = Field(default=None, alias="databaseName")
    variable_name: Optional[str] = Field(default=None, alias="variableName")


class PostgresAttachment(RemoteModel):
    """Both sides of an attach: the consuming app and the cluster app."""
    primary_app: App = Field(..., alias="app")
    resource_app: App = Field(..., alias="postgresClusterApp")


class PostgresClusterDatabase(RemoteModel):
    name: str
    users: List[str] = Field(default_factory=list)


class PostgresClusterUser(RemoteModel):
    username: str
    is_superuser: bool = Field(default=False, alias="isSuperuser")
    databases: List[str] = Field(default_factory=list)


class AppConfigDefinition(RemoteModel):
    """Server-side configuration of an app."""
    definition: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("definition", mode="before")
    @classmethod
    def null_definition(cls, v):
        return {} if v is None else v


class ValidationResult(RemoteModel):
    """
    Outcome of remote configuration validation.

    ``errors`` is only populated when ``valid`` is false.
    """
    valid: bool
    errors: List[str] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def null_errors(cls, v):
        return [] if v is None else v

    @model_validator(mode="after")
    def drop_errors_when_valid(self) -> ValidationResult:
        if self.valid and self.errors:
            self.errors = []
        return self


__all__ = [
    "App",
    "TemplateDeployment",
    "AttachPostgresClusterInput",
    "PostgresAttachment",
    "PostgresClusterDatabase",
    "PostgresClusterUser",
    "AppConfigDefinition",
    "ValidationResult",
]
