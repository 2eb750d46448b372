"""
Control plane API client.

One method per remote operation. Each method builds an OperationRequest,
executes it through the TransportClient and unwraps the typed result.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..settings import Settings
from .models import (
    AppConfigDefinition,
    AttachPostgresClusterInput,
    PostgresAttachment,
    PostgresClusterDatabase,
    PostgresClusterUser,
    TemplateDeployment,
    ValidationResult,
)
from .request import OperationRequest
from .transport import TransportClient
from .unwrap import unwrap_as, unwrap_list_as

logger = logging.getLogger(__name__)

__all__ = ["PlatformClient"]


CREATE_POSTGRES_CLUSTER = """
mutation($input: CreatePostgresClusterInput!) {
  createPostgresCluster(input: $input) {
    templateDeployment {
      id
      status
      apps {
        nodes {
          name
          state
          status
        }
      }
    }
  }
}
"""

GET_TEMPLATE_DEPLOYMENT = """
query($id: ID!) {
  templateDeploymentNode: node(id: $id) {
    ... on TemplateDeployment {
      id
      status
      apps {
        nodes {
          name
          state
          status
        }
      }
    }
  }
}
"""

ATTACH_POSTGRES_CLUSTER = """
mutation($input: AttachPostgresClusterInput!) {
  attachPostgresCluster(input: $input) {
    app {
      name
    }
    postgresClusterApp {
      name
    }
  }
}
"""

DETACH_POSTGRES_CLUSTER = """
mutation($input: DetachPostgresClusterInput!) {
  detachPostgresCluster(input: $input) {
    clientMutationId
  }
}
"""

LIST_POSTGRES_DATABASES = """
query($appName: String!) {
  app(name: $appName) {
    postgresAppRole: role {
      name
      ... on PostgresClusterAppRole {
        databases {
          name
          users
        }
      }
    }
  }
}
"""

LIST_POSTGRES_USERS = """
query($appName: String!) {
  app(name: $appName) {
    postgresAppRole: role {
      name
      ... on PostgresClusterAppRole {
        users {
          username
          isSuperuser
          databases
        }
      }
    }
  }
}
"""

GET_CONFIG = """
query($appName: String!) {
  app(name: $appName) {
    config {
      definition
    }
  }
}
"""

PARSE_CONFIG = """
query($appName: String!, $definition: JSON!) {
  app(name: $appName) {
    parseConfig(definition: $definition) {
      definition
      valid
      errors
    }
  }
}
"""


class PlatformClient:
    """Typed client for the control plane operations used by the CLI."""

    def __init__(self, transport: TransportClient):
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> PlatformClient:
        return cls(TransportClient(settings))

    def create_postgres_cluster(self, organization_id: str, name: str, region: str) -> TemplateDeployment:
        req = OperationRequest.mutation("createPostgresCluster", CREATE_POSTGRES_CLUSTER).with_var(
            "input", {"organizationId": organization_id, "name": name, "region": region}
        )
        envelope = self.transport.execute(req)
        return unwrap_as(envelope, "createPostgresCluster.templateDeployment", TemplateDeployment)

    def get_template_deployment(self, deployment_id: str) -> TemplateDeployment:
        """
        Fetch a template deployment by node id.

        Raises:
            MissingFieldError: If the id does not resolve to a TemplateDeployment
        """
        req = OperationRequest.query("templateDeployment", GET_TEMPLATE_DEPLOYMENT).with_var("id", deployment_id)
        envelope = self.transport.execute(req)
        return unwrap_as(envelope, "templateDeploymentNode", TemplateDeployment)

    def attach_postgres_cluster(self, input: AttachPostgresClusterInput) -> PostgresAttachment:
        req = OperationRequest.mutation("attachPostgresCluster", ATTACH_POSTGRES_CLUSTER).with_var("input", input)
        envelope = self.transport.execute(req)
        return unwrap_as(envelope, "attachPostgresCluster", PostgresAttachment)

    def detach_postgres_cluster(self, postgres_app_name: str, app_name: str) -> None:
        req = OperationRequest.mutation("detachPostgresCluster", DETACH_POSTGRES_CLUSTER).with_var(
            "input", {"postgresClusterAppId": postgres_app_name, "appId": app_name}
        )
        # acknowledgement only; the payload is not read
        self.transport.execute(req)

    def list_postgres_databases(self, app_name: str) -> List[PostgresClusterDatabase]:
        req = OperationRequest.query("postgresDatabases", LIST_POSTGRES_DATABASES).with_var("appName", app_name)
        envelope = self.transport.execute(req)
        return unwrap_list_as(envelope, "app.postgresAppRole.databases", PostgresClusterDatabase)

    def list_postgres_users(self, app_name: str) -> List[PostgresClusterUser]:
        req = OperationRequest.query("postgresUsers", LIST_POSTGRES_USERS).with_var("appName", app_name)
        envelope = self.transport.execute(req)
        return unwrap_list_as(envelope, "app.postgresAppRole.users", PostgresClusterUser)

    def get_config(self, app_name: str) -> AppConfigDefinition:
        req = OperationRequest.query("appConfig", GET_CONFIG).with_var("appName", app_name)
        envelope = self.transport.execute(req)
        return unwrap_as(envelope, "app.config", AppConfigDefinition)

    def parse_config(self, app_name: str, definition: Dict[str, Any]) -> ValidationResult:
        """Ask the control plane to validate ``definition`` for ``app_name``."""
        req = (
            OperationRequest.query("parseConfig", PARSE_CONFIG)
            .with_var("appName", app_name)
            .with_var("definition", definition)
        )
        envelope = self.transport.execute(req)
        result = unwrap_as(envelope, "app.parseConfig", ValidationResult)
        logger.debug(f"parseConfig for {app_name}: valid={result.valid}, {len(result.errors)} error(s)")
        return result

    def close(self) -> None:
        self.transport.close()
