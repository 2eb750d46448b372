"""
CLI Context for managing application dependencies.

Holds settings and a lazily created control plane client for the duration of
one CLI command, avoiding global state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .api.client import PlatformClient
from .settings import Settings, create_settings_from_env


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.

    The client is created on first access and closed by ``close()``.
    """
    settings: Settings
    _client: Optional[PlatformClient] = None

    @classmethod
    def from_env(cls) -> CLIContext:
        """Create CLI context from environment variables."""
        return cls(settings=create_settings_from_env())

    @property
    def client(self) -> PlatformClient:
        if self._client is None:
            self._client = PlatformClient.from_settings(self.settings)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
