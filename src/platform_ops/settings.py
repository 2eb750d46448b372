"""
Settings and configuration for Platform Ops.

Centralizes configuration values and provides validation with fail-fast behavior.
Loads settings from environment variables at client construction time.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional

__all__ = ["Settings", "create_settings_from_env", "DEFAULT_API_BASE_URL"]

DEFAULT_API_BASE_URL = "https://api.platform.example"


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for the Platform Ops client.

    API Settings:
        api_base_url: Control plane base URL; operations are posted to <base>/graphql
        access_token: Bearer token sent with every operation (optional)
        http_timeout_s: HTTP request timeout in seconds

    Output Settings:
        render_max_depth: Deepest nesting level the value renderer will expand
    """
    api_base_url: str = DEFAULT_API_BASE_URL
    access_token: Optional[str] = None
    http_timeout_s: float = 30.0
    render_max_depth: int = 32

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.api_base_url:
            raise ValueError("api_base_url is required")

        # Must be an absolute http(s) URL
        url_pattern = r"^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"
        if not re.match(url_pattern, self.api_base_url):
            raise ValueError(f"Invalid api_base_url format: {self.api_base_url}")

        if self.http_timeout_s <= 0:
            raise ValueError(f"http_timeout_s must be positive, got {self.http_timeout_s}")

        if self.render_max_depth < 1:
            raise ValueError(f"render_max_depth must be at least 1, got {self.render_max_depth}")

    @property
    def graphql_url(self) -> str:
        """Endpoint that accepts operation documents."""
        return self.api_base_url.rstrip("/") + "/graphql"


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - PLATFORM_API_BASE_URL (default: https://api.platform.example)
        - PLATFORM_ACCESS_TOKEN (optional)
        - PLATFORM_HTTP_TIMEOUT (default: 30.0)
        - PLATFORM_RENDER_MAX_DEPTH (default: 32)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    def get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        return float(value) if value else default

    def get_int(key: str, default: int) -> int:
        value = os.getenv(key)
        return int(value) if value else default

    return Settings(
        api_base_url=os.getenv("PLATFORM_API_BASE_URL") or DEFAULT_API_BASE_URL,
        access_token=os.getenv("PLATFORM_ACCESS_TOKEN") or None,
        http_timeout_s=get_float("PLATFORM_HTTP_TIMEOUT", 30.0),
        render_max_depth=get_int("PLATFORM_RENDER_MAX_DEPTH", 32),
    )
