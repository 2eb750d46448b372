"""
Tests for settings module.

Tests settings validation and environment variable loading.
"""
from __future__ import annotations

import pytest

from platform_ops.settings import DEFAULT_API_BASE_URL, Settings, create_settings_from_env


class TestSettings:
    """Test Settings dataclass validation."""

    def test_defaults(self):
        """Test creating settings with no arguments."""
        settings = Settings()
        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.access_token is None
        assert settings.http_timeout_s == 30.0
        assert settings.render_max_depth == 32

    def test_full_settings(self):
        settings = Settings(
            api_base_url="https://cp.internal:8443",
            access_token="tok_abc",
            http_timeout_s=5.0,
            render_max_depth=8,
        )
        assert settings.api_base_url == "https://cp.internal:8443"
        assert settings.access_token == "tok_abc"
        assert settings.http_timeout_s == 5.0
        assert settings.render_max_depth == 8

    def test_empty_base_url_raises(self):
        with pytest.raises(ValueError, match="api_base_url is required"):
            Settings(api_base_url="")

    def test_invalid_base_url_format_raises(self):
        """Base URL must carry an http(s) scheme."""
        with pytest.raises(ValueError, match="Invalid api_base_url format"):
            Settings(api_base_url="not a url")

        with pytest.raises(ValueError, match="Invalid api_base_url format"):
            Settings(api_base_url="localhost:4000")

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_non_positive_timeout_raises(self, timeout):
        with pytest.raises(ValueError, match="http_timeout_s must be positive"):
            Settings(http_timeout_s=timeout)

    def test_zero_render_depth_raises(self):
        with pytest.raises(ValueError, match="render_max_depth must be at least 1"):
            Settings(render_max_depth=0)

    def test_settings_are_frozen(self):
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.access_token = "changed"  # type: ignore[misc]

    @pytest.mark.parametrize("base,expected", [
        ("http://localhost:4000", "http://localhost:4000/graphql"),
        ("http://localhost:4000/", "http://localhost:4000/graphql"),
        ("https://api.example.com/v1", "https://api.example.com/v1/graphql"),
    ])
    def test_graphql_url(self, base, expected):
        assert Settings(api_base_url=base).graphql_url == expected


class TestCreateSettingsFromEnv:
    """Test loading settings from the environment."""

    def test_uses_environment_values(self, monkeypatch):
        monkeypatch.setenv("PLATFORM_API_BASE_URL", "https://cp.example.net")
        monkeypatch.setenv("PLATFORM_ACCESS_TOKEN", "tok_env")
        monkeypatch.setenv("PLATFORM_HTTP_TIMEOUT", "12.5")
        monkeypatch.setenv("PLATFORM_RENDER_MAX_DEPTH", "4")

        settings = create_settings_from_env()

        assert settings.api_base_url == "https://cp.example.net"
        assert settings.access_token == "tok_env"
        assert settings.http_timeout_s == 12.5
        assert settings.render_max_depth == 4

    def test_defaults_when_unset(self, monkeypatch):
        monkeypatch.delenv("PLATFORM_API_BASE_URL", raising=False)

        settings = create_settings_from_env()

        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.access_token is None
        assert settings.http_timeout_s == 30.0

    def test_empty_token_is_none(self, monkeypatch):
        monkeypatch.setenv("PLATFORM_ACCESS_TOKEN", "")
        assert create_settings_from_env().access_token is None

    def test_invalid_timeout_raises(self, monkeypatch):
        monkeypatch.setenv("PLATFORM_HTTP_TIMEOUT", "soon")
        with pytest.raises(ValueError):
            create_settings_from_env()

    def test_no_caching(self, monkeypatch):
        """Each call reflects the current environment."""
        first = create_settings_from_env()
        monkeypatch.setenv("PLATFORM_ACCESS_TOKEN", "tok_new")
        second = create_settings_from_env()

        assert first.access_token is None
        assert second.access_token == "tok_new"
