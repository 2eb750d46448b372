"""
Tests for CLIContext and CLI logging setup.
"""
from __future__ import annotations

import logging

from rich.logging import RichHandler

from platform_ops.api.client import PlatformClient
from platform_ops.api.transport import TransportClient
from platform_ops.cli_context import CLIContext
from platform_ops.logging_setup import configure_logging
from tests.fakes.fake_transport import FakeTransport


class TestCLIContext:
    """Test the per-command dependency container."""

    def test_from_env_reads_settings(self, monkeypatch):
        monkeypatch.setenv("PLATFORM_ACCESS_TOKEN", "tok_ctx")

        context = CLIContext.from_env()

        assert context.settings.api_base_url == "http://localhost:4000"
        assert context.settings.access_token == "tok_ctx"

    def test_client_created_lazily_and_reused(self, settings):
        context = CLIContext(settings=settings)
        assert context._client is None

        client = context.client

        assert isinstance(client, PlatformClient)
        assert isinstance(client.transport, TransportClient)
        assert context.client is client
        context.close()

    def test_close_closes_and_drops_client(self, settings):
        transport = FakeTransport()

        with CLIContext(settings=settings, _client=PlatformClient(transport)) as context:
            pass

        assert transport.closed is True
        assert context._client is None


class TestConfigureLogging:
    """Test the stderr log handler installation."""

    def test_handler_installed_once(self):
        logger = logging.getLogger("platform_ops")

        configure_logging(verbose=False)
        configure_logging(verbose=True)

        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert logger.level == logging.DEBUG

        configure_logging(verbose=False)
        assert logger.level == logging.WARNING
