"""Root pytest configuration for platform-ops tests."""
import pytest

from platform_ops.api.client import PlatformClient
from platform_ops.operations import Operations, OpsConfig
from platform_ops.settings import Settings
from .fakes.fake_transport import FakeTransport


# Set up test environment variables
@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Automatically set up test environment variables."""
    monkeypatch.setenv("PLATFORM_API_BASE_URL", "http://localhost:4000")
    for name in ("PLATFORM_ACCESS_TOKEN", "PLATFORM_HTTP_TIMEOUT",
                 "PLATFORM_RENDER_MAX_DEPTH", "PLATFORM_APP"):
        monkeypatch.delenv(name, raising=False)


# Standardized test fixtures
@pytest.fixture
def settings():
    """Standard test settings."""
    return Settings(api_base_url="http://localhost:4000")


@pytest.fixture
def transport():
    """Fake transport answering operations by name."""
    return FakeTransport()


@pytest.fixture
def client(transport):
    """Platform client backed by the fake transport."""
    return PlatformClient(transport)


@pytest.fixture
def ops(client):
    """Operations facade in human output mode."""
    return Operations(config=OpsConfig(), client=client)


@pytest.fixture
def sample_definition():
    """A configuration definition as the control plane returns it."""
    return {
        "kill_signal": "SIGINT",
        "kill_timeout": 5,
        "services": [
            {
                "internal_port": 8080,
                "protocol": "tcp",
                "ports": [
                    {"handlers": ["http"], "port": 80},
                    {"handlers": ["tls", "http"], "port": 443},
                ],
            }
        ],
    }
