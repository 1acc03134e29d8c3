import pytest
from fastapi.testclient import TestClient

from gemini_relay.api.dependencies.services import get_config, get_model_gateway
from gemini_relay.api.main import create_app
from gemini_relay.config import RelayConfig
from gemini_relay.models.providers.base import ModelError, ModelGateway, TextPart


class EchoGateway(ModelGateway):
    """Deterministic stand-in for the remote model: answers with its text parts."""

    def __init__(self, healthy: bool = True):
        self.calls = []
        self.healthy = healthy

    async def generate(self, parts):
        self.calls.append(list(parts))
        return " ".join(p.text for p in parts if isinstance(p, TextPart))

    async def health_check(self):
        return self.healthy


class FailingGateway(ModelGateway):
    """Raises the given error for every call."""

    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    async def generate(self, parts):
        self.calls += 1
        raise self.error

    async def health_check(self):
        return False


@pytest.fixture
def config(tmp_path):
    return RelayConfig(
        api_key="test-key",
        model="gemini-test",
        upload_dir=tmp_path / "uploads",
        max_payload_bytes=1024,
    )


@pytest.fixture
def gateway():
    return EchoGateway()


@pytest.fixture
def make_client(config):
    """Build a test client around the given model gateway."""
    def _make(model_gateway, relay_config=None):
        relay_config = relay_config or config
        app = create_app(relay_config)
        app.dependency_overrides[get_config] = lambda: relay_config
        app.dependency_overrides[get_model_gateway] = lambda: model_gateway
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client, gateway):
    return make_client(gateway)


@pytest.fixture
def quota_gateway():
    return FailingGateway(ModelError("quota exceeded"))


@pytest.fixture
def failing_gateway():
    """Factory for gateways that raise a chosen error."""
    return FailingGateway
