"""
Shared test fixtures for miro-mcp tests.
Patches the config module so no test reads a real .env, token, or network.
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state."""
    from miro_mcp import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "BASE_URL", "https://api.miro.com/v2")
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_LOG_SAMPLE_RATE", 1.0)
    monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", 0)
    monkeypatch.setattr(config, "HTTP_MAX_RESPONSE_BYTES", 5_000_000)
    monkeypatch.delenv("MIRO_OAUTH_TOKEN", raising=False)


@pytest.fixture
def credential():
    from miro_mcp.models import Credential

    return Credential("fake-token-123456")
