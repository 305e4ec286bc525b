"""
Global pytest configuration and fixtures for swarmpy tests
"""

import pytest

from swarmpy import Agent, ScriptedProvider, Swarm


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep local .env / shell settings from leaking into agent defaults."""
    for name in ("SWARM_DEFAULT_MODEL", "SWARM_MAX_TOKENS", "SWARM_ENABLE_TRACING", "OPENAI_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def provider():
    return ScriptedProvider()


@pytest.fixture
def swarm(provider):
    return Swarm(model_provider=provider, enable_tracing=True)


@pytest.fixture
def agent():
    return Agent(name="Assistant", model="test-model", instructions="You are a test agent.")

