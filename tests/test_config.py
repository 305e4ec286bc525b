"""
Tests for environment-driven settings
"""

import logging

import pytest
from openai import AsyncOpenAI

from swarmpy import Swarm
from swarmpy.config import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, SwarmSettings, get_openai_client, get_settings


class TestSettings:
    def test_defaults(self):
        settings = get_settings()

        assert settings.default_model == DEFAULT_MODEL
        assert settings.max_tokens == DEFAULT_MAX_TOKENS
        assert settings.enable_tracing is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off"])
    def test_tracing_can_be_disabled(self, monkeypatch, value):
        monkeypatch.setenv("SWARM_ENABLE_TRACING", value)
        assert SwarmSettings.from_env().enable_tracing is False

    def test_malformed_int_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("SWARM_MAX_TOKENS", "lots")

        with caplog.at_level(logging.WARNING, logger="swarmpy.config"):
            settings = SwarmSettings.from_env()

        assert settings.max_tokens == DEFAULT_MAX_TOKENS
        assert "SWARM_MAX_TOKENS" in caplog.text

    def test_swarm_tracing_follows_environment(self, monkeypatch, provider):
        monkeypatch.setenv("SWARM_ENABLE_TRACING", "false")
        assert Swarm(model_provider=provider).enable_tracing is False
        assert Swarm(model_provider=provider, enable_tracing=True).enable_tracing is True


class TestOpenAIClient:
    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            get_openai_client()

    def test_client_uses_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:8000/v1")

        client = get_openai_client()

        assert isinstance(client, AsyncOpenAI)
        assert str(client.base_url).startswith("http://localhost:8000/v1")
