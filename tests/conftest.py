"""Pytest configuration and fixtures for game server tests."""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from guesswho.ai.base import AIClientError, TextGenerator
from guesswho.auth.tokens import create_access_token
from guesswho.config.settings import ServerConfig

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


class FakeAI(TextGenerator):
    """Recording text generator for handler tests."""

    def __init__(self, reply: str = "Yes", error: Exception | None = None, delay: float = 0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []
        self.cancelled = False
        self.closed = False

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self) -> None:
        self.closed = True


def make_config(**overrides) -> ServerConfig:
    """Build a config that ignores the ambient environment for auth and AI."""
    values = {
        "host": "127.0.0.1",
        "port": 8080,
        "cors_origins": ["*"],
        "gemini_api_key": "",
        "gemini_model": "gemini-2.5-flash-lite",
        "ai_temperature": 0.0,
        "ai_timeout_seconds": 5.0,
        "jwt_secret": TEST_SECRET,
        "jwt_algorithm": "HS256",
        "jwks_url": "",
        "jwt_issuer": "",
        "jwt_audience": "",
        "jwt_leeway_seconds": 0,
        "jwt_expire_minutes": 60,
    }
    values.update(overrides)
    return ServerConfig(**values)


@pytest.fixture
def build_config():
    """Factory for configs with field overrides."""
    return make_config


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def make_ai():
    """Factory for recording fake text generators."""
    return FakeAI


@pytest.fixture
def fake_ai():
    return FakeAI()


@pytest.fixture
def auth_headers(config):
    token = create_access_token("user_123", config)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_client(config):
    """Factory for a TestClient around a freshly built app."""
    from guesswho.app import create_app

    def _make(ai_client: TextGenerator | None = None, **config_overrides) -> TestClient:
        cfg = make_config(**config_overrides) if config_overrides else config
        return TestClient(create_app(cfg, ai_client=ai_client))

    return _make


@pytest.fixture
def client(make_client, fake_ai):
    return make_client(fake_ai)


@pytest.fixture
def failing_ai():
    return FakeAI(error=AIClientError("quota exceeded"))
